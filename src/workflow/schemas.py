"""
Schemas pydantic para configurar um registro a partir de dados

A aplicação fornece a tabela de transições como um dicionário simples; efeitos
e guardas são referenciados por nome e resolvidos em mapeamentos de funções.
"""
from typing import Any, Callable, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigurationError
from .registry import StateRegistry


class StateSchema(BaseModel):
    """Schema de um estado e de suas transições"""
    name: str = Field(..., min_length=1, description="Nome do estado")
    transitions: Dict[str, str] = Field(
        default_factory=dict,
        description="Ação -> próximo estado",
        examples=[{"pay": "paid", "cancel": "cancelled"}]
    )
    on_enter: Optional[str] = Field(None, description="Nome do efeito de entrada")
    on_exit: Optional[str] = Field(None, description="Nome do efeito de saída")
    guards: Dict[str, str] = Field(default_factory=dict, description="Ação -> nome da guarda")
    terminal: bool = False


class WorkflowSchema(BaseModel):
    """Schema completo de um workflow"""
    name: str = Field("workflow", min_length=1)
    initial_state: str = Field(..., min_length=1, description="Estado inicial das entidades")
    states: List[StateSchema] = Field(..., min_length=1)

    @field_validator("states")
    @classmethod
    def nomes_unicos(cls, states: List[StateSchema]) -> List[StateSchema]:
        nomes = [state.name for state in states]
        repetidos = sorted({nome for nome in nomes if nomes.count(nome) > 1})
        if repetidos:
            raise ValueError(f"Estados repetidos: {', '.join(repetidos)}")
        return states


def _resolver(nome: Optional[str], funcoes: Mapping[str, Callable], tipo: str):
    if nome is None:
        return None
    try:
        return funcoes[nome]
    except KeyError:
        raise ConfigurationError(f"{tipo} '{nome}' não registrado") from None


def build_registry(
    data: Mapping[str, Any],
    effects: Optional[Mapping[str, Callable]] = None,
    guards: Optional[Mapping[str, Callable]] = None,
) -> StateRegistry:
    """Valida os dados e devolve um registro já selado"""
    try:
        schema = WorkflowSchema.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Configuração de workflow inválida: {e}") from e

    effects = effects or {}
    guards = guards or {}

    registry = StateRegistry(schema.name)
    for state in schema.states:
        registry.define(
            state.name,
            state.transitions,
            on_enter=_resolver(state.on_enter, effects, "Efeito"),
            on_exit=_resolver(state.on_exit, effects, "Efeito"),
            guards={
                action: _resolver(nome, guards, "Guarda")
                for action, nome in state.guards.items()
            },
            initial=state.name == schema.initial_state,
            terminal=state.terminal,
        )

    if registry.initial_state is None:
        raise ConfigurationError(f"Estado inicial '{schema.initial_state}' desconhecido")

    return registry.seal()
