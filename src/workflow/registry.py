"""
Registro de estados e tabela de transições

Substitui a subclasse-por-estado do State Pattern por uma tabela
(estado, ação) -> próximo estado, com efeitos de entrada/saída e guardas
como funções livres.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional

from .errors import ConfigurationError, UnknownTransition

logger = logging.getLogger(__name__)

Effect = Callable[[Any, Any], None]
Guard = Callable[[Any, Any], bool]


@dataclass
class StateDefinition:
    """Um estado nomeado e as ações que ele aceita"""
    name: str
    transitions: Dict[str, str] = field(default_factory=dict)
    on_enter: Optional[Effect] = None
    on_exit: Optional[Effect] = None
    guards: Dict[str, Guard] = field(default_factory=dict)
    terminal: bool = False


class StateRegistry:
    """Conjunto de estados conhecidos e tabela de transições"""

    def __init__(self, name: str = "workflow"):
        self.name = name
        self._states: Dict[str, StateDefinition] = {}
        self._initial_state: Optional[str] = None
        self._sealed = False

    @property
    def initial_state(self) -> Optional[str]:
        return self._initial_state

    @property
    def states(self) -> List[str]:
        return list(self._states)

    @property
    def sealed(self) -> bool:
        return self._sealed

    def define(
        self,
        name: str,
        transitions: Optional[Mapping[str, str]] = None,
        on_enter: Optional[Effect] = None,
        on_exit: Optional[Effect] = None,
        guards: Optional[Mapping[str, Guard]] = None,
        initial: bool = False,
        terminal: bool = False,
    ) -> "StateRegistry":
        """Define (ou completa) um estado e suas transições"""
        if self._sealed:
            raise ConfigurationError(
                f"Registro '{self.name}' já foi selado; não é possível definir '{name}'"
            )
        if not name:
            raise ConfigurationError("Nome de estado vazio")

        definition = self._states.get(name)
        if definition is None:
            definition = StateDefinition(name=name)
            self._states[name] = definition

        definition.transitions.update(transitions or {})
        definition.guards.update(guards or {})
        if on_enter is not None:
            definition.on_enter = on_enter
        if on_exit is not None:
            definition.on_exit = on_exit
        if terminal:
            definition.terminal = True

        if initial:
            if self._initial_state not in (None, name):
                raise ConfigurationError(
                    f"Estado inicial já definido como '{self._initial_state}'"
                )
            self._initial_state = name

        return self

    def seal(self) -> "StateRegistry":
        """Valida a tabela e torna o registro somente leitura"""
        if self._sealed:
            return self

        for definition in self._states.values():
            for action, target in definition.transitions.items():
                if target not in self._states:
                    raise ConfigurationError(
                        f"Transição '{definition.name}' --{action}--> '{target}' "
                        f"aponta para estado desconhecido"
                    )
            for action in definition.guards:
                if action not in definition.transitions:
                    raise ConfigurationError(
                        f"Guarda para '{action}' em '{definition.name}' sem transição correspondente"
                    )
            if definition.terminal and definition.transitions:
                raise ConfigurationError(
                    f"Estado terminal '{definition.name}' não pode ter transições"
                )

        if self._initial_state is not None and self._initial_state not in self._states:
            raise ConfigurationError(f"Estado inicial '{self._initial_state}' desconhecido")

        self._sealed = True
        logger.debug(
            "[Registro] '%s' selado com %d estados", self.name, len(self._states)
        )
        return self

    def is_known(self, state: str) -> bool:
        return state in self._states

    def definition(self, state: str) -> StateDefinition:
        try:
            return self._states[state]
        except KeyError:
            raise ConfigurationError(f"Estado '{state}' desconhecido") from None

    def is_valid_transition(self, state: str, action: str) -> bool:
        definition = self._states.get(state)
        return definition is not None and action in definition.transitions

    def next_state(self, state: str, action: str) -> str:
        """Retorna o estado destino ou falha com UnknownTransition"""
        if not self.is_valid_transition(state, action):
            raise UnknownTransition(state, action)
        return self._states[state].transitions[action]

    def guard(self, state: str, action: str) -> Optional[Guard]:
        definition = self._states.get(state)
        if definition is None:
            return None
        return definition.guards.get(action)

    def accepted_actions(self, state: str) -> List[str]:
        return list(self.definition(state).transitions)

    def is_terminal(self, state: str) -> bool:
        """Estado final: marcado como terminal ou sem nenhuma saída"""
        definition = self.definition(state)
        return definition.terminal or not definition.transitions

    @classmethod
    def from_config(cls, data: Mapping[str, Any], effects: Optional[Mapping[str, Effect]] = None,
                    guards: Optional[Mapping[str, Guard]] = None) -> "StateRegistry":
        """Monta e sela um registro a partir de dados validados pelos schemas"""
        from .schemas import build_registry
        return build_registry(data, effects=effects, guards=guards)

    def __contains__(self, state: str) -> bool:
        return state in self._states

    def __repr__(self):
        return f"StateRegistry(name={self.name!r}, states={self.states!r})"
