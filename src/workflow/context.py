"""
Contexto do workflow: entidade, dados de negócio e estado atual
"""
import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .errors import ConfigurationError
from .registry import StateRegistry

logger = logging.getLogger(__name__)


@dataclass
class Entity:
    """Objeto que percorre o workflow (pedido, documento, máquina)"""
    state: str
    payload: Dict[str, Any] = field(default_factory=dict)
    id: Optional[Any] = None


@dataclass(frozen=True)
class ContextMemento:
    """Instantâneo do estado e dos dados de uma entidade"""
    state: str
    payload: Dict[str, Any]


class WorkflowContext:
    """Envolve uma entidade e garante que seu estado pertence ao registro"""

    def __init__(self, registry: StateRegistry, entity: Entity, executor=None):
        registry.seal()
        if not registry.is_known(entity.state):
            raise ConfigurationError(
                f"Estado '{entity.state}' não pertence ao workflow '{registry.name}'"
            )
        if executor is None:
            from .executor import TransitionExecutor
            executor = TransitionExecutor(registry)
        elif executor.registry is not registry:
            raise ConfigurationError("Executor configurado com outro registro")

        self.registry = registry
        self.executor = executor
        self._entity = entity
        self._observers = []

    @classmethod
    def create(cls, registry: StateRegistry, payload: Optional[Dict[str, Any]] = None,
               entity_id: Any = None, initial_state: Optional[str] = None,
               executor=None) -> "WorkflowContext":
        """Cria uma entidade nova no estado inicial"""
        estado = initial_state or registry.initial_state
        if estado is None:
            raise ConfigurationError(f"Workflow '{registry.name}' não tem estado inicial")
        entity = Entity(state=estado, payload=dict(payload or {}), id=entity_id)
        return cls(registry, entity, executor=executor)

    @property
    def entity_id(self):
        return self._entity.id

    @property
    def payload(self) -> Dict[str, Any]:
        return self._entity.payload

    def current_state(self) -> str:
        return self._entity.state

    def apply(self, action: str, params: Optional[Dict[str, Any]] = None):
        """Executa uma ação delegando ao executor"""
        return self.executor.execute(self, action, params)

    def can_apply(self, action: str) -> bool:
        return self.registry.is_valid_transition(self._entity.state, action)

    def accepted_actions(self) -> List[str]:
        return self.registry.accepted_actions(self._entity.state)

    def is_finished(self) -> bool:
        return self.registry.is_terminal(self._entity.state)

    # Memento

    def snapshot(self) -> ContextMemento:
        """Cópia profunda do payload; cópia rasa se algum valor não for copiável"""
        try:
            payload = copy.deepcopy(self._entity.payload)
        except (TypeError, copy.Error) as e:
            logger.debug("[Workflow] Payload sem cópia profunda (%s); usando cópia rasa", e)
            payload = dict(self._entity.payload)
        return ContextMemento(state=self._entity.state, payload=payload)

    def _restore(self, memento: ContextMemento):
        self._entity.state = memento.state
        self._entity.payload.clear()
        self._entity.payload.update(memento.payload)

    def _set_state(self, state: str):
        # somente o executor altera o estado, sempre para um estado conhecido
        if not self.registry.is_known(state):
            raise ConfigurationError(f"Estado '{state}' desconhecido")
        self._entity.state = state

    # Observer

    def add_observer(self, observer):
        self._observers.append(observer)

    def remove_observer(self, observer):
        self._observers.remove(observer)

    def notify_observers(self, record):
        for observer in list(self._observers):
            observer.update(record)

    def __repr__(self):
        return (
            f"WorkflowContext(workflow={self.registry.name!r}, "
            f"entity_id={self._entity.id!r}, state={self._entity.state!r})"
        )
