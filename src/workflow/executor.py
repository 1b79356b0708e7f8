"""
Executor de transições

Valida a ação pedida, roda os efeitos de saída e entrada e confirma o novo
estado. Se um efeito falhar, o contexto volta ao instantâneo anterior
(estado e dados) e o erro chega ao chamador como EffectError.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .errors import FASES, ConfigurationError, EffectError, InvalidAction, UnknownTransition
from .history import TransitionRecord
from .registry import StateRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transition:
    """Transição em andamento, entregue a guardas e efeitos"""
    action: str
    source: str
    target: str
    params: Dict[str, Any] = field(default_factory=dict)


class TransitionExecutor:
    """Executa ações sobre contextos de um mesmo registro"""

    def __init__(self, registry: StateRegistry):
        self.registry = registry.seal()

    def execute(self, context, action: str, params: Optional[Dict[str, Any]] = None) -> TransitionRecord:
        """Aplica a ação ao contexto e devolve o registro da transição"""
        if context.registry is not self.registry:
            raise ConfigurationError(
                f"Contexto do workflow '{context.registry.name}' executado "
                f"com o registro '{self.registry.name}'"
            )

        source = context.current_state()

        try:
            target = self.registry.next_state(source, action)
        except UnknownTransition:
            logger.info("[Workflow] Ação '%s' recusada no estado '%s'", action, source)
            raise InvalidAction(source, action) from None

        transition = Transition(action=action, source=source, target=target, params=dict(params or {}))

        guard = self.registry.guard(source, action)
        if guard is not None:
            self._check_guard(context, transition, guard)

        on_exit = self.registry.definition(source).on_exit
        on_enter = self.registry.definition(target).on_enter
        # sem efeitos não há nada para desfazer
        memento = context.snapshot() if on_exit or on_enter else None
        self._run_effect(context, transition, on_exit, "exit", memento)
        context._set_state(target)
        self._run_effect(context, transition, on_enter, "entry", memento)

        record = TransitionRecord(
            entity_id=context.entity_id,
            action=action,
            source=source,
            target=target,
        )
        logger.debug(
            "[Workflow] %s: '%s' --%s--> '%s'", context.entity_id, source, action, target
        )
        context.notify_observers(record)
        return record

    def _check_guard(self, context, transition, guard):
        try:
            permitido = guard(context, transition)
        except Exception as e:
            logger.warning(
                "[Workflow] Guarda de '%s' falhou no estado '%s': %s",
                transition.action, transition.source, e
            )
            raise InvalidAction(transition.source, transition.action, f"guarda falhou: {e}") from e
        if not permitido:
            logger.info(
                "[Workflow] Guarda recusou '%s' no estado '%s'", transition.action, transition.source
            )
            raise InvalidAction(transition.source, transition.action, "condição da transição não atendida")

    def _run_effect(self, context, transition, effect, phase, memento):
        if effect is None:
            return
        try:
            effect(context, transition)
        except Exception as e:
            context._restore(memento)
            logger.error(
                "[Workflow] Efeito de %s falhou em '%s' (%s -> %s): %s",
                FASES.get(phase, phase), transition.action, transition.source, transition.target, e
            )
            raise EffectError(transition, phase, e) from e
