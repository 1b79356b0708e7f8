"""
Motor de workflow de estados finitos (State Pattern orientado a tabela)
"""
from .errors import (
    WorkflowError,
    ConfigurationError,
    UnknownTransition,
    InvalidAction,
    EffectError,
)
from .registry import StateRegistry, StateDefinition
from .history import TransitionRecord, Observer, TransitionHistory, LoggingObserver
from .executor import Transition, TransitionExecutor
from .context import Entity, ContextMemento, WorkflowContext
from .schemas import StateSchema, WorkflowSchema, build_registry
from .config import configure_logging

__all__ = [
    # Erros
    'WorkflowError',
    'ConfigurationError',
    'UnknownTransition',
    'InvalidAction',
    'EffectError',

    # Registro
    'StateRegistry',
    'StateDefinition',

    # Execução
    'Transition',
    'TransitionExecutor',
    'Entity',
    'ContextMemento',
    'WorkflowContext',

    # Histórico
    'TransitionRecord',
    'Observer',
    'TransitionHistory',
    'LoggingObserver',

    # Configuração
    'StateSchema',
    'WorkflowSchema',
    'build_registry',
    'configure_logging',
]
