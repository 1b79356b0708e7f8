"""
Exceções do motor de workflow
"""


class WorkflowError(Exception):
    """Erro base do motor de workflow"""


class ConfigurationError(WorkflowError):
    """Tabela de transições ou entidade inconsistente com o registro"""


class UnknownTransition(WorkflowError):
    """O par (estado, ação) não existe na tabela de transições"""

    def __init__(self, state: str, action: str, reason: str = None):
        self.state = state
        self.action = action
        self.reason = reason
        message = f"Não é possível executar '{action}' no estado '{state}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class InvalidAction(UnknownTransition):
    """Ação recusada pelo executor; o estado da entidade não muda"""


FASES = {"exit": "saída", "entry": "entrada"}


class EffectError(WorkflowError):
    """Falha em um efeito de entrada ou saída; a transição foi desfeita"""

    def __init__(self, transition, phase: str, original: Exception):
        self.transition = transition
        self.phase = phase
        self.original = original
        super().__init__(
            f"Efeito de {FASES.get(phase, phase)} falhou em '{transition.action}' "
            f"({transition.source} -> {transition.target}): {original}"
        )
