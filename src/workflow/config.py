"""
Configuração do motor via variáveis de ambiente (.env)
"""
import logging
import os

from dotenv import load_dotenv

load_dotenv()

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_log_level() -> int:
    """Nível de log definido em WORKFLOW_LOG_LEVEL (padrão INFO)"""
    nome = os.getenv("WORKFLOW_LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(nome)
    if not isinstance(level, int):
        raise ValueError(f"WORKFLOW_LOG_LEVEL inválido: {nome}")
    return level


def configure_logging(level=None):
    """Configura o logger do pacote 'workflow'"""
    if level is None:
        level = get_log_level()
    logger = logging.getLogger("workflow")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
