"""
Módulo de banco de dados (histórico persistente de transições)
"""
from .config import SessionLocal, init_db
from .models import HistoricoTransicao
from .crud import BaseRepository, HistoricoTransicaoRepository, DatabaseHistoryObserver, criar_observer_historico

__all__ = [
    'SessionLocal',
    'init_db',
    'HistoricoTransicao',
    'BaseRepository',
    'HistoricoTransicaoRepository',
    'DatabaseHistoryObserver',
    'criar_observer_historico',
]
