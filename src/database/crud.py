from sqlalchemy.orm import Session
from sqlalchemy import desc
from typing import List, Optional
from datetime import datetime, timezone
import logging

from workflow.history import Observer, TransitionRecord
from .config import SessionLocal
from .models import HistoricoTransicao

logger = logging.getLogger(__name__)


class BaseRepository:
    """Repositório base com operações de leitura e inclusão"""
    
    def __init__(self, db: Session, model):
        self.db = db
        self.model = model
    
    def create(self, obj):
        """Cria um novo registro"""
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj
    
    def get_by_id(self, id: int):
        """Busca por ID"""
        return self.db.query(self.model).filter(self.model.id == id).first()
    
    def get_all(self, skip: int = 0, limit: int = 100):
        """Lista todos os registros"""
        return self.db.query(self.model).offset(skip).limit(limit).all()


class HistoricoTransicaoRepository(BaseRepository):
    """Histórico append-only: não há update nem delete"""
    
    def __init__(self, db: Session):
        super().__init__(db, HistoricoTransicao)
    
    def registrar(self, workflow: str, record: TransitionRecord) -> HistoricoTransicao:
        """Grava um TransitionRecord"""
        historico = HistoricoTransicao(
            workflow=workflow,
            entidade_id=None if record.entity_id is None else str(record.entity_id),
            acao=record.action,
            estado_origem=record.source,
            estado_destino=record.target,
            timestamp=record.timestamp,
        )
        return self.create(historico)
    
    def obter_por_entidade(self, workflow: str, entidade_id) -> List[HistoricoTransicao]:
        """Transições de uma entidade em ordem cronológica"""
        return self.db.query(HistoricoTransicao).filter(
            HistoricoTransicao.workflow == workflow,
            HistoricoTransicao.entidade_id == str(entidade_id)
        ).order_by(HistoricoTransicao.id).all()
    
    def obter_ultimas_mudancas(self, limit: int = 50) -> List[HistoricoTransicao]:
        """Obtém as últimas mudanças de estado"""
        return self.db.query(HistoricoTransicao).order_by(
            desc(HistoricoTransicao.id)
        ).limit(limit).all()
    
    def obter_historico_periodo(self, data_inicio: datetime, data_fim: datetime) -> List[HistoricoTransicao]:
        """Obtém histórico de um período"""
        return self.db.query(HistoricoTransicao).filter(
            HistoricoTransicao.timestamp >= data_inicio,
            HistoricoTransicao.timestamp <= data_fim
        ).order_by(HistoricoTransicao.timestamp).all()
    
    def obter_estado_atual(self, workflow: str, entidade_id) -> Optional[str]:
        """Último estado destino gravado para a entidade"""
        ultimo = self.db.query(HistoricoTransicao).filter(
            HistoricoTransicao.workflow == workflow,
            HistoricoTransicao.entidade_id == str(entidade_id)
        ).order_by(desc(HistoricoTransicao.id)).first()
        return ultimo.estado_destino if ultimo else None
    
    @staticmethod
    def para_record(historico: HistoricoTransicao) -> TransitionRecord:
        timestamp = historico.timestamp
        # SQLite devolve datetime sem fuso; o histórico é sempre gravado em UTC
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        return TransitionRecord(
            entity_id=historico.entidade_id,
            action=historico.acao,
            source=historico.estado_origem,
            target=historico.estado_destino,
            timestamp=timestamp,
        )


class DatabaseHistoryObserver(Observer):
    """Caretaker persistente: grava cada transição confirmada"""
    
    def __init__(self, db: Session, workflow: str):
        self.workflow = workflow
        self._repo = HistoricoTransicaoRepository(db)
    
    def update(self, record: TransitionRecord):
        historico = self._repo.registrar(self.workflow, record)
        logger.debug("[Histórico] Transição gravada com id %s", historico.id)
    
    def close(self):
        """Fecha a sessão do repositório"""
        self._repo.db.close()


def criar_observer_historico(workflow: str, session_factory=None) -> DatabaseHistoryObserver:
    """Cria um DatabaseHistoryObserver com sessão própria (SessionLocal por padrão)"""
    factory = session_factory or SessionLocal
    return DatabaseHistoryObserver(factory(), workflow)
