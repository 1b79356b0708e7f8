"""
Modelos SQLAlchemy do histórico de transições
"""
from sqlalchemy import Column, Integer, String, DateTime, Index
from datetime import datetime, timezone

from .config import Base


def _agora():
    return datetime.now(timezone.utc)


class HistoricoTransicao(Base):
    __tablename__ = "historico_transicoes"

    id = Column(Integer, primary_key=True, index=True)
    workflow = Column(String(100), nullable=False)
    entidade_id = Column(String(100), nullable=True)
    acao = Column(String(100), nullable=False)
    estado_origem = Column(String(100), nullable=False)
    estado_destino = Column(String(100), nullable=False)
    timestamp = Column(DateTime(timezone=True), default=_agora, nullable=False)

    __table_args__ = (
        Index("ix_historico_workflow_entidade", "workflow", "entidade_id"),
    )

    def __repr__(self):
        return (
            f"<HistoricoTransicao {self.workflow}:{self.entidade_id} "
            f"{self.estado_origem} -{self.acao}-> {self.estado_destino}>"
        )
