"""
Histórico de transições (Observer + caretaker)
"""
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


def _agora() -> datetime:
    return datetime.now(timezone.utc)


class TransitionRecord(BaseModel):
    """Registro imutável de uma transição confirmada"""
    model_config = ConfigDict(frozen=True)

    entity_id: Optional[Any] = Field(None, description="Identificador da entidade")
    action: str = Field(..., description="Ação executada")
    source: str = Field(..., description="Estado de origem")
    target: str = Field(..., description="Estado de destino")
    timestamp: datetime = Field(default_factory=_agora, description="Momento da transição (UTC)")


class Observer(ABC):
    @abstractmethod
    def update(self, record: TransitionRecord):
        pass


class TransitionHistory(Observer):
    """Caretaker em memória; só aceita novos registros no final"""

    def __init__(self):
        self._records: List[TransitionRecord] = []

    def update(self, record: TransitionRecord):
        self._records.append(record)

    @property
    def records(self) -> List[TransitionRecord]:
        return list(self._records)

    def for_entity(self, entity_id) -> List[TransitionRecord]:
        return [r for r in self._records if r.entity_id == entity_id]

    def last(self) -> Optional[TransitionRecord]:
        return self._records[-1] if self._records else None

    def path(self, entity_id) -> List[str]:
        """Sequência de estados visitados pela entidade"""
        records = self.for_entity(entity_id)
        if not records:
            return []
        return [records[0].source] + [r.target for r in records]

    def __len__(self):
        return len(self._records)

    def __iter__(self):
        return iter(list(self._records))


class LoggingObserver(Observer):
    def __init__(self, prefixo: str = "Workflow", level: int = logging.INFO):
        self.prefixo = prefixo
        self.level = level

    def update(self, record: TransitionRecord):
        logger.log(
            self.level,
            "[%s] Entidade %s está agora '%s' (%s, antes '%s')",
            self.prefixo, record.entity_id, record.target, record.action, record.source
        )
