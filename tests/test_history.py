import logging

import pytest
from pydantic import ValidationError

from workflow import LoggingObserver, TransitionRecord, WorkflowContext


def test_historico_por_entidade(pedido_registry, historico):
    a = WorkflowContext.create(pedido_registry, entity_id="A")
    b = WorkflowContext.create(pedido_registry, entity_id="B")
    for context in (a, b):
        context.add_observer(historico)

    a.apply("pay")
    b.apply("cancel")
    a.apply("ship")

    assert [r.action for r in historico] == ["pay", "cancel", "ship"]
    assert historico.path("A") == ["new", "paid", "shipped"]
    assert historico.path("B") == ["new", "cancelled"]
    assert historico.path("C") == []
    assert len(historico.for_entity("A")) == 2


def test_records_devolve_copia(pedido, historico):
    pedido.add_observer(historico)
    pedido.apply("pay")
    historico.records.clear()
    assert len(historico) == 1


def test_historico_vazio(historico):
    assert historico.last() is None
    assert list(historico) == []


def test_record_e_imutavel():
    record = TransitionRecord(action="pay", source="new", target="paid")
    with pytest.raises(ValidationError):
        record.target = "shipped"


def test_logging_observer(pedido, caplog):
    pedido.add_observer(LoggingObserver("Cozinha"))
    with caplog.at_level(logging.INFO, logger="workflow"):
        pedido.apply("pay")
    assert "[Cozinha] Entidade 1 está agora 'paid'" in caplog.text
