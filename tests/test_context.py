import pytest

from workflow import ConfigurationError, Entity, InvalidAction, StateRegistry, TransitionExecutor, WorkflowContext
from workflow.catalog import criar_workflow_documento


def test_create_usa_estado_inicial(pedido_registry):
    context = WorkflowContext.create(pedido_registry, payload={"amount": 10})
    assert context.current_state() == "new"
    assert context.payload == {"amount": 10}
    assert context.entity_id is None


def test_create_sem_estado_inicial():
    registry = StateRegistry()
    registry.define("a")
    with pytest.raises(ConfigurationError):
        WorkflowContext.create(registry)


def test_entidade_em_estado_desconhecido_e_recusada(pedido_registry):
    with pytest.raises(ConfigurationError):
        WorkflowContext(pedido_registry, Entity(state="extraviado"))


def test_entidade_carregada_continua_do_estado_salvo(pedido_registry):
    entity = Entity(state="shipped", payload={"amount": 5}, id=7)
    context = WorkflowContext(pedido_registry, entity)
    context.apply("deliver")
    assert entity.state == "delivered"
    assert context.is_finished()


def test_contexto_sela_o_registro(registro_simples):
    assert not registro_simples.sealed
    WorkflowContext.create(registro_simples)
    assert registro_simples.sealed


def test_executor_de_outro_registro(pedido_registry, registro_simples):
    executor = TransitionExecutor(registro_simples)
    with pytest.raises(ConfigurationError):
        WorkflowContext.create(pedido_registry, executor=executor)


def test_acoes_aceitas(pedido):
    assert set(pedido.accepted_actions()) == {"pay", "cancel"}
    assert pedido.can_apply("pay")
    assert not pedido.can_apply("deliver")
    assert not pedido.is_finished()


def test_snapshot_e_copia_profunda(pedido):
    pedido.payload["itens"] = ["cafe"]
    memento = pedido.snapshot()
    pedido.payload["itens"].append("cha")
    assert memento.payload["itens"] == ["cafe"]
    assert memento.state == "new"


def test_remover_observador(pedido, historico):
    pedido.add_observer(historico)
    pedido.remove_observer(historico)
    pedido.apply("pay")
    assert len(historico) == 0


def test_fluxo_do_documento():
    context = WorkflowContext.create(criar_workflow_documento(), payload={"content": "   "})
    assert not context.can_apply("approve")

    with pytest.raises(InvalidAction):
        context.apply("submit")
    assert context.current_state() == "draft"

    context.payload["content"] = "Padrão State"
    context.apply("submit")
    context.apply("reject")
    context.apply("submit")
    context.apply("approve")
    assert context.current_state() == "published"
    assert context.payload["version"] == 1

    context.apply("expire")
    context.apply("submit")
    context.apply("approve")
    assert context.payload["version"] == 2
