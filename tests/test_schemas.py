import pytest

from workflow import ConfigurationError, InvalidAction, StateRegistry, WorkflowContext, build_registry


def _config_pedido():
    return {
        "name": "pedido",
        "initial_state": "new",
        "states": [
            {"name": "new", "transitions": {"pay": "paid", "cancel": "cancelled"}},
            {"name": "paid", "transitions": {"ship": "shipped"}, "on_enter": "marcar_pago"},
            {"name": "shipped", "transitions": {"deliver": "delivered"},
             "guards": {"deliver": "tem_endereco"}},
            {"name": "delivered", "terminal": True},
            {"name": "cancelled", "terminal": True},
        ],
    }


def _marcar_pago(context, transition):
    context.payload["pago"] = True


def _tem_endereco(context, transition):
    return bool(context.payload.get("endereco"))


def test_registro_a_partir_de_configuracao():
    registry = StateRegistry.from_config(
        _config_pedido(),
        effects={"marcar_pago": _marcar_pago},
        guards={"tem_endereco": _tem_endereco},
    )
    assert registry.sealed
    assert registry.name == "pedido"

    context = WorkflowContext.create(registry)
    context.apply("pay")
    context.apply("ship")
    assert context.payload["pago"] is True

    with pytest.raises(InvalidAction):
        context.apply("deliver")
    context.payload["endereco"] = "Rua A, 1"
    context.apply("deliver")
    assert context.current_state() == "delivered"


def test_efeito_nao_registrado():
    with pytest.raises(ConfigurationError):
        build_registry(_config_pedido(), guards={"tem_endereco": _tem_endereco})


@pytest.mark.parametrize("alteracao", [
    {"initial_state": "fantasma"},
    {"states": []},
    {"initial_state": ""},
])
def test_configuracao_invalida(alteracao):
    data = _config_pedido()
    data.update(alteracao)
    with pytest.raises(ConfigurationError):
        build_registry(data, effects={"marcar_pago": _marcar_pago},
                       guards={"tem_endereco": _tem_endereco})


def test_estados_repetidos():
    data = {"initial_state": "a", "states": [{"name": "a"}, {"name": "a"}]}
    with pytest.raises(ConfigurationError) as exc:
        build_registry(data)
    assert "repetidos" in str(exc.value)


def test_destino_desconhecido_na_configuracao():
    data = {"initial_state": "a", "states": [{"name": "a", "transitions": {"ir": "b"}}]}
    with pytest.raises(ConfigurationError):
        build_registry(data)
