"""
Workflows de exemplo montados sobre o motor

- pedido de loja (new -> paid -> shipped -> delivered)
- pedido da cafeteria (pendente -> ... -> entregue)
- máquina de vendas (idle / has_funds / dispensing)
- documento (draft -> moderation -> published)
"""
import math
from typing import Dict

from .registry import StateRegistry


def criar_workflow_pedido() -> StateRegistry:
    """Pedido de loja: só pode ser cancelado antes do envio"""
    registry = StateRegistry("pedido")
    registry.define("new", {"pay": "paid", "cancel": "cancelled"}, initial=True)
    registry.define("paid", {"ship": "shipped", "cancel": "cancelled"})
    registry.define("shipped", {"deliver": "delivered"})
    registry.define("delivered", terminal=True)
    registry.define("cancelled", terminal=True)
    return registry.seal()


# Estados que ainda permitem cancelamento na cafeteria
ESTADOS_CANCELAVEIS = ("pendente", "recebido")


def criar_workflow_cafeteria() -> StateRegistry:
    """Pedido da cafeteria; não pode cancelar quando já está em preparo"""
    registry = StateRegistry("cafeteria")
    sequencia = ["pendente", "recebido", "em_preparo", "pronto", "entregue"]

    for atual, proximo in zip(sequencia, sequencia[1:]):
        transicoes = {"avancar": proximo}
        if atual in ESTADOS_CANCELAVEIS:
            transicoes["cancelar"] = "cancelado"
        registry.define(atual, transicoes, initial=atual == "pendente")

    registry.define("entregue", terminal=True)
    registry.define("cancelado", terminal=True)
    return registry.seal()


# Máquina de vendas

def _valor_positivo(context, transition) -> bool:
    valor = transition.params.get("amount", 0)
    if isinstance(valor, bool) or not isinstance(valor, (int, float)):
        return False
    return math.isfinite(valor) and valor > 0


def _creditar(context, transition):
    if transition.action == "insert_funds":
        context.payload["funds"] = context.payload.get("funds", 0) + transition.params["amount"]


def _devolver_troco(context, transition):
    context.payload["change"] = context.payload.get("funds", 0)
    context.payload["funds"] = 0
    context.payload["selected"] = None


def criar_workflow_maquina_vendas(precos: Dict[str, float]) -> StateRegistry:
    """Máquina de vendas com preços fixos e estoque no payload da entidade"""
    precos = dict(precos)

    def pode_vender(context, transition) -> bool:
        item = transition.params.get("item")
        if item not in precos:
            return False
        estoque = context.payload.get("stock", {})
        if estoque.get(item, 0) <= 0:
            return False
        return context.payload.get("funds", 0) >= precos[item]

    def reservar_item(context, transition):
        item = transition.params["item"]
        context.payload["funds"] -= precos[item]
        context.payload["stock"][item] -= 1
        context.payload["selected"] = item

    registry = StateRegistry("maquina_vendas")
    registry.define(
        "idle",
        {"insert_funds": "has_funds"},
        on_enter=_devolver_troco,
        guards={"insert_funds": _valor_positivo},
        initial=True,
    )
    registry.define(
        "has_funds",
        {"insert_funds": "has_funds", "select_item": "dispensing", "refund": "idle"},
        on_enter=_creditar,
        guards={"insert_funds": _valor_positivo, "select_item": pode_vender},
    )
    registry.define("dispensing", {"dispense": "idle"}, on_enter=reservar_item)
    return registry.seal()


# Documento

def _tem_conteudo(context, transition) -> bool:
    return bool(context.payload.get("content", "").strip())


def _publicar(context, transition):
    context.payload["version"] = context.payload.get("version", 0) + 1


def criar_workflow_documento() -> StateRegistry:
    registry = StateRegistry("documento")
    registry.define("draft", {"submit": "moderation"}, guards={"submit": _tem_conteudo}, initial=True)
    registry.define("moderation", {"approve": "published", "reject": "draft"})
    registry.define("published", {"expire": "draft"}, on_enter=_publicar)
    return registry.seal()
