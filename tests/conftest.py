import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database.config import Base, init_db
from workflow import StateRegistry, TransitionHistory, WorkflowContext
from workflow.catalog import criar_workflow_maquina_vendas, criar_workflow_pedido


@pytest.fixture
def pedido_registry():
    return criar_workflow_pedido()


@pytest.fixture
def pedido(pedido_registry):
    return WorkflowContext.create(pedido_registry, payload={"amount": 42.0}, entity_id=1)


@pytest.fixture
def precos():
    return {"cafe": 5.0, "cha": 3.5}


@pytest.fixture
def maquina(precos):
    registry = criar_workflow_maquina_vendas(precos)
    return WorkflowContext.create(
        registry,
        payload={"funds": 0, "stock": {"cafe": 2, "cha": 0}},
        entity_id="maquina-1",
    )


@pytest.fixture
def historico():
    return TransitionHistory()


@pytest.fixture
def registro_simples():
    registry = StateRegistry("simples")
    registry.define("a", {"ir": "b", "ficar": "a"}, initial=True)
    registry.define("b", {"voltar": "a"})
    return registry


@pytest.fixture
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def db_session(db_engine):
    Session = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = Session()
    try:
        yield session
    finally:
        session.close()
