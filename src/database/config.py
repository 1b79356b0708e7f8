"""
Configuração do banco de dados do histórico de transições
"""
import os
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from dotenv import load_dotenv

load_dotenv()

# Configuração do banco
DATABASE_URL = os.getenv(
    "DATABASE_URL",
    "sqlite:///./workflow.db"
)

# Para SQLite, adicionar configurações específicas
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, connect_args=connect_args)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def init_db(bind=None):
    """Inicializa o banco criando todas as tabelas"""
    from . import models  # noqa: F401  registra as tabelas no metadata
    Base.metadata.create_all(bind=bind or engine)
