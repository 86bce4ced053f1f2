from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from models.base import Base

# Registered on Base.metadata by import.
from models import health_metric, supplement, symptom, user  # noqa: F401


def create_db_engine(database_url: str) -> Engine:
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    return create_engine(database_url, connect_args=connect_args, future=True)


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)


def init_db(engine: Engine) -> None:
    # Create tables. Schema changes beyond additive ones belong in Alembic migrations.
    Base.metadata.create_all(bind=engine)
