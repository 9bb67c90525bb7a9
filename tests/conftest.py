import importlib
from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from app.taaza.core.config import settings
from app.taaza.core.metrics import metrics


def _setup_app(database_url: str):
    settings.DATABASE_URL = database_url

    import app.taaza.db.session as session
    import app.main as main

    importlib.reload(session)

    return main.create_app(), session


def _run_migrations(database_url: str, monkeypatch):
    monkeypatch.setenv("DATABASE_URL", database_url)
    config = Config("alembic.ini")
    config.set_main_option("sqlalchemy.url", database_url)
    command.upgrade(config, "head")


@pytest.fixture()
def database_url(tmp_path: Path, monkeypatch):
    url = f"sqlite+pysqlite:///{tmp_path / 'test.db'}"
    _run_migrations(url, monkeypatch)
    return url


@pytest.fixture()
def client(database_url):
    metrics.reset()
    app, session = _setup_app(database_url)

    with TestClient(app) as client:
        yield client

    session.engine.dispose()


@pytest.fixture()
def db_session(client):
    from app.taaza.db.session import SessionLocal

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def session_factory(database_url):
    from app.taaza.db.session import build_engine

    engine = build_engine(database_url)
    yield sessionmaker(bind=engine, autoflush=False, future=True)
    engine.dispose()
