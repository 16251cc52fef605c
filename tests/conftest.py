# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest

from api import create_app
from config import AppConfig
from db_models import db

from .fakes import FakeCompletionClient


@pytest.fixture()
def config(tmp_path: Path) -> AppConfig:
    # a file database: fan-out inserts use their own connections from worker threads
    return AppConfig(database_url=f"sqlite:///{tmp_path / 'todos.sqlite3'}")


@pytest.fixture()
def completion() -> FakeCompletionClient:
    return FakeCompletionClient()


@pytest.fixture()
def app(config: AppConfig, completion: FakeCompletionClient):
    app = create_app(config, completion=completion)
    app.config["TESTING"] = True
    yield app
    with app.app_context():
        db.session.remove()
        db.engine.dispose()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def store(app):
    with app.app_context():
        yield app.extensions["todo_store"]


@pytest.fixture()
def broken_db(app):
    """Drop the schema so every store call fails."""
    with app.app_context():
        db.drop_all()
    yield
