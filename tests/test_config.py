# tests/test_config.py

from __future__ import annotations

import logging

import pytest

import config as config_module
from config import AppConfig
from logging_setup import setup_logging


@pytest.fixture(autouse=True)
def _no_dotenv(monkeypatch) -> None:
    monkeypatch.setattr(config_module, "load_dotenv", lambda: None)
    for name in [
        "DATABASE_URL",
        "OPENAI_API_KEY",
        "OPENAI_BASE_URL",
        "OPENAI_MODEL",
        "COMPLETION_MAX_TOKENS",
        "COMPLETION_TEMPERATURE",
        "LOG_LEVEL",
        "LOG_DIR",
        "PORT",
    ]:
        monkeypatch.delenv(name, raising=False)


def test_defaults_without_env() -> None:
    cfg = AppConfig.from_env()
    assert cfg.database_url == "sqlite:///todos.db"
    assert cfg.openai_api_key is None
    assert cfg.openai_model == "gpt-4"
    assert cfg.completion_max_tokens == 150
    assert cfg.completion_temperature == 0.7
    assert cfg.log_level == "INFO"
    assert cfg.port == 5000


def test_env_overrides(monkeypatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "postgres://u:p@db:5432/todos")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("OPENAI_MODEL", "gpt-4o-mini")
    monkeypatch.setenv("COMPLETION_MAX_TOKENS", "64")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    cfg = AppConfig.from_env()
    assert cfg.database_url == "postgresql://u:p@db:5432/todos"
    assert cfg.openai_api_key == "sk-test"
    assert cfg.openai_model == "gpt-4o-mini"
    assert cfg.completion_max_tokens == 64
    assert cfg.log_level == "DEBUG"


def test_bad_number_is_runtime_error(monkeypatch) -> None:
    monkeypatch.setenv("PORT", "eighty")
    with pytest.raises(RuntimeError, match="Invalid numeric"):
        AppConfig.from_env()


def test_setup_logging_writes_file(tmp_path) -> None:
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        setup_logging("INFO", tmp_path / "logs")
        logging.getLogger("todo_store.store").debug("hello file")
        for h in root.handlers:
            h.flush()
        assert "hello file" in (tmp_path / "logs" / "todos.log").read_text(encoding="utf-8")
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)
