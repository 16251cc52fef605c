import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from subtasks.completion import DEFAULT_MAX_TOKENS, DEFAULT_MODEL, DEFAULT_TEMPERATURE

DEFAULT_DATABASE_URL = "sqlite:///todos.db"


def _normalise_db_url(url: str) -> str:
    # Heroku/Railway style URLs use the scheme SQLAlchemy dropped in 1.4
    if url.startswith("postgres://"):
        return "postgresql://" + url[len("postgres://"):]
    return url


@dataclass
class AppConfig:
    database_url: str = DEFAULT_DATABASE_URL
    openai_api_key: Optional[str] = None
    openai_base_url: Optional[str] = None
    openai_model: str = DEFAULT_MODEL
    completion_max_tokens: int = DEFAULT_MAX_TOKENS
    completion_temperature: float = DEFAULT_TEMPERATURE
    log_level: str = "INFO"
    log_dir: Optional[str] = None
    port: int = 5000

    @classmethod
    def from_env(cls) -> "AppConfig":
        load_dotenv()
        # prefer DATABASE_URL (Postgres in deployment); fall back to a local
        # sqlite file for dev
        db_url = os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL

        try:
            max_tokens = int(os.getenv("COMPLETION_MAX_TOKENS", cls.completion_max_tokens))
            temperature = float(os.getenv("COMPLETION_TEMPERATURE", cls.completion_temperature))
            port = int(os.getenv("PORT", cls.port))
        except ValueError as exc:
            raise RuntimeError(f"Invalid numeric environment variable: {exc}") from exc

        return cls(
            database_url=_normalise_db_url(db_url),
            openai_api_key=os.getenv("OPENAI_API_KEY") or None,
            openai_base_url=os.getenv("OPENAI_BASE_URL") or None,
            openai_model=os.getenv("OPENAI_MODEL", cls.openai_model),
            completion_max_tokens=max_tokens,
            completion_temperature=temperature,
            log_level=os.getenv("LOG_LEVEL", cls.log_level).upper(),
            log_dir=os.getenv("LOG_DIR") or None,
            port=port,
        )
