from typing import Optional

from openai import OpenAI

from config import AppConfig
from subtasks.completion import CompletionClient


def build_openai_client(config: AppConfig) -> Optional[OpenAI]:
    if not config.openai_api_key:
        return None
    return OpenAI(api_key=config.openai_api_key, base_url=config.openai_base_url)


def build_completion_client(config: AppConfig) -> CompletionClient:
    return CompletionClient(
        build_openai_client(config),
        model=config.openai_model,
        max_tokens=config.completion_max_tokens,
        temperature=config.completion_temperature,
    )
