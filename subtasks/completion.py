import logging
from typing import Optional

import openai
from openai import OpenAI

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4"
DEFAULT_MAX_TOKENS = 150
DEFAULT_TEMPERATURE = 0.7


class CompletionError(RuntimeError):
    """Raised when the completion service cannot produce a reply."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def build_prompt(text: str) -> str:
    return f'Break down this task into smaller subtasks: "{text}"'


class CompletionClient:
    """Thin wrapper around the OpenAI chat completions endpoint.

    One request per call, fixed sampling parameters, no retries.
    """

    def __init__(
        self,
        client: Optional[OpenAI],
        model: str = DEFAULT_MODEL,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: float = DEFAULT_TEMPERATURE,
    ) -> None:
        self.client = client
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature

    def complete(self, prompt: str) -> str:
        if self.client is None:
            raise CompletionError("OPENAI_API_KEY is not configured")

        logger.info("requesting completion from %s", self.model)
        try:
            completion = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
        except openai.OpenAIError as exc:
            raise CompletionError(f"Completion request failed: {exc}") from exc

        if not completion.choices:
            return ""
        return completion.choices[0].message.content or ""
