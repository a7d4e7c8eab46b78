"""OpenAI chat completion adapter used for product extraction."""

from typing import Any, Optional

from openai import AsyncOpenAI

from app.application.ports.llm_client import LLMClient
from app.infrastructure.config.settings import settings


def _completion_text(response: Any) -> str:
    """First choice content of a chat completion, stripped; raises when there is none."""
    choices = getattr(response, "choices", None) or []
    content = choices[0].message.content if choices else None
    text = (content or "").strip()
    if not text:
        raise ValueError("Empty completion from OpenAI API")
    return text


class OpenAILLMClient(LLMClient):
    """Async chat completions against the OpenAI API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout_seconds: Optional[int] = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            api_key: OpenAI API key (defaults to settings.openai_api_key)
            model: Model name (defaults to settings.openai_model)
            timeout_seconds: Caller-side timeout (defaults to settings.openai_timeout_seconds)

        Raises:
            ValueError: If no API key is configured
        """
        key = api_key or settings.openai_api_key
        if not key:
            raise ValueError("OpenAI API key is required")

        self._model = model or settings.openai_model
        self._client = AsyncOpenAI(
            api_key=key,
            timeout=float(timeout_seconds or settings.openai_timeout_seconds),
            max_retries=1,
        )

    async def complete(
        self,
        system_prompt: str,
        user_message: str,
        max_tokens: int,
        temperature: float,
    ) -> str:
        """
        Run one system + user chat completion.

        Args:
            system_prompt: Extraction instructions
            user_message: Customer message
            max_tokens: Maximum tokens in the completion
            temperature: Sampling temperature

        Returns:
            Completion text, stripped

        Raises:
            Exception: If the API call fails or the completion is empty
        """
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_message},
                ],
                max_tokens=max_tokens,
                temperature=temperature,
            )
            return _completion_text(response)
        except Exception as e:
            raise Exception(f"OpenAI API call failed: {e}") from e
