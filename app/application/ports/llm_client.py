"""LLM client port interface."""

from abc import ABC, abstractmethod


class LLMClient(ABC):
    """Port interface for LLM client."""

    @abstractmethod
    async def complete(
        self,
        system_prompt: str,
        user_message: str,
        max_tokens: int,
        temperature: float,
    ) -> str:
        """
        Generate a completion using the LLM.

        Args:
            system_prompt: System prompt to guide LLM behavior
            user_message: User message
            max_tokens: Maximum tokens in the completion
            temperature: Sampling temperature

        Returns:
            Completion text

        Raises:
            Exception: If LLM call fails or returns empty response
        """
        pass
