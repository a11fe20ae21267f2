from abc import ABC, abstractmethod


class BaseAnalysisClient(ABC):
    """Contract for provider-specific chat completion clients."""

    @abstractmethod
    def create_chat_completion(
        self,
        *,
        model: str,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        """Return the assistant message content as plain text."""
