from abc import ABC, abstractmethod
from typing import AsyncIterator


class ProviderHTTPError(Exception):
    """The upstream API answered with a non-2xx status."""

    def __init__(self, status_code: int, reason: str, body: str = ""):
        super().__init__(f"{status_code} {reason}")
        self.status_code = status_code
        self.reason = reason
        self.body = body


class BaseProvider(ABC):
    """Abstract base class for chat completion providers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """The name of this provider (e.g. 'groq')."""
        ...

    @abstractmethod
    async def chat(self, messages: list[dict], model: str | None = None) -> dict:
        """
        Send a chat completion request.

        Args:
            messages: List of message dicts with 'role' and 'content' keys.
            model: Optional model identifier. Provider uses its default if None.

        Returns:
            dict with keys:
                - text: str | None  — the generated text
                - provider: str     — provider name
                - model: str        — model used
                - status: "success" | "failed"
                - status_code: int | None — upstream HTTP status when one was received
                - error: str | None — error message on failure
        """
        ...

    @abstractmethod
    async def open_stream(self, messages: list[dict], model: str | None = None) -> AsyncIterator[bytes]:
        """
        Start a streamed completion and return its raw server-sent-event bytes.

        Raises ProviderHTTPError before anything is yielded when the upstream
        rejects the request.
        """
        ...
