"""Abstract interfaces for planning collaborators."""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator

from luma_ai.planning.models import CompletionRequest, CompletionResponse


class CompletionBackend(ABC):
    """Abstract interface for an AI text completion backend."""

    @abstractmethod
    async def complete(self, request: CompletionRequest) -> CompletionResponse:
        """
        Run a chat completion and return the full text.

        Args:
            request: Messages (at least system and user), temperature and
                token limit

        Returns:
            CompletionResponse with the generated content and optional usage

        Raises:
            CompletionBackendError: If the backend call fails
        """
        pass

    @abstractmethod
    def stream(self, request: CompletionRequest) -> AsyncIterator[bytes]:
        """
        Run a chat completion and yield raw content chunks as they arrive.

        The consumer drives the iteration; closing the iterator cancels
        the underlying request.

        Args:
            request: Messages, temperature and token limit

        Returns:
            Async iterator of UTF-8 encoded content chunks
        """
        pass
