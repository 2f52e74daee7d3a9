"""Completion backend backed by a local Ollama server."""

import logging
from collections.abc import AsyncIterator
from typing import Any

import ollama

from .config import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_OLLAMA_BASE_URL,
    DEFAULT_OLLAMA_MODEL,
    DEFAULT_OLLAMA_TIMEOUT,
)
from .exceptions import CompletionBackendError
from .interfaces import CompletionBackend
from .models import CompletionRequest, CompletionResponse, TokenUsage

logger = logging.getLogger(__name__)


class OllamaBackend(CompletionBackend):
    """Runs chat completions through `ollama.AsyncClient`."""

    def __init__(
        self,
        model: str = DEFAULT_OLLAMA_MODEL,
        base_url: str = DEFAULT_OLLAMA_BASE_URL,
        timeout: float | None = DEFAULT_OLLAMA_TIMEOUT,
    ) -> None:
        """
        Initialize Ollama backend.

        Args:
            model: Ollama model name
            base_url: Ollama service URL
            timeout: HTTP timeout in seconds, None to wait indefinitely
        """
        self.model = model
        self.base_url = base_url
        self.timeout = timeout
        self._client = ollama.AsyncClient(host=base_url, timeout=timeout)

    def _build_options(self, request: CompletionRequest) -> dict[str, Any]:
        options: dict[str, Any] = {}
        if request.temperature is not None:
            options["temperature"] = request.temperature
        options["num_predict"] = request.max_tokens or DEFAULT_MAX_TOKENS
        return options

    async def complete(self, request: CompletionRequest) -> CompletionResponse:
        """
        Run a non-streaming chat completion.

        Args:
            request: Completion request

        Returns:
            CompletionResponse with content and token usage

        Raises:
            CompletionBackendError: If Ollama is unreachable or errors
        """
        try:
            response = await self._client.chat(
                model=self.model,
                messages=[message.to_dict() for message in request.messages],
                options=self._build_options(request),
            )
        except (ollama.ResponseError, ConnectionError) as e:
            logger.error(f"Ollama completion failed: {e}")
            raise CompletionBackendError(f"Ollama request failed: {e}") from e
        except TimeoutError as e:
            logger.error(f"Ollama completion timed out: {e}")
            raise CompletionBackendError(f"Ollama request timed out: {e}") from e
        except Exception as e:
            logger.error(f"Ollama completion error: {e}")
            raise CompletionBackendError(f"Ollama request failed: {e}") from e

        prompt_tokens = response.get("prompt_eval_count") or 0
        completion_tokens = response.get("eval_count") or 0

        logger.debug(
            f"Ollama completion: model={self.model}, "
            f"prompt_tokens={prompt_tokens}, completion_tokens={completion_tokens}"
        )

        return CompletionResponse(
            content=response["message"]["content"] or "",
            finish_reason=response.get("done_reason") or "stop",
            usage=TokenUsage(
                prompt_tokens=prompt_tokens,
                completion_tokens=completion_tokens,
                total_tokens=prompt_tokens + completion_tokens,
            ),
        )

    async def stream(self, request: CompletionRequest) -> AsyncIterator[bytes]:
        """
        Stream a chat completion as UTF-8 encoded content chunks.

        Args:
            request: Completion request

        Yields:
            Content chunks in arrival order

        Raises:
            CompletionBackendError: If Ollama is unreachable or errors
        """
        try:
            parts = await self._client.chat(
                model=self.model,
                messages=[message.to_dict() for message in request.messages],
                options=self._build_options(request),
                stream=True,
            )
            async for part in parts:
                content = part["message"]["content"]
                if content:
                    yield content.encode("utf-8")
        except (ollama.ResponseError, ConnectionError) as e:
            logger.error(f"Ollama stream failed: {e}")
            raise CompletionBackendError(f"Ollama stream failed: {e}") from e
        except TimeoutError as e:
            logger.error(f"Ollama stream timed out: {e}")
            raise CompletionBackendError(f"Ollama stream timed out: {e}") from e
        except Exception as e:
            logger.error(f"Ollama stream error: {e}")
            raise CompletionBackendError(f"Ollama stream failed: {e}") from e
