"""AI-backed compression of brain dump text into a capacity-bounded task list."""

import json
import logging
import re
import time
from collections.abc import AsyncIterator
from typing import Any

from .capacity import max_tasks_for
from .config import COMPRESSION_TEMPERATURE, DEFAULT_MAX_TOKENS
from .exceptions import InvalidStructureError, ResponseParseError
from .interfaces import CompletionBackend
from .models import (
    AITask,
    Capacity,
    ChatMessage,
    CompletionRequest,
    CompressionErrorType,
    CompressionResult,
    MessageRole,
)
from .prompts import select_system_prompt
from .validation import validate_ai_response

logger = logging.getLogger(__name__)

PARSE_ERROR_MESSAGE = "Failed to parse AI response"
INVALID_STRUCTURE_MESSAGE = "AI response has invalid structure"
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"

# Greedy: spans from the first "[" to the last "]"
_EMBEDDED_ARRAY_PATTERN = re.compile(r"\[[\s\S]*\]")


def _reject_constant(name: str) -> Any:
    # Infinity, -Infinity and NaN are not JSON
    raise ValueError(f"Non-standard JSON constant: {name}")


def parse_completion(content: str) -> Any:
    """
    Parse a completion as JSON, falling back to an embedded array.

    A failed direct parse is retried on the span from the first "[" to
    the last "]".

    Args:
        content: Raw completion text

    Returns:
        Parsed JSON value

    Raises:
        ResponseParseError: If neither stage yields valid JSON
    """
    try:
        return json.loads(content.strip(), parse_constant=_reject_constant)
    except ValueError:
        pass

    match = _EMBEDDED_ARRAY_PATTERN.search(content)
    if match is None:
        raise ResponseParseError("No JSON array found in completion")

    try:
        return json.loads(match.group(0), parse_constant=_reject_constant)
    except ValueError as e:
        raise ResponseParseError(f"Embedded JSON array is invalid: {e}") from e


def parse_tasks(content: str) -> list[AITask]:
    """
    Parse and validate a completion into tasks.

    Raises:
        ResponseParseError: If the completion is not JSON
        InvalidStructureError: If the JSON is not a valid task list
    """
    data = parse_completion(content)
    if not validate_ai_response(data):
        raise InvalidStructureError("Completion is not a valid task list")
    return [AITask.from_dict(task) for task in data]


def limit_to_capacity(
    tasks: list[AITask], capacity: Capacity | str | None
) -> list[AITask]:
    """Keep the first tasks up to the capacity maximum, in original order."""
    if not capacity:
        return tasks
    max_tasks = max_tasks_for(capacity)
    if len(tasks) > max_tasks:
        logger.info(
            f"Truncating {len(tasks)} tasks to {max_tasks} for {Capacity(capacity).value} capacity"
        )
        return tasks[:max_tasks]
    return tasks


class CompressionEngine:
    """
    Turns free text into a validated, capacity-bounded task list.

    The completion backend is injected so that callers decide which
    provider runs and how fallbacks between providers work.
    """

    def __init__(
        self,
        backend: CompletionBackend,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ) -> None:
        """
        Initialize Compression Engine.

        Args:
            backend: Completion backend used for every call
            max_tokens: Token limit for each completion
        """
        self._backend = backend
        self._max_tokens = max_tokens

    def _build_request(
        self, text: str, capacity: Capacity | str | None
    ) -> CompletionRequest:
        return CompletionRequest(
            messages=[
                ChatMessage(MessageRole.SYSTEM, select_system_prompt(capacity)),
                ChatMessage(MessageRole.USER, text),
            ],
            temperature=COMPRESSION_TEMPERATURE,
            max_tokens=self._max_tokens,
        )

    async def compress(
        self, text: str, capacity: Capacity | str | None = None
    ) -> CompressionResult:
        """
        Compress brain dump text into tasks.

        Never raises for backend, parse or validation failures; those are
        returned as a failed result with a distinct error type.

        Args:
            text: Unstructured brain dump
            capacity: Optional capacity bounding the number of tasks

        Returns:
            CompressionResult with tasks on success or an error message
        """
        start_time = time.time()

        try:
            request = self._build_request(text, capacity)
            response = await self._backend.complete(request)
            tasks = limit_to_capacity(parse_tasks(response.content), capacity)

        except ResponseParseError as e:
            logger.warning(f"Could not parse AI response: {e}")
            return CompressionResult(
                success=False,
                error=PARSE_ERROR_MESSAGE,
                error_type=CompressionErrorType.PARSE,
            )

        except InvalidStructureError as e:
            logger.warning(f"Invalid AI response structure: {e}")
            return CompressionResult(
                success=False,
                error=INVALID_STRUCTURE_MESSAGE,
                error_type=CompressionErrorType.INVALID_STRUCTURE,
            )

        except Exception as e:
            logger.error(f"Compression error: {e}")
            return CompressionResult(
                success=False,
                error=str(e) or UNEXPECTED_ERROR_MESSAGE,
                error_type=CompressionErrorType.BACKEND,
            )

        processing_time = time.time() - start_time
        logger.info(
            f"Compressed brain dump into {len(tasks)} tasks in {processing_time:.3f}s"
        )

        metadata: dict[str, Any] = {"processing_time": processing_time}
        if response.usage is not None:
            metadata["total_tokens"] = response.usage.total_tokens

        return CompressionResult(success=True, tasks=tasks, metadata=metadata)

    def compress_stream(
        self, text: str, capacity: Capacity | str | None = None
    ) -> AsyncIterator[bytes]:
        """
        Stream the raw completion for perceived-latency UX.

        The output is neither buffered, parsed nor validated; the caller
        handles chunks incrementally.

        Args:
            text: Unstructured brain dump
            capacity: Optional capacity selecting the prompt

        Returns:
            Async iterator over the backend's byte chunks
        """
        return self._backend.stream(self._build_request(text, capacity))
