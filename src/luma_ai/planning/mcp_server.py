"""MCP Server exposing planning tools using FastMCP."""

import logging
from dataclasses import fields
from typing import Any

from fastmcp import FastMCP

from .config import (
    DEFAULT_MCP_HOST,
    DEFAULT_MCP_PORT,
    DEFAULT_MCP_SERVER_NAME,
    MAX_BRAIN_DUMP_LENGTH,
    MIN_BRAIN_DUMP_LENGTH,
)
from .compression import CompressionEngine
from .models import AITask, Capacity, NudgeContext, SchedulingPreferences
from .nudges import check_nudges
from .ollama_backend import OllamaBackend
from .prompts import COMPRESSION_ERROR_MESSAGE
from .scheduling import build_schedule
from .validation import validate_ai_response

logger = logging.getLogger(__name__)

# Create FastMCP server instance
mcp = FastMCP(DEFAULT_MCP_SERVER_NAME)

# Global compression engine (initialized in cli_entry())
_engine: CompressionEngine | None = None

_PREFERENCE_FIELDS = {f.name for f in fields(SchedulingPreferences)}


def get_engine() -> CompressionEngine:
    """Get the global compression engine instance."""
    if _engine is None:
        raise RuntimeError("Compression engine not initialized")
    return _engine


def set_engine(engine: CompressionEngine) -> None:
    """Set the global compression engine instance (for testing)."""
    global _engine
    _engine = engine


def _parse_capacity(capacity: str | None) -> Capacity | None:
    return Capacity(capacity) if capacity else None


async def _compress_brain_dump_impl(
    text: str, capacity: str | None = None
) -> dict[str, Any]:
    """Implementation of compress_brain_dump tool."""
    if not text or not isinstance(text, str):
        return {"success": False, "error": "Text is required and must be a string"}

    if not MIN_BRAIN_DUMP_LENGTH <= len(text) <= MAX_BRAIN_DUMP_LENGTH:
        return {"success": False, "error": COMPRESSION_ERROR_MESSAGE}

    try:
        parsed_capacity = _parse_capacity(capacity)
    except ValueError:
        return {"success": False, "error": "Invalid capacity value"}

    try:
        result = await get_engine().compress(text, parsed_capacity)
    except Exception as e:
        logger.error(f"Error compressing brain dump: {e}")
        return {"success": False, "error": "AI service is not configured"}

    if not result.success or result.tasks is None:
        return {
            "success": False,
            "error": result.error or COMPRESSION_ERROR_MESSAGE,
            "error_type": result.error_type.value if result.error_type else None,
        }

    return {"success": True, "tasks": [task.to_dict() for task in result.tasks]}


def _schedule_tasks_impl(
    tasks: list[dict[str, Any]], preferences: dict[str, Any] | None = None
) -> dict[str, Any]:
    """Implementation of schedule_tasks tool."""
    if not isinstance(tasks, list):
        return {"success": False, "error": "Tasks array is required"}

    if len(tasks) == 0:
        return {"success": False, "error": "Tasks array cannot be empty"}

    if not validate_ai_response(tasks):
        return {"success": False, "error": "Tasks have invalid structure"}

    # null preferences fall back to defaults
    given = {
        key: value
        for key, value in (preferences or {}).items()
        if value is not None
    }
    unknown = set(given) - _PREFERENCE_FIELDS
    if unknown:
        return {
            "success": False,
            "error": f"Unknown preferences: {', '.join(sorted(unknown))}",
        }

    try:
        plan = build_schedule(
            [AITask.from_dict(task) for task in tasks],
            SchedulingPreferences(**given),
        )
    except Exception as e:
        logger.error(f"Error scheduling tasks: {e}")
        return {
            "success": False,
            "error": "An unexpected error occurred while scheduling tasks",
        }

    return {
        "success": True,
        "optimized_tasks": [task.to_dict() for task in plan.tasks],
        "breaks": [
            {
                "after_task_index": b.after_task_index,
                "duration": b.duration,
                "reason": b.reason,
            }
            for b in plan.breaks
        ],
        "estimated_duration": plan.estimated_duration,
    }


def _check_nudges_impl(
    task_count: int | None = None,
    completed_count: int | None = None,
    capacity: str | None = None,
    focus_elapsed_minutes: float | None = None,
    minutes_since_last_break: float | None = None,
    is_end_of_day: bool = False,
    tasks: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """Implementation of check_nudges tool."""
    try:
        parsed_capacity = _parse_capacity(capacity)
    except ValueError:
        return {"success": False, "error": "Invalid capacity value"}

    context = NudgeContext(
        task_count=task_count,
        completed_count=completed_count,
        capacity=parsed_capacity,
        focus_elapsed_minutes=focus_elapsed_minutes,
        minutes_since_last_break=minutes_since_last_break,
        is_end_of_day=is_end_of_day,
        tasks=tasks,
    )
    return {
        "success": True,
        "nudges": [nudge.to_dict() for nudge in check_nudges(context)],
    }


# FastMCP decorated wrappers (for actual MCP server)
@mcp.tool()
async def compress_brain_dump(text: str, capacity: str | None = None) -> dict[str, Any]:
    """
    Compress a brain dump into a short prioritized task list.

    Args:
        text: Unstructured thoughts (10 to 2000 characters)
        capacity: Energy today (light, medium, full), optional

    Returns:
        Dictionary with tasks or an error message
    """
    return await _compress_brain_dump_impl(text=text, capacity=capacity)


@mcp.tool()
async def schedule_tasks(
    tasks: list[dict[str, Any]], preferences: dict[str, Any] | None = None
) -> dict[str, Any]:
    """
    Reorder tasks, recommend breaks and estimate total time.

    Args:
        tasks: Tasks with title, duration_minutes, color and reasoning
        preferences: Optional break_duration and max_consecutive_tasks

    Returns:
        Dictionary with optimized_tasks, breaks and estimated_duration
    """
    return _schedule_tasks_impl(tasks=tasks, preferences=preferences)


@mcp.tool()
async def get_nudges(
    task_count: int | None = None,
    completed_count: int | None = None,
    capacity: str | None = None,
    focus_elapsed_minutes: float | None = None,
    minutes_since_last_break: float | None = None,
    is_end_of_day: bool = False,
    tasks: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """
    Check which nudges apply to the current counters.

    Returns:
        Dictionary with the list of applicable nudges
    """
    return _check_nudges_impl(
        task_count=task_count,
        completed_count=completed_count,
        capacity=capacity,
        focus_elapsed_minutes=focus_elapsed_minutes,
        minutes_since_last_break=minutes_since_last_break,
        is_end_of_day=is_end_of_day,
        tasks=tasks,
    )


def cli_entry() -> None:
    """CLI entry point for the MCP server."""
    import sys

    transport_type = "stdio"
    if len(sys.argv) > 1 and sys.argv[1] in ("stdio", "sse", "http"):
        transport_type = "sse" if sys.argv[1] == "http" else sys.argv[1]

    set_engine(CompressionEngine(OllamaBackend()))
    logger.info(f"MCP Server initialized with 3 tools (transport={transport_type})")

    # FastMCP's run() manages its own event loop
    if transport_type == "stdio":
        mcp.run(transport="stdio")
    else:
        logger.info(f"Server will listen on http://{DEFAULT_MCP_HOST}:{DEFAULT_MCP_PORT}")
        mcp.run(transport="sse", host=DEFAULT_MCP_HOST, port=DEFAULT_MCP_PORT)


if __name__ == "__main__":
    cli_entry()
