"""Validation of parsed AI responses."""

from collections.abc import Mapping
from typing import Any, TypeGuard

from .models import TaskColor

ALLOWED_COLORS = frozenset(color.value for color in TaskColor)


def _is_positive_number(value: Any) -> bool:
    # bool is an int subclass but never a duration
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return value > 0


def _is_valid_task(task: Any) -> bool:
    if not isinstance(task, Mapping):
        return False

    title = task.get("title")
    if not isinstance(title, str) or len(title) == 0:
        return False

    if not _is_positive_number(task.get("duration_minutes")):
        return False

    color = task.get("color")
    if not isinstance(color, str) or color not in ALLOWED_COLORS:
        return False

    return isinstance(task.get("reasoning"), str)


def validate_ai_response(data: Any) -> TypeGuard[list[dict[str, Any]]]:
    """
    Check that a parsed AI response is a list of well-formed tasks.

    A single invalid element rejects the whole response.

    Args:
        data: Parsed JSON value

    Returns:
        True if every element is a valid task
    """
    if not isinstance(data, list):
        return False

    return all(_is_valid_task(task) for task in data)
