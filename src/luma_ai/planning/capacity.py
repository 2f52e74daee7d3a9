"""Capacity model mapping energy self-reports to task limits.

There are two tables. The AI-backed flow treats capacity as a hard
cap on the task count; the deterministic item flow treats it as a base count
with a single step of manual override on top. They disagree for "medium"
(5 tasks vs. 3 to 4 items).
"""

from .config import CAPACITY_MAX_TASKS, ITEM_CAPACITY_BASE, ITEM_OVERRIDE_STEP
from .models import Capacity, ItemCapacity


def max_tasks_for(capacity: Capacity | str) -> int:
    """
    Get the maximum number of AI tasks for a capacity.

    Args:
        capacity: Capacity label (light, medium, full)

    Returns:
        Exact maximum task count

    Raises:
        ValueError: If the label is not a known capacity
    """
    return CAPACITY_MAX_TASKS[Capacity(capacity).value]


def item_capacity_bounds(capacity: ItemCapacity | str) -> tuple[int, int]:
    """
    Get the visible item range for a deterministic capacity.

    Args:
        capacity: Capacity label (low, medium, high)

    Returns:
        Tuple of (base, ceiling)

    Raises:
        ValueError: If the label is not a known capacity
    """
    base = ITEM_CAPACITY_BASE[ItemCapacity(capacity).value]
    return base, base + ITEM_OVERRIDE_STEP
