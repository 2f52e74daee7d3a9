"""Contextual behavioral nudges.

Every generator is a pure function of counters the caller tracks. Time
based nudges only fire inside a five minute window, so callers have to
check periodically rather than once.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from .capacity import max_tasks_for
from .config import (
    BREAK_REMINDER_MINUTES,
    COMPLETION_CELEBRATION_INTERVAL,
    FOCUS_NUDGE_MINUTES,
    FOCUS_STRONG_NUDGE_MINUTES,
    NUDGE_WINDOW_MINUTES,
)
from .models import Capacity, Nudge, NudgeContext, NudgeTone, NudgeType


def _in_window(minutes: float, start: float) -> bool:
    return start <= minutes < start + NUDGE_WINDOW_MINUTES


def create_timeline_full_nudge(
    current_task_count: int, capacity: Capacity | str
) -> Nudge | None:
    """
    Warn gently when the timeline approaches or reaches capacity.

    Args:
        current_task_count: Number of tasks in the timeline
        capacity: User's selected capacity

    Returns:
        Nudge at max - 1 or above, None otherwise
    """
    max_tasks = max_tasks_for(capacity)

    if current_task_count < max_tasks - 1:
        return None

    if current_task_count == max_tasks - 1:
        return Nudge(
            type=NudgeType.TIMELINE_FULL,
            message="Your timeline is almost at capacity. Remember to pace yourself.",
            tone=NudgeTone.GENTLE_WARNING,
        )

    return Nudge(
        type=NudgeType.TIMELINE_FULL,
        message=(
            "Your timeline is full. You've reached your capacity for today. "
            "Be kind to yourself."
        ),
        tone=NudgeTone.GENTLE_WARNING,
    )


def create_focus_duration_nudge(elapsed_minutes: float) -> Nudge | None:
    """
    Suggest a break during long focus sessions.

    Args:
        elapsed_minutes: Time spent in focus mode

    Returns:
        Supportive nudge at 90 minutes, a non-dismissible one at 120
    """
    if _in_window(elapsed_minutes, FOCUS_NUDGE_MINUTES):
        return Nudge(
            type=NudgeType.FOCUS_DURATION,
            message="You've been in focus mode for 90 minutes. Time for a break?",
            tone=NudgeTone.SUPPORTIVE,
        )

    if _in_window(elapsed_minutes, FOCUS_STRONG_NUDGE_MINUTES):
        return Nudge(
            type=NudgeType.FOCUS_DURATION,
            message=(
                "You've been at this for 2 hours. Your brain needs rest. "
                "Take a real break."
            ),
            tone=NudgeTone.GENTLE_WARNING,
            dismissible=False,
        )

    return None


def create_task_completion_nudge(
    completed_count: int, total_count: int
) -> Nudge | None:
    """
    Celebrate completion milestones.

    Checked in order, first match wins: first task, halfway point,
    everything done, every third task.

    Args:
        completed_count: Tasks completed today
        total_count: Tasks planned today

    Returns:
        Celebratory nudge or None
    """
    if completed_count == 1:
        message = "You started. That's the hardest part. Well done."
    elif completed_count == total_count // 2 and total_count > 2:
        message = "You're halfway there. That's real progress."
    elif completed_count == total_count and total_count > 0:
        message = "Everything's done. You did it. Take a moment to recognize that."
    elif completed_count > 0 and completed_count % COMPLETION_CELEBRATION_INTERVAL == 0:
        message = f"{completed_count} tasks completed. That's meaningful progress."
    else:
        return None

    return Nudge(
        type=NudgeType.TASK_COMPLETION,
        message=message,
        tone=NudgeTone.CELEBRATORY,
    )


def create_capacity_warning_nudge(
    attempted_task_count: int, capacity: Capacity | str
) -> Nudge | None:
    """
    Warn when more tasks are added than the capacity allows.

    Args:
        attempted_task_count: Number of tasks the user is trying to keep
        capacity: User's selected capacity

    Returns:
        Nudge naming the excess, or None within capacity
    """
    max_tasks = max_tasks_for(capacity)
    if attempted_task_count <= max_tasks:
        return None

    label = Capacity(capacity).value
    excess = attempted_task_count - max_tasks
    noun = "task" if excess == 1 else "tasks"
    return Nudge(
        type=NudgeType.CAPACITY_WARNING,
        message=(
            f"That's {excess} more {noun} than your {label} capacity. "
            f"Remember: you chose {label} energy for a reason."
        ),
        tone=NudgeTone.GENTLE_WARNING,
    )


def create_break_reminder_nudge(minutes_since_last_break: float) -> Nudge | None:
    """Remind about a short break an hour after the last one."""
    if not _in_window(minutes_since_last_break, BREAK_REMINDER_MINUTES):
        return None

    return Nudge(
        type=NudgeType.BREAK_REMINDER,
        message=(
            "You've been working for an hour. "
            "A 5-minute break helps more than pushing through."
        ),
        tone=NudgeTone.SUPPORTIVE,
    )


def _is_completed(task: Any) -> bool:
    if isinstance(task, Mapping):
        return bool(task.get("completed"))
    return bool(getattr(task, "completed", False))


def create_end_of_day_nudge(tasks: Sequence[Any]) -> Nudge:
    """
    Reflect on the day without judgment.

    Args:
        tasks: Tasks from the day, completed ones carrying a truthy
            `completed` field

    Returns:
        End-of-day nudge, always
    """
    completed = sum(1 for task in tasks if _is_completed(task))
    total = len(tasks)

    message = "Today is ending. "
    if completed == 0 and total > 0:
        message += (
            "You didn't check off tasks, but that doesn't mean you didn't do "
            "anything meaningful. Tomorrow is a new day."
        )
    elif completed == total and total > 0:
        message += "You completed everything. That's remarkable. Celebrate that."
    elif completed > 0:
        message += (
            f"You completed {completed} of {total} tasks. "
            "That's real work. The rest can wait."
        )
    else:
        message += "How are you feeling about today? Tomorrow is a fresh start."

    return Nudge(
        type=NudgeType.END_OF_DAY,
        message=message,
        tone=NudgeTone.SUPPORTIVE,
    )


def check_nudges(context: NudgeContext) -> list[Nudge]:
    """
    Evaluate every nudge whose inputs are present in the context.

    Args:
        context: Current counters

    Returns:
        Applicable nudges in a fixed order: timeline, focus, completion,
        capacity, break, end of day
    """
    candidates: list[Nudge | None] = []

    if context.task_count is not None and context.capacity:
        candidates.append(
            create_timeline_full_nudge(context.task_count, context.capacity)
        )

    if context.focus_elapsed_minutes is not None:
        candidates.append(create_focus_duration_nudge(context.focus_elapsed_minutes))

    if context.completed_count is not None and context.task_count is not None:
        candidates.append(
            create_task_completion_nudge(context.completed_count, context.task_count)
        )

    if context.task_count is not None and context.capacity:
        candidates.append(
            create_capacity_warning_nudge(context.task_count, context.capacity)
        )

    if context.minutes_since_last_break is not None:
        candidates.append(
            create_break_reminder_nudge(context.minutes_since_last_break)
        )

    if context.is_end_of_day and context.tasks is not None:
        candidates.append(create_end_of_day_nudge(context.tasks))

    return [nudge for nudge in candidates if nudge is not None]
