"""Task ordering, break recommendations and completion time estimates."""

import logging

from .config import TRANSITION_MINUTES, ULTRADIAN_CYCLE_MINUTES
from .energy import classify_energy_impact
from .models import (
    AITask,
    BreakRecommendation,
    EnergyImpact,
    SchedulePlan,
    SchedulingPreferences,
)

logger = logging.getLogger(__name__)

CONSECUTIVE_BREAK_REASON = "Prevent burnout - time to reset"
ULTRADIAN_BREAK_REASON = "Natural energy cycle - recharge time"
DRAINING_PAIR_BREAK_REASON = "Two challenging tasks - breathe between them"


def optimize_task_order(tasks: list[AITask]) -> list[AITask]:
    """
    Alternate draining tasks with recovery tasks.

    Recovery tasks are the energizing ones followed by the neutral ones.
    Relative order inside each group is kept and whatever remains of the
    longer group is appended at the end.

    Args:
        tasks: Tasks to order

    Returns:
        New list with the same tasks in D, R, D, R, ... order
    """
    impacts = [(task, classify_energy_impact(task)) for task in tasks]
    draining = [task for task, impact in impacts if impact == EnergyImpact.DRAINING]
    energizing = [
        task for task, impact in impacts if impact == EnergyImpact.ENERGIZING
    ]
    neutral = [task for task, impact in impacts if impact == EnergyImpact.NEUTRAL]
    recovery = energizing + neutral

    ordered: list[AITask] = []
    for index in range(max(len(draining), len(recovery))):
        if index < len(draining):
            ordered.append(draining[index])
        if index < len(recovery):
            ordered.append(recovery[index])

    return ordered


def recommend_breaks(
    tasks: list[AITask], preferences: SchedulingPreferences | None = None
) -> list[BreakRecommendation]:
    """
    Recommend breaks between tasks.

    Three independent triggers are checked after each task except the last:
    the consecutive task limit, 90 minutes of accumulated work, and two
    draining tasks in a row. Triggers firing at the same index each add
    their own break.

    Args:
        tasks: Tasks in schedule order
        preferences: Break duration and consecutive task limit

    Returns:
        Break recommendations in schedule order
    """
    preferences = preferences or SchedulingPreferences()
    breaks: list[BreakRecommendation] = []
    consecutive_count = 0
    total_duration: float = 0
    last_index = len(tasks) - 1

    for index, task in enumerate(tasks):
        consecutive_count += 1
        total_duration += task.duration_minutes
        is_last = index >= last_index

        if consecutive_count >= preferences.max_consecutive_tasks and not is_last:
            breaks.append(
                BreakRecommendation(
                    after_task_index=index,
                    duration=preferences.break_duration,
                    reason=CONSECUTIVE_BREAK_REASON,
                )
            )
            consecutive_count = 0
            total_duration = 0

        if total_duration >= ULTRADIAN_CYCLE_MINUTES and not is_last:
            breaks.append(
                BreakRecommendation(
                    after_task_index=index,
                    duration=preferences.break_duration,
                    reason=ULTRADIAN_BREAK_REASON,
                )
            )
            total_duration = 0

        if (
            not is_last
            and classify_energy_impact(task) == EnergyImpact.DRAINING
            and classify_energy_impact(tasks[index + 1]) == EnergyImpact.DRAINING
        ):
            breaks.append(
                BreakRecommendation(
                    after_task_index=index,
                    duration=preferences.break_duration,
                    reason=DRAINING_PAIR_BREAK_REASON,
                )
            )

    return breaks


def estimate_completion_time(
    tasks: list[AITask], preferences: SchedulingPreferences | None = None
) -> float:
    """
    Estimate total minutes including breaks and task switching.

    Args:
        tasks: Tasks in schedule order
        preferences: Scheduling preferences used for breaks

    Returns:
        Task minutes plus break minutes plus 10 minutes per transition
    """
    task_duration = sum(task.duration_minutes for task in tasks)
    break_duration = sum(b.duration for b in recommend_breaks(tasks, preferences))
    transition_time = max(0, len(tasks) - 1) * TRANSITION_MINUTES

    return task_duration + break_duration + transition_time


def build_schedule(
    tasks: list[AITask], preferences: SchedulingPreferences | None = None
) -> SchedulePlan:
    """Reorder tasks, then compute breaks and the estimate on the new order."""
    ordered = optimize_task_order(tasks)
    breaks = recommend_breaks(ordered, preferences)
    estimated = estimate_completion_time(ordered, preferences)

    logger.info(
        f"Scheduled {len(ordered)} tasks with {len(breaks)} breaks, "
        f"estimated {estimated} minutes"
    )

    return SchedulePlan(tasks=ordered, breaks=breaks, estimated_duration=estimated)
