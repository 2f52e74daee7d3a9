"""Energy impact classification and duration suggestions."""

import math

from .config import (
    DEFAULT_CATEGORY_DURATIONS,
    FALLBACK_TASK_DURATION,
    TIME_BLINDNESS_BUFFER,
)
from .models import AITask, EnergyImpact, TaskColor, TaskWithHistory

ENERGY_BY_COLOR = {
    TaskColor.PURPLE: EnergyImpact.ENERGIZING,  # self-care
    TaskColor.GREEN: EnergyImpact.ENERGIZING,
    TaskColor.ORANGE: EnergyImpact.DRAINING,  # deadlines
    TaskColor.BLUE: EnergyImpact.DRAINING,
}


def classify_energy_impact(task: AITask) -> EnergyImpact:
    """
    Classify a task as draining, neutral or energizing from its color.

    Args:
        task: Task to classify

    Returns:
        Energy impact, neutral for any color outside the mapping
    """
    return ENERGY_BY_COLOR.get(task.color, EnergyImpact.NEUTRAL)


def suggest_duration(task: TaskWithHistory) -> int:
    """
    Suggest a task duration in minutes.

    Without history the category default is used. With history the mean
    is padded for time blindness and rounded half up.

    Args:
        task: Task with optional historical durations

    Returns:
        Suggested duration in minutes
    """
    if not task.historical_durations:
        return DEFAULT_CATEGORY_DURATIONS.get(task.category, FALLBACK_TASK_DURATION)

    average = sum(task.historical_durations) / len(task.historical_durations)
    return math.floor(average * TIME_BLINDNESS_BUFFER + 0.5)
