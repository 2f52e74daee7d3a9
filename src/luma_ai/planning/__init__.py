"""Planning module for capacity-aware task compression, scheduling and nudges."""

from .compression import CompressionEngine
from .item_compression import PlanningSession, compress_items, pin_emotional_item
from .models import (
    AITask,
    BreakRecommendation,
    Capacity,
    CompressionResult,
    Item,
    ItemCapacity,
    Nudge,
    NudgeContext,
    SchedulingPreferences,
    TaskColor,
)
from .nudges import check_nudges
from .scheduling import build_schedule, estimate_completion_time, recommend_breaks
from .validation import validate_ai_response

__all__ = [
    "AITask",
    "BreakRecommendation",
    "Capacity",
    "CompressionEngine",
    "CompressionResult",
    "Item",
    "ItemCapacity",
    "Nudge",
    "NudgeContext",
    "PlanningSession",
    "SchedulingPreferences",
    "TaskColor",
    "build_schedule",
    "check_nudges",
    "compress_items",
    "estimate_completion_time",
    "pin_emotional_item",
    "recommend_breaks",
    "validate_ai_response",
]
