"""Data models for planning functionality."""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any

from .config import DEFAULT_BREAK_DURATION, DEFAULT_MAX_CONSECUTIVE_TASKS


class Capacity(str, Enum):
    """Energy self-report used by the AI-backed compression flow."""

    LIGHT = "light"
    MEDIUM = "medium"
    FULL = "full"


class ItemCapacity(str, Enum):
    """Energy self-report used by the deterministic item flow."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TaskColor(str, Enum):
    """Category color assigned to a task by the AI."""

    BLUE = "blue"  # work
    CORAL = "coral"  # errands, life admin
    GREEN = "green"  # routine
    ORANGE = "orange"  # deadlines
    PURPLE = "purple"  # self-care


class EnergyImpact(str, Enum):
    """Estimated effect of a task on the user's energy."""

    DRAINING = "draining"
    NEUTRAL = "neutral"
    ENERGIZING = "energizing"


class MessageRole(str, Enum):
    """Chat message role understood by completion backends."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class CompressionErrorType(str, Enum):
    """Failure category of an AI-backed compression."""

    BACKEND = "backend"
    PARSE = "parse"
    INVALID_STRUCTURE = "invalid_structure"


class NudgeType(str, Enum):
    """Kinds of behavioral nudges."""

    TIMELINE_FULL = "timeline_full"
    FOCUS_DURATION = "focus_duration"
    TASK_COMPLETION = "task_completion"
    CAPACITY_WARNING = "capacity_warning"
    BREAK_REMINDER = "break_reminder"
    END_OF_DAY = "end_of_day"


class NudgeTone(str, Enum):
    """Tone a nudge should be presented with."""

    SUPPORTIVE = "supportive"
    CELEBRATORY = "celebratory"
    GENTLE_WARNING = "gentle-warning"


@dataclass(frozen=True)
class AITask:
    """A task produced by AI compression."""

    title: str
    duration_minutes: float
    color: TaskColor
    reasoning: str
    completed: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AITask":
        """Build a task from a validated AI response element."""
        return cls(
            title=data["title"],
            duration_minutes=data["duration_minutes"],
            color=TaskColor(data["color"]),
            reasoning=data["reasoning"],
            completed=bool(data.get("completed", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the AI response shape."""
        return {
            "title": self.title,
            "duration_minutes": self.duration_minutes,
            "color": self.color.value,
            "reasoning": self.reasoning,
            "completed": self.completed,
        }


@dataclass
class Item:
    """A user-entered brain dump line for the deterministic flow."""

    id: str
    label: str
    emotional: bool = False


@dataclass
class TaskWithHistory:
    """A task with past durations, used for duration suggestions."""

    title: str
    category: str
    historical_durations: list[float] | None = None
    energy_impact: EnergyImpact | None = None


@dataclass
class SchedulingPreferences:
    """User scheduling preferences."""

    preferred_start_time: str | None = None
    break_duration: int = DEFAULT_BREAK_DURATION
    max_consecutive_tasks: int = DEFAULT_MAX_CONSECUTIVE_TASKS
    alternate_hard_easy: bool | None = None


@dataclass(frozen=True)
class BreakRecommendation:
    """A break suggested after a task in the schedule."""

    after_task_index: int
    duration: int
    reason: str


@dataclass
class SchedulePlan:
    """Reordered tasks with their breaks and total estimated minutes."""

    tasks: list[AITask]
    breaks: list[BreakRecommendation]
    estimated_duration: float


@dataclass(frozen=True)
class Nudge:
    """A contextual behavioral message."""

    type: NudgeType
    message: str
    tone: NudgeTone
    show_in_app: bool = True
    dismissible: bool = True

    def to_dict(self) -> dict[str, Any]:
        """Serialize with enum values flattened to strings."""
        data = asdict(self)
        data["type"] = self.type.value
        data["tone"] = self.tone.value
        return data


@dataclass
class NudgeContext:
    """Counters tracked by the caller and checked for nudges."""

    task_count: int | None = None
    completed_count: int | None = None
    capacity: Capacity | None = None
    focus_elapsed_minutes: float | None = None
    minutes_since_last_break: float | None = None
    is_end_of_day: bool = False
    tasks: list[Any] | None = None


@dataclass(frozen=True)
class ChatMessage:
    """A single chat message sent to a completion backend."""

    role: MessageRole
    content: str

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role.value, "content": self.content}


@dataclass
class CompletionRequest:
    """Request sent to a completion backend."""

    messages: list[ChatMessage]
    temperature: float | None = None
    max_tokens: int | None = None


@dataclass
class TokenUsage:
    """Token accounting reported by a backend."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


@dataclass
class CompletionResponse:
    """Text completion returned by a backend."""

    content: str
    finish_reason: str | None = None
    usage: TokenUsage | None = None


@dataclass
class CompressionResult:
    """Result of AI-backed compression."""

    success: bool
    tasks: list[AITask] | None = None
    error: str | None = None
    error_type: CompressionErrorType | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
