"""Tests for contextual nudges."""

import pytest

from luma_ai.planning.models import (
    AITask,
    NudgeContext,
    NudgeTone,
    NudgeType,
    TaskColor,
)
from luma_ai.planning.nudges import (
    check_nudges,
    create_break_reminder_nudge,
    create_capacity_warning_nudge,
    create_end_of_day_nudge,
    create_focus_duration_nudge,
    create_task_completion_nudge,
    create_timeline_full_nudge,
)


@pytest.mark.unit
class TestTimelineFullNudge:
    """Test cases for timeline capacity nudges."""

    def test_below_threshold_returns_none(self) -> None:
        """Test no nudge two or more tasks below the max."""
        assert create_timeline_full_nudge(3, "medium") is None

    def test_one_below_max_is_almost_full(self) -> None:
        """Test the nudge one task below the max."""
        nudge = create_timeline_full_nudge(4, "medium")

        assert nudge is not None
        assert "almost at capacity" in nudge.message
        assert nudge.tone is NudgeTone.GENTLE_WARNING

    @pytest.mark.parametrize("count", [3, 4, 10])
    def test_at_or_over_max_is_full(self, count: int) -> None:
        """Test the full message at and beyond the max."""
        nudge = create_timeline_full_nudge(count, "light")

        assert nudge is not None
        assert nudge.type is NudgeType.TIMELINE_FULL
        assert "Your timeline is full" in nudge.message


@pytest.mark.unit
class TestFocusDurationNudge:
    """Test cases for long focus session nudges."""

    @pytest.mark.parametrize("minutes", [90, 92.5, 94.9])
    def test_ninety_minute_window(self, minutes: float) -> None:
        """Test the supportive nudge inside [90, 95)."""
        nudge = create_focus_duration_nudge(minutes)

        assert nudge is not None
        assert nudge.tone is NudgeTone.SUPPORTIVE
        assert nudge.dismissible is True

    @pytest.mark.parametrize("minutes", [120, 124])
    def test_two_hour_window_is_not_dismissible(self, minutes: float) -> None:
        """Test the stronger nudge inside [120, 125) cannot be dismissed."""
        nudge = create_focus_duration_nudge(minutes)

        assert nudge is not None
        assert nudge.tone is NudgeTone.GENTLE_WARNING
        assert nudge.dismissible is False
        assert "2 hours" in nudge.message

    @pytest.mark.parametrize("minutes", [0, 89.9, 95, 100, 119, 125, 180])
    def test_outside_windows_returns_none(self, minutes: float) -> None:
        """Test nothing fires outside the two windows."""
        assert create_focus_duration_nudge(minutes) is None


@pytest.mark.unit
class TestTaskCompletionNudge:
    """Test cases for completion milestones."""

    def test_first_task(self) -> None:
        """Test the first completion is celebrated."""
        nudge = create_task_completion_nudge(1, 10)

        assert nudge is not None
        assert nudge.message == "You started. That's the hardest part. Well done."
        assert nudge.tone is NudgeTone.CELEBRATORY

    def test_first_task_wins_over_all_done(self) -> None:
        """Test a single-task day gets the first-task message."""
        nudge = create_task_completion_nudge(1, 1)
        assert nudge is not None
        assert nudge.message.startswith("You started.")

    def test_halfway(self) -> None:
        """Test the halfway point uses integer division."""
        nudge = create_task_completion_nudge(3, 7)
        assert nudge is not None
        assert "halfway" in nudge.message

    def test_halfway_wins_over_every_third(self) -> None:
        """Test halfway is checked before the every-third rule."""
        nudge = create_task_completion_nudge(3, 6)
        assert nudge is not None
        assert "halfway" in nudge.message

    def test_halfway_needs_more_than_two_tasks(self) -> None:
        """Test two-task days have no halfway point."""
        nudge = create_task_completion_nudge(2, 2)
        assert nudge is not None
        assert nudge.message.startswith("Everything's done.")

    def test_every_third_task(self) -> None:
        """Test multiples of three are celebrated."""
        nudge = create_task_completion_nudge(6, 20)
        assert nudge is not None
        assert nudge.message == "6 tasks completed. That's meaningful progress."

    @pytest.mark.parametrize(("completed", "total"), [(0, 0), (0, 5), (2, 10), (4, 10)])
    def test_other_counts_return_none(self, completed: int, total: int) -> None:
        """Test no milestone means no nudge."""
        assert create_task_completion_nudge(completed, total) is None


@pytest.mark.unit
class TestCapacityWarningNudge:
    """Test cases for over-capacity warnings."""

    def test_within_capacity_returns_none(self) -> None:
        """Test no warning at or below the max."""
        assert create_capacity_warning_nudge(7, "full") is None

    def test_singular_excess(self) -> None:
        """Test one extra task uses the singular noun."""
        nudge = create_capacity_warning_nudge(4, "light")

        assert nudge is not None
        assert nudge.message == (
            "That's 1 more task than your light capacity. "
            "Remember: you chose light energy for a reason."
        )

    def test_plural_excess(self) -> None:
        """Test several extra tasks use the plural noun."""
        nudge = create_capacity_warning_nudge(8, "medium")

        assert nudge is not None
        assert nudge.type is NudgeType.CAPACITY_WARNING
        assert nudge.message.startswith("That's 3 more tasks than your medium capacity.")


@pytest.mark.unit
class TestBreakReminderNudge:
    """Test cases for hourly break reminders."""

    @pytest.mark.parametrize("minutes", [60, 64.9])
    def test_inside_window(self, minutes: float) -> None:
        """Test the reminder inside [60, 65)."""
        nudge = create_break_reminder_nudge(minutes)
        assert nudge is not None
        assert nudge.type is NudgeType.BREAK_REMINDER

    @pytest.mark.parametrize("minutes", [59, 65, 120])
    def test_outside_window(self, minutes: float) -> None:
        """Test nothing fires outside the window."""
        assert create_break_reminder_nudge(minutes) is None


@pytest.mark.unit
class TestEndOfDayNudge:
    """Test cases for end-of-day reflection."""

    def test_nothing_completed(self) -> None:
        """Test a day with no completions is met without judgment."""
        nudge = create_end_of_day_nudge([{"completed": False}, {}])
        assert "You didn't check off tasks" in nudge.message

    def test_everything_completed(self) -> None:
        """Test a fully completed day is celebrated."""
        nudge = create_end_of_day_nudge([{"completed": True}, {"completed": True}])
        assert "You completed everything" in nudge.message

    def test_partial_completion(self) -> None:
        """Test partial days report the counts."""
        tasks = [
            AITask("a", 10, TaskColor.BLUE, "", completed=True),
            AITask("b", 10, TaskColor.CORAL, ""),
            AITask("c", 10, TaskColor.GREEN, ""),
        ]

        nudge = create_end_of_day_nudge(tasks)

        assert "You completed 1 of 3 tasks." in nudge.message

    def test_empty_day(self) -> None:
        """Test an empty day asks how the user feels."""
        nudge = create_end_of_day_nudge([])

        assert nudge.message == (
            "Today is ending. How are you feeling about today? "
            "Tomorrow is a fresh start."
        )
        assert nudge.type is NudgeType.END_OF_DAY


@pytest.mark.unit
class TestCheckNudges:
    """Test cases for the combined nudge check."""

    def test_full_light_timeline(self) -> None:
        """Test four tasks on a light day yield full and over-capacity nudges."""
        nudges = check_nudges(NudgeContext(task_count=4, capacity="light"))

        assert [n.type for n in nudges] == [
            NudgeType.TIMELINE_FULL,
            NudgeType.CAPACITY_WARNING,
        ]
        assert "timeline is full" in nudges[0].message

    def test_empty_context(self) -> None:
        """Test no inputs means no nudges."""
        assert check_nudges(NudgeContext()) == []

    def test_fixed_order(self) -> None:
        """Test nudges are returned in evaluation order."""
        context = NudgeContext(
            task_count=6,
            completed_count=3,
            capacity="medium",
            focus_elapsed_minutes=91,
            minutes_since_last_break=61,
            is_end_of_day=True,
            tasks=[{"completed": True}],
        )

        nudges = check_nudges(context)

        assert [n.type for n in nudges] == [
            NudgeType.TIMELINE_FULL,
            NudgeType.FOCUS_DURATION,
            NudgeType.TASK_COMPLETION,
            NudgeType.CAPACITY_WARNING,
            NudgeType.BREAK_REMINDER,
            NudgeType.END_OF_DAY,
        ]

    def test_completion_needs_task_count(self) -> None:
        """Test completions alone are not enough for a milestone."""
        assert check_nudges(NudgeContext(completed_count=1)) == []

    def test_end_of_day_with_empty_task_list(self) -> None:
        """Test an empty task list still gets an end-of-day nudge."""
        nudges = check_nudges(NudgeContext(is_end_of_day=True, tasks=[]))
        assert [n.type for n in nudges] == [NudgeType.END_OF_DAY]

    def test_end_of_day_needs_tasks(self) -> None:
        """Test end of day without a task list is skipped."""
        assert check_nudges(NudgeContext(is_end_of_day=True)) == []

    def test_to_dict_flattens_enums(self) -> None:
        """Test nudges serialize with string type and tone."""
        nudge = check_nudges(NudgeContext(focus_elapsed_minutes=121))[0]

        assert nudge.to_dict() == {
            "type": "focus_duration",
            "message": (
                "You've been at this for 2 hours. Your brain needs rest. "
                "Take a real break."
            ),
            "tone": "gentle-warning",
            "show_in_app": True,
            "dismissible": False,
        }
