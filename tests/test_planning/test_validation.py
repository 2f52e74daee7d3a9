"""Tests for AI response validation."""

from typing import Any

import pytest

from luma_ai.planning.validation import validate_ai_response


def valid_task(**overrides: Any) -> dict[str, Any]:
    """Build a valid task dict with optional field overrides."""
    task = {
        "title": "Call mom",
        "duration_minutes": 15,
        "color": "coral",
        "reasoning": "errand",
    }
    task.update(overrides)
    return task


@pytest.mark.unit
class TestValidResponses:
    """Test cases for responses that should be accepted."""

    def test_accepts_single_valid_task(self) -> None:
        """Test a well-formed single task validates."""
        assert validate_ai_response([valid_task()]) is True

    @pytest.mark.parametrize("color", ["blue", "coral", "green", "orange", "purple"])
    def test_accepts_every_allowed_color(self, color: str) -> None:
        """Test all five colors are accepted."""
        assert validate_ai_response([valid_task(color=color)]) is True

    def test_accepts_float_duration(self) -> None:
        """Test fractional durations are numbers too."""
        assert validate_ai_response([valid_task(duration_minutes=12.5)]) is True

    def test_accepts_empty_reasoning(self) -> None:
        """Test reasoning content is unconstrained."""
        assert validate_ai_response([valid_task(reasoning="")]) is True

    def test_accepts_empty_list(self) -> None:
        """Test an empty list has no invalid element."""
        assert validate_ai_response([]) is True

    def test_ignores_extra_fields(self) -> None:
        """Test unknown fields do not invalidate a task."""
        assert validate_ai_response([valid_task(priority="high")]) is True


@pytest.mark.unit
class TestInvalidResponses:
    """Test cases for responses that should be rejected."""

    @pytest.mark.parametrize(
        "candidate",
        [None, "[]", 42, {"title": "x"}, (valid_task(),)],
    )
    def test_rejects_non_list(self, candidate: Any) -> None:
        """Test anything but a list is rejected."""
        assert validate_ai_response(candidate) is False

    def test_rejects_empty_title(self) -> None:
        """Test an empty title counts as missing."""
        task = {"title": "", "duration_minutes": 10, "color": "blue", "reasoning": "x"}
        assert validate_ai_response([task]) is False

    def test_rejects_missing_title(self) -> None:
        """Test a task without title is rejected."""
        task = valid_task()
        del task["title"]
        assert validate_ai_response([task]) is False

    @pytest.mark.parametrize("duration", [0, -5, "15", None, True, float("nan")])
    def test_rejects_non_positive_or_non_number_duration(self, duration: Any) -> None:
        """Test durations must be positive numbers."""
        assert validate_ai_response([valid_task(duration_minutes=duration)]) is False

    @pytest.mark.parametrize("color", ["red", "Blue", "", None, 3])
    def test_rejects_unknown_color(self, color: Any) -> None:
        """Test colors must be one of the five exact literals."""
        assert validate_ai_response([valid_task(color=color)]) is False

    @pytest.mark.parametrize("reasoning", [None, 5, ["why"]])
    def test_rejects_non_string_reasoning(self, reasoning: Any) -> None:
        """Test reasoning must be a string."""
        assert validate_ai_response([valid_task(reasoning=reasoning)]) is False

    def test_rejects_missing_reasoning(self) -> None:
        """Test a task without reasoning is rejected."""
        task = valid_task()
        del task["reasoning"]
        assert validate_ai_response([task]) is False

    def test_rejects_non_mapping_element(self) -> None:
        """Test elements must be objects."""
        assert validate_ai_response([valid_task(), "Call mom"]) is False

    def test_single_bad_element_rejects_batch(self) -> None:
        """Test one invalid task invalidates the whole response."""
        tasks = [valid_task(), valid_task(title="Write report"), valid_task(color="red")]
        assert validate_ai_response(tasks) is False
