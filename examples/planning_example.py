"""Example demonstrating the planning engines without an Ollama server."""

import logging

from luma_ai.planning import (
    AITask,
    Capacity,
    NudgeContext,
    PlanningSession,
    SchedulingPreferences,
    build_schedule,
    check_nudges,
)

logging.basicConfig(level=logging.INFO)


def main() -> None:
    """Demonstrate scheduling, nudges and item compression."""
    tasks = [
        AITask.from_dict(data)
        for data in [
            {"title": "Finish slide deck", "duration_minutes": 60, "color": "blue", "reasoning": "due Friday"},
            {"title": "Pay rent", "duration_minutes": 10, "color": "orange", "reasoning": "deadline today"},
            {"title": "Walk outside", "duration_minutes": 20, "color": "purple", "reasoning": "reset"},
            {"title": "Buy groceries", "duration_minutes": 30, "color": "coral", "reasoning": "errand"},
        ]
    ]

    # Example 1: Schedule tasks
    print("=== Scheduling tasks ===")
    plan = build_schedule(tasks, SchedulingPreferences(break_duration=10))
    for index, task in enumerate(plan.tasks):
        print(f"{index + 1}. {task.title} ({task.duration_minutes} min)")
    for recommendation in plan.breaks:
        print(
            f"   Break after task {recommendation.after_task_index + 1}: "
            f"{recommendation.duration} min ({recommendation.reason})"
        )
    print(f"Estimated duration: {plan.estimated_duration} min")
    print()

    # Example 2: Check nudges
    print("=== Checking nudges ===")
    context = NudgeContext(
        task_count=len(tasks), completed_count=1, capacity=Capacity.LIGHT
    )
    for nudge in check_nudges(context):
        print(f"[{nudge.tone.value}] {nudge.message}")
    print()

    # Example 3: Compress an item list
    print("=== Compressing items ===")
    session = PlanningSession()
    session.add_items("email Sam\ndentist\ngroceries\ncall grandma\nfinish deck")
    session.select_capacity("medium")
    session.toggle_emotional(session.items[3].id)
    print(f"Visible: {[item.label for item in session.visible_items()]}")
    session.show_more()
    print(f"After show more: {[item.label for item in session.visible_items()]}")


if __name__ == "__main__":
    main()
