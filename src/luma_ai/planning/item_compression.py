"""Deterministic compression of a user-entered item list.

No AI is involved: the visible list is a prefix of the items whose length is
set by the capacity and a one-step override. A user can pin one "emotional"
item that must always be visible.
"""

import logging
import time
from dataclasses import dataclass, field

from .capacity import item_capacity_bounds
from .config import ITEM_OVERRIDE_STEP
from .models import Item, ItemCapacity

logger = logging.getLogger(__name__)


def compress_items(
    capacity: ItemCapacity | str, items: list[Item], override: int
) -> list[Item]:
    """
    Slice items down to the capacity's visible count.

    Args:
        capacity: Capacity label (low, medium, high)
        items: Full item list in entry order
        override: Step applied on top of the base count

    Returns:
        The first `clamp(base + override, base, base + 1)` items
    """
    base, ceiling = item_capacity_bounds(capacity)
    limit = min(ceiling, max(base, base + override))
    return items[:limit]


def pin_emotional_item(
    visible: list[Item], items: list[Item], emotional_id: str | None
) -> list[Item]:
    """
    Make sure the emotional item is in the visible list.

    When it is hidden, it is placed first and the last visible item is
    dropped so the visible length is unchanged.

    Args:
        visible: Compressed item list
        items: Full item list
        emotional_id: ID of the pinned item, if any

    Returns:
        Visible list containing the pinned item
    """
    if not emotional_id:
        return visible

    emotional = next((item for item in items if item.id == emotional_id), None)
    if emotional is None or any(item.id == emotional.id for item in visible):
        return visible

    return [emotional, *visible[: len(visible) - 1]]


def parse_item_lines(text: str) -> list[Item]:
    """
    Build items from a brain dump, one per non-blank line.

    IDs are "<epoch milliseconds>-<line index>" where the index counts
    only kept lines.
    """
    stamp = int(time.time() * 1000)
    labels = [line.strip() for line in text.split("\n")]
    return [
        Item(id=f"{stamp}-{index}", label=label)
        for index, label in enumerate(label for label in labels if label)
    ]


@dataclass
class PlanningSession:
    """State of the deterministic planning flow."""

    items: list[Item] = field(default_factory=list)
    capacity: ItemCapacity | None = None
    override: int = 0
    emotional_id: str | None = None
    session_id: str | None = None

    def add_items(self, text: str) -> list[Item]:
        """Replace the item list with the lines of a new brain dump."""
        self.items = parse_item_lines(text)
        logger.debug(f"Session now holds {len(self.items)} items")
        return self.items

    def select_capacity(self, capacity: ItemCapacity | str) -> None:
        """Choose a capacity, clearing the override and the pinned item."""
        self.capacity = ItemCapacity(capacity)
        self.override = 0
        self.emotional_id = None

    def toggle_emotional(self, item_id: str) -> None:
        """Pin an item as emotional, or unpin it if already pinned."""
        self.emotional_id = None if item_id == self.emotional_id else item_id

    def visible_items(self) -> list[Item]:
        """Compressed items with the emotional item pinned."""
        if self.capacity is None:
            return []

        visible = compress_items(self.capacity, self.items, self.override)
        return pin_emotional_item(visible, self.items, self.emotional_id)

    @property
    def can_show_more(self) -> bool:
        return (
            self.capacity is not None
            and self.override < ITEM_OVERRIDE_STEP
            and len(self.visible_items()) < len(self.items)
        )

    @property
    def can_show_less(self) -> bool:
        return self.override > 0 and (
            not self.emotional_id or len(self.visible_items()) > 1
        )

    def show_more(self) -> None:
        self.override = min(self.override + 1, ITEM_OVERRIDE_STEP)

    def show_less(self) -> None:
        if self.emotional_id and self.override <= 0:
            return
        self.override = max(self.override - 1, 0)
