"""Command-line interface for brain dump planning."""

import argparse
import asyncio
import logging
import sys

from .planning.compression import CompressionEngine
from .planning.config import (
    DEFAULT_DATABASE_PATH,
    DEFAULT_OLLAMA_BASE_URL,
    DEFAULT_OLLAMA_MODEL,
)
from .planning.item_compression import PlanningSession
from .planning.models import AITask, Capacity, ItemCapacity
from .planning.ollama_backend import OllamaBackend
from .planning.scheduling import build_schedule
from .planning.session_store import SessionStore

CAPACITY_CHOICES = sorted({c.value for c in Capacity} | {c.value for c in ItemCapacity})


class PlannerCLI:
    """Command-line interface for the planning engine."""

    def __init__(self, engine: CompressionEngine) -> None:
        """
        Initialize the CLI.

        Args:
            engine: Compression engine used for AI-backed runs
        """
        self._engine = engine

    async def compress(
        self, text: str, capacity: str | None = None, schedule: bool = False
    ) -> bool:
        """
        Compress text into tasks and print them.

        Args:
            text: Brain dump text
            capacity: Optional capacity (light, medium, full)
            schedule: Whether to print the optimized schedule instead

        Returns:
            True if compression succeeded
        """
        print("🧠 Compressing your brain dump...")
        result = await self._engine.compress(text, capacity)

        if not result.success or result.tasks is None:
            print(f"❌ {result.error}")
            return False

        if schedule:
            self._print_schedule(result.tasks)
        else:
            print(f"✅ {len(result.tasks)} tasks:")
            for index, task in enumerate(result.tasks, start=1):
                self._print_task(index, task)
        return True

    async def stream(self, text: str, capacity: str | None = None) -> bool:
        """Write the raw completion to stdout as it arrives."""
        try:
            async for chunk in self._engine.compress_stream(text, capacity):
                sys.stdout.write(chunk.decode("utf-8", errors="replace"))
                sys.stdout.flush()
        except Exception as e:
            print(f"\n❌ Streaming failed: {e}")
            return False
        print()
        return True

    def _print_task(self, index: int, task: AITask) -> None:
        print(
            f"[{index}] {task.title} ({task.duration_minutes:g} min, {task.color.value})"
        )
        if task.reasoning:
            print(f"    {task.reasoning}")

    def _print_schedule(self, tasks: list[AITask]) -> None:
        plan = build_schedule(tasks)
        breaks_by_index: dict[int, list[str]] = {}
        for b in plan.breaks:
            breaks_by_index.setdefault(b.after_task_index, []).append(
                f"☕ {b.duration} min break - {b.reason}"
            )

        print(f"📅 Schedule ({plan.estimated_duration:g} min total):")
        for index, task in enumerate(plan.tasks):
            self._print_task(index + 1, task)
            for line in breaks_by_index.get(index, []):
                print(f"    {line}")


async def run_items(
    store: SessionStore,
    text: str | None,
    capacity: str | None,
    show_more: bool = False,
    show_less: bool = False,
    pin: int | None = None,
) -> bool:
    """
    Run the deterministic item flow against the stored session.

    Args:
        store: Session store holding the latest session
        text: New brain dump; None keeps the stored items
        capacity: Capacity (low, medium, high); None keeps the stored one
        show_more: Reveal one more item
        show_less: Hide the extra item again
        pin: 1-based index of the item to pin or unpin as emotional

    Returns:
        True if the session was shown
    """
    await store.initialize()
    try:
        session = await store.load_latest() or PlanningSession()

        if text:
            session.add_items(text)
        if capacity:
            session.select_capacity(capacity)
        if pin is not None:
            if not 1 <= pin <= len(session.items):
                print(f"❌ No item number {pin}")
                return False
            session.toggle_emotional(session.items[pin - 1].id)
        if show_more:
            session.show_more()
        if show_less:
            session.show_less()

        await store.save(session)

        if session.capacity is None:
            print("⚡ Pick a capacity (low, medium, high) to see your items.")
            return True

        for item in session.visible_items():
            marker = "💙" if item.id == session.emotional_id else "•"
            print(f"{marker} {item.label}")

        hidden = len(session.items) - len(session.visible_items())
        if hidden > 0:
            print(f"   ({hidden} more waiting)")
        return True
    finally:
        await store.close()


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        description="Luma Planner CLI - Turn a brain dump into a doable day",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  luma-ai "email Sam, dentist, groceries, finish deck"     # Compress with AI
  luma-ai -c light "..."                                    # Respect light capacity
  luma-ai --schedule -c full --file dump.txt                # Show schedule with breaks
  luma-ai --stream "..."                                    # Stream raw AI output
  luma-ai --items -c low --file dump.txt                    # One item per line, no AI
  luma-ai --items --more                                    # Reveal one more item
  luma-ai --items --pin 4                                   # Keep item 4 always visible
        """,
    )

    parser.add_argument(
        "text",
        nargs="?",
        default=None,
        help="Brain dump text (reads --file or stdin when omitted)",
    )

    parser.add_argument(
        "--file",
        "-f",
        type=str,
        default=None,
        metavar="PATH",
        help="Read the brain dump from a file",
    )

    parser.add_argument(
        "--capacity",
        "-c",
        choices=CAPACITY_CHOICES,
        default=None,
        help="Energy today: light/medium/full with AI, low/medium/high with --items",
    )

    parser.add_argument(
        "--schedule",
        action="store_true",
        help="Order tasks, add breaks and estimate total time",
    )

    parser.add_argument(
        "--stream",
        action="store_true",
        help="Stream the raw AI response without validation",
    )

    parser.add_argument(
        "--items",
        action="store_true",
        help="Use the item list flow (one item per line, no AI)",
    )

    parser.add_argument(
        "--more",
        action="store_true",
        help="With --items, show one extra item",
    )

    parser.add_argument(
        "--less",
        action="store_true",
        help="With --items, hide the extra item",
    )

    parser.add_argument(
        "--pin",
        type=int,
        default=None,
        metavar="N",
        help="With --items, pin or unpin item N as the one that matters",
    )

    parser.add_argument(
        "--model",
        type=str,
        default=DEFAULT_OLLAMA_MODEL,
        help=f"Ollama model (default: {DEFAULT_OLLAMA_MODEL})",
    )

    parser.add_argument(
        "--host",
        type=str,
        default=DEFAULT_OLLAMA_BASE_URL,
        help=f"Ollama server URL (default: {DEFAULT_OLLAMA_BASE_URL})",
    )

    parser.add_argument(
        "--database",
        type=str,
        default=DEFAULT_DATABASE_PATH,
        metavar="PATH",
        help=f"Session database for --items (default: {DEFAULT_DATABASE_PATH})",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging and debug information",
    )

    return parser


def read_input(args: argparse.Namespace) -> str | None:
    """Get the brain dump from the argument, a file or piped stdin."""
    if args.text:
        return args.text
    if args.file:
        with open(args.file, encoding="utf-8") as f:
            return f.read()
    if not sys.stdin.isatty():
        return sys.stdin.read()
    return None


def handle_arguments(args: argparse.Namespace) -> tuple[bool, bool]:
    """
    Handle parsed command-line arguments.

    Args:
        args: Parsed arguments from argparse

    Returns:
        Tuple of (success, should_continue):
        - success: True if the arguments are usable, False otherwise
        - should_continue: True if execution should continue
    """
    if args.verbose:
        logging.basicConfig(
            level="DEBUG", format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        logging.getLogger("httpx").setLevel(logging.INFO)
    else:
        logging.basicConfig(
            level="WARNING", format="%(asctime)s - %(levelname)s - %(message)s"
        )

    if args.items:
        if args.capacity and args.capacity not in {c.value for c in ItemCapacity}:
            print(f"❌ --items takes low, medium or high, not {args.capacity}")
            return False, False
        if args.stream or args.schedule:
            print("❌ --stream and --schedule need AI compression, drop --items")
            return False, False
        return True, True

    if args.capacity and args.capacity not in {c.value for c in Capacity}:
        print(f"❌ AI compression takes light, medium or full, not {args.capacity}")
        return False, False

    if args.more or args.less or args.pin is not None:
        print("❌ --more, --less and --pin only apply with --items")
        return False, False

    return True, True


async def main(args: argparse.Namespace, text: str | None) -> bool:
    """Run the mode selected by the arguments."""
    if args.items:
        return await run_items(
            SessionStore(args.database),
            text,
            args.capacity,
            show_more=args.more,
            show_less=args.less,
            pin=args.pin,
        )

    if not text or not text.strip():
        print("❌ Nothing to plan. Pass text, --file or pipe it in.")
        return False

    cli = PlannerCLI(CompressionEngine(OllamaBackend(model=args.model, base_url=args.host)))
    if args.stream:
        return await cli.stream(text, args.capacity)
    return await cli.compress(text, args.capacity, schedule=args.schedule)


def cli_entry_with_args() -> None:
    """CLI entry point with argument parsing."""
    parser = create_argument_parser()

    try:
        args = parser.parse_args()

        success, should_continue = handle_arguments(args)

        if not success:
            sys.exit(1)

        if not should_continue:
            sys.exit(0)

        text = read_input(args)
        if not asyncio.run(main(args, text)):
            sys.exit(1)

    except KeyboardInterrupt:
        pass  # Graceful shutdown
    except SystemExit:
        # Re-raise SystemExit (from argparse help, etc.)
        raise
    except Exception as e:
        logging.error(f"Unexpected error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    cli_entry_with_args()
