"""CLI entrypoint for writing, listing and deleting diary entries."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from gentle_diary import flow  # noqa: E402
from gentle_diary.config import AppConfig  # noqa: E402
from gentle_diary.errors import DiaryError  # noqa: E402
from gentle_diary.pipeline import DiaryPipeline  # noqa: E402
from gentle_diary.schemas import Mood  # noqa: E402


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Gentle two-step mood and reflection diary.")
    parser.add_argument(
        "--config",
        type=str,
        default=str(PROJECT_ROOT / "config.yaml"),
        help="Path to YAML config.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    new = sub.add_parser("new", help="Write a new entry.")
    new.add_argument("--mood", required=True, choices=[m.value for m in Mood])
    new.add_argument("--reflection", required=True, help="How did today go?")

    listing = sub.add_parser("list", help="Show saved entries, newest first.")
    listing.add_argument("--expand", action="append", default=[], help="Entry id to show in full (repeatable).")

    show_one = sub.add_parser("show", help="Show one entry in full.")
    show_one.add_argument("entry_id")

    delete = sub.add_parser("delete", help="Delete an entry by id.")
    delete.add_argument("entry_id")
    delete.add_argument("--yes", action="store_true", help="Skip the confirmation prompt.")
    return parser.parse_args()


def _print_notice(message: str) -> None:
    print(f"[notice] {message}")


def cmd_new(pipeline: DiaryPipeline, args: argparse.Namespace) -> int:
    state = flow.ViewState()
    state = flow.select_mood(state, Mood(args.mood))
    state = flow.go_to_reflection(state)
    state = flow.update_reflection(state, args.reflection)

    limit = pipeline.config.ui.max_reflection_display_length
    if flow.over_soft_limit(state, limit):
        print(f"Note: {flow.char_count(state)}/{limit} characters, longer than suggested.")
    if not flow.can_save(state):
        print("Please write a short reflection before saving.")
        return 1

    state = pipeline.submit(state)
    if state.step is not flow.Step.SHOWING_ENCOURAGEMENT:
        return 1
    print(state.encouragement)
    return 0


def cmd_list(pipeline: DiaryPipeline, args: argparse.Namespace) -> int:
    state = flow.ViewState()
    for entry_id in args.expand:
        state = flow.toggle_expanded(state, entry_id)

    views = pipeline.entry_views(state)
    if not views:
        print("No entries yet. Your first reflection will appear here.")
        return 0
    for view in views:
        print(f"[{view.id}] {view.date_label}  {view.mood_emoji} {view.mood_label}")
        print(f"  {view.reflection}")
        print(f"  > {view.encouragement}")
    return 0


def cmd_show(pipeline: DiaryPipeline, args: argparse.Namespace) -> int:
    entry = pipeline.get_entry(args.entry_id)
    if entry is None:
        print("No entry with that id.")
        return 1
    emoji, label = flow.mood_label(entry.mood)
    print(f"[{entry.id}] {flow.format_entry_date(entry.date)}  {emoji} {label}")
    print(f"  {entry.reflection}")
    print(f"  > {entry.encouragement}")
    return 0


def cmd_delete(pipeline: DiaryPipeline, args: argparse.Namespace) -> int:
    if not args.yes:
        answer = input("Are you sure you want to delete this entry? [y/N] ")
        if answer.strip().lower() not in ("y", "yes"):
            return 0
    if pipeline.delete_entry(args.entry_id):
        print("Deleted.")
    else:
        print("No entry with that id.")
    return 0


COMMANDS = {"new": cmd_new, "list": cmd_list, "show": cmd_show, "delete": cmd_delete}


def main() -> None:
    args = parse_args()
    config = AppConfig.from_yaml(args.config)
    logging.basicConfig(level=config.log_level, format="%(levelname)s %(name)s: %(message)s")

    pipeline = DiaryPipeline(config, notify=_print_notice)
    try:
        code = COMMANDS[args.command](pipeline, args)
    except DiaryError as exc:
        print(f"Something went wrong: {exc}")
        code = 1
    finally:
        pipeline.close()
    sys.exit(code)


if __name__ == "__main__":
    main()
