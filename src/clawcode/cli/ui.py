"""Plain-text terminal rendering for task progress and results."""

import sys
from typing import Callable

from clawcode.models import FileToEdit, TaskSummary
from clawcode.orchestrator.events import AgentEmitter, EventType

SEPARATOR = "=" * 60


def show_header() -> None:
    print("clawcode - plan, patch and run from your terminal")
    print(SEPARATOR)


def show_section(title: str) -> None:
    print(f"\n--- {title} ---")


def show_analysis(analysis: str) -> None:
    show_section("Analysis")
    print(analysis or "(no analysis)")


def show_files_to_edit(files: list[FileToEdit]) -> None:
    if not files:
        return
    show_section("Files to edit")
    for file in files:
        print(f"  {file.path}: {file.reason}")


def show_commands(commands: list[str]) -> None:
    if not commands:
        return
    show_section("Commands")
    for command in commands:
        print(f"  {command}")


def show_patch_warning(file: str, error: str | None) -> None:
    print(f"  warning: {file}: {error or 'not applied'}")


def show_diffs(diffs: list[str]) -> None:
    if not diffs:
        return
    show_section("Diff (before applying)")
    for block in diffs:
        print(block)
        print()


def show_summary(summary: TaskSummary) -> None:
    print(f"\n{SEPARATOR}")
    print("Summary")
    print(f"  Provider: {summary.provider or 'n/a'}")
    files = ", ".join(summary.files_modified) if summary.files_modified else "none"
    print(f"  Files modified: {files}")
    if summary.message:
        print(f"  Result: {summary.message}")
    print(SEPARATOR)


def show_error(message: str, debug: bool = False) -> None:
    """Print an error; only the first line unless debugging."""
    content = message if debug else message.split("\n")[0]
    print(f"Error: {content}", file=sys.stderr)


def confirm(question: str, default: bool) -> bool:
    """Ask a yes/no question on stdin. Empty input picks ``default``."""
    hint = "[Y/n]" if default else "[y/N]"
    try:
        answer = input(f"{question} {hint} ").strip().lower()
    except EOFError:
        return default
    if not answer:
        return default
    return answer in ("y", "yes")


def attach_console(emitter: AgentEmitter, verbose: bool = False) -> Callable[[], None]:
    """Render task events on stdout.

    Returns:
        Callable that detaches every listener registered here.
    """

    def on_plan(payload: dict) -> None:
        show_analysis(payload.get("analysis", ""))
        show_files_to_edit(payload.get("files_to_edit", []))
        show_commands(payload.get("commands", []))

    def on_patch_failed(payload: dict) -> None:
        show_patch_warning(payload.get("file", ""), payload.get("error"))

    handlers: list[tuple[EventType, Callable[[dict], None]]] = [
        (EventType.PLANNING, lambda payload: print("Planning...")),
        (EventType.PLAN, on_plan),
        (EventType.PATCH_FAILED, on_patch_failed),
        (EventType.DIFFS, lambda payload: show_diffs(payload.get("diffs", []))),
        (EventType.WRITE_FILE, lambda payload: print(f"  wrote {payload['path']}")),
        (EventType.RUN_COMMAND, lambda payload: print(f"\n$ {payload['command']}")),
    ]
    if verbose:
        handlers.append(
            (EventType.READ_FILE, lambda payload: print(f"  reading {payload['path']}"))
        )

    unsubscribers = [emitter.on(event, handler) for event, handler in handlers]

    def detach() -> None:
        for unsubscribe in unsubscribers:
            unsubscribe()

    return detach
