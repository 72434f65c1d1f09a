"""CLI entry point for clawcode."""
import argparse
from dotenv import load_dotenv
import logging
import sys
import traceback
from pathlib import Path

from clawcode import __version__
from clawcode.agents.exceptions import AgentError
from clawcode.agents.scanner import DEFAULT_MAX_FILES
from clawcode.cli import ui
from clawcode.cli.flow import execute_task
from clawcode.cli.repl import run_repl
from clawcode.config import PROVIDERS
from clawcode.orchestrator.exceptions import OrchestratorError
from clawcode.orchestrator.session import SessionContext
from clawcode.utils.logging_utils import configure_logging

load_dotenv()

# Exit codes
EXIT_SUCCESS = 0
EXIT_INVALID_INPUT = 1
EXIT_AGENT_ERROR = 2
EXIT_TASK_FAILED = 3
EXIT_UNEXPECTED = 5
EXIT_KEYBOARD_INTERRUPT = 130

SHELL_COMMAND = "shell"


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    parser = argparse.ArgumentParser(
        prog="clawcode",
        description="Plan and apply code edits with an LLM from your terminal",
    )
    parser.add_argument(
        "task",
        type=str,
        nargs="?",
        default=None,
        help=f"Task to run, or '{SHELL_COMMAND}' for the interactive shell",
    )
    parser.add_argument(
        "--dir",
        type=str,
        default=".",
        help="Project root directory (default: current directory)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show the plan and diffs without writing files or running commands",
    )
    parser.add_argument(
        "--yes",
        "-y",
        action="store_true",
        help="Apply patches and run commands without asking",
    )
    parser.add_argument(
        "--provider",
        type=str,
        default=None,
        choices=PROVIDERS,
        help="LLM provider (default: session choice, then config default)",
    )
    parser.add_argument("--model", type=str, default=None, help="Model override for the provider")
    parser.add_argument(
        "--max-files",
        type=int,
        default=DEFAULT_MAX_FILES,
        help=f"Maximum files to scan (default: {DEFAULT_MAX_FILES})",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose output")
    parser.add_argument("--debug", action="store_true", help="Debug logging and full tracebacks")
    parser.add_argument("--version", action="version", version=f"clawcode {__version__}")
    return parser


def validate_project_dir(raw_path: str) -> str:
    """Validate and resolve the project directory.

    Raises:
        SystemExit: If path is not a valid directory.
    """
    resolved = Path(raw_path).expanduser().resolve()
    if not resolved.is_dir():
        print(f"Error: '{raw_path}' is not a valid directory.", file=sys.stderr)
        raise SystemExit(EXIT_INVALID_INPUT)
    return str(resolved)


def _log_level(args: argparse.Namespace) -> int:
    if args.debug:
        return logging.DEBUG
    if args.verbose:
        return logging.INFO
    return logging.WARNING


def _read_task() -> str:
    try:
        return input("Task: ").strip()
    except EOFError:
        return ""


def _handle_error(label: str, exc: BaseException, debug: bool, exit_code: int) -> int:
    """Print error message to stderr and return the exit code."""
    print(f"{label}: {exc}", file=sys.stderr)
    if debug:
        traceback.print_exc(file=sys.stderr)
    return exit_code


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code integer.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(_log_level(args))

    if args.max_files < 1:
        print("Error: --max-files must be at least 1.", file=sys.stderr)
        return EXIT_INVALID_INPUT

    try:
        root_dir = validate_project_dir(args.dir)
    except SystemExit as exc:
        return exc.code

    session = SessionContext(root_dir=root_dir, cached_provider=args.provider)

    try:
        if args.task == SHELL_COMMAND:
            run_repl(
                session,
                model=args.model,
                max_files=args.max_files,
                verbose=args.verbose,
                debug=args.debug,
            )
            return EXIT_SUCCESS

        task = (args.task or "").strip() or _read_task()
        if not task:
            print("Error: no task given.", file=sys.stderr)
            return EXIT_INVALID_INPUT

        summary = execute_task(
            session,
            task,
            dry_run=args.dry_run,
            auto_approve=args.yes,
            provider=args.provider,
            model=args.model,
            max_files=args.max_files,
            verbose=args.verbose,
        )
        if not summary.success:
            ui.show_error(summary.error or "Task failed", args.debug)
        ui.show_summary(summary)
        return EXIT_SUCCESS if summary.success else EXIT_TASK_FAILED

    except AgentError as exc:
        return _handle_error("Agent error", exc, args.debug, EXIT_AGENT_ERROR)

    except OrchestratorError as exc:
        return _handle_error("Orchestrator error", exc, args.debug, EXIT_AGENT_ERROR)

    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_KEYBOARD_INTERRUPT

    except Exception as exc:
        return _handle_error("Unexpected error", exc, args.debug, EXIT_UNEXPECTED)


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
