"""Interactive shell: a persistent ``clawcode>`` prompt over one session."""

import logging
import os
import sys
from pathlib import Path

from clawcode.agents.exceptions import AgentError
from clawcode.cli import ui
from clawcode.cli.flow import execute_task
from clawcode.config import PROVIDERS, read_config, resolve_provider_configs
from clawcode.orchestrator import SessionContext
from clawcode.orchestrator.exceptions import OrchestratorError

logger = logging.getLogger(__name__)

REPL_PROMPT = "clawcode> "

EXIT_COMMANDS = frozenset({":exit", ":quit", ":q"})

HELP_LINES = [
    ":exit            - Exit the shell (also :quit, :q)",
    ":provider [name] - Show or switch the AI provider",
    ":project <path>  - Change project directory",
    ":clear           - Clear screen",
    ":help            - Show this help",
]


class Repl:
    """Reads tasks and shell commands until :exit or end of input."""

    def __init__(
        self,
        session: SessionContext,
        model: str | None = None,
        max_files: int | None = None,
        verbose: bool = False,
        debug: bool = False,
    ):
        self.session = session
        self.model = model
        self.max_files = max_files
        self.verbose = verbose
        self.debug = debug

    def run(self) -> None:
        ui.show_header()
        print(f"Project: {self.session.root_dir}")
        while True:
            try:
                line = input(REPL_PROMPT)
            except EOFError:
                print()
                return
            except KeyboardInterrupt:
                print("\nUse :exit to quit.")
                continue

            if not self.handle_line(line):
                return

    def handle_line(self, line: str) -> bool:
        """Handle one input line.

        Returns:
            False when the shell should exit.
        """
        text = line.strip()
        if not text:
            return True
        if text.startswith(":"):
            return self._handle_command(text)
        self._run_task(text)
        return True

    def _run_task(self, task: str) -> None:
        kwargs = {"model": self.model, "verbose": self.verbose}
        if self.max_files is not None:
            kwargs["max_files"] = self.max_files
        try:
            summary = execute_task(self.session, task, **kwargs)
        except KeyboardInterrupt:
            print("\nInterrupted. Type :exit to quit.")
            return
        except (AgentError, OrchestratorError) as exc:
            ui.show_error(str(exc), self.debug)
            return
        except Exception as exc:
            logger.debug("Task failed unexpectedly", exc_info=True)
            ui.show_error(f"Unexpected error: {exc}", self.debug)
            return

        if not summary.success:
            ui.show_error(summary.error or "Task failed", self.debug)
        ui.show_summary(summary)

    def _handle_command(self, text: str) -> bool:
        command, _, argument = text.partition(" ")
        command = command.lower()
        argument = argument.strip()

        if command in EXIT_COMMANDS:
            return False
        if command == ":provider":
            self._switch_provider(argument)
        elif command == ":project":
            self._switch_project(argument)
        elif command == ":clear":
            os.system("cls" if os.name == "nt" else "clear")
            ui.show_header()
        elif command in (":help", ":h"):
            print("\nCommands:")
            for help_line in HELP_LINES:
                print(f"  {help_line}")
            print()
        else:
            print("Unknown command. Type :help")
        return True

    def _switch_provider(self, name: str) -> None:
        available = resolve_provider_configs(read_config())
        if not name:
            current = self.session.cached_provider or "(default)"
            print(f"Provider: {current}")
            print(f"Configured: {', '.join(available) or 'none'}")
            return
        name = name.lower()
        if name not in PROVIDERS:
            ui.show_error(f"Unknown provider '{name}'. Choose from: {', '.join(PROVIDERS)}")
            return
        if name not in available:
            ui.show_error(f"Provider '{name}' is not configured")
            return
        self.session.cached_provider = name
        print(f"Provider set to: {name}")

    def _switch_project(self, path: str) -> None:
        if not path:
            print(f"Project: {self.session.root_dir}")
            return
        resolved = Path(path).expanduser().resolve()
        if not resolved.is_dir():
            ui.show_error(f"'{path}' is not a valid directory.")
            return
        self.session.root_dir = str(resolved)
        print(f"Project: {self.session.root_dir}")


def run_repl(
    session: SessionContext,
    model: str | None = None,
    max_files: int | None = None,
    verbose: bool = False,
    debug: bool = False,
) -> None:
    logger.debug("Starting shell in %s", session.root_dir)
    Repl(session, model=model, max_files=max_files, verbose=verbose, debug=debug).run()
    sys.stdout.flush()
