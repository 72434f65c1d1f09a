"""Tests for the interactive shell."""

from unittest.mock import patch

import pytest

from clawcode.agents.exceptions import LLMResponseError
from clawcode.cli.repl import Repl
from clawcode.models import TaskSummary
from clawcode.orchestrator import SessionContext


@pytest.fixture
def repl(tmp_path):
    return Repl(SessionContext(str(tmp_path)))


def _feed(monkeypatch, lines):
    remaining = list(lines)

    def fake_input(prompt=""):
        if not remaining:
            raise EOFError
        item = remaining.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item

    monkeypatch.setattr("builtins.input", fake_input)


@pytest.mark.parametrize("command", [":exit", ":quit", ":q", ":EXIT"])
def test_exit_commands(repl, command):
    assert repl.handle_line(command) is False


def test_blank_line_is_ignored(repl):
    assert repl.handle_line("   ") is True


def test_help_lists_commands(repl, capsys):
    repl.handle_line(":help")
    out = capsys.readouterr().out
    assert ":provider [name]" in out
    assert ":project <path>" in out


def test_unknown_command(repl, capsys):
    repl.handle_line(":bogus")
    assert "Unknown command" in capsys.readouterr().out


def test_switch_provider(repl, monkeypatch, capsys):
    monkeypatch.setenv("OPENAI_API_KEY", "sk")
    repl.handle_line(":provider openai")
    assert repl.session.cached_provider == "openai"
    assert "Provider set to: openai" in capsys.readouterr().out


def test_switch_to_unconfigured_provider(repl, capsys):
    repl.handle_line(":provider groq")
    assert repl.session.cached_provider is None
    assert "not configured" in capsys.readouterr().err


def test_show_provider(repl, monkeypatch, capsys):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant")
    repl.handle_line(":provider")
    out = capsys.readouterr().out
    assert "Configured: anthropic" in out


def test_switch_project(repl, tmp_path):
    other = tmp_path / "other"
    other.mkdir()
    repl.handle_line(f":project {other}")
    assert repl.session.root_dir == str(other.resolve())


def test_switch_project_invalid(repl, tmp_path, capsys):
    before = repl.session.root_dir
    repl.handle_line(f":project {tmp_path / 'missing'}")
    assert repl.session.root_dir == before
    assert "not a valid directory" in capsys.readouterr().err


@patch("clawcode.cli.repl.execute_task")
def test_task_runs_in_session(mock_execute, repl, capsys):
    mock_execute.return_value = TaskSummary(task="fix", provider="groq", success=True)
    repl.handle_line("fix the bug")
    assert mock_execute.call_args.args == (repl.session, "fix the bug")
    assert "Summary" in capsys.readouterr().out


@patch("clawcode.cli.repl.execute_task")
def test_task_error_keeps_shell_running(mock_execute, repl, capsys):
    mock_execute.side_effect = LLMResponseError("Empty response from Groq")
    assert repl.handle_line("fix") is True
    assert "Empty response from Groq" in capsys.readouterr().err


@patch("clawcode.cli.repl.execute_task")
def test_unexpected_task_error_keeps_shell_running(mock_execute, repl, capsys):
    mock_execute.side_effect = UnicodeEncodeError("utf-8", "\ud800", 0, 1, "surrogates not allowed")
    assert repl.handle_line("fix") is True
    assert "Unexpected error:" in capsys.readouterr().err
    assert repl.handle_line(":exit") is False


@patch("clawcode.cli.repl.execute_task")
def test_interrupted_task_returns_to_prompt(mock_execute, repl, capsys):
    mock_execute.side_effect = KeyboardInterrupt
    assert repl.handle_line("long task") is True
    assert "Interrupted" in capsys.readouterr().out


def test_run_loop_until_exit(repl, monkeypatch, capsys):
    _feed(monkeypatch, [":help", KeyboardInterrupt(), ":exit", "never read"])
    repl.run()
    out = capsys.readouterr().out
    assert "Use :exit to quit." in out


def test_run_loop_ends_on_eof(repl, monkeypatch):
    _feed(monkeypatch, [])
    repl.run()
