import logging
from unittest.mock import MagicMock

import pytest

from clawcode.models import AgentPlan, PatchOperation, ScannedFile

PROVIDER_ENV_VARS = (
    "AZURE_OPENAI_ENDPOINT",
    "AZURE_OPENAI_API_KEY",
    "AZURE_OPENAI_DEPLOYMENT",
    "GROQ_API_KEY",
    "GROQ_MODEL",
    "GEMINI_API_KEY",
    "GEMINI_MODEL",
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "ANTHROPIC_API_KEY",
    "ANTHROPIC_MODEL",
)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep tests away from the real ~/.clawcode and provider credentials."""
    home = tmp_path / "clawcode-home"
    monkeypatch.setenv("CLAWCODE_HOME", str(home))
    for var in PROVIDER_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    return home


@pytest.fixture
def project_dir(tmp_path):
    root = tmp_path / "project"
    (root / "src").mkdir(parents=True)
    (root / "src" / "app.py").write_text("def greet():\n    return 'hello world'\n")
    (root / "README.md").write_text("# Demo\n")
    return root


def make_plan(*patches: PatchOperation, commands: list[str] | None = None, **fields) -> AgentPlan:
    return AgentPlan(
        analysis=fields.pop("analysis", "Test analysis"),
        patches=list(patches),
        commands=commands or [],
        **fields,
    )


def make_patch(file: str, find: str, replace: str) -> PatchOperation:
    return PatchOperation(file=file, find=find, replace=replace)


def make_scanned(relative_path: str, content: str, root: str = "/tmp/project") -> ScannedFile:
    return ScannedFile(
        path=f"{root}/{relative_path}",
        relative_path=relative_path,
        content=content,
        size=len(content.encode("utf-8")),
    )


@pytest.fixture
def mock_planner():
    planner = MagicMock()
    planner.get_structured_plan.return_value = make_plan()
    return planner


@pytest.fixture(autouse=True)
def reset_clawcode_logger():
    """Undo configure_logging() so caplog keeps seeing clawcode records."""
    yield
    logger = logging.getLogger("clawcode")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    if hasattr(logger, "_clawcode_configured"):
        delattr(logger, "_clawcode_configured")
