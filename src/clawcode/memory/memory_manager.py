"""Persistent context memory: global project summaries and per-project sessions.

Files live under the clawcode home directory:
    memory/global.json
    memory/sessions/<project-hash>.json
"""

import hashlib
import json
import logging
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from clawcode.models import GlobalMemory, ProjectSummary, SessionMemory

logger = logging.getLogger(__name__)

MEMORY_DIR = "memory"
GLOBAL_FILE = "global.json"
SESSIONS_DIR = "sessions"

MAX_LAST_TASKS = 10
MAX_RECENT_FILES = 30
MAX_AGENT_NOTES = 20
HASH_LENGTH = 16

ModelT = TypeVar("ModelT", bound=BaseModel)


def get_project_hash(project_root: str | Path) -> str:
    """Short stable hash of the resolved project path."""
    normalized = str(Path(project_root).resolve())
    return hashlib.sha256(normalized.encode("utf-8")).hexdigest()[:HASH_LENGTH]


class MemoryManager:
    """Loads and saves context memory under ``base_dir``."""

    def __init__(self, base_dir: str | Path):
        self.base_dir = Path(base_dir)
        self.memory_dir = self.base_dir / MEMORY_DIR
        self.sessions_dir = self.memory_dir / SESSIONS_DIR

    def _ensure_dirs(self) -> None:
        self.sessions_dir.mkdir(parents=True, exist_ok=True)

    @property
    def global_path(self) -> Path:
        return self.memory_dir / GLOBAL_FILE

    def session_path(self, project_root: str | Path) -> Path:
        return self.sessions_dir / f"{get_project_hash(project_root)}.json"

    def _load(self, path: Path, model: type[ModelT]) -> ModelT:
        """Load a memory file, falling back to defaults when missing or corrupt."""
        if not path.exists():
            return model()
        try:
            return model.model_validate(json.loads(path.read_text(encoding="utf-8")))
        except (OSError, json.JSONDecodeError, ValidationError) as exc:
            logger.warning("Ignoring unreadable memory file %s: %s", path, exc)
            return model()

    def _save(self, path: Path, data: BaseModel) -> None:
        self._ensure_dirs()
        path.write_text(
            json.dumps(data.model_dump(by_alias=True), indent=2),
            encoding="utf-8",
        )

    def load_global_memory(self) -> GlobalMemory:
        return self._load(self.global_path, GlobalMemory)

    def load_session_memory(self, project_root: str | Path) -> SessionMemory:
        session = self._load(self.session_path(project_root), SessionMemory)
        return SessionMemory(
            last_tasks=session.last_tasks[:MAX_LAST_TASKS],
            recent_files=session.recent_files[:MAX_RECENT_FILES],
            agent_notes=session.agent_notes[:MAX_AGENT_NOTES],
        )

    def build_memory_context(
        self,
        project_root: str,
        global_memory: GlobalMemory,
        session_memory: SessionMemory,
    ) -> str:
        """Render the memory block injected at the top of the user prompt.

        Returns:
            "" when there is nothing to say.
        """
        parts: list[str] = []
        summary = global_memory.project_summaries.get(project_root)
        if summary is not None:
            parts.append(
                f"Project context: framework={summary.framework}, "
                f"testCommand={summary.test_command}, architecture={summary.architecture}"
            )
        if session_memory.last_tasks:
            parts.append(
                "Recent tasks in this project: " + "; ".join(session_memory.last_tasks[:5])
            )
        if session_memory.recent_files:
            parts.append(
                "Recently touched files: " + ", ".join(session_memory.recent_files[:10])
            )
        if session_memory.agent_notes:
            parts.append("Agent notes: " + "; ".join(session_memory.agent_notes[:5]))
        if not parts:
            return ""
        return "\n\n[Context memory]\n" + "\n".join(parts) + "\n"

    def load_context(self, project_root: str) -> str:
        return self.build_memory_context(
            project_root,
            self.load_global_memory(),
            self.load_session_memory(project_root),
        )

    def save_session_after_run(
        self,
        project_root: str,
        task: str,
        files_touched: list[str],
        agent_notes: list[str] | None = None,
    ) -> SessionMemory:
        """Record a finished task: newest task first, files merged, notes prepended."""
        session = self.load_session_memory(project_root)

        last_tasks = [task] + [t for t in session.last_tasks if t != task]
        recent_files = list(dict.fromkeys(files_touched + session.recent_files))
        notes = session.agent_notes
        if agent_notes:
            notes = agent_notes + session.agent_notes

        updated = SessionMemory(
            last_tasks=last_tasks[:MAX_LAST_TASKS],
            recent_files=recent_files[:MAX_RECENT_FILES],
            agent_notes=notes[:MAX_AGENT_NOTES],
        )
        self._save(self.session_path(project_root), updated)
        return updated

    def save_project_summary(self, project_root: str, **fields: str) -> ProjectSummary:
        """Merge ``fields`` (framework, test_command, architecture) into the summary."""
        global_memory = self.load_global_memory()
        existing = global_memory.project_summaries.get(project_root, ProjectSummary())
        summary = existing.model_copy(update=fields)
        global_memory.project_summaries[project_root] = summary
        self._save(self.global_path, global_memory)
        return summary
