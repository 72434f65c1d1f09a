"""Project scanner: lists text files and reads the ones small enough for context."""

import fnmatch
import logging
from collections.abc import Iterable
from pathlib import Path

from clawcode.agents.exceptions import ScanError
from clawcode.models import ScannedFile, ScanResult
from clawcode.utils.backup import BACKUP_DIR

logger = logging.getLogger(__name__)

DEFAULT_MAX_FILES = 500
DEFAULT_MAX_FILE_SIZE = 200_000  # Bytes; larger files are listed but not read

DEFAULT_IGNORE = [
    "node_modules",
    ".git",
    "dist",
    "build",
    ".next",
    ".nuxt",
    "coverage",
    "*.log",
    ".env",
    ".env.*",
    "*.min.js",
    "*.min.css",
    ".DS_Store",
    BACKUP_DIR,
]

TEXT_EXTENSIONS = frozenset({
    ".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs",
    ".json", ".md", ".html", ".css", ".scss", ".less",
    ".py", ".rb", ".go", ".rs", ".java", ".kt", ".swift",
    ".sql", ".sh", ".bash", ".yaml", ".yml", ".toml", ".ini",
    ".xml", ".svg", ".graphql", ".gql", ".vue", ".svelte",
})


def is_text_file(name: str) -> bool:
    return Path(name).suffix.lower() in TEXT_EXTENSIONS or name.endswith("Dockerfile")


def read_gitignore(root_dir: Path) -> list[str]:
    """Return usable patterns from the project's .gitignore (empty if absent)."""
    try:
        raw = (root_dir / ".gitignore").read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return []
    patterns = []
    for line in raw.splitlines():
        line = line.strip()
        # Negations are not supported by the simple matcher
        if not line or line.startswith("#") or line.startswith("!"):
            continue
        patterns.append(line.strip("/"))
    return patterns


class ProjectScanner:
    """Lists and reads text files under a project root."""

    def __init__(
        self,
        max_files: int = DEFAULT_MAX_FILES,
        max_file_size: int = DEFAULT_MAX_FILE_SIZE,
        exclude_patterns: list[str] | None = None,
    ):
        """Initialize the scanner.

        Args:
            max_files: Stop listing after this many files.
            max_file_size: Files larger than this (bytes) are not read.
            exclude_patterns: Glob patterns matched against each path
                component and the full relative path.
        """
        self.max_files = max_files
        self.max_file_size = max_file_size
        self.exclude_patterns = list(exclude_patterns or DEFAULT_IGNORE)

    def scan(self, root_dir: str, custom_ignore: Iterable[str] = ()) -> ScanResult:
        """List project files and read those within the size cap.

        Args:
            root_dir: Project root.
            custom_ignore: Extra glob patterns for this scan.

        Returns:
            ScanResult with the sorted file listing and the files read.

        Raises:
            ScanError: If root_dir is not a directory.
        """
        root = Path(root_dir).resolve()
        if not root.is_dir():
            raise ScanError(f"Project root is not a directory: {root_dir}")

        patterns = self.exclude_patterns + read_gitignore(root) + list(custom_ignore)
        file_list = self._discover_files(root, patterns)

        files: list[ScannedFile] = []
        for relative_path in file_list:
            scanned = self._read_file(root, relative_path)
            if scanned is not None:
                files.append(scanned)

        logger.info("Scanned %s: %d listed, %d read", root, len(file_list), len(files))
        return ScanResult(root_dir=str(root), files=files, file_list=file_list)

    def _is_ignored(self, relative_path: str, patterns: list[str]) -> bool:
        parts = relative_path.split("/")
        for pattern in patterns:
            if fnmatch.fnmatch(relative_path, pattern):
                return True
            if any(fnmatch.fnmatch(part, pattern) for part in parts):
                return True
        return False

    def _discover_files(self, root: Path, patterns: list[str]) -> list[str]:
        """Walk the tree and collect POSIX relative paths of text files."""
        results: list[str] = []

        def walk(directory: Path) -> None:
            try:
                entries = sorted(directory.iterdir(), key=lambda p: p.name)
            except OSError:
                return
            for path in entries:
                if len(results) >= self.max_files:
                    return
                # Skip symlinks to keep the walk inside the project
                if path.is_symlink():
                    continue
                relative_path = path.relative_to(root).as_posix()
                if self._is_ignored(relative_path, patterns):
                    continue
                if path.is_dir():
                    walk(path)
                elif path.is_file() and is_text_file(path.name):
                    results.append(relative_path)

        walk(root)
        return sorted(results)

    def _read_file(self, root: Path, relative_path: str) -> ScannedFile | None:
        path = root / relative_path
        try:
            size = path.stat().st_size
            if size > self.max_file_size:
                return None
            content = path.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("Skipping unreadable file %s: %s", relative_path, exc)
            return None
        return ScannedFile(
            path=str(path),
            relative_path=relative_path,
            content=content,
            size=size,
        )
