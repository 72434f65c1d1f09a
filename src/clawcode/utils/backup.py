"""Best-effort timestamped backups of files before they are overwritten."""

import logging
import shutil
from collections.abc import Iterable
from datetime import datetime, timezone
from pathlib import Path

logger = logging.getLogger(__name__)

BACKUP_DIR = ".coding-agent-backups"


def ensure_backup_dir(root_dir: str | Path) -> Path:
    backup_dir = Path(root_dir) / BACKUP_DIR
    backup_dir.mkdir(parents=True, exist_ok=True)
    return backup_dir


def backup_path(
    backup_dir: str | Path,
    relative_path: str,
    now: datetime | None = None,
) -> Path:
    """Build the destination path for one backup copy.

    Path separators are flattened to "_" and a second-granularity UTC
    timestamp is appended, e.g. ``src_app.py.2026-10-19T08-15-02.backup``.
    """
    sanitized = relative_path.replace("/", "_").replace("\\", "_")
    stamp = (now or datetime.now(timezone.utc)).strftime("%Y-%m-%dT%H-%M-%S")
    return Path(backup_dir) / f"{sanitized}.{stamp}.backup"


def backup_file(root_dir: str | Path, relative_path: str) -> Path | None:
    """Copy one file into the backup directory.

    Returns:
        The backup location, or None when the source does not exist
        (a file about to be created has nothing to back up).

    Raises:
        OSError: If the copy itself fails.
    """
    source = Path(root_dir) / relative_path
    if not source.exists():
        return None
    backup_dir = ensure_backup_dir(root_dir)
    dest = backup_path(backup_dir, relative_path)
    dest.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source, dest)
    return dest


def backup_files(
    root_dir: str | Path,
    relative_paths: Iterable[str],
) -> dict[str, str]:
    """Back up every existing file in ``relative_paths``.

    Missing files are skipped silently. Copy failures are logged as warnings
    and never abort the caller.

    Returns:
        Mapping of relative path -> backup file path for files copied.
    """
    records: dict[str, str] = {}
    ensure_backup_dir(root_dir)
    for relative_path in relative_paths:
        try:
            dest = backup_file(root_dir, relative_path)
        except OSError as exc:
            logger.warning("Backup skipped for %s: %s", relative_path, exc)
            continue
        if dest is None:
            continue
        logger.debug("Backed up %s -> %s", relative_path, dest)
        records[relative_path] = str(dest)
    return records
