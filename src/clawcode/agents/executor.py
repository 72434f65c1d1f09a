"""Plan execution against the file system: content resolution, backup and writes."""

import logging
from collections.abc import Callable, Iterable
from pathlib import Path

from clawcode.models import PatchOperation, ScannedFile
from clawcode.utils.backup import backup_files
from clawcode.utils.patch_engine import collect_patched_content

logger = logging.getLogger(__name__)

PathCallback = Callable[[str], None]


def get_file_contents_map(files: Iterable[ScannedFile]) -> dict[str, str]:
    return {file.relative_path: file.content for file in files}


def read_current_contents(
    root_dir: str | Path,
    relative_paths: Iterable[str],
    on_read_file: PathCallback | None = None,
) -> dict[str, str]:
    """Read files from disk, skipping any that cannot be read or decoded.

    Line endings are kept as stored. ``on_read_file`` fires once per
    attempt, before the outcome is known.
    """
    contents: dict[str, str] = {}
    for relative_path in relative_paths:
        if on_read_file is not None:
            on_read_file(relative_path)
        try:
            contents[relative_path] = (Path(root_dir) / relative_path).read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("Could not read %s: %s", relative_path, exc)
    return contents


def resolve_content(
    root_dir: str | Path,
    already_scanned: Iterable[tuple[str, str]],
    patch_targets: Iterable[str],
    on_read_file: PathCallback | None = None,
) -> dict[str, str]:
    """Build the starting content snapshot for a plan.

    Args:
        root_dir: Project root used for on-demand reads.
        already_scanned: (relative_path, content) pairs read during the scan.
        patch_targets: Paths referenced by the plan's patches.
        on_read_file: Progress callback for each on-demand disk read.

    Returns:
        Snapshot containing every scanned file and every readable patch
        target. Targets that do not exist are seeded with "" (to be
        created). Existing files that cannot be read or decoded are left
        out, so their patches fail instead of replacing the file.
    """
    snapshot = dict(already_scanned)
    missing = [path for path in dict.fromkeys(patch_targets) if path not in snapshot]
    if missing:
        snapshot.update(read_current_contents(root_dir, missing, on_read_file))
        for path in missing:
            if path in snapshot:
                continue
            if (Path(root_dir) / path).exists():
                logger.warning("Leaving unreadable file %s untouched", path)
            else:
                snapshot[path] = ""
    return snapshot


def write_changes(
    root_dir: str | Path,
    before: dict[str, str],
    after: dict[str, str],
    on_write_file: PathCallback | None = None,
) -> list[str]:
    """Write every file whose content differs between the two snapshots.

    A path missing from ``before`` counts as changed. Content is written as
    UTF-8 bytes with line endings untouched. Write and encode errors
    propagate; files written earlier in the batch stay written.

    Returns:
        Relative paths written, in snapshot order.
    """
    written: list[str] = []
    for relative_path, content in after.items():
        if before.get(relative_path) == content:
            continue
        if on_write_file is not None:
            on_write_file(relative_path)
        # Encode before opening so an unencodable snapshot never truncates the file
        data = content.encode("utf-8")
        full_path = Path(root_dir) / relative_path
        full_path.parent.mkdir(parents=True, exist_ok=True)
        full_path.write_bytes(data)
        logger.info("Wrote %s", relative_path)
        written.append(relative_path)
    return written


def apply_plan_to_disk(
    root_dir: str | Path,
    patches: list[PatchOperation],
    initial_content: dict[str, str],
    on_write_file: PathCallback | None = None,
) -> list[str]:
    """Back up every patch target, then write the patched snapshot.

    Returns:
        Relative paths written.
    """
    targets = list(dict.fromkeys(patch.file for patch in patches))
    backup_files(root_dir, targets)
    final_content = collect_patched_content(initial_content, patches)
    return write_changes(root_dir, initial_content, final_content, on_write_file)
