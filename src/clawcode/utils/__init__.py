"""Utilities for clawcode."""

from clawcode.utils.backup import BACKUP_DIR, backup_files
from clawcode.utils.diff_generator import (
    build_diffs,
    make_replace_diff,
    make_unified_diff,
)
from clawcode.utils.patch_engine import (
    apply_patch,
    apply_patches,
    collect_patched_content,
    results_by_file,
)

__all__ = [
    "BACKUP_DIR",
    "apply_patch",
    "apply_patches",
    "backup_files",
    "build_diffs",
    "collect_patched_content",
    "make_replace_diff",
    "make_unified_diff",
    "results_by_file",
]
