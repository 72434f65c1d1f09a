"""Utilities for rendering patch and whole-file diffs for display."""

from collections.abc import Iterable

from clawcode.models import PatchOperation, PatchResult


def make_replace_diff(file_path: str, find: str, replace: str) -> str:
    """Render a requested find/replace edit as a removal/addition block.

    Args:
        file_path: Relative path shown in the two header lines.
        find: Text being replaced; each line is prefixed with "-".
        replace: Replacement text; each line is prefixed with "+".

    Returns:
        Newline-joined diff block. Display only, never applied.
    """
    lines = [f"--- {file_path}", f"+++ {file_path}"]
    lines.extend("-" + line for line in find.split("\n"))
    lines.extend("+" + line for line in replace.split("\n"))
    return "\n".join(lines)


def make_unified_diff(
    file_path: str,
    original_content: str,
    modified_content: str,
) -> str:
    """Generate a unified-style diff with a greedy two-pointer scan.

    Equal lines are emitted as context. On a mismatch the old cursor runs
    forward until its line matches the new cursor's line, then the new cursor
    runs forward the same way; the skipped runs become one hunk. Not an LCS
    diff: good for single-region edits, verbose on heavily reordered input.

    Args:
        file_path: Relative path from project root (e.g. "src/app.py").
        original_content: File content before the edit.
        modified_content: File content after the edit.

    Returns:
        Diff text with a/ b/ headers and "@@ -start,count +start,count @@"
        hunk headers (1-based starts).
    """
    old_lines = original_content.split("\n")
    new_lines = modified_content.split("\n")
    out = [f"--- a/{file_path}", f"+++ b/{file_path}"]

    i = 0
    j = 0
    while i < len(old_lines) or j < len(new_lines):
        if i < len(old_lines) and j < len(new_lines) and old_lines[i] == new_lines[j]:
            out.append(" " + old_lines[i])
            i += 1
            j += 1
            continue

        start_i = i
        start_j = j
        while i < len(old_lines) and (j >= len(new_lines) or old_lines[i] != new_lines[j]):
            i += 1
        while j < len(new_lines) and (i >= len(old_lines) or old_lines[i] != new_lines[j]):
            j += 1

        out.append(f"@@ -{start_i + 1},{i - start_i} +{start_j + 1},{j - start_j} @@")
        out.extend("-" + line for line in old_lines[start_i:i])
        out.extend("+" + line for line in new_lines[start_j:j])

    return "\n".join(out)


def build_diffs(
    patches: list[PatchOperation],
    results: Iterable[PatchResult],
) -> list[str]:
    """Render one replace-diff per patch whose own result was applied.

    Args:
        patches: Plan patches, in plan order.
        results: Per-patch results carrying ``index`` into ``patches``.

    Returns:
        Diff blocks in plan order.
    """
    applied_indexes = {
        result.index for result in results if result.applied and result.index is not None
    }
    return [
        make_replace_diff(patch.file, patch.find, patch.replace)
        for index, patch in enumerate(patches)
        if index in applied_indexes
    ]
