"""Exact-string find/replace patching of in-memory file contents."""

from collections.abc import Iterable

from clawcode.models import PatchOperation, PatchResult

EMPTY_FIND_ERROR = "Empty find string (only allowed for empty files)"
NOT_FOUND_ERROR = "Find string not found in content"
NOT_IN_CONTEXT_ERROR = "File not in context"


def apply_patch(content: str, find: str, replace: str) -> PatchResult:
    """Replace the first occurrence of ``find`` in ``content``.

    An empty ``find`` means "set the whole file" and is only accepted when
    ``content`` is itself empty.

    Args:
        content: Current full text of one file.
        find: Exact substring to look for (whitespace and line endings included).
        replace: Text to put in place of the match.

    Returns:
        PatchResult with new_content set on success, error set on failure.
        The returned ``file`` is empty; callers fill it in.
    """
    if not find:
        if not content:
            return PatchResult(applied=True, new_content=replace)
        return PatchResult(applied=False, error=EMPTY_FIND_ERROR)

    index = content.find(find)
    if index == -1:
        return PatchResult(applied=False, error=NOT_FOUND_ERROR)

    new_content = content[:index] + replace + content[index + len(find):]
    return PatchResult(applied=True, new_content=new_content)


def apply_patches(
    snapshot: dict[str, str],
    patches: Iterable[PatchOperation],
) -> list[PatchResult]:
    """Apply patches in order, composing edits to the same file.

    The snapshot is not mutated. Each patch sees the output of earlier
    successful patches to its file.

    Returns:
        One PatchResult per patch, in patch order, with ``index`` set.
    """
    working = dict(snapshot)
    results: list[PatchResult] = []

    for index, patch in enumerate(patches):
        content = working.get(patch.file)
        if content is None:
            results.append(
                PatchResult(
                    file=patch.file,
                    applied=False,
                    error=NOT_IN_CONTEXT_ERROR,
                    index=index,
                )
            )
            continue

        result = apply_patch(content, patch.find, patch.replace)
        result.file = patch.file
        result.index = index
        if result.applied:
            working[patch.file] = result.new_content
        results.append(result)

    return results


def collect_patched_content(
    snapshot: dict[str, str],
    patches: Iterable[PatchOperation],
) -> dict[str, str]:
    """Return a copy of the snapshot with every applicable patch applied."""
    current = dict(snapshot)
    for patch in patches:
        content = current.get(patch.file)
        if content is None:
            continue
        result = apply_patch(content, patch.find, patch.replace)
        if result.applied:
            current[patch.file] = result.new_content
    return current


def results_by_file(results: Iterable[PatchResult]) -> dict[str, PatchResult]:
    """Collapse per-patch results to the last result for each file."""
    collapsed: dict[str, PatchResult] = {}
    for result in results:
        collapsed[result.file] = result
    return collapsed


def failed_results(results: Iterable[PatchResult]) -> list[PatchResult]:
    return [result for result in results if not result.applied]
