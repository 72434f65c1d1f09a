"""Tests for the find/replace patch engine and batch applier."""

from clawcode.models import PatchOperation, PatchResult
from clawcode.utils.patch_engine import (
    EMPTY_FIND_ERROR,
    NOT_FOUND_ERROR,
    NOT_IN_CONTEXT_ERROR,
    apply_patch,
    apply_patches,
    collect_patched_content,
    failed_results,
    results_by_file,
)

import pytest
from pydantic import ValidationError


# ---------------------------------------------------------------------------
# apply_patch
# ---------------------------------------------------------------------------

class TestApplyPatch:
    def test_replaces_match(self):
        result = apply_patch("hello world", "world", "there")
        assert result.applied is True
        assert result.new_content == "hello there"
        assert result.error is None

    def test_replaces_only_first_occurrence(self):
        result = apply_patch("a-a-a", "a", "b")
        assert result.new_content == "b-a-a"

    def test_find_not_present(self):
        result = apply_patch("foo", "bar", "baz")
        assert result.applied is False
        assert result.new_content is None
        assert result.error == NOT_FOUND_ERROR == "Find string not found in content"

    def test_empty_find_on_empty_content_sets_whole_file(self):
        result = apply_patch("", "", "new file body")
        assert result.applied is True
        assert result.new_content == "new file body"

    def test_empty_find_on_non_empty_content_fails(self):
        result = apply_patch("existing", "", "x")
        assert result.applied is False
        assert result.error == EMPTY_FIND_ERROR

    def test_match_is_exact_including_whitespace(self):
        content = "def f():\n    return 1\n"
        assert apply_patch(content, "def f():\n  return 1", "x").applied is False
        assert apply_patch(content, "def f():\r\n    return 1", "x").applied is False

    def test_no_op_replace_returns_same_content(self):
        result = apply_patch("same text", "text", "text")
        assert result.applied is True
        assert result.new_content == "same text"

    def test_prefix_and_suffix_preserved(self):
        content = "prefix MIDDLE suffix"
        result = apply_patch(content, "MIDDLE", "m")
        index = content.find("MIDDLE")
        assert result.new_content == content[:index] + "m" + content[index + len("MIDDLE"):]

    def test_replace_text_may_contain_find(self):
        result = apply_patch("x", "x", "xx")
        assert result.new_content == "xx"


def test_patch_result_requires_content_iff_applied():
    with pytest.raises(ValidationError):
        PatchResult(applied=True)
    with pytest.raises(ValidationError):
        PatchResult(applied=False, new_content="x")


def test_patch_operation_is_frozen():
    patch = PatchOperation(file="a.txt", find="a", replace="b")
    with pytest.raises(ValidationError):
        patch.find = "c"


# ---------------------------------------------------------------------------
# apply_patches
# ---------------------------------------------------------------------------

class TestApplyPatches:
    def test_one_result_per_patch_with_index(self):
        snapshot = {"a.txt": "hello world", "b.txt": "foo"}
        patches = [
            PatchOperation(file="a.txt", find="world", replace="there"),
            PatchOperation(file="b.txt", find="bar", replace="baz"),
        ]
        results = apply_patches(snapshot, patches)

        assert [r.index for r in results] == [0, 1]
        assert [r.file for r in results] == ["a.txt", "b.txt"]
        assert results[0].applied is True
        assert results[1].applied is False

    def test_target_missing_from_snapshot(self):
        results = apply_patches({}, [PatchOperation(file="ghost.txt", find="a", replace="b")])
        assert results[0].applied is False
        assert results[0].error == NOT_IN_CONTEXT_ERROR

    def test_same_file_patches_compose(self):
        snapshot = {"a.txt": "one two"}
        patches = [
            PatchOperation(file="a.txt", find="one", replace="1"),
            PatchOperation(file="a.txt", find="1 two", replace="1 2"),
        ]
        results = apply_patches(snapshot, patches)
        assert all(r.applied for r in results)
        assert results[1].new_content == "1 2"

    def test_earlier_failure_on_same_file_is_not_masked(self):
        snapshot = {"a.txt": "content"}
        patches = [
            PatchOperation(file="a.txt", find="missing", replace="x"),
            PatchOperation(file="a.txt", find="content", replace="new"),
        ]
        results = apply_patches(snapshot, patches)
        assert results[0].applied is False
        assert results[1].applied is True
        assert failed_results(results) == [results[0]]
        assert results_by_file(results)["a.txt"] is results[1]

    def test_snapshot_not_mutated(self):
        snapshot = {"a.txt": "hello"}
        apply_patches(snapshot, [PatchOperation(file="a.txt", find="hello", replace="bye")])
        assert snapshot == {"a.txt": "hello"}

    def test_empty_patch_list(self):
        assert apply_patches({"a.txt": "x"}, []) == []


def test_collect_patched_content_applies_successes_only():
    snapshot = {"a.txt": "hello world", "c.txt": "foo"}
    patches = [
        PatchOperation(file="a.txt", find="world", replace="there"),
        PatchOperation(file="c.txt", find="bar", replace="baz"),
    ]
    final = collect_patched_content(snapshot, patches)
    assert final == {"a.txt": "hello there", "c.txt": "foo"}
    assert snapshot["a.txt"] == "hello world"
