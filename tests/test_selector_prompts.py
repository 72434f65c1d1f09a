"""Tests for context file selection and prompt building."""

from clawcode.agents.prompts import PLAN_JSON_SCHEMA, build_system_prompt, build_user_prompt
from clawcode.agents.selector import (
    FALLBACK_FILES,
    MAX_CONTEXT_FILES,
    MAX_TOTAL_CHARS,
    score_file,
    select_relevant_files,
    tokenize,
)

from conftest import make_scanned


def test_tokenize_drops_punctuation_and_single_chars():
    assert tokenize("Fix the Login-form, a bug!") == {"fix", "the", "login-form", "bug"}


def test_score_path_hit_beats_content_hit():
    keywords = {"auth"}
    path_hit = make_scanned("src/auth.py", "pass")
    content_hit = make_scanned("src/util.py", "import auth")
    assert score_file(path_hit, keywords) > score_file(content_hit, keywords) > 0


def test_score_zero_without_hits():
    assert score_file(make_scanned("a.py", "x" * 5000), {"auth"}) == 0.0


def test_select_prefers_relevant_files():
    files = [
        make_scanned("src/other.py", "nothing here"),
        make_scanned("src/login.py", "def login(): pass"),
    ]
    selected = select_relevant_files("update login flow", files)
    assert selected[0].relative_path == "src/login.py"


def test_select_respects_file_count_limit():
    files = [make_scanned(f"src/auth_{i}.py", "auth") for i in range(MAX_CONTEXT_FILES + 5)]
    assert len(select_relevant_files("auth", files)) == MAX_CONTEXT_FILES


def test_select_respects_char_budget():
    half = MAX_TOTAL_CHARS // 2 + 1
    files = [make_scanned(f"auth{i}.py", "a" * half) for i in range(3)]
    selected = select_relevant_files("auth", files)
    assert len(selected) == 1


def test_select_keeps_unscored_files_that_fit_budget():
    files = [make_scanned(f"f{i}.py", "x") for i in range(FALLBACK_FILES + 3)]
    selected = select_relevant_files("zzz", files)
    assert [f.relative_path for f in selected] == [f.relative_path for f in files]


def test_select_empty_input():
    assert select_relevant_files("anything", []) == []


def test_system_prompt_contains_schema():
    prompt = build_system_prompt()
    assert PLAN_JSON_SCHEMA in prompt
    assert '"find": ""' in prompt


def test_user_prompt_layout():
    files = [make_scanned("src/app.py", "print('hi')")]
    prompt = build_user_prompt("Rename app", ["src/app.py", "README.md"], files)
    assert prompt.startswith("Task:\nRename app")
    assert "src/app.py\nREADME.md" in prompt
    assert "--- src/app.py ---\nprint('hi')" in prompt


def test_user_prompt_truncates_file_list():
    file_list = [f"f{i}.py" for i in range(100)]
    prompt = build_user_prompt("t", file_list, [])
    assert "f59.py" in prompt
    assert "f60.py" not in prompt


def test_user_prompt_prepends_memory_context():
    prompt = build_user_prompt("t", [], [], memory_context="[Context memory]\nnotes")
    assert prompt.index("[Context memory]") < prompt.index("Task:")
