"""Tests for parsing LLM output into an AgentPlan."""

import json

import pytest

from clawcode.agents.exceptions import AgentError, PlanParseError
from clawcode.agents.plan_parser import extract_json, parse_plan_json


VALID_PLAN = {
    "analysis": "Rename greeting",
    "files_to_edit": [{"path": "src/app.py", "reason": "holds greet()"}],
    "patches": [
        {"file": "src/app.py", "operation": "replace", "find": "hello", "replace": "hi"}
    ],
    "commands": ["pytest -q"],
    "agent_notes": ["uses pytest"],
}


def test_parse_valid_plan():
    plan = parse_plan_json(json.dumps(VALID_PLAN))
    assert plan.analysis == "Rename greeting"
    assert plan.files_to_edit[0].path == "src/app.py"
    assert plan.patches[0].find == "hello"
    assert plan.patches[0].operation == "replace"
    assert plan.commands == ["pytest -q"]
    assert plan.agent_notes == ["uses pytest"]


def test_parse_plan_wrapped_in_prose_and_fence():
    raw = "Here is the plan:\n```json\n" + json.dumps(VALID_PLAN) + "\n```\nDone."
    assert parse_plan_json(raw).analysis == "Rename greeting"


def test_invalid_json_raises_parse_error():
    with pytest.raises(PlanParseError, match="not valid JSON"):
        parse_plan_json("I could not produce a plan, sorry")


def test_parse_error_is_agent_error():
    with pytest.raises(AgentError):
        parse_plan_json("{broken")


def test_non_object_raises_parse_error():
    with pytest.raises(PlanParseError, match="not a JSON object"):
        parse_plan_json("[1, 2, 3]")


def test_missing_fields_default_to_empty():
    plan = parse_plan_json("{}")
    assert plan.analysis == ""
    assert plan.files_to_edit == []
    assert plan.patches == []
    assert plan.commands == []
    assert plan.agent_notes == []


def test_mistyped_fields_are_coerced():
    raw = json.dumps({
        "analysis": 42,
        "files_to_edit": "src/app.py",
        "patches": [{"file": "a.txt", "find": None, "replace": 7}, "garbage"],
        "commands": [1, "ls"],
        "agent_notes": ["", "keep", None],
    })
    plan = parse_plan_json(raw)
    assert plan.analysis == ""
    assert plan.files_to_edit == []
    assert plan.patches[0].find == ""
    assert plan.patches[0].replace == "7"
    assert plan.patches[1].file == ""
    assert plan.commands == ["1", "ls"]
    assert plan.agent_notes == ["keep"]


def test_patch_targets_are_distinct_in_first_seen_order():
    raw = json.dumps({
        "patches": [
            {"file": "b.py", "find": "x", "replace": "y"},
            {"file": "a.py", "find": "x", "replace": "y"},
            {"file": "b.py", "find": "y", "replace": "z"},
        ]
    })
    assert parse_plan_json(raw).patch_targets() == ["b.py", "a.py"]


@pytest.mark.parametrize(
    "text,expected",
    [
        ('  {"a": 1}  ', '{"a": 1}'),
        ('noise {"a": {"b": 2}} trailing', '{"a": {"b": 2}}'),
        ("no braces here", "no braces here"),
    ],
)
def test_extract_json(text, expected):
    assert extract_json(text) == expected
