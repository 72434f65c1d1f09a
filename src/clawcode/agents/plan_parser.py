"""Parsing of raw LLM text into an AgentPlan.

The response is untrusted: every field is coerced to its expected shape and
only a non-JSON or non-object payload is rejected.
"""

import json
from typing import Any

from clawcode.agents.exceptions import PlanParseError
from clawcode.models import AgentPlan, FileToEdit, PatchOperation


def extract_json(text: str) -> str:
    """Slice from the first "{" to the last "}" (whole trimmed text if none)."""
    trimmed = text.strip()
    start = trimmed.find("{")
    end = trimmed.rfind("}")
    if start == -1 or end == -1 or end <= start:
        return trimmed
    return trimmed[start:end + 1]


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _field(entry: Any, key: str) -> str:
    if isinstance(entry, dict):
        return _as_str(entry.get(key))
    return ""


def parse_plan_json(raw: str) -> AgentPlan:
    """Parse and coerce an LLM response into an AgentPlan.

    Args:
        raw: Raw completion text, possibly wrapped in prose or a code fence.

    Returns:
        AgentPlan with every field defaulted when missing or mistyped.

    Raises:
        PlanParseError: If no valid JSON is found or the top level is not an object.
    """
    try:
        parsed = json.loads(extract_json(raw))
    except json.JSONDecodeError as e:
        raise PlanParseError(f"LLM response is not valid JSON: {e}") from e

    if not isinstance(parsed, dict):
        raise PlanParseError("LLM response is not a JSON object")

    analysis = parsed.get("analysis")
    raw_files = parsed.get("files_to_edit")
    raw_patches = parsed.get("patches")
    raw_commands = parsed.get("commands")
    raw_notes = parsed.get("agent_notes")

    files_to_edit = [
        FileToEdit(path=_field(entry, "path"), reason=_field(entry, "reason"))
        for entry in (raw_files if isinstance(raw_files, list) else [])
    ]
    patches = [
        PatchOperation(
            file=_field(entry, "file"),
            find=_field(entry, "find"),
            replace=_field(entry, "replace"),
        )
        for entry in (raw_patches if isinstance(raw_patches, list) else [])
    ]
    commands = [_as_str(c) for c in (raw_commands if isinstance(raw_commands, list) else [])]
    agent_notes = [
        note
        for note in (_as_str(n) for n in (raw_notes if isinstance(raw_notes, list) else []))
        if note
    ]

    return AgentPlan(
        analysis=analysis if isinstance(analysis, str) else "",
        files_to_edit=files_to_edit,
        patches=patches,
        commands=commands,
        agent_notes=agent_notes,
    )
