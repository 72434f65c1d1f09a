"""Agent components for clawcode."""

from clawcode.agents.exceptions import (
    AgentError,
    CommandExecutionError,
    LLMResponseError,
    PlanParseError,
    ProviderConfigError,
    ScanError,
    TaskInProgressError,
)
from clawcode.agents.executor import apply_plan_to_disk, resolve_content, write_changes
from clawcode.agents.plan_parser import parse_plan_json
from clawcode.agents.planner import Planner
from clawcode.agents.scanner import ProjectScanner
from clawcode.agents.selector import select_relevant_files

__all__ = [
    "AgentError",
    "CommandExecutionError",
    "LLMResponseError",
    "PlanParseError",
    "Planner",
    "ProjectScanner",
    "ProviderConfigError",
    "ScanError",
    "TaskInProgressError",
    "apply_plan_to_disk",
    "parse_plan_json",
    "resolve_content",
    "select_relevant_files",
    "write_changes",
]
