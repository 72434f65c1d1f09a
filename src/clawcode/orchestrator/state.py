"""State definition for the LangGraph task pipeline."""

import operator
from typing import Annotated, TypedDict

from clawcode.models import AgentPlan, PatchResult, ScannedFile, ScanResult


class TaskState(TypedDict):
    """State for one task run through the pipeline.

    ``errors`` accumulates across nodes via its reducer. All other fields use
    default overwrite semantics.
    """

    # Input
    task: str
    root_dir: str
    dry_run: bool
    auto_approve: bool

    # Scanning
    scan_result: ScanResult | None
    selected_files: list[ScannedFile]

    # Planning
    plan: AgentPlan | None

    # Patching
    initial_content: dict[str, str]
    patch_results: list[PatchResult]
    diffs: list[str]

    # Side effects
    files_modified: list[str]
    commands_run: list[str]

    # Outcome
    errors: Annotated[list[str], operator.add]
    message: str


def make_initial_state(
    task: str,
    root_dir: str,
    dry_run: bool = False,
    auto_approve: bool = False,
) -> TaskState:
    """Create the initial state for the task pipeline.

    Args:
        task: The user's task description.
        root_dir: Absolute path to the project root.
        dry_run: Show the plan and diffs but never write or run commands.
        auto_approve: Apply patches and run commands without asking.

    Returns:
        TaskState dict with all fields initialised to defaults.
    """
    return {
        "task": task,
        "root_dir": root_dir,
        "dry_run": dry_run,
        "auto_approve": auto_approve,
        "scan_result": None,
        "selected_files": [],
        "plan": None,
        "initial_content": {},
        "patch_results": [],
        "diffs": [],
        "files_modified": [],
        "commands_run": [],
        "errors": [],
        "message": "",
    }
