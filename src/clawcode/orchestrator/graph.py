"""LangGraph orchestrator graph for the task pipeline.

Wires ProjectScanner, Planner, the patch engine, the disk writer and the
command runner into a StateGraph. Any stage that records an error routes
straight to the finish node, which reports the outcome exactly once.
"""

import logging
from typing import Callable

from langgraph.graph import END, START, StateGraph

from clawcode.agents.executor import apply_plan_to_disk, resolve_content
from clawcode.agents.planner import Planner
from clawcode.agents.prompts import build_system_prompt, build_user_prompt
from clawcode.agents.scanner import ProjectScanner
from clawcode.agents.selector import select_relevant_files
from clawcode.memory import MemoryManager
from clawcode.orchestrator.events import AgentEmitter, EventType
from clawcode.orchestrator.exceptions import GraphBuildError
from clawcode.orchestrator.state import TaskState
from clawcode.utils.command import run_command
from clawcode.utils.diff_generator import build_diffs
from clawcode.utils.patch_engine import apply_patches, failed_results

logger = logging.getLogger(__name__)

# (question, default) -> answer
ConfirmFn = Callable[[str, bool], bool]

APPLY_QUESTION = "Apply these patches?"
COMMANDS_QUESTION = "Run these commands?"


def continue_or_finish(state: TaskState) -> str:
    """Router: "finish" once any stage has recorded an error."""
    return "finish" if state["errors"] else "continue"


def _approved(state: TaskState, confirm: ConfirmFn | None, question: str, default: bool) -> bool:
    if state["auto_approve"]:
        return True
    if confirm is None:
        return False
    return confirm(question, default)


def make_scan_node(scanner: ProjectScanner) -> Callable[[TaskState], dict]:
    """Factory: returns a node closure that scans the project.

    Returns {"scan_result": ..., "selected_files": ...}.
    On error: returns {"errors": [str]}.
    """

    def scan_node(state: TaskState) -> dict:
        try:
            scan_result = scanner.scan(state["root_dir"])
            selected = select_relevant_files(state["task"], scan_result.files)
            return {"scan_result": scan_result, "selected_files": selected}
        except Exception as exc:
            logger.debug("scan_node failed", exc_info=True)
            return {"errors": [str(exc)]}

    return scan_node


def make_plan_node(
    planner: Planner,
    emitter: AgentEmitter,
    memory: MemoryManager | None = None,
) -> Callable[[TaskState], dict]:
    """Factory: returns a node closure that asks the planner for an edit plan.

    The closure:
    1. Emits PLANNING
    2. Renders context memory (when a MemoryManager is given) and the prompts
    3. Calls planner.get_structured_plan(system, user) -> AgentPlan
    4. Emits PLAN and returns {"plan": plan}

    On error: returns {"errors": [str], "plan": None}
    """

    def plan_node(state: TaskState) -> dict:
        emitter.emit(EventType.PLANNING, {"task": state["task"]})
        try:
            memory_context = memory.load_context(state["root_dir"]) if memory else ""
            scan_result = state["scan_result"]
            file_list = scan_result.file_list if scan_result is not None else []
            user_prompt = build_user_prompt(
                state["task"], file_list, state["selected_files"], memory_context
            )
            plan = planner.get_structured_plan(build_system_prompt(), user_prompt)
        except Exception as exc:
            logger.debug("plan_node failed", exc_info=True)
            return {"errors": [str(exc)], "plan": None}

        emitter.emit(
            EventType.PLAN,
            {
                "analysis": plan.analysis,
                "files_to_edit": plan.files_to_edit,
                "commands": plan.commands,
            },
        )
        return {"plan": plan}

    return plan_node


def make_resolve_node(emitter: AgentEmitter) -> Callable[[TaskState], dict]:
    """Factory: returns a node closure that builds the starting content snapshot.

    Patch targets missing from the scan are read from disk on demand; each
    read attempt emits READ_FILE.
    """

    def resolve_node(state: TaskState) -> dict:
        scan_result = state["scan_result"]
        scanned = scan_result.files if scan_result is not None else []
        try:
            initial_content = resolve_content(
                state["root_dir"],
                ((file.relative_path, file.content) for file in scanned),
                state["plan"].patch_targets(),
                on_read_file=lambda path: emitter.emit(EventType.READ_FILE, {"path": path}),
            )
            return {"initial_content": initial_content}
        except Exception as exc:
            logger.debug("resolve_node failed", exc_info=True)
            return {"errors": [str(exc)]}

    return resolve_node


def make_patch_node(emitter: AgentEmitter) -> Callable[[TaskState], dict]:
    """Factory: returns a node closure that applies the plan's patches in memory.

    Per-patch failures never fail the task; each one emits PATCH_FAILED.
    """

    def patch_node(state: TaskState) -> dict:
        results = apply_patches(state["initial_content"], state["plan"].patches)
        for result in failed_results(results):
            logger.info("Patch %s on %s failed: %s", result.index, result.file, result.error)
            emitter.emit(
                EventType.PATCH_FAILED,
                {"file": result.file, "error": result.error, "index": result.index},
            )
        return {"patch_results": results}

    return patch_node


def make_diff_node(emitter: AgentEmitter) -> Callable[[TaskState], dict]:
    """Factory: returns a node closure that renders diffs for applied patches."""

    def diff_node(state: TaskState) -> dict:
        diffs = build_diffs(state["plan"].patches, state["patch_results"])
        if diffs:
            emitter.emit(EventType.DIFFS, {"diffs": diffs})
        return {"diffs": diffs}

    return diff_node


def make_apply_node(
    emitter: AgentEmitter,
    confirm: ConfirmFn | None = None,
) -> Callable[[TaskState], dict]:
    """Factory: returns a node closure that backs up and writes patched files.

    Nothing is written when there are no diffs, on a dry run, or when the
    user declines. Write errors become task errors; files already written
    stay written.
    """

    def apply_node(state: TaskState) -> dict:
        if not state["diffs"] or state["dry_run"]:
            return {"files_modified": []}
        if not _approved(state, confirm, APPLY_QUESTION, True):
            logger.info("Patches declined")
            return {"files_modified": []}

        try:
            written = apply_plan_to_disk(
                state["root_dir"],
                state["plan"].patches,
                state["initial_content"],
                on_write_file=lambda path: emitter.emit(EventType.WRITE_FILE, {"path": path}),
            )
            return {"files_modified": written}
        except (OSError, ValueError) as exc:
            # ValueError covers UnicodeEncodeError from unencodable replacements
            logger.debug("apply_node failed", exc_info=True)
            return {"errors": [f"Failed to write changes: {exc}"]}

    return apply_node


def make_commands_node(
    emitter: AgentEmitter,
    confirm: ConfirmFn | None = None,
    runner: Callable[[str, str], None] = run_command,
) -> Callable[[TaskState], dict]:
    """Factory: returns a node closure that runs the plan's shell commands.

    Commands run in order; the first failure stops the batch and becomes a
    task error.
    """

    def commands_node(state: TaskState) -> dict:
        commands = state["plan"].commands
        if not commands or state["dry_run"]:
            return {"commands_run": []}
        if not _approved(state, confirm, COMMANDS_QUESTION, False):
            logger.info("Commands declined")
            return {"commands_run": []}

        ran: list[str] = []
        for command in commands:
            emitter.emit(EventType.RUN_COMMAND, {"command": command})
            ran.append(command)
            try:
                runner(state["root_dir"], command)
            except Exception as exc:
                logger.debug("commands_node failed on %s", command, exc_info=True)
                return {"commands_run": ran, "errors": [str(exc)]}
        return {"commands_run": ran}

    return commands_node


def _success_message(state: TaskState) -> str:
    if state["files_modified"]:
        return f"{len(state['files_modified'])} file(s) updated"
    if not state["plan"].patches:
        return "No edits in plan"
    return "No changes applied"


def make_finish_node(
    emitter: AgentEmitter,
    memory: MemoryManager | None = None,
) -> Callable[[TaskState], dict]:
    """Factory: returns the terminal node that reports the outcome.

    Emits exactly one ERROR (first recorded error) or SUCCESS. On success,
    the run is recorded in session memory; memory write failures are only
    logged.
    """

    def finish_node(state: TaskState) -> dict:
        if state["errors"]:
            message = state["errors"][0]
            emitter.emit(EventType.ERROR, {"message": message})
            return {"message": message}

        message = _success_message(state)
        if memory is not None:
            try:
                memory.save_session_after_run(
                    state["root_dir"],
                    state["task"],
                    state["files_modified"],
                    state["plan"].agent_notes,
                )
            except OSError as exc:
                logger.warning("Could not save session memory: %s", exc)

        emitter.emit(
            EventType.SUCCESS,
            {"files_modified": state["files_modified"], "message": message},
        )
        return {"message": message}

    return finish_node


def build_graph(
    scanner: ProjectScanner,
    planner: Planner,
    emitter: AgentEmitter | None = None,
    memory: MemoryManager | None = None,
    confirm: ConfirmFn | None = None,
    runner: Callable[[str, str], None] = run_command,
):
    """Build and compile the task StateGraph.

    Edge topology:
      START -> scan_node -> plan_node -> resolve_node -> patch_node -> diff_node
        -> apply_node -> commands_node -> finish_node -> END
      scan_node, plan_node, resolve_node, apply_node
        -> conditional(continue_or_finish) -> {next node, finish_node}

    Args:
        scanner: ProjectScanner instance.
        planner: Planner instance.
        emitter: Receives progress events; a private one is created if omitted.
        memory: Optional context memory for prompts and run history.
        confirm: Asks the user a yes/no question. Without it, patches and
            commands only run when the task state is auto-approved.
        runner: Shell command runner (cwd, command).

    Returns:
        CompiledStateGraph ready to invoke.

    Raises:
        GraphBuildError: If graph construction fails.
    """
    try:
        if emitter is None:
            emitter = AgentEmitter()

        graph = StateGraph(TaskState)

        graph.add_node("scan_node", make_scan_node(scanner))
        graph.add_node("plan_node", make_plan_node(planner, emitter, memory))
        graph.add_node("resolve_node", make_resolve_node(emitter))
        graph.add_node("patch_node", make_patch_node(emitter))
        graph.add_node("diff_node", make_diff_node(emitter))
        graph.add_node("apply_node", make_apply_node(emitter, confirm))
        graph.add_node("commands_node", make_commands_node(emitter, confirm, runner))
        graph.add_node("finish_node", make_finish_node(emitter, memory))

        graph.add_edge(START, "scan_node")
        for stage, next_stage in (
            ("scan_node", "plan_node"),
            ("plan_node", "resolve_node"),
            ("resolve_node", "patch_node"),
            ("apply_node", "commands_node"),
        ):
            graph.add_conditional_edges(
                stage,
                continue_or_finish,
                {"continue": next_stage, "finish": "finish_node"},
            )
        graph.add_edge("patch_node", "diff_node")
        graph.add_edge("diff_node", "apply_node")
        graph.add_edge("commands_node", "finish_node")
        graph.add_edge("finish_node", END)

        return graph.compile()

    except Exception as exc:
        raise GraphBuildError(f"Failed to build task graph: {exc}") from exc
