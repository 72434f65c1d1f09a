"""LangGraph orchestrator package for the task pipeline."""

from clawcode.orchestrator.events import AgentEmitter, EventType
from clawcode.orchestrator.exceptions import GraphBuildError, OrchestratorError
from clawcode.orchestrator.graph import build_graph
from clawcode.orchestrator.session import SessionContext
from clawcode.orchestrator.state import TaskState, make_initial_state

__all__ = [
    "AgentEmitter",
    "EventType",
    "GraphBuildError",
    "OrchestratorError",
    "SessionContext",
    "TaskState",
    "build_graph",
    "make_initial_state",
]
