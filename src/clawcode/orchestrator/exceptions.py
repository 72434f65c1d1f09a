"""Errors raised while wiring or running the task pipeline."""


class OrchestratorError(Exception):
    """Base class for task pipeline failures that are not agent errors."""


class GraphBuildError(OrchestratorError):
    """The task StateGraph could not be assembled or compiled."""
