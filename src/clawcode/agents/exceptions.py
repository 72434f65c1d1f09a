"""Exceptions for agent operations."""


class AgentError(Exception):
    """Base exception for all agent operations."""


class ScanError(AgentError):
    """Raised when the project root cannot be scanned."""


class PlanParseError(AgentError):
    """Raised when the LLM response is not valid JSON or not a JSON object."""


class LLMResponseError(AgentError):
    """Raised when the provider call fails or returns an empty completion."""


class ProviderConfigError(AgentError):
    """Raised when no usable LLM provider is configured."""


class CommandExecutionError(AgentError):
    """Raised when a plan command exits non-zero or cannot be spawned."""


class TaskInProgressError(AgentError):
    """Raised when a task is started while another one is still running."""
