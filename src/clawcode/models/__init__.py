"""Data models for clawcode."""

from clawcode.models.memory_models import GlobalMemory, ProjectSummary, SessionMemory
from clawcode.models.patch_models import PatchResult
from clawcode.models.plan_models import AgentPlan, FileToEdit, PatchOperation
from clawcode.models.schemas import ProviderConfig, ScannedFile, ScanResult, TaskSummary

__all__ = [
    "AgentPlan",
    "FileToEdit",
    "GlobalMemory",
    "PatchOperation",
    "PatchResult",
    "ProjectSummary",
    "ProviderConfig",
    "ScanResult",
    "ScannedFile",
    "SessionMemory",
    "TaskSummary",
]
