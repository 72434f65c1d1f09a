"""Models for persistent context memory."""

from pydantic import BaseModel, ConfigDict, Field


class ProjectSummary(BaseModel):
    model_config = ConfigDict(frozen=False, populate_by_name=True)

    framework: str = ""
    test_command: str = Field(default="", alias="testCommand")
    architecture: str = ""


class GlobalMemory(BaseModel):
    model_config = ConfigDict(frozen=False, populate_by_name=True)

    project_summaries: dict[str, ProjectSummary] = Field(
        default_factory=dict, alias="projectSummaries"
    )


class SessionMemory(BaseModel):
    model_config = ConfigDict(frozen=False, populate_by_name=True)

    last_tasks: list[str] = Field(default_factory=list, alias="lastTasks")
    recent_files: list[str] = Field(default_factory=list, alias="recentFiles")
    agent_notes: list[str] = Field(default_factory=list, alias="agentNotes")
