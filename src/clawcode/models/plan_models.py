"""Models for the structured edit plan returned by the language model."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class PatchOperation(BaseModel):
    """A single exact-string find/replace edit against one file."""

    model_config = ConfigDict(frozen=True)

    file: str  # Relative path from project root
    operation: Literal["replace"] = "replace"
    find: str  # Empty only when the target file is empty/new
    replace: str


class FileToEdit(BaseModel):
    model_config = ConfigDict(frozen=False)

    path: str
    reason: str = ""


class AgentPlan(BaseModel):
    """Plan produced by the LLM after defensive coercion."""

    model_config = ConfigDict(frozen=False)

    analysis: str = ""
    files_to_edit: list[FileToEdit] = Field(default_factory=list)
    patches: list[PatchOperation] = Field(default_factory=list)
    commands: list[str] = Field(default_factory=list)
    agent_notes: list[str] = Field(default_factory=list)  # Persisted to session memory

    def patch_targets(self) -> list[str]:
        """Distinct patch target paths in first-seen order."""
        seen: set[str] = set()
        targets: list[str] = []
        for patch in self.patches:
            if patch.file not in seen:
                seen.add(patch.file)
                targets.append(patch.file)
        return targets
