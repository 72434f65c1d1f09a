"""Pydantic data models for scanning and task outcomes."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ScannedFile(BaseModel):
    """A text file read during the project scan."""

    model_config = ConfigDict(frozen=False)

    path: str  # Absolute path
    relative_path: str  # POSIX-style, relative to project root
    content: str
    size: int  # Bytes on disk


class ScanResult(BaseModel):
    """Files read during a scan plus the full (size-uncapped) file listing."""

    model_config = ConfigDict(frozen=False)

    root_dir: str
    files: list[ScannedFile] = Field(default_factory=list)
    file_list: list[str] = Field(default_factory=list)
    scanned_at: datetime = Field(default_factory=datetime.now)


class TaskSummary(BaseModel):
    """Result of one task run through the CLI flow."""

    model_config = ConfigDict(frozen=False)

    task: str
    provider: str | None = None
    success: bool
    files_modified: list[str] = Field(default_factory=list)
    message: str = ""
    error: str | None = None


class ProviderConfig(BaseModel):
    """Credentials and model choice for one LLM provider."""

    model_config = ConfigDict(frozen=False)

    provider: Literal["azure", "groq", "gemini", "openai", "anthropic"]
    api_key: str
    model: str | None = None
    endpoint: str | None = None  # Azure only
    deployment: str | None = None  # Azure only
