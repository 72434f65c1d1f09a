"""Models for patch application results."""

from pydantic import BaseModel, ConfigDict, model_validator


class PatchResult(BaseModel):
    """Outcome of applying one PatchOperation.

    ``applied`` is True exactly when ``new_content`` is set.
    """

    model_config = ConfigDict(frozen=False)

    file: str = ""
    applied: bool
    error: str | None = None
    new_content: str | None = None
    index: int | None = None  # Position of the originating patch in the plan

    @model_validator(mode="after")
    def _check_applied_has_content(self) -> "PatchResult":
        if self.applied != (self.new_content is not None):
            raise ValueError("applied must be True exactly when new_content is set")
        return self
