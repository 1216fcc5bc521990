"""Review envelope produced by the AI reviewer."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .issues import ReviewIssue


class ReviewResult(BaseModel):
    """Parsed review: a summary plus the issues found.

    Unknown keys in the reviewer's JSON are ignored.
    """

    model_config = ConfigDict(populate_by_name=True)

    summary: str = ""
    issues: list[ReviewIssue] = Field(default_factory=list)
    target_branch: str | None = Field(default=None, alias="targetBranch")
    current_branch: str | None = Field(default=None, alias="currentBranch")
    files_changed: int | None = Field(default=None, alias="filesChanged")
    timestamp: datetime | None = None
