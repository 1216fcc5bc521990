"""Fix application outcome models."""

from pydantic import BaseModel, ConfigDict, Field

from .issues import CodeFix


class AppliedLines(BaseModel):
    """Line range a successful fix was applied to, taken from the fix itself."""

    start: int
    end: int


class FixApplicationResult(BaseModel):
    """Outcome of applying one fix.

    Errors are returned as data so a batch can always report every item.
    """

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    error: str | None = None
    applied_lines: AppliedLines | None = Field(default=None, alias="appliedLines")


class FixRequest(BaseModel):
    """One item of a batch: a structured fix and the file it targets."""

    file: str = Field(min_length=1)
    fix: CodeFix


class BatchResult(BaseModel):
    """Aggregate outcome of a batch application.

    Attributes:
        succeeded: Number of fixes applied.
        failed: Number of fixes that failed, including user cancellations.
        errors: One entry per failed fix, naming the fix.
        results: Per-item results in input order.
    """

    succeeded: int = 0
    failed: int = 0
    errors: list[str] = Field(default_factory=list)
    results: list[FixApplicationResult] = Field(default_factory=list)
