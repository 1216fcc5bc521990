"""Pydantic data models for revfix.

This package defines the data structures shared across revfix:
- Review issues and their suggested fixes (ReviewIssue, CodeFix,
  FreeTextFix, StructuredFix, InvalidFix)
- The review envelope loaded from the AI reviewer (ReviewResult)
- Fix application outcomes (FixApplicationResult, AppliedLines,
  FixRequest, BatchResult)

JSON field names follow the reviewer's camelCase; Python attributes are
snake_case and either form is accepted on input.

Example:
    >>> from revfix.models import ReviewIssue
    >>> issue = ReviewIssue.model_validate(
    ...     {"file": "app.ts", "line": 3, "severity": "error", "codeSnippet": "const x = 1;"}
    ... )
    >>> issue.model_dump_json(by_alias=True)
"""

from .issues import (
    CodeFix,
    FixStatus,
    FixType,
    FreeTextFix,
    InvalidFix,
    ReviewIssue,
    Severity,
    StructuredFix,
    SuggestedFix,
)
from .results import AppliedLines, BatchResult, FixApplicationResult, FixRequest
from .review import ReviewResult

__all__ = [
    "AppliedLines",
    "BatchResult",
    "CodeFix",
    "FixApplicationResult",
    "FixRequest",
    "FixStatus",
    "FixType",
    "FreeTextFix",
    "InvalidFix",
    "ReviewIssue",
    "ReviewResult",
    "Severity",
    "StructuredFix",
    "SuggestedFix",
]
