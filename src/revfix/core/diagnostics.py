"""Association between issue positions and their suggested fixes.

Whoever publishes diagnostics for a review owns a DiagnosticIndex and
passes it to whatever later needs to find the fix for a position (a quick
fix action, a CLI lookup). There is no module-level registry.
"""

from collections.abc import Iterable, Iterator
from typing import NamedTuple

from ..models import CodeFix, ReviewIssue


class DiagnosticKey(NamedTuple):
    """Position of a diagnostic: file, 0-based line, character."""

    file: str
    line: int
    character: int = 0


class DiagnosticIndex:
    """Issues keyed by the position their diagnostic is shown at.

    When several issues share a position the first one registered is kept.
    """

    def __init__(self) -> None:
        self._issues: dict[DiagnosticKey, ReviewIssue] = {}

    @classmethod
    def from_issues(cls, issues: Iterable[ReviewIssue]) -> "DiagnosticIndex":
        index = cls()
        for issue in issues:
            index.add(issue)
        return index

    @staticmethod
    def key_for(issue: ReviewIssue) -> DiagnosticKey:
        return DiagnosticKey(issue.file, max(0, issue.line - 1), 0)

    def add(self, issue: ReviewIssue) -> DiagnosticKey:
        key = self.key_for(issue)
        self._issues.setdefault(key, issue)
        return key

    def issue_at(self, file: str, line: int, character: int = 0) -> ReviewIssue | None:
        """Issue whose diagnostic starts at (file, 0-based line, character)."""
        return self._issues.get(DiagnosticKey(file, line, character))

    def fix_at(self, file: str, line: int, character: int = 0) -> CodeFix | None:
        """Structured fix for the diagnostic at a position, if it has one."""
        issue = self.issue_at(file, line, character)
        return issue.structured_fix if issue is not None else None

    def __len__(self) -> int:
        return len(self._issues)

    def __iter__(self) -> Iterator[DiagnosticKey]:
        return iter(self._issues)
