"""Overlap detection for batches of fixes.

Fixes in a batch are applied in order, each against the document as the
previous one left it. Two fixes on the same file whose ranges overlap will
not both land where their authors intended. These are reported so the
user can decide; nothing here reorders, merges or drops fixes.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from ..models import CodeFix, FixRequest, FixType


@dataclass(frozen=True)
class FixConflict:
    """Two batch items on the same file with overlapping line ranges.

    Attributes:
        file: The shared target file
        first: 1-based batch position of the earlier fix
        second: 1-based batch position of the later fix
    """

    file: str
    first: int
    second: int

    def describe(self) -> str:
        return f"{self.file}: fix {self.first} overlaps fix {self.second}"


def _span(fix: CodeFix) -> tuple[int, int]:
    # An insert occupies the line it is inserted before
    if fix.type is FixType.INSERT:
        return fix.start_line, fix.start_line
    return fix.start_line, fix.end_line


def find_conflicts(requests: Sequence[FixRequest]) -> list[FixConflict]:
    """Return every overlapping pair of fixes targeting the same file."""
    conflicts = []
    for i, a in enumerate(requests):
        a_start, a_end = _span(a.fix)
        for j in range(i + 1, len(requests)):
            b = requests[j]
            if b.file != a.file:
                continue
            b_start, b_end = _span(b.fix)
            if a_start <= b_end and b_start <= a_end:
                conflicts.append(FixConflict(a.file, i + 1, j + 1))
    return conflicts
