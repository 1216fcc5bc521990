"""Line addressing for structured fixes.

Converts a fix's 1-based inclusive line range into a resolved range over
0-based lines, and a resolved range into character offsets of a document.

Line conventions follow editors: lines are separated by "\\r\\n", "\\n" or a
lone "\\r", and the line count is the number of terminators plus one. An
empty document therefore has one empty line, and a document ending in a
terminator has an empty final line.
"""

import re
from collections import Counter
from dataclasses import dataclass
from enum import Enum

from ..errors import RangeValidationError
from ..models import CodeFix, FixType

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


class LineIndex:
    """Offsets of every line in a document's text.

    Built from a single read of the document; never reused across reads.

    Attributes:
        text: The document text the index was built from.
        eol: Most common line terminator in the text ("\\n" if there is none).
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self._starts = [0]
        self._ends: list[int] = []
        terminators: Counter[str] = Counter()
        for match in _LINE_BREAK.finditer(text):
            self._ends.append(match.start())
            self._starts.append(match.end())
            terminators[match.group()] += 1
        self._ends.append(len(text))
        self.eol = terminators.most_common(1)[0][0] if terminators else "\n"

    @property
    def line_count(self) -> int:
        return len(self._starts)

    @property
    def ends_with_terminator(self) -> bool:
        return self.line_count > 1 and self._starts[-1] == len(self.text)

    def line_start(self, line: int) -> int:
        """Offset of the first character of a 0-based line."""
        return self._starts[line]

    def line_end(self, line: int) -> int:
        """Offset just past a 0-based line's content, before its terminator."""
        return self._ends[line]

    def line_text(self, line: int) -> str:
        """Content of a 0-based line without its terminator."""
        return self.text[self._starts[line] : self._ends[line]]

    def lines(self) -> list[str]:
        """All lines without terminators."""
        return [self.line_text(i) for i in range(self.line_count)]


class RangeMode(str, Enum):
    """How a resolved range is turned into offsets."""

    # Zero-width point at the start of start_line
    POINT = "point"
    # Start of start_line through the start of end_line (end of document if past the last line)
    THROUGH_NEXT_LINE = "through_next_line"
    # Start of start_line through the end of end_line's content
    THROUGH_LINE_END = "through_line_end"


@dataclass(frozen=True)
class ResolvedRange:
    """A validated fix range over 0-based lines.

    Attributes:
        start_line: 0-based line the edit starts at.
        end_line: 0-based line the edit ends at, interpreted according to mode.
        mode: How to compute the end offset.
    """

    start_line: int
    end_line: int
    mode: RangeMode


def resolve_range(fix: CodeFix, line_count: int) -> ResolvedRange:
    """Validate a fix against a document's line count and resolve its range.

    Args:
        fix: Structured fix with 1-based inclusive lines
        line_count: Current number of lines in the target document

    Returns:
        The resolved range

    Raises:
        RangeValidationError: If a bound is out of range or the range is reversed.
            Out-of-range lines are never clamped.
    """
    start, end = fix.start_line, fix.end_line

    if not 1 <= start <= line_count + 1:
        raise RangeValidationError(
            f"Start line {start} is out of range (1-{line_count + 1})",
            bound="start",
            value=start,
            valid_range=(1, line_count + 1),
        )

    if fix.type is FixType.INSERT:
        return ResolvedRange(start - 1, start - 1, RangeMode.POINT)

    if not 1 <= end <= line_count:
        raise RangeValidationError(
            f"End line {end} is out of range (1-{line_count})",
            bound="end",
            value=end,
            valid_range=(1, line_count),
        )
    if start > end:
        raise RangeValidationError(
            f"End line {end} is before start line {start}",
            bound="order",
            value=end,
            valid_range=(start, line_count),
        )

    if fix.type is FixType.DELETE:
        # Consume the last line's terminator so no blank line is left behind
        return ResolvedRange(start - 1, min(end, line_count), RangeMode.THROUGH_NEXT_LINE)
    return ResolvedRange(start - 1, end - 1, RangeMode.THROUGH_LINE_END)


def to_offsets(resolved: ResolvedRange, index: LineIndex) -> tuple[int, int]:
    """Convert a resolved range into (start, end) character offsets of index.text."""
    doc_end = len(index.text)

    def start_of(line: int) -> int:
        return index.line_start(line) if line < index.line_count else doc_end

    start = start_of(resolved.start_line)
    if resolved.mode is RangeMode.POINT:
        return start, start
    if resolved.mode is RangeMode.THROUGH_NEXT_LINE:
        return start, start_of(resolved.end_line)
    return start, index.line_end(resolved.end_line)
