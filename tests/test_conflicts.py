"""Tests for overlap detection in fix batches."""

from revfix.core import find_conflicts
from revfix.core.conflicts import FixConflict
from revfix.models import CodeFix, FixRequest, FixType


def request(file: str, type_: FixType, start: int, end: int | None = None) -> FixRequest:
    fix = CodeFix(type=type_, start_line=start, end_line=start if end is None else end)
    return FixRequest(file=file, fix=fix)


class TestFindConflicts:
    """Tests for find_conflicts."""

    def test_disjoint_ranges(self) -> None:
        requests = [
            request("a.py", FixType.REPLACE, 1, 2),
            request("a.py", FixType.DELETE, 3, 4),
        ]
        assert find_conflicts(requests) == []

    def test_overlapping_ranges(self) -> None:
        requests = [
            request("a.py", FixType.REPLACE, 1, 3),
            request("a.py", FixType.DELETE, 3, 4),
        ]
        assert find_conflicts(requests) == [FixConflict("a.py", 1, 2)]

    def test_different_files_never_conflict(self) -> None:
        requests = [
            request("a.py", FixType.REPLACE, 1, 3),
            request("b.py", FixType.REPLACE, 1, 3),
        ]
        assert find_conflicts(requests) == []

    def test_insert_conflicts_with_range_covering_its_line(self) -> None:
        requests = [
            request("a.py", FixType.DELETE, 2, 5),
            request("a.py", FixType.INSERT, 4),
        ]
        assert find_conflicts(requests) == [FixConflict("a.py", 1, 2)]

    def test_insert_end_line_ignored(self) -> None:
        """An insert only occupies its start line whatever end line it carries."""
        requests = [
            request("a.py", FixType.INSERT, 1, 10),
            request("a.py", FixType.REPLACE, 5),
        ]
        assert find_conflicts(requests) == []

    def test_every_pair_reported(self) -> None:
        requests = [request("a.py", FixType.REPLACE, 1, 5) for _ in range(3)]
        pairs = [(c.first, c.second) for c in find_conflicts(requests)]
        assert pairs == [(1, 2), (1, 3), (2, 3)]

    def test_describe(self) -> None:
        assert FixConflict("a.py", 1, 3).describe() == "a.py: fix 1 overlaps fix 3"
