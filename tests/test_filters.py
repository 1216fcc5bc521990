"""Tests for severity and file pattern filtering."""

import pytest

from revfix.constants import DEFAULT_EXCLUDE_PATTERNS
from revfix.core import filter_issues, meets_threshold, should_exclude_file
from revfix.models import ReviewIssue, Severity


class TestMeetsThreshold:
    """Tests for meets_threshold."""

    @pytest.mark.parametrize(
        "severity,threshold,expected",
        [
            (Severity.INFO, Severity.INFO, True),
            (Severity.INFO, Severity.WARNING, False),
            (Severity.WARNING, Severity.WARNING, True),
            (Severity.ERROR, Severity.WARNING, True),
            (Severity.WARNING, Severity.ERROR, False),
        ],
    )
    def test_ranking(self, severity: Severity, threshold: Severity, expected: bool) -> None:
        assert meets_threshold(severity, threshold) is expected


class TestShouldExcludeFile:
    """Tests for should_exclude_file."""

    @pytest.mark.parametrize(
        "path",
        [
            "node_modules/lodash/index.js",
            "packages/web/node_modules/react/index.js",
            "dist/bundle.js",
            "build/out.js",
            "static/app.min.js",
        ],
    )
    def test_default_patterns_exclude(self, path: str) -> None:
        assert should_exclude_file(path, DEFAULT_EXCLUDE_PATTERNS)

    @pytest.mark.parametrize("path", ["src/app.ts", "src/min.ts", "lib/builder.py"])
    def test_default_patterns_keep(self, path: str) -> None:
        assert not should_exclude_file(path, DEFAULT_EXCLUDE_PATTERNS)

    def test_single_star_stays_in_file_name(self) -> None:
        assert should_exclude_file("src/gen_types.ts", ["gen_*"])
        assert not should_exclude_file("gen_dir/app.ts", ["gen_*"])

    def test_double_star_anchors_on_path(self) -> None:
        assert should_exclude_file("src/a/test.ts", ["src/**/*.ts"])
        assert not should_exclude_file("lib/a/test.ts", ["src/**/*.ts"])

    def test_plain_pattern_is_substring(self) -> None:
        assert should_exclude_file("src/generated/api.ts", ["generated"])

    def test_no_patterns(self) -> None:
        assert not should_exclude_file("anything.js", [])


class TestFilterIssues:
    """Tests for filter_issues."""

    def test_threshold_and_patterns_combined(self) -> None:
        issues = [
            ReviewIssue(file="src/a.ts", line=1, severity=Severity.ERROR),
            ReviewIssue(file="src/b.ts", line=1, severity=Severity.INFO),
            ReviewIssue(file="dist/a.js", line=1, severity=Severity.ERROR),
        ]
        kept = filter_issues(issues, Severity.WARNING, ["dist/**"])
        assert [i.file for i in kept] == ["src/a.ts"]

    def test_defaults_keep_everything(self) -> None:
        issues = [ReviewIssue(file="x.ts", line=1, severity=s) for s in Severity]
        assert len(filter_issues(issues, Severity.INFO)) == 3
