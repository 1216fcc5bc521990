"""Issue filtering by severity and file patterns."""

import re
from collections.abc import Iterable

from ..models import ReviewIssue, Severity

_SEVERITY_RANK = {Severity.INFO: 0, Severity.WARNING: 1, Severity.ERROR: 2}


def meets_threshold(severity: Severity, threshold: Severity) -> bool:
    """True if severity is at least as severe as threshold."""
    return _SEVERITY_RANK[severity] >= _SEVERITY_RANK[threshold]


def _glob_to_regex(pattern: str, any_chars: str) -> str:
    parts = re.split(r"(\*\*|\*)", pattern)
    return "".join(
        ".*" if part == "**" else any_chars if part == "*" else re.escape(part) for part in parts
    )


def should_exclude_file(path: str, patterns: Iterable[str]) -> bool:
    """Check a workspace-relative path against exclude patterns.

    Patterns containing "**" are searched for anywhere in the path, where
    "**" matches anything and "*" anything but "/". Other patterns with "*"
    must match the whole file name. Plain patterns match as substrings.

    Args:
        path: Workspace-relative path using "/" separators
        patterns: Exclude patterns

    Returns:
        True if any pattern matches
    """
    file_name = path.rsplit("/", 1)[-1]
    for pattern in patterns:
        if "**" in pattern:
            if re.search(_glob_to_regex(pattern, "[^/]*"), path):
                return True
        elif "*" in pattern:
            if re.fullmatch(_glob_to_regex(pattern, ".*"), file_name):
                return True
        elif pattern in path:
            return True
    return False


def filter_issues(
    issues: Iterable[ReviewIssue], threshold: Severity, exclude_patterns: Iterable[str] = ()
) -> list[ReviewIssue]:
    """Issues at or above threshold whose file is not excluded."""
    patterns = list(exclude_patterns)
    return [
        issue
        for issue in issues
        if meets_threshold(issue.severity, threshold)
        and not should_exclude_file(issue.file, patterns)
    ]
