"""Line reconciliation for reviewer-reported issues.

AI reviewers often report a line number that does not match the file:
diff-relative numbering, stale context or plain hallucination. When an
issue carries the snippet the reviewer believed was on that line, the
claim is checked against the live file and, on mismatch, the file is
searched for the snippet.

Matching is by substring on whitespace-trimmed lines and the earliest
matching line wins. A snippet that recurs in the file may therefore be
attributed to its first occurrence. Failing to find the snippet is not an
error: the claimed line is kept and the outcome is reported as unverified.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from ..constants import MIN_SNIPPET_LENGTH
from ..errors import DocumentError
from ..models import ReviewIssue
from ..services.documents import DocumentStore
from .address import LineIndex

logger = logging.getLogger(__name__)


class ReconcileStatus(str, Enum):
    """How an issue's line was settled."""

    SKIPPED = "skipped"  # no snippet, or too short to disambiguate
    VERIFIED = "verified"  # claimed line contains the snippet
    CORRECTED = "corrected"  # snippet found on another line
    UNVERIFIED = "unverified"  # snippet not found, claim kept


@dataclass(frozen=True)
class ReconcileOutcome:
    """Result of reconciling one issue.

    Attributes:
        status: How the line was settled.
        claimed_line: Line the issue carried before this reconciliation.
        line: Line the issue carries afterwards.
    """

    status: ReconcileStatus
    claimed_line: int
    line: int


def _find_snippet(lines: list[str], snippet: str) -> int | None:
    """1-based number of the first line containing snippet, or None."""
    for i, text in enumerate(lines):
        if snippet in text.strip():
            return i + 1
    return None


def reconcile_issue(
    issue: ReviewIssue, document_text: str, min_snippet_length: int = MIN_SNIPPET_LENGTH
) -> ReconcileOutcome:
    """Verify issue.line against the document and correct it if needed.

    Only issue.line (and issue.original_line, on correction) is modified. An
    issue is corrected at most once; later runs only verify.

    Args:
        issue: Issue to reconcile, modified in place
        document_text: Current content of issue.file
        min_snippet_length: Trimmed snippets of this length or shorter are skipped

    Returns:
        Outcome describing what happened
    """
    claimed = issue.line
    snippet = (issue.code_snippet or "").strip()
    if len(snippet) <= min_snippet_length:
        return ReconcileOutcome(ReconcileStatus.SKIPPED, claimed, claimed)

    lines = LineIndex(document_text).lines()
    current = lines[claimed - 1] if 1 <= claimed <= len(lines) else ""
    if snippet in current.strip():
        return ReconcileOutcome(ReconcileStatus.VERIFIED, claimed, claimed)

    found = None if issue.was_corrected else _find_snippet(lines, snippet)
    if found is None:
        logger.debug(f"Could not verify line {claimed} of {issue.file}")
        return ReconcileOutcome(ReconcileStatus.UNVERIFIED, claimed, claimed)

    logger.info(f"Corrected line number for {issue.file}: {claimed} -> {found}")
    issue.original_line = claimed
    issue.line = found
    return ReconcileOutcome(ReconcileStatus.CORRECTED, claimed, found)


def reconcile_issues(
    issues: Iterable[ReviewIssue],
    store: DocumentStore,
    min_snippet_length: int = MIN_SNIPPET_LENGTH,
) -> list[ReconcileOutcome]:
    """Reconcile every issue against its file's current content.

    Each file is read immediately before its issue is reconciled. An
    unreadable file leaves that issue unverified; it never stops the run.

    Args:
        issues: Issues to reconcile, modified in place
        store: Where to read documents from
        min_snippet_length: Passed through to reconcile_issue

    Returns:
        One outcome per issue, in order
    """
    outcomes = []
    for issue in issues:
        if len((issue.code_snippet or "").strip()) <= min_snippet_length:
            outcomes.append(ReconcileOutcome(ReconcileStatus.SKIPPED, issue.line, issue.line))
            continue
        try:
            text = store.read_document(issue.file)
        except DocumentError as e:
            logger.warning(f"Could not verify line number for {issue.file}: {e}")
            outcomes.append(ReconcileOutcome(ReconcileStatus.UNVERIFIED, issue.line, issue.line))
            continue
        outcomes.append(reconcile_issue(issue, text, min_snippet_length))
    return outcomes
