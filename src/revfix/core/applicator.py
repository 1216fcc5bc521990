"""Fix application: validate, confirm, write, report.

A single fix moves through the states

    pending -> validating -> (confirmed | cancelled) -> applying -> (applied | failed)

Confirmation is optional and delegated to a collaborator (the CLI asks on
the terminal, an editor would show a dialog). Batches never ask.

Every failure is returned as a FixApplicationResult carrying an error
string; nothing raised by validation, reading, writing or cancellation
escapes apply_fix. This lets a batch always produce a complete report.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum

from ..errors import DocumentError, RangeValidationError
from ..models import (
    AppliedLines,
    BatchResult,
    CodeFix,
    FixApplicationResult,
    FixRequest,
    FixStatus,
    FreeTextFix,
    InvalidFix,
    ReviewIssue,
    StructuredFix,
)
from ..services.documents import DocumentStore
from .address import LineIndex, resolve_range
from .preview import build_preview

logger = logging.getLogger(__name__)

USER_CANCELLED = "User cancelled"
FREE_TEXT_NOT_APPLIABLE = "Free-text fix cannot be applied automatically"
NO_SUGGESTED_FIX = "Issue has no suggested fix"
INVALID_FIX_FORMAT = "Invalid fix format"
ALREADY_APPLIED = "Issue fix already applied"
ISSUE_DISMISSED = "Issue was dismissed"


class FixState(str, Enum):
    """States a single fix passes through."""

    PENDING = "pending"
    VALIDATING = "validating"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    APPLYING = "applying"
    APPLIED = "applied"
    FAILED = "failed"


@dataclass(frozen=True)
class ConfirmationRequest:
    """What the confirmation collaborator is shown.

    Attributes:
        file: Target file (workspace-relative)
        fix: The fix about to be applied
        original_text: Document content the preview was computed from
        preview_text: Document content after the fix
    """

    file: str
    fix: CodeFix
    original_text: str
    preview_text: str


ConfirmCallback = Callable[[ConfirmationRequest], bool]
NavigateCallback = Callable[[str, int], None]
ProgressCallback = Callable[[int, int, str], None]


class FixApplicator:
    """Applies structured fixes to documents in a store.

    Args:
        store: Where documents are read from and written to
        confirm: Asked before applying when confirmation is requested;
            returning False cancels the fix
        navigate: Called with (file, start_line) after a fix is applied
    """

    def __init__(
        self,
        store: DocumentStore,
        confirm: ConfirmCallback | None = None,
        navigate: NavigateCallback | None = None,
    ) -> None:
        self.store = store
        self.confirm = confirm
        self.navigate = navigate

    def _transition(self, file: str, state: FixState) -> None:
        logger.debug(f"Fix for {file}: {state.value}")

    def _fail(self, file: str, error: str) -> FixApplicationResult:
        self._transition(file, FixState.FAILED)
        logger.warning(f"Fix for {file} failed: {error}")
        return FixApplicationResult(success=False, error=error)

    def apply_fix(
        self, file: str, fix: CodeFix, show_confirmation: bool = True
    ) -> FixApplicationResult:
        """Apply one fix to file.

        Args:
            file: Target document path
            fix: Structured fix to apply
            show_confirmation: Ask the confirm collaborator first (if one is set)

        Returns:
            Result with applied_lines on success, or the reason for failure
        """
        self._transition(file, FixState.PENDING)
        try:
            original = self.store.read_document(file)
        except DocumentError as e:
            return self._fail(file, f"Could not read {e}")

        self._transition(file, FixState.VALIDATING)
        try:
            resolve_range(fix, LineIndex(original).line_count)
        except RangeValidationError as e:
            return self._fail(file, str(e))

        if show_confirmation and self.confirm is not None:
            request = ConfirmationRequest(file, fix, original, build_preview(original, fix))
            if not self.confirm(request):
                self._transition(file, FixState.CANCELLED)
                return FixApplicationResult(success=False, error=USER_CANCELLED)
            self._transition(file, FixState.CONFIRMED)
            # The user approved a preview of this exact content
            try:
                current = self.store.read_document(file)
            except DocumentError as e:
                return self._fail(file, f"Could not read {e}")
            if current != original:
                return self._fail(file, f"{file} changed while awaiting confirmation")

        self._transition(file, FixState.APPLYING)
        try:
            self.store.write_document(file, build_preview(original, fix))
        except DocumentError as e:
            return self._fail(file, f"Failed to apply edit: {e}")

        self._transition(file, FixState.APPLIED)
        logger.info(f"Fix applied to {file} (lines {fix.start_line}-{fix.end_line})")
        if self.navigate is not None:
            self.navigate(file, fix.start_line)
        return FixApplicationResult(
            success=True, applied_lines=AppliedLines(start=fix.start_line, end=fix.end_line)
        )

    def apply_issue_fix(
        self, issue: ReviewIssue, show_confirmation: bool = True
    ) -> FixApplicationResult:
        """Apply an issue's suggested fix and record the outcome on the issue.

        Issues already applied or dismissed are left alone. A malformed fix
        marks the issue failed. A cancelled fix leaves the issue pending so
        it can be retried.
        """
        error = _unappliable_reason(issue)
        if error is not None:
            if issue.invalid_fix is not None and issue.fix_status is FixStatus.PENDING:
                issue.fix_status = FixStatus.FAILED
            logger.debug(f"Fix for {issue.file} not attempted: {error}")
            return FixApplicationResult(success=False, error=error)

        result = self.apply_fix(issue.file, issue.structured_fix, show_confirmation)
        if result.success:
            issue.fix_status = FixStatus.APPLIED
        elif result.error != USER_CANCELLED:
            issue.fix_status = FixStatus.FAILED
        return result

    def apply_multiple(
        self, requests: Iterable[FixRequest], on_progress: ProgressCallback | None = None
    ) -> BatchResult:
        """Apply fixes one after another without confirmation.

        Fixes are applied in the given order, each against the document as
        left by the previous one. A failure never stops the batch.

        Args:
            requests: Fixes to apply
            on_progress: Called with (1-based index, total, file) before each fix

        Returns:
            Aggregate counts, one error entry per failed fix, and per-item results
        """
        items = list(requests)
        batch = BatchResult()
        for k, request in enumerate(items, start=1):
            if on_progress is not None:
                on_progress(k, len(items), request.file)
            result = self.apply_fix(request.file, request.fix, show_confirmation=False)
            _record(batch, k, request.file, result)
        return batch

    def apply_issue_fixes(
        self, issues: Iterable[ReviewIssue], on_progress: ProgressCallback | None = None
    ) -> BatchResult:
        """Batch-apply the fixes of pending or failed issues, updating their fix status.

        Issues with a structured or malformed fix are part of the batch; a
        malformed one counts as a failed item. Free-text and missing fixes,
        and issues already applied or dismissed, are skipped.
        """
        selected = [
            issue
            for issue in issues
            if issue.fix_status in (FixStatus.PENDING, FixStatus.FAILED)
            and isinstance(issue.suggested_fix, StructuredFix | InvalidFix)
        ]
        batch = BatchResult()
        for k, issue in enumerate(selected, start=1):
            if on_progress is not None:
                on_progress(k, len(selected), issue.file)
            _record(batch, k, issue.file, self.apply_issue_fix(issue, show_confirmation=False))
        return batch


def _unappliable_reason(issue: ReviewIssue) -> str | None:
    if issue.fix_status is FixStatus.APPLIED:
        return ALREADY_APPLIED
    if issue.fix_status is FixStatus.DISMISSED:
        return ISSUE_DISMISSED
    if issue.invalid_fix is not None:
        return f"{INVALID_FIX_FORMAT}: {issue.invalid_fix.error}"
    if isinstance(issue.suggested_fix, FreeTextFix):
        return FREE_TEXT_NOT_APPLIABLE
    if issue.structured_fix is None:
        return NO_SUGGESTED_FIX
    return None


def _record(batch: BatchResult, k: int, file: str, result: FixApplicationResult) -> None:
    batch.results.append(result)
    if result.success:
        batch.succeeded += 1
    else:
        batch.failed += 1
        batch.errors.append(f"{file} (fix {k}): {result.error or 'Unknown error'}")


def dismiss_issue(issue: ReviewIssue) -> bool:
    """Mark an issue dismissed. Applied issues stay applied.

    Returns:
        True if the status changed
    """
    if issue.fix_status in (FixStatus.APPLIED, FixStatus.DISMISSED):
        return False
    issue.fix_status = FixStatus.DISMISSED
    return True
