"""Core fix engine for revfix.

This package contains pure logic; documents are reached only through a
DocumentStore passed in by the caller:
- address: line range validation and offset resolution
- reconcile: verification and correction of reported issue lines
- preview: computing a document's content after a fix
- applicator: validate/confirm/write sequencing for single fixes and batches
- conflicts: overlap detection within a batch
- diagnostics: issue lookup by diagnostic position
- filters: severity and file-pattern filtering
"""

from .address import LineIndex, RangeMode, ResolvedRange, resolve_range, to_offsets
from .applicator import (
    ALREADY_APPLIED,
    FREE_TEXT_NOT_APPLIABLE,
    INVALID_FIX_FORMAT,
    ISSUE_DISMISSED,
    NO_SUGGESTED_FIX,
    USER_CANCELLED,
    ConfirmationRequest,
    FixApplicator,
    FixState,
    dismiss_issue,
)
from .conflicts import FixConflict, find_conflicts
from .diagnostics import DiagnosticIndex, DiagnosticKey
from .filters import filter_issues, meets_threshold, should_exclude_file
from .preview import build_preview, render_inline_preview, render_unified_diff
from .reconcile import ReconcileOutcome, ReconcileStatus, reconcile_issue, reconcile_issues

__all__ = [
    "ALREADY_APPLIED",
    "FREE_TEXT_NOT_APPLIABLE",
    "INVALID_FIX_FORMAT",
    "ISSUE_DISMISSED",
    "NO_SUGGESTED_FIX",
    "USER_CANCELLED",
    "ConfirmationRequest",
    "DiagnosticIndex",
    "DiagnosticKey",
    "FixApplicator",
    "FixConflict",
    "FixState",
    "LineIndex",
    "RangeMode",
    "ReconcileOutcome",
    "ReconcileStatus",
    "ResolvedRange",
    "build_preview",
    "dismiss_issue",
    "filter_issues",
    "find_conflicts",
    "meets_threshold",
    "reconcile_issue",
    "reconcile_issues",
    "render_inline_preview",
    "render_unified_diff",
    "resolve_range",
    "should_exclude_file",
    "to_offsets",
]
