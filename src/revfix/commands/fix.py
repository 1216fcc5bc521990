"""Fix commands: preview, apply, apply-all and dismiss."""

from pathlib import Path
from typing import Annotated

import typer
from rich.panel import Panel
from rich.syntax import Syntax

from ..core import (
    USER_CANCELLED,
    ConfirmationRequest,
    FixApplicator,
    FixConflict,
    build_preview,
    dismiss_issue,
    filter_issues,
    find_conflicts,
    render_inline_preview,
    render_unified_diff,
)
from ..core.applicator import ConfirmCallback, NavigateCallback
from ..errors import DocumentError, RangeValidationError
from ..models import FixRequest, FixStatus, FreeTextFix, InvalidFix, ReviewIssue, StructuredFix
from ..output import DRY_RUN_TAG, OutputContext, get_output_context
from ..services import save_review
from .session import load_session, open_store, select_issue

ReviewArg = Annotated[
    Path,
    typer.Argument(help="Review JSON produced by the AI reviewer", exists=True, readable=True),
]
IssueOpt = Annotated[
    int,
    typer.Option("--issue", "-i", help="Issue number (1-based position in the review)"),
]


def _require_structured(ctx: OutputContext, issue: ReviewIssue) -> None:
    if issue.structured_fix is not None:
        return
    if issue.invalid_fix is not None:
        ctx.error(f"Issue has a malformed fix: {issue.invalid_fix.error}")
    elif isinstance(issue.suggested_fix, FreeTextFix):
        ctx.error("Issue only has a free-text suggestion, which cannot be applied")
        ctx.print(f"[dim]Suggestion: {issue.suggested_fix.description}[/dim]")
    else:
        ctx.error("Issue has no suggested fix")
    raise typer.Exit(1)


def _show_diff(ctx: OutputContext, diff: str) -> None:
    if diff:
        ctx.console.print(Syntax(diff, "diff", theme="ansi_dark", background_color="default"))
    else:
        ctx.print("[dim](no changes)[/dim]")


def preview(review: ReviewArg, issue: IssueOpt) -> None:
    """Show the change an issue's fix would make, without writing anything."""
    ctx = get_output_context()
    config, result = load_session(ctx, review)
    target = select_issue(ctx, result, issue)
    _require_structured(ctx, target)
    fix = target.structured_fix

    store = open_store(ctx, config, [target.file])
    try:
        original = store.read_document(target.file)
        new_text = build_preview(original, fix)
    except (DocumentError, RangeValidationError) as e:
        ctx.error(str(e))
        raise typer.Exit(1) from None

    diff = render_unified_diff(original, new_text, target.file)
    if ctx.json_mode:
        ctx.print_json({"file": target.file, "diff": diff, "preview": new_text})
        return

    title = f"{target.file} (lines {fix.start_line}-{fix.end_line}, {fix.type.value})"
    ctx.console.print(Panel(fix.description or target.message or "Suggested fix", title=title))
    _show_diff(ctx, diff)


def _confirm_on_terminal(ctx: OutputContext) -> ConfirmCallback:
    def confirm(request: ConfirmationRequest) -> bool:
        fix = request.fix
        ctx.console.print(
            Panel(
                render_inline_preview(request.original_text, fix),
                title=f"Apply fix to {request.file} (lines {fix.start_line}-{fix.end_line})?",
                subtitle=fix.description or None,
            )
        )
        diff = render_unified_diff(request.original_text, request.preview_text, request.file)
        _show_diff(ctx, diff)
        return typer.confirm("Apply this fix?", default=False)

    return confirm


def _navigate_on_terminal(ctx: OutputContext) -> NavigateCallback:
    def navigate(file: str, line: int) -> None:
        ctx.print(f"[dim]→ {file}:{line}[/dim]")

    return navigate


def apply(
    review: ReviewArg,
    issue: IssueOpt,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Apply without asking for confirmation"),
    ] = False,
) -> None:
    """Apply one issue's fix, after showing a preview and asking for confirmation.

    The issue's fix status is recorded back into the review file.

    Examples:
        revfix apply review.json --issue 3
        revfix apply review.json -i 3 --yes
    """
    ctx = get_output_context()
    config, result = load_session(ctx, review)
    target = select_issue(ctx, result, issue)
    if target.fix_status in (FixStatus.APPLIED, FixStatus.DISMISSED):
        ctx.error(f"Issue {issue} is already {target.fix_status.value}")
        raise typer.Exit(1)
    _require_structured(ctx, target)

    ask = config.apply.confirm and not yes and not ctx.json_mode and not ctx.dry_run
    applicator = FixApplicator(
        open_store(ctx, config, [target.file]),
        confirm=_confirm_on_terminal(ctx) if ask else None,
        navigate=_navigate_on_terminal(ctx),
    )
    outcome = applicator.apply_issue_fix(target, show_confirmation=ask)

    if ctx.dry_run:
        verdict = "would apply cleanly" if outcome.success else f"would fail: {outcome.error}"
        ctx.dry_run_notice(f"Fix for {target.file} {verdict}")
        ctx.print_json({"issue": issue, "file": target.file, **outcome.model_dump()})
        if not outcome.success:
            raise typer.Exit(1)
        return

    save_review(review, result)

    if outcome.success:
        lines = outcome.applied_lines
        ctx.success(
            f"✓ Fix applied to {target.file} (lines {lines.start}-{lines.end})",
            {"issue": issue, "file": target.file, "applied_lines": lines.model_dump()},
        )
        return
    if outcome.error == USER_CANCELLED:
        ctx.print("[yellow]Fix not applied.[/yellow]")
        ctx.print_json({"issue": issue, "file": target.file, "error": outcome.error})
        return
    ctx.error(f"Fix for {target.file} failed: {outcome.error}", {"issue": issue})
    raise typer.Exit(1)


def apply_all(review: ReviewArg) -> None:
    """Apply every pending structured fix in the review, one after another.

    Issues below the configured severity threshold or in excluded files are
    left alone. A malformed fix counts as a failure. A failing fix does not
    stop the others. Fixes whose line
    ranges overlap on the same file are reported before applying; they are
    still applied in order.
    """
    ctx = get_output_context()
    config, result = load_session(ctx, review)

    pending = [
        i
        for i in result.issues
        if i.fix_status is FixStatus.PENDING
        and isinstance(i.suggested_fix, StructuredFix | InvalidFix)
    ]
    selected = filter_issues(
        pending, config.filters.severity_threshold, config.filters.exclude_patterns
    )
    if not selected:
        ctx.result({"succeeded": 0, "failed": 0, "errors": []}, "No pending fixes to apply.")
        return

    # Number conflicts by batch position, which counts malformed fixes too
    structured = [(k, i) for k, i in enumerate(selected, start=1) if i.structured_fix is not None]
    requests = [FixRequest(file=i.file, fix=i.structured_fix) for _, i in structured]
    for conflict in find_conflicts(requests):
        first, second = structured[conflict.first - 1][0], structured[conflict.second - 1][0]
        ctx.warning(FixConflict(conflict.file, first, second).describe())

    def report_progress(k: int, total: int, file: str) -> None:
        ctx.print(f"[dim]({k}/{total}) {file}[/dim]")

    applicator = FixApplicator(open_store(ctx, config, [i.file for i in selected]))
    batch = applicator.apply_issue_fixes(selected, on_progress=report_progress)

    if not ctx.dry_run:
        save_review(review, result)

    prefix = f"{DRY_RUN_TAG} " if ctx.dry_run else ""
    ctx.result(
        batch.model_dump(exclude={"results"}),
        f"{prefix}[bold]{batch.succeeded} applied, {batch.failed} failed[/bold]",
    )
    for error in batch.errors:
        ctx.print(f"[red]  ✗ {error}[/red]")
    if batch.failed:
        raise typer.Exit(1)


def dismiss(review: ReviewArg, issue: IssueOpt) -> None:
    """Mark an issue as dismissed in the review file."""
    ctx = get_output_context()
    _config, result = load_session(ctx, review)
    target = select_issue(ctx, result, issue)

    if not dismiss_issue(target):
        ctx.print(f"[yellow]Issue {issue} is already {target.fix_status.value}[/yellow]")
        return
    if ctx.dry_run:
        ctx.dry_run_notice(f"Would dismiss issue {issue}")
        return
    save_review(review, result)
    ctx.success(f"Issue {issue} dismissed", {"issue": issue})
