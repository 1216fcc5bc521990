"""Reconcile command: verify and correct issue line numbers."""

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from ..core import ReconcileStatus, reconcile_issues
from ..output import get_output_context
from ..services import FileSystemDocumentStore, save_review
from .session import load_session

_STATUS_STYLE = {
    ReconcileStatus.VERIFIED: "green",
    ReconcileStatus.CORRECTED: "yellow",
    ReconcileStatus.UNVERIFIED: "red",
    ReconcileStatus.SKIPPED: "dim",
}


def reconcile(
    review: Annotated[
        Path,
        typer.Argument(help="Review JSON produced by the AI reviewer", exists=True, readable=True),
    ],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the corrected review to this path"),
    ] = None,
) -> None:
    """Check every issue's line against its file and correct it when the snippet moved.

    Issues whose snippet is found on the claimed line are verified. Otherwise
    the file is searched and the first line containing the snippet wins.
    Issues whose snippet cannot be found keep their line.

    Examples:
        revfix reconcile review.json
        revfix reconcile review.json --output review.fixed.json
    """
    ctx = get_output_context()
    config, result = load_session(ctx, review)

    store = FileSystemDocumentStore(ctx.root, encoding=config.apply.encoding)
    outcomes = reconcile_issues(result.issues, store, config.reconcile.min_snippet_length)

    corrected = sum(1 for o in outcomes if o.status is ReconcileStatus.CORRECTED)
    unverified = sum(1 for o in outcomes if o.status is ReconcileStatus.UNVERIFIED)

    if ctx.json_mode:
        ctx.print_json(
            {
                "corrected": corrected,
                "unverified": unverified,
                "outcomes": [
                    {
                        "issue": n,
                        "file": issue.file,
                        "claimed_line": outcome.claimed_line,
                        "line": outcome.line,
                        "status": outcome.status.value,
                    }
                    for n, (issue, outcome) in enumerate(zip(result.issues, outcomes), start=1)
                ],
            }
        )
    else:
        table = Table(title=f"Reconciled {len(outcomes)} issues")
        table.add_column("#", justify="right")
        table.add_column("File")
        table.add_column("Claimed", justify="right")
        table.add_column("Line", justify="right")
        table.add_column("Status")
        for n, (issue, outcome) in enumerate(zip(result.issues, outcomes), start=1):
            style = _STATUS_STYLE[outcome.status]
            table.add_row(
                str(n),
                issue.file,
                str(outcome.claimed_line),
                str(outcome.line),
                f"[{style}]{outcome.status.value}[/{style}]",
            )
        ctx.console.print(table)
        ctx.console.print(f"{corrected} corrected, {unverified} unverified")

    if output is None:
        return
    if ctx.dry_run:
        ctx.dry_run_notice(f"Would write corrected review to {output}")
        return
    save_review(output, result)
    ctx.print(f"[green]✓ Corrected review written to {output}[/green]")
