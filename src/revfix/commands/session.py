"""Shared loading helpers for review commands."""

from pathlib import Path

import typer

from ..config import RevfixConfig, load_config
from ..errors import ConfigError, DocumentError, ReviewFileError
from ..models import ReviewIssue, ReviewResult
from ..output import OutputContext
from ..services import FileSystemDocumentStore, InMemoryDocumentStore, load_review
from ..services.documents import DocumentStore


def load_session(ctx: OutputContext, review_path: Path) -> tuple[RevfixConfig, ReviewResult]:
    """Load the workspace config and a review file, exiting with 1 on failure."""
    try:
        config = load_config(ctx.root)
    except ConfigError as e:
        ctx.error(str(e))
        raise typer.Exit(1) from None

    try:
        review = load_review(review_path)
    except ReviewFileError as e:
        ctx.error(str(e))
        raise typer.Exit(1) from None

    return config, review


def select_issue(ctx: OutputContext, review: ReviewResult, number: int) -> ReviewIssue:
    """Return the issue at a 1-based position, exiting with 1 if there is none."""
    if not 1 <= number <= len(review.issues):
        ctx.error(f"Issue {number} not found (review has {len(review.issues)} issues)")
        raise typer.Exit(1)
    return review.issues[number - 1]


def open_store(ctx: OutputContext, config: RevfixConfig, files: list[str]) -> DocumentStore:
    """Document store for the workspace.

    In dry-run mode the target files are loaded into memory so fixes are
    validated and applied exactly as usual without anything being written.
    Files that cannot be read are left out and fail when a fix needs them.
    """
    store = FileSystemDocumentStore(ctx.root, encoding=config.apply.encoding)
    if not ctx.dry_run:
        return store

    snapshot = {}
    for file in dict.fromkeys(files):
        try:
            snapshot[file] = store.read_document(file)
        except DocumentError:
            continue
    return InMemoryDocumentStore(snapshot)
