"""Output formatting for revfix CLI.

Commands print human-readable text through the rich console, or JSON
documents on stdout when --json is given. Never both.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from rich.console import Console

DRY_RUN_TAG = "[cyan][DRY RUN][/cyan]"


@dataclass
class OutputContext:
    """Per-invocation output settings.

    Attributes:
        console: Rich console for human-readable output
        json_mode: Emit JSON documents on stdout instead of rich text
        dry_run: Compute and show changes without writing anything
        root: Workspace root that issue paths are relative to
    """

    console: Console
    json_mode: bool = False
    dry_run: bool = False
    root: Path = field(default_factory=Path.cwd)

    def print(self, message: str) -> None:
        """Print rich markup unless in JSON mode."""
        if not self.json_mode:
            self.console.print(message)

    def print_json(self, data: dict[str, Any]) -> None:
        """Print data as JSON when in JSON mode."""
        if self.json_mode:
            print(json.dumps(data, indent=2, default=str))

    def result(self, data: dict[str, Any], message: str = "") -> None:
        """Print data in JSON mode, otherwise the message (if any)."""
        if self.json_mode:
            self.print_json(data)
        elif message:
            self.console.print(message)

    def error(self, message: str, data: dict[str, Any] | None = None) -> None:
        self.result({"error": message, **(data or {})}, f"[red]Error: {message}[/red]")

    def success(self, message: str, data: dict[str, Any] | None = None) -> None:
        self.result({"success": message, **(data or {})}, f"[green]{message}[/green]")

    def warning(self, message: str) -> None:
        self.print(f"[yellow]Warning: {message}[/yellow]")

    def dry_run_notice(self, message: str) -> None:
        """Say what a dry run would have done."""
        self.print(f"{DRY_RUN_TAG} {message}")


# Set by the cli.py main callback
_ctx: OutputContext | None = None


def get_output_context() -> OutputContext:
    """Current output context, or a default one outside the CLI."""
    if _ctx is None:
        return OutputContext(Console())
    return _ctx


def set_output_context(ctx: OutputContext) -> None:
    global _ctx
    _ctx = ctx
