"""revfix CLI: verify and apply AI code review fixes."""

from pathlib import Path

import typer

from revfix import __version__

from .commands import apply, apply_all, dismiss, init, preview, reconcile
from .logging import configure_logging
from .output import OutputContext, set_output_context


def _version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"revfix {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="revfix",
    help="Verify line numbers of AI review issues and apply their structured fixes",
    no_args_is_help=True,
)


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase verbosity (-v, -vv)",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress non-error output",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in JSON format for automation",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show what would change without writing any file",
    ),
    root: Path = typer.Option(
        Path("."),
        "--root",
        "-C",
        help="Workspace root that issue paths are relative to",
        file_okay=False,
        exists=True,
    ),
) -> None:
    """revfix - trustworthy, mechanically applied AI review fixes."""
    console = configure_logging(
        verbosity=verbose,
        quiet=quiet,
        no_color=no_color,
    )
    set_output_context(
        OutputContext(
            console=console,
            json_mode=json_output,
            dry_run=dry_run,
            root=root.resolve(),
        )
    )


app.command()(init)
app.command()(reconcile)
app.command()(preview)
app.command()(apply)
app.command("apply-all")(apply_all)
app.command()(dismiss)


def run() -> None:
    """Entry point for the revfix console script."""
    app()
