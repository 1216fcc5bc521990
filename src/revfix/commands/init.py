"""Init command implementation."""

from ..config import get_config_dir, write_config_template
from ..constants import CONFIG_FILE
from ..output import get_output_context


def init() -> None:
    """Create a .revfix/config.toml template in the workspace."""
    ctx = get_output_context()
    config_dir = get_config_dir(ctx.root)
    config_path = config_dir / CONFIG_FILE

    if ctx.dry_run:
        ctx.dry_run_notice("Would initialize revfix in this workspace:")
        if not config_path.exists():
            ctx.print(f"  Create config: {config_path}")
        else:
            ctx.print(f"  Config already exists: {config_path}")
        return

    if config_path.exists():
        ctx.result(
            {"created": False, "config": str(config_path)},
            f"[yellow]Config already exists:[/yellow] {config_path}",
        )
        return

    write_config_template(config_dir)
    ctx.result(
        {"created": True, "config": str(config_path)},
        f"[green]Created config template:[/green] {config_path}",
    )
