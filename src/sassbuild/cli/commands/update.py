from dataclasses import replace

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from ..app import app, app_state
from ..utils.error_handler import BuildErrorHandler
from ...config import ConfigManager
from ...core.builder import UpdateResult, update_stylesheets

__all__ = []

console = Console()


@app.command()
def update(
        force: bool = typer.Option(
            False, "--force", "-f",
            help="Force recompilation even if output is up-to-date"
        ),
        skip: bool = typer.Option(
            False, "--skip",
            help="Skip compiling Sass templates",
            envvar="SASSBUILD_SKIP"
        ),
        workers: int | None = typer.Option(
            None, "--workers", "-w", min=1,
            help="Scan template locations on this many threads"
        ),
):
    """
    Compile Sass templates if any template location changed.

    A build is required if the build directory is missing, if a source or target
    directory holds no files, or if a source tree changed after its target tree.
    """
    with BuildErrorHandler(console):
        config = ConfigManager.load_config(app_state.config_path)
        if skip:
            config = replace(config, skip=True)
        if workers is not None:
            config = replace(config, max_workers=workers)

        with Progress(
                SpinnerColumn(finished_text="[green]✓"),
                TextColumn("[progress.description]{task.description}"),
                console=console,
                transient=True
        ) as progress:
            task = progress.add_task("Updating stylesheets...", total=1)
            result = update_stylesheets(config, force=force)
            progress.update(task, completed=1)

    if result is UpdateResult.SKIPPED:
        console.print("[yellow]Skipped[/yellow] compiling Sass templates")
    elif result is UpdateResult.UP_TO_DATE:
        console.print("[green]✓[/green] Stylesheets are up-to-date")
        console.print("[dim]Use --force to recompile anyway[/dim]")
    else:
        console.print(f"[green]✓[/green] Compiled {len(config.template_locations)} template location(s)")
