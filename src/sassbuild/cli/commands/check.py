from datetime import datetime

import typer
from rich.console import Console
from rich.table import Table

from ..app import app, app_state
from ..utils.error_handler import BuildErrorHandler
from ...config import ConfigManager
from ...core.scanner import DirectoryStats
from ...core.staleness import check_build

__all__ = []

console = Console()


def _format_mtime(mtime: float | None) -> str:
    if mtime is None:
        return "-"
    return datetime.fromtimestamp(mtime).strftime("%Y-%m-%d %H:%M:%S")


def _describe(stats: DirectoryStats | None) -> tuple[str, str, str]:
    if stats is None:
        return "missing", "-", "-"
    return str(stats.count), _format_mtime(stats.youngest), _format_mtime(stats.oldest)


@app.command()
def check(
        workers: int | None = typer.Option(
            None, "--workers", "-w", min=1,
            help="Scan template locations on this many threads"
        ),
):
    """
    Report whether the Sass templates need to be compiled, without compiling.
    """
    with BuildErrorHandler(console):
        config = ConfigManager.load_config(app_state.config_path)
        result = check_build(config.pairs(), config.build_directory,
                             workers if workers is not None else config.max_workers)

    if result.results:
        table = Table(title="Template locations")
        table.add_column("Location")
        table.add_column("Files", justify="right")
        table.add_column("Youngest")
        table.add_column("Oldest")
        table.add_column("Status")
        for pair_result in result.results:
            for label, stats in (("source", pair_result.source_stats), ("target", pair_result.target_stats)):
                count, youngest, oldest = _describe(stats)
                path = pair_result.pair.source if label == "source" else pair_result.pair.target
                status = ""
                if label == "target":
                    status = "[red]stale[/red]" if pair_result.required else "[green]ok[/green]"
                table.add_row(f"{label}: {path}", count, youngest, oldest, status)
        console.print(table)

    if result.required:
        console.print(f"[yellow]Build required:[/yellow] {result.reason}")
    else:
        console.print("[green]✓[/green] Stylesheets are up-to-date")
