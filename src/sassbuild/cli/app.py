import logging
from dataclasses import dataclass
from pathlib import Path

import typer
from rich.logging import RichHandler

__all__ = ['app', 'app_state', 'AppState']

app = typer.Typer(
    no_args_is_help=True,
    rich_markup_mode="rich",
    help="Incremental Sass stylesheet builder",
)


@dataclass
class AppState:
    config_path: Path | None = None
    verbose: bool = False


app_state = AppState()


def setup_logging(verbose: bool = False):
    """Route library logging through rich."""
    root = logging.getLogger("sassbuild")
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.addHandler(RichHandler(show_path=False, show_time=False, markup=False))
    root.setLevel(logging.DEBUG if verbose else logging.INFO)


@app.callback()
def main(
        config: Path | None = typer.Option(
            None, "--config", "-c", dir_okay=False,
            help="Path to TOML configuration file (defaults to sassbuild.toml or pyproject.toml)",
            envvar="SASSBUILD_CONFIG"
        ),
        verbose: bool = typer.Option(
            False, "--verbose", "-v",
            help="Show per-location details"
        ),
):
    """
    Compile Sass templates only when they changed.
    """
    app_state.config_path = config
    app_state.verbose = verbose
    setup_logging(verbose)
