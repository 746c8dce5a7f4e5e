"""Centralized error handling utilities for CLI commands."""

from rich.console import Console
from typer import Exit

from sassbuild.core.exceptions import (CompilationError, CompilerNotFoundError, ConfigError,
                                       FilesystemAccessError)


class BuildErrorHandler:
    """Context manager that maps sassbuild errors to console messages and exit code 1."""

    def __init__(self, console: Console | None = None):
        if not console:
            console = Console()
        self.console = console

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        if exc_type is None:
            return False

        if issubclass(exc_type, ConfigError):
            self._handle_config_error(exc_value)
        elif issubclass(exc_type, FilesystemAccessError):
            self._handle_filesystem_error(exc_value)
        elif issubclass(exc_type, CompilerNotFoundError):
            self._handle_compiler_not_found(exc_value)
        elif issubclass(exc_type, CompilationError):
            self._handle_compilation_error(exc_value)
        else:
            return False  # Let other exceptions propagate

        raise Exit(1)

    def _handle_config_error(self, e: ConfigError):
        self.console.print(f"[red]Invalid configuration:[/red] {e}")
        self.console.print("[yellow]To fix:[/yellow] Check [cyan]sassbuild.toml[/cyan] "
                           "or the [cyan]\\[tool.sassbuild][/cyan] table in [cyan]pyproject.toml[/cyan]")

    def _handle_filesystem_error(self, e: FilesystemAccessError):
        self.console.print(f"[red]Could not check file timestamps:[/red] {e}")
        if e.__cause__ is not None:
            self.console.print(f"[dim]Caused by: {e.__cause__}[/dim]")

    def _handle_compiler_not_found(self, e: CompilerNotFoundError):
        self.console.print(f"[red]Sass compiler not found:[/red] {e}")
        self.console.print("[yellow]To fix:[/yellow] Install Dart Sass or set "
                           "[cyan]sass_executable[/cyan] / [cyan]SASSBUILD_SASS[/cyan]")

    def _handle_compilation_error(self, e: CompilationError):
        """Handle compilation-specific errors."""
        self.console.print(f"[red]Sass compilation failed:[/red] {e}")
        if e.stderr:
            self.console.print(e.stderr.rstrip(), markup=False, highlight=False)
