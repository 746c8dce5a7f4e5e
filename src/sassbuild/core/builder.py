"""
Stylesheet update service for programmatic use.

The CLI should use this service rather than implementing the build decision directly.
"""

import logging
from enum import Enum

from ..config import BuildConfig
from .compiler import SassCompiler
from .staleness import check_build

__all__ = ['UpdateResult', 'create_compiler', 'update_stylesheets']

logger = logging.getLogger(__name__)


class UpdateResult(Enum):
    SKIPPED = "skipped"
    UP_TO_DATE = "up-to-date"
    COMPILED = "compiled"


def create_compiler(config: BuildConfig) -> SassCompiler:
    """Create a compiler configured from ``config``."""
    return SassCompiler(
        executable=config.sass_executable,
        style=config.style,
        source_map=config.source_map,
        load_paths=config.load_paths,
        quiet=config.quiet,
    )


def update_stylesheets(config: BuildConfig, force: bool = False,
                       compiler: SassCompiler | None = None) -> UpdateResult:
    """
    Compile the configured templates if any of them is out of date.

    :param config: Build configuration
    :param force: Compile even if every location is up-to-date
    :param compiler: Compiler to use, created from the config if not given
    :return: What happened
    :raises FilesystemAccessError: If timestamps can't be checked
    :raises CompilationError: If the compiler fails
    """
    if config.skip:
        logger.info("Skip compiling Sass templates")
        return UpdateResult.SKIPPED

    if not force:
        check = check_build(config.pairs(), config.build_directory, config.max_workers)
        if not check.required:
            logger.info("Skip compiling Sass templates, no changes.")
            return UpdateResult.UP_TO_DATE
        logger.info("Build required: %s", check.reason)

    logger.info("Compiling Sass templates")
    if compiler is None:
        compiler = create_compiler(config)
    compiler.compile(config.pairs())
    return UpdateResult.COMPILED
