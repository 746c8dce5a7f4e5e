"""
External Sass compiler invocation.
"""

import logging
import subprocess
from pathlib import Path
from typing import Sequence

from .exceptions import CompilationError, CompilerNotFoundError
from .staleness import DirectoryPair

__all__ = ['SassCompiler']

logger = logging.getLogger(__name__)


class SassCompiler:
    """
    Compiles Sass templates with the ``sass`` command line tool in ``--update`` mode.
    """

    def __init__(self, executable: str = "sass", style: str = "expanded", source_map: bool = True,
                 load_paths: Sequence[Path] = (), quiet: bool = False):
        """
        Initialize the compiler.

        :param executable: Name or path of the Sass executable
        :param style: Output style, ``expanded`` or ``compressed``
        :param source_map: Generate source maps next to the output
        :param load_paths: Extra directories searched by ``@use`` and ``@import``
        :param quiet: Suppress compiler warnings
        """
        self.executable = executable
        self.style = style
        self.source_map = source_map
        self.load_paths = list(load_paths)
        self.quiet = quiet

    def build_command(self, pairs: Sequence[DirectoryPair]) -> list[str]:
        """
        Build the compiler command line for the given pairs.

        :param pairs: Source and target directories to compile
        :return: The command as argument list
        """
        cmd = [self.executable, "--update", f"--style={self.style}"]
        if not self.source_map:
            cmd.append("--no-source-map")
        if self.quiet:
            cmd.append("--quiet")
        cmd.extend(f"--load-path={path}" for path in self.load_paths)
        cmd.extend(f"{pair.source}:{pair.target}" for pair in pairs)
        return cmd

    def compile(self, pairs: Sequence[DirectoryPair]) -> subprocess.CompletedProcess:
        """
        Compile all pairs with one compiler run.

        :param pairs: Source and target directories to compile
        :return: The finished process
        :raises CompilerNotFoundError: If the executable can't be found
        :raises CompilationError: If the compiler can't be started or exits with an error
        """
        cmd = self.build_command(pairs)
        for pair in pairs:
            try:
                pair.target.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise CompilationError(f"Cannot create output directory {pair.target}: {e}", command=cmd) from e

        logger.debug("Running %s", " ".join(cmd))
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, check=False)
        except FileNotFoundError:
            raise CompilerNotFoundError(f"Sass executable not found: {self.executable}", command=cmd)
        except OSError as e:
            raise CompilationError(f"Cannot run Sass executable {self.executable}: {e}", command=cmd) from e

        if result.stdout:
            logger.info(result.stdout.rstrip())
        if result.returncode != 0:
            raise CompilationError(
                f"Compilation failed with exit code {result.returncode}",
                returncode=result.returncode,
                stderr=result.stderr,
                command=cmd,
            )
        if result.stderr:
            logger.warning(result.stderr.rstrip())
        return result
