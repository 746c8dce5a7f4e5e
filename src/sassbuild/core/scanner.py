"""
Directory tree timestamp scanner.

Walks a tree and folds the modification time of every entry into aggregate
statistics. Directories contribute their timestamps but are not counted as
files; symbolic links below the root are never followed.
"""

import logging
import os
import stat
from dataclasses import dataclass
from pathlib import Path

from .exceptions import FilesystemAccessError, MissingRootError

__all__ = ['DirectoryStats', 'scan_tree', 'DEFAULT_MAX_DEPTH']

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 256


@dataclass(frozen=True)
class DirectoryStats:
    """Timestamp statistics of one scanned tree."""
    path: Path
    youngest: float | None = None
    oldest: float | None = None
    count: int = 0

    @property
    def is_empty(self) -> bool:
        """True if no regular files were found."""
        return self.count == 0


def scan_tree(root: Path | str, max_depth: int = DEFAULT_MAX_DEPTH) -> DirectoryStats:
    """
    Walk a directory tree and collect modification time statistics.

    The root itself is resolved through a symlink, every entry below it is read
    with ``lstat``. The youngest and oldest timestamps include the root and all
    directories, so an existing empty directory yields ``count == 0`` with the
    timestamps set from the root.

    :param root: Root of the tree, a directory or a single file
    :param max_depth: Maximum directory nesting below the root
    :return: The collected statistics
    :raises MissingRootError: If the root doesn't exist
    :raises FilesystemAccessError: If any entry can't be statted or listed
    """
    root = Path(root)
    if max_depth < 0:
        raise ValueError(f"max_depth must be non-negative, got {max_depth}")

    try:
        root_stat = root.stat()
    except FileNotFoundError:
        raise MissingRootError(root) from None
    except OSError as e:
        raise FilesystemAccessError(f"Cannot stat {root}: {e}", root) from e

    youngest = oldest = root_stat.st_mtime
    count = 0

    if not stat.S_ISDIR(root_stat.st_mode):
        count = 1 if stat.S_ISREG(root_stat.st_mode) else 0
        logger.info("Checked %d files for %s", count, root)
        return DirectoryStats(path=root, youngest=youngest, oldest=oldest, count=count)

    stack: list[tuple[Path, int]] = [(root, 0)]
    while stack:
        directory, depth = stack.pop()
        try:
            with os.scandir(directory) as it:
                entries = list(it)
        except OSError as e:
            raise FilesystemAccessError(f"Cannot list directory {directory}: {e}", directory) from e

        for entry in entries:
            try:
                entry_stat = entry.stat(follow_symlinks=False)
            except OSError as e:
                raise FilesystemAccessError(f"Cannot stat {entry.path}: {e}", Path(entry.path)) from e

            mtime = entry_stat.st_mtime
            if mtime > youngest:
                youngest = mtime
            if mtime < oldest:
                oldest = mtime

            if stat.S_ISDIR(entry_stat.st_mode):
                if depth + 1 > max_depth:
                    raise FilesystemAccessError(
                        f"Directory nesting deeper than {max_depth} levels: {entry.path}", Path(entry.path))
                stack.append((Path(entry.path), depth + 1))
            elif stat.S_ISREG(entry_stat.st_mode):
                count += 1

    logger.info("Checked %d files for %s", count, root)
    return DirectoryStats(path=root, youngest=youngest, oldest=oldest, count=count)
