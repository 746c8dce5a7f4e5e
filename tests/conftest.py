import os
import shutil
import tempfile
from pathlib import Path

import pytest


@pytest.fixture
def temp_dir():
    """Create temporary directory for test files"""
    temp_dir = tempfile.mkdtemp()
    yield Path(temp_dir)
    shutil.rmtree(temp_dir)


def make_file(path: Path, mtime: float, content: str = "") -> Path:
    """
    Create a file with a fixed modification time

    :param path: File to create, parents are created as needed
    :param mtime: Modification time to set
    :param content: File content
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    os.utime(path, (mtime, mtime))
    return path


def set_dir_mtimes(root: Path, mtime: float):
    """
    Set the modification time of ``root`` and every directory below it

    Creating files touches their parent directory, so call this after the tree is built.
    """
    for dirpath, _, _ in os.walk(root):
        os.utime(dirpath, (mtime, mtime))


def make_tree(root: Path, files: dict[str, float], dir_mtime: float | None = None) -> Path:
    """
    Create a tree of files with fixed modification times

    :param root: Root directory
    :param files: Relative file path -> modification time
    :param dir_mtime: Time for the directories, defaults to the oldest file time
    """
    root.mkdir(parents=True, exist_ok=True)
    for rel, mtime in files.items():
        make_file(root / rel, mtime)
    if dir_mtime is None:
        dir_mtime = min(files.values()) if files else 1.0
    set_dir_mtimes(root, dir_mtime)
    return root
