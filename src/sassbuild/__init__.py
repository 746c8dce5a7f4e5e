"""Incremental Sass stylesheet builder."""

from .core.scanner import DirectoryStats, scan_tree
from .core.staleness import DirectoryPair, BuildCheck, check_build, is_build_required

__all__ = ['DirectoryStats', 'scan_tree', 'DirectoryPair', 'BuildCheck', 'check_build', 'is_build_required']
