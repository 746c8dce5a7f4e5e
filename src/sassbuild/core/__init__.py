from .exceptions import (
    SassBuildError,
    FilesystemAccessError,
    MissingRootError,
    ConfigError,
    CompilationError,
    CompilerNotFoundError
)
from .scanner import DirectoryStats, scan_tree
from .staleness import DirectoryPair, PairResult, BuildCheck, check_build, evaluate_pair, is_build_required

__all__ = [
    "SassBuildError",
    "FilesystemAccessError",
    "MissingRootError",
    "ConfigError",
    "CompilationError",
    "CompilerNotFoundError",
    "DirectoryStats",
    "scan_tree",
    "DirectoryPair",
    "PairResult",
    "BuildCheck",
    "check_build",
    "evaluate_pair",
    "is_build_required",
]
