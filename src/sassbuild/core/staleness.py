"""
Staleness evaluation over (source, target) directory pairs.

A pair requires a build if either side has no files, or if the youngest
entry of the source tree is newer than the youngest entry of the target tree.
The overall decision is the logical OR over all pairs; every pair is scanned
even after a stale one was found, so the report always carries all counts.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Mapping

from .exceptions import FilesystemAccessError, MissingRootError
from .scanner import DirectoryStats, scan_tree

__all__ = [
    'DirectoryPair', 'PairResult', 'BuildCheck',
    'pairs_from_mapping', 'evaluate_pair', 'check_build', 'is_build_required',
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DirectoryPair:
    """A source tree and the output tree generated from it."""
    source: Path
    target: Path

    def __str__(self) -> str:
        return f"{self.source} -> {self.target}"


@dataclass(frozen=True)
class PairResult:
    """
    Outcome of evaluating one pair.

    ``source_stats`` / ``target_stats`` are ``None`` if that root doesn't exist.
    """
    pair: DirectoryPair
    source_stats: DirectoryStats | None
    target_stats: DirectoryStats | None
    required: bool
    reason: str


@dataclass(frozen=True)
class BuildCheck:
    """Overall build decision with the per-pair details."""
    required: bool
    reason: str
    results: tuple[PairResult, ...] = ()

    def __bool__(self) -> bool:
        return self.required


def pairs_from_mapping(locations: Mapping[Path | str, Path | str]) -> list[DirectoryPair]:
    """
    Create an ordered list of pairs from a source -> target mapping.
    """
    return [DirectoryPair(Path(source), Path(target)) for source, target in locations.items()]


def _scan_or_none(path: Path) -> DirectoryStats | None:
    try:
        return scan_tree(path)
    except MissingRootError:
        logger.info("Directory %s does not exist", path)
        return None


def evaluate_pair(pair: DirectoryPair) -> PairResult:
    """
    Scan both sides of a pair and decide whether it needs a build.

    :param pair: The pair to evaluate
    :return: The per-pair result
    :raises FilesystemAccessError: If either tree can't be read
    """
    source = _scan_or_none(pair.source)
    target = _scan_or_none(pair.target)

    if source is None or target is None:
        missing = pair.source if source is None else pair.target
        return PairResult(pair, source, target, True, f"{missing} does not exist")

    if source.is_empty or target.is_empty:
        empty = pair.source if source.is_empty else pair.target
        return PairResult(pair, source, target, True, f"{empty} contains no files")

    # Both non-empty, so both youngest values are set
    if source.youngest > target.youngest:
        return PairResult(pair, source, target, True, f"{pair.source} changed after {pair.target}")

    return PairResult(pair, source, target, False, "up-to-date")


def check_build(pairs: Iterable[DirectoryPair], build_directory: Path | None = None,
                max_workers: int | None = None) -> BuildCheck:
    """
    Decide whether a build is required and report why.

    If ``build_directory`` is given and doesn't exist, a build is required and no
    pair is scanned at all.

    :param pairs: The (source, target) pairs to check, in order
    :param build_directory: Root of all generated output, or None to skip this check
    :param max_workers: Scan pairs on this many threads if greater than 1
    :return: The decision with per-pair results
    :raises FilesystemAccessError: If any tree can't be read; no partial result is returned
    """
    if build_directory is not None:
        try:
            Path(build_directory).stat()
        except FileNotFoundError:
            logger.info("Build directory %s does not exist", build_directory)
            return BuildCheck(True, f"build directory {build_directory} does not exist")
        except OSError as e:
            raise FilesystemAccessError(f"Cannot stat build directory {build_directory}: {e}",
                                        Path(build_directory)) from e

    pairs = list(pairs)
    if max_workers is not None and max_workers > 1 and len(pairs) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            results = tuple(executor.map(evaluate_pair, pairs))
    else:
        results = tuple(evaluate_pair(pair) for pair in pairs)

    required = False
    for result in results:
        logger.debug("%s: %s", result.pair, result.reason)
        required = required or result.required

    if not required:
        return BuildCheck(False, "no changes", results)

    stale = sum(1 for result in results if result.required)
    return BuildCheck(True, f"{stale} of {len(results)} location(s) out of date", results)


def is_build_required(pairs: Iterable[DirectoryPair], build_directory: Path | None = None,
                      max_workers: int | None = None) -> bool:
    """
    Return True if at least one pair requires a build.

    :raises FilesystemAccessError: If any tree can't be read
    """
    return check_build(pairs, build_directory, max_workers).required
