"""
Provides services for discovering source files and mapping them to destinations.

This module contains the traversal side of every operation:
- Listing the children of a directory under a predicate, in a stable order.
- Mirroring a source tree into a destination tree, file by file.
- Pairing the files of two directories by index.
- Removing bracketed annotations such as "[12345678]" from file and directory names.
"""

import re
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Tuple

from loguru import logger

from ..domain.exceptions import DirectoryReadException, RenameException
from ..domain.models import PathPair, SourceEntry

PathPredicate = Callable[[Path], bool]

# "Badlands [12345678].flac" -> "Badlands.flac"
BRACKETED_ANNOTATION_PATTERN = re.compile(r"\s*\[[^\]]*\]")


def read_dir(directory: Path, predicate: Optional[PathPredicate] = None) -> List[SourceEntry]:
    """
    Lists the immediate children of `directory` that satisfy `predicate`.

    The result is sorted by full path so that repeated runs over an unchanged
    directory produce the same sequence. Output names, split track order and
    merge pairings all depend on this.

    Args:
        directory: The directory to list.
        predicate: Called with each child path. Children it rejects are left out.
                   Every child is kept when no predicate is given.

    Returns:
        The matching children, sorted by path.

    Raises:
        DirectoryReadException: If `directory` itself cannot be listed.
    """
    try:
        children = list(directory.iterdir())
    except OSError as e:
        raise DirectoryReadException(f"Failed to read directory: {directory} ({e})") from e

    entries: List[SourceEntry] = []
    for child in children:
        try:
            if predicate is not None and not predicate(child):
                continue
            entries.append(SourceEntry(path=child, is_dir=child.is_dir()))
        except OSError as e:
            logger.debug(f"Skipping unreadable entry {child}: {e}")
    entries.sort(key=lambda entry: str(entry.path))
    return entries


def is_file(path: Path) -> bool:
    return path.is_file()


def has_extension(*extensions: str) -> PathPredicate:
    """
    Builds a predicate accepting regular files with one of `extensions`.

    Extensions are compared case-insensitively and may be given with or without
    the leading dot.
    """
    normalized = {
        ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in extensions
    }

    def predicate(path: Path) -> bool:
        return path.suffix.lower() in normalized and path.is_file()

    return predicate


def remap_path(root: Path, path: Path, destination_root: Path) -> Path:
    """
    Maps `path` below `root` to the same relative location below `destination_root`.

    The traversal root is always passed explicitly, so the result is correct at
    any recursion depth.
    """
    return destination_root / path.relative_to(root)


def walk_tree(
    root: Path,
    destination_root: Path,
    predicate: Optional[PathPredicate] = None,
) -> Iterator[PathPair]:
    """
    Recursively yields a (source, destination) pair for every file below `root`.

    Directories are always descended into, except `destination_root` itself when
    it lies inside `root`: files written by the running operation are never
    picked up again. Files are filtered by `predicate`. Pairs are produced
    depth-first in `read_dir` order, and each destination preserves the file's
    position relative to `root`.
    """
    yield from _walk_tree(root, root, destination_root, destination_root.resolve(), predicate)


def _walk_tree(
    root: Path,
    directory: Path,
    destination_root: Path,
    excluded_dir: Path,
    predicate: Optional[PathPredicate],
) -> Iterator[PathPair]:
    for entry in read_dir(directory):
        if entry.is_dir:
            if entry.path.resolve() == excluded_dir:
                logger.debug(f"Not descending into destination directory {entry.path}")
                continue
            yield from _walk_tree(root, entry.path, destination_root, excluded_dir, predicate)
        elif predicate is None or predicate(entry.path):
            yield PathPair(entry.path, remap_path(root, entry.path, destination_root))


def flat_pairs(
    root: Path,
    destination_root: Path,
    predicate: PathPredicate = is_file,
) -> List[PathPair]:
    """Pairs the top-level files of `root` with the same names below `destination_root`."""
    return [
        PathPair(entry.path, remap_path(root, entry.path, destination_root))
        for entry in read_dir(root, predicate)
    ]


def paired_files(
    base_dir: Path,
    content_dir: Path,
    predicate: PathPredicate = is_file,
) -> Tuple[List[Path], List[Path]]:
    """
    Lists the top-level files of two directories for index-aligned pairing.

    The lists are returned as-is; the caller decides what a length mismatch means.
    """
    base_files = [entry.path for entry in read_dir(base_dir, predicate)]
    content_files = [entry.path for entry in read_dir(content_dir, predicate)]
    return base_files, content_files


def strip_bracketed_annotations(name: str) -> str:
    """Removes every "[...]" annotation, and the whitespace before it, from `name`."""
    return BRACKETED_ANNOTATION_PATTERN.sub("", name)


def cleanup_file_names(directory: Path) -> int:
    """
    Recursively removes bracketed annotations from file and directory names.

    A directory's contents are renamed before the directory itself. Names that
    would not change are left alone.

    Args:
        directory: The root of the tree to clean up. The root itself is not renamed.

    Returns:
        The number of entries renamed.

    Raises:
        DirectoryReadException: If a directory in the tree cannot be listed.
        RenameException: If a rename fails, including when the new name is taken.
    """
    renamed = 0
    for entry in read_dir(directory):
        if entry.is_dir:
            renamed += cleanup_file_names(entry.path)

        new_name = strip_bracketed_annotations(entry.path.name)
        if new_name == entry.path.name:
            continue
        if not new_name.strip():
            logger.warning(f"Not renaming '{entry.path}': nothing would be left of the name.")
            continue

        new_path = entry.path.with_name(new_name)
        if new_path.exists():
            raise RenameException(
                f"Failed to rename: {entry.path} to {new_path} (target already exists)"
            )
        try:
            entry.path.rename(new_path)
        except OSError as e:
            raise RenameException(f"Failed to rename: {entry.path} to {new_path} ({e})") from e
        logger.info(f"Renamed '{entry.path.name}' -> '{new_name}'")
        renamed += 1
    return renamed
