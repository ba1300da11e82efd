from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from file_bundler.config import (
    ALL_LANGUAGES,
    DEFAULT_FILTER_CONFIG,
    CandidateFile,
    FilterConfig,
    SortKey,
    file_extension,
)
from file_bundler.exceptions import SourceFileError
from file_bundler.logging import logger

if TYPE_CHECKING:
    from collections.abc import Sequence


def _raise_walk_error(error: OSError) -> None:
    raise error


def walk_files(root: Path) -> list[Path]:
    """Walk the directory tree rooted at `root` and return every regular file.

    Unlike a plain `os.walk`, an unreadable directory is not silently skipped:
    the error propagates and aborts the bundle.

    Args:
        root (Path): the root directory to walk

    Returns:
        list[Path]: the files found, in enumeration order
    """
    results: list[Path] = []
    for dirpath, _dirs, files in os.walk(root, onerror=_raise_walk_error):
        for f in files:
            p = Path(dirpath) / f
            if p.is_file():
                results.append(p)
    return results


def is_relevant(path: Path, root: Path, config: FilterConfig = DEFAULT_FILTER_CONFIG) -> bool:
    """Check whether a file survives the folder, extension and file name exclusions.

    Args:
        path (Path): the file to check
        root (Path): the enumeration root; only directories below it are compared
        config (FilterConfig): the exclusion lists

    Returns:
        bool: True if the file should be kept, False otherwise
    """
    candidate = CandidateFile(path=path, root=root)
    if candidate.name in config.excluded_file_names:
        return False
    if candidate.extension in config.excluded_extensions:
        return False
    return not any(config.is_excluded_folder(d) for d in candidate.directories)


def filter_relevant(root: Path, config: FilterConfig = DEFAULT_FILTER_CONFIG) -> list[Path]:
    """Enumerate the files under `root` and drop the excluded ones.

    Args:
        root (Path): the directory to enumerate
        config (FilterConfig): the exclusion lists

    Returns:
        list[Path]: the relevant files, in enumeration order
    """
    files = walk_files(root)
    relevant = [f for f in files if is_relevant(f, root, config)]
    logger.info("filter_relevant", root=str(root), found=len(files), kept=len(relevant))
    return relevant


def filter_by_language(files: Sequence[Path], selector: str) -> list[Path]:
    """Keep the files whose extension is listed in the language selector.

    Args:
        files (Sequence[Path]): the files to filter
        selector (str): "all", or extensions without the leading dot separated by single spaces

    Returns:
        list[Path]: the matching files, input order preserved
    """
    if selector == ALL_LANGUAGES:
        return list(files)
    wanted = set(selector.split(" "))
    return [f for f in files if file_extension(f.name).removeprefix(".") in wanted]


def sort_files(files: Sequence[Path], sort_key: SortKey | str | None) -> list[Path]:
    """Order files by extension ("type") or by base name (anything else).

    The sort is stable, files sharing a key keep their input order.

    Args:
        files (Sequence[Path]): the files to sort
        sort_key (SortKey | str | None): the requested ordering

    Returns:
        list[Path]: the sorted files
    """
    if SortKey.parse(sort_key) is SortKey.TYPE:
        return sorted(files, key=lambda p: file_extension(p.name))
    return sorted(files, key=lambda p: p.name)


def read_source(path: Path) -> str:
    """Read a whole source file as text, without line ending translation.

    Undecodable bytes are replaced rather than failing the bundle.

    Args:
        path (Path): the file to read

    Raises:
        SourceFileError: if the file cannot be read

    Returns:
        str: the file content
    """
    try:
        with path.open(encoding="utf-8", errors="replace", newline="") as f:
            return f.read()
    except OSError as e:
        raise SourceFileError(path=path, reason=e.strerror or str(e)) from e


def non_empty_lines(content: str, linesep: str = os.linesep) -> list[str]:
    """Split `content` on `linesep` and drop the empty pieces.

    Args:
        content (str): the text to split
        linesep (str): the line terminator to split on. Defaults to the platform's.

    Returns:
        list[str]: the non-empty lines, in order
    """
    return [line for line in content.split(linesep) if line]


def relative_source_path(path: Path, root: Path) -> str:
    """Return `path` relative to `root`, with the platform's separators.

    Args:
        path (Path): the file path
        root (Path): the directory to relativise from

    Returns:
        str: the relative path
    """
    return os.path.relpath(path, root)
