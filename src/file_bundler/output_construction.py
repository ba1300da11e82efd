from __future__ import annotations

import os
from typing import TYPE_CHECKING, TextIO

from file_bundler.config import SEPARATOR
from file_bundler.file_manipulation import non_empty_lines, read_source, relative_source_path

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from file_bundler.settings import BundleOptions

NEWLINE = os.linesep


def _write_line(out: TextIO, text: str = "") -> None:
    out.write(text + NEWLINE)


def render_header(out: TextIO, options: BundleOptions) -> None:
    """Write the bundle header: output path, optional author and a separator.

    Args:
        out (TextIO): the destination stream, opened with `newline=""`
        options (BundleOptions): the bundle options
    """
    _write_line(out, f"output: '{options.output_path}'")
    if options.author:
        _write_line(out, f"author: {options.author}")
    _write_line(out, SEPARATOR)


def source_note(path: Path, root: Path) -> str:
    """Build the provenance line of a bundled file.

    Args:
        path (Path): the bundled file
        root (Path): the directory the relative path is computed from

    Returns:
        str: a line such as `#Source: app.py (Relative Path: src/app.py)#`
    """
    return f"#Source: {path.name} (Relative Path: {relative_source_path(path, root)})#"


def render_entry(out: TextIO, path: Path, options: BundleOptions, root: Path) -> None:
    """Write one file block: name, content, optional provenance note and separator.

    Without `remove_empty_lines` the content is written verbatim in a single write,
    so the bytes between "File Content:" and the separator are the file's own.

    Args:
        out (TextIO): the destination stream, opened with `newline=""`
        path (Path): the file to render
        options (BundleOptions): the bundle options
        root (Path): the directory provenance notes are relative to

    Raises:
        SourceFileError: if the file cannot be read
    """
    content = read_source(path)
    _write_line(out, f"File Name: {path.name}")
    _write_line(out, "File Content:")
    if options.remove_empty_lines:
        for line in non_empty_lines(content, NEWLINE):
            _write_line(out, line)
    else:
        _write_line(out, content)
    if options.include_note:
        _write_line(out, source_note(path, root))
    _write_line(out, SEPARATOR)


def render_bundle(out: TextIO, files: Sequence[Path], options: BundleOptions, root: Path) -> None:
    """Write the header then every file block, in the given order.

    Args:
        out (TextIO): the destination stream, opened with `newline=""`
        files (Sequence[Path]): the files to bundle, already filtered and sorted
        options (BundleOptions): the bundle options
        root (Path): the directory provenance notes are relative to
    """
    render_header(out, options)
    for path in files:
        render_entry(out, path, options, root)
