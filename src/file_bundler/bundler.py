from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from file_bundler.exceptions import OutputPathError, SourceFileError
from file_bundler.file_manipulation import filter_by_language, filter_relevant, sort_files
from file_bundler.logging import logger
from file_bundler.output_construction import render_bundle
from file_bundler.settings import load_filter_config

if TYPE_CHECKING:
    from file_bundler.config import FilterConfig
    from file_bundler.settings import BundleOptions


class BundleResult(BaseModel):
    """Outcome of a successful bundle run."""

    model_config = ConfigDict(frozen=True)

    output: Path = Field(..., description="Absolute path of the written bundle")
    files: list[Path] = Field(default_factory=list, description="Bundled files, in write order")


def collect_files(options: BundleOptions, root: Path, config: FilterConfig) -> list[Path]:
    """Select and order the files of a bundle.

    The bundle file itself is never part of the selection, even when it is
    written inside `root`.

    Args:
        options (BundleOptions): the bundle options
        root (Path): the directory to enumerate
        config (FilterConfig): the exclusion lists

    Returns:
        list[Path]: the files to write, in write order
    """
    output = options.output_path
    relevant = [f for f in filter_relevant(root, config) if f.resolve() != output]
    selected = filter_by_language(relevant, options.languages)
    return sort_files(selected, options.sort)


def bundle(
    options: BundleOptions,
    root: Path | None = None,
    config: FilterConfig | None = None,
) -> BundleResult:
    """Bundle the files under `root` into the output file described by `options`.

    Files are collected before the output is opened, so an enumeration failure
    leaves any previous bundle untouched. The output stream is closed on every
    exit path; the first failure aborts the run.

    Args:
        options (BundleOptions): validated bundle options
        root (Path | None): the directory to bundle. Defaults to the current directory.
        config (FilterConfig | None): exclusion lists. Defaults to `load_filter_config()`.

    Raises:
        OutputPathError: if the directory of the output file does not exist
        SourceFileError: if `root` cannot be enumerated, a source file cannot be read
            or the output cannot be written

    Returns:
        BundleResult: the output path and the bundled files
    """
    root = (root or Path.cwd()).resolve()
    config = config or load_filter_config()
    output = options.output_path
    logger.info("bundle.start", root=str(root), output=str(output), languages=options.languages)

    try:
        files = collect_files(options, root, config)
    except OSError as e:
        raise SourceFileError(path=Path(e.filename or root), reason=e.strerror or str(e)) from e

    try:
        handle = output.open("w", encoding="utf-8", newline="")
    except (FileNotFoundError, NotADirectoryError) as e:
        raise OutputPathError(path=output) from e
    except OSError as e:
        raise SourceFileError(path=output, reason=e.strerror or str(e)) from e

    with handle:
        try:
            render_bundle(handle, files, options, root)
        except OSError as e:
            raise SourceFileError(path=output, reason=e.strerror or str(e)) from e

    logger.info("bundle.done", output=str(output), files=len(files))
    return BundleResult(output=output, files=files)
