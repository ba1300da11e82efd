from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

from dotenv import dotenv_values, find_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from file_bundler.config import (
    DEFAULT_EXCLUDED_EXTENSIONS,
    DEFAULT_EXCLUDED_FILE_NAMES,
    DEFAULT_EXCLUDED_FOLDERS,
    FilterConfig,
    FolderMatch,
    SortKey,
)
from file_bundler.exceptions import BundleValidationError

if TYPE_CHECKING:
    from collections.abc import Mapping

ENV_FILE = find_dotenv(usecwd=True)

ENV_EXCLUDED_FOLDERS = "FILE_BUNDLER_EXCLUDED_FOLDERS"
ENV_EXCLUDED_EXTENSIONS = "FILE_BUNDLER_EXCLUDED_EXTENSIONS"
ENV_EXCLUDED_FILE_NAMES = "FILE_BUNDLER_EXCLUDED_FILE_NAMES"
ENV_FOLDER_MATCH = "FILE_BUNDLER_FOLDER_MATCH"


class BundleOptions(BaseModel):
    """Validated options of the `bundle` command."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    output: Path = Field(..., description="Bundle file to create.")
    author: str | None = Field(default=None, description="Author written in the header.")
    languages: str = Field(..., description='"all" or space-separated extensions without dot.')
    remove_empty_lines: bool = Field(default=False, description="Drop empty lines from contents.")
    include_note: bool = Field(default=False, description="Write a provenance line per file.")
    sort: SortKey = Field(default=SortKey.NAME, description="Sort by name or by type.")

    @field_validator("output", mode="before")
    @classmethod
    def _require_output(cls, value: Any) -> Any:  # noqa: ANN401
        if value is None or (isinstance(value, str) and not value.strip()):
            msg = "output option is required!"
            raise ValueError(msg)
        return value

    @field_validator("languages", mode="before")
    @classmethod
    def _require_languages(cls, value: Any) -> Any:  # noqa: ANN401
        if value is None or (isinstance(value, str) and not value.strip()):
            msg = "languages option is required!"
            raise ValueError(msg)
        return value

    @field_validator("author", mode="before")
    @classmethod
    def _blank_author_is_none(cls, value: Any) -> Any:  # noqa: ANN401
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("sort", mode="before")
    @classmethod
    def _default_sort(cls, value: Any) -> Any:  # noqa: ANN401
        return SortKey.NAME if value is None else value

    @property
    def output_path(self) -> Path:
        """Absolute path of the bundle file."""
        return self.output.expanduser().resolve()


def build_options(**values: Any) -> BundleOptions:  # noqa: ANN401
    """Build `BundleOptions`, turning pydantic errors into a `BundleValidationError`.

    Only the first error is reported, matching the one-line error output of the CLI.

    Args:
        **values: raw option values, keyed by `BundleOptions` field name.

    Raises:
        BundleValidationError: if a required option is missing or a value is invalid.

    Returns:
        BundleOptions: the validated options.
    """
    try:
        return BundleOptions(**values)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(loc) for loc in first["loc"])
        message = str(first["msg"]).removeprefix("Value error, ")
        raise BundleValidationError(field=field, message=message) from e


def _split_words(raw: str | None, default: frozenset[str]) -> frozenset[str]:
    if raw is None:
        return default
    return frozenset(raw.split())


def load_filter_config(environ: Mapping[str, str | None] | None = None) -> FilterConfig:
    """Load the exclusion lists, letting the environment override the defaults.

    Values come from the `.env` file found from the current directory, then from
    the process environment, which wins. List values are space-separated.

    Args:
        environ (Mapping[str, str | None] | None): explicit variables to read instead of
            `.env` and `os.environ`.

    Raises:
        BundleValidationError: if the folder match mode is unknown.

    Returns:
        FilterConfig: the resulting filter configuration.
    """
    if environ is None:
        file_values = dotenv_values(ENV_FILE) if ENV_FILE else {}
        environ = {**file_values, **os.environ}
    folder_match = environ.get(ENV_FOLDER_MATCH) or FolderMatch.SUBSTRING.value
    if folder_match not in {m.value for m in FolderMatch}:
        raise BundleValidationError(
            field=ENV_FOLDER_MATCH,
            message=f"expected one of {', '.join(FolderMatch)}, got {folder_match!r}",
        )
    return FilterConfig(
        excluded_folders=_split_words(environ.get(ENV_EXCLUDED_FOLDERS), DEFAULT_EXCLUDED_FOLDERS),
        excluded_extensions=_split_words(environ.get(ENV_EXCLUDED_EXTENSIONS), DEFAULT_EXCLUDED_EXTENSIONS),
        excluded_file_names=_split_words(environ.get(ENV_EXCLUDED_FILE_NAMES), DEFAULT_EXCLUDED_FILE_NAMES),
        folder_match=FolderMatch(folder_match),
    )
