from __future__ import annotations

from enum import StrEnum, auto
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, computed_field

_ = Path()

ALL_LANGUAGES = "all"
SEPARATOR = "-" * 43

DEFAULT_EXCLUDED_FOLDERS: frozenset[str] = frozenset({
    "bin",
    "debug",
    "obj",
    ".vs",
    ".config",
    ".vscode",
    ".git",
    "Properties",
    "packages",
    "build",
    "out",
    ".idea",
})

DEFAULT_EXCLUDED_EXTENSIONS: frozenset[str] = frozenset({
    ".config",
    ".csproj",
    ".json",
    ".dockerignore",
    ".db",
    ".user",
    ".gitignore",
    ".sln",
    ".txt",
    ".rsp",
    ".png",
    ".gif",
    ".jpg",
    ".mp4",
    ".iml",
})

DEFAULT_EXCLUDED_FILE_NAMES: frozenset[str] = frozenset({"Dockerfile"})


class SortKey(StrEnum):
    """Ordering applied to the bundled files."""

    NAME = auto()
    TYPE = auto()

    @classmethod
    def parse(cls, value: str | None) -> SortKey:
        """Map a raw sort value to a key; anything but "type" sorts by name.

        Args:
            value (str | None): the raw value, usually from the command line.

        Returns:
            SortKey: `SortKey.TYPE` for "type", `SortKey.NAME` otherwise.
        """
        return cls.TYPE if value == cls.TYPE.value else cls.NAME


class FolderMatch(StrEnum):
    """How excluded folder names are compared with a file's ancestor directories."""

    SUBSTRING = auto()
    EXACT = auto()


def file_extension(name: str) -> str:
    """Return the extension of a file name, including the leading dot.

    Unlike `PurePath.suffix`, a name made only of an extension such as
    `.gitignore` has the extension `.gitignore`. A trailing dot yields "".

    Args:
        name (str): the base name of the file.

    Returns:
        str: the extension (e.g. ".py"), or "" when there is none.
    """
    idx = name.rfind(".")
    if idx == -1 or idx == len(name) - 1:
        return ""
    return name[idx:]


class FilterConfig(BaseModel):
    """Exclusion lists used by the path filter.

    Attributes:
        excluded_folders: directory names that exclude every file below them.
        excluded_extensions: extensions (with leading dot) that are never bundled.
        excluded_file_names: exact base names that are never bundled.
        folder_match: substring (default) or exact comparison of directory names.
    """

    model_config = ConfigDict(frozen=True)

    excluded_folders: frozenset[str] = Field(default=DEFAULT_EXCLUDED_FOLDERS)
    excluded_extensions: frozenset[str] = Field(default=DEFAULT_EXCLUDED_EXTENSIONS)
    excluded_file_names: frozenset[str] = Field(default=DEFAULT_EXCLUDED_FILE_NAMES)
    folder_match: FolderMatch = Field(default=FolderMatch.SUBSTRING)

    def is_excluded_folder(self, directory: str) -> bool:
        """Check a single directory name against the excluded folders."""
        if self.folder_match is FolderMatch.EXACT:
            return directory in self.excluded_folders
        return any(folder in directory for folder in self.excluded_folders)


DEFAULT_FILTER_CONFIG = FilterConfig()


class CandidateFile(BaseModel):
    """A discovered file and the attributes the filters and sorter look at.

    Attributes:
        path: path of the file as enumerated.
        root: directory the enumeration started from.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    path: Path = Field(..., description="Enumerated file path")
    root: Path = Field(..., description="Enumeration root")

    @computed_field
    @property
    def name(self) -> str:
        """Base name of the file."""
        return self.path.name

    @computed_field
    @property
    def extension(self) -> str:
        """Extension of the file, including the leading dot."""
        return file_extension(self.path.name)

    @computed_field
    @property
    def directories(self) -> tuple[str, ...]:
        """Ancestor directory names between the root and the file."""
        try:
            parts = self.path.parent.relative_to(self.root).parts
        except ValueError:
            parts = self.path.parent.parts
        return tuple(parts)
