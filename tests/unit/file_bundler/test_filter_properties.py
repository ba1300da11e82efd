import os
import string
from pathlib import Path

import pytest
from hypothesis import given
from hypothesis import strategies as st

from file_bundler.config import (
    DEFAULT_EXCLUDED_EXTENSIONS,
    DEFAULT_EXCLUDED_FOLDERS,
    SortKey,
    file_extension,
)
from file_bundler.file_manipulation import filter_by_language, is_relevant, non_empty_lines, sort_files

ROOT = Path("/repo")

segments = st.text(alphabet=string.ascii_letters + string.digits + "._-", min_size=1, max_size=10).filter(
    lambda s: s not in {".", ".."},
)
directories = st.one_of(segments, st.sampled_from(sorted(DEFAULT_EXCLUDED_FOLDERS)))
file_names = st.one_of(
    segments,
    st.sampled_from(["Dockerfile", "a.json", ".gitignore", "main.py", "notes.txt", "index.html"]),
)
paths = st.builds(
    lambda dirs, name: ROOT.joinpath(*dirs, name),
    st.lists(directories, max_size=4),
    file_names,
)
flat_names = st.builds(
    lambda stem, ext: Path(f"{stem}{ext}"),
    st.sampled_from(["a", "b", "c"]),
    st.sampled_from([".py", ".txt", ".js", ".html", ""]),
)


@pytest.mark.unit
@given(paths)
def test_relevant_files_never_match_an_exclusion(path: Path) -> None:
    if is_relevant(path, ROOT):
        assert path.name != "Dockerfile"
        assert file_extension(path.name) not in DEFAULT_EXCLUDED_EXTENSIONS
        for directory in path.parent.relative_to(ROOT).parts:
            assert not any(folder in directory for folder in DEFAULT_EXCLUDED_FOLDERS)


@pytest.mark.unit
@given(st.lists(paths))
def test_language_filter_all_is_identity(files: list[Path]) -> None:
    assert filter_by_language(files, "all") == files


@pytest.mark.unit
@given(st.lists(flat_names))
def test_language_filter_keeps_exactly_the_selected_extensions(files: list[Path]) -> None:
    selected = filter_by_language(files, "py txt")

    assert all(p.suffix in {".py", ".txt"} for p in selected)
    assert len(selected) == sum(1 for p in files if p.suffix in {".py", ".txt"})


@pytest.mark.unit
@given(st.lists(flat_names), st.sampled_from([SortKey.NAME, SortKey.TYPE]))
def test_sort_is_stable(files: list[Path], sort_key: SortKey) -> None:
    tagged = [Path(f"{i}") / p for i, p in enumerate(files)]

    ordered = sort_files(tagged, sort_key)

    def key(p: Path) -> str:
        return file_extension(p.name) if sort_key is SortKey.TYPE else p.name

    for first, second in zip(ordered, ordered[1:], strict=False):
        assert key(first) <= key(second)
        if key(first) == key(second):
            assert int(first.parent.name) < int(second.parent.name)


@pytest.mark.unit
@given(st.lists(flat_names))
def test_sort_by_type_groups_extensions_contiguously(files: list[Path]) -> None:
    extensions = [file_extension(p.name) for p in sort_files(files, SortKey.TYPE)]
    seen: list[str] = []
    for ext in extensions:
        if not seen or seen[-1] != ext:
            assert ext not in seen
            seen.append(ext)


@pytest.mark.unit
@given(st.lists(st.text(alphabet=string.ascii_letters + " \t;{}", max_size=8)))
def test_non_empty_lines_drops_only_empty_lines(lines: list[str]) -> None:
    content = os.linesep.join(lines)

    assert non_empty_lines(content) == [line for line in lines if line]
