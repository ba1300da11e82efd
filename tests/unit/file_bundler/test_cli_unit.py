from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from file_bundler import __version__, cli
from file_bundler.bundler import BundleResult
from file_bundler.config import SortKey
from file_bundler.exceptions import SourceFileError

if TYPE_CHECKING:
    from pytest_mock import MockerFixture


@pytest.mark.unit
def test_parse_args_parses_bundle_short_flags() -> None:
    args = cli.parse_args(["bundle", "-o", "file.md", "-a", "author", "-l", "js html", "-r", "-n", "-s", "type"])

    assert args.command == "bundle"
    assert args.output == "file.md"
    assert args.author == "author"
    assert args.languages == "js html"
    assert args.remove_empty_lines is True
    assert args.include_note is True
    assert args.sort == "type"


@pytest.mark.unit
def test_parse_args_bundle_defaults() -> None:
    args = cli.parse_args(["bundle"])

    assert args.output is None
    assert args.languages is None
    assert args.sort is None
    assert args.remove_empty_lines is False
    assert args.include_note is False
    assert not args.root


@pytest.mark.unit
def test_parse_args_version_flag(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.parse_args(["--version"])

    assert exc_info.value.code == 0
    captured = capsys.readouterr()
    assert __version__ in captured.out


@pytest.mark.unit
def test_parse_args_expands_response_file(tmp_path: Path) -> None:
    rsp = tmp_path / "responseFile.rsp"
    rsp.write_text('--output out.md\n--author "Jane Doe"\n--languages "js html"\n--note\n--sort type\n', encoding="utf-8")

    args = cli.parse_args(["bundle", f"@{rsp}"])

    assert args.output == "out.md"
    assert args.author == "Jane Doe"
    assert args.languages == "js html"
    assert args.include_note is True
    assert args.remove_empty_lines is False
    assert args.sort == "type"


@pytest.mark.unit
def test_main_bundle_passes_options_and_root(tmp_path: Path, mocker: MockerFixture) -> None:
    bundle_mock = mocker.patch.object(
        cli,
        "bundle",
        return_value=BundleResult(output=tmp_path / "out.md", files=[]),
    )

    exit_code = cli.main(["bundle", "-o", "out.md", "-l", "py", "-s", "type", "--root", str(tmp_path)])

    assert exit_code == 0
    options = bundle_mock.call_args.args[0]
    assert options.sort is SortKey.TYPE
    assert options.languages == "py"
    assert bundle_mock.call_args.kwargs["root"] == tmp_path


@pytest.mark.unit
def test_main_bundle_missing_languages_reports_one_line(
    mocker: MockerFixture,
    capsys: pytest.CaptureFixture[str],
) -> None:
    bundle_mock = mocker.patch.object(cli, "bundle")

    exit_code = cli.main(["bundle", "-o", "out.md"])

    assert exit_code == 1
    bundle_mock.assert_not_called()
    err = capsys.readouterr().err
    assert err == "Error: languages option is required!\n"


@pytest.mark.unit
def test_main_bundle_reports_source_errors(
    tmp_path: Path,
    mocker: MockerFixture,
    capsys: pytest.CaptureFixture[str],
) -> None:
    mocker.patch.object(
        cli,
        "bundle",
        side_effect=SourceFileError(path=tmp_path / "a.py", reason="Permission denied"),
    )

    exit_code = cli.main(["bundle", "-o", "out.md", "-l", "all"])

    assert exit_code == 1
    assert "Permission denied" in capsys.readouterr().err


@pytest.mark.unit
def test_main_create_rsp_input_closed_reports_one_line(
    tmp_path: Path,
    mocker: MockerFixture,
    capsys: pytest.CaptureFixture[str],
) -> None:
    mocker.patch.object(cli, "prompt_answers", side_effect=EOFError)
    rsp = tmp_path / "responseFile.rsp"

    exit_code = cli.main(["create-rsp", "--path", str(rsp)])

    assert exit_code == 1
    assert not rsp.exists()
    err = capsys.readouterr().err
    assert err.startswith("Error: ")
    assert len(err.strip().splitlines()) == 1
