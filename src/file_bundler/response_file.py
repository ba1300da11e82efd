"""Interactive creation of a response file for the ``bundle`` command."""

from __future__ import annotations

import shlex
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from file_bundler.config import SortKey
from file_bundler.exceptions import ResponseFileError
from file_bundler.logging import logger

if TYPE_CHECKING:
    from collections.abc import Callable

RESPONSE_FILE_NAME = "responseFile.rsp"

_TRUE_WORDS = frozenset({"true"})
_FALSE_WORDS = frozenset({"false"})


class ResponseFileAnswers(BaseModel):
    """Values collected by the ``create-rsp`` wizard."""

    model_config = ConfigDict(frozen=True)

    output: str = Field(..., min_length=1, description="Bundle file to create.")
    author: str = Field(default="", description="Author; left out of the file when blank.")
    languages: str = Field(..., min_length=1, description='"all" or space-separated extensions.')
    remove_empty_lines: bool = Field(default=False)
    include_note: bool = Field(default=False)
    sort: SortKey = Field(default=SortKey.NAME)


def parse_bool_answer(text: str) -> bool:
    """Parse a true/false answer; a blank answer means false.

    Args:
        text (str): the raw answer

    Raises:
        ValueError: if the answer is neither blank, "true" nor "false"

    Returns:
        bool: the parsed value
    """
    word = text.strip().lower()
    if not word or word in _FALSE_WORDS:
        return False
    if word in _TRUE_WORDS:
        return True
    msg = f"expected true or false, got {text!r}"
    raise ValueError(msg)


def _ask_required(prompt: str, input_fn: Callable[[str], str]) -> str:
    answer = ""
    while not answer:
        answer = input_fn(prompt).strip()
    return answer


def _ask_bool(prompt: str, input_fn: Callable[[str], str], output_fn: Callable[[str], None]) -> bool:
    while True:
        try:
            return parse_bool_answer(input_fn(prompt))
        except ValueError as e:
            output_fn(f"Invalid answer: {e}")


def _ask_sort(prompt: str, input_fn: Callable[[str], str], output_fn: Callable[[str], None]) -> SortKey:
    while True:
        answer = input_fn(prompt).strip()
        if not answer:
            return SortKey.NAME
        if answer in {k.value for k in SortKey}:
            return SortKey(answer)
        output_fn(f"Invalid answer: expected type or name, got {answer!r}")


def prompt_answers(
    input_fn: Callable[[str], str] = input,
    output_fn: Callable[[str], None] = print,
) -> ResponseFileAnswers:
    """Ask for the six ``bundle`` options on the console.

    Output and languages are asked again until they are not blank.

    Args:
        input_fn (Callable[[str], str]): reads one answer, given a prompt
        output_fn (Callable[[str], None]): shows a message to the user

    Returns:
        ResponseFileAnswers: the collected answers
    """
    output_fn("Creating response file...")
    output = _ask_required("Enter output option value: ", input_fn)
    author = input_fn("Enter author option value: ").strip()
    languages = _ask_required(
        'Enter languages option value (separated by spaces). If you want to include everything, enter "all": ',
        input_fn,
    )
    remove_empty_lines = _ask_bool("Enter remove empty lines option value (true/false): ", input_fn, output_fn)
    include_note = _ask_bool("Enter include note option value (true/false): ", input_fn, output_fn)
    sort = _ask_sort("Enter sort option value (type/name): ", input_fn, output_fn)
    return ResponseFileAnswers(
        output=output,
        author=author,
        languages=languages,
        remove_empty_lines=remove_empty_lines,
        include_note=include_note,
        sort=sort,
    )


def _double_quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def build_response_lines(answers: ResponseFileAnswers) -> list[str]:
    """Render the answers as ``bundle`` arguments, one option per line.

    Each line is read back with `shlex.split`, so quoted values may contain spaces.

    Args:
        answers (ResponseFileAnswers): the wizard answers

    Returns:
        list[str]: the response file lines
    """
    lines = [f"--output {shlex.quote(answers.output)}"]
    if answers.author:
        lines.append(f"--author {_double_quote(answers.author)}")
    lines.append(f"--languages {_double_quote(answers.languages)}")
    if answers.remove_empty_lines:
        lines.append("--remove-empty-lines")
    if answers.include_note:
        lines.append("--note")
    lines.append(f"--sort {answers.sort}")
    return lines


def write_response_file(answers: ResponseFileAnswers, path: Path | str = RESPONSE_FILE_NAME) -> Path:
    """Write the response file.

    Args:
        answers (ResponseFileAnswers): the wizard answers
        path (Path | str): destination. Defaults to `responseFile.rsp` in the current directory.

    Raises:
        ResponseFileError: if the file cannot be written

    Returns:
        Path: the written file
    """
    target = Path(path)
    text = "\n".join(build_response_lines(answers)) + "\n"
    try:
        target.write_text(text, encoding="utf-8")
    except OSError as e:
        raise ResponseFileError(path=target, reason=e.strerror or str(e)) from e
    logger.info("response_file.written", path=str(target))
    return target
