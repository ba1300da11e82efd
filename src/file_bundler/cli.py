"""
file_bundler: concatenate the source files of a directory into a single file.

Overview
--------
``bundle`` walks a directory tree (the current directory by default), drops
build output, IDE folders and non-source files, keeps the requested languages,
sorts the result by name or by type and writes every file into one bundle:

    output: '/abs/path/bundle.md'
    author: Jane
    -------------------------------------------
    File Name: app.js
    File Content:
    ...
    #Source: app.js (Relative Path: src/app.js)#
    -------------------------------------------

``create-rsp`` asks for the same options on the console and saves them as a
response file that ``bundle`` reads back with the ``@`` prefix.

Usage
-----
    - Bundle JavaScript and HTML, sorted by type, with provenance notes:
        file-bundler bundle -o bundle.md -a "Jane" -l "js html" -r -n -s type

    - Save the options once, reuse them later:
        file-bundler create-rsp
        file-bundler bundle @responseFile.rsp
"""

from __future__ import annotations

import argparse
import shlex
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from file_bundler import __version__
from file_bundler.bundler import bundle
from file_bundler.exceptions import (
    BundleValidationError,
    FileBundlerError,
    OutputPathError,
    ResponseFileError,
)
from file_bundler.logging import logger, setup_logging
from file_bundler.response_file import RESPONSE_FILE_NAME, prompt_answers, write_response_file
from file_bundler.settings import build_options

if TYPE_CHECKING:
    from collections.abc import Sequence


class ResponseFileArgumentParser(argparse.ArgumentParser):
    """Argument parser whose ``@file`` lines may hold an option and its quoted value."""

    def convert_arg_line_to_args(self, arg_line: str) -> list[str]:
        return shlex.split(arg_line)


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser.

    Returns:
        argparse.ArgumentParser: parser with the ``bundle`` and ``create-rsp`` commands.
    """
    p = ResponseFileArgumentParser(
        prog="file-bundler",
        description="Bundle code files into a single file.",
        fromfile_prefix_chars="@",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = p.add_subparsers(dest="command", required=True)

    b = sub.add_parser("bundle", help="Bundle code files to a single file.")
    # Required options are checked by BundleOptions so errors stay one line.
    b.add_argument("-o", "--output", type=str, default=None, help="File path and name.")
    b.add_argument("-a", "--author", type=str, default=None, help="Author name.")
    b.add_argument(
        "-l",
        "--languages",
        type=str,
        default=None,
        help='Extensions of the desired files, separated by spaces, or "all".',
    )
    b.add_argument("-s", "--sort", type=str, default=None, help="Sort by type or by name (default).")
    b.add_argument(
        "-r",
        "--remove-empty-lines",
        action="store_true",
        help="Delete empty lines from the files.",
    )
    b.add_argument(
        "-n",
        "--note",
        dest="include_note",
        action="store_true",
        help="Write the relative path of each file.",
    )
    b.add_argument("--root", type=str, default="", help="Directory to bundle (default: current).")
    b.add_argument("--log-file", type=str, default="", help="Log file path.")

    r = sub.add_parser("create-rsp", help="Create a response file for the bundle command.")
    r.add_argument("--path", type=str, default=RESPONSE_FILE_NAME, help="Response file to write.")
    r.add_argument("--log-file", type=str, default="", help="Log file path.")
    return p


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def run_bundle(args: argparse.Namespace) -> int:
    """Validate the ``bundle`` arguments and write the bundle.

    Args:
        args (argparse.Namespace): parsed ``bundle`` arguments

    Returns:
        int: 0 on success, 1 on any error
    """
    try:
        options = build_options(
            output=args.output,
            author=args.author,
            languages=args.languages,
            sort=args.sort,
            remove_empty_lines=args.remove_empty_lines,
            include_note=args.include_note,
        )
        result = bundle(options, root=Path(args.root) if args.root else None)
    except BundleValidationError as e:
        logger.warning("bundle.invalid", field=e.field, error=e.message)
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    except OutputPathError as e:
        logger.warning("bundle.invalid_path", path=str(e.path))
        print("Error: File path is invalid", file=sys.stderr)
        return 1
    except FileBundlerError as e:
        logger.exception("bundle.failed")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(f"File was created! {result.output} files={len(result.files)}")
    return 0


def run_create_rsp(args: argparse.Namespace) -> int:
    """Run the ``create-rsp`` wizard and save its answers.

    Args:
        args (argparse.Namespace): parsed ``create-rsp`` arguments

    Returns:
        int: 0 on success, 1 if input ends early or the file cannot be written
    """
    try:
        answers = prompt_answers()
    except EOFError:
        logger.warning("response_file.aborted")
        print("Error: input ended before all options were answered", file=sys.stderr)
        return 1
    try:
        path = write_response_file(answers, args.path)
    except ResponseFileError as e:
        logger.warning("response_file.failed", path=str(e.path), error=e.reason)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(f"Response file created successfully: {path}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    if args.log_file:
        setup_logging(args.log_file)
    if args.command == "create-rsp":
        return run_create_rsp(args)
    return run_bundle(args)


if __name__ == "__main__":
    raise SystemExit(main())
