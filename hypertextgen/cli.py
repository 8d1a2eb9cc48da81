"""Command line interface of the template transpiler."""

from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Sequence
from pathlib import Path

from hypertextgen.errors import Error
from hypertextgen.renderers import (
    GeneratedFileType,
    HeaderAndSourceRenderer,
    SharedLibRenderer,
    SingleHeaderRenderer,
    TranspilerRenderer,
)
from hypertextgen.transpiler import Transpiler

_HEADER_ONLY = "generateHeaderOnly"
_SHARED_LIBRARY = "generateSharedLibrarySource"
_HEADER_AND_SOURCE = "generateHeaderAndSource"

_EXTENSIONS = {
    GeneratedFileType.HEADER: ".h",
    GeneratedFileType.SOURCE: ".cpp",
}


def output_file_path(
    input_file: str | os.PathLike[str],
    output_dir: str | os.PathLike[str] | None,
    file_type: GeneratedFileType,
) -> Path:
    """Where a generated file of ``file_type`` for ``input_file`` is written."""
    path = Path.cwd()
    if output_dir is not None and str(output_dir):
        directory = Path(output_dir)
        path = directory if directory.is_absolute() else path / directory
    return path / (Path(input_file).stem + _EXTENSIONS[file_type])


def _add_common_arguments(parser: argparse.ArgumentParser, *, class_name: bool) -> None:
    parser.add_argument("input", help=".htcpp file to transpile")
    parser.add_argument(
        "-outputDir",
        dest="output_dir",
        default="",
        help="output dir (if empty, current working directory is used)",
    )
    if class_name:
        parser.add_argument(
            "-className",
            dest="class_name",
            default="",
            help="generated class name (if empty, input file name is used)",
        )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hypertextgen")
    commands = parser.add_subparsers(dest="command", metavar="command")

    header_only = commands.add_parser(_HEADER_ONLY, help="generate header only file")
    _add_common_arguments(header_only, class_name=True)

    shared_library = commands.add_parser(
        _SHARED_LIBRARY, help="generate shared library source file"
    )
    _add_common_arguments(shared_library, class_name=False)

    header_and_source = commands.add_parser(
        _HEADER_AND_SOURCE, help="generate header and source files"
    )
    _add_common_arguments(header_and_source, class_name=True)
    header_and_source.add_argument(
        "-configClassName",
        dest="config_class_name",
        required=True,
        help="config class name",
    )
    return parser


def _class_name(args: argparse.Namespace, input_file: Path) -> str:
    return args.class_name or input_file.stem


def _make_renderer(args: argparse.Namespace, input_file: Path) -> TranspilerRenderer:
    if args.command == _HEADER_ONLY:
        return SingleHeaderRenderer(_class_name(args, input_file))
    if args.command == _SHARED_LIBRARY:
        return SharedLibRenderer()
    header_path = output_file_path(input_file, args.output_dir, GeneratedFileType.HEADER)
    return HeaderAndSourceRenderer(
        _class_name(args, input_file), header_path.name, args.config_class_name
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Run the transpiler command; return the process exit status."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.error("At least one command must be specified")

    input_file = Path(args.input)
    transpiler = Transpiler(_make_renderer(args, input_file))
    try:
        result = transpiler.process(input_file)
        for file_type, code in result.items():
            output_file_path(input_file, args.output_dir, file_type).write_text(
                code, encoding="utf-8", errors="surrogateescape", newline=""
            )
    except Error as exc:
        print(exc, file=sys.stderr)
        return 1
    except Exception as exc:  # noqa: BLE001 - report any failure as the exit status
        print(f"Unknown critical error:{exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())