"""Consumer side of the generation argument vector.

The generation node runs the wrapper script once per source with the tokens
produced by :mod:`protoplan.resolve`. Everything after the ``--`` separator is
the protoc executable followed by generator flags passed through verbatim.
"""

from __future__ import annotations

import argparse
import posixpath
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn

from protoplan.errors import ValidationError

SEPARATOR = "--"
SYSTEM_PROTOC = "protoc"
INCLUDES_INSERTION_POINT = "// @@protoc_insertion_point(includes)"


@dataclass(frozen=True, slots=True)
class WrapperArgs:
    proto_in_dir: str
    proto_in_file: str
    protoc: str
    protoc_args: tuple[str, ...] = ()
    include: str | None = None
    protobuf_header: str | None = None
    use_system_protobuf: bool = False


class _RaisingParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise ValidationError("Invalid wrapper arguments.", hint=message)


def _parser() -> argparse.ArgumentParser:
    parser = _RaisingParser(prog="protoc_wrapper", add_help=False)
    parser.add_argument("--include")
    parser.add_argument("--protobuf")
    parser.add_argument("--proto-in-dir", required=True)
    parser.add_argument("--proto-in-file", required=True)
    parser.add_argument("--use-system-protobuf", type=int, choices=(0, 1), default=0)
    return parser


def parse_wrapper_args(argv: Sequence[str]) -> WrapperArgs:
    tokens = list(argv)
    if SEPARATOR not in tokens:
        raise ValidationError(
            "Wrapper arguments are missing the `--` separator.",
            hint="Pass `-- <protoc> [generator flags...]` after the wrapper options.",
        )
    split = tokens.index(SEPARATOR)
    head, tail = tokens[:split], tokens[split + 1 :]
    if not tail:
        raise ValidationError("No protoc executable follows the `--` separator.")

    options = _parser().parse_args(head)
    if options.include is not None and options.protobuf is None:
        raise ValidationError(
            "`--include` needs the generated header passed as `--protobuf`.",
            context={"include": options.include},
        )
    return WrapperArgs(
        proto_in_dir=options.proto_in_dir,
        proto_in_file=options.proto_in_file,
        protoc=tail[0],
        protoc_args=tuple(tail[1:]),
        include=options.include,
        protobuf_header=options.protobuf,
        use_system_protobuf=bool(options.use_system_protobuf),
    )


def protoc_argv(args: WrapperArgs) -> tuple[str, ...]:
    """Command line the wrapper hands to protoc, relative to the build directory."""
    protoc = SYSTEM_PROTOC if args.use_system_protobuf else args.protoc
    return (
        protoc,
        "--proto_path",
        args.proto_in_dir,
        *args.protoc_args,
        posixpath.join(args.proto_in_dir, args.proto_in_file),
    )


def inject_include(header_text: str, include: str) -> str:
    """Add ``#include "<include>"`` to a generated header.

    The line goes right after protoc's includes insertion point, ahead of any
    declaration that uses the exported macro. Headers that already carry it are
    unchanged.
    """
    directive = f'#include "{include}"'
    lines = header_text.splitlines(keepends=True)
    if any(line.strip() == directive for line in lines):
        return header_text

    anchor = next(
        (index for index, line in enumerate(lines) if line.strip() == INCLUDES_INSERTION_POINT),
        None,
    )
    if anchor is None:
        raise ValidationError(
            "Generated header has no includes insertion point.",
            hint=f"Expected a `{INCLUDES_INSERTION_POINT}` line emitted by protoc.",
            context={"include": include},
        )
    newline = "\r\n" if header_text.endswith("\r\n") else "\n"
    if not lines[anchor].endswith(("\n", "\r\n")):
        lines[anchor] += newline
    lines.insert(anchor + 1, directive + newline)
    return "".join(lines)


def apply_include(path: str | Path, include: str) -> Path:
    header_path = Path(path)
    try:
        text = header_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ValidationError(
            "Generated header does not exist.",
            hint="protoc must run before the export header is injected.",
            context={"path": str(header_path)},
        ) from exc
    updated = inject_include(text, include)
    if updated != text:
        header_path.write_text(updated, encoding="utf-8")
    return header_path
