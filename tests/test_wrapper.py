from pathlib import Path

import pytest

from protoplan import TargetConfig, resolve
from protoplan.errors import ValidationError
from protoplan.wrapper import (
    WrapperArgs,
    apply_include,
    inject_include,
    parse_wrapper_args,
    protoc_argv,
)

HEADER = (
    "#ifndef DIR_FOO_PB_H_\n"
    "#define DIR_FOO_PB_H_\n"
    "\n"
    "#include <string>\n"
    "#include <google/protobuf/port_def.inc>\n"
    '#include "google/protobuf/message_lite.h"\n'
    "// @@protoc_insertion_point(includes)\n"
    "\n"
    "class FOO_EXPORT Foo {};\n"
    "\n"
    "#include <google/protobuf/port_undef.inc>\n"
    "#endif  // DIR_FOO_PB_H_\n"
)


def test_resolved_args_round_trip_through_wrapper_parser(foo_config: TargetConfig) -> None:
    invocation = resolve(foo_config).invocations[0]
    args = parse_wrapper_args(invocation.args)

    assert args == WrapperArgs(
        proto_in_dir="../../dir",
        proto_in_file="foo.proto",
        protoc="./protoc",
        protoc_args=("--python_out", "pyproto/dir", "--cpp_out", "gen/dir"),
    )
    assert protoc_argv(args) == (
        "./protoc",
        "--proto_path",
        "../../dir",
        "--python_out",
        "pyproto/dir",
        "--cpp_out",
        "gen/dir",
        "../../dir/foo.proto",
    )


def test_include_args_are_parsed() -> None:
    config = TargetConfig(sources=("dir/foo.proto",), cc_include="base/base_export.h")
    args = parse_wrapper_args(resolve(config).invocations[0].args)

    assert args.include == "base/base_export.h"
    assert args.protobuf_header == "gen/dir/foo.pb.h"


def test_system_protobuf_uses_protoc_from_path() -> None:
    args = parse_wrapper_args(
        [
            "--proto-in-dir",
            "../../dir",
            "--proto-in-file",
            "foo.proto",
            "--use-system-protobuf=1",
            "--",
            "./protoc",
        ],
    )

    assert protoc_argv(args)[0] == "protoc"


@pytest.mark.parametrize(
    "argv",
    [
        ["--proto-in-dir", "d", "--proto-in-file", "f.proto", "./protoc"],
        ["--proto-in-dir", "d", "--proto-in-file", "f.proto", "--"],
        ["--proto-in-file", "f.proto", "--", "./protoc"],
        ["--proto-in-dir", "d", "--proto-in-file", "f.proto", "--include", "x.h", "--", "./protoc"],
        ["--proto-in-dir", "d", "--proto-in-file", "f.proto", "--use-system-protobuf=2", "--", "p"],
    ],
)
def test_malformed_wrapper_args_raise(argv: list[str]) -> None:
    with pytest.raises(ValidationError):
        parse_wrapper_args(argv)


def test_inject_include_goes_after_includes_insertion_point() -> None:
    updated = inject_include(HEADER, "base/base_export.h")

    lines = updated.splitlines()
    marker = lines.index("// @@protoc_insertion_point(includes)")
    injected = lines.index('#include "base/base_export.h"')
    assert injected == marker + 1
    assert injected < lines.index("class FOO_EXPORT Foo {};")
    assert injected < lines.index("#include <google/protobuf/port_undef.inc>")
    assert inject_include(updated, "base/base_export.h") == updated


def test_inject_include_requires_insertion_point() -> None:
    header = "#ifndef X_H_\n#define X_H_\n#include <string>\nclass X;\n#endif\n"

    with pytest.raises(ValidationError) as excinfo:
        inject_include(header, "x_export.h")
    assert excinfo.value.context["include"] == "x_export.h"


def test_apply_include_rewrites_header_on_disk(tmp_path: Path) -> None:
    header = tmp_path / "foo.pb.h"
    header.write_text(HEADER, encoding="utf-8")

    apply_include(header, "base/base_export.h")

    assert '#include "base/base_export.h"' in header.read_text(encoding="utf-8")
    with pytest.raises(ValidationError):
        apply_include(tmp_path / "missing.pb.h", "base/base_export.h")
