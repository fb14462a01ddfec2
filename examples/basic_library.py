"""Plan a C++/Python proto_library and write its node description."""

from pathlib import Path

from protoplan import StructuredLogger, TargetConfig, proto_library
from protoplan.compiler import write_library


def plan_foo_proto(output: Path) -> None:
    logger = StructuredLogger()
    config = TargetConfig(
        name="foo_proto",
        base_dir="//components/foo",
        sources=("foo.proto", "internal/bar.proto"),
        cc_generator_options="dllexport_decl=FOO_EXPORT:",
        cc_include="components/foo/foo_export.h",
        deps=("//base",),
        defines=("FOO_IMPLEMENTATION",),
    )
    library = proto_library(config, logger=logger)
    write_library(library, output / "foo_proto.json")
    logger.to_json_lines(output / "foo_proto.log.jsonl")


if __name__ == "__main__":
    plan_foo_proto(Path("out"))
