import pytest

from protoplan import (
    BuildLayout,
    MalformedOptionsError,
    MissingDependentFieldError,
    MissingRequiredFieldError,
    PluginConfig,
    TargetConfig,
    ValidationError,
    resolve,
)


def test_default_scenario_outputs_and_args(foo_config: TargetConfig, layout: BuildLayout) -> None:
    plan = resolve(foo_config, layout)

    invocation = plan.invocation_for("//dir/foo.proto")
    assert invocation.out_dir == "dir"
    assert invocation.outputs == (
        "//out/Default/pyproto/dir/foo_pb2.py",
        "//out/Default/gen/dir/foo.pb.cc",
        "//out/Default/gen/dir/foo.pb.h",
    )
    assert invocation.args == (
        "--proto-in-dir",
        "../../dir",
        "--proto-in-file",
        "foo.proto",
        "--use-system-protobuf=0",
        "--",
        "./protoc",
        "--python_out",
        "pyproto/dir",
        "--cpp_out",
        "gen/dir",
    )


def test_plan_declares_host_compiler_dependency(foo_config: TargetConfig) -> None:
    plan = resolve(foo_config)

    assert plan.script == "//tools/protoc_wrapper/protoc_wrapper.py"
    assert plan.inputs == ("//out/Default/protoc",)
    assert plan.deps == ("//third_party/protobuf:protoc(//build/toolchain/linux:clang_x64)",)


def test_output_dir_defaults_to_source_relative_dir_under_gen_root() -> None:
    config = TargetConfig(
        sources=("a.proto", "sub/b.proto"),
        base_dir="//components/foo",
    )
    plan = resolve(config)

    first = plan.invocation_for("//components/foo/a.proto")
    second = plan.invocation_for("//components/foo/sub/b.proto")
    assert first.out_dir == "components/foo"
    assert second.out_dir == "components/foo/sub"
    assert "//out/Default/gen/components/foo/a.pb.h" in first.outputs
    assert "//out/Default/gen/components/foo/sub/b.pb.h" in second.outputs
    assert first.args[:2] == ("--proto-in-dir", "../../components/foo")


def test_source_at_root_generates_into_gen_root() -> None:
    plan = resolve(TargetConfig(sources=("top.proto",)))

    invocation = plan.invocation_for("//top.proto")
    assert invocation.outputs == (
        "//out/Default/pyproto/top_pb2.py",
        "//out/Default/gen/top.pb.cc",
        "//out/Default/gen/top.pb.h",
    )
    assert invocation.args[-1] == "gen"


def test_proto_out_dir_override_flattens_outputs() -> None:
    config = TargetConfig(sources=("a/x.proto", "b/y.proto"), proto_out_dir="flat")
    plan = resolve(config)

    assert plan.outputs == (
        "//out/Default/pyproto/flat/x_pb2.py",
        "//out/Default/gen/flat/x.pb.cc",
        "//out/Default/gen/flat/x.pb.h",
        "//out/Default/pyproto/flat/y_pb2.py",
        "//out/Default/gen/flat/y.pb.cc",
        "//out/Default/gen/flat/y.pb.h",
    )


def test_one_python_stub_per_source_under_pyproto_tree() -> None:
    config = TargetConfig(sources=("a/x.proto", "b/y.proto", "c.proto"))
    plan = resolve(config)

    for invocation in plan.invocations:
        stubs = [output for output in invocation.outputs if output.endswith("_pb2.py")]
        assert len(stubs) == 1
        assert stubs[0].startswith("//out/Default/pyproto/")


def test_cc_flag_concatenates_options_and_out_dir_verbatim(foo_config: TargetConfig) -> None:
    config = TargetConfig(
        sources=foo_config.sources,
        cc_generator_options="dllexport_decl=FOO_EXPORT:",
    )
    invocation = resolve(config).invocations[0]

    index = invocation.args.index("--cpp_out")
    assert invocation.args[index + 1] == "dllexport_decl=FOO_EXPORT:gen/dir"
    cc_outputs = [output for output in invocation.outputs if "/gen/" in output]
    assert cc_outputs == ["//out/Default/gen/dir/foo.pb.cc", "//out/Default/gen/dir/foo.pb.h"]


@pytest.mark.parametrize("options", ["dllexport_decl=FOO_EXPORT", "lite,"])
def test_options_without_separator_are_rejected(options: str) -> None:
    config = TargetConfig(sources=("dir/foo.proto",), cc_generator_options=options)

    with pytest.raises(MalformedOptionsError) as excinfo:
        resolve(config)
    assert excinfo.value.context["field"] == "cc_generator_options"


def test_plugin_options_without_separator_are_rejected() -> None:
    config = TargetConfig(
        sources=("dir/foo.proto",),
        plugin=PluginConfig(label="//tools/gen:proto_plugin", suffix=".gen", options="lite"),
    )

    with pytest.raises(MalformedOptionsError) as excinfo:
        resolve(config)
    assert excinfo.value.context["field"] == "plugin.options"


def test_cc_include_prepends_include_and_header_args(foo_config: TargetConfig) -> None:
    config = TargetConfig(sources=foo_config.sources, cc_include="base/base_export.h")
    invocation = resolve(config).invocations[0]

    assert invocation.args[:6] == (
        "--include",
        "base/base_export.h",
        "--protobuf",
        "gen/dir/foo.pb.h",
        "--proto-in-dir",
        "../../dir",
    )


@pytest.mark.parametrize(
    ("generate_python", "generate_cc", "expected"),
    [
        (True, False, ("//out/Default/pyproto/dir/foo_pb2.py",)),
        (False, True, ("//out/Default/gen/dir/foo.pb.cc", "//out/Default/gen/dir/foo.pb.h")),
        (False, False, ()),
    ],
)
def test_generator_toggles_select_outputs_and_flags(
    generate_python: bool,
    generate_cc: bool,
    expected: tuple[str, ...],
) -> None:
    config = TargetConfig(
        sources=("dir/foo.proto",),
        generate_python=generate_python,
        generate_cc=generate_cc,
    )
    plan = resolve(config)
    invocation = plan.invocations[0]

    assert invocation.outputs == expected
    assert ("--python_out" in invocation.args) is generate_python
    assert ("--cpp_out" in invocation.args) is generate_cc
    assert plan.generates_cc is generate_cc


def test_plugin_adds_outputs_flags_and_host_dependency() -> None:
    config = TargetConfig(
        sources=("dir/foo.proto",),
        generate_python=False,
        plugin=PluginConfig(label="//tools/gen:proto_plugin", suffix=".gen", options="lite:"),
    )
    plan = resolve(config)
    invocation = plan.invocations[0]

    assert invocation.outputs == (
        "//out/Default/gen/dir/foo.pb.cc",
        "//out/Default/gen/dir/foo.pb.h",
        "//out/Default/gen/dir/foo.gen.cc",
        "//out/Default/gen/dir/foo.gen.h",
    )
    assert invocation.args[-4:] == (
        "--plugin",
        "protoc-gen-plugin=proto_plugin",
        "--plugin_out",
        "lite:gen/dir",
    )
    assert plan.inputs == ("//out/Default/protoc", "//out/Default/proto_plugin")
    assert plan.deps[1] == "//tools/gen:proto_plugin(//build/toolchain/linux:clang_x64)"


def test_plugin_without_suffix_fails_before_any_path_is_computed() -> None:
    config = TargetConfig(
        # Resolving this source would raise ValidationError.
        sources=("/abs/foo.proto",),
        plugin=PluginConfig(label="//tools/gen:proto_plugin"),
    )

    with pytest.raises(MissingDependentFieldError) as excinfo:
        resolve(config)
    assert excinfo.value.context["field"] == "plugin.suffix"


def test_missing_sources_abort_resolution() -> None:
    with pytest.raises(MissingRequiredFieldError):
        resolve(TargetConfig())


def test_system_absolute_source_is_rejected() -> None:
    with pytest.raises(ValidationError):
        resolve(TargetConfig(sources=("/abs/foo.proto",)))


def test_caller_deps_are_resolved_against_base_dir() -> None:
    config = TargetConfig(
        sources=("foo.proto",),
        base_dir="//components/foo",
        deps=(":helpers", "//base"),
    )
    plan = resolve(config)

    assert plan.deps[1:] == ("//components/foo:helpers", "//base:base")


def test_cross_toolchain_host_compiler_lives_in_toolchain_subdir() -> None:
    layout = BuildLayout(
        host_toolchain="//build/toolchain/linux:clang_x86",
        host_executable_suffix=".exe",
    )
    plan = resolve(TargetConfig(sources=("dir/foo.proto",)), layout)

    assert plan.inputs == ("//out/Default/clang_x86/protoc.exe",)
    assert plan.deps == ("//third_party/protobuf:protoc(//build/toolchain/linux:clang_x86)",)
    separator = plan.invocations[0].args.index("--")
    assert plan.invocations[0].args[separator + 1] == "./clang_x86/protoc.exe"


@pytest.mark.parametrize(
    ("default_toolchain", "expected_protoc", "expected_arg"),
    [
        (
            "//build/toolchain/linux:clang_x64",
            "//out/Default/clang_x86/protoc",
            "./clang_x86/protoc",
        ),
        ("//build/toolchain/linux:clang_x86", "//out/Default/protoc", "./protoc"),
    ],
)
def test_host_compiler_location_depends_only_on_default_toolchain(
    default_toolchain: str,
    expected_protoc: str,
    expected_arg: str,
) -> None:
    layout = BuildLayout(
        default_toolchain=default_toolchain,
        host_toolchain="//build/toolchain/linux:clang_x86",
    )
    plan = resolve(TargetConfig(sources=("dir/foo.proto",)), layout)

    assert plan.inputs == (expected_protoc,)
    separator = plan.invocations[0].args.index("--")
    assert plan.invocations[0].args[separator + 1] == expected_arg


def test_custom_gen_root_changes_cc_outputs_only() -> None:
    layout = BuildLayout(root_build_dir="//out/Release", root_gen_dir="//out/Release/generated")
    invocation = resolve(TargetConfig(sources=("dir/foo.proto",)), layout).invocations[0]

    assert invocation.outputs == (
        "//out/Release/pyproto/dir/foo_pb2.py",
        "//out/Release/generated/dir/foo.pb.cc",
        "//out/Release/generated/dir/foo.pb.h",
    )
    assert invocation.args[-1] == "generated/dir"


def test_resolution_is_deterministic(foo_config: TargetConfig) -> None:
    assert resolve(foo_config) == resolve(foo_config)
