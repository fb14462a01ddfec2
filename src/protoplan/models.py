"""Core typed dataclasses for proto_library configuration and build layout."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from protoplan.labels import Label
from protoplan.paths import join_path

CompileKind = Literal["static_library", "source_set"]

OPTIONS_SEPARATOR = ":"
PYTHON_STUB_SUFFIX = "_pb2.py"
CC_SOURCE_SUFFIX = ".pb.cc"
CC_HEADER_SUFFIX = ".pb.h"
PLUGIN_NAME = "protoc-gen-plugin"


@dataclass(frozen=True, slots=True)
class PluginConfig:
    """Extra protoc generator plugin.

    ``suffix`` names the generated files (``<name><suffix>.cc``/``.h``) and is
    required whenever a plugin is configured. ``options`` follows the same
    ``opt1,opt2:`` convention as ``TargetConfig.cc_generator_options``.
    """

    label: str
    suffix: str | None = None
    options: str = ""


@dataclass(frozen=True, slots=True)
class TargetConfig:
    """Caller-facing configuration of one proto_library target.

    Defaults:
      * ``proto_out_dir``: each source's directory relative to the source root.
      * ``generate_python`` / ``generate_cc``: both enabled.
      * ``cc_generator_options``: empty; when set it must end in ``:`` because it
        is concatenated directly in front of the output directory.
      * ``component_build_force_source_set``: off, giving a static library.
    """

    sources: tuple[str, ...] = ()
    name: str = "proto"
    base_dir: str = "//"
    proto_out_dir: str | None = None
    generate_python: bool = True
    generate_cc: bool = True
    cc_generator_options: str = ""
    cc_include: str | None = None
    plugin: PluginConfig | None = None
    deps: tuple[str, ...] = ()
    visibility: tuple[str, ...] | None = None
    component_build_force_source_set: bool = False
    defines: tuple[str, ...] = ()
    extra_configs: tuple[str, ...] = ()

    @property
    def generation_target_name(self) -> str:
        return f"{self.name}_gen"


@dataclass(frozen=True, slots=True)
class BuildLayout:
    """Directory roots and well-known labels of the host build."""

    root_build_dir: str = "//out/Default"
    root_gen_dir: str | None = None
    python_out_subdir: str = "pyproto"
    default_toolchain: str = "//build/toolchain/linux:clang_x64"
    host_toolchain: str = "//build/toolchain/linux:clang_x64"
    host_executable_suffix: str = ""
    is_component_build: bool = False
    protoc_label: str = "//third_party/protobuf:protoc"
    runtime_label: str = "//third_party/protobuf:protobuf_lite"
    using_proto_config: str = "//third_party/protobuf:using_proto"
    wrapper_script: str = "//tools/protoc_wrapper/protoc_wrapper.py"

    @property
    def gen_dir(self) -> str:
        if self.root_gen_dir is not None:
            return join_path(self.root_gen_dir)
        return join_path(self.root_build_dir, "gen")

    @property
    def python_out_root(self) -> str:
        return join_path(self.root_build_dir, self.python_out_subdir)

    def toolchain_out_dir(self, toolchain: str) -> str:
        """Output directory of binaries built in ``toolchain``.

        The default toolchain writes into ``root_build_dir``; any other one gets
        a subdirectory named after the toolchain, whichever toolchain the target
        itself is evaluated in.
        """
        if Label.parse(toolchain) == Label.parse(self.default_toolchain):
            return join_path(self.root_build_dir)
        return join_path(self.root_build_dir, Label.parse(toolchain).name)

    def host_tool(self, label: str) -> tuple[Label, str]:
        """Return ``label`` scoped to the host toolchain and its executable path."""
        host_label = Label.parse(label).with_toolchain(str(Label.parse(self.host_toolchain)))
        path = join_path(
            self.toolchain_out_dir(self.host_toolchain),
            f"{host_label.name}{self.host_executable_suffix}",
        )
        return host_label, path
