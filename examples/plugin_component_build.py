"""Component build with a generator plugin and a cross-compiled host protoc."""

from protoplan import BuildLayout, PluginConfig, TargetConfig, proto_library
from protoplan.compiler import serialize_library


def plan_plugin_library() -> str:
    layout = BuildLayout(
        root_build_dir="//out/Component",
        host_toolchain="//build/toolchain/linux:clang_x86",
        is_component_build=True,
    )
    config = TargetConfig(
        name="messages_proto",
        base_dir="//services/messages",
        sources=("messages.proto",),
        generate_python=False,
        plugin=PluginConfig(label="//tools/gen:proto_plugin", suffix=".ipc", options="lite:"),
        component_build_force_source_set=True,
    )
    return serialize_library(proto_library(config, layout))


if __name__ == "__main__":
    print(plan_plugin_library(), end="")
