"""Descriptor resolution: map a target configuration to per-file wrapper invocations."""

from __future__ import annotations

from protoplan.errors import (
    MalformedOptionsError,
    MissingDependentFieldError,
    MissingRequiredFieldError,
)
from protoplan.ir.model import FileInvocation, GenerationPlan
from protoplan.labels import local_label, resolve_label
from protoplan.models import (
    CC_HEADER_SUFFIX,
    CC_SOURCE_SUFFIX,
    OPTIONS_SEPARATOR,
    PLUGIN_NAME,
    PYTHON_STUB_SUFFIX,
    BuildLayout,
    PluginConfig,
    TargetConfig,
)
from protoplan.observability import StructuredLogger
from protoplan.paths import SourceFile, join_path, rebase_path


def resolve(
    config: TargetConfig,
    layout: BuildLayout | None = None,
    *,
    logger: StructuredLogger | None = None,
) -> GenerationPlan:
    """Compute the generation plan for ``config``.

    Pure: nothing is read from or written to disk. Raises before any output
    path is computed when the configuration is incomplete.
    """
    layout = layout or BuildLayout()
    target = local_label(config.base_dir, config.name)

    if not config.sources:
        raise MissingRequiredFieldError(
            "proto_library requires at least one source.",
            hint="Set `sources` to the `.proto` files of the target.",
            context={"target": target, "field": "sources"},
        )
    plugin = config.plugin
    if plugin is not None and not plugin.suffix:
        raise MissingDependentFieldError(
            "Generator plugin configured without a filename suffix.",
            hint="Set `plugin.suffix` (for example `.mojom`) alongside `plugin.label`.",
            context={"target": target, "field": "plugin.suffix", "plugin": plugin.label},
        )
    _check_options(config.cc_generator_options, field="cc_generator_options", target=target)
    if plugin is not None:
        _check_options(plugin.options, field="plugin.options", target=target)

    protoc_label, protoc_path = layout.host_tool(layout.protoc_label)
    inputs = [protoc_path]
    deps = [str(protoc_label)]
    plugin_path: str | None = None
    if plugin is not None:
        plugin_label, plugin_path = layout.host_tool(resolve_label(plugin.label, config.base_dir))
        inputs.append(plugin_path)
        deps.append(str(plugin_label))
    deps.extend(resolve_label(dep, config.base_dir) for dep in config.deps)

    invocations = []
    for raw_source in config.sources:
        source = SourceFile.from_path(raw_source, config.base_dir)
        invocation = _plan_file(
            source,
            config=config,
            layout=layout,
            protoc_path=protoc_path,
            plugin=plugin,
            plugin_path=plugin_path,
        )
        invocations.append(invocation)
        if logger is not None:
            logger.log(
                operation="resolve",
                target=target,
                source=source.path,
                node=local_label(config.base_dir, config.generation_target_name),
                message="planned generation invocation",
                extra={"outputs": list(invocation.outputs)},
            )

    return GenerationPlan(
        target=target,
        script=layout.wrapper_script,
        invocations=tuple(invocations),
        inputs=tuple(inputs),
        deps=tuple(deps),
        generates_cc=config.generate_cc,
    )


def output_dir_for(source: SourceFile, config: TargetConfig) -> str:
    """Output directory relative to the generated-files root."""
    if config.proto_out_dir is not None:
        return config.proto_out_dir
    return source.root_relative_dir


def _plan_file(
    source: SourceFile,
    *,
    config: TargetConfig,
    layout: BuildLayout,
    protoc_path: str,
    plugin: PluginConfig | None,
    plugin_path: str | None,
) -> FileInvocation:
    build_dir = layout.root_build_dir
    out_dir = output_dir_for(source, config)
    cc_dir = join_path(layout.gen_dir, out_dir)
    rel_cc_out_dir = rebase_path(cc_dir, build_dir)

    args: list[str] = []
    outputs: list[str] = []
    if config.cc_include:
        args += [
            "--include",
            config.cc_include,
            "--protobuf",
            f"{rel_cc_out_dir}/{source.name_part}{CC_HEADER_SUFFIX}",
        ]
    args += [
        "--proto-in-dir",
        rebase_path(source.dir, build_dir),
        "--proto-in-file",
        source.file_part,
        "--use-system-protobuf=0",
    ]
    # "./" keeps the wrapper from resolving protoc against PATH.
    args += ["--", "./" + rebase_path(protoc_path, build_dir)]

    if config.generate_python:
        py_out_dir = join_path(layout.python_out_root, out_dir)
        outputs.append(join_path(py_out_dir, f"{source.name_part}{PYTHON_STUB_SUFFIX}"))
        args += ["--python_out", rebase_path(py_out_dir, build_dir)]

    if config.generate_cc:
        outputs += [
            join_path(cc_dir, f"{source.name_part}{CC_SOURCE_SUFFIX}"),
            join_path(cc_dir, f"{source.name_part}{CC_HEADER_SUFFIX}"),
        ]
        args += ["--cpp_out", f"{config.cc_generator_options}{rel_cc_out_dir}"]

    if plugin is not None and plugin_path is not None:
        stem = f"{source.name_part}{plugin.suffix}"
        outputs += [join_path(cc_dir, f"{stem}.cc"), join_path(cc_dir, f"{stem}.h")]
        args += [
            "--plugin",
            f"{PLUGIN_NAME}={rebase_path(plugin_path, build_dir)}",
            "--plugin_out",
            f"{plugin.options}{rel_cc_out_dir}",
        ]

    return FileInvocation(
        source=source.path,
        out_dir=out_dir,
        args=tuple(args),
        outputs=tuple(outputs),
    )


def _check_options(options: str, *, field: str, target: str) -> None:
    if options and not options.endswith(OPTIONS_SEPARATOR):
        raise MalformedOptionsError(
            f"Generator options must end with `{OPTIONS_SEPARATOR}`.",
            hint="protoc reads `<options>:<out_dir>`; append the separator to the options.",
            context={"target": target, "field": field, "options": options},
        )
