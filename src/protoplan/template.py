"""proto_library template: a generation node plus the compile unit built from its outputs."""

from __future__ import annotations

from protoplan.ir.model import CompileNode, GenerationNode, GenerationPlan, ProtoLibrary
from protoplan.ir.validate import validate_library
from protoplan.labels import local_label, resolve_label
from protoplan.models import BuildLayout, CompileKind, TargetConfig
from protoplan.observability import StructuredLogger
from protoplan.resolve import resolve


def proto_library(
    config: TargetConfig,
    layout: BuildLayout | None = None,
    *,
    logger: StructuredLogger | None = None,
) -> ProtoLibrary:
    layout = layout or BuildLayout()
    plan = resolve(config, layout, logger=logger)
    compile_label = local_label(config.base_dir, config.name)

    generation = GenerationNode(
        label=local_label(config.base_dir, config.generation_target_name),
        plan=plan,
        visibility=(compile_label,),
    )
    compile_node = compile_unit(config, layout, plan, generation_label=generation.label)
    library = ProtoLibrary(generation=generation, compile=compile_node)
    validate_library(library)

    if logger is not None:
        for node in library.nodes:
            logger.log(
                operation="proto_library",
                target=compile_label,
                source=None,
                node=node.label,
                message="declared build-graph node",
                extra=_node_summary(node),
            )
    return library


def compile_unit(
    config: TargetConfig,
    layout: BuildLayout,
    plan: GenerationPlan,
    *,
    generation_label: str,
) -> CompileNode:
    """Declare the compile node consuming ``plan``'s outputs."""
    base_dir = config.base_dir
    public_deps: tuple[str, ...] = ()
    # Generated C++ needs the runtime library; python/plugin-only targets do not.
    if plan.generates_cc:
        public_deps = (resolve_label(layout.runtime_label),)

    return CompileNode(
        label=local_label(base_dir, config.name),
        kind=compile_kind(config, layout),
        sources=plan.outputs,
        visibility=config.visibility,
        defines=config.defines,
        configs=config.extra_configs,
        public_configs=(resolve_label(layout.using_proto_config),),
        public_deps=public_deps,
        deps=(generation_label, *(resolve_label(dep, base_dir) for dep in config.deps)),
    )


def compile_kind(config: TargetConfig, layout: BuildLayout) -> CompileKind:
    if config.component_build_force_source_set and layout.is_component_build:
        return "source_set"
    return "static_library"


def _node_summary(node: GenerationNode | CompileNode) -> dict[str, object]:
    if isinstance(node, GenerationNode):
        return {"invocations": len(node.plan.invocations), "outputs": len(node.outputs)}
    return {"kind": node.kind, "sources": len(node.sources)}
