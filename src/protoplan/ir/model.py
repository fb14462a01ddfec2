"""IR dataclasses shared by the resolver, template wrapper and emitters."""

from __future__ import annotations

from dataclasses import dataclass

from protoplan.models import CompileKind


@dataclass(frozen=True, slots=True)
class FileInvocation:
    """One wrapper invocation for a single `.proto` source."""

    source: str
    out_dir: str
    args: tuple[str, ...]
    outputs: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class GenerationPlan:
    target: str
    script: str
    invocations: tuple[FileInvocation, ...]
    inputs: tuple[str, ...]
    deps: tuple[str, ...]
    generates_cc: bool

    @property
    def sources(self) -> tuple[str, ...]:
        return tuple(invocation.source for invocation in self.invocations)

    @property
    def outputs(self) -> tuple[str, ...]:
        return tuple(output for invocation in self.invocations for output in invocation.outputs)

    def invocation_for(self, source: str) -> FileInvocation:
        for invocation in self.invocations:
            if invocation.source == source:
                return invocation
        raise KeyError(source)


@dataclass(frozen=True, slots=True)
class GenerationNode:
    label: str
    plan: GenerationPlan
    visibility: tuple[str, ...]

    @property
    def outputs(self) -> tuple[str, ...]:
        return self.plan.outputs


@dataclass(frozen=True, slots=True)
class CompileNode:
    label: str
    kind: CompileKind
    sources: tuple[str, ...]
    visibility: tuple[str, ...] | None = None
    defines: tuple[str, ...] = ()
    configs: tuple[str, ...] = ()
    public_configs: tuple[str, ...] = ()
    public_deps: tuple[str, ...] = ()
    deps: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ProtoLibrary:
    generation: GenerationNode
    compile: CompileNode

    @property
    def nodes(self) -> tuple[GenerationNode | CompileNode, ...]:
        return (self.generation, self.compile)
