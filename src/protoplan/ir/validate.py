"""Validation helpers for IR correctness."""

from __future__ import annotations

from protoplan.errors import ValidationError
from protoplan.ir.model import ProtoLibrary


def validate_library(library: ProtoLibrary) -> None:
    """Validate structural constraints before handing nodes to the host build."""
    generation = library.generation
    seen: dict[str, str] = {}
    for invocation in generation.plan.invocations:
        for output in invocation.outputs:
            if output in seen:
                raise ValidationError(
                    "Two sources declare the same generated file.",
                    hint="Sources with the same name need distinct output directories.",
                    context={
                        "output": output,
                        "first": seen[output],
                        "second": invocation.source,
                        "operation": "validate_library",
                    },
                )
            seen[output] = invocation.source

    if library.compile.sources != generation.outputs:
        raise ValidationError(
            "Compile node sources differ from the generation outputs.",
            context={"node": library.compile.label, "operation": "validate_library"},
        )
    if library.compile.label not in generation.visibility:
        raise ValidationError(
            "Generation node is not visible to its compile node.",
            context={"node": generation.label, "operation": "validate_library"},
        )
    if generation.label not in library.compile.deps:
        raise ValidationError(
            "Compile node does not depend on its generation node.",
            context={"node": library.compile.label, "operation": "validate_library"},
        )
