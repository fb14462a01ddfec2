"""JSON emission of proto_library build-graph nodes."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from protoplan.cache.keys import plan_action_keys
from protoplan.ir.model import CompileNode, GenerationNode, ProtoLibrary

SCHEMA_VERSION = 1


def library_payload(library: ProtoLibrary) -> dict[str, Any]:
    return {
        "version": SCHEMA_VERSION,
        "generation": _generation_payload(library.generation),
        "compile": _compile_payload(library.compile),
    }


def serialize_library(library: ProtoLibrary) -> str:
    return json.dumps(library_payload(library), indent=2, sort_keys=True) + "\n"


def write_library(library: ProtoLibrary, path: str | Path) -> Path:
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(serialize_library(library), encoding="utf-8")
    return output_path


def _generation_payload(node: GenerationNode) -> dict[str, Any]:
    plan = node.plan
    keys = plan_action_keys(plan)
    return {
        "label": node.label,
        "type": "action_foreach",
        "script": plan.script,
        "inputs": list(plan.inputs),
        "deps": list(plan.deps),
        "visibility": list(node.visibility),
        "invocations": [
            {
                "source": invocation.source,
                "args": list(invocation.args),
                "outputs": list(invocation.outputs),
                "action_key": keys[invocation.source],
            }
            for invocation in plan.invocations
        ],
    }


def _compile_payload(node: CompileNode) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "label": node.label,
        "type": node.kind,
        "sources": list(node.sources),
        "defines": list(node.defines),
        "configs": list(node.configs),
        "public_configs": list(node.public_configs),
        "public_deps": list(node.public_deps),
        "deps": list(node.deps),
    }
    if node.visibility is not None:
        payload["visibility"] = list(node.visibility)
    return payload
