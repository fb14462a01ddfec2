"""Action key derivation for generation invocations."""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass
from typing import Any

from protoplan.ir.model import FileInvocation, GenerationPlan


@dataclass(frozen=True, slots=True)
class ActionCacheInput:
    script: str
    source: str
    args: tuple[str, ...] = ()
    inputs: tuple[str, ...] = ()
    outputs: tuple[str, ...] = ()


def action_key(inputs: ActionCacheInput) -> str:
    canonical = json.dumps(_to_payload(inputs), sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def invocation_cache_input(plan: GenerationPlan, invocation: FileInvocation) -> ActionCacheInput:
    return ActionCacheInput(
        script=plan.script,
        source=invocation.source,
        args=invocation.args,
        inputs=plan.inputs,
        outputs=invocation.outputs,
    )


def plan_action_keys(plan: GenerationPlan) -> dict[str, str]:
    return {
        invocation.source: action_key(invocation_cache_input(plan, invocation))
        for invocation in plan.invocations
    }


def _to_payload(inputs: ActionCacheInput) -> dict[str, Any]:
    return {
        "script": inputs.script,
        "source": inputs.source,
        "args": list(inputs.args),
        "inputs": sorted(inputs.inputs),
        "outputs": sorted(inputs.outputs),
    }
