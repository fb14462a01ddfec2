"""Canonical intermediate representation for proto_library targets."""

from .model import CompileNode, FileInvocation, GenerationNode, GenerationPlan, ProtoLibrary

__all__ = ["CompileNode", "FileInvocation", "GenerationNode", "GenerationPlan", "ProtoLibrary"]
