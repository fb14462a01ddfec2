"""Public package entrypoint for the proto_library planner."""

from .errors import (
    ConfigError,
    MalformedOptionsError,
    MissingDependentFieldError,
    MissingRequiredFieldError,
    ProtoPlanError,
    ValidationError,
)
from .ir import CompileNode, FileInvocation, GenerationNode, GenerationPlan, ProtoLibrary
from .models import BuildLayout, PluginConfig, TargetConfig
from .observability import StructuredLogger
from .resolve import resolve
from .template import proto_library

__all__ = [
    "BuildLayout",
    "CompileNode",
    "ConfigError",
    "FileInvocation",
    "GenerationNode",
    "GenerationPlan",
    "MalformedOptionsError",
    "MissingDependentFieldError",
    "MissingRequiredFieldError",
    "PluginConfig",
    "ProtoLibrary",
    "ProtoPlanError",
    "StructuredLogger",
    "TargetConfig",
    "ValidationError",
    "proto_library",
    "resolve",
]
