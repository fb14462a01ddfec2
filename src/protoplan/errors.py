"""Typed error model with stable, machine-readable error codes."""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum


class ErrorCode(StrEnum):
    """Stable error identifiers used across API surfaces."""

    VALIDATION = "E_VALIDATION"
    MISSING_REQUIRED_FIELD = "E_MISSING_REQUIRED_FIELD"
    MISSING_DEPENDENT_FIELD = "E_MISSING_DEPENDENT_FIELD"
    MALFORMED_OPTIONS = "E_MALFORMED_OPTIONS"
    CONFIG = "E_CONFIG"


class ProtoPlanError(Exception):
    """Base error class that carries code, optional hint, and context."""

    code: str
    hint: str | None
    context: Mapping[str, str]

    def __init__(
        self,
        message: str,
        *,
        code: ErrorCode,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code.value
        self.hint = hint
        self.context = dict(context or {})

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.hint:
            parts.append(f"Hint: {self.hint}")
        if self.context:
            for k, v in self.context.items():
                if v:
                    parts.append(f"  {k}: {v}")
        return "\n".join(parts)

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "code": self.code,
            "message": str(self),
            "context": dict(self.context),
        }
        if self.hint is not None:
            payload["hint"] = self.hint
        return payload


class ValidationError(ProtoPlanError):
    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message, code=ErrorCode.VALIDATION, hint=hint, context=context)


class MissingRequiredFieldError(ProtoPlanError):
    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(
            message,
            code=ErrorCode.MISSING_REQUIRED_FIELD,
            hint=hint,
            context=context,
        )


class MissingDependentFieldError(ProtoPlanError):
    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(
            message,
            code=ErrorCode.MISSING_DEPENDENT_FIELD,
            hint=hint,
            context=context,
        )


class MalformedOptionsError(ProtoPlanError):
    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message, code=ErrorCode.MALFORMED_OPTIONS, hint=hint, context=context)


class ConfigError(ProtoPlanError):
    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message, code=ErrorCode.CONFIG, hint=hint, context=context)


__all__ = [
    "ConfigError",
    "ErrorCode",
    "MalformedOptionsError",
    "MissingDependentFieldError",
    "MissingRequiredFieldError",
    "ProtoPlanError",
    "ValidationError",
]
