"""JSON loaders for target configuration and build layout."""

from __future__ import annotations

import json
from dataclasses import fields
from pathlib import Path
from typing import Any

from protoplan.errors import ConfigError
from protoplan.models import BuildLayout, PluginConfig, TargetConfig

_STR_LIST_FIELDS = {"sources", "deps", "defines", "extra_configs"}
_BOOL_FIELDS = {
    "generate_python",
    "generate_cc",
    "component_build_force_source_set",
    "is_component_build",
}


def parse_target_config(raw: str) -> TargetConfig:
    payload = _load_object(raw, kind="target config")
    _reject_unknown(payload, TargetConfig, kind="target config")

    values: dict[str, Any] = {}
    for key, value in payload.items():
        if key in _STR_LIST_FIELDS:
            values[key] = _str_tuple(value, key)
        elif key in _BOOL_FIELDS:
            values[key] = _bool(value, key)
        elif key == "visibility":
            values[key] = None if value is None else _str_tuple(value, key)
        elif key == "plugin":
            values[key] = None if value is None else _parse_plugin(value)
        elif key in {"proto_out_dir", "cc_include"}:
            values[key] = None if value is None else _str(value, key)
        else:
            values[key] = _str(value, key)
    return TargetConfig(**values)


def read_target_config(path: str | Path) -> TargetConfig:
    return parse_target_config(_read(path, kind="target config"))


def parse_build_layout(raw: str) -> BuildLayout:
    payload = _load_object(raw, kind="build layout")
    _reject_unknown(payload, BuildLayout, kind="build layout")

    values: dict[str, Any] = {}
    for key, value in payload.items():
        if key in _BOOL_FIELDS:
            values[key] = _bool(value, key)
        elif key == "root_gen_dir":
            values[key] = None if value is None else _str(value, key)
        else:
            values[key] = _str(value, key)
    return BuildLayout(**values)


def read_build_layout(path: str | Path) -> BuildLayout:
    return parse_build_layout(_read(path, kind="build layout"))


def _parse_plugin(value: Any) -> PluginConfig:
    if not isinstance(value, dict):
        raise ConfigError("Invalid `plugin` value.", hint="Expected an object with `label`.")
    _reject_unknown(value, PluginConfig, kind="plugin")
    if "label" not in value:
        raise ConfigError("Plugin configuration is missing `label`.")
    suffix = value.get("suffix")
    return PluginConfig(
        label=_str(value["label"], "plugin.label"),
        suffix=None if suffix is None else _str(suffix, "plugin.suffix"),
        options=_str(value.get("options", ""), "plugin.options"),
    )


def _load_object(raw: str, *, kind: str) -> dict[str, Any]:
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid {kind} JSON.", hint=str(exc)) from exc
    if not isinstance(payload, dict):
        raise ConfigError(f"Invalid {kind} payload type.", hint="Expected a JSON object.")
    return payload


def _read(path: str | Path, *, kind: str) -> str:
    config_path = Path(path)
    try:
        return config_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ConfigError(
            f"The {kind} file does not exist.",
            context={"path": str(config_path)},
        ) from exc


def _reject_unknown(payload: dict[str, Any], cls: type, *, kind: str) -> None:
    known = {item.name for item in fields(cls)}
    unknown = sorted(set(payload) - known)
    if unknown:
        raise ConfigError(
            f"Unknown {kind} keys.",
            hint=f"Supported keys: {', '.join(sorted(known))}.",
            context={"keys": ", ".join(unknown)},
        )


def _str(value: Any, key: str) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"Invalid `{key}` value.", hint="Expected a string.")
    return value


def _bool(value: Any, key: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"Invalid `{key}` value.", hint="Expected true or false.")
    return value


def _str_tuple(value: Any, key: str) -> tuple[str, ...]:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"Invalid `{key}` value.", hint="Expected a list of strings.")
    return tuple(value)
