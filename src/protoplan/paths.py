"""Source-absolute path helpers mirroring the host build system's conventions."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass

from protoplan.errors import ValidationError

SOURCE_ROOT = "//"


def is_source_absolute(path: str) -> bool:
    return path.startswith(SOURCE_ROOT)


def normalize_path(path: str) -> str:
    """Collapse `.`/`..` segments of a source-absolute path."""
    if not is_source_absolute(path):
        raise ValidationError(
            "Path must be source-absolute.",
            hint="Prefix the path with `//` or resolve it against a base directory first.",
            context={"path": path},
        )
    relative = path[len(SOURCE_ROOT) :]
    if not relative:
        return SOURCE_ROOT
    normalized = posixpath.normpath(relative)
    if normalized == ".":
        return SOURCE_ROOT
    if normalized == ".." or normalized.startswith("../"):
        raise ValidationError(
            "Path escapes the source root.",
            context={"path": path},
        )
    return SOURCE_ROOT + normalized


def join_path(base: str, *parts: str) -> str:
    joined = base
    for part in parts:
        if not part:
            continue
        if is_source_absolute(part):
            joined = part
        elif part.startswith("/"):
            raise ValidationError(
                "System-absolute paths are not supported.",
                context={"path": part},
            )
        elif joined.endswith("/"):
            joined = joined + part
        else:
            joined = f"{joined}/{part}"
    return normalize_path(joined)


def rebase_path(path: str, base: str) -> str:
    """Express source-absolute ``path`` relative to source-absolute ``base``."""
    target = normalize_path(path)[len(SOURCE_ROOT) :]
    origin = normalize_path(base)[len(SOURCE_ROOT) :]
    return posixpath.relpath("/" + target, "/" + origin)


def root_relative(path: str) -> str:
    """Return ``path`` relative to the source root, `.` for the root itself."""
    relative = normalize_path(path)[len(SOURCE_ROOT) :]
    return relative or "."


@dataclass(frozen=True, slots=True)
class SourceFile:
    path: str
    dir: str
    file_part: str
    name_part: str

    @classmethod
    def from_path(cls, path: str, base_dir: str = SOURCE_ROOT) -> SourceFile:
        resolved = join_path(base_dir, path)
        directory, file_part = posixpath.split(resolved[len(SOURCE_ROOT) :])
        if not file_part:
            raise ValidationError(
                "Source path does not name a file.",
                context={"path": path, "base_dir": base_dir},
            )
        name_part, _ = posixpath.splitext(file_part)
        return cls(
            path=resolved,
            dir=SOURCE_ROOT + directory,
            file_part=file_part,
            name_part=name_part,
        )

    @property
    def root_relative_dir(self) -> str:
        return root_relative(self.dir)
