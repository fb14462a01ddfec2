"""Build-graph target labels (`//dir:name(toolchain)`)."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass

from protoplan.errors import ValidationError
from protoplan.paths import SOURCE_ROOT, is_source_absolute, join_path


@dataclass(frozen=True, slots=True)
class Label:
    dir: str
    name: str
    toolchain: str | None = None

    @classmethod
    def parse(cls, text: str, base_dir: str = SOURCE_ROOT) -> Label:
        raw = text.strip()
        toolchain: str | None = None
        if raw.endswith(")"):
            open_index = raw.find("(")
            if open_index < 0:
                raise ValidationError("Unbalanced toolchain suffix in label.", context={"label": text})
            toolchain = str(cls.parse(raw[open_index + 1 : -1], base_dir))
            raw = raw[:open_index]
        if not raw:
            raise ValidationError("Label is empty.", context={"label": text})

        path, sep, name = raw.partition(":")
        directory = base_dir if not path else join_path(base_dir, path)
        if not sep:
            name = posixpath.basename(directory[len(SOURCE_ROOT) :])
        if not name or "/" in name:
            raise ValidationError(
                "Label does not name a target.",
                hint="Use the `//dir:name` form.",
                context={"label": text},
            )
        return cls(dir=directory, name=name, toolchain=toolchain)

    def with_toolchain(self, toolchain: str | None) -> Label:
        return Label(dir=self.dir, name=self.name, toolchain=toolchain)

    def __str__(self) -> str:
        rendered = f"{self.dir}:{self.name}"
        if self.toolchain is not None:
            rendered += f"({self.toolchain})"
        return rendered


def resolve_label(text: str, base_dir: str = SOURCE_ROOT) -> str:
    """Canonicalize a label string relative to ``base_dir``."""
    return str(Label.parse(text, base_dir))


def local_label(base_dir: str, name: str) -> str:
    if not is_source_absolute(base_dir):
        raise ValidationError("Base directory must be source-absolute.", context={"dir": base_dir})
    return str(Label(dir=join_path(base_dir), name=name))
