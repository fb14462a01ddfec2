"""Shared test fixtures."""

from __future__ import annotations

import pytest

from protoplan.models import BuildLayout, TargetConfig


@pytest.fixture
def layout() -> BuildLayout:
    """Provide the default single-toolchain build layout."""
    return BuildLayout()


@pytest.fixture
def foo_config() -> TargetConfig:
    """A single `//dir/foo.proto` target with every default left in place."""
    return TargetConfig(sources=("dir/foo.proto",))
