"""Emitters that render proto_library IR for host build systems."""

from .emit_json import library_payload, serialize_library, write_library

__all__ = ["library_payload", "serialize_library", "write_library"]
