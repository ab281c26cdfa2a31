"""Rust code generation from FIX protocol dictionaries."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("fix-codegen")
except PackageNotFoundError:
    # Running from a source checkout without installed metadata.
    __version__ = "0.0.0"
