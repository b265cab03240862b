"""
Shared pytest fixtures for layerconf tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports.
"""

import os as _os
import pathlib as _pathlib
import textwrap as _textwrap
import typing as _typing

import pytest as _pytest


@_pytest.fixture(autouse=True)
def isolated_env(monkeypatch: _pytest.MonkeyPatch) -> None:
    """Remove LAYERCONF_* overrides so every test sees the default conventions."""
    for key in list(_os.environ):
        if key.startswith("LAYERCONF_"):
            monkeypatch.delenv(key, raising=False)


@_pytest.fixture
def missing_lookup() -> _typing.Callable[[str], str | None]:
    """Lookup that never finds a variable."""

    def lookup(key: str) -> str | None:  # noqa: ARG001 - lookup interface
        return None

    return lookup


@_pytest.fixture
def write_yaml(tmp_path: _pathlib.Path) -> _typing.Callable[[str, str], _pathlib.Path]:
    """Factory writing dedented YAML content to a file under tmp_path."""

    def _write(name: str, content: str) -> _pathlib.Path:
        path = tmp_path / name
        path.write_text(_textwrap.dedent(content), encoding="utf-8")
        return path

    return _write
