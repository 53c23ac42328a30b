"""Tests for loading adapter modules from a plugin directory."""

from __future__ import annotations

from pathlib import Path
from textwrap import dedent

import pytest

from resolvarr.domain.providers import DuplicateProviderError, ProviderLoadError
from resolvarr.infrastructure.providers.factories import AdapterFactoryRegistry
from resolvarr.infrastructure.providers.loader import (
    discover_adapter_modules,
    load_adapter_module,
)

_VALID_ADAPTER = dedent(
    """
    from resolvarr.infrastructure.providers.httpx_base import HttpxProviderBase


    class ExampleProvider(HttpxProviderBase):
        name = "{name}"
        title = "Example"
        _domains = ["example.test"]

        async def latest_movies(self, page):
            return []


    provider = ExampleProvider
    """
)


def _write(directory: Path, filename: str, body: str) -> Path:
    path = directory / filename
    path.write_text(body, encoding="utf-8")
    return path


class TestDiscover:
    def test_lists_python_files_sorted(self, tmp_path: Path) -> None:
        _write(tmp_path, "b.py", "")
        _write(tmp_path, "a.py", "")
        _write(tmp_path, "_private.py", "")
        _write(tmp_path, "notes.txt", "")
        assert [p.name for p in discover_adapter_modules(tmp_path)] == ["a.py", "b.py"]

    def test_missing_directory(self, tmp_path: Path) -> None:
        assert discover_adapter_modules(tmp_path / "missing") == []


class TestLoadModule:
    def test_valid_module(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "example.py", _VALID_ADAPTER.format(name="example"))
        factory = load_adapter_module(path)
        assert factory.name == "example"
        adapter = factory(None, base_url="https://example.test", max_concurrent_seasons=2)
        assert adapter.base_url == "https://example.test"

    def test_missing_export(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "nothing.py", "x = 1\n")
        with pytest.raises(ProviderLoadError, match="export 'provider'"):
            load_adapter_module(path)

    def test_nameless_provider(self, tmp_path: Path) -> None:
        body = "class P:\n    name = ''\n\nprovider = P\n"
        path = _write(tmp_path, "nameless.py", body)
        with pytest.raises(ProviderLoadError, match="non-empty 'name'"):
            load_adapter_module(path)

    def test_incomplete_contract(self, tmp_path: Path) -> None:
        body = "class P:\n    name = 'p'\n    async def home(self):\n        return []\n\nprovider = P\n"
        path = _write(tmp_path, "partial.py", body)
        with pytest.raises(ProviderLoadError, match="contract methods"):
            load_adapter_module(path)

    def test_syntax_error(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "broken.py", "def oops(:\n")
        with pytest.raises(ProviderLoadError, match="SyntaxError"):
            load_adapter_module(path)

    def test_import_error(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "missing_dep.py", "import does_not_exist_anywhere\n")
        with pytest.raises(ProviderLoadError):
            load_adapter_module(path)


class TestFactoryRegistryPluginDir:
    def test_registers_plugins(self, tmp_path: Path) -> None:
        _write(tmp_path, "one.py", _VALID_ADAPTER.format(name="one"))
        _write(tmp_path, "two.py", _VALID_ADAPTER.format(name="two"))
        registry = AdapterFactoryRegistry.with_builtins()
        assert registry.load_plugin_dir(tmp_path) == ["one", "two"]
        assert registry.list_names() == ["moviebox", "one", "two"]

    def test_plugin_cannot_shadow_builtin(self, tmp_path: Path) -> None:
        _write(tmp_path, "mb.py", _VALID_ADAPTER.format(name="moviebox"))
        with pytest.raises(DuplicateProviderError):
            AdapterFactoryRegistry.with_builtins().load_plugin_dir(tmp_path)
