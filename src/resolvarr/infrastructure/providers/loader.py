"""Load extra adapter classes from Python files in a plugin directory.

An adapter module must export a module-level ``provider`` that is a class
(or other factory) with a non-empty ``name`` attribute and the six contract
methods.  It is registered as a local adapter under that name.
"""

from __future__ import annotations

import importlib.util
import traceback
from pathlib import Path
from types import ModuleType
from typing import Any

import structlog

from resolvarr.domain.providers.exceptions import ProviderLoadError

log = structlog.get_logger(__name__)

_CONTRACT_METHODS = (
    "latest_movies",
    "latest_shows",
    "search",
    "home",
    "movie_details",
    "show_details",
)


def _import_module_from_path(path: Path) -> ModuleType:
    module_name = f"resolvarr_dynamic_adapter_{path.stem}"
    spec = importlib.util.spec_from_file_location(module_name, str(path))
    if spec is None or spec.loader is None:
        raise ProviderLoadError(f"Could not create import spec for {path}")

    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)  # type: ignore[union-attr]
    except SyntaxError as e:
        tb = traceback.format_exc()
        raise ProviderLoadError(f"SyntaxError while importing {path}:\n{tb}") from e
    except Exception as e:
        tb = traceback.format_exc()
        raise ProviderLoadError(f"Error while importing {path}:\n{tb}") from e

    return module


def load_adapter_module(path: Path) -> Any:
    """Import *path* and return its exported ``provider`` factory."""
    try:
        module = _import_module_from_path(path)
        if not hasattr(module, "provider"):
            raise ProviderLoadError("Adapter module must export 'provider'")

        factory: Any = getattr(module, "provider")
        if not callable(factory):
            raise ProviderLoadError("'provider' must be a class or factory")
        name = getattr(factory, "name", None)
        if not isinstance(name, str) or not name:
            raise ProviderLoadError("'provider' must have a non-empty 'name' attribute")
        missing = [m for m in _CONTRACT_METHODS if not hasattr(factory, m)]
        if missing:
            raise ProviderLoadError(f"'provider' lacks contract methods: {missing}")

        return factory
    except ProviderLoadError as e:
        log.error(
            "adapter_load_failed",
            adapter_file=str(path),
            error_type=type(e).__name__,
            error_message=str(e),
        )
        raise


def discover_adapter_modules(plugin_dir: Path) -> list[Path]:
    """List ``*.py`` files directly inside *plugin_dir* (sorted by name)."""
    if not plugin_dir.is_dir():
        log.warning("adapter_directory_not_found", directory=str(plugin_dir))
        return []

    paths = sorted(
        (
            p
            for p in plugin_dir.iterdir()
            if p.is_file() and p.suffix.lower() == ".py" and not p.name.startswith("_")
        ),
        key=lambda p: p.name,
    )
    log.info("adapters_discovered", count=len(paths), directory=str(plugin_dir))
    return paths
