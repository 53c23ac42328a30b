"""Assemble ``AppConfig`` from defaults, YAML, environment and CLI layers."""

from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from typing import Any, Mapping

import yaml
from dotenv import load_dotenv

from .defaults import DEFAULT_CONFIG
from .schema import AppConfig, EnvOverrides

_SECTIONS: tuple[str, ...] = ("http", "logging", "providers")

_TOP_LEVEL_KEYS: tuple[str, ...] = ("app_name", "environment")

# Flat keys (env vars, CLI flags) and the section slot each one fills.
_FLAT_KEYS: dict[str, tuple[str, str]] = {
    "http_timeout_seconds": ("http", "timeout_seconds"),
    "http_follow_redirects": ("http", "follow_redirects"),
    "http_user_agent": ("http", "user_agent"),
    "log_level": ("logging", "level"),
    "log_format": ("logging", "format"),
    "remote_only": ("providers", "remote_only"),
    "max_concurrent_seasons": ("providers", "max_concurrent_seasons"),
    "remote_timeout_seconds": ("providers", "remote_timeout_seconds"),
    "plugin_dir": ("providers", "plugin_dir"),
    "provider_config_url": ("providers", "config_url"),
}


def _merged(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Return a new mapping with *override* layered on top of *base*.

    Nested mappings merge key by key; any other value (lists included,
    e.g. ``providers.entries``) replaces the lower layer wholesale.
    """
    out = dict(base)
    for key, value in override.items():
        lower = out.get(key)
        if isinstance(lower, Mapping) and isinstance(value, Mapping):
            out[key] = _merged(lower, value)
        else:
            out[key] = value
    return out


def _sectioned(layer: Mapping[str, Any]) -> dict[str, Any]:
    """Bring a layer into the sectioned shape ``AppConfig`` validates.

    Layers may mix both spellings: ``{"http": {"timeout_seconds": 5}}``
    and ``{"http_timeout_seconds": 5}`` land in the same slot, and the
    flat spelling wins when a layer carries both.
    """
    out: dict[str, Any] = {
        key: layer[key] for key in _TOP_LEVEL_KEYS if key in layer
    }
    for section in _SECTIONS:
        block = layer.get(section)
        if isinstance(block, Mapping):
            out[section] = dict(block)

    for flat_key, (section, slot) in _FLAT_KEYS.items():
        if flat_key in layer:
            out.setdefault(section, {})[slot] = layer[flat_key]
    return out


def _yaml_layer(config_path: Path) -> dict[str, Any]:
    if not config_path.exists():
        raise FileNotFoundError(config_path)
    parsed = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ValueError(
            f"Config YAML must be a mapping, got: {type(parsed)!r}")
    return parsed


def load_config(
    *,
    config_path: Path | None = None,
    dotenv_path: Path | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> AppConfig:
    """
    Load configuration with strict precedence:
    defaults < YAML file < env vars (incl. .env) < cli overrides

    Reads files only; never creates files or directories.
    """
    # .env only fills variables that are not already set in the process.
    if dotenv_path is not None:
        if not dotenv_path.exists():
            raise FileNotFoundError(dotenv_path)
        load_dotenv(dotenv_path, override=False)

    layers: list[Mapping[str, Any]] = [deepcopy(DEFAULT_CONFIG)]
    if config_path is not None:
        layers.append(_yaml_layer(config_path))
    layers.append(EnvOverrides().to_update_dict())
    layers.append(cli_overrides or {})

    merged: dict[str, Any] = {}
    for layer in layers:
        merged = _merged(merged, _sectioned(layer))

    return AppConfig.model_validate(merged)
