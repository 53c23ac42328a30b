"""``resolvarr`` command: serve the remote execution host or check providers."""

from __future__ import annotations

import argparse
import asyncio
import os
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import structlog
import uvicorn

from resolvarr.domain.providers.exceptions import ProviderError
from resolvarr.infrastructure.config import AppConfig, load_config
from resolvarr.infrastructure.logging.setup import configure_logging
from resolvarr.interfaces.app import create_app
from resolvarr.interfaces.composition import build_provider_stack, create_http_client

log = structlog.get_logger(__name__)

DEFAULT_PORT = 7980

# argparse dest -> flat config key understood by load_config()
_OVERRIDE_FLAGS: tuple[tuple[str, str], ...] = (
    ("plugin_dir", "plugin_dir"),
    ("remote_only", "remote_only"),
    ("log_level", "log_level"),
    ("log_format", "log_format"),
)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="resolvarr",
        description="Serve provider adapters over HTTP, or validate the provider setup.",
    )

    server = parser.add_argument_group("server")
    server.add_argument("--host", default=None, help="Bind host (overrides HOST env).")
    server.add_argument(
        "--port", default=None, type=int, help="Bind port (overrides PORT env)."
    )

    files = parser.add_argument_group("configuration files")
    files.add_argument("--config", default=None, help="Path to YAML config file.")
    files.add_argument("--dotenv", default=None, help="Path to .env file.")

    providers = parser.add_argument_group("providers")
    providers.add_argument(
        "--plugin-dir",
        default=None,
        help="Directory with extra Python adapter modules.",
    )
    providers.add_argument(
        "--remote-only",
        action="store_true",
        default=None,
        help="Route every local provider through its configured remote endpoint.",
    )
    providers.add_argument(
        "--validate",
        action="store_true",
        help="Build and validate the provider registry, then exit.",
    )

    logging_group = parser.add_argument_group("logging")
    logging_group.add_argument(
        "--log-level", default=None, choices=["DEBUG", "INFO", "WARNING", "ERROR"]
    )
    logging_group.add_argument("--log-format", default=None, choices=["json", "console"])

    return parser


def _parse_args(argv: Iterable[str] | None) -> argparse.Namespace:
    return _build_parser().parse_args(argv)


def _cli_overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Only flags the user actually passed take part in the CLI layer."""
    return {
        key: getattr(args, dest)
        for dest, key in _OVERRIDE_FLAGS
        if getattr(args, dest)
    }


async def _validate_providers(config: AppConfig) -> int:
    async with create_http_client(config) as http_client:
        try:
            _, registry, resolver = await build_provider_stack(config, http_client)
        except ProviderError as exc:
            log.error("provider_validation_failed", kind=exc.kind, error=str(exc))
            return 1
    log.info(
        "provider_validation_ok",
        configured=len(registry),
        dispatchable=[str(i) for i in resolver.list_identities()],
    )
    return 0


def start(argv: Iterable[str] | None = None) -> int:
    """Process entrypoint; returns the exit code."""
    args = _parse_args(sys.argv[1:] if argv is None else argv)

    config = load_config(
        config_path=Path(args.config) if args.config else None,
        dotenv_path=Path(args.dotenv) if args.dotenv else None,
        cli_overrides=_cli_overrides(args),
    )
    log_config = configure_logging(config)

    if args.validate:
        return asyncio.run(_validate_providers(config))

    uvicorn.run(
        create_app(config),
        host=args.host or os.getenv("HOST", "0.0.0.0"),
        port=args.port or int(os.getenv("PORT", str(DEFAULT_PORT))),
        log_config=log_config,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(start())
