"""CLI entry point for searchfw index administration."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from searchfw.adapters.base.adapter import SearchEngineAdapter
    from searchfw.config.settings import Settings
    from searchfw.models.schema import Collection


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="searchfw",
        description="searchfw — Elasticsearch adapters for the Search Framework",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--index",
        type=str,
        default=None,
        help="Active index (overrides config)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"searchfw {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    create = subparsers.add_parser("create-index", help="Create the index and put collection mappings")
    create.add_argument(
        "--schema",
        "-s",
        type=str,
        required=True,
        help="YAML file mapping collection names to {type, fields}",
    )

    subparsers.add_parser("delete-index", help="Delete the active index")

    search = subparsers.add_parser("search", help="Run a keyword search")
    search.add_argument("keywords", type=str, help="Search keywords")
    search.add_argument("--size", type=int, default=10, help="Maximum number of hits")

    args = parser.parse_args(argv)

    import yaml  # type: ignore[import-untyped]
    from pydantic import ValidationError
    from pydantic_settings import SettingsError

    from searchfw.adapters.base.exceptions import AdapterError
    from searchfw.observability.logging import setup_logging

    try:
        settings = _load_settings(args.config)
    except (FileNotFoundError, SettingsError, ValidationError, yaml.YAMLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    if args.index:
        settings.elasticsearch.index = args.index
    if args.log_level:
        settings.observability.log_level = args.log_level
    setup_logging(settings.observability)

    try:
        if args.command == "create-index":
            collections = load_collections(Path(args.schema))
            asyncio.run(_run(settings, lambda adapter: adapter.create_index(collections)))
        elif args.command == "delete-index":
            asyncio.run(_run(settings, lambda adapter: adapter.delete()))
        elif args.command == "search":
            result = asyncio.run(_run(settings, lambda adapter: adapter.search(args.keywords, {"size": args.size})))
            body = getattr(result, "body", result)
            print(json.dumps(body, indent=2, ensure_ascii=False, default=str))
    except (AdapterError, FileNotFoundError, ValidationError, yaml.YAMLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


async def _run(settings: Settings, call: Callable[[SearchEngineAdapter], Awaitable[Any]]) -> Any:
    """Run ``call`` against an adapter that lives only for this command."""
    from searchfw.adapters.base.registry import default_registry

    async with default_registry().session("elasticsearch", **settings.elasticsearch.adapter_options()) as adapter:
        return await call(adapter)


def _load_settings(config: str | None) -> Settings:
    from searchfw.config.settings import Settings

    if config:
        return Settings.from_yaml(config)
    return Settings()


def load_collections(path: Path) -> list[Collection]:
    """Load collections from a schema YAML file.

    Example file::

        articles:
          type: article
          fields:
            title: {type: string}
            published: {type: date, analyzed: false}
    """
    import yaml  # type: ignore[import-untyped]

    from searchfw.adapters.base.exceptions import ConfigurationError
    from searchfw.models.schema import Collection, Schema

    if not path.exists():
        raise FileNotFoundError(f"Schema file not found: {path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Schema file {path} must map collection names to {{type, fields}}.")

    collections = []
    for name, entry in data.items():
        if not isinstance(entry, dict):
            raise ConfigurationError(f"Collection '{name}' in {path} must be a mapping with 'fields'.")
        collections.append(
            Collection(
                name=name,
                schema=Schema.from_dict(entry.get("fields") or {}),
                type=entry.get("type"),
            )
        )
    return collections


def _get_version() -> str:
    """Get the package version."""
    try:
        from searchfw import __version__

        return __version__
    except ImportError:
        return "unknown"


if __name__ == "__main__":
    sys.exit(main())
