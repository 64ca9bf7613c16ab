# Path: ikea_api/cli/catalog_cli.py
"""
Catalog CLI

Command-line interface for the catalog client.

Commands:
    search <query>                 Search the catalog
    metadata <id>                  Fetch product metadata
    thumbnail <id> <url>           Download a product image
    model <id>                     Download the 3D model
    exists <id>                    Check 3D model availability
    paths                          Create and check cache/log directories
    decompress <file> [-o out]     Decode a Draco-compressed GLB

Usage:
    ikea-api --region gb --locale en search "poang"
    python main.py model 003.467.35
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ikea_api import __version__
from ikea_api.core.config_loader import ConfigLoader
from ikea_api.core.data_paths import DataPathsManager
from ikea_api.core.logger import configure_logging, get_logger
from ikea_api.engine.coordinator import CatalogCoordinator
from ikea_api.engine.events import (
    AvailabilityChecked,
    FailureEvent,
    MetadataLoaded,
    ModelReady,
    SearchCompleted,
    ThumbnailReady,
)
from ikea_api.tools.draco import DracoError, decompress_draco
from ikea_api.constants import LOG_INPUT, LOG_OUTPUT

logger = get_logger(__name__, 'cli')

console = Console()

EXIT_OK = 0
EXIT_FAILED = 1


def build_parser() -> argparse.ArgumentParser:
    """Argument parser with one sub-command per flow."""
    parser = argparse.ArgumentParser(
        prog='ikea-api',
        description="IKEA catalog client - search, metadata, thumbnails and 3D models with a local cache",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Search by name or item number
  ikea-api search poang
  ikea-api search 003.467.35

  # Product document and 3D model
  ikea-api metadata 00346735
  ikea-api model 00346735

  # Different market, separate cache
  ikea-api --region gb --locale en --cache-dir ./gb_cache model 00346735
        """
    )

    parser.add_argument('--version', action='version', version=f'ikea-api {__version__}')
    parser.add_argument('--region', help='Market code (default from IKEA_API_REGION or "ie")')
    parser.add_argument('--locale', help='Language code (default from IKEA_API_LOCALE or "en")')
    parser.add_argument('--cache-dir', type=Path, help='Cache root directory')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='command', help='Command to execute')
    subparsers.required = True

    search_parser = subparsers.add_parser('search', help='Search the catalog')
    search_parser.add_argument('query', help='Free text or item number')
    search_parser.add_argument('--json', action='store_true', help='Print results as JSON')

    metadata_parser = subparsers.add_parser('metadata', help='Fetch product metadata')
    metadata_parser.add_argument('identifier', help='Item number')
    metadata_parser.add_argument('--json', action='store_true', help='Print the full document')

    thumbnail_parser = subparsers.add_parser('thumbnail', help='Download a product image')
    thumbnail_parser.add_argument('identifier', help='Item number')
    thumbnail_parser.add_argument('url', help='Image URL')

    model_parser = subparsers.add_parser('model', help='Download the 3D model')
    model_parser.add_argument('identifier', help='Item number')

    exists_parser = subparsers.add_parser('exists', help='Check 3D model availability')
    exists_parser.add_argument('identifier', help='Item number')

    subparsers.add_parser('paths', help='Create and check cache/log directories')

    decompress_parser = subparsers.add_parser('decompress', help='Decode a Draco-compressed GLB')
    decompress_parser.add_argument('file', type=Path, help='Compressed GLB')
    decompress_parser.add_argument('-o', '--output', type=Path, help='Output GLB')

    return parser


def apply_overrides(args: argparse.Namespace, config: ConfigLoader) -> None:
    """Push command-line options into configuration."""
    if args.region:
        config.set('region', args.region)
    if args.locale:
        config.set('locale', args.locale)
    if args.cache_dir:
        config.set('cache_dir', args.cache_dir)
    if args.verbose:
        config.set('log_level', 'DEBUG')


def display_failure(event: FailureEvent) -> None:
    kind = event.error.kind.value if event.error else 'error'
    subject = getattr(event, 'identifier', '')
    prefix = f"{subject}: " if subject else ''
    console.print(f"[red]Failed ({kind}):[/red] {escape(prefix + event.message)}")


def display_search(event: SearchCompleted, as_json: bool = False) -> None:
    if as_json:
        console.print_json(json.dumps([item.to_dict() for item in event.items]))
        return

    if not event.items:
        console.print("No products found.")
        return

    table = Table(title=f"Search Results ({len(event.items)})", show_header=True)
    table.add_column("Item", style="cyan", no_wrap=True)
    table.add_column("Name", style="bold")
    table.add_column("Description")

    for item in event.items:
        table.add_row(item.identifier, item.display_name, item.image_alt_text)

    console.print(table)
    if event.dropped:
        console.print(f"[yellow]{event.dropped} incomplete results skipped[/yellow]")


def display_metadata(event: MetadataLoaded, full: bool) -> None:
    source = 'cache' if event.from_cache else 'network'
    console.print(f"[green]Metadata[/green] {event.identifier} ({source})")

    if full:
        console.print_json(json.dumps(event.document))
    elif isinstance(event.document, dict):
        console.print(f"Keys: {', '.join(sorted(event.document))}")


def display_path(label: str, event) -> None:
    source = 'cache' if event.from_cache else 'network'
    console.print(f"[green]{label}[/green] {event.identifier} ({source}): {event.path}")


def display_paths(manager: DataPathsManager) -> int:
    creation = manager.ensure_all_directories()
    health = manager.health_check()

    table = Table(title="Data Paths", show_header=True)
    table.add_column("Directory", style="bold")
    table.add_column("Path", style="cyan")
    table.add_column("Status")

    for name, (valid, message) in health['path_validation'].items():
        status = "[green]OK[/green]" if valid else f"[red]{message}[/red]"
        table.add_row(name, str(manager.config.get(name) or '-'), status)

    console.print(table)
    console.print(f"Created: {len(creation['created'])} | Status: {health['status']}")

    return EXIT_OK if health['status'] != 'critical' else EXIT_FAILED


async def run_command(args: argparse.Namespace, config: Optional[ConfigLoader] = None, handler=None) -> int:
    """
    Execute one parsed command.

    Args:
        args: Parsed arguments
        config: Optional ConfigLoader instance
        handler: Optional host transport for the coordinator

    Returns:
        Process exit code
    """
    config = config if config else ConfigLoader()
    logger.info(f"{LOG_INPUT} Command: {args.command}")

    if args.command == 'paths':
        return display_paths(DataPathsManager(config))

    if args.command == 'decompress':
        try:
            output = decompress_draco(args.file, args.output)
        except DracoError as e:
            console.print(f"[red]Error:[/red] {escape(str(e))}")
            return EXIT_FAILED
        console.print(f"[green]Decompressed model saved to:[/green] {output}")
        return EXIT_OK

    async with CatalogCoordinator(config, handler=handler) as catalog:
        if args.command == 'search':
            event = await catalog.search(args.query)
        elif args.command == 'metadata':
            event = await catalog.get_metadata(args.identifier)
        elif args.command == 'thumbnail':
            event = await catalog.get_thumbnail(args.identifier, args.url)
        elif args.command == 'model':
            event = await catalog.get_model(args.identifier)
        elif args.command == 'exists':
            event = await catalog.check_availability(args.identifier)
        else:
            raise ValueError(f"Unknown command: {args.command}")

    logger.info(f"{LOG_OUTPUT} {args.command} finished with {type(event).__name__}")

    if isinstance(event, FailureEvent):
        display_failure(event)
        return EXIT_FAILED

    if isinstance(event, SearchCompleted):
        display_search(event, args.json)
    elif isinstance(event, MetadataLoaded):
        display_metadata(event, args.json)
    elif isinstance(event, ThumbnailReady):
        display_path('Thumbnail', event)
    elif isinstance(event, ModelReady):
        display_path('Model', event)
    elif isinstance(event, AvailabilityChecked):
        answer = "[green]yes[/green]" if event.exists else "[yellow]no[/yellow]"
        console.print(f"3D model available for {event.identifier}: {answer}")

    return EXIT_OK


def main(argv: Optional[list[str]] = None, handler=None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    config = ConfigLoader()
    try:
        apply_overrides(args, config)
    except (KeyError, ValueError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        return EXIT_FAILED

    configure_logging(config)

    try:
        return asyncio.run(run_command(args, config, handler=handler))
    except KeyboardInterrupt:
        console.print("\n\nCancelled by user.")
        return EXIT_FAILED


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


__all__ = ['build_parser', 'apply_overrides', 'run_command', 'main', 'run']
