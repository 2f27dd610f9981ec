"""Main application factory and CLI interface."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

import uvicorn
import yaml
from fastapi import FastAPI

from .errors import PngMetadataError
from .log_config import setup_logging
from .models import MetadataUpdate, PhysicalResolution, ResolutionUnit
from .routers import metadata
from .services.files import list_chunks_file, read_metadata_file, write_metadata_file
from .settings import Settings

logger = logging.getLogger(__name__)


def create_app(settings: Settings) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(title="PNG Metadata Service")
    app.state.settings = settings

    app.include_router(metadata.router)

    return app


def _parse_text_entries(entries: List[str]) -> Dict[str, str]:
    """Parse KEY=VALUE arguments, keeping their order."""
    result: Dict[str, str] = {}
    for entry in entries:
        keyword, sep, text = entry.partition("=")
        if not sep:
            raise ValueError(f"--text expects KEY=VALUE, got {entry!r}")
        result[keyword] = text
    return result


def _parse_unit(value: str) -> int:
    """Accept a unit number or name (undefined, meters, inches)."""
    if value.isdigit():
        return int(value)
    try:
        return ResolutionUnit[value.upper()]
    except KeyError:
        raise ValueError(f"Unknown resolution unit {value!r}") from None


def _load_update_file(path: Path) -> MetadataUpdate:
    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a mapping")
    return MetadataUpdate.from_dict(data)


def _build_update(args: argparse.Namespace) -> MetadataUpdate:
    """Combine --metadata-file with the options given on the command line."""
    update = _load_update_file(args.metadata_file) if args.metadata_file else MetadataUpdate()

    if args.text:
        text = dict(update.text or {})
        text.update(_parse_text_entries(args.text))
        update.text = text
    if args.phys:
        x, y, unit = args.phys
        update.physical = PhysicalResolution(x=int(x), y=int(y), unit=_parse_unit(unit))
    if args.clear:
        update.clear = True

    return update


def _cmd_read(args: argparse.Namespace, settings: Settings) -> int:
    metadata = read_metadata_file(args.file)
    print(json.dumps(metadata.to_dict(), indent=2, ensure_ascii=False))
    return 0


def _cmd_chunks(args: argparse.Namespace, settings: Settings) -> int:
    for chunk in list_chunks_file(args.file):
        print(f"{chunk.type} {chunk.length}")
    return 0


def _cmd_write(args: argparse.Namespace, settings: Settings) -> int:
    update = _build_update(args)
    target = write_metadata_file(args.file, update, output=args.output)
    print(f"Wrote {target}")
    return 0


def _cmd_serve(args: argparse.Namespace, settings: Settings) -> int:
    overrides = {}
    if args.host is not None:
        overrides['host'] = args.host
    if args.port is not None:
        overrides['port'] = args.port
    settings = Settings(**{**settings.model_dump(), **overrides})

    app = create_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pngmeta", description="Read and write PNG tEXt/pHYs metadata")
    parser.add_argument("--config", type=Path, help="YAML settings file (default: config/config.yml)")
    parser.add_argument("--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)")
    parser.add_argument("--log-file", type=Path, help="Write logs to this file")

    sub = parser.add_subparsers(dest="command", required=True)

    p_read = sub.add_parser("read", help="Print the metadata of a PNG file as JSON")
    p_read.add_argument("file", type=Path)
    p_read.set_defaults(func=_cmd_read)

    p_chunks = sub.add_parser("chunks", help="List the chunks of a PNG file")
    p_chunks.add_argument("file", type=Path)
    p_chunks.set_defaults(func=_cmd_chunks)

    p_write = sub.add_parser("write", help="Write metadata into a PNG file")
    p_write.add_argument("file", type=Path)
    p_write.add_argument("-o", "--output", type=Path, help="Output file (default: overwrite FILE)")
    p_write.add_argument("--text", action="append", metavar="KEY=VALUE", help="Add a tEXt entry (repeatable)")
    p_write.add_argument("--phys", nargs=3, metavar=("X", "Y", "UNIT"),
                         help="Set pHYs pixels per unit; UNIT is 0-2 or undefined/meters/inches")
    p_write.add_argument("--clear", action="store_true", help="Remove all ancillary chunks first")
    p_write.add_argument("--metadata-file", type=Path, help="YAML file with tEXt/pHYs/clear entries")
    p_write.set_defaults(func=_cmd_write)

    p_serve = sub.add_parser("serve", help="Run the HTTP API")
    p_serve.add_argument("--host", help="Host to bind")
    p_serve.add_argument("--port", type=int, help="Port to serve")
    p_serve.set_defaults(func=_cmd_serve)

    return parser


def cli_main(argv: Optional[List[str]] = None) -> int:
    """Command line interface entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Load settings from config file, then apply command line overrides
    try:
        settings = Settings.load_from_yaml(args.config)
        overrides = {}
        if args.log_level is not None:
            overrides['log_level'] = args.log_level
        if args.log_file is not None:
            overrides['log_file'] = args.log_file
        if overrides:
            settings = Settings(**{**settings.model_dump(), **overrides})
    except Exception as e:
        print(f"Error loading settings: {e}", file=sys.stderr)
        return 1

    setup_logging(settings.log_level, settings.log_file)

    try:
        return args.func(args, settings)
    except (PngMetadataError, OSError, ValueError) as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
