"""
Main entry point for the Channel Video System.

Operator commands: publish a video, sync the catalog from the channel, or
serve the HTTP API.
"""

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path
from typing import List, Mapping, Optional

from dotenv import dotenv_values

from .core.config import Config
from .core.errors import CatalogError, ConfigurationError, InputTooLargeError, ValidationError
from .core.logging_config import setup_logging, get_performance_logger
from .core.timezone_utils import TimezoneManager
from .catalog.domain.interfaces import RemoteLogClient
from .catalog.domain.models import PublishRequest, PublishResult, SyncResult
from .catalog.integration import create_catalog_module
from .catalog.infrastructure.metadata_extractors import OpenCVMetadataExtractor

EXIT_OK = 0
EXIT_FAILURE = 1
# Event published, local catalog not updated; `sync` repairs it
EXIT_CATALOG_NOT_UPDATED = 2


class ChannelVideoSystem:
    """Application coordinator for the operator commands"""

    def __init__(self, config: Config, remote_client: Optional[RemoteLogClient] = None):
        self.config = config
        self.logger = logging.getLogger(__name__)
        self.performance_logger = get_performance_logger("channel_video_system")
        self.timezone_manager = TimezoneManager(config.system.timezone)

        self.config.ensure_storage_directory()
        self.catalog = create_catalog_module(config, remote_client=remote_client)

    def publish(self, video_path: Path, title: str, description: str = "", duration: Optional[float] = None, thumbnail_path: Optional[Path] = None) -> PublishResult:
        """Publish a local video file"""
        limit = self.config.telegram.max_upload_bytes
        for path in filter(None, (video_path, thumbnail_path)):
            if not path.is_file():
                raise ValidationError([f"File not found: {path}"])
            size = path.stat().st_size
            if size > limit:
                raise InputTooLargeError(size, limit)

        if duration is None:
            duration = asyncio.run(OpenCVMetadataExtractor().probe_duration(video_path))
            self.logger.info(f"Probed duration: {duration:.0f}s")

        request = PublishRequest(
            video=video_path.read_bytes(),
            title=title,
            description=description,
            duration_seconds=duration,
            thumbnail=thumbnail_path.read_bytes() if thumbnail_path else None,
            video_filename=video_path.name,
            thumbnail_filename=thumbnail_path.name if thumbnail_path else "thumbnail.jpg",
        )

        self.performance_logger.start_timer("publish")
        result = asyncio.run(self.catalog.publish_service.publish(request))
        self.performance_logger.end_timer("publish")
        return result

    def sync(self, limit: Optional[int] = None) -> SyncResult:
        """Merge recent channel events into the local catalog"""
        self.performance_logger.start_timer("sync")
        result = asyncio.run(self.catalog.sync_service.sync(limit=limit))
        self.performance_logger.end_timer("sync")
        return result

    def serve(self) -> None:
        """Run the HTTP API (blocking call)"""
        from .api.server import APIServer

        APIServer(self.config, self.catalog).run()


def build_config(config_file: str, environ: Mapping[str, str]) -> Config:
    """Load the configuration file and overlay the given environment"""
    config = Config(config_file)
    config.apply_environment(environ)
    return config


def load_environment(env_file: str) -> dict:
    """Process environment over the values of an optional .env file"""
    values = {key: value for key, value in dotenv_values(env_file).items() if value is not None} if os.path.exists(env_file) else {}
    values.update(os.environ)
    return values


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="channel-video", description="Channel Video System")
    parser.add_argument("--config", type=str, help="Path to configuration file", default="config.json")
    parser.add_argument("--env-file", type=str, help="Path to .env file with credentials", default=".env")
    parser.add_argument("--log-level", type=str, choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Override log level", default=None)

    commands = parser.add_subparsers(dest="command", required=True)

    publish = commands.add_parser("publish", help="Upload a video to the channel and add it to the catalog")
    publish.add_argument("--video", type=Path, required=True, help="Video file")
    publish.add_argument("--thumb", type=Path, default=None, help="Thumbnail image")
    publish.add_argument("--title", type=str, required=True, help="Video title")
    publish.add_argument("--description", "--desc", type=str, default="", help="Video description")
    publish.add_argument("--duration", type=float, default=None, help="Duration in seconds (probed when omitted)")

    sync = commands.add_parser("sync", help="Merge recent channel events into the catalog")
    sync.add_argument("--limit", type=int, default=None, help="Maximum log entries to fetch")

    commands.add_parser("serve", help="Run the HTTP API")

    return parser


def run(argv: Optional[List[str]] = None, environ: Optional[Mapping[str, str]] = None, remote_client: Optional[RemoteLogClient] = None) -> int:
    """Run one command and return the process exit status"""
    args = create_parser().parse_args(argv)

    config = build_config(args.config, environ if environ is not None else load_environment(args.env_file))
    if args.log_level:
        config.system.log_level = args.log_level
    setup_logging(log_level=config.system.log_level, log_file=config.system.log_file)
    logger = logging.getLogger(__name__)

    try:
        system = ChannelVideoSystem(config, remote_client=remote_client)

        if args.command == "publish":
            result = system.publish(args.video, args.title, args.description, args.duration, args.thumb)
            record = result.record
            print(f"Published video {record.id}: {record.title!r} ({record.duration_seconds:.0f}s, uploaded {system.timezone_manager.format_unix(record.created_at)})")
            if not result.catalog_updated:
                print(f"Warning: local catalog not updated ({result.catalog_error}). Run `sync` to repair it.", file=sys.stderr)
                return EXIT_CATALOG_NOT_UPDATED

        elif args.command == "sync":
            result = system.sync(limit=args.limit)
            state = "updated" if result.changed else "unchanged"
            print(f"Catalog {state}: {result.decoded_events} of {result.fetched_events} log entries were catalog events, {result.total_records} videos")

        elif args.command == "serve":
            system.serve()

    except ConfigurationError as e:
        print(f"Error: missing credentials or configuration: {e}", file=sys.stderr)
        return EXIT_FAILURE
    except CatalogError as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {args.command} failed: {e}", file=sys.stderr)
        return EXIT_FAILURE

    return EXIT_OK


def main():
    """Main entry point for the application"""
    sys.exit(run())


if __name__ == "__main__":
    main()
