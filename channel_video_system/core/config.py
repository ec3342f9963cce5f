"""
Configuration management for the Channel Video System.

This module holds the remote service credentials, catalog storage paths and
system parameters. A single Config is built at process start and passed to
the components that need it.
"""

import os
import json
import logging
from typing import Dict, Optional, Any, Mapping
from dataclasses import dataclass, asdict
from pathlib import Path


@dataclass
class TelegramConfig:
    """Remote blob/log service (Telegram Bot API) configuration"""

    bot_token: Optional[str] = None
    channel_id: Optional[str] = None
    api_base_url: str = "https://api.telegram.org"
    file_base_url: str = "https://api.telegram.org/file"
    max_upload_mb: int = 50  # Bot API per-file upload limit
    request_timeout_seconds: float = 60.0

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024


@dataclass
class StorageConfig:
    """Catalog snapshot storage configuration"""

    base_path: str = "data"
    catalog_file: str = "videos.json"

    @property
    def catalog_path(self) -> Path:
        return Path(self.base_path) / self.catalog_file


@dataclass
class SystemConfig:
    """System-wide configuration"""

    log_level: str = "INFO"
    log_file: Optional[str] = "channel_video_system.log"
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    timezone: str = "UTC"
    placeholder_thumbnail_url: str = "/placeholder-thumb.svg"
    sync_fetch_limit: int = 100
    enable_admin_routes: bool = False


class Config:
    """Main configuration manager"""

    # Environment variable -> (section, attribute)
    ENVIRONMENT_KEYS = {
        "TELEGRAM_BOT_TOKEN": ("telegram", "bot_token"),
        "TELEGRAM_CHANNEL_ID": ("telegram", "channel_id"),
        "CATALOG_BASE_PATH": ("storage", "base_path"),
        "LOG_LEVEL": ("system", "log_level"),
    }

    def __init__(self, config_file: Optional[str] = None, save_defaults: bool = True):
        self.config_file = config_file or "config.json"
        self.logger = logging.getLogger(__name__)

        # Default configurations
        self.telegram = TelegramConfig()
        self.storage = StorageConfig()
        self.system = SystemConfig()

        self.load_config(save_defaults=save_defaults)

    def load_config(self, save_defaults: bool = True) -> None:
        """Load configuration from file"""
        config_path = Path(self.config_file)

        if config_path.exists():
            try:
                with open(config_path, "r") as f:
                    config_data = json.load(f)

                if "telegram" in config_data:
                    self.telegram = TelegramConfig(**config_data["telegram"])

                if "storage" in config_data:
                    self.storage = StorageConfig(**config_data["storage"])

                if "system" in config_data:
                    self.system = SystemConfig(**config_data["system"])

                self.logger.info(f"Configuration loaded from {config_path}")

            except (OSError, ValueError, TypeError) as e:
                self.logger.error(f"Error loading config from {config_path}: {e}")
        else:
            self.logger.info(f"Config file {config_path} not found, using defaults")
            if save_defaults:
                self.save_config()

    def apply_environment(self, environ: Mapping[str, str]) -> None:
        """Overlay values taken from an environment mapping"""
        for key, (section, attribute) in self.ENVIRONMENT_KEYS.items():
            value = environ.get(key)
            if value:
                setattr(getattr(self, section), attribute, value)
                self.logger.debug(f"Configuration {section}.{attribute} taken from {key}")

    def save_config(self) -> None:
        """Save current configuration to file"""
        config_data = self.to_dict()
        # Credentials stay out of the file
        config_data["telegram"]["bot_token"] = None

        try:
            with open(self.config_file, "w") as f:
                json.dump(config_data, f, indent=2)
            self.logger.info(f"Configuration saved to {self.config_file}")
        except OSError as e:
            self.logger.error(f"Error saving config to {self.config_file}: {e}")

    def ensure_storage_directory(self) -> None:
        """Ensure the catalog directory exists"""
        os.makedirs(self.storage.base_path, exist_ok=True)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary"""
        return {"telegram": asdict(self.telegram), "storage": asdict(self.storage), "system": asdict(self.system)}
