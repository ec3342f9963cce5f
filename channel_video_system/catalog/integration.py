"""
Catalog Module Integration.

Composition root for the catalog: creates the infrastructure adapters and
wires them into the application services and HTTP controllers.
"""

import logging
from typing import Optional

from fastapi import APIRouter

from ..core.config import Config
from ..core.timezone_utils import TimezoneManager

# Domain interfaces
from .domain.interfaces import CatalogRepository, RemoteLogClient

# Infrastructure implementations
from .infrastructure.repositories import JsonFileCatalogRepository
from .infrastructure.telegram_client import TelegramRemoteLogClient

# Application services
from .application.catalog_store import CatalogStore
from .application.publish_service import PublishService
from .application.sync_service import SyncService
from .application.resolver_service import ResolverService

# Presentation layer
from .presentation.controllers import CatalogController, ResolveController, SyncController
from .presentation.routes import create_catalog_routes, create_admin_catalog_routes


class CatalogModule:
    """
    Main catalog module that provides dependency injection and service composition.

    The remote client and repository can be passed in; otherwise they are
    built from the configuration.
    """

    def __init__(self, config: Config, remote_client: Optional[RemoteLogClient] = None, repository: Optional[CatalogRepository] = None):
        self.config = config
        self.logger = logging.getLogger(__name__)

        self.repository = repository or self._create_repository()
        self.remote_client = remote_client or self._create_remote_client()

        self._initialize_services()

        self.logger.info("Catalog module initialized")

    def _initialize_services(self) -> None:
        system = self.config.system

        # Application layer
        self.catalog_store = CatalogStore(self.repository)
        self.publish_service = PublishService(self.remote_client, self.catalog_store, max_upload_bytes=self.config.telegram.max_upload_bytes)
        self.sync_service = SyncService(self.remote_client, self.repository, fetch_limit=system.sync_fetch_limit)
        self.resolver_service = ResolverService(self.catalog_store, self.remote_client, placeholder_url=system.placeholder_thumbnail_url)

        # Presentation layer
        self.timezone_manager = TimezoneManager(system.timezone)
        self.catalog_controller = CatalogController(self.catalog_store, system.placeholder_thumbnail_url, self.timezone_manager)
        self.resolve_controller = ResolveController(self.resolver_service)
        self.sync_controller = SyncController(self.sync_service)

    def _create_repository(self) -> CatalogRepository:
        return JsonFileCatalogRepository(self.config.storage.catalog_path)

    def _create_remote_client(self) -> RemoteLogClient:
        return TelegramRemoteLogClient(self.config.telegram)

    def get_api_routes(self) -> APIRouter:
        return create_catalog_routes(catalog_controller=self.catalog_controller, resolve_controller=self.resolve_controller)

    def get_admin_routes(self) -> APIRouter:
        return create_admin_catalog_routes(sync_controller=self.sync_controller)

    def get_module_status(self) -> dict:
        return {
            "repository": type(self.repository).__name__,
            "remote_client": type(self.remote_client).__name__,
            "catalog_path": str(self.config.storage.catalog_path),
            "admin_routes_enabled": self.config.system.enable_admin_routes,
        }


def create_catalog_module(config: Config, remote_client: Optional[RemoteLogClient] = None) -> CatalogModule:
    """Factory function to create a configured catalog module"""
    return CatalogModule(config=config, remote_client=remote_client)
