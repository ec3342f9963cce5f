"""
FastAPI Server for the Channel Video System.

Serves the catalog read and resolve endpoints to the presentation layer.
"""

import logging
from datetime import datetime

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from ..core.config import Config
from ..catalog.integration import CatalogModule
from .. import __version__


class APIServer:
    """FastAPI server for the Channel Video System"""

    def __init__(self, config: Config, catalog_module: CatalogModule):
        self.config = config
        self.catalog_module = catalog_module
        self.logger = logging.getLogger(__name__)

        self.app = FastAPI(title="Channel Video System API", description="Video catalog and content resolution for a Telegram channel", version=__version__)
        self.server_start_time = datetime.now()

        # Read-only public API
        self.app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["GET"], allow_headers=["*"])

        self._setup_routes()

    def _setup_routes(self):
        @self.app.get("/health")
        async def health_check():
            return {
                "status": "healthy",
                "timestamp": datetime.now().isoformat(),
                "uptime_seconds": (datetime.now() - self.server_start_time).total_seconds(),
                "catalog": self.catalog_module.get_module_status(),
            }

        self.app.include_router(self.catalog_module.get_api_routes())

        if self.config.system.enable_admin_routes:
            self.app.include_router(self.catalog_module.get_admin_routes())
            self.logger.warning("Admin routes enabled without authentication")

    def run(self) -> None:
        """Run the server (blocking call)"""
        host, port = self.config.system.api_host, self.config.system.api_port
        self.logger.info(f"Starting API server on {host}:{port}")
        uvicorn.run(self.app, host=host, port=port, log_level=self.config.system.log_level.lower(), log_config=None)
