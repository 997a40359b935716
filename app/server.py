"""
Server Bootstrap Module

This module orders process startup: the MongoDB connection must be
established before the HTTP listener binds. If the database cannot be
reached the listener is never started.

Features:
- Startup sequencing
- Listener configuration
- Connection teardown
- Startup logging

Dependencies:
- uvicorn for server
- Motor via the database module
- Logging

Author: Snapped Development Team
"""

import uvicorn

from .app import create_app
from .shared.config import Settings
from .shared.database import DatabaseConnectionError, database_connection
from .shared.logger import logger


class BackendServer(uvicorn.Server):
    """uvicorn server that reports the bound port once sockets are open."""

    async def startup(self, sockets=None):
        await super().startup(sockets=sockets)
        if self.started:
            logger.info(f"🚀 Server is running on port: {self.config.port}")


def build_config(app, settings: Settings) -> uvicorn.Config:
    return uvicorn.Config(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        log_config=None,
        server_header=False,
    )


async def serve(settings: Settings, server_class=BackendServer) -> bool:
    """
    Connect to MongoDB, then run the HTTP server until it is stopped.

    Args:
        settings: Application settings
        server_class: uvicorn.Server subclass to run

    Returns:
        bool: Whether the listener was started

    Notes:
        - No listener is created when the connection fails
        - The database client is closed when the server stops
        - SIGINT/SIGTERM trigger uvicorn's graceful shutdown
    """
    try:
        async with database_connection(settings) as client:
            app = create_app(settings)
            app.state.mongo_client = client
            app.state.db = client[settings.db_name]

            server = server_class(build_config(app, settings))
            await server.serve()
            return server.started
    except DatabaseConnectionError as e:
        logger.error(f"MongoDB connection failed !!! {e}")
        return False
