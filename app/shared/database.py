"""
Database Module

This module manages the MongoDB connection used by the backend. The
connection is opened once before the HTTP listener binds and released
when the server shuts down.

Features:
- Connection management
- Ping validation
- Scoped lifecycle
- Error handling

Security:
- SSL/TLS for SRV clusters
- Bounded server selection

Dependencies:
- Motor for async MongoDB
- PyMongo for driver errors
- certifi for SSL

Author: Snapped Development Team
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict

import certifi
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import PyMongoError

from .config import Settings

logger = logging.getLogger(__name__)

# MongoDB Connection Settings
MONGO_SETTINGS = {
    "serverSelectionTimeoutMS": 10000,
    "connectTimeoutMS": 20000,
    "maxPoolSize": 100,
    "retryWrites": True,
}


class DatabaseConnectionError(Exception):
    """Raised when the MongoDB server cannot be reached."""


def client_options(uri: str) -> Dict[str, Any]:
    """
    Build driver options for a connection string.

    SRV connection strings imply TLS, so they get the certifi CA bundle.
    """
    options = dict(MONGO_SETTINGS)
    if uri.startswith("mongodb+srv://"):
        options["tlsCAFile"] = certifi.where()
    return options


async def connect_db(settings: Settings) -> AsyncIOMotorClient:
    """
    Open the MongoDB connection.

    Args:
        settings: Application settings

    Returns:
        AsyncIOMotorClient: Connected client

    Raises:
        DatabaseConnectionError: If the ping fails
    """
    client = AsyncIOMotorClient(settings.mongodb_uri, **client_options(settings.mongodb_uri))
    try:
        await client.admin.command("ping")
    except PyMongoError as e:
        client.close()
        raise DatabaseConnectionError(str(e)) from e

    logger.info(f"MongoDB connected, database: {settings.db_name}")
    return client


def close_db(client: AsyncIOMotorClient):
    logger.info("Shutting down database connections...")
    client.close()
    logger.info("Database connections closed")


@asynccontextmanager
async def database_connection(settings: Settings):
    """
    Hold a MongoDB connection for the duration of the block.

    Yields:
        AsyncIOMotorClient: Connected client, closed on exit
    """
    client = await connect_db(settings)
    try:
        yield client
    finally:
        close_db(client)

