"""
Pytest Configuration File

This module provides fixtures and configuration for all tests.
"""

import pytest
import os
import sys
from fastapi import Request
from fastapi.testclient import TestClient

# Add app directory to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.app import create_app
from app.shared.config import Settings

ALLOWED_ORIGIN = "http://localhost:3000"


@pytest.fixture
def settings():
    """Fixture for settings with a single allowed origin"""
    return Settings(cors_origins=(ALLOWED_ORIGIN,), port=8123, mongodb_uri="mongodb://db.test:27017")


@pytest.fixture
def test_app(settings):
    """Fixture for the configured FastAPI app with an echo route"""
    app = create_app(settings)

    @app.post("/echo")
    async def echo(payload: dict):
        return payload

    @app.post("/raw")
    async def raw(request: Request):
        body = await request.body()
        return {"received": len(body)}

    return app


@pytest.fixture
def test_client(test_app):
    """Fixture for FastAPI test client"""
    return TestClient(test_app)


class FakeAdmin:
    def __init__(self, error=None):
        self.error = error
        self.commands = []

    async def command(self, name):
        self.commands.append(name)
        if self.error:
            raise self.error
        return {"ok": 1.0}


class FakeMotorClient:
    """Stand-in for AsyncIOMotorClient that records calls"""

    instances = []
    ping_error = None

    def __init__(self, uri, **options):
        self.uri = uri
        self.options = options
        self.admin = FakeAdmin(type(self).ping_error)
        self.closed = False
        type(self).instances.append(self)

    def __getitem__(self, name):
        return {"database": name}

    def close(self):
        self.closed = True


@pytest.fixture
def fake_motor(monkeypatch):
    """Patch the Motor client used by the database module"""
    FakeMotorClient.instances = []
    FakeMotorClient.ping_error = None
    monkeypatch.setattr("app.shared.database.AsyncIOMotorClient", FakeMotorClient)
    return FakeMotorClient

