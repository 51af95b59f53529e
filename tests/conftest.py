"""
Shared fixtures and fakes for the Catalog API tests.
"""

import asyncio

import pytest
from fastapi.testclient import TestClient

from catalog_api.app import create_app
from catalog_api.core.config import AppConfig, MongoDbSettings
from catalog_api.health import HealthStatus, ProbeRegistration
from catalog_api.items import InMemoryItemsRepository


class FakeDatabase:
    def __init__(self, reply=None, error=None):
        self.reply = reply if reply is not None else {"ok": 1.0}
        self.error = error
        self.commands = []

    def command(self, name):
        self.commands.append(name)
        if self.error is not None:
            raise self.error
        return self.reply


class FakeMongoClient:
    """Stands in for pymongo.MongoClient in probe tests."""

    def __init__(self, reply=None, error=None):
        self.database = FakeDatabase(reply=reply, error=error)
        self.closed = False

    def __getitem__(self, name):
        return self.database

    def close(self):
        self.closed = True


def static_probe(status=HealthStatus.HEALTHY, delay=0.0):
    """Probe check that returns ``status`` after ``delay`` seconds."""

    async def check():
        if delay:
            await asyncio.sleep(delay)
        return status

    return check


def failing_probe(message="Connection refused", delay=0.0):
    """Probe check that raises ConnectionError(message)."""

    async def check():
        if delay:
            await asyncio.sleep(delay)
        raise ConnectionError(message)

    return check


@pytest.fixture
def memory_config():
    return AppConfig(repository="memory", mongodb=MongoDbSettings())


@pytest.fixture
def repository():
    return InMemoryItemsRepository()


@pytest.fixture
def make_client(memory_config, repository):
    """Build a TestClient around an app wired with the given probes."""

    def _make(probes=()):
        app = create_app(config=memory_config, repository=repository, probes=probes)
        return TestClient(app)

    return _make


@pytest.fixture
def client(make_client):
    return make_client(
        [
            ProbeRegistration(
                name="mongodb",
                check=static_probe(),
                tags={"ready"},
                timeout=3.0,
            )
        ]
    )
