"""
Tests for the catalogctl CLI.
"""

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from catalog_api import __version__
from catalog_api.cli import catalogctl

from conftest import FakeMongoClient


class TestCatalogctl:
    """Test command dispatch and the doctor command."""

    def test_version(self, capsys):
        assert catalogctl.main(["version"]) == 0
        assert __version__ in capsys.readouterr().out

    def test_no_command_prints_help(self, capsys):
        assert catalogctl.main([]) == 0
        assert "usage" in capsys.readouterr().out.lower()

    def test_probe_defaults(self):
        args = catalogctl.create_parser().parse_args(["probe"])

        assert args.url == "http://localhost:8000"
        assert args.endpoint == "ready"

    def test_probe_rejects_unknown_endpoint(self):
        with pytest.raises(SystemExit):
            catalogctl.create_parser().parse_args(["probe", "--endpoint", "startup"])

    def test_doctor_healthy(self, monkeypatch, capsys):
        client = FakeMongoClient()
        monkeypatch.setattr(catalogctl, "create_mongo_client", lambda settings: client)

        assert catalogctl.main(["doctor"]) == 0

        out = capsys.readouterr().out
        assert "mongodb" in out
        assert "[Healthy]" in out
        assert client.closed is True

    def test_doctor_unhealthy(self, monkeypatch, capsys):
        client = FakeMongoClient(error=ServerSelectionTimeoutError("Connection refused"))
        monkeypatch.setattr(catalogctl, "create_mongo_client", lambda settings: client)

        assert catalogctl.main(["doctor", "--timeout", "1"]) == 1

        out = capsys.readouterr().out
        assert "[Unhealthy]" in out
        assert "Connection refused" in out
