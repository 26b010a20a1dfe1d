"""
Test configuration and fixtures for the pocket server.
Every test gets its own SQLite file, settings and recording relay.
"""

import pytest
from fastapi.testclient import TestClient

from pocket_app.app import create_app
from pocket_app.config import Settings
from pocket_app.errors import RelayFailure
from pocket_app.services.notification import NotificationRelay
from pocket_app.storage.strategies import SQLTagStore

SECRET = "s3cret-Value"
AUTH_HEADER = "X-Pocket-Auth"


class RecordingRelay(NotificationRelay):
    """Relay double that remembers what it was asked to send"""

    def __init__(self, fail_with: str = None):
        self.sent = []
        self.fail_with = fail_with

    async def send(self, level: str, body: str) -> None:
        if self.fail_with:
            raise RelayFailure(self.fail_with)
        self.sent.append((level, body))


def make_config(database: str) -> dict:
    """Section -> key -> value mapping as read from a config file"""
    return {
        "general": {
            "database": database,
            "secret": SECRET,
            "authheader": AUTH_HEADER,
            "sslport": "8443",
            "httpport": "8080",
            "sslcert": "cert.pem",
            "sslkey": "key.pem",
            "httpenabled": "true",
            "sslenabled": "false",
        },
        "smtp": {
            "server": "smtp.example.com",
            "port": "587",
            "username": "pocket@example.com",
            "password": "hunter2",
            "sendto": "a@example.com, b@example.com",
        },
    }


def write_ini(path, config: dict) -> str:
    lines = []
    for section, values in config.items():
        lines.append(f"[{section}]")
        lines.extend(f"{key} = {value}" for key, value in values.items())
        lines.append("")
    path.write_text("\n".join(lines))
    return str(path)


@pytest.fixture(scope="function")
def database_path(tmp_path):
    return str(tmp_path / "pocket.db")


@pytest.fixture(scope="function")
def settings(database_path):
    return Settings(**make_config(database_path))


@pytest.fixture(scope="function")
def tag_store(database_path):
    """
    Fresh store on an empty database file.
    Closed after the test so the file handle is released.
    """
    store = SQLTagStore.from_path(database_path)
    try:
        yield store
    finally:
        store.close()


@pytest.fixture(scope="function")
def relay():
    return RecordingRelay()


@pytest.fixture(scope="function")
def client(settings, tag_store, relay):
    """
    Test client for an app wired to the test store and relay.
    This is the main fixture that API tests use.
    """
    app = create_app(settings, tag_store, notification_relay=relay)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers():
    return {AUTH_HEADER: SECRET}
