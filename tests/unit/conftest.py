"""Pytest configuration and shared fixtures for unit tests."""

from unittest.mock import Mock

import pytest

from damedia.config import DamConfig
from damedia.transport import HttpClient

BASE_URL = "http://host/files/"


@pytest.fixture
def config():
    """DAM config pointing at a test host."""
    return DamConfig(base_url=BASE_URL, upload_url="http://host/api/file")


@pytest.fixture
def http_client():
    """Mock transport serving ``b"hello world"`` with no HEAD headers."""
    client = Mock(spec=HttpClient)
    client.get.return_value = b"hello world"
    client.head.return_value = {}
    return client


@pytest.fixture
def stream(config, http_client):
    """Unopened RemoteFileStream wired to the mock transport."""
    from damedia.stream import RemoteFileStream

    return RemoteFileStream(config=config, http_client=http_client)
