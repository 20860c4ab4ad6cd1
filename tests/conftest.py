"""Shared fixtures for tcping tests."""

import socket

import pytest
from PySide6.QtCore import QCoreApplication

from tcping.models import Endpoint


@pytest.fixture(scope="session")
def qapp():
    """Create QCoreApplication instance for tests."""
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app


@pytest.fixture
def listener():
    """Loopback TCP socket that accepts handshakes (the kernel completes them)."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    sock.listen(16)
    yield sock
    sock.close()


@pytest.fixture
def open_endpoint(listener):
    host, port = listener.getsockname()
    return Endpoint(host=host, port=port)


@pytest.fixture
def closed_endpoint():
    """Endpoint on a loopback port nothing listens on."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    host, port = sock.getsockname()
    sock.close()
    return Endpoint(host=host, port=port)
