"""Shared pytest fixtures for the proxy_cloak tests.

Keeps tests deterministic and offline: logging goes to a temporary
directory and no fixture touches the network.
"""

from datetime import datetime, timezone
from pathlib import Path

import pytest

from proxy_cloak.config import AppConfig
from proxy_cloak.network.proxy import ProxyEndpoint


@pytest.fixture
def app_config(tmp_path: Path) -> AppConfig:
    """Application config fixture pointing logs at ``tmp_path``."""
    return AppConfig(
        log_directory=tmp_path,
        log_level="INFO",
    )


@pytest.fixture
def endpoint() -> ProxyEndpoint:
    return ProxyEndpoint("10.0.0.5", 1080)


@pytest.fixture
def fixed_now() -> datetime:
    """Mid-day UTC moment so day arithmetic is unambiguous."""
    return datetime(2024, 3, 14, 12, 0, tzinfo=timezone.utc)


SERVER_ONLY = (
    "HTTP/1.1 200 OK\r\n"
    "Content-Type: text/html\r\n"
    "Set-Cookie: a=1\r\n"
    "Set-Cookie: b=2\r\n"
    "\r\n"
    "<html></html>"
)

PROXY_AND_SERVER = (
    "HTTP/1.0 200 Connection established\r\n"
    "Proxy-Agent: Dante/1.4\r\n"
    "\r\n"
    "HTTP/1.1 404 Not Found\r\n"
    "Content-Length: 9\r\n"
    "\r\n"
    "not found"
)


@pytest.fixture
def server_only_raw() -> str:
    return SERVER_ONLY


@pytest.fixture
def proxy_and_server_raw() -> str:
    return PROXY_AND_SERVER
