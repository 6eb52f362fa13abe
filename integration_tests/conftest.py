"""Fixtures for integration tests that go through a real SOCKS proxy."""

import os

import pytest

from proxy_cloak.network.proxy import ProxyEndpoint, parse_proxy_line


@pytest.fixture(scope="session")
def live_proxy() -> ProxyEndpoint:
    raw = os.environ.get("CLOAK_TEST_PROXY")
    if not raw:
        pytest.skip("CLOAK_TEST_PROXY (e.g. socks5h://127.0.0.1:9050) must be set to run integration tests.")
    endpoint = parse_proxy_line(raw)
    if endpoint is None:
        pytest.fail(f"CLOAK_TEST_PROXY is not a valid SOCKS proxy: {raw!r}")
    return endpoint
