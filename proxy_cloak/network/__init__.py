"""Network-side helpers: SOCKS proxy endpoints, rotation and the HTTP transport.

Exports:
- ``ProxyEndpoint``: a SOCKS proxy address; ``str()`` is its stable identifier.
- ``ProxyPool``: rotation and failure tracking for proxies.
- ``load_proxy_file`` / ``parse_proxy_list`` / ``parse_proxy_line``: proxy list parsing.

The transport lives in ``proxy_cloak.network.transport``; it depends on the
request model, which in turn depends on ``ProxyEndpoint``, so it is not
re-exported here.
"""

from proxy_cloak.network.proxy import (
    ProxyEndpoint,
    ProxyPool,
    load_proxy_file,
    parse_proxy_line,
    parse_proxy_list,
)

__all__ = [
    "ProxyEndpoint",
    "ProxyPool",
    "load_proxy_file",
    "parse_proxy_line",
    "parse_proxy_list",
]
