"""proxy-cloak: proxied HTTP request records and response framing.

Typical flow:

    from proxy_cloak import ProxyEndpoint, RequestResponse, SocksTransport

    request = RequestResponse("GET", "https://example.com/", proxy=ProxyEndpoint("10.0.0.5", 1080))
    with SocksTransport(timeout=20) as transport:
        transport.execute(request)
    print(request, request.server_headers.get("content-type"))
"""

from proxy_cloak.http import HeaderMap, ResponseFrames, parse_head, split_response
from proxy_cloak.network import ProxyEndpoint, ProxyPool
from proxy_cloak.request import RequestResponse
from proxy_cloak.network.transport import SocksTransport
from proxy_cloak.user_agents import USER_AGENTS, select_user_agent

__all__ = [
    "HeaderMap",
    "ProxyEndpoint",
    "ProxyPool",
    "RequestResponse",
    "ResponseFrames",
    "SocksTransport",
    "USER_AGENTS",
    "parse_head",
    "select_user_agent",
    "split_response",
]
