"""Request/response record for one outbound call routed through a SOCKS proxy.

A ``RequestResponse`` is created per call. The caller fills in the request
side, the transport records its status and hands the raw response stream to
``set_raw_response``, which derives the proxy head, server head, body and both
parsed header maps in one step.

Usage example:

    request = RequestResponse("GET", "https://example.com/", proxy=endpoint)
    headers = {"User-Agent": request.effective_user_agent()}
    ...
    request.set_transport_result(0, "")
    request.set_raw_response(raw_bytes)
    if request.server_headers.get("@code") == "200":
        handle(request.server_body)
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Mapping, Optional, Sequence, Union

from proxy_cloak.http.framing import RawResponse, ResponseFrames, split_response
from proxy_cloak.http.head import HeaderMap
from proxy_cloak.network.proxy import ProxyEndpoint
from proxy_cloak.user_agents import USER_AGENTS, select_user_agent

RequestBody = Union[str, Mapping[str, str]]


@dataclass
class RequestResponse:
    """Request inputs and response outputs of a single proxied HTTP call."""

    method: str = "GET"
    url: Optional[str] = None
    body: Optional[RequestBody] = None
    proxy: Optional[ProxyEndpoint] = None
    user_agent_override: Optional[str] = None
    user_agents: Sequence[str] = field(default=USER_AGENTS, repr=False)
    transport_status: Optional[int] = None
    transport_message: str = ""
    _raw_response: Optional[RawResponse] = field(default=None, init=False, repr=False)
    _frames: ResponseFrames = field(default_factory=ResponseFrames, init=False, repr=False)

    def effective_user_agent(self, now: Optional[datetime] = None) -> str:
        """Return the user-agent to send.

        The override wins; otherwise the choice is sticky per proxy and UTC
        day, or random for direct requests.
        """
        if self.user_agent_override:
            return self.user_agent_override
        proxy_key = str(self.proxy) if self.proxy is not None else None
        return select_user_agent(proxy_key, self.user_agents, now=now)

    def set_transport_result(self, status: int, message: str = "") -> None:
        """Record the transport outcome (0 means success)."""
        self.transport_status = status
        self.transport_message = message

    def set_raw_response(self, raw: Optional[RawResponse]) -> None:
        """Store the raw response stream and re-derive every response field."""
        frames = split_response(raw)
        self._raw_response = raw
        self._frames = frames

    @property
    def raw_response(self) -> Optional[RawResponse]:
        return self._raw_response

    @property
    def proxy_head_raw(self) -> str:
        return self._frames.proxy_head

    @property
    def server_head_raw(self) -> str:
        return self._frames.server_head

    @property
    def server_body(self) -> RawResponse:
        return self._frames.body

    @property
    def proxy_headers(self) -> HeaderMap:
        return self._frames.proxy_headers

    @property
    def server_headers(self) -> HeaderMap:
        return self._frames.server_headers

    @property
    def status_code(self) -> Optional[int]:
        """Server HTTP status code, or None when no status line was parsed."""
        code = self._frames.server_headers.get("@code")
        if code is None:
            return None
        try:
            return int(code)
        except ValueError:
            # Over the int() digit limit; only reachable from hostile status lines
            return None

    @property
    def ok(self) -> bool:
        """True when the transport succeeded and the server sent a status line."""
        return self.transport_status == 0 and self.status_code is not None

    def __str__(self) -> str:
        parts = [
            "Transport status " + ("-" if self.transport_status is None else str(self.transport_status))
        ]
        code = self._frames.server_headers.get("@code")
        if code is not None:
            parts.append(f"HTTP status {code}")
        parts.append(f"Proxy {self.proxy if self.proxy is not None else 'direct'}")
        parts.append(self.url or "")
        return "Request[" + ", ".join(parts) + "]"


__all__ = ["RequestBody", "RequestResponse"]
