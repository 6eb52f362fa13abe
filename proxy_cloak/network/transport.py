"""Execute ``RequestResponse`` records over HTTP through SOCKS proxies.

This is the network side of the package: it sends one request per record with
``requests`` (SOCKS support comes from the ``requests[socks]`` extra), rebuilds
the raw response stream from the wire status line, headers and body, and
feeds it to ``RequestResponse.set_raw_response``.

Transport failures never raise. They are recorded on the record as a
curl-compatible error code plus message, the same convention callers already
use for ``transport_status``:

- 2: request could not be set up (e.g. empty user-agent catalog)
- 3: malformed or missing URL
- 7: could not connect
- 28: timeout
- 35: TLS handshake failure
- 56: failure receiving data
- 97: proxy handshake failure

Redirects are not followed and nothing is retried; both are left to callers.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Iterable, List, Optional, Tuple

import requests

from proxy_cloak.logging_utils import perf
from proxy_cloak.network.proxy import ProxyPool
from proxy_cloak.request import RequestResponse

LOGGER = logging.getLogger(__name__)

TRANSPORT_OK = 0
TRANSPORT_FAILED_INIT = 2
TRANSPORT_URL_MALFORMAT = 3
TRANSPORT_COULDNT_CONNECT = 7
TRANSPORT_TIMEOUT = 28
TRANSPORT_SSL_ERROR = 35
TRANSPORT_RECV_ERROR = 56
TRANSPORT_PROXY_ERROR = 97

# Order matters: ProxyError and SSLError subclass ConnectionError.
_ERROR_CODES: Tuple[Tuple[type, int], ...] = (
    (requests.exceptions.ProxyError, TRANSPORT_PROXY_ERROR),
    (requests.exceptions.SSLError, TRANSPORT_SSL_ERROR),
    (requests.exceptions.Timeout, TRANSPORT_TIMEOUT),
    (requests.exceptions.ConnectionError, TRANSPORT_COULDNT_CONNECT),
    (requests.exceptions.InvalidURL, TRANSPORT_URL_MALFORMAT),
    (requests.exceptions.MissingSchema, TRANSPORT_URL_MALFORMAT),
    (requests.exceptions.InvalidSchema, TRANSPORT_URL_MALFORMAT),
)

_HTTP_VERSIONS = {9: "0.9", 10: "1.0", 11: "1.1", 20: "2", 30: "3"}


def error_code_for(exc: BaseException) -> int:
    """Map a ``requests`` exception to a transport error code."""
    for exc_type, code in _ERROR_CODES:
        if isinstance(exc, exc_type):
            return code
    return TRANSPORT_RECV_ERROR


def _header_pairs(response: requests.Response) -> List[Tuple[str, str]]:
    """Return response headers in wire order, keeping duplicates apart."""
    raw_headers = getattr(response.raw, "headers", None)
    if raw_headers is not None and hasattr(raw_headers, "iteritems"):
        return list(raw_headers.iteritems())
    return list(response.headers.items())


def build_raw_response(response: requests.Response) -> bytes:
    """Rebuild the server response stream (head, blank line, body) as bytes.

    ``requests`` already decodes any ``Content-Encoding``, so the body is the
    decoded payload even though the head still names the encoding.
    """
    version = _HTTP_VERSIONS.get(getattr(response.raw, "version", 11), "1.1")
    lines = [f"HTTP/{version} {response.status_code} {response.reason or ''}".rstrip()]
    lines.extend(f"{name}: {value}" for name, value in _header_pairs(response))
    head = "\r\n".join(lines).encode("iso-8859-1", errors="replace")
    return head + b"\r\n\r\n" + (response.content or b"")


class SocksTransport:
    """Send ``RequestResponse`` records through an optional proxy pool."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: float = 30.0,
        pool: Optional[ProxyPool] = None,
    ) -> None:
        """Initialize the transport.

        Args:
            session: Optional pre-configured Requests session.
            timeout: Per-request timeout in seconds.
            pool: Optional proxy pool used for records without a proxy. Proxies
                that fail at the transport layer are reported back to it.
        """
        self._session = session or requests.Session()
        self._timeout = timeout
        self._pool = pool

    @perf("transport.execute", tags={"component": "transport"})
    def execute(self, request: RequestResponse) -> RequestResponse:
        """Perform the call described by ``request`` and populate its response side.

        Raises:
            ValueError: If ``request.url`` is not set or the user-agent catalog
                is empty.
        """
        if not request.url:
            raise ValueError("request.url must be provided")

        pooled = False
        if request.proxy is None and self._pool is not None:
            request.proxy = self._pool.next_proxy()
            pooled = request.proxy is not None

        LOGGER.debug(
            "transport.execute method=%s url=%s via=%s",
            request.method,
            request.url,
            request.proxy or "direct",
        )

        try:
            response = self._session.request(
                request.method.upper(),
                request.url,
                data=request.body,
                headers={"User-Agent": request.effective_user_agent()},
                proxies=request.proxy.as_proxies() if request.proxy is not None else None,
                timeout=self._timeout,
                allow_redirects=False,
            )
            raw = build_raw_response(response)
        except requests.exceptions.RequestException as exc:
            code = error_code_for(exc)
            LOGGER.warning(
                "transport.execute failed code=%d proxy=%s url=%s: %s",
                code,
                request.proxy or "direct",
                request.url,
                exc,
            )
            if pooled and code in (TRANSPORT_PROXY_ERROR, TRANSPORT_COULDNT_CONNECT, TRANSPORT_TIMEOUT):
                self._pool.report_failure(request.proxy)
            request.set_transport_result(code, str(exc))
            request.set_raw_response(b"")
            return request

        request.set_transport_result(TRANSPORT_OK, "")
        request.set_raw_response(raw)
        return request

    def execute_many(
        self,
        requests_: Iterable[RequestResponse],
        *,
        max_workers: int = 8,
    ) -> List[RequestResponse]:
        """Execute independent records concurrently, preserving input order.

        A record that cannot be sent is marked instead of aborting the batch:
        ``TRANSPORT_URL_MALFORMAT`` when it has no URL, ``TRANSPORT_FAILED_INIT``
        for other setup errors such as an empty user-agent catalog.
        """
        batch = list(requests_)
        if not batch:
            return []
        with ThreadPoolExecutor(max_workers=max(1, max_workers)) as executor:
            futures = {executor.submit(self.execute, req): req for req in batch}
            for fut in as_completed(futures):
                try:
                    fut.result()
                except ValueError as exc:
                    req = futures[fut]
                    code = TRANSPORT_URL_MALFORMAT if not req.url else TRANSPORT_FAILED_INIT
                    LOGGER.warning("transport.execute_many skipped request code=%d: %s", code, exc)
                    req.set_transport_result(code, str(exc))
                    req.set_raw_response(b"")
        return batch

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "SocksTransport":
        return self

    def __exit__(self, exc_type, exc, exc_tb) -> None:
        self.close()


__all__ = [
    "SocksTransport",
    "TRANSPORT_COULDNT_CONNECT",
    "TRANSPORT_FAILED_INIT",
    "TRANSPORT_OK",
    "TRANSPORT_PROXY_ERROR",
    "TRANSPORT_RECV_ERROR",
    "TRANSPORT_SSL_ERROR",
    "TRANSPORT_TIMEOUT",
    "TRANSPORT_URL_MALFORMAT",
    "build_raw_response",
    "error_code_for",
]
