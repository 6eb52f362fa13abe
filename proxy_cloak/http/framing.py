"""Split a raw proxied response into proxy head, server head and body.

SOCKS/HTTP proxies are inconsistent about prepending their own HTTP-like
head block before the tunneled server response. The raw stream is assumed to
be ``proxy head, server head, body``; when the middle part carries no status
line the proxy head is treated as absent and the stream is re-split as
``server head, body``.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Union

from proxy_cloak.http.head import HeaderMap, has_status_line, parse_head

LOGGER = logging.getLogger(__name__)

RawResponse = Union[bytes, str]

BLANK_LINE = "\r\n\r\n"
HEAD_ENCODING = "iso-8859-1"


@dataclass(frozen=True)
class ResponseFrames:
    """Derived view of one raw response.

    Attributes:
        proxy_head: Proxy-generated head text, empty when the proxy added none.
        server_head: Server head text.
        body: Server body, same type (``bytes`` or ``str``) as the raw input;
            ``b""`` when there is no raw input at all.
        proxy_headers: Parsed ``proxy_head``.
        server_headers: Parsed ``server_head``.
    """

    proxy_head: str = ""
    server_head: str = ""
    body: RawResponse = b""
    proxy_headers: HeaderMap = field(default_factory=dict)
    server_headers: HeaderMap = field(default_factory=dict)


def _as_text(part: RawResponse) -> str:
    if isinstance(part, bytes):
        return part.decode(HEAD_ENCODING)
    return part


def _split(raw: RawResponse, parts: int) -> List[RawResponse]:
    """Split ``raw`` into exactly ``parts`` pieces, padding with empty values."""
    separator: RawResponse = BLANK_LINE.encode("ascii") if isinstance(raw, bytes) else BLANK_LINE
    pieces = raw.split(separator, parts - 1)
    empty = raw[:0]
    return pieces + [empty] * (parts - len(pieces))


def split_response(raw: Optional[RawResponse]) -> ResponseFrames:
    """Split and parse a raw response stream.

    Args:
        raw: Complete bytes (or text) handed back by the transport. ``None``
            and empty input yield empty frames. Each call returns a new value,
            so header maps are never shared between responses.

    Returns:
        A ``ResponseFrames`` value with both heads parsed.
    """
    if raw is None:
        return ResponseFrames()

    proxy_head, server_head, body = _split(raw, 3)

    if not has_status_line(_as_text(server_head)):
        LOGGER.debug("No proxy head detected; treating response as server head + body")
        proxy_head = raw[:0]
        server_head, body = _split(raw, 2)

    proxy_text = _as_text(proxy_head)
    server_text = _as_text(server_head)
    return ResponseFrames(
        proxy_head=proxy_text,
        server_head=server_text,
        body=body,
        proxy_headers=parse_head(proxy_text),
        server_headers=parse_head(server_text),
    )


__all__ = ["RawResponse", "ResponseFrames", "split_response"]
