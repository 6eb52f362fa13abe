"""HTTP head parsing and proxied response framing."""

from proxy_cloak.http.framing import (
    RawResponse,
    ResponseFrames,
    split_response,
)
from proxy_cloak.http.head import (
    STATUS_LINE_PATTERN,
    HeaderMap,
    has_status_line,
    parse_head,
)

__all__ = [
    "HeaderMap",
    "RawResponse",
    "ResponseFrames",
    "STATUS_LINE_PATTERN",
    "has_status_line",
    "parse_head",
    "split_response",
]
