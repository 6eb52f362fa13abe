"""Parse an HTTP head section (status line plus header lines) into a flat map.

The result is a plain ``dict`` keyed by lower-cased header names, with a few
reserved keys describing the status line:

- ``@status``: the raw status line, only present when it matched the grammar.
- ``@code``: numeric status code as text.
- ``@protocol``: HTTP version token (e.g. ``1.1``).
- ``@message``: reason phrase, possibly empty.

Head text comes from untrusted remote servers and proxies, so parsing never
raises; malformed lines are kept under synthetic ``@line<N>`` keys.
"""

import re
from typing import Dict, Optional

HeaderMap = Dict[str, str]

STATUS_LINE_PATTERN = re.compile(
    r"^HTTP/(?P<protocol>[0-9.]+)\s+(?P<code>\d+)(?:\s+(?P<message>.*))?$"
)
# Same grammar, matched against any line of a multi-line head.
STATUS_LINE_ANYWHERE = re.compile(STATUS_LINE_PATTERN.pattern, re.MULTILINE)

LINE_SEPARATOR = "\r\n"
HEADER_SEPARATOR = ": "


def has_status_line(text: Optional[str]) -> bool:
    """Return True if any line of ``text`` looks like an HTTP status line."""
    if not text:
        return False
    return STATUS_LINE_ANYWHERE.search(text) is not None


def parse_head(text: Optional[str]) -> HeaderMap:
    """Parse a raw head section into a ``HeaderMap``.

    Args:
        text: Head text without the terminating blank line.

    Returns:
        Ordered mapping of lower-cased header names (plus ``@`` keys) to values.
        Duplicate headers are folded into one value separated by a space.
    """
    headers: HeaderMap = {}
    if not text or not text.strip():
        return headers

    key: Optional[str] = None
    for index, line in enumerate(text.strip().split(LINE_SEPARATOR)):
        if index == 0:
            match = STATUS_LINE_PATTERN.match(line)
            if match:
                headers["@status"] = line
                headers["@code"] = match.group("code")
                headers["@protocol"] = match.group("protocol")
                headers["@message"] = match.group("message") or ""
                continue

        # Folded header value
        if line[:1].isspace():
            if key is not None:
                headers[key] = f"{headers[key]} {line.strip()}"
            continue

        name, sep, value = line.partition(HEADER_SEPARATOR)
        if not sep:
            name, value = "", ""
        key = name.lower() or f"@line{index}"

        # Set-Cookie and friends
        if key in headers:
            headers[key] = f"{headers[key]} {value}"
        else:
            headers[key] = value

    return headers


__all__ = [
    "HeaderMap",
    "STATUS_LINE_PATTERN",
    "has_status_line",
    "parse_head",
]
