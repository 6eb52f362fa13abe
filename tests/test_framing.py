from proxy_cloak.http.framing import split_response


def test_split_response_server_only(server_only_raw):
    frames = split_response(server_only_raw)

    assert frames.proxy_head == ""
    assert frames.proxy_headers == {}
    assert frames.server_headers["@code"] == "200"
    assert frames.server_headers["content-type"] == "text/html"
    assert frames.server_headers["set-cookie"] == "a=1 b=2"
    assert frames.body == "<html></html>"


def test_split_response_with_proxy_head(proxy_and_server_raw):
    frames = split_response(proxy_and_server_raw)

    assert frames.proxy_head == "HTTP/1.0 200 Connection established\r\nProxy-Agent: Dante/1.4"
    assert frames.server_head == "HTTP/1.1 404 Not Found\r\nContent-Length: 9"
    assert frames.body == "not found"
    assert frames.proxy_headers["@code"] == "200"
    assert frames.proxy_headers["proxy-agent"] == "Dante/1.4"
    assert frames.server_headers["@code"] == "404"
    assert frames.server_headers["@message"] == "Not Found"


def test_split_response_body_with_blank_lines_is_not_mistaken_for_a_head():
    raw = "HTTP/1.1 200 OK\r\nA: b\r\n\r\nfirst\r\n\r\nsecond"
    frames = split_response(raw)

    assert frames.proxy_head == ""
    assert frames.server_headers["a"] == "b"
    assert frames.body == "first\r\n\r\nsecond"


def test_split_response_keeps_body_blank_lines_after_proxy_head():
    raw = "HTTP/1.0 200 OK\r\n\r\nHTTP/1.1 200 OK\r\n\r\nx\r\n\r\ny"
    frames = split_response(raw)

    assert frames.proxy_headers["@protocol"] == "1.0"
    assert frames.server_headers["@protocol"] == "1.1"
    assert frames.body == "x\r\n\r\ny"


def test_split_response_bytes_keeps_body_bytes():
    raw = b"HTTP/1.1 200 OK\r\nContent-Type: image/png\r\n\r\n\x89PNG\xff\x00"
    frames = split_response(raw)

    assert frames.server_head == "HTTP/1.1 200 OK\r\nContent-Type: image/png"
    assert frames.server_headers["content-type"] == "image/png"
    assert frames.body == b"\x89PNG\xff\x00"


def test_split_response_without_separator():
    frames = split_response("HTTP/1.1 200 OK\r\nA: b")

    assert frames.proxy_head == ""
    assert frames.server_headers["a"] == "b"
    assert frames.body == ""


def test_split_response_empty_and_missing():
    missing = split_response(None)
    assert missing.server_headers == {}
    assert missing.body == b""

    frames = split_response(b"")
    assert frames.proxy_headers == {}
    assert frames.server_headers == {}
    assert frames.body == b""


def test_split_response_garbage_never_raises():
    frames = split_response("\x00\x01 nonsense\r\n\r\n\r\n\r\n")
    assert "@status" not in frames.server_headers
    assert frames.proxy_headers == {}


def test_split_response_returns_fresh_header_maps():
    first = split_response(None)
    second = split_response(None)

    first.server_headers["x-added"] = "1"
    first.proxy_headers["x-added"] = "1"

    assert second.server_headers == {}
    assert second.proxy_headers == {}
