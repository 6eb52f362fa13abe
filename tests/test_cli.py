import logging

import pytest

import proxy_cloak.cli as cli
from proxy_cloak.network.proxy import ProxyEndpoint

RAW = b"HTTP/1.1 200 OK\r\nContent-Type: text/plain\r\n\r\nok"


class FakeTransport:
    instances = []

    def __init__(self, session=None, timeout=30.0, pool=None):
        self.timeout = timeout
        self.pool = pool
        self.batches = []
        FakeTransport.instances.append(self)

    def execute_many(self, batch, *, max_workers=8):
        self.batches.append((batch, max_workers))
        for request in batch:
            if request.proxy is None and self.pool is not None:
                request.proxy = self.pool.next_proxy()
            if "fail" in request.url:
                request.set_transport_result(7, "Connection refused")
                request.set_raw_response(b"")
            else:
                request.set_transport_result(0)
                request.set_raw_response(RAW)
        return batch

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return None


@pytest.fixture
def env_file(tmp_path, monkeypatch):
    for key in ["LOG_DIR", "LOG_LEVEL", "APP_NAME", "CLOAK_TIMEOUT", "CLOAK_PROXY_FILE", "CLOAK_USER_AGENTS_FILE"]:
        monkeypatch.delenv(key, raising=False)
    path = tmp_path / "cli.env"
    path.write_text(f"LOG_DIR={tmp_path / 'logs'}\nCLOAK_TIMEOUT=7\n", encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def fake_transport(monkeypatch):
    FakeTransport.instances = []
    monkeypatch.setattr(cli, "SocksTransport", FakeTransport)
    yield FakeTransport
    root = logging.getLogger()
    for handler in root.handlers[:]:
        handler.close()
        root.removeHandler(handler)


def test_main_prints_summary_per_url(env_file, capsys):
    code = cli.main(
        [
            "https://example.com/a",
            "https://example.com/b",
            "--env-file",
            str(env_file),
            "--proxy",
            "127.0.0.1:9050",
            "--workers",
            "2",
        ]
    )

    assert code == 0
    transport = FakeTransport.instances[0]
    assert transport.timeout == 7.0
    assert transport.pool is None
    batch, workers = transport.batches[0]
    assert workers == 2
    assert all(r.proxy == ProxyEndpoint("127.0.0.1", 9050) for r in batch)

    out = capsys.readouterr().out.splitlines()
    assert out == [
        "Request[Transport status 0, HTTP status 200, Proxy socks5h://127.0.0.1:9050, https://example.com/a]",
        "Request[Transport status 0, HTTP status 200, Proxy socks5h://127.0.0.1:9050, https://example.com/b]",
    ]


def test_main_show_headers_and_failure_exit_code(env_file, capsys):
    code = cli.main(["https://example.com/ok", "https://example.com/fail", "--env-file", str(env_file), "--show-headers"])

    assert code == 1
    out = capsys.readouterr().out
    assert "  server @code: 200" in out
    assert "  server content-type: text/plain" in out
    assert "Request[Transport status 7, Proxy direct, https://example.com/fail]" in out


def test_main_uses_proxy_file_and_user_agent_file(env_file, tmp_path):
    proxies = tmp_path / "proxies.txt"
    proxies.write_text("1.1.1.1:1080\n2.2.2.2:1080\n", encoding="utf-8")
    agents = tmp_path / "agents.txt"
    agents.write_text("Agent/1.0\n", encoding="utf-8")
    with env_file.open("a", encoding="utf-8") as handle:
        handle.write(f"CLOAK_USER_AGENTS_FILE={agents}\n")

    code = cli.main(["https://example.com/x", "--env-file", str(env_file), "--proxy-file", str(proxies)])

    assert code == 0
    transport = FakeTransport.instances[0]
    assert transport.pool is not None and len(transport.pool) == 2
    request = transport.batches[0][0][0]
    assert request.proxy == ProxyEndpoint("1.1.1.1", 1080)
    assert request.effective_user_agent() == "Agent/1.0"


def test_main_rejects_invalid_proxy(env_file):
    assert cli.main(["https://example.com/", "--env-file", str(env_file), "--proxy", "ftp://x:1"]) == 1
    assert FakeTransport.instances == []


def test_main_reports_bad_configuration(env_file, monkeypatch, tmp_path):
    monkeypatch.setattr(cli, "REPO_ROOT", tmp_path)
    monkeypatch.setenv("CLOAK_TIMEOUT", "never")

    assert cli.main(["https://example.com/", "--env-file", str(env_file)]) == 1
    assert (tmp_path / "logs").is_dir()


def test_main_reports_missing_proxy_file(env_file, tmp_path):
    code = cli.main(["https://example.com/", "--env-file", str(env_file), "--proxy-file", str(tmp_path / "nope.txt")])

    assert code == 1
    assert FakeTransport.instances == []
