"""Command-line entrypoint for fetching URLs through SOCKS proxies.

Prints one ``Request[...]`` summary line per URL, optionally followed by the
parsed proxy and server headers. Exit status is 1 when any request failed at
the transport layer.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from proxy_cloak.config import REPO_ROOT, AppConfig, load_config
from proxy_cloak.logging_utils import configure_logging, perf_span
from proxy_cloak.network.proxy import ProxyPool, load_proxy_file, parse_proxy_line
from proxy_cloak.network.transport import SocksTransport
from proxy_cloak.request import RequestResponse
from proxy_cloak.user_agents import USER_AGENTS, load_user_agents

LOGGER = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fetch URLs through SOCKS proxies.")
    parser.add_argument("urls", nargs="+", help="URLs to fetch.")
    parser.add_argument(
        "--method",
        default="GET",
        help="HTTP method (default: GET).",
    )
    parser.add_argument(
        "--data",
        default=None,
        help="Request body sent with every URL.",
    )
    parser.add_argument(
        "--proxy",
        default=None,
        help="Single proxy for all requests, e.g. socks5h://127.0.0.1:9050.",
    )
    parser.add_argument(
        "--proxy-file",
        type=Path,
        default=None,
        help="Proxy list to rotate through (overrides CLOAK_PROXY_FILE).",
    )
    parser.add_argument(
        "--user-agent",
        default=None,
        help="Fixed user-agent; by default one is chosen per proxy and day.",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=4,
        help="Concurrent requests (default: 4).",
    )
    parser.add_argument(
        "--show-headers",
        action="store_true",
        help="Print parsed proxy and server headers after each summary.",
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Alternative .env file.",
    )
    return parser.parse_args(argv)


def _build_pool(args: argparse.Namespace, config: AppConfig) -> Optional[ProxyPool]:
    proxy_file = args.proxy_file or config.proxy_file
    if args.proxy or not proxy_file:
        return None
    proxies = load_proxy_file(proxy_file)
    if not proxies:
        LOGGER.warning("No usable proxies in %s; requests go direct", proxy_file)
        return None
    return ProxyPool(proxies)


def _print_result(request: RequestResponse, show_headers: bool) -> None:
    print(request)
    if not show_headers:
        return
    for label, headers in (("proxy", request.proxy_headers), ("server", request.server_headers)):
        for key, value in headers.items():
            print(f"  {label} {key}: {value}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    try:
        config = load_config(args.env_file)
    except ValueError as exc:
        configure_logging(AppConfig(log_directory=REPO_ROOT / "logs", log_level="INFO"))
        LOGGER.error("Failed to load configuration: %s", exc)
        return 1

    configure_logging(config)

    proxy = None
    if args.proxy:
        proxy = parse_proxy_line(args.proxy)
        if proxy is None:
            LOGGER.error("Invalid proxy: %s", args.proxy)
            return 1

    try:
        catalog = load_user_agents(config.user_agents_file) if config.user_agents_file else USER_AGENTS
        pool = _build_pool(args, config)
    except (OSError, ValueError) as exc:
        LOGGER.error("Failed to load proxy or user-agent list: %s", exc)
        return 1

    batch: List[RequestResponse] = [
        RequestResponse(
            method=args.method,
            url=url,
            body=args.data,
            proxy=proxy,
            user_agent_override=args.user_agent,
            user_agents=catalog,
        )
        for url in args.urls
    ]

    with SocksTransport(timeout=config.request_timeout, pool=pool) as transport:
        with perf_span("fetch.batch", tags={"urls": len(batch), "app": config.app_name}):
            transport.execute_many(batch, max_workers=args.workers)

    for request in batch:
        _print_result(request, args.show_headers)

    failed = [r for r in batch if r.transport_status != 0]
    if failed:
        LOGGER.warning("%d of %d requests failed at the transport layer", len(failed), len(batch))
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - script entrypoint
    sys.exit(main())
