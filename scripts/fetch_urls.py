#!/usr/bin/env python3
"""CLI wrapper to fetch one or more URLs through SOCKS proxies."""

from proxy_cloak.cli import main

if __name__ == "__main__":  # pragma: no cover - script entrypoint
    raise SystemExit(main())
