"""Configuration utilities for proxy-cloak fetch runs.

This module reads environment variables (optionally from an `.env` file) and
produces an application configuration object consumed by the transport layer
and the command-line script.

See `.env.example` for supported keys: `LOG_DIR`, `LOG_LEVEL`, `APP_NAME`,
`CLOAK_TIMEOUT`, `CLOAK_PROXY_FILE` and `CLOAK_USER_AGENTS_FILE`.

Usage example:

    from proxy_cloak.config import load_config

    config = load_config()
    transport = SocksTransport(timeout=config.request_timeout)
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional

REPO_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_ENV_FILE = REPO_ROOT / ".env"
DEFAULT_TIMEOUT_SECONDS = 30.0


def _load_env_file(path: Path) -> Dict[str, str]:
    """Parse a dotenv-style file into a dictionary."""
    if not path.exists():
        return {}

    data: Dict[str, str] = {}
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        data[key.strip()] = value.strip().strip("\"'")
    return data


def load_environment(env_file: Optional[Path] = None) -> Dict[str, str]:
    """Return dotenv values merged with ``os.environ`` (environment wins)."""
    merged = _load_env_file(env_file or DEFAULT_ENV_FILE)
    merged.update(os.environ)
    return merged


def _resolve_path(value: Optional[str]) -> Optional[Path]:
    """Resolve a configured path against the repo root when relative."""
    if not value:
        return None
    path = Path(value)
    if not path.is_absolute():
        path = REPO_ROOT / path
    return path


def _parse_timeout(values: Mapping[str, str]) -> float:
    raw = values.get("CLOAK_TIMEOUT")
    if raw is None or raw == "":
        return DEFAULT_TIMEOUT_SECONDS
    try:
        timeout = float(raw)
    except ValueError:
        raise ValueError(f"CLOAK_TIMEOUT must be a number, got {raw!r}.") from None
    if timeout <= 0:
        raise ValueError(f"CLOAK_TIMEOUT must be positive, got {raw!r}.")
    return timeout


@dataclass(frozen=True)
class AppConfig:
    """Application-level configuration values."""

    log_directory: Path
    log_level: str
    app_name: str = "proxy-cloak"
    request_timeout: float = DEFAULT_TIMEOUT_SECONDS
    proxy_file: Optional[Path] = None
    user_agents_file: Optional[Path] = None


def load_config(env_file: Optional[Path] = None) -> AppConfig:
    """Load configuration values using environment defaults."""
    merged = load_environment(env_file)

    return AppConfig(
        log_directory=_resolve_path(merged.get("LOG_DIR")) or REPO_ROOT / "logs",
        log_level=merged.get("LOG_LEVEL", "INFO").upper(),
        app_name=merged.get("APP_NAME", "proxy-cloak"),
        request_timeout=_parse_timeout(merged),
        proxy_file=_resolve_path(merged.get("CLOAK_PROXY_FILE")),
        user_agents_file=_resolve_path(merged.get("CLOAK_USER_AGENTS_FILE")),
    )


__all__ = ["AppConfig", "load_config", "load_environment", "REPO_ROOT"]
