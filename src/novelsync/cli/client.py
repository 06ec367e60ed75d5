"""Async HTTP client helpers for the CLI."""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta

import httpx

from novelsync.cli.config import DEFAULT_SERVER_URL, get_config_value

logger = logging.getLogger(__name__)

# Cache for online status
_online_status_cache: tuple[bool, datetime] | None = None
_online_cache_ttl = timedelta(seconds=30)


def get_server_url() -> str:
    """Return the configured server URL."""
    return str(get_config_value("server_url", DEFAULT_SERVER_URL)).rstrip("/")


def get_timeout() -> float:
    """Return the configured request timeout in seconds."""
    return float(get_config_value("timeout", 10.0))


def create_client() -> httpx.AsyncClient:
    """Create an async HTTP client with configured base URL and timeout."""
    return httpx.AsyncClient(base_url=get_server_url(), timeout=get_timeout())


async def is_online() -> bool:
    """Check if the server is online and reachable.

    Uses a quick health check with a 2-second timeout.
    Caches the result for 30 seconds to avoid blocking the CLI.

    Returns:
        True if server is reachable, False otherwise
    """
    global _online_status_cache

    if _online_status_cache is not None:
        cached_status, cached_at = _online_status_cache
        if datetime.now(UTC) - cached_at < _online_cache_ttl:
            return cached_status

    try:
        async with httpx.AsyncClient(base_url=get_server_url(), timeout=2.0) as client:
            response = await client.get("/health")
            online = response.status_code == 200
    except httpx.HTTPError as e:
        logger.debug("Health check failed: %s", e)
        online = False

    _online_status_cache = (online, datetime.now(UTC))
    return online


def clear_online_cache() -> None:
    """Clear the online status cache.

    Useful for testing or when you want to force a fresh check.
    """
    global _online_status_cache
    _online_status_cache = None
