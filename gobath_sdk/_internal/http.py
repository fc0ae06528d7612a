"""Shared HTTP client configuration."""

import httpx

from gobath_sdk._version import __version__

DEFAULT_TIMEOUT = 30.0


def create_http_client(
    *,
    timeout: float | None = DEFAULT_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create configured async HTTP client.

    The client keeps a cookie jar across requests, so session cookies set by
    the API are sent back on later calls.

    Args:
        timeout: Request timeout in seconds. None disables it.
        transport: Optional transport override (e.g. ``httpx.MockTransport``).

    Returns:
        Configured httpx.AsyncClient instance.
    """
    return httpx.AsyncClient(
        timeout=timeout,
        transport=transport,
        headers={"User-Agent": f"gobath-sdk/{__version__}"},
    )
