"""User-facing client for the Gobath API.

Example usage:
    from gobath_sdk import GobathClient

    async with GobathClient.from_env() as client:
        profile = await client.call("Profile.GET")
        await client.call("Profile.PATCH", {"name": "Ivan"})

        # Identical concurrent calls share one request
        await client.call("Profile.GET", config={"prevent_parallel": True})
"""

import os
from collections.abc import Callable, Collection, Mapping, Sequence
from typing import Any

import httpx

from gobath_sdk._internal.dispatch.client import Dispatcher
from gobath_sdk._internal.dispatch.parallelism import RequestRegistry
from gobath_sdk._internal.dispatch.paths import DEFAULT_BASE_URL
from gobath_sdk._internal.dispatch.transport import Transport
from gobath_sdk._internal.endpoints import endpoint_segments, file_segments
from gobath_sdk._internal.http import create_http_client
from gobath_sdk.models import CallConfig

DEFAULT_TIMEOUT_MS = 30000

ConfigLike = CallConfig | Mapping[str, Any] | None


class GobathClient:
    """Async client for the Gobath API.

    Owns an ``httpx.AsyncClient`` (unless one is injected) and a dispatcher
    with its own in-flight registry. Use as an async context manager, or
    call ``aclose()`` when done.

    Use `GobathClient.from_env()` to create a client from environment variables.
    """

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_BASE_URL,
        token: str | None = None,
        timeout_ms: int | None = DEFAULT_TIMEOUT_MS,
        limit_codes: Collection[str] = (),
        debug: bool = False,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: The API origin.
            token: Default bearer token, overridden by a per-call token.
            timeout_ms: Request timeout in milliseconds. None disables it.
            limit_codes: Error codes the API uses to signal rate limiting.
            debug: Enable debug logging to stderr.
            http_client: Optional pre-built client. It is not closed by ``aclose()``.
        """
        self._owns_http_client = http_client is None
        self._http_client = http_client or create_http_client(
            timeout=timeout_ms / 1000 if timeout_ms is not None else None
        )
        self._base_url = base_url
        self._timeout_ms = timeout_ms
        self._limit_codes = frozenset(limit_codes)
        self._debug = debug
        transport = Transport(self._http_client, base_url=base_url, default_token=token)
        self._dispatcher = Dispatcher(
            transport,
            base_url=base_url,
            registry=RequestRegistry(),
            limit_codes=self._limit_codes,
            debug=debug,
        )

    @classmethod
    def from_env(cls) -> "GobathClient":
        """Create a client from environment variables.

        Optional environment variables:
            GOBATH_API_URL: The API origin (default: https://api.gobath.ru/).
            GOBATH_TOKEN: Default bearer token.
            GOBATH_TIMEOUT_MS: Request timeout in milliseconds.
            GOBATH_LIMIT_CODES: Comma-separated rate-limit error codes.
            GOBATH_DEBUG: Set to "1" to enable debug logging.

        Raises:
            ValueError: If GOBATH_TIMEOUT_MS is not a valid integer.
        """
        base_url = os.environ.get("GOBATH_API_URL") or DEFAULT_BASE_URL
        token = os.environ.get("GOBATH_TOKEN") or None
        timeout_ms = int(os.environ.get("GOBATH_TIMEOUT_MS", str(DEFAULT_TIMEOUT_MS)))
        limit_codes = [
            code.strip()
            for code in os.environ.get("GOBATH_LIMIT_CODES", "").split(",")
            if code.strip()
        ]
        debug = os.environ.get("GOBATH_DEBUG", "") == "1"

        return cls(
            base_url=base_url,
            token=token,
            timeout_ms=timeout_ms,
            limit_codes=limit_codes,
            debug=debug,
        )

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dispatcher

    async def __aenter__(self) -> "GobathClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_http_client:
            await self._http_client.aclose()

    async def request(
        self,
        segments: Sequence[str],
        body: Any = None,
        query: Mapping[str, Any] | None = None,
        config: ConfigLike = None,
    ) -> Any:
        """Dispatch a call given as raw segments, e.g. ``("Profile", "Avatar", "GET")``."""
        return await self._dispatcher.request(segments, body, query, config)

    async def call(
        self,
        name: str,
        body: Any = None,
        query: Mapping[str, Any] | None = None,
        config: ConfigLike = None,
    ) -> Any:
        """Dispatch a named endpoint such as ``"Profile.Sso.Yandex.LINK"``.

        Raises:
            KeyError: If the endpoint name is unknown.
            ApiError: For any failure reported by the API or the transport.
        """
        return await self.request(endpoint_segments(name), body, query, config)

    async def get_file(
        self,
        file_id: str,
        query: Mapping[str, Any] | None = None,
        config: ConfigLike = None,
    ) -> Any:
        """Fetch file info (or a redirect target) for a file id."""
        return await self.request(file_segments(file_id), None, query, config)

    async def upload(
        self,
        form: Any,
        on_progress: Callable[[float], None] | None = None,
        config: ConfigLike = None,
    ) -> Any:
        """Upload files through the multipart transport.

        Args:
            form: Mapping of form fields, or a pre-encoded multipart payload.
            on_progress: Called with the upload percentage as chunks are sent.
            config: Extra per-call configuration.
        """
        call_config = config if isinstance(config, CallConfig) else CallConfig.model_validate(config or {})
        if on_progress is not None:
            call_config = call_config.model_copy(update={"on_progress": on_progress})
        return await self.call("Upload.POST", form, None, call_config)
