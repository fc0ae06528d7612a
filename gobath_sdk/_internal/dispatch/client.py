"""Dispatcher turning call descriptors into Gobath API requests."""

import sys
from collections.abc import Collection, Mapping, Sequence
from typing import Any

from gobath_sdk._internal.dispatch.normalize import normalize
from gobath_sdk._internal.dispatch.parallelism import RequestRegistry
from gobath_sdk._internal.dispatch.paths import DEFAULT_BASE_URL, resolve
from gobath_sdk._internal.dispatch.redaction import describe_body
from gobath_sdk._internal.dispatch.transport import Transport
from gobath_sdk.models import STANDARD_VERBS, CallConfig, CallDescriptor


class Dispatcher:
    """Dispatch pipeline for one Gobath API origin.

    A call goes through four steps: the segments are resolved to a method
    and URL, identical coalesced calls are joined in the request registry,
    the transport performs the exchange, and the envelope is unwrapped.

    Every failure is raised to the caller as an ``ApiError`` subclass. There
    are no retries.
    """

    def __init__(
        self,
        transport: Transport,
        *,
        base_url: str = DEFAULT_BASE_URL,
        registry: RequestRegistry | None = None,
        limit_codes: Collection[str] = (),
        debug: bool = False,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            transport: Performs the network I/O.
            base_url: API origin the segments are resolved against.
            registry: In-flight registry. A fresh one is created if omitted.
            limit_codes: Server error codes classified as ``ApiLimitError``.
            debug: Enable debug logging to stderr.
        """
        self._transport = transport
        self._base_url = base_url
        self._registry = registry if registry is not None else RequestRegistry()
        self._limit_codes = frozenset(limit_codes)
        self._debug = debug

    @property
    def registry(self) -> RequestRegistry:
        """The registry of coalesced calls currently in flight."""
        return self._registry

    def _log_debug(self, message: str) -> None:
        """Log a debug message to stderr if debug mode is enabled."""
        if self._debug:
            print(f"[gobath-sdk] {message}", file=sys.stderr)

    @staticmethod
    def request_key(method: str, url: str, config: CallConfig) -> str:
        """Identity used to coalesce calls: an explicit string key, or ``"METHOD url"``."""
        if isinstance(config.prevent_parallel, str):
            return config.prevent_parallel
        return f"{method} {url}"

    async def request(
        self,
        segments: Sequence[str],
        body: Any = None,
        query: Mapping[str, Any] | None = None,
        config: CallConfig | Mapping[str, Any] | None = None,
    ) -> Any:
        """Build a ``CallDescriptor`` and dispatch it.

        Args:
            segments: Resource segments followed by the verb token.
            body: JSON body, or the form payload for uploads.
            query: Query string parameters.
            config: ``CallConfig`` or a dict of its fields.

        Returns:
            The unwrapped ``data`` of a JSON response, or the text body.
        """
        descriptor = CallDescriptor(
            segments=tuple(segments),
            body=body,
            query=query,
            config=config,
        )
        return await self.dispatch(descriptor)

    async def dispatch(self, descriptor: CallDescriptor) -> Any:
        """Run one call through the pipeline.

        Raises:
            ApiLimitError: The server signalled rate limiting.
            ApiError: The server reported an application error.
            CommunicationError: The exchange itself failed.
        """
        method, url = resolve(descriptor.segments, self._base_url)
        config = descriptor.config
        key = self.request_key(method, url, config)
        coalesce = bool(config.prevent_parallel)

        if method not in STANDARD_VERBS:
            self._log_debug(f"Passing non-standard verb through: {method}")
        if coalesce and key in self._registry:
            self._log_debug(f"Joining in-flight request: {key}")

        async def perform() -> Any:
            self._log_debug(
                f"Sending {method} {url} via {self._transport.select(url)} transport, "
                f"body={describe_body(descriptor.body)}"
            )
            response = await self._transport.send(
                method,
                url,
                body=descriptor.body,
                query=descriptor.query,
                config=config,
            )
            self._log_debug(f"Received {response.status_code} for {method} {url}")
            return normalize(response, self._limit_codes)

        return await self._registry.run(key, coalesce, perform)
