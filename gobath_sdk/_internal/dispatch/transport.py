"""Transport selection and network I/O for dispatched calls.

Two transports exist. The upload endpoint gets a multipart transport that
streams the encoded form and reports progress. Every other URL goes through
the generic JSON transport.
"""

from collections.abc import AsyncIterator, Callable, Mapping
from typing import Any, Literal

import httpx

from gobath_sdk._internal.dispatch.paths import normalize_base_url
from gobath_sdk.exceptions import CommunicationError
from gobath_sdk.models import CallConfig

TransportKind = Literal["multipart", "generic"]

UPLOAD_PATH = "upload"
UPLOAD_CHUNK_SIZE = 64 * 1024  # 64KB
DEFAULT_MULTIPART_HEADERS = {"Content-Type": "multipart/form-data"}

# Everything httpx raises for a failed exchange.
TRANSPORT_ERRORS = (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError)
# Raised while encoding a body that cannot go on the wire (JSON or form).
ENCODING_ERRORS = (TypeError, ValueError)


def encode_form(body: Any) -> tuple[bytes, dict[str, str]]:
    """Encode an upload payload into raw bytes plus its headers.

    Args:
        body: Either a mapping of form fields (values as accepted by httpx
            ``files=``, the boundary header is generated), or a pre-encoded
            payload: bytes or a readable object. A pre-encoded payload
            supplies its own headers through ``get_headers()``; without it
            ``Content-Type: multipart/form-data`` is used.

    Returns:
        ``(content, headers)``.

    Raises:
        TypeError: If the payload is none of the supported shapes.
    """
    if isinstance(body, Mapping):
        encoded = httpx.Request("POST", "https://upload.invalid/", files=dict(body))
        content = encoded.read()
        return content, {"Content-Type": encoded.headers["Content-Type"]}

    if isinstance(body, (bytes, bytearray, memoryview)):
        content = bytes(body)
    elif hasattr(body, "read"):
        content = body.read()
    else:
        raise TypeError(f"unsupported upload payload: {type(body).__name__}")

    if hasattr(body, "get_headers"):
        return content, dict(body.get_headers())
    return content, dict(DEFAULT_MULTIPART_HEADERS)


async def _iter_with_progress(
    content: bytes,
    on_progress: Callable[[float], None] | None,
    chunk_size: int,
) -> AsyncIterator[bytes]:
    total = len(content)
    loaded = 0
    for start in range(0, total, chunk_size):
        chunk = content[start : start + chunk_size]
        loaded += len(chunk)
        yield chunk
        if on_progress is not None:
            on_progress(loaded * 100 / total)


class Transport:
    """Performs the HTTP exchange for a dispatched call.

    Any transport-level failure is raised as ``CommunicationError`` carrying
    the original message. HTTP status codes are not checked here.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        base_url: str,
        default_token: str | None = None,
        chunk_size: int = UPLOAD_CHUNK_SIZE,
    ) -> None:
        self._client = http_client
        self._upload_url = f"{normalize_base_url(base_url)}{UPLOAD_PATH}"
        self._default_token = default_token
        self._chunk_size = chunk_size

    @property
    def upload_url(self) -> str:
        return self._upload_url

    def select(self, url: str) -> TransportKind:
        """Pick the transport for a resolved URL."""
        return "multipart" if url == self._upload_url else "generic"

    async def send(
        self,
        method: str,
        url: str,
        body: Any = None,
        query: Mapping[str, Any] | None = None,
        config: CallConfig | None = None,
    ) -> httpx.Response:
        """Send the request on the selected transport.

        Raises:
            CommunicationError: On DNS, connection, timeout or protocol failure,
                or when the body cannot be encoded for the selected transport.
        """
        config = config or CallConfig()
        try:
            if self.select(url) == "multipart":
                return await self._send_multipart(method, url, body, query, config)
            return await self._send_generic(method, url, body, query, config)
        except (*TRANSPORT_ERRORS, *ENCODING_ERRORS) as e:
            raise CommunicationError(str(e)) from e

    def _auth_headers(self, config: CallConfig) -> dict[str, str]:
        token = config.token or self._default_token
        return {"Authorization": f"Bearer {token}"} if token else {}

    async def _send_generic(
        self,
        method: str,
        url: str,
        body: Any,
        query: Mapping[str, Any] | None,
        config: CallConfig,
    ) -> httpx.Response:
        # The client's cookie jar is sent and updated on every exchange.
        request = self._client.build_request(
            method,
            url,
            json=body,
            params=query,
            headers=self._auth_headers(config),
        )
        return await self._client.send(request)

    async def _send_multipart(
        self,
        method: str,
        url: str,
        body: Any,
        query: Mapping[str, Any] | None,
        config: CallConfig,
    ) -> httpx.Response:
        content, form_headers = encode_form(body)
        headers = {
            **self._auth_headers(config),
            **form_headers,
            "Content-Length": str(len(content)),
        }
        # Uploads are unbounded in size and duration.
        request = self._client.build_request(
            method,
            url,
            content=_iter_with_progress(content, config.on_progress, self._chunk_size),
            params=query,
            headers=headers,
            timeout=None,
        )
        return await self._client.send(request)
