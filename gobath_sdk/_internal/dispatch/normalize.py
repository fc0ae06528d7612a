"""Unwrapping of the Gobath response envelope."""

import json
from collections.abc import Collection
from typing import Any

import httpx
from pydantic import ValidationError

from gobath_sdk.exceptions import ApiError, ApiLimitError, CommunicationError
from gobath_sdk.models import META_KEY, ErrorPayload, MetaList, ResponseEnvelope

JSON_CONTENT_TYPE = "application/json"


def is_json(response: httpx.Response) -> bool:
    return response.headers.get("content-type", "").startswith(JSON_CONTENT_TYPE)


def normalize(response: httpx.Response, limit_codes: Collection[str] = ()) -> Any:
    """Turn a response into the caller's result or a classified error.

    JSON bodies are read as ``{data, meta, error}``. A present ``error``
    raises; otherwise ``data`` is returned with ``meta`` attached under
    ``$meta`` when both exist. Any other content type is returned as text.
    The HTTP status code is never consulted.

    Args:
        response: A fully read response.
        limit_codes: Error codes the server uses to signal rate limiting.

    Raises:
        ApiLimitError: If the error code is one of ``limit_codes``.
        ApiError: For any other error in the envelope.
        CommunicationError: If a JSON body cannot be decoded or is not an object.
    """
    if not is_json(response):
        return response.text

    try:
        envelope = ResponseEnvelope.model_validate(response.json())
    except (json.JSONDecodeError, UnicodeDecodeError, ValidationError) as e:
        raise CommunicationError(f"Malformed response envelope: {e}") from e

    if envelope.error is not None:
        raise classify_error(envelope.error, limit_codes)

    return attach_meta(envelope.data, envelope.meta)


def classify_error(error: ErrorPayload, limit_codes: Collection[str] = ()) -> ApiError:
    error_cls = ApiLimitError if error.code in limit_codes else ApiError
    message = "" if error.message is None else str(error.message)
    return error_cls(error.code, message, dict(error.model_extra or {}))


def attach_meta(data: Any, meta: Any) -> Any:
    """Merge ``meta`` onto ``data`` under the reserved key.

    Dicts get a ``$meta`` entry, lists become a ``MetaList``. Other values
    cannot carry it and are returned unchanged.
    """
    if meta is None:
        return data
    if isinstance(data, dict):
        return {**data, META_KEY: meta}
    if isinstance(data, list):
        return MetaList(data, meta=meta)
    return data
