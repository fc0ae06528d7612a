"""Public Pydantic models for the Gobath SDK.

These models describe one dispatched call and the response envelope the
Gobath API wraps around every JSON body:

    {"data": ..., "meta": ..., "error": {"code": "...", "message": "...", ...}}
"""

from collections.abc import Callable
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# =============================================================================
# Constants
# =============================================================================

META_KEY = "$meta"
STANDARD_VERBS = frozenset({"GET", "POST", "PATCH", "DELETE"})

DoneStatus = Literal["ok", "empty", "error"]

# =============================================================================
# Call Models
# =============================================================================


class CallConfig(BaseModel):
    """Per-call configuration.

    Fields:
        token: Bearer credential sent by the transport. Falls back to the
            client default when omitted.
        prevent_parallel: False disables coalescing, True coalesces by the
            derived request key, a string overrides the key.
        on_progress: Upload progress callback, receives a percentage.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    token: str | None = None
    prevent_parallel: bool | str = Field(default=False, alias="preventParallel")
    on_progress: Callable[[float], None] | None = Field(default=None, alias="onProgress")


class CallDescriptor(BaseModel):
    """One logical API invocation: resource segments, verb, body, query and config."""

    model_config = ConfigDict(frozen=True)

    segments: tuple[str, ...] = Field(min_length=2)
    body: Any = None
    query: dict[str, Any] | None = None
    config: CallConfig = Field(default_factory=CallConfig)

    @field_validator("query", mode="before")
    @classmethod
    def dump_query_model(cls, v: Any) -> Any:
        if isinstance(v, BaseModel):
            return v.model_dump(mode="json", exclude_none=True)
        return v

    @field_validator("config", mode="before")
    @classmethod
    def default_config(cls, v: Any) -> Any:
        return CallConfig() if v is None else v

    @property
    def verb(self) -> str:
        return self.segments[-1]

    @property
    def resource(self) -> tuple[str, ...]:
        return self.segments[:-1]


# =============================================================================
# Response Models
# =============================================================================


class ErrorPayload(BaseModel):
    """The ``error`` member of a failed response. Unknown keys are kept as extras.

    Servers are not strict about the shape: numeric codes are read as
    strings, a missing code becomes ``""`` and ``message`` is kept as sent.
    """

    model_config = ConfigDict(extra="allow")

    code: str = ""
    message: Any = None

    @model_validator(mode="before")
    @classmethod
    def wrap_bare_error(cls, v: Any) -> Any:
        if isinstance(v, (dict, cls)):
            return v
        return {"message": v}

    @field_validator("code", mode="before")
    @classmethod
    def stringify_code(cls, v: Any) -> str:
        return "" if v is None else str(v)


class ResponseEnvelope(BaseModel):
    """JSON response body. Exactly one of ``data``/``error`` is authoritative."""

    data: Any = None
    meta: Any = None
    error: ErrorPayload | None = None

    @field_validator("error", mode="before")
    @classmethod
    def drop_empty_error(cls, v: Any) -> Any:
        # false, 0 and "" mean no error; an empty object is still an error.
        if not v and not isinstance(v, dict):
            return None
        return v


class MetaList(list):
    """List result that carries the envelope ``meta`` alongside its items."""

    def __init__(self, items: Any = (), meta: Any = None) -> None:
        super().__init__(items)
        self.meta = meta


# =============================================================================
# Pagination Models
# =============================================================================


class PaginationWindow(BaseModel):
    """Offset/limit pair derived from the length of the caller's list."""

    offset: int = Field(ge=0)
    limit: int = Field(gt=0)


__all__ = [
    "META_KEY",
    "STANDARD_VERBS",
    "DoneStatus",
    "CallConfig",
    "CallDescriptor",
    "ErrorPayload",
    "ResponseEnvelope",
    "MetaList",
    "PaginationWindow",
]
