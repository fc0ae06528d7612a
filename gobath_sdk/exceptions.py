"""Public exceptions for the Gobath SDK.

Every failure of a dispatched call is an ``ApiError``. Callers that prefer
not to rely on class identity can branch on ``error.kind`` instead.
"""

from typing import Any, Literal

ErrorKind = Literal["api", "api_limit", "communication"]

COMMUNICATION_ERROR_CODE = "COMMUNICATION_ERROR"


class GobathError(Exception):
    """Base exception for all Gobath SDK errors."""


class ApiError(GobathError):
    """Application error reported by the Gobath API in the response envelope."""

    kind: ErrorKind = "api"

    def __init__(
        self,
        code: str,
        message: str = "",
        fields: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message or code)
        self.code = code
        self.message = message
        self.fields = fields or {}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class ApiLimitError(ApiError):
    """Rate-limit signal from the API. Back off before calling again."""

    kind: ErrorKind = "api_limit"


class CommunicationError(ApiError):
    """Transport-level failure (DNS, connect, timeout, broken response)."""

    kind: ErrorKind = "communication"

    def __init__(self, message: str = "") -> None:
        super().__init__(COMMUNICATION_ERROR_CODE, message)
