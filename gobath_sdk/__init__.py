"""Gobath SDK for Python.

This SDK dispatches calls to the Gobath API.

Public API:
    GobathClient - Async client for the Gobath API
    load_more_forward, load_more_backward - Pagination helpers
    ApiError, ApiLimitError, CommunicationError - Error taxonomy

Internal (system-level, not for direct use):
    _internal.dispatch - Call dispatch pipeline
"""

from gobath_sdk._version import __version__
from gobath_sdk.client import GobathClient
from gobath_sdk.exceptions import ApiError, ApiLimitError, CommunicationError, GobathError
from gobath_sdk.models import CallConfig, CallDescriptor, MetaList, PaginationWindow
from gobath_sdk.pagination import load_more_backward, load_more_forward

__all__ = [
    "__version__",
    "GobathClient",
    "GobathError",
    "ApiError",
    "ApiLimitError",
    "CommunicationError",
    "CallConfig",
    "CallDescriptor",
    "MetaList",
    "PaginationWindow",
    "load_more_backward",
    "load_more_forward",
]
