"""Dispatch pipeline for Gobath API calls.

WARNING: This is a system-level module used by GobathClient.
Prefer the public client over calling it directly.
"""

from gobath_sdk._internal.dispatch.client import Dispatcher
from gobath_sdk._internal.dispatch.normalize import attach_meta, normalize
from gobath_sdk._internal.dispatch.parallelism import RequestRegistry
from gobath_sdk._internal.dispatch.paths import resolve, translate
from gobath_sdk._internal.dispatch.transport import Transport, encode_form

__all__ = [
    "Dispatcher",
    "RequestRegistry",
    "Transport",
    "attach_meta",
    "encode_form",
    "normalize",
    "resolve",
    "translate",
]
