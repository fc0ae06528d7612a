"""Offset-based "load more" helpers for paginated endpoints.

Both helpers derive the next window from the length of the list the caller
is accumulating, so no cursor state is kept anywhere else:

    async def fetch_page(window: PaginationWindow) -> list[dict]:
        return await client.request(("Notifications", "Unread", "SEARCH"), query=window)

    await load_more_forward(notifications, 20, on_done, fetch_page)

Neither helper raises on a failed fetch. The outcome is reported through
``on_done`` with ``"ok"``, ``"empty"`` or ``"error"``.
"""

import inspect
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from gobath_sdk.models import DoneStatus, PaginationWindow

FetchPage = Callable[[PaginationWindow], Sequence[Any] | Awaitable[Sequence[Any]]]
OnDone = Callable[[DoneStatus], None]


async def _fetch_more(items: list[Any], page_size: int, fetch_page: FetchPage) -> list[Any]:
    window = PaginationWindow(offset=len(items), limit=page_size)
    result = fetch_page(window)
    if inspect.isawaitable(result):
        result = await result
    return list(result)


async def load_more_forward(
    items: list[Any],
    page_size: int,
    on_done: OnDone,
    fetch_page: FetchPage,
) -> None:
    """Fetch the next page and append it to ``items``.

    If ``on_done`` raises while reporting ``"ok"`` or ``"empty"``, the page
    is taken back out of ``items`` and ``"error"`` is reported instead.

    Args:
        items: The caller's accumulated list, mutated in place on success.
        page_size: Number of items to request.
        on_done: Receives the outcome status.
        fetch_page: Sync or async function taking a ``PaginationWindow``.
    """
    size_before = len(items)
    try:
        more = await _fetch_more(items, page_size, fetch_page)
        if not more:
            on_done("empty")
            return
        items.extend(more)
        on_done("ok")
    except Exception:
        del items[size_before:]
        on_done("error")


async def load_more_backward(
    items: list[Any],
    page_size: int,
    on_done: OnDone,
    fetch_page: FetchPage,
) -> None:
    """Fetch the next page and prepend it to ``items``, keeping its order."""
    size_before = len(items)
    try:
        more = await _fetch_more(items, page_size, fetch_page)
        if not more:
            on_done("empty")
            return
        items[:0] = more
        on_done("ok")
    except Exception:
        del items[: len(items) - size_before]
        on_done("error")
