"""Translation of PascalCase resource segments into API URLs."""

import re
from collections.abc import Sequence

DEFAULT_BASE_URL = "https://api.gobath.ru/"

# Uppercase letter preceded by another letter; CAMELcase runs are not supported.
_WORD_BOUNDARY = re.compile(r"(?<=[A-Za-z])([A-Z])")


def translate_segment(segment: str) -> str:
    """Convert one segment to kebab case: ``EmailChangeAccess`` -> ``email-change-access``."""
    return _WORD_BOUNDARY.sub(r"-\1", segment).lower()


def translate(segments: Sequence[str]) -> str:
    """Join translated resource segments with ``/``.

    The verb token must already be stripped. Already-kebab segments pass
    through unchanged.
    """
    return "/".join(translate_segment(segment) for segment in segments)


def resolve(segments: Sequence[str], base_url: str = DEFAULT_BASE_URL) -> tuple[str, str]:
    """Split a call path into its HTTP method and absolute URL.

    Args:
        segments: Resource segments followed by the verb token,
            e.g. ``("Profile", "Avatar", "PATCH")``.
        base_url: API origin, with or without a trailing slash.

    Returns:
        ``(method, url)``. Non-standard verbs such as ``LINK`` are returned
        as-is for the transport to honor or reject.

    Raises:
        ValueError: If there is no verb or no resource segment.
    """
    if len(segments) < 2:
        raise ValueError(f"call path needs a resource and a verb, got {list(segments)!r}")
    method = segments[-1]
    return method, f"{normalize_base_url(base_url)}{translate(segments[:-1])}"


def normalize_base_url(base_url: str) -> str:
    return base_url if base_url.endswith("/") else f"{base_url}/"
