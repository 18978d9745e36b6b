"""Translation of httpx responses and failures into grokgen exceptions."""

from __future__ import annotations

import httpx

from grokgen.exceptions import ApiResponseError, NetworkError


def safe_body(response: httpx.Response) -> str | None:
    """Return the response text, or ``None`` if it cannot be read."""
    try:
        return response.text
    except (httpx.ResponseNotRead, httpx.StreamError, UnicodeDecodeError, LookupError):
        return None


def raise_for_status(
    response: httpx.Response,
    *,
    what: str,
    error_class: type[ApiResponseError] = ApiResponseError,
) -> None:
    """Raise *error_class* with full response detail on a non-2xx status."""
    if response.is_success:
        return
    raise error_class(
        f"{what} failed with HTTP {response.status_code} {response.reason_phrase}",
        status=response.status_code,
        status_text=response.reason_phrase,
        headers=dict(response.headers),
        body=safe_body(response),
    )


def network_error(exc: httpx.RequestError, *, what: str) -> NetworkError:
    """Wrap a transport failure; the caller raises it ``from exc``."""
    return NetworkError(
        f"{what} failed: {exc}",
        hint="Check your network connection and XAI_BASE_URL.",
    )
