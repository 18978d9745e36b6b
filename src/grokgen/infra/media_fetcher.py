"""httpx-backed implementation of :class:`~grokgen.core.protocols.MediaFetcher`.

Used to pull a finished video from the temporary URL the API hands
back.  A single streaming GET is issued; a non-success status becomes
:class:`~grokgen.exceptions.DownloadFailedError`.
"""

from __future__ import annotations

import httpx

from grokgen.core.protocols import ProgressCallback
from grokgen.exceptions import DownloadFailedError
from grokgen.infra.http_errors import network_error, raise_for_status


class HttpMediaFetcher:
    """Concrete :class:`MediaFetcher` using a plain (unauthenticated) client."""

    def __init__(
        self,
        *,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._client: httpx.Client = client or httpx.Client(
            timeout=timeout,
            follow_redirects=True,
        )

    def close(self) -> None:
        self._client.close()

    def fetch(
        self,
        url: str,
        *,
        progress_callback: ProgressCallback | None = None,
    ) -> bytes:
        """Download *url* into memory.

        Raises
        ------
        DownloadFailedError
            For any non-2xx response.
        NetworkError
            For connection or transfer failures.
        """
        try:
            with self._client.stream("GET", url) as response:
                if not response.is_success:
                    response.read()
                    raise_for_status(
                        response,
                        what="Video download",
                        error_class=DownloadFailedError,
                    )
                total = _content_length(response)
                chunks: list[bytes] = []
                downloaded = 0
                for chunk in response.iter_bytes():
                    chunks.append(chunk)
                    downloaded += len(chunk)
                    if progress_callback is not None:
                        progress_callback(downloaded, total)
        except httpx.RequestError as exc:
            raise network_error(exc, what="Video download") from exc
        return b"".join(chunks)


def _content_length(response: httpx.Response) -> int | None:
    value = response.headers.get("content-length")
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None
