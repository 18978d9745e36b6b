"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Protocol

from grokgen.core.models import GeneratedImage, VideoResult

ProgressCallback = Callable[[int, int | None], None]
"""Called with ``(downloaded_bytes, total_bytes)`` during a download."""


class GenerationProvider(Protocol):
    """Contract for the remote generation collaborator.

    Implementations must map every backend-specific exception to a
    :class:`~grokgen.exceptions.GenerationError` subclass.
    """

    def generate_images(
        self,
        model: str,
        prompt: str,
        count: int,
        aspect_ratio: str,
    ) -> Sequence[GeneratedImage]:
        """Generate *count* images for *prompt* in one batch call.

        Raises
        ------
        ApiResponseError
            When the API answers with a non-success status.
        NetworkError
            When no response could be obtained.
        ResponseValidationError
            When the response body has an unexpected shape.
        """
        ...  # pragma: no cover

    def generate_video(
        self,
        model: str,
        prompt: str,
        image: bytes,
        duration: int,
        aspect_ratio: str,
    ) -> VideoResult:
        """Generate a video of *duration* seconds animating *image*.

        The result holds either the encoded bytes or a temporary URL.
        """
        ...  # pragma: no cover

    def close(self) -> None:
        """Release any pooled connections."""
        ...  # pragma: no cover


class MediaFetcher(Protocol):
    """Contract for retrieving bytes from a temporary download URL."""

    def fetch(
        self,
        url: str,
        *,
        progress_callback: ProgressCallback | None = None,
    ) -> bytes:
        """Return the body of a plain GET against *url*.

        Raises
        ------
        DownloadFailedError
            When the server answers with a non-success status.
        NetworkError
            When the transfer fails.
        """
        ...  # pragma: no cover

    def close(self) -> None:
        ...  # pragma: no cover
