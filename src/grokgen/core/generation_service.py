"""Core generation service — drives one image or video request.

This service delegates the remote work to a
:class:`~grokgen.core.protocols.GenerationProvider` and, for videos
delivered by URL, to a :class:`~grokgen.core.protocols.MediaFetcher`,
both injected at construction time.  It is responsible for:

* Unpacking the request value objects into provider calls.
* Unwrapping a video result into bytes.
* Ensuring only :class:`~grokgen.exceptions.GenerationError` subclasses
  escape.

Guarantees
----------
* Pure orchestration — no ``print()``, no filesystem access.
* Exactly one provider call per request; nothing is retried.
"""

from __future__ import annotations

from grokgen.core.models import GeneratedImage, ImageRequest, VideoRequest, VideoResult
from grokgen.core.protocols import GenerationProvider, MediaFetcher, ProgressCallback
from grokgen.exceptions import GenerationError, NoDataReceivedError, UnknownGenerationError


class GenerationService:
    """Service wrapping the generation collaborator.

    Parameters
    ----------
    provider:
        Any object satisfying the :class:`GenerationProvider` protocol.
    fetcher:
        Any object satisfying the :class:`MediaFetcher` protocol.
    """

    def __init__(self, provider: GenerationProvider, fetcher: MediaFetcher) -> None:
        self._provider: GenerationProvider = provider
        self._fetcher: MediaFetcher = fetcher

    def close(self) -> None:
        self._provider.close()
        self._fetcher.close()

    # ------------------------------------------------------------------
    # Images
    # ------------------------------------------------------------------

    def generate_images(self, request: ImageRequest) -> tuple[GeneratedImage, ...]:
        """Generate all images for *request* in a single batch call.

        Raises
        ------
        GenerationError
            Any failure reported by the provider.
        """
        try:
            images = self._provider.generate_images(
                request.model,
                request.prompt,
                request.count,
                request.aspect_ratio,
            )
        except GenerationError:
            raise
        except Exception as exc:
            raise UnknownGenerationError(
                f"Unexpected image generation error: {exc}",
                raw=exc,
            ) from exc
        return tuple(images)

    # ------------------------------------------------------------------
    # Video
    # ------------------------------------------------------------------

    def request_video(self, request: VideoRequest, image: bytes) -> VideoResult:
        """Run the video job for *request* animating *image*."""
        try:
            return self._provider.generate_video(
                request.model,
                request.prompt,
                image,
                request.duration,
                request.aspect_ratio,
            )
        except GenerationError:
            raise
        except Exception as exc:
            raise UnknownGenerationError(
                f"Unexpected video generation error: {exc}",
                raw=exc,
            ) from exc

    def resolve_video(
        self,
        result: VideoResult,
        *,
        progress_callback: ProgressCallback | None = None,
    ) -> bytes:
        """Return the bytes of *result*, downloading them if only a URL is set.

        Raises
        ------
        NoDataReceivedError
            When the result has neither bytes nor a URL.
        GenerationError
            When the download fails.
        """
        if result.data:
            return result.data
        if not result.url:
            raise NoDataReceivedError(
                "No video data received: the result held neither bytes nor a URL.",
                field="video",
            )
        try:
            return self._fetcher.fetch(result.url, progress_callback=progress_callback)
        except GenerationError:
            raise
        except Exception as exc:
            raise UnknownGenerationError(
                f"Unexpected video download error: {exc}",
                raw=exc,
            ) from exc
