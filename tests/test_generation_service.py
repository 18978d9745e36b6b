"""Tests for the generation service (core/generation_service.py).

All tests use in-memory fakes for the provider and fetcher.

Coverage:
* Request unpacking into provider calls.
* Video unwrapping: inline bytes, temporary URL, neither.
* Exception wrapping (foreign errors → UnknownGenerationError).
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from grokgen.core.generation_service import GenerationService
from grokgen.core.models import (
    ASPECT_RATIO,
    IMAGE_MODEL,
    VIDEO_MODEL,
    GeneratedImage,
    ImageRequest,
    VideoRequest,
    VideoResult,
)
from grokgen.exceptions import (
    ApiResponseError,
    DownloadFailedError,
    NoDataReceivedError,
    UnknownGenerationError,
)

from conftest import PNG_BYTES, FakeFetcher, FakeProvider


def _video_request(**overrides: object) -> VideoRequest:
    defaults: dict[str, object] = {
        "prompt": "the cat yawns",
        "source_path": Path("/tmp/cat.jpg"),
        "duration": 8,
    }
    defaults.update(overrides)
    return VideoRequest(**defaults)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Images
# ---------------------------------------------------------------------------

class TestGenerateImages:
    def test_calls_provider_once_with_request_fields(self) -> None:
        provider = FakeProvider(images=[GeneratedImage(PNG_BYTES, "image/png")])
        svc = GenerationService(provider, FakeFetcher())

        result = svc.generate_images(ImageRequest(prompt="a fox", count=3))

        assert provider.image_calls == [(IMAGE_MODEL, "a fox", 3, ASPECT_RATIO)]
        assert result == (GeneratedImage(PNG_BYTES, "image/png"),)

    def test_generation_error_propagates_unchanged(self) -> None:
        error = ApiResponseError("boom", status=500, status_text="Internal Error")
        svc = GenerationService(FakeProvider(error=error), FakeFetcher())

        with pytest.raises(ApiResponseError) as exc_info:
            svc.generate_images(ImageRequest(prompt="a fox"))
        assert exc_info.value is error

    def test_foreign_error_is_wrapped(self) -> None:
        original = RuntimeError("kaboom")
        svc = GenerationService(FakeProvider(error=original), FakeFetcher())

        with pytest.raises(UnknownGenerationError) as exc_info:
            svc.generate_images(ImageRequest(prompt="a fox"))
        assert exc_info.value.raw is original
        assert exc_info.value.__cause__ is original


# ---------------------------------------------------------------------------
# Video
# ---------------------------------------------------------------------------

class TestRequestVideo:
    def test_provider_receives_bytes_duration_and_ratio(self) -> None:
        provider = FakeProvider(video=VideoResult(data=b"mp4"))
        svc = GenerationService(provider, FakeFetcher())

        result = svc.request_video(_video_request(duration=12), b"source")

        assert result == VideoResult(data=b"mp4")
        assert provider.video_calls == [
            (VIDEO_MODEL, "the cat yawns", b"source", 12, ASPECT_RATIO),
        ]

    def test_generation_error_propagates_unchanged(self) -> None:
        error = ApiResponseError("boom", status=502, status_text="Bad Gateway")
        svc = GenerationService(FakeProvider(error=error), FakeFetcher())

        with pytest.raises(ApiResponseError) as exc_info:
            svc.request_video(_video_request(), b"img")
        assert exc_info.value is error

    def test_foreign_provider_error_is_wrapped(self) -> None:
        svc = GenerationService(FakeProvider(error=KeyError("x")), FakeFetcher())

        with pytest.raises(UnknownGenerationError, match="video generation"):
            svc.request_video(_video_request(), b"img")


class TestResolveVideo:
    def test_inline_bytes_returned_without_download(self) -> None:
        fetcher = FakeFetcher(data=b"unused")
        svc = GenerationService(FakeProvider(), fetcher)

        assert svc.resolve_video(VideoResult(data=b"mp4")) == b"mp4"
        assert fetcher.urls == []

    def test_url_is_fetched(self) -> None:
        fetcher = FakeFetcher(data=b"downloaded")
        svc = GenerationService(FakeProvider(), fetcher)

        assert svc.resolve_video(VideoResult(url="https://vidgen.x.ai/tmp/v.mp4")) == b"downloaded"
        assert fetcher.urls == ["https://vidgen.x.ai/tmp/v.mp4"]

    def test_progress_callback_forwarded(self) -> None:
        callback = MagicMock()
        svc = GenerationService(FakeProvider(), FakeFetcher(data=b"1234"))

        svc.resolve_video(VideoResult(url="https://x/v.mp4"), progress_callback=callback)

        callback.assert_called_once_with(4, 4)

    def test_neither_bytes_nor_url_raises_no_data(self) -> None:
        fetcher = FakeFetcher()
        svc = GenerationService(FakeProvider(), fetcher)

        with pytest.raises(NoDataReceivedError, match="No video data received"):
            svc.resolve_video(VideoResult())
        assert fetcher.urls == []

    def test_download_failure_propagates(self) -> None:
        error = DownloadFailedError("gone", status=404, status_text="Not Found")
        svc = GenerationService(FakeProvider(), FakeFetcher(error=error))

        with pytest.raises(DownloadFailedError):
            svc.resolve_video(VideoResult(url="https://x/v.mp4"))

    def test_foreign_fetch_error_is_wrapped(self) -> None:
        svc = GenerationService(FakeProvider(), FakeFetcher(error=ValueError("bad")))

        with pytest.raises(UnknownGenerationError, match="download"):
            svc.resolve_video(VideoResult(url="https://x/v.mp4"))


class TestClose:
    def test_closes_provider_and_fetcher(self) -> None:
        provider, fetcher = FakeProvider(), FakeFetcher()
        GenerationService(provider, fetcher).close()
        assert provider.closed and fetcher.closed
