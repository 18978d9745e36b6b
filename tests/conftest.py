"""Shared pytest fixtures and configuration for the grokgen test suite.

Guidelines
----------
* No internet access in any test: HTTP goes through ``httpx.MockTransport``
  or the provider is replaced by a fake at the protocol boundary.
* Core tests must be pure — no side effects.
* Tests must not depend on the caller's environment or ``.env``.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import pytest

from grokgen.config import RunConfig
from grokgen.core.models import GeneratedImage, VideoResult

PNG_BYTES: bytes = b"\x89PNG\r\n\x1a\n" + b"\x00" * 24
JPEG_BYTES: bytes = b"\xff\xd8\xff\xe0" + b"\x00" * 24

_ENV_VARS: tuple[str, ...] = (
    "XAI_API_KEY",
    "XAI_BASE_URL",
    "REQUEST_TIMEOUT",
    "POLL_INTERVAL",
    "PROMPT",
    "COUNT",
    "MODE",
    "VIDEO_IMAGE_SOURCE",
    "DURATION",
    # Keep Rich output plain so assertions see undecorated text.
    "FORCE_COLOR",
    "TTY_COMPATIBLE",
    "TTY_INTERACTIVE",
)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_config(tmp_path: Path) -> Callable[..., RunConfig]:
    """Factory for a :class:`RunConfig` writing under ``tmp_path``."""

    def _make(**overrides: Any) -> RunConfig:
        defaults: dict[str, Any] = {
            "api_key": "xai-test-key",
            "base_url": "https://api.x.ai/v1",
            "request_timeout": None,
            "poll_interval": 0.0,
            "output_dir": tmp_path / "generated-images",
        }
        defaults.update(overrides)
        return RunConfig(**defaults)

    return _make


class FakeProvider:
    """In-memory :class:`GenerationProvider` recording every call."""

    def __init__(
        self,
        images: Sequence[GeneratedImage] = (),
        video: VideoResult | None = None,
        error: BaseException | None = None,
    ) -> None:
        self.images = list(images)
        self.video = video or VideoResult()
        self.error = error
        self.image_calls: list[tuple[str, str, int, str]] = []
        self.video_calls: list[tuple[str, str, bytes, int, str]] = []
        self.closed = False

    def generate_images(
        self, model: str, prompt: str, count: int, aspect_ratio: str,
    ) -> list[GeneratedImage]:
        self.image_calls.append((model, prompt, count, aspect_ratio))
        if self.error is not None:
            raise self.error
        return self.images

    def generate_video(
        self, model: str, prompt: str, image: bytes, duration: int, aspect_ratio: str,
    ) -> VideoResult:
        self.video_calls.append((model, prompt, image, duration, aspect_ratio))
        if self.error is not None:
            raise self.error
        return self.video

    def close(self) -> None:
        self.closed = True


class FakeFetcher:
    """In-memory :class:`MediaFetcher`."""

    def __init__(self, data: bytes = b"", error: BaseException | None = None) -> None:
        self.data = data
        self.error = error
        self.urls: list[str] = []
        self.closed = False

    def fetch(self, url: str, *, progress_callback: Any = None) -> bytes:
        self.urls.append(url)
        if self.error is not None:
            raise self.error
        if progress_callback is not None:
            progress_callback(len(self.data), len(self.data))
        return self.data

    def close(self) -> None:
        self.closed = True


def answers(mapping: dict[str, str]) -> Callable[[str], str]:
    """Build an ``ask`` callable that answers by question prefix.

    Unknown questions fail the test so that unexpected prompts surface.
    """

    def _ask(question: str) -> str:
        for prefix, answer in mapping.items():
            if question.startswith(prefix):
                return answer
        raise AssertionError(f"Unexpected question: {question!r}")

    return _ask
