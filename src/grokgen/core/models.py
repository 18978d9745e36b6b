"""Domain models for grokgen.

All models are **frozen** dataclasses — immutable value objects built
once per run and discarded after the API call completes.  They carry
zero I/O and no dependencies on external packages.
"""

from __future__ import annotations

import base64
import enum
from dataclasses import dataclass
from pathlib import Path

IMAGE_MODEL: str = "grok-imagine-image"
VIDEO_MODEL: str = "grok-imagine-video"

ASPECT_RATIO: str = "9:16"
"""Fixed width:height ratio sent with every request."""

DEFAULT_COUNT: int = 1

MIN_DURATION: int = 1
MAX_DURATION: int = 15
DEFAULT_DURATION: int = 6
"""Seconds used when ``DURATION`` is blank, non-numeric or out of range."""


class Mode(str, enum.Enum):
    """Run-time selection between image and image-to-video generation."""

    IMAGE = "image"
    VIDEO = "video"


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ImageRequest:
    """A prompt-to-image request."""

    prompt: str
    count: int = DEFAULT_COUNT
    aspect_ratio: str = ASPECT_RATIO
    model: str = IMAGE_MODEL


@dataclass(frozen=True, slots=True)
class VideoRequest:
    """An image-to-video request."""

    prompt: str
    source_path: Path
    duration: int = DEFAULT_DURATION
    aspect_ratio: str = ASPECT_RATIO
    model: str = VIDEO_MODEL


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class GeneratedImage:
    """One image returned by the generation provider."""

    data: bytes
    """Raw encoded image bytes."""

    media_type: str | None = None
    """MIME type such as ``image/png``, or ``None`` if unknown."""

    @property
    def base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")


@dataclass(frozen=True, slots=True)
class VideoResult:
    """Outcome of a video job: inline bytes, a temporary URL, or neither."""

    data: bytes | None = None
    url: str | None = None
