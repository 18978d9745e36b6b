"""Output filename derivation (pure functions).

Names are deterministic and collision-prone by design of the tool: two
image runs in the same second, or two video runs from equally named
sources, write to the same path.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path, PurePath

IMAGE_PREFIX: str = "grok"
DEFAULT_IMAGE_EXTENSION: str = "png"
VIDEO_EXTENSION: str = "mp4"


def format_timestamp(moment: datetime) -> str:
    """Render *moment* in UTC as ``YYYY-MM-DDTHH-MM-SS``.

    Naive datetimes are taken to be UTC already.
    """
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H-%M-%S")


def extension_for(media_type: str | None) -> str:
    """Return the MIME subtype (``image/jpeg`` → ``jpeg``), default ``png``."""
    if not media_type:
        return DEFAULT_IMAGE_EXTENSION
    _, _, subtype = media_type.partition("/")
    return subtype.strip() or DEFAULT_IMAGE_EXTENSION


def image_filename(timestamp: str, index: int, media_type: str | None) -> str:
    """Build ``grok-<timestamp>-<index>.<ext>``; *index* is 1-based."""
    return f"{IMAGE_PREFIX}-{timestamp}-{index}.{extension_for(media_type)}"


def video_filename(source_path: str | PurePath) -> str:
    """Build ``<source stem>.mp4`` whatever the source extension."""
    return f"{Path(source_path).stem}.{VIDEO_EXTENSION}"
