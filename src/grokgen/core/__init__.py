"""Core / service layer — pure business logic and data transformations.

Rules
-----
* No ``print()`` calls.
* No network I/O and no file writes.
* No imports from ``cli`` or ``infra``.
"""

from grokgen.core.generation_service import GenerationService
from grokgen.core.models import (
    GeneratedImage,
    ImageRequest,
    Mode,
    VideoRequest,
    VideoResult,
)
from grokgen.core.protocols import GenerationProvider, MediaFetcher

__all__: list[str] = [
    "GeneratedImage",
    "GenerationProvider",
    "GenerationService",
    "ImageRequest",
    "MediaFetcher",
    "Mode",
    "VideoRequest",
    "VideoResult",
]
