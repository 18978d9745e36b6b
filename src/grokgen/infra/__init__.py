"""Infrastructure layer — external system integration.

This layer wraps all interaction with the xAI API, temporary download
URLs and the filesystem.  Every raw third-party exception must be
caught here and re-raised as a :class:`~grokgen.exceptions.GrokGenError`
subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
"""

from grokgen.infra.media_fetcher import HttpMediaFetcher
from grokgen.infra.storage import OutputStorage
from grokgen.infra.xai_provider import XaiGenerationProvider

__all__: list[str] = [
    "HttpMediaFetcher",
    "OutputStorage",
    "XaiGenerationProvider",
]
