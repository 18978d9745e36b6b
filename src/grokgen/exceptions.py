"""Custom exception hierarchy for grokgen.

All exceptions that cross layer boundaries must inherit from
:class:`GrokGenError`.  Raw third-party exceptions (httpx, pydantic,
``OSError``) must never propagate beyond the infrastructure layer; they
are caught there and re-raised as a typed subclass defined here.

Hierarchy
---------
GrokGenError
├── ConfigurationError
│   └── MissingApiKeyError
├── EnvironmentError
├── StorageError
└── GenerationError
    ├── NetworkError
    ├── ApiResponseError
    │   └── DownloadFailedError
    ├── ResponseValidationError
    │   └── NoDataReceivedError
    ├── JobFailedError
    └── UnknownGenerationError
"""

from __future__ import annotations

from collections.abc import Mapping


class GrokGenError(Exception):
    """Base exception for all grokgen errors.

    Every user-visible error condition maps to a subclass of this
    exception so that the CLI can render a clean message without leaking
    stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Configuration ---------------------------------------------------------

class ConfigurationError(GrokGenError):
    """Raised when settings cannot be loaded or are invalid."""


class MissingApiKeyError(ConfigurationError):
    """Raised when ``XAI_API_KEY`` is absent from the environment and ``.env``."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(GrokGenError):
    """Raised when a required runtime dependency is not available."""


# --- Filesystem -------------------------------------------------------------

class StorageError(GrokGenError):
    """Raised when the output directory or an output file cannot be written,
    or the source image cannot be read."""


# --- Generation -------------------------------------------------------------

class GenerationError(GrokGenError):
    """Base for every failure raised by the generation collaborator."""


class NetworkError(GenerationError):
    """Raised when the request never produced an HTTP response."""


class ApiResponseError(GenerationError):
    """Raised when the API answered with a non-success HTTP status."""

    def __init__(
        self,
        message: str,
        *,
        status: int,
        status_text: str = "",
        headers: Mapping[str, str] | None = None,
        body: str | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.status: int = status
        self.status_text: str = status_text
        self.headers: dict[str, str] = dict(headers or {})
        self.body: str | None = body


class DownloadFailedError(ApiResponseError):
    """Raised when fetching a generated video from its temporary URL fails."""


class ResponseValidationError(GenerationError):
    """Raised when a response is missing a field or has the wrong shape."""

    def __init__(self, message: str, *, field: str, hint: str | None = None) -> None:
        super().__init__(message, hint=hint)
        self.field: str = field


class NoDataReceivedError(ResponseValidationError):
    """Raised when a video result carries neither bytes nor a URL."""


class JobFailedError(GenerationError):
    """Raised when an asynchronous video job ends in a terminal failure state."""

    def __init__(
        self,
        message: str,
        *,
        request_id: str,
        status: str,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.request_id: str = request_id
        self.status: str = status


class UnknownGenerationError(GenerationError):
    """Raised for any other exception escaping the generation collaborator."""

    def __init__(self, message: str, *, raw: BaseException, hint: str | None = None) -> None:
        super().__init__(message, hint=hint)
        self.raw: BaseException = raw
