"""Runtime configuration loaded from the environment and ``.env``.

:class:`Settings` mirrors the environment variables one-to-one and keeps
the user-facing fields as raw strings; parsing them is the job of
:mod:`grokgen.core.inputs`, which also handles the interactive fallback.
:func:`load_config` is called exactly once at startup and returns the
immutable :class:`RunConfig` handed to the orchestrator.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from grokgen.exceptions import ConfigurationError, MissingApiKeyError

DEFAULT_BASE_URL: str = "https://api.x.ai/v1"
OUTPUT_DIR_NAME: str = "generated-images"


class Settings(BaseSettings):
    XAI_API_KEY: str | None = None
    XAI_BASE_URL: str = DEFAULT_BASE_URL
    REQUEST_TIMEOUT: float | None = None
    POLL_INTERVAL: float = 5.0

    PROMPT: str | None = None
    COUNT: str | None = None
    MODE: str | None = None
    VIDEO_IMAGE_SOURCE: str | None = None
    DURATION: str | None = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@dataclass(frozen=True, slots=True)
class RunConfig:
    """Everything a single run needs, resolved once at startup."""

    api_key: str
    base_url: str
    request_timeout: float | None
    poll_interval: float
    output_dir: Path

    prompt: str | None = None
    count: str | None = None
    mode: str | None = None
    video_image_source: str | None = None
    duration: str | None = None


def load_config(
    env_file: str | Path | None = ".env",
    *,
    cwd: Path | None = None,
) -> RunConfig:
    """Build a :class:`RunConfig` from the process environment.

    Raises
    ------
    MissingApiKeyError
        When ``XAI_API_KEY`` is unset or blank.
    ConfigurationError
        When a numeric setting cannot be parsed.
    """
    try:
        settings = Settings(_env_file=env_file)
    except ValidationError as exc:
        raise ConfigurationError(
            f"Invalid configuration: {exc.errors()[0]['msg']}",
            hint="Check REQUEST_TIMEOUT and POLL_INTERVAL in your environment or .env.",
        ) from exc

    api_key = (settings.XAI_API_KEY or "").strip()
    if not api_key:
        raise MissingApiKeyError(
            "XAI_API_KEY not found in environment or .env",
            hint="Create a .env file containing XAI_API_KEY=<your key>.",
        )

    base_dir = cwd if cwd is not None else Path.cwd()
    return RunConfig(
        api_key=api_key,
        base_url=settings.XAI_BASE_URL.rstrip("/"),
        request_timeout=settings.REQUEST_TIMEOUT,
        poll_interval=settings.POLL_INTERVAL,
        output_dir=base_dir / OUTPUT_DIR_NAME,
        prompt=settings.PROMPT,
        count=settings.COUNT,
        mode=settings.MODE,
        video_image_source=settings.VIDEO_IMAGE_SOURCE,
        duration=settings.DURATION,
    )
