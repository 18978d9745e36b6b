"""Input resolution and normalisation.

Each field of a run comes either from an environment value or, when
that is absent or empty, from an interactive prompt.  :func:`resolve`
applies that rule uniformly; the ``parse_*`` helpers turn raw text into
typed values and never raise.
"""

from __future__ import annotations

import os
import re
from collections.abc import Callable
from pathlib import Path
from typing import TypeVar

from grokgen.core.models import (
    DEFAULT_COUNT,
    DEFAULT_DURATION,
    MAX_DURATION,
    MIN_DURATION,
    Mode,
)

T = TypeVar("T")

Ask = Callable[[str], str]
"""Callable that shows a question and returns the user's raw answer."""

_VIDEO_ALIASES: frozenset[str] = frozenset({"v", "video"})
_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


def resolve(
    env_value: str | None,
    ask: Ask,
    prompt_text: str,
    parse: Callable[[str], T],
) -> T:
    """Return *parse* applied to *env_value*, or to the user's answer.

    An unset or empty environment value falls through to *ask*; a
    whitespace-only value does not, matching a plain truthiness check.
    """
    raw = env_value if env_value else ask(prompt_text)
    return parse(raw or "")


def parse_mode(text: str) -> Mode:
    if text.strip().lower() in _VIDEO_ALIASES:
        return Mode.VIDEO
    return Mode.IMAGE


def parse_prompt(text: str) -> str:
    return text.strip()


def _leading_int(text: str) -> int | None:
    """Return the signed integer that *text* starts with, if any."""
    match = _LEADING_INT.match(text)
    if match is None:
        return None
    return int(match.group(1))


def parse_count(text: str) -> int:
    """Parse an image count from the leading integer of *text*.

    ``"3 images"`` gives ``3`` and ``"2.5"`` gives ``2``.  Blank input,
    input without a leading integer, and zero all give ``1``; negative
    values are passed through unchanged.
    """
    return _leading_int(text) or DEFAULT_COUNT


def parse_duration(text: str) -> int:
    """Parse a video duration in seconds from the leading integer of *text*.

    Anything outside ``MIN_DURATION..MAX_DURATION`` is reset to
    ``DEFAULT_DURATION``; it is not clamped to the nearest bound.
    """
    duration = _leading_int(text)
    if duration is not None and MIN_DURATION <= duration <= MAX_DURATION:
        return duration
    return DEFAULT_DURATION


def parse_source_path(text: str) -> Path | None:
    stripped = text.strip()
    if not stripped:
        return None
    return Path(stripped).expanduser()


def is_readable_file(path: Path | None) -> bool:
    """Return ``True`` if *path* is an existing regular file we may read."""
    if path is None:
        return False
    return path.is_file() and os.access(path, os.R_OK)
