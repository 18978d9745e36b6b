"""Interactive line-based questions for the CLI layer.

Only used for fields that the environment leaves unset.  questionary
is imported lazily so a fully environment-driven run never needs it.
"""

from __future__ import annotations

from typing import Any

from grokgen.exceptions import EnvironmentError

PROMPT_QUESTION: str = "Enter your image prompt:"
VIDEO_PROMPT_QUESTION: str = "Enter your video prompt:"
MODE_QUESTION: str = "Generate an image or a video? (image/video, default image):"
COUNT_QUESTION: str = "How many images? (default 1):"
SOURCE_QUESTION: str = "Path to the source image:"
DURATION_QUESTION: str = "Video duration in seconds? (1-15, default {default}):"


def _import_questionary() -> Any:
    """Import questionary lazily for interactive input."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
            hint="Or set PROMPT, MODE, COUNT, VIDEO_IMAGE_SOURCE and DURATION "
            "in the environment to skip interactive input.",
        ) from exc
    return questionary


def ask_text(question: str) -> str:
    """Ask *question* on the terminal and return the raw answer.

    Raises
    ------
    KeyboardInterrupt
        If the user presses Ctrl+C.
    EnvironmentError
        If questionary is not installed.
    """
    questionary = _import_questionary()
    answer: str | None = questionary.text(question).unsafe_ask()
    return answer or ""
