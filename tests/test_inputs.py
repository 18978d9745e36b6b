"""Tests for input resolution and parsing (core/inputs.py).

Coverage:
* Environment-over-prompt precedence.
* Mode normalisation.
* Count fallback rules.
* Duration reset-to-default (not clamp) behaviour.
* Source path readability checks.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from grokgen.core.inputs import (
    is_readable_file,
    parse_count,
    parse_duration,
    parse_mode,
    parse_prompt,
    parse_source_path,
    resolve,
)
from grokgen.core.models import DEFAULT_DURATION, Mode


# ---------------------------------------------------------------------------
# resolve
# ---------------------------------------------------------------------------

class TestResolve:
    def test_env_value_wins_without_asking(self) -> None:
        ask = MagicMock()
        assert resolve("  a fox  ", ask, "Prompt:", parse_prompt) == "a fox"
        ask.assert_not_called()

    def test_missing_env_asks_user(self) -> None:
        ask = MagicMock(return_value=" typed ")
        assert resolve(None, ask, "Prompt:", parse_prompt) == "typed"
        ask.assert_called_once_with("Prompt:")

    def test_empty_env_falls_through_to_prompt(self) -> None:
        ask = MagicMock(return_value="3")
        assert resolve("", ask, "Count:", parse_count) == 3
        ask.assert_called_once()

    def test_whitespace_env_is_used_not_asked(self) -> None:
        ask = MagicMock()
        assert resolve("   ", ask, "Prompt:", parse_prompt) == ""
        ask.assert_not_called()

    def test_empty_answer_goes_through_parser(self) -> None:
        assert resolve(None, lambda _q: "", "Count:", parse_count) == 1


# ---------------------------------------------------------------------------
# Mode
# ---------------------------------------------------------------------------

class TestParseMode:
    @pytest.mark.parametrize("text", ["v", "V", "video", "VIDEO", " Video "])
    def test_video_aliases(self, text: str) -> None:
        assert parse_mode(text) is Mode.VIDEO

    @pytest.mark.parametrize("text", ["", "image", "i", "vid", "movie", "videos"])
    def test_everything_else_is_image(self, text: str) -> None:
        assert parse_mode(text) is Mode.IMAGE


# ---------------------------------------------------------------------------
# Count
# ---------------------------------------------------------------------------

class TestParseCount:
    @pytest.mark.parametrize("text, expected", [("1", 1), ("4", 4), (" 10 ", 10)])
    def test_valid_numbers(self, text: str, expected: int) -> None:
        assert parse_count(text) == expected

    @pytest.mark.parametrize("text", ["", "abc", "two", "x3", "+"])
    def test_non_numeric_falls_back_to_one(self, text: str) -> None:
        assert parse_count(text) == 1

    @pytest.mark.parametrize("text, expected", [("2.5", 2), ("3 images", 3), ("  4x", 4), ("+2", 2)])
    def test_leading_integer_is_used(self, text: str, expected: int) -> None:
        assert parse_count(text) == expected

    def test_zero_falls_back_to_one(self) -> None:
        assert parse_count("0") == 1

    def test_negative_is_not_validated(self) -> None:
        assert parse_count("-2") == -2


# ---------------------------------------------------------------------------
# Duration
# ---------------------------------------------------------------------------

class TestParseDuration:
    @pytest.mark.parametrize("seconds", range(1, 16))
    def test_in_range_values_pass_through(self, seconds: int) -> None:
        assert parse_duration(str(seconds)) == seconds

    @pytest.mark.parametrize("text", ["0", "16", "-1", "100", "", "ten", "s8"])
    def test_out_of_range_resets_to_default(self, text: str) -> None:
        assert parse_duration(text) == DEFAULT_DURATION

    @pytest.mark.parametrize("text, expected", [("8s", 8), ("5.5", 5), (" 12 seconds", 12)])
    def test_leading_integer_is_used(self, text: str, expected: int) -> None:
        assert parse_duration(text) == expected

    def test_out_of_range_leading_integer_resets(self) -> None:
        assert parse_duration("20s") == DEFAULT_DURATION

    def test_above_range_is_not_clamped_to_maximum(self) -> None:
        assert parse_duration("20") != 15

    def test_below_range_is_not_clamped_to_minimum(self) -> None:
        assert parse_duration("0") != 1


# ---------------------------------------------------------------------------
# Source path
# ---------------------------------------------------------------------------

class TestSourcePath:
    def test_blank_is_none(self) -> None:
        assert parse_source_path("   ") is None

    def test_strips_whitespace(self) -> None:
        assert parse_source_path(" /tmp/cat.jpg ") == Path("/tmp/cat.jpg")

    def test_existing_file_is_readable(self, tmp_path: Path) -> None:
        source = tmp_path / "cat.jpg"
        source.write_bytes(b"x")
        assert is_readable_file(source)

    def test_missing_file_is_not_readable(self, tmp_path: Path) -> None:
        assert not is_readable_file(tmp_path / "nope.jpg")

    def test_directory_is_not_readable_file(self, tmp_path: Path) -> None:
        assert not is_readable_file(tmp_path)

    def test_none_is_not_readable(self) -> None:
        assert not is_readable_file(None)

    @pytest.mark.skipif(
        sys.platform == "win32" or (hasattr(os, "geteuid") and os.geteuid() == 0),
        reason="permission bits are not enforced here",
    )
    def test_unreadable_file(self, tmp_path: Path) -> None:
        source = tmp_path / "locked.jpg"
        source.write_bytes(b"x")
        source.chmod(0o000)
        try:
            assert not is_readable_file(source)
        finally:
            source.chmod(0o644)
