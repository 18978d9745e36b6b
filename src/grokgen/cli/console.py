"""CLI console helpers with optional Rich support.

Two proxies are exported: :data:`out` writes run progress and results
to stdout, :data:`console` writes errors and diagnostics to stderr.
Rich is imported lazily so that ``--help`` and ``--version`` keep
working when it is not installed.
"""

from __future__ import annotations

import re
import sys
from typing import Any, TextIO

from grokgen.exceptions import EnvironmentError

_MARKUP_TAG = re.compile(r"(?<!\\)\[/?[a-z][a-z0-9 ._#-]*\]")


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console(*, stderr: bool = True) -> Any:
	"""Create a Rich console instance targeting stderr (or stdout)."""
	console_class = _load_rich_console_class()
	return console_class(stderr=stderr)


def escape(text: object) -> str:
	"""Escape Rich markup in dynamic text such as prompts, paths or bodies."""
	try:
		from rich.markup import escape as rich_escape
	except ModuleNotFoundError:
		return str(text).replace("[", "\\[")
	return rich_escape(str(text))


def strip_markup(text: str) -> str:
	"""Drop Rich style tags for plain-text output."""
	return _MARKUP_TAG.sub("", text).replace("\\[", "[")


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def __init__(self, *, stderr: bool) -> None:
		self._stderr: bool = stderr

	def _stream(self) -> TextIO:
		return sys.stderr if self._stderr else sys.stdout

	def print(self, *objects: object) -> None:
		"""Render with Rich when available, else plain print."""
		try:
			rich_console = get_rich_console(stderr=self._stderr)
		except EnvironmentError:
			plain = [strip_markup(obj) if isinstance(obj, str) else obj for obj in objects]
			print(*plain, file=self._stream())
			return
		rich_console.print(*objects, soft_wrap=True)


console = _ConsoleProxy(stderr=True)
out = _ConsoleProxy(stderr=False)
