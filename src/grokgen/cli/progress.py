"""Rich progress display for generation and video download.

* :func:`generation_status` shows a spinner while the API works.
* :class:`DownloadProgress` is a ``(downloaded, total)`` callback that
  drives a Rich :class:`~rich.progress.Progress` bar; it is passed to
  the media fetcher through the generation service.

Both degrade to no-ops when Rich is not installed.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager, nullcontext
from typing import Any

from grokgen.cli.console import get_rich_console
from grokgen.exceptions import EnvironmentError


@contextmanager
def generation_status(message: str) -> Iterator[None]:
    """Show a spinner with *message* for the duration of the block."""
    try:
        status: Any = get_rich_console().status(message, spinner="dots")
    except EnvironmentError:
        status = nullcontext()
    with status:
        yield


class DownloadProgress:
    """Callable download-progress adapter for Rich.

    Usage::

        with DownloadProgress("cat.mp4") as progress:
            data = service.resolve_video(result, progress_callback=progress)
    """

    def __init__(self, description: str) -> None:
        self._description: str = _shorten(description)
        self._progress: Any = None
        self._task_id: Any = None
        self._started: bool = False

        try:
            from rich.progress import (
                BarColumn,
                DownloadColumn,
                Progress,
                TextColumn,
                TransferSpeedColumn,
            )
        except ModuleNotFoundError:
            return

        self._progress = Progress(
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            DownloadColumn(),
            TransferSpeedColumn(),
            console=get_rich_console(),
            transient=False,
        )

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> DownloadProgress:
        self.start()
        return self

    def __exit__(self, *_args: object) -> None:
        self.stop()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        if self._progress is not None and not self._started:
            self._progress.start()
            self._started = True

    def stop(self) -> None:
        """Stop the display (idempotent)."""
        if self._started:
            self._progress.stop()
            self._started = False

    # ------------------------------------------------------------------
    # Callback
    # ------------------------------------------------------------------

    def __call__(self, downloaded: int, total: int | None) -> None:
        if not self._started:
            return

        if self._task_id is None:
            self._task_id = self._progress.add_task(self._description, total=total)

        if total is not None:
            self._progress.update(self._task_id, total=total, completed=downloaded)
        else:
            self._progress.update(self._task_id, completed=downloaded)


def _shorten(name: str, limit: int = 50) -> str:
    if len(name) > limit:
        return name[: limit - 3] + "..."
    return name
