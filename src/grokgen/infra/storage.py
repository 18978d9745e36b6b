"""Filesystem access for source images and generated outputs.

Every ``OSError`` is re-raised as :class:`~grokgen.exceptions.StorageError`
with the offending path in the message.
"""

from __future__ import annotations

from pathlib import Path

from grokgen.exceptions import StorageError


class OutputStorage:
    """Writes generated media into a single output directory.

    Existing files with the same name are overwritten; no versioning is
    attempted.
    """

    def __init__(self, directory: Path) -> None:
        self.directory: Path = directory

    def ensure_directory(self) -> Path:
        """Create the output directory and its parents (idempotent)."""
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(
                f"Cannot create output directory {self.directory}: {exc.strerror or exc}",
            ) from exc
        return self.directory

    def write(self, filename: str, data: bytes) -> Path:
        """Write *data* to ``<directory>/<filename>`` and return the path."""
        path = self.directory / filename
        try:
            path.write_bytes(data)
        except OSError as exc:
            raise StorageError(
                f"Cannot write {path}: {exc.strerror or exc}",
            ) from exc
        return path

    @staticmethod
    def read_source(path: Path) -> bytes:
        """Read a source image fully into memory."""
        try:
            return path.read_bytes()
        except OSError as exc:
            raise StorageError(
                f"Cannot read source image {path}: {exc.strerror or exc}",
            ) from exc
