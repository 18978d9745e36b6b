"""Media-type sniffing from leading magic bytes."""

from __future__ import annotations

_SIGNATURES: tuple[tuple[bytes, str], ...] = (
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
)


def detect_media_type(data: bytes) -> str | None:
    """Return the image MIME type of *data*, or ``None`` if unrecognised."""
    for signature, media_type in _SIGNATURES:
        if data.startswith(signature):
            return media_type
    # RIFF container: bytes 8..12 carry the form type.
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    return None
