"""xAI-backed implementation of :class:`~grokgen.core.protocols.GenerationProvider`.

This module is the **only** place in the codebase that talks to the xAI
REST API.  httpx and pydantic exceptions are caught here and re-raised
as typed :class:`~grokgen.exceptions.GenerationError` subclasses —
nothing raw escapes the infrastructure boundary.
"""

from __future__ import annotations

import base64
import binascii
import time
from collections.abc import Callable
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from grokgen.core.media import detect_media_type
from grokgen.core.models import GeneratedImage, VideoResult
from grokgen.exceptions import JobFailedError, ResponseValidationError
from grokgen.infra.http_errors import network_error, raise_for_status
from grokgen.infra.xai_schemas import (
    ImageGenerationRequest,
    ImageGenerationResponse,
    InputUrlObject,
    VideoGenerationRequest,
    VideoGenerationResponse,
    VideoStatusResponse,
)

ModelT = TypeVar("ModelT", bound=BaseModel)

DEFAULT_SOURCE_MEDIA_TYPE: str = "image/jpeg"

_DONE_STATUSES: frozenset[str] = frozenset({"done", "completed", "succeeded"})
_FAILED_STATUSES: frozenset[str] = frozenset({"expired", "failed", "error"})


class XaiGenerationProvider:
    """Concrete :class:`GenerationProvider` backed by the xAI REST API.

    Usage::

        provider = XaiGenerationProvider(api_key="xai-...")
        images = provider.generate_images("grok-imagine-image", "a fox", 2, "9:16")
        provider.close()

    Video generation is an asynchronous job on the API side: the submit
    call returns a ``request_id`` whose status is polled until it leaves
    the pending state.  Each poll is part of the one job, not a retry.
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = "https://api.x.ai/v1",
        timeout: float | None = None,
        poll_interval: float = 5.0,
        client: httpx.Client | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._client: httpx.Client = client or httpx.Client(
            base_url=base_url,
            timeout=timeout,
            headers={"Authorization": f"Bearer {api_key}"},
        )
        self._poll_interval: float = poll_interval
        self._sleep: Callable[[float], None] = sleep

    def close(self) -> None:
        self._client.close()

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def generate_images(
        self,
        model: str,
        prompt: str,
        count: int,
        aspect_ratio: str,
    ) -> list[GeneratedImage]:
        """Generate *count* images and return them decoded, in API order."""
        payload = ImageGenerationRequest(
            model=model,
            prompt=prompt,
            n=count,
            aspect_ratio=aspect_ratio,
        )
        body = self._request(
            "POST",
            "/images/generations",
            what="Image generation",
            json=payload.model_dump(),
        )
        parsed = _parse(ImageGenerationResponse, body)

        images: list[GeneratedImage] = []
        for index, item in enumerate(parsed.data):
            if item.b64_json:
                data = _decode_b64(item.b64_json, field=f"data.{index}.b64_json")
            elif item.url:
                data = self._download(item.url)
            else:
                raise ResponseValidationError(
                    f"Image {index + 1} carried neither b64_json nor url.",
                    field=f"data.{index}",
                )
            images.append(GeneratedImage(data=data, media_type=detect_media_type(data)))
        return images

    def generate_video(
        self,
        model: str,
        prompt: str,
        image: bytes,
        duration: int,
        aspect_ratio: str,
    ) -> VideoResult:
        """Submit an image-to-video job and wait for it to finish."""
        payload = VideoGenerationRequest(
            model=model,
            prompt=prompt,
            image=InputUrlObject(url=_data_uri(image)),
            duration=duration,
            aspect_ratio=aspect_ratio,
        )
        body = self._request(
            "POST",
            "/videos/generations",
            what="Video generation",
            json=payload.model_dump(),
        )
        request_id = _parse(VideoGenerationResponse, body).request_id

        while True:
            status_body = self._request("GET", f"/videos/{request_id}", what="Video status check")
            status = _parse(VideoStatusResponse, status_body)
            state = (status.status or "").lower()

            if state in _DONE_STATUSES or (not state and status.video is not None):
                url = status.video.url if status.video is not None else None
                return VideoResult(url=url)
            if state in _FAILED_STATUSES:
                raise JobFailedError(
                    f"Video job {request_id} ended with status '{state}'.",
                    request_id=request_id,
                    status=state,
                    hint="Generated videos expire; submit a new request.",
                )
            self._sleep(self._poll_interval)

    # ------------------------------------------------------------------
    # HTTP helpers
    # ------------------------------------------------------------------

    def _request(self, method: str, path: str, *, what: str, **kwargs: Any) -> Any:
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.RequestError as exc:
            raise network_error(exc, what=what) from exc
        raise_for_status(response, what=what)
        try:
            return response.json()
        except ValueError as exc:
            raise ResponseValidationError(
                f"{what} returned a non-JSON body.",
                field="body",
            ) from exc

    def _download(self, url: str) -> bytes:
        # Hosted outside the API; never forward the bearer token.
        request = self._client.build_request("GET", url)
        request.headers.pop("Authorization", None)
        try:
            response = self._client.send(request)
        except httpx.RequestError as exc:
            raise network_error(exc, what="Image download") from exc
        raise_for_status(response, what="Image download")
        return response.content


# ---------------------------------------------------------------------------
# Utility
# ---------------------------------------------------------------------------

def _parse(model: type[ModelT], body: Any) -> ModelT:
    """Validate *body* against *model* or raise ``ResponseValidationError``."""
    try:
        return model.model_validate(body)
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or model.__name__
        raise ResponseValidationError(
            f"Unexpected response shape at '{field}': {first['msg']}",
            field=field,
        ) from exc


def _decode_b64(value: str, *, field: str) -> bytes:
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ResponseValidationError(
            f"Field '{field}' is not valid base64.",
            field=field,
        ) from exc


def _data_uri(data: bytes) -> str:
    media_type = detect_media_type(data) or DEFAULT_SOURCE_MEDIA_TYPE
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{media_type};base64,{encoded}"
