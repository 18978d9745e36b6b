"""Wire schemas for the xAI image and video generation endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ImageGenerationRequest(BaseModel):
    model: str = Field(...)
    prompt: str = Field(...)
    n: int = Field(...)
    aspect_ratio: str = Field(...)
    response_format: str = Field("b64_json")


class ImageResponseObject(BaseModel):
    b64_json: str | None = Field(None)
    url: str | None = Field(None)
    revised_prompt: str | None = Field(None)


class ImageGenerationResponse(BaseModel):
    data: list[ImageResponseObject] = Field(...)


class InputUrlObject(BaseModel):
    url: str = Field(...)


class VideoGenerationRequest(BaseModel):
    model: str = Field(...)
    prompt: str = Field(...)
    image: InputUrlObject = Field(...)
    duration: int = Field(...)
    aspect_ratio: str = Field(...)


class VideoGenerationResponse(BaseModel):
    request_id: str = Field(...)


class VideoResponseObject(BaseModel):
    url: str | None = Field(None)
    duration: int | None = Field(None)


class VideoStatusResponse(BaseModel):
    status: str | None = Field(None)
    video: VideoResponseObject | None = Field(None)
    model: str | None = Field(None)
