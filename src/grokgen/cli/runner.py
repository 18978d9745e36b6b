"""Single-pass run orchestrator.

One invocation walks ``COLLECT_INPUT → GENERATE → WRITE_OUTPUTS`` once:

1. Resolve mode and prompt (environment first, interactive fallback).
2. Abort cleanly on an empty prompt, or in video mode on a missing or
   unreadable source image; no API call is made in either case.
3. Make exactly one generation request (plus, for a video delivered by
   URL, one download).
4. Write every result into the output directory and print a summary.

Generation and storage failures are reported here and the run still
ends with :data:`~grokgen.cli.exit_codes.SUCCESS`; nothing is retried.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path

from grokgen.cli import exit_codes
from grokgen.cli.console import console, escape, out
from grokgen.cli.progress import DownloadProgress, generation_status
from grokgen.cli.prompts import (
    COUNT_QUESTION,
    DURATION_QUESTION,
    MODE_QUESTION,
    PROMPT_QUESTION,
    SOURCE_QUESTION,
    VIDEO_PROMPT_QUESTION,
    ask_text,
)
from grokgen.config import RunConfig
from grokgen.core.generation_service import GenerationService
from grokgen.core.inputs import (
    Ask,
    is_readable_file,
    parse_count,
    parse_duration,
    parse_mode,
    parse_prompt,
    parse_source_path,
    resolve,
)
from grokgen.core.models import DEFAULT_DURATION, ImageRequest, Mode, VideoRequest
from grokgen.core.naming import format_timestamp, image_filename, video_filename
from grokgen.exceptions import (
    ApiResponseError,
    GenerationError,
    GrokGenError,
    JobFailedError,
    ResponseValidationError,
    StorageError,
    UnknownGenerationError,
)
from grokgen.infra.media_fetcher import HttpMediaFetcher
from grokgen.infra.storage import OutputStorage
from grokgen.infra.xai_provider import XaiGenerationProvider

ServiceFactory = Callable[[RunConfig], GenerationService]

PREVIEW_LENGTH: int = 50


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def build_service(config: RunConfig) -> GenerationService:
    """Wire the xAI provider and the download fetcher from *config*."""
    provider = XaiGenerationProvider(
        config.api_key,
        base_url=config.base_url,
        timeout=config.request_timeout,
        poll_interval=config.poll_interval,
    )
    fetcher = HttpMediaFetcher(timeout=config.request_timeout)
    return GenerationService(provider, fetcher)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def run(
    config: RunConfig,
    *,
    ask: Ask = ask_text,
    service_factory: ServiceFactory = build_service,
    now: Callable[[], datetime] = _utcnow,
) -> int:
    """Execute one generation run and return the process exit code."""
    mode = resolve(config.mode, ask, MODE_QUESTION, parse_mode)
    question = VIDEO_PROMPT_QUESTION if mode is Mode.VIDEO else PROMPT_QUESTION
    prompt = resolve(config.prompt, ask, question, parse_prompt)

    if not prompt:
        out.print("No prompt entered. Exiting.")
        return exit_codes.SUCCESS

    storage = OutputStorage(config.output_dir)

    if mode is Mode.IMAGE:
        count = resolve(config.count, ask, COUNT_QUESTION, parse_count)
        image_request = ImageRequest(prompt=prompt, count=count)
        return _execute(
            config,
            service_factory,
            lambda service: _generate_images(service, image_request, storage, now),
        )

    source = resolve(config.video_image_source, ask, SOURCE_QUESTION, parse_source_path)
    if source is None or not is_readable_file(source):
        out.print(f"Source image not found or unreadable: {escape(source or '')}. Exiting.")
        return exit_codes.SUCCESS

    duration = resolve(
        config.duration,
        ask,
        DURATION_QUESTION.format(default=DEFAULT_DURATION),
        parse_duration,
    )
    video_request = VideoRequest(prompt=prompt, source_path=source, duration=duration)
    return _execute(
        config,
        service_factory,
        lambda service: _generate_video(service, video_request, storage),
    )


def _execute(
    config: RunConfig,
    service_factory: ServiceFactory,
    action: Callable[[GenerationService], object],
) -> int:
    service = service_factory(config)
    try:
        action(service)
    except (GenerationError, StorageError) as exc:
        report_failure(exc)
    finally:
        service.close()
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Modes
# ---------------------------------------------------------------------------

def _generate_images(
    service: GenerationService,
    request: ImageRequest,
    storage: OutputStorage,
    now: Callable[[], datetime],
) -> list[Path]:
    out.print(
        f"\nGenerating {request.count} image(s) with prompt: "
        f'"{escape(request.prompt)}" ...'
    )
    with generation_status("Waiting for xAI..."):
        images = service.generate_images(request)

    storage.ensure_directory()
    timestamp = format_timestamp(now())

    written: list[Path] = []
    for index, image in enumerate(images, start=1):
        path = storage.write(image_filename(timestamp, index, image.media_type), image.data)
        written.append(path)
        out.print(f"[green]Saved:[/green] {escape(path)}")
        out.print(f"   (base64 preview snippet: {image.base64[:PREVIEW_LENGTH]}...)")

    out.print(
        f"\n[bold green]Done![/bold green] {len(written)} image(s) saved to: "
        f"{escape(storage.directory)}"
    )
    return written


def _generate_video(
    service: GenerationService,
    request: VideoRequest,
    storage: OutputStorage,
) -> Path:
    out.print(
        f"\nGenerating a {request.duration}s video from {escape(request.source_path.name)} "
        f'with prompt: "{escape(request.prompt)}" ...'
    )
    image = storage.read_source(request.source_path)
    filename = video_filename(request.source_path)

    with generation_status("Waiting for xAI (video jobs take a while)..."):
        result = service.request_video(request, image)
    with DownloadProgress(filename) as progress:
        data = service.resolve_video(result, progress_callback=progress)

    storage.ensure_directory()
    path = storage.write(filename, data)
    out.print(f"[green]Saved:[/green] {escape(path)}")
    out.print(
        f"\n[bold green]Done![/bold green] 1 video(s) saved to: {escape(storage.directory)}"
    )
    return path


# ---------------------------------------------------------------------------
# Failure reporting
# ---------------------------------------------------------------------------

def report_failure(exc: GrokGenError) -> None:
    """Print everything known about a failed run to stderr."""
    label = "Saving output failed:" if isinstance(exc, StorageError) else "Generation failed:"
    console.print(f"[bold red]{label}[/bold red] {escape(exc)}")

    if isinstance(exc, ApiResponseError):
        console.print(f"Status: {exc.status}")
        if exc.status_text:
            console.print(f"Status text: {escape(exc.status_text)}")
        if exc.headers:
            console.print(f"Headers: {escape(exc.headers)}")
        if exc.body:
            console.print(f"Response details: {escape(exc.body)}")
    elif isinstance(exc, ResponseValidationError):
        console.print(f"Field: {escape(exc.field)}")
    elif isinstance(exc, JobFailedError):
        console.print(f"Request id: {escape(exc.request_id)}")
        console.print(f"Job status: {escape(exc.status)}")
    elif isinstance(exc, UnknownGenerationError):
        console.print(f"Cause: {type(exc.raw).__name__}")

    if exc.hint:
        console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")
