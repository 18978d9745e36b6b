"""CLI application entry point and command routing for grokgen.

This module is the **sole process-level error boundary**.  It catches
:class:`~grokgen.exceptions.GrokGenError`, ``KeyboardInterrupt`` and
any unexpected ``Exception``, rendering user-friendly messages via Rich
and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — the run itself is in
  :mod:`grokgen.cli.runner`.
* Settings are loaded exactly once, before any other logic; a missing
  ``XAI_API_KEY`` ends the process with exit code 1.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from grokgen.cli import exit_codes
from grokgen.cli.console import console, escape
from grokgen.exceptions import GrokGenError
from grokgen.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    Supported invocations:
    * ``grokgen``          — generate images or a video (interactive)
    * ``grokgen doctor``   — environment diagnostics
    * ``grokgen --version``
    """
    parser = argparse.ArgumentParser(
        prog="grokgen",
        description=(
            "Generate images or an image-to-video clip with xAI Grok Imagine. "
            "Inputs come from PROMPT, MODE, COUNT, VIDEO_IMAGE_SOURCE and "
            "DURATION (environment or .env) or are asked for interactively."
        ),
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "command",
        nargs="?",
        default=None,
        choices=["doctor"],
        help="Optional 'doctor' to run diagnostics instead of generating.",
    )
    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_generate(env_file: str | Path | None) -> int:
    """Load settings, then hand over to the run orchestrator."""
    from grokgen.cli.runner import run
    from grokgen.config import load_config

    config = load_config(env_file)
    return run(config)


def _handle_doctor(env_file: str | Path | None) -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from grokgen.cli.doctor import run_doctor

    return run_doctor(env_file)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None, *, env_file: str | Path | None = ".env") -> int:
    """Run the grokgen CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.
    env_file:
        Dotenv file read alongside the process environment.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command == "doctor":
        return _handle_doctor(env_file)

    return _handle_generate(env_file)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    Wraps :func:`main` and guarantees the process never exits with a raw
    stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except GrokGenError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(exc)}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(exc)}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
