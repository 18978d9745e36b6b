"""grokgen — prompt-to-image and image-to-video generation via the xAI API.

A single-shot command-line tool with a strict layered architecture.
"""

from grokgen.version import __version__

__all__: list[str] = ["__version__"]
