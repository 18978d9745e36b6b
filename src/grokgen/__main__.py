"""Allow ``python -m grokgen`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m grokgen`` behaves identically to the ``grokgen`` console
script.
"""

from __future__ import annotations

from grokgen.cli.app import cli

if __name__ == "__main__":
    cli()
