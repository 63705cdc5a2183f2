"""Generate and edit README files with a generative-language model.

This package builds prompts from a free-text project plan and a set of
generation options, sends them to the Generative Language API, cleans up the
returned markdown, and supports section-level editing before regenerating.
It exposes the CLI entry points used by the ``readme-forge`` console script.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from readme_forge import main
>>> main()  # doctest: +SKIP
>>> from readme_forge import app
>>> "readme-forge" in app.name
True
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
