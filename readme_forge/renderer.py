"""Render README markdown into HTML for the editor preview."""

from __future__ import annotations

import re

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

# Fences indented inside list items are not recognised by fenced_code.
FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)

MARKDOWN_EXTENSIONS: tuple[str, ...] = (
    "fenced_code",
    "codehilite",
    "tables",
    "sane_lists",
)


class HtmlContentRenderer:
    """Render markdown with highlighted code blocks.

    Raw HTML in the markdown (centering ``<div>`` wrappers, badge and typing
    SVG ``<img>`` tags) passes through untouched, matching how hosted README
    renderers display it.
    """

    def __init__(self, pygments_style: str = "monokai") -> None:
        """Initialize a renderer with the Pygments style for code blocks."""
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def markdown(self, text: str) -> str:
        """Render markdown into HTML using the configured extensions."""
        normalized = FENCED_INDENT_PATTERN.sub(r"\1", text)
        if not normalized.strip():
            return ""
        md = Markdown(
            extensions=list(MARKDOWN_EXTENSIONS),
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.pygments_style,
                }
            },
        )
        return md.convert(normalized)


__all__ = ["HtmlContentRenderer"]
