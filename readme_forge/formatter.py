r"""Selection-scoped inline formatting for the section editor.

Formatting rewrites the selected span of an edit buffer and splices the
replacement back in place, leaving the cursor right after the inserted text.

Example
-------
>>> from readme_forge.formatter import apply_inline_format
>>> result = apply_inline_format("ab cde", 3, 6, "bold")
>>> result.text, result.cursor
('ab **cde**', 10)
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ
from urllib.parse import quote

from ._constants import (
    DEFAULT_ANIMATION_COLOR,
    DEFAULT_INLINE_BADGE_STYLE,
    DEFAULT_LINK_URL,
    SHIELDS_BADGE_TEMPLATE,
    TYPING_SVG_BASE,
)

FormatKind = typ.Literal["bold", "italic", "center", "link", "badge", "animate"]
FORMAT_KINDS: tuple[str, ...] = typ.get_args(FormatKind)
WHITESPACE_RUN = re.compile(r"\s+")


@dc.dataclass(frozen=True, slots=True)
class FormatResult:
    """Buffer contents and cursor position after a formatting splice."""

    text: str
    cursor: int


def format_span(
    text: str,
    kind: str,
    *,
    url: str | None = None,
    style: str | None = None,
    color: str | None = None,
) -> str:
    """Return the replacement markup for ``text`` under ``kind``."""
    match kind:
        case "bold":
            return f"**{text}**"
        case "italic":
            return f"*{text}*"
        case "center":
            return f'<div align="center">{text}</div>'
        case "link":
            return f"[{text}]({url or DEFAULT_LINK_URL})"
        case "badge":
            label = WHITESPACE_RUN.sub("_", text)
            badge_url = SHIELDS_BADGE_TEMPLATE.format(
                label=label, style=style or DEFAULT_INLINE_BADGE_STYLE
            )
            return f"![{text}]({badge_url})"
        case "animate":
            lines = quote(WHITESPACE_RUN.sub("+", text), safe="")
            return (
                f'<img src="{TYPING_SVG_BASE}?font=Fira+Code&pause=1000'
                f"&color={color or DEFAULT_ANIMATION_COLOR}&center=true&vCenter=true"
                f'&width=435&lines={lines}" alt="Typing Animation" />'
            )
        case _:
            msg = f"Unknown format kind {kind!r}; expected one of {', '.join(FORMAT_KINDS)}."
            raise ValueError(msg)


def apply_inline_format(
    buffer: str,
    start: int,
    end: int,
    kind: str,
    *,
    url: str | None = None,
    style: str | None = None,
    color: str | None = None,
) -> FormatResult:
    """Format ``buffer[start:end]`` and splice the result into ``buffer``.

    Parameters
    ----------
    buffer : str
        Full text being edited.
    start, end : int
        Half-open selection ``[start, end)``.
    kind : str
        One of ``bold``, ``italic``, ``center``, ``link``, ``badge`` or
        ``animate``.
    url, style, color : str, optional
        Link target, badge style and animation colour; defaults apply when
        omitted.

    Returns
    -------
    FormatResult
        The spliced buffer and the cursor offset immediately after the
        replacement. An empty selection returns the buffer unchanged with the
        cursor at ``start``.

    Raises
    ------
    ValueError
        If the selection falls outside the buffer or ``kind`` is unknown.
    """
    if not 0 <= start <= end <= len(buffer):
        msg = f"Selection [{start}, {end}) is outside a buffer of length {len(buffer)}."
        raise ValueError(msg)
    if kind not in FORMAT_KINDS:
        msg = f"Unknown format kind {kind!r}; expected one of {', '.join(FORMAT_KINDS)}."
        raise ValueError(msg)
    if start == end:
        return FormatResult(text=buffer, cursor=start)

    replacement = format_span(
        buffer[start:end], kind, url=url, style=style, color=color
    )
    return FormatResult(
        text=buffer[:start] + replacement + buffer[end:],
        cursor=start + len(replacement),
    )


@dc.dataclass(slots=True)
class EditBuffer:
    """Editable section text with a single active selection."""

    text: str
    selection: tuple[int, int] | None = None
    cursor: int = 0

    def select(self, start: int, end: int) -> None:
        """Record ``[start, end)`` as the active selection."""
        if not 0 <= start <= end <= len(self.text):
            msg = f"Selection [{start}, {end}) is outside a buffer of length {len(self.text)}."
            raise ValueError(msg)
        self.selection = (start, end) if start < end else None

    def apply(self, kind: str, **format_options: str | None) -> bool:
        """Format the active selection; return False when nothing is selected.

        The selection is cleared afterwards, so each call formats one span.
        """
        if self.selection is None:
            return False
        start, end = self.selection
        result = apply_inline_format(self.text, start, end, kind, **format_options)
        self.text = result.text
        self.cursor = result.cursor
        self.selection = None
        return True


__all__ = [
    "FORMAT_KINDS",
    "EditBuffer",
    "FormatResult",
    "apply_inline_format",
    "format_span",
]
