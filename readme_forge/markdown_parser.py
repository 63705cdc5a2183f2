r"""Split generated README markdown into heading-delimited sections.

This module powers the click-to-edit view by cutting the current document into
ordered sections, one per heading line, plus an optional leading intro block.
Sections are recomputed from the live text whenever they are needed; nothing
here is cached or patched incrementally.

Example
-------
>>> from readme_forge.markdown_parser import parse_sections
>>> sections = parse_sections("# Title\nBody\n## Section A\nContent A")
>>> [(section.type, section.title) for section in sections]
[('title', 'Title'), ('section', 'Section A')]
"""

from __future__ import annotations

import collections
import dataclasses as dc
import re
import typing as typ

from .errors import UnknownSectionError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

HEADING_PREFIX_PATTERN = re.compile(r"^#+\s*")
INTRO_ID = "intro"
INTRO_TITLE = "Introduction"

SectionType = typ.Literal["title", "section", "intro"]


@dc.dataclass(slots=True)
class Section:
    """Heading-delimited span of the document.

    Attributes
    ----------
    id : str
        Position-derived identifier, ``intro`` or ``section-<n>`` where ``n``
        counts the sections emitted before this one.
    title : str
        Heading text with the leading ``#`` markers removed.
    full_title : str
        The heading line as written; empty for the intro section.
    content : str
        Heading line plus body lines, joined with single newlines.
    start_line : int
        0-based index of the section's first line in the source text.
    type : str
        ``title`` for ``#`` headings, ``section`` for deeper headings and
        ``intro`` for text preceding the first heading.
    """

    id: str
    title: str
    full_title: str
    content: str
    start_line: int
    type: SectionType


def _heading_type(line: str) -> SectionType:
    return "section" if line.startswith("##") else "title"


def parse_sections(markdown_text: str) -> list[Section]:
    """Split markdown into ordered Section objects.

    Parameters
    ----------
    markdown_text : str
        Raw markdown content. Any line starting with ``#`` opens a section.

    Returns
    -------
    list[Section]
        Sections in source order. Text before the first heading is collected
        into a single leading ``intro`` section. Returns an empty list for
        empty input.
    """
    if not markdown_text:
        return []

    sections: list[Section] = []
    current: Section | None = None
    for index, line in enumerate(markdown_text.split("\n")):
        if line.startswith("#"):
            if current is not None:
                sections.append(current)
            current = Section(
                id=f"section-{len(sections)}",
                title=HEADING_PREFIX_PATTERN.sub("", line),
                full_title=line,
                content=line,
                start_line=index,
                type=_heading_type(line),
            )
        elif current is not None:
            current.content += "\n" + line
        elif not sections:
            sections.append(
                Section(
                    id=INTRO_ID,
                    title=INTRO_TITLE,
                    full_title="",
                    content=line,
                    start_line=index,
                    type="intro",
                )
            )
        else:
            sections[-1].content += "\n" + line

    if current is not None:
        sections.append(current)
    return sections


def find_section(sections: cabc.Sequence[Section], section_id: str) -> Section:
    """Return the section with ``section_id`` or raise UnknownSectionError."""
    for section in sections:
        if section.id == section_id:
            return section
    msg = f"No section with id '{section_id}' in the current document."
    raise UnknownSectionError(msg)


def section_labels(sections: cabc.Sequence[Section]) -> dict[str, str]:
    """Map section ids to display labels that stay unique for duplicate titles.

    The first occurrence of a title keeps it as-is; later occurrences get an
    ordinal suffix, e.g. ``Usage (2)``.
    """
    seen: collections.Counter[str] = collections.Counter()
    labels: dict[str, str] = {}
    for section in sections:
        seen[section.title] += 1
        occurrence = seen[section.title]
        labels[section.id] = (
            section.title if occurrence == 1 else f"{section.title} ({occurrence})"
        )
    return labels


__all__ = [
    "INTRO_ID",
    "Section",
    "find_section",
    "parse_sections",
    "section_labels",
]
