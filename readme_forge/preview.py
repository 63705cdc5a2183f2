"""Editor page rendering pipeline.

This module turns a :class:`~readme_forge.session.ReadmeSession` into the
static editor page: the rendered README, its raw markdown, and one block per
section carrying the section id, its rendered HTML, its pending-edit state and
the hover actions (edit, center, align left, remove, restore). Styling is left
to whatever stylesheet the page is served with.

Typical usage mirrors the CLI:

>>> from pathlib import Path
>>> from readme_forge.preview import EditorPageBuilder
>>> builder = EditorPageBuilder(session)  # doctest: +SKIP
>>> builder.run(Path("readme-preview.html"))  # doctest: +SKIP
PosixPath('readme-preview.html')

The builder expects templates under ``readme_forge/templates`` unless a custom
directory is provided. It relies on Jinja2 with autoescape enabled and writes
UTF-8 encoded files.
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from .markdown_parser import section_labels
from .renderer import HtmlContentRenderer

if typ.TYPE_CHECKING:
    from .changes import AnimationConfig, BadgeConfig
    from .session import ReadmeSession


@dc.dataclass(slots=True)
class SectionView:
    """Structured data passed to the section block template.

    Attributes
    ----------
    id : str
        Stable section id used by the hover actions.
    label : str
        Display label, unique even when headings repeat.
    type : str
        ``title``, ``section`` or ``intro``.
    start_line : int
        0-based line where the section starts in the document.
    markdown : str
        Raw section markdown, used to prefill the edit box.
    html : Markup
        Rendered section HTML.
    removed, centered : bool
        Pending removal and centering state.
    text_edit : str | None
        Pending replacement text, if any.
    badges, animation
        Pending badge and animation requests, if any.
    """

    id: str
    label: str
    type: str
    start_line: int
    markdown: str
    html: Markup
    removed: bool
    centered: bool
    text_edit: str | None
    badges: BadgeConfig | None
    animation: AnimationConfig | None


class EditorPageBuilder:
    """Render the click-to-edit page for a session's current document."""

    def __init__(
        self,
        session: ReadmeSession,
        *,
        templates_dir: Path | None = None,
        pygments_style: str = "monokai",
    ) -> None:
        """Initialize the builder and Jinja environment.

        Parameters
        ----------
        session : ReadmeSession
            Session whose document and pending edits are rendered.
        templates_dir : Path, optional
            Directory containing Jinja templates. Defaults to
            ``readme_forge/templates``.
        pygments_style : str, optional
            Pygments style for code blocks. Defaults to ``"monokai"``.
        """
        self.session = session
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.renderer = HtmlContentRenderer(pygments_style)
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("editor_page.jinja")

    def section_views(self) -> list[SectionView]:
        """Return one view per section of the current document."""
        sections = self.session.sections
        labels = section_labels(sections)
        changes = self.session.changes
        return [
            SectionView(
                id=section.id,
                label=labels[section.id],
                type=section.type,
                start_line=section.start_line,
                markdown=section.content,
                html=Markup(self.renderer.markdown(section.content)),  # noqa: S704 - renderer output
                removed=changes.is_removed(section.id),
                centered=changes.is_centered(section.id),
                text_edit=changes.text_edits.get(section.id),
                badges=changes.badge_updates.get(section.id),
                animation=changes.animation_updates.get(section.id),
            )
            for section in sections
        ]

    def render(self) -> str:
        """Return the editor page HTML, always ending with a newline."""
        session = self.session
        context = {
            "sections": self.section_views(),
            "document": session.document,
            "document_html": Markup(self.renderer.markdown(session.document)),  # noqa: S704 - renderer output
            "pending_instructions": (
                None if session.changes.is_empty else session.pending_instructions()
            ),
            "error": session.error,
            "edit_mode": session.edit_mode,
            "pygments_css": self.renderer.stylesheet,
            "generated_at": dt.datetime.now(dt.UTC),
        }
        html = self.template.render(**context)
        if not html.endswith("\n"):
            html += "\n"
        return html

    def run(self, output_path: Path) -> Path:
        """Render and write the editor page, returning the output path."""
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.render(), encoding="utf-8")
        return output_path


__all__ = ["EditorPageBuilder", "SectionView"]
