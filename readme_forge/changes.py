"""Ledger of pending section edits and its change-instruction rendering.

Edits are recorded against stable section ids rather than heading text, so a
renamed or duplicated heading cannot orphan or merge another section's
changes. When the user applies the edits, the ledger is turned into
natural-language change instructions and folded into an update prompt for the
generation endpoint.

Example
-------
>>> from readme_forge.changes import EditChanges, render_change_instructions
>>> from readme_forge.markdown_parser import parse_sections
>>> sections = parse_sections("# Demo\\n## Usage\\nRun it")
>>> changes = EditChanges()
>>> changes.remove("section-1")
>>> render_change_instructions(changes, sections)
'REMOVE these sections: Usage'
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from ._constants import (
    DEFAULT_ANIMATION_COLOR,
    DEFAULT_INLINE_BADGE_STYLE,
    TYPING_SVG_BASE,
)
from .markdown_parser import section_labels

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .markdown_parser import Section

NO_CHANGES_INSTRUCTION = (
    "No specific changes requested - just regenerate with current options"
)


@dc.dataclass(frozen=True, slots=True)
class BadgeConfig:
    """Badge request for a single section."""

    enabled: bool = False
    style: str = DEFAULT_INLINE_BADGE_STYLE


@dc.dataclass(frozen=True, slots=True)
class AnimationConfig:
    """Animated-heading request for a single section."""

    enabled: bool = False
    color: str = DEFAULT_ANIMATION_COLOR


@dc.dataclass(slots=True)
class EditChanges:
    """Pending user edits keyed by section id.

    Attributes
    ----------
    removed_sections : dict[str, None]
        Ordered set of ids marked for removal.
    centered_sections : dict[str, None]
        Ordered set of ids to wrap in a centering block.
    text_edits : dict[str, str]
        Replacement body per id; the last write wins.
    badge_updates : dict[str, BadgeConfig]
        Badge requests per id; the last write wins.
    animation_updates : dict[str, AnimationConfig]
        Animated-heading requests per id; the last write wins.
    """

    removed_sections: dict[str, None] = dc.field(default_factory=dict)
    centered_sections: dict[str, None] = dc.field(default_factory=dict)
    text_edits: dict[str, str] = dc.field(default_factory=dict)
    badge_updates: dict[str, BadgeConfig] = dc.field(default_factory=dict)
    animation_updates: dict[str, AnimationConfig] = dc.field(default_factory=dict)

    def remove(self, section_id: str) -> None:
        self.removed_sections[section_id] = None

    def restore(self, section_id: str) -> None:
        self.removed_sections.pop(section_id, None)

    def toggle_center(self, section_id: str) -> None:
        if section_id in self.centered_sections:
            del self.centered_sections[section_id]
        else:
            self.centered_sections[section_id] = None

    def align_left(self, section_id: str) -> None:
        self.centered_sections.pop(section_id, None)

    def set_text_edit(self, section_id: str, text: str) -> None:
        self.text_edits[section_id] = text

    def set_badge_config(self, section_id: str, config: BadgeConfig) -> None:
        self.badge_updates[section_id] = config

    def set_animation_config(self, section_id: str, config: AnimationConfig) -> None:
        self.animation_updates[section_id] = config

    def is_removed(self, section_id: str) -> bool:
        return section_id in self.removed_sections

    def is_centered(self, section_id: str) -> bool:
        return section_id in self.centered_sections

    @property
    def is_empty(self) -> bool:
        """Return True when no bucket holds a pending edit."""
        return not (
            self.removed_sections
            or self.centered_sections
            or self.text_edits
            or self.badge_updates
            or self.animation_updates
        )

    def clear(self) -> None:
        """Drop every pending edit."""
        self.removed_sections.clear()
        self.centered_sections.clear()
        self.text_edits.clear()
        self.badge_updates.clear()
        self.animation_updates.clear()


def _in_document_order(
    keys: cabc.Iterable[str], sections: cabc.Sequence[Section]
) -> list[Section]:
    wanted = set(keys)
    return [section for section in sections if section.id in wanted]


def _typing_svg_for(label: str, color: str) -> str:
    lines = "+".join(label.split())
    return (
        f'<img src="{TYPING_SVG_BASE}?font=Fira+Code&pause=1000&color={color}'
        f'&center=true&vCenter=true&width=435&lines={lines}" alt="Typing SVG" />'
    )


def render_change_instructions(
    changes: EditChanges,
    sections: cabc.Sequence[Section],
    *,
    extra_instructions: str | None = None,
) -> str:
    """Serialize pending edits into natural-language change instructions.

    Parameters
    ----------
    changes : EditChanges
        Pending edits keyed by section id.
    sections : Sequence[Section]
        Sections of the current document; used to order entries and resolve
        ids into display labels. Ids absent from the document are skipped.
    extra_instructions : str, optional
        Free-text regeneration instructions appended as the last block.

    Returns
    -------
    str
        One block per non-empty bucket in the fixed order removals, centering,
        text edits, badge updates, animation updates. Returns the
        "no specific changes" instruction when nothing is pending.
    """
    labels = section_labels(sections)
    blocks: list[str] = []

    removed = _in_document_order(changes.removed_sections, sections)
    if removed:
        names = ", ".join(labels[section.id] for section in removed)
        blocks.append(f"REMOVE these sections: {names}")

    centered = _in_document_order(changes.centered_sections, sections)
    if centered:
        names = ", ".join(labels[section.id] for section in centered)
        blocks.append(f'CENTER these sections with <div align="center"> tags: {names}')

    edited = _in_document_order(changes.text_edits, sections)
    if edited:
        lines = ["TEXT EDITS:"]
        lines.extend(
            f'- Replace content in "{labels[section.id]}" section with: '
            f'"{changes.text_edits[section.id]}"'
            for section in edited
        )
        blocks.append("\n".join(lines))

    badged = [
        section
        for section in _in_document_order(changes.badge_updates, sections)
        if changes.badge_updates[section.id].enabled
    ]
    if badged:
        lines = ["BADGE UPDATES:"]
        lines.extend(
            f'- Add relevant badges to "{labels[section.id]}" section using '
            f"{changes.badge_updates[section.id].style} style from shields.io. "
            "Include tech stack and status badges."
            for section in badged
        )
        blocks.append("\n".join(lines))

    animated = [
        section
        for section in _in_document_order(changes.animation_updates, sections)
        if changes.animation_updates[section.id].enabled
    ]
    if animated:
        lines = ["ANIMATION UPDATES:"]
        lines.extend(
            f'- Add animated typing text to "{labels[section.id]}" section header '
            "using: "
            + _typing_svg_for(
                section.title, changes.animation_updates[section.id].color
            )
            for section in animated
        )
        blocks.append("\n".join(lines))

    if extra_instructions and extra_instructions.strip():
        blocks.append(f"ADDITIONAL INSTRUCTIONS: {extra_instructions.strip()}")

    if not blocks:
        return NO_CHANGES_INSTRUCTION
    return "\n".join(blocks)


def build_update_prompt(plan: str, document: str, instructions: str) -> str:
    """Return the update prompt asking the model to apply ``instructions``."""
    return "\n\n".join(
        [
            "You previously generated a README for this project. Now I need you "
            "to update it with specific changes while keeping everything else "
            "the same.",
            f"ORIGINAL PROJECT PLAN:\n{plan}",
            f"CURRENT README CONTENT:\n{document}",
            f"CHANGES TO MAKE:\n{instructions}",
            "\n".join(
                [
                    "IMPORTANT INSTRUCTIONS:",
                    "- Keep all existing content and structure UNLESS "
                    "specifically mentioned in the changes above",
                    "- Apply the changes exactly as requested",
                    "- Maintain the same style, badges, and formatting from the "
                    "original",
                    "- Generate ONLY raw markdown content (no code fences)",
                    "- Keep the same professional quality and completeness",
                ]
            ),
        ]
    )


__all__ = [
    "NO_CHANGES_INSTRUCTION",
    "AnimationConfig",
    "BadgeConfig",
    "EditChanges",
    "build_update_prompt",
    "render_change_instructions",
]
