"""Typed dataclasses describing generation options and endpoint settings."""

from __future__ import annotations

import dataclasses as dc
import re

from readme_forge._constants import DEFAULT_API_BASE, DEFAULT_MODEL
from readme_forge.errors import ConfigError

BADGE_STYLES = frozenset({"flat", "flat-square", "for-the-badge", "plastic"})
EMOJI_STYLES = frozenset({"none", "subtle", "heavy"})
HEX_COLOR_PATTERN = re.compile(r"^[0-9A-Fa-f]{6}$")
_MAX_DECIMAL_COLOR = 999_999


def coerce_hex_color(value: object) -> str:
    """Return ``value`` as a six-digit hex colour string.

    YAML reads an unquoted all-digit colour such as ``000000`` or ``123456``
    as an integer, dropping leading zeros; such integers are zero-padded back
    to six digits.

    Raises
    ------
    ConfigError
        If ``value`` is not a string or a non-negative integer of at most six
        digits, or the resulting string is not six hex digits.
    """
    color = value
    if isinstance(value, int) and not isinstance(value, bool):
        if 0 <= value <= _MAX_DECIMAL_COLOR:
            color = f"{value:06d}"
    if not isinstance(color, str) or not HEX_COLOR_PATTERN.match(color):
        msg = (
            f"Colour must be six hex digits, got {value!r}; quote hex colours "
            "in YAML."
        )
        raise ConfigError(msg)
    return color


@dc.dataclass(frozen=True, slots=True)
class GenerationOptions:
    """Toggles and enums that shape the generation prompt.

    Attributes
    ----------
    include_badges : bool
        Ask for shields.io badges after the description.
    separate_badges : bool
        Put badges in their own "Badges" section, one per line, instead of a
        single line under the description.
    badge_style : str
        shields.io ``style`` parameter; one of :data:`BADGE_STYLES`.
    icon_badges : bool
        Request logo-bearing badges for tech stack entries.
    animated_title : bool
        Render the main title as an animated typing SVG.
    animation_font, animation_color, animation_speed
        Parameters for the typing SVG. The colour is six hex digits without
        the leading ``#``.
    center_content : bool
        Wrap the main content in centering blocks.
    include_table_of_contents, include_demo, include_screenshots,
    include_api_docs, include_deployment, include_contributing,
    include_license, include_acknowledgments, include_changelog : bool
        Optional sections requested from the model.
    emoji_style : str
        Emoji density; one of :data:`EMOJI_STYLES`.
    """

    include_badges: bool = True
    separate_badges: bool = False
    badge_style: str = "flat"
    icon_badges: bool = False
    animated_title: bool = False
    animation_font: str = "Fira Code"
    animation_color: str = "36BCF7"
    animation_speed: int = 50
    center_content: bool = False
    include_table_of_contents: bool = False
    include_demo: bool = False
    include_screenshots: bool = False
    include_api_docs: bool = False
    include_deployment: bool = False
    include_contributing: bool = True
    include_license: bool = True
    include_acknowledgments: bool = False
    include_changelog: bool = False
    emoji_style: str = "subtle"

    def __post_init__(self) -> None:
        """Reject values outside each field's enumerated range."""
        for field in dc.fields(self):
            value = getattr(self, field.name)
            if field.type == "bool" and not isinstance(value, bool):
                msg = f"Option '{field.name}' must be a boolean, got {value!r}."
                raise ConfigError(msg)
        if self.badge_style not in BADGE_STYLES:
            msg = (
                f"Unknown badge style {self.badge_style!r}; expected one of "
                f"{', '.join(sorted(BADGE_STYLES))}."
            )
            raise ConfigError(msg)
        if self.emoji_style not in EMOJI_STYLES:
            msg = (
                f"Unknown emoji style {self.emoji_style!r}; expected one of "
                f"{', '.join(sorted(EMOJI_STYLES))}."
            )
            raise ConfigError(msg)
        if not isinstance(self.animation_color, str) or not HEX_COLOR_PATTERN.match(
            self.animation_color
        ):
            msg = f"Animation colour must be six hex digits, got {self.animation_color!r}."
            raise ConfigError(msg)
        if (
            isinstance(self.animation_speed, bool)
            or not isinstance(self.animation_speed, int)
            or self.animation_speed <= 0
        ):
            msg = f"Animation speed must be a positive integer, got {self.animation_speed!r}."
            raise ConfigError(msg)
        if not str(self.animation_font).strip():
            msg = "Animation font cannot be empty."
            raise ConfigError(msg)


@dc.dataclass(frozen=True, slots=True)
class ClientSettings:
    """Endpoint settings resolved from the environment.

    Attributes
    ----------
    api_key : str | None
        Static API key; ``None`` blocks every generation call.
    model : str
        Model name used in the ``generateContent`` path.
    api_base : str
        Base URL of the Generative Language API.
    """

    api_key: str | None = None
    model: str = DEFAULT_MODEL
    api_base: str = DEFAULT_API_BASE


__all__ = [
    "BADGE_STYLES",
    "EMOJI_STYLES",
    "ClientSettings",
    "ConfigError",
    "GenerationOptions",
    "coerce_hex_color",
]
