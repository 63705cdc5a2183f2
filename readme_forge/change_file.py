r"""Read section edits from a YAML changes file.

The ``update`` command replays edits recorded in a file shaped like::

    changes:
      - action: remove
        section: section-3
      - action: center
        section: section-0
      - action: edit-text
        section: section-1
        text: A shorter description.
      - action: badges
        section: section-0
        style: flat-square
      - action: animation
        section: section-0
        color: FF5733

Each entry becomes one session action record, in file order.

Example
-------
>>> from readme_forge.change_file import build_action
>>> build_action({"action": "remove", "section": "section-2"})
RemoveSection(section_id='section-2')
"""

from __future__ import annotations

import typing as typ

from ruamel.yaml import YAML

from ._constants import DEFAULT_ANIMATION_COLOR, DEFAULT_INLINE_BADGE_STYLE
from .changes import AnimationConfig, BadgeConfig
from .config import BADGE_STYLES
from .config.models import coerce_hex_color
from .errors import ConfigError
from .session import (
    AlignLeft,
    EditText,
    RemoveSection,
    RestoreSection,
    SectionAction,
    SetAnimation,
    SetBadges,
    ToggleCenter,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

_SIMPLE_ACTIONS: dict[str, type[RemoveSection | RestoreSection | ToggleCenter | AlignLeft]] = {
    "remove": RemoveSection,
    "restore": RestoreSection,
    "center": ToggleCenter,
    "align-left": AlignLeft,
}
ACTION_NAMES = (*_SIMPLE_ACTIONS, "edit-text", "badges", "animation")


def _optional_flag(entry: cabc.Mapping[str, typ.Any], index: int) -> bool:
    enabled = entry.get("enabled", True)
    if not isinstance(enabled, bool):
        msg = (
            f"Change #{index} has non-boolean 'enabled' {enabled!r}; use true or "
            "false."
        )
        raise ConfigError(msg)
    return enabled


def _require_str(entry: cabc.Mapping[str, typ.Any], key: str, index: int) -> str:
    value = entry.get(key)
    if value is None or not str(value).strip():
        msg = f"Change #{index} is missing '{key}'."
        raise ConfigError(msg)
    return str(value)


def build_action(
    entry: cabc.Mapping[str, typ.Any], *, index: int = 1
) -> SectionAction:
    """Build one session action from a changes-file entry.

    Raises
    ------
    ConfigError
        If the action name is unknown or a required field is missing or
        invalid.
    """
    name = _require_str(entry, "action", index).strip().replace("_", "-")
    section_id = _require_str(entry, "section", index).strip()

    if name in _SIMPLE_ACTIONS:
        return _SIMPLE_ACTIONS[name](section_id)

    match name:
        case "edit-text":
            if "text" not in entry or entry["text"] is None:
                msg = f"Change #{index} ('edit-text') is missing 'text'."
                raise ConfigError(msg)
            return EditText(section_id, str(entry["text"]))
        case "badges":
            style = entry.get("style")
            if style is None:
                style = DEFAULT_INLINE_BADGE_STYLE
            if not isinstance(style, str) or style not in BADGE_STYLES:
                msg = f"Change #{index} uses unknown badge style {style!r}."
                raise ConfigError(msg)
            return SetBadges(
                section_id,
                BadgeConfig(enabled=_optional_flag(entry, index), style=style),
            )
        case "animation":
            color = entry.get("color")
            try:
                color = (
                    DEFAULT_ANIMATION_COLOR
                    if color is None
                    else coerce_hex_color(color)
                )
            except ConfigError as exc:
                msg = f"Change #{index} uses an invalid colour. {exc}"
                raise ConfigError(msg) from exc
            return SetAnimation(
                section_id,
                AnimationConfig(enabled=_optional_flag(entry, index), color=color),
            )
        case _:
            msg = (
                f"Change #{index} has unknown action {name!r}; expected one of "
                f"{', '.join(ACTION_NAMES)}."
            )
            raise ConfigError(msg)


def load_change_actions(path: Path) -> list[SectionAction]:
    """Load the ``changes`` list from ``path`` as session actions.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    ConfigError
        If the document or any entry is malformed.
    """
    if not path.exists():
        msg = f"Changes file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise ConfigError(msg)
    entries = loaded.get("changes") or []
    if not isinstance(entries, list):
        msg = "The 'changes' entry must be a list."
        raise ConfigError(msg)

    actions: list[SectionAction] = []
    for index, entry in enumerate(entries, start=1):
        if not isinstance(entry, dict):
            msg = f"Change #{index} must be a mapping."
            raise ConfigError(msg)
        actions.append(build_action(entry, index=index))
    return actions


__all__ = ["ACTION_NAMES", "build_action", "load_change_actions"]
