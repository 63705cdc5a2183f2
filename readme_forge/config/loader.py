"""Load generation options from YAML and endpoint settings from the env."""

from __future__ import annotations

import dataclasses as dc
import os
import typing as typ

from ruamel.yaml import YAML

from readme_forge._constants import (
    API_BASE_ENV_VAR,
    API_KEY_ENV_VARS,
    DEFAULT_API_BASE,
    DEFAULT_MODEL,
    MODEL_ENV_VAR,
)

from .models import ClientSettings, ConfigError, GenerationOptions, coerce_hex_color

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

OPTION_FIELDS = frozenset(field.name for field in dc.fields(GenerationOptions))


def load_options(path: Path | None = None) -> GenerationOptions:
    """Load generation options from a YAML file, applying defaults.

    Parameters
    ----------
    path : Path or None, optional
        YAML file whose top-level ``options`` mapping overrides the defaults.
        ``None`` returns the default options.

    Returns
    -------
    GenerationOptions
        Validated options.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    ConfigError
        If the document is not a mapping, names unknown options, or carries
        values outside an option's range.

    Examples
    --------
    >>> from pathlib import Path
    >>> from readme_forge.config import load_options
    >>> options = load_options(Path("readme.yaml"))  # doctest: +SKIP
    >>> options.badge_style  # doctest: +SKIP
    'for-the-badge'
    """
    if path is None:
        return GenerationOptions()
    if not path.exists():
        msg = f"Options file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise ConfigError(msg)
    payload = loaded.get("options", {}) or {}
    if not isinstance(payload, dict):
        msg = "The 'options' entry must be a mapping."
        raise ConfigError(msg)
    return build_options(payload)


def build_options(payload: cabc.Mapping[str, typ.Any]) -> GenerationOptions:
    """Build options from a mapping, accepting dashed or snake_case keys."""
    normalized = {str(key).replace("-", "_"): value for key, value in payload.items()}
    unknown = sorted(set(normalized) - OPTION_FIELDS)
    if unknown:
        msg = f"Unknown option(s): {', '.join(unknown)}."
        raise ConfigError(msg)
    if "animation_color" in normalized:
        normalized["animation_color"] = coerce_hex_color(normalized["animation_color"])
    return GenerationOptions(**normalized)


def load_settings(environ: cabc.Mapping[str, str] | None = None) -> ClientSettings:
    """Resolve endpoint settings from ``environ`` (defaults to ``os.environ``).

    The API key is read from ``GEMINI_API_KEY``, falling back to
    ``GOOGLE_API_KEY``. A missing key is not an error here; the client refuses
    to send requests until one is configured.
    """
    env = os.environ if environ is None else environ
    api_key = next(
        (env[name].strip() for name in API_KEY_ENV_VARS if env.get(name, "").strip()),
        None,
    )
    return ClientSettings(
        api_key=api_key,
        model=env.get(MODEL_ENV_VAR, "").strip() or DEFAULT_MODEL,
        api_base=env.get(API_BASE_ENV_VAR, "").strip() or DEFAULT_API_BASE,
    )


__all__ = ["build_options", "load_options", "load_settings"]
