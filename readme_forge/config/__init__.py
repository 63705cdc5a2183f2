"""Load and validate readme_forge configuration.

This subpackage parses the optional ``readme.yaml`` options file into a
:class:`GenerationOptions` record and resolves endpoint settings (API key,
model, base URL) from the environment into :class:`ClientSettings`.

Examples
--------
>>> from readme_forge.config import GenerationOptions, load_settings
>>> GenerationOptions().emoji_style
'subtle'
>>> load_settings({"GEMINI_API_KEY": "k"}).api_key
'k'
"""

from .loader import build_options, load_options, load_settings
from .models import (
    BADGE_STYLES,
    EMOJI_STYLES,
    ClientSettings,
    ConfigError,
    GenerationOptions,
)

__all__ = [
    "BADGE_STYLES",
    "EMOJI_STYLES",
    "ClientSettings",
    "ConfigError",
    "GenerationOptions",
    "build_options",
    "load_options",
    "load_settings",
]
