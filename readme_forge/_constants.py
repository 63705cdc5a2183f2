"""Common literal values used across readme_forge.

These constants keep endpoint defaults and image-service URLs centralized so
the prompt builder, formatter, and tests can import the same values without
drifting. Intended for internal use within the readme_forge package.

Examples
--------
>>> from readme_forge import _constants
>>> _constants.SHIELDS_BADGE_TEMPLATE.format(label="MIT", style="flat")
'https://img.shields.io/badge/MIT-blue?style=flat'
"""

DEFAULT_API_BASE = "https://generativelanguage.googleapis.com"
DEFAULT_MODEL = "gemini-2.0-flash"
API_KEY_ENV_VARS = ("GEMINI_API_KEY", "GOOGLE_API_KEY")
MODEL_ENV_VAR = "README_FORGE_MODEL"
API_BASE_ENV_VAR = "README_FORGE_API_BASE"

TYPING_SVG_BASE = "https://readme-typing-svg.herokuapp.com"
SHIELDS_BADGE_TEMPLATE = "https://img.shields.io/badge/{label}-blue?style={style}"
PROJECT_NAME_PLACEHOLDER = "[PROJECT_NAME]"

DEFAULT_ANIMATION_COLOR = "36BCF7"
DEFAULT_INLINE_BADGE_STYLE = "for-the-badge"
DEFAULT_LINK_URL = "#"

COPY_FEEDBACK_SECONDS = 2.0
