r"""Assemble the generation prompt from a project plan and options.

The prompt is built as an ordered list of clauses: content directives, the
badge directive, the numbered section list, style guidelines, the delimited
plan, and a closing instruction. Identical inputs always produce identical
prompts, which keeps the non-deterministic endpoint out of the tests.

Example
-------
>>> from readme_forge.config import GenerationOptions
>>> from readme_forge.prompt_builder import build_prompt
>>> prompt = build_prompt("Project Name: Demo", GenerationOptions())
>>> prompt.splitlines()[0]
'Based on the following project plan, generate a complete, professional README.md file in Markdown format.'
"""

from __future__ import annotations

import typing as typ
from urllib.parse import quote

from ._constants import PROJECT_NAME_PLACEHOLDER, TYPING_SVG_BASE
from .errors import EmptyInputError

if typ.TYPE_CHECKING:
    from .config import GenerationOptions

INTRO_DIRECTIVE = (
    "Based on the following project plan, generate a complete, professional "
    "README.md file in Markdown format."
)
TITLE_DIRECTIVE = "A main title for the project (use # heading)."
DESCRIPTION_DIRECTIVE = "A concise, one-sentence description of the project."
BADGE_CATEGORIES = (
    "Include badges for: License, Tech stack technologies, Version (1.0.0), "
    "Build status (passing)."
)
ICON_LOGOS = (
    "'react', 'typescript', 'javascript', 'nodejs', 'python', 'html5', 'css3', "
    "'mongodb', 'postgresql'"
)

BASE_SECTIONS: tuple[str, ...] = (
    'A "## Features" section with a bulleted list of key features.',
    'An "## Installation" section with step-by-step instructions.',
    'A "## Usage" section explaining how to use the application.',
    'A "## Tech Stack" section listing the technologies used.',
)
TABLE_OF_CONTENTS_SECTION = (
    'A "## Table of Contents" section with links to other sections.'
)
OPTIONAL_SECTIONS: tuple[tuple[str, str], ...] = (
    ("include_demo", 'A "## Demo" section with a placeholder for a live demo link and GIF/video.'),
    ("include_screenshots", 'A "## Screenshots" section with placeholder image markdown.'),
    ("include_api_docs", 'An "## API Documentation" section with endpoint examples.'),
    ("include_deployment", 'A "## Deployment" section with deployment instructions.'),
    ("include_contributing", 'A "## Contributing" section with standard guidelines.'),
    ("include_license", 'A "## License" section mentioning the license type.'),
    ("include_acknowledgments", 'An "## Acknowledgments" section for credits and thanks.'),
    ("include_changelog", 'A "## Changelog" section with version history.'),
)

CENTER_DIRECTIVE = (
    'Wrap main sections (title, description, badges, key content) in '
    '<div align="center"> tags for center alignment. Use <p align="center"> '
    "for paragraphs that should be centered."
)
EMOJI_DIRECTIVES: dict[str, str] = {
    "none": "Do not use emojis.",
    "subtle": "Add subtle emojis (1-2 per section header, like 🚀 ✨ 📦 🛠️).",
    "heavy": "Add multiple relevant emojis throughout headers and bullet points.",
}
SYNTAX_GUIDELINES: tuple[str, ...] = (
    "- Use proper markdown syntax: # for main title, ## for section headers",
    "- Use ![alt](url) for images and badges",
    "- Use `code` for inline code and ```language for code blocks",
    "- Use proper list formatting with - or *",
    "- Make it professional but engaging",
)
CLOSING_INSTRUCTION = (
    "IMPORTANT: Generate ONLY raw markdown content. Do NOT wrap the output in "
    "code blocks or markdown fences. Do NOT include ```markdown at the "
    "beginning or ``` at the end. Start directly with the # heading."
)
PLAN_DELIMITER = "---"


def require_plan(plan: str) -> str:
    """Return ``plan`` unchanged, raising EmptyInputError when it is blank."""
    if not plan.strip():
        msg = "Project plan cannot be empty."
        raise EmptyInputError(msg)
    return plan


def badge_style_instruction(options: GenerationOptions) -> str:
    """Describe the shields.io format for the configured badge style."""
    if options.icon_badges:
        return (
            "icon badges with tech stack logos from shields.io. Format: "
            "![Tech Name](https://img.shields.io/badge/Tech_Name-color?style="
            f"{options.badge_style}&logo=logoname&logoColor=white). Use "
            f"appropriate logos like {ICON_LOGOS}, etc."
        )
    return f"shields.io format with style={options.badge_style}"


def badge_clause(options: GenerationOptions) -> str | None:
    """Return the badge directive, or None when badges are disabled."""
    if not options.include_badges:
        return None
    style = badge_style_instruction(options)
    if options.separate_badges:
        layout = (
            f'Create a "Badges" section with relevant badges using {style}. '
            "Put each badge on a separate line."
        )
    else:
        layout = (
            f"Add relevant badges after the description using {style}. "
            "Place all badges on the same line."
        )
    return f"{layout} {BADGE_CATEGORIES}"


def section_directives(options: GenerationOptions) -> list[str]:
    """Return the ordered section directives selected by ``options``."""
    sections = list(BASE_SECTIONS)
    if options.include_table_of_contents:
        sections.insert(0, TABLE_OF_CONTENTS_SECTION)
    sections.extend(
        directive for flag, directive in OPTIONAL_SECTIONS if getattr(options, flag)
    )
    return sections


def animated_title_markup(options: GenerationOptions) -> str:
    """Return the typing-SVG heading markup with a project-name placeholder."""
    font = quote(options.animation_font, safe="")
    src = (
        f"{TYPING_SVG_BASE}?font={font}&pause=1000&color={options.animation_color}"
        f"&center=true&vCenter=true&width=435&speed={options.animation_speed}"
        f"&lines={PROJECT_NAME_PLACEHOLDER}"
    )
    return f'<h1 align="center"><img src="{src}" alt="Typing SVG" /></h1>'


def style_directives(options: GenerationOptions) -> list[str]:
    """Return style guideline lines in their fixed order."""
    lines: list[str] = []
    if options.animated_title:
        lines.append(
            "Use animated text for the main title with this format: "
            + animated_title_markup(options)
        )
    if options.center_content:
        lines.append(CENTER_DIRECTIVE)
    lines.append(EMOJI_DIRECTIVES[options.emoji_style])
    lines.extend(SYNTAX_GUIDELINES)
    return lines


def _numbered(items: typ.Iterable[str]) -> list[str]:
    return [f"{index}. {item}" for index, item in enumerate(items, start=1)]


def build_prompt_clauses(plan: str, options: GenerationOptions) -> list[str]:
    """Return the prompt as an ordered list of clauses.

    Parameters
    ----------
    plan : str
        Free-text project plan; must contain non-whitespace characters.
    options : GenerationOptions
        Toggles selecting badges, sections and style directives.

    Returns
    -------
    list[str]
        Clauses in fixed order: intro, content directives, section list,
        style guidelines, delimited plan, closing instruction.

    Raises
    ------
    EmptyInputError
        If ``plan`` is blank after trimming.
    """
    require_plan(plan)
    content = [TITLE_DIRECTIVE, DESCRIPTION_DIRECTIVE]
    badges = badge_clause(options)
    if badges:
        content.append(badges)

    return [
        INTRO_DIRECTIVE,
        "\n".join(["The README should include:", *_numbered(content)]),
        "\n".join(["Sections to include:", *_numbered(section_directives(options))]),
        "\n".join(["Style Guidelines:", *style_directives(options)]),
        "\n".join(
            ["Here is the project plan:", PLAN_DELIMITER, plan, PLAN_DELIMITER]
        ),
        CLOSING_INSTRUCTION,
    ]


def build_prompt(plan: str, options: GenerationOptions) -> str:
    """Return the full generation prompt for ``plan`` and ``options``."""
    return "\n\n".join(build_prompt_clauses(plan, options))


__all__ = [
    "BASE_SECTIONS",
    "animated_title_markup",
    "badge_clause",
    "build_prompt",
    "build_prompt_clauses",
    "require_plan",
    "section_directives",
    "style_directives",
]
