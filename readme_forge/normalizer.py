r"""Strip code-fence wrapping that models add around raw markdown.

Only one leading opener (```` ```markdown ```` or a bare fence) and one
trailing closer are removed; fences inside the body are legitimate code blocks
and stay untouched.

Example
-------
>>> from readme_forge.normalizer import normalize_response
>>> normalize_response("```markdown\n# X\n```")
'# X'
"""

from __future__ import annotations

import re

LEADING_FENCE_PATTERN = re.compile(r"^```(?:markdown)?\s*")
TRAILING_FENCE_PATTERN = re.compile(r"\s*```$")


def normalize_response(text: str) -> str:
    """Return ``text`` trimmed and without a wrapping fence pair."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = LEADING_FENCE_PATTERN.sub("", cleaned, count=1)
    if cleaned.endswith("```"):
        cleaned = TRAILING_FENCE_PATTERN.sub("", cleaned, count=1)
    return cleaned


__all__ = ["normalize_response"]
