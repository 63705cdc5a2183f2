"""Copy text to the system clipboard through the platform's clipboard tool."""

from __future__ import annotations

import logging
import shutil
import subprocess

from .errors import ClipboardError

logger = logging.getLogger(__name__)

CLIPBOARD_COMMANDS: tuple[tuple[str, ...], ...] = (
    ("pbcopy",),
    ("wl-copy",),
    ("xclip", "-selection", "clipboard"),
    ("xsel", "--clipboard", "--input"),
    ("clip",),
)


def find_clipboard_command() -> list[str] | None:
    """Return the first available clipboard command, resolved on PATH."""
    for command in CLIPBOARD_COMMANDS:
        executable = shutil.which(command[0])
        if executable:
            return [executable, *command[1:]]
    return None


def copy_text(text: str) -> None:
    """Copy ``text`` to the clipboard.

    Raises
    ------
    ClipboardError
        If no clipboard tool is installed or the tool exits with an error.
    """
    command = find_clipboard_command()
    if command is None:
        msg = "No clipboard tool found (tried pbcopy, wl-copy, xclip, xsel, clip)."
        raise ClipboardError(msg)
    try:
        subprocess.run(  # noqa: S603 - command comes from a fixed allow-list
            command, input=text.encode("utf-8"), check=True, capture_output=True
        )
    except (OSError, subprocess.CalledProcessError) as exc:
        msg = f"Failed to copy text to the clipboard: {exc}"
        raise ClipboardError(msg) from exc
    logger.debug("Copied %d characters with %s", len(text), command[0])


__all__ = ["CLIPBOARD_COMMANDS", "copy_text", "find_clipboard_command"]
