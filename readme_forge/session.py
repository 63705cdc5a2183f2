"""Application state for one README editing session.

:class:`ReadmeSession` owns everything the editor shows: the project plan, the
generation options, the current document, pending section edits, loading
flags, the last error message and the clipboard feedback flag. State changes
only through its action handlers; section edits arrive as small action records
passed to :meth:`ReadmeSession.dispatch`.

Calls to the generation endpoint are blocking and one at a time. Every error
raised during a call is caught at the handler boundary, logged, and stored as
a user-facing message in :attr:`ReadmeSession.error`; the session stays usable
and the user decides whether to retry.

Example
-------
>>> from readme_forge.session import ReadmeSession, RemoveSection
>>> class EchoBackend:
...     def generate(self, prompt: str) -> str:
...         return "```markdown\\n# Demo\\n## Usage\\nRun it\\n```"
>>> session = ReadmeSession(EchoBackend(), plan="Project Name: Demo")
>>> session.generate()
True
>>> session.dispatch(RemoveSection("section-1"))
>>> session.pending_instructions()
'REMOVE these sections: Usage'
"""

from __future__ import annotations

import dataclasses as dc
import logging
import time
import typing as typ

from ._constants import COPY_FEEDBACK_SECONDS
from .changes import (
    AnimationConfig,
    BadgeConfig,
    EditChanges,
    build_update_prompt,
    render_change_instructions,
)
from .clipboard import copy_text
from .config import GenerationOptions
from .errors import ConfigError, EmptyInputError, ReadmeForgeError, describe_error
from .markdown_parser import Section, find_section, parse_sections
from .normalizer import normalize_response
from .prompt_builder import build_prompt, require_plan

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .client import GenerationBackend

logger = logging.getLogger(__name__)


@dc.dataclass(frozen=True, slots=True)
class RemoveSection:
    section_id: str


@dc.dataclass(frozen=True, slots=True)
class RestoreSection:
    section_id: str


@dc.dataclass(frozen=True, slots=True)
class ToggleCenter:
    section_id: str


@dc.dataclass(frozen=True, slots=True)
class AlignLeft:
    section_id: str


@dc.dataclass(frozen=True, slots=True)
class EditText:
    section_id: str
    text: str


@dc.dataclass(frozen=True, slots=True)
class SetBadges:
    section_id: str
    config: BadgeConfig


@dc.dataclass(frozen=True, slots=True)
class SetAnimation:
    section_id: str
    config: AnimationConfig


SectionAction = (
    RemoveSection
    | RestoreSection
    | ToggleCenter
    | AlignLeft
    | EditText
    | SetBadges
    | SetAnimation
)


class ReadmeSession:
    """Controller owning the README being generated and edited."""

    def __init__(
        self,
        backend: GenerationBackend | None = None,
        *,
        plan: str = "",
        options: GenerationOptions | None = None,
        copy: cabc.Callable[[str], None] | None = None,
        clock: cabc.Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialise an empty session.

        Parameters
        ----------
        backend : GenerationBackend, optional
            Endpoint used for generation and update calls. Sessions that only
            preview, edit or copy a document can omit it; generate and update
            then fail with a configuration error.
        plan : str, optional
            Initial project plan text.
        options : GenerationOptions, optional
            Initial options; defaults to :class:`GenerationOptions` defaults.
        copy : Callable[[str], None], optional
            Clipboard writer; defaults to :func:`readme_forge.clipboard.copy_text`.
        clock : Callable[[], float], optional
            Monotonic clock used to expire the clipboard feedback flag.
        """
        self._backend = backend
        self._copy = copy or copy_text
        self._clock = clock
        self.plan = plan
        self.options = options or GenerationOptions()
        self.document = ""
        self.changes = EditChanges()
        self.error = ""
        self.is_loading = False
        self.is_updating = False
        self.edit_mode = False
        self._copied_at: float | None = None

    @property
    def sections(self) -> list[Section]:
        """Return the sections of the current document, freshly parsed."""
        return parse_sections(self.document)

    @property
    def has_copied(self) -> bool:
        """Return True for a short while after a successful clipboard copy."""
        if self._copied_at is None:
            return False
        return self._clock() - self._copied_at < COPY_FEEDBACK_SECONDS

    def set_plan(self, plan: str) -> None:
        self.plan = plan

    def set_option(self, name: str, value: object) -> None:
        """Replace a single generation option.

        Raises
        ------
        ConfigError
            If ``value`` is outside the option's range.
        AttributeError
            If ``name`` is not a generation option.
        """
        if name not in {field.name for field in dc.fields(GenerationOptions)}:
            msg = f"GenerationOptions has no option named '{name}'."
            raise AttributeError(msg)
        self.options = dc.replace(self.options, **{name: value})

    def load_document(self, document: str) -> None:
        """Replace the document with existing markdown and drop pending edits."""
        self.document = document
        self.changes.clear()

    def set_edit_mode(self, *, enabled: bool) -> None:
        self.edit_mode = enabled

    def generate(self) -> bool:
        """Generate a fresh README from the plan and options.

        Returns
        -------
        bool
            True when the document was replaced; False when the call failed
            and :attr:`error` holds the reason.
        """
        self.error = ""
        self.is_loading = True
        try:
            prompt = build_prompt(self.plan, self.options)
            document = normalize_response(self._complete(prompt))
        except Exception as exc:  # noqa: BLE001 - surfaced to the user, never fatal
            self._record_failure("generate", exc)
            return False
        finally:
            self.is_loading = False

        self.document = document
        # Pending edits refer to sections of the previous document.
        self.changes.clear()
        logger.info("Generated README (%d characters)", len(document))
        return True

    def pending_instructions(self, extra_instructions: str | None = None) -> str:
        """Return the change instructions for the edits accumulated so far."""
        return render_change_instructions(
            self.changes, self.sections, extra_instructions=extra_instructions
        )

    def apply_changes(self, extra_instructions: str | None = None) -> bool:
        """Send pending edits to the endpoint and replace the document.

        On success the pending edits are cleared and edit mode is closed. On
        failure the document and the pending edits are left untouched.

        Parameters
        ----------
        extra_instructions : str, optional
            Free-text regeneration instructions sent with the edits.

        Returns
        -------
        bool
            True when the document was replaced.
        """
        self.error = ""
        self.is_updating = True
        try:
            require_plan(self.plan)
            if not self.document.strip():
                msg = "There is no README to update yet. Generate one first."
                raise EmptyInputError(msg)
            instructions = self.pending_instructions(extra_instructions)
            prompt = build_update_prompt(self.plan, self.document, instructions)
            document = normalize_response(self._complete(prompt))
        except Exception as exc:  # noqa: BLE001 - surfaced to the user, never fatal
            self._record_failure("update", exc)
            return False
        finally:
            self.is_updating = False

        self.document = document
        self.changes.clear()
        self.edit_mode = False
        logger.info("Applied section edits (%d characters)", len(document))
        return True

    def dispatch(self, action: SectionAction) -> None:
        """Record a section edit.

        Raises
        ------
        UnknownSectionError
            If the action names a section id absent from the current document.
        """
        find_section(self.sections, action.section_id)
        section_id = action.section_id
        match action:
            case RemoveSection():
                self.changes.remove(section_id)
            case RestoreSection():
                self.changes.restore(section_id)
            case ToggleCenter():
                self.changes.toggle_center(section_id)
            case AlignLeft():
                self.changes.align_left(section_id)
            case EditText(text=text):
                self.changes.set_text_edit(section_id, text)
            case SetBadges(config=badge_config):
                self.changes.set_badge_config(section_id, badge_config)
            case SetAnimation(config=animation_config):
                self.changes.set_animation_config(section_id, animation_config)
        logger.debug("Recorded %s for %s", type(action).__name__, section_id)

    def copy_to_clipboard(self) -> bool:
        """Copy the current document to the system clipboard."""
        try:
            self._copy(self.document)
        except ReadmeForgeError as exc:
            self._copied_at = None
            self._record_failure("copy", exc)
            return False
        self._copied_at = self._clock()
        return True

    def _complete(self, prompt: str) -> str:
        if self._backend is None:
            msg = "No generation backend is configured for this session."
            raise ConfigError(msg)
        return self._backend.generate(prompt)

    def _record_failure(self, operation: str, exc: BaseException) -> None:
        self.error = describe_error(exc)
        if isinstance(exc, ReadmeForgeError):
            logger.warning("%s failed: %s", operation, exc)
        else:
            logger.exception("%s failed unexpectedly", operation)


__all__ = [
    "AlignLeft",
    "EditText",
    "ReadmeSession",
    "RemoveSection",
    "RestoreSection",
    "SectionAction",
    "SetAnimation",
    "SetBadges",
    "ToggleCenter",
]
