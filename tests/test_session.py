"""Tests for the README editing session controller."""

from __future__ import annotations

import logging

import pytest

from readme_forge.changes import AnimationConfig, BadgeConfig, EditChanges
from readme_forge.config import ConfigError
from readme_forge.errors import (
    GENERIC_ERROR_MESSAGE,
    ClipboardError,
    HttpStatusError,
    UnknownSectionError,
)
from readme_forge.session import (
    AlignLeft,
    EditText,
    ReadmeSession,
    RemoveSection,
    RestoreSection,
    SetAnimation,
    SetBadges,
    ToggleCenter,
)

DOCUMENT = "# Demo\nIntro text\n## Features\n- Fast\n## Usage\nRun it"


class StubBackend:
    """Deterministic backend recording prompts and replaying canned replies."""

    def __init__(self, *replies: str | Exception) -> None:
        self.replies = list(replies)
        self.prompts: list[str] = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def _session_with_document(*replies: str | Exception) -> tuple[ReadmeSession, StubBackend]:
    backend = StubBackend(*replies)
    session = ReadmeSession(backend, plan="Project Name: Demo", copy=lambda _: None)
    session.load_document(DOCUMENT)
    return session, backend


def test_generate_replaces_document_with_normalized_reply() -> None:
    backend = StubBackend("```markdown\n# Demo\n## Usage\nRun it\n```")
    session = ReadmeSession(backend, plan="Project Name: Demo")

    assert session.generate() is True
    assert session.document == "# Demo\n## Usage\nRun it"
    assert session.error == ""
    assert session.is_loading is False
    assert "Project Name: Demo" in backend.prompts[0]
    assert [section.id for section in session.sections] == ["section-0", "section-1"]


def test_generate_with_blank_plan_never_calls_backend() -> None:
    backend = StubBackend()
    session = ReadmeSession(backend, plan="   ")

    assert session.generate() is False
    assert session.error == "Project plan cannot be empty."
    assert backend.prompts == []


def test_generate_failure_keeps_previous_document(
    caplog: pytest.LogCaptureFixture,
) -> None:
    session, _ = _session_with_document(HttpStatusError(503, "overloaded"))

    with caplog.at_level(logging.WARNING, logger="readme_forge.session"):
        assert session.generate() is False

    assert session.document == DOCUMENT
    assert session.error.startswith("The generation servers are currently overloaded")
    assert session.is_loading is False
    assert "generate failed" in caplog.text


def test_generate_clears_error_on_retry() -> None:
    session, _ = _session_with_document(HttpStatusError(429), "# Fresh")

    assert session.generate() is False
    assert session.error
    assert session.generate() is True
    assert session.error == ""
    assert session.document == "# Fresh"


def test_unexpected_exceptions_get_the_generic_message() -> None:
    session, _ = _session_with_document(KeyError("candidates"))

    assert session.generate() is False
    assert session.error == GENERIC_ERROR_MESSAGE
    assert session.document == DOCUMENT


def test_session_without_backend_can_edit_but_not_generate() -> None:
    session = ReadmeSession(plan="Project Name: Demo")
    session.load_document(DOCUMENT)
    session.dispatch(RemoveSection("section-2"))

    assert session.pending_instructions() == "REMOVE these sections: Usage"
    assert session.generate() is False
    assert session.error == "No generation backend is configured for this session."
    assert session.apply_changes() is False
    assert session.document == DOCUMENT


def test_generate_drops_edits_for_previous_document() -> None:
    session, _ = _session_with_document("# Other")
    session.dispatch(RemoveSection("section-1"))

    session.generate()

    assert session.changes.is_empty


def test_dispatch_routes_each_action() -> None:
    session, _ = _session_with_document()

    session.dispatch(RemoveSection("section-2"))
    session.dispatch(ToggleCenter("section-0"))
    session.dispatch(EditText("section-1", "## Features\n- Faster"))
    session.dispatch(SetBadges("section-0", BadgeConfig(enabled=True, style="flat")))
    session.dispatch(SetAnimation("section-0", AnimationConfig(enabled=True)))

    changes = session.changes
    assert changes.is_removed("section-2")
    assert changes.is_centered("section-0")
    assert changes.text_edits == {"section-1": "## Features\n- Faster"}
    assert changes.badge_updates["section-0"].style == "flat"
    assert changes.animation_updates["section-0"].enabled is True

    session.dispatch(RestoreSection("section-2"))
    session.dispatch(AlignLeft("section-0"))
    assert not changes.removed_sections
    assert not changes.centered_sections


def test_dispatch_rejects_unknown_section() -> None:
    session, _ = _session_with_document()

    with pytest.raises(UnknownSectionError, match="section-9"):
        session.dispatch(RemoveSection("section-9"))
    assert session.changes.is_empty


def test_apply_changes_round_trip_clears_every_bucket() -> None:
    session, backend = _session_with_document("```\n# Demo\n## Features\n- Fast\n```")
    session.set_edit_mode(enabled=True)
    session.dispatch(RemoveSection("section-2"))
    session.dispatch(ToggleCenter("section-0"))
    session.dispatch(EditText("section-1", "- Fast"))
    session.dispatch(SetBadges("section-0", BadgeConfig(enabled=True)))
    session.dispatch(SetAnimation("section-0", AnimationConfig(enabled=True)))

    assert session.apply_changes() is True

    prompt = backend.prompts[0]
    assert "CURRENT README CONTENT:\n" + DOCUMENT in prompt
    assert "REMOVE these sections: Usage" in prompt
    assert session.document == "# Demo\n## Features\n- Fast"
    assert session.changes == EditChanges()
    assert session.edit_mode is False
    assert session.is_updating is False


def test_apply_changes_without_edits_asks_for_plain_regeneration() -> None:
    session, backend = _session_with_document("# Demo")

    assert session.apply_changes("Use a friendlier tone.") is True
    assert "ADDITIONAL INSTRUCTIONS: Use a friendlier tone." in backend.prompts[0]


def test_apply_changes_failure_leaves_state_untouched() -> None:
    session, _ = _session_with_document(HttpStatusError(400))
    session.set_edit_mode(enabled=True)
    session.dispatch(RemoveSection("section-2"))
    before = session.pending_instructions()

    assert session.apply_changes() is False

    assert session.document == DOCUMENT
    assert session.pending_instructions() == before
    assert session.edit_mode is True
    assert session.error == "Invalid request. Please check your project plan and try again."


def test_apply_changes_needs_a_document() -> None:
    backend = StubBackend()
    session = ReadmeSession(backend, plan="Project Name: Demo")

    assert session.apply_changes() is False
    assert "Generate one first" in session.error
    assert backend.prompts == []


def test_set_option_validates_values() -> None:
    session = ReadmeSession(StubBackend())

    session.set_option("badge_style", "plastic")
    assert session.options.badge_style == "plastic"

    with pytest.raises(ConfigError):
        session.set_option("badge_style", "rounded")
    with pytest.raises(AttributeError):
        session.set_option("include_mascot", True)


def test_copy_flag_expires_after_two_seconds() -> None:
    clock = FakeClock()
    copied: list[str] = []
    session = ReadmeSession(StubBackend(), copy=copied.append, clock=clock)
    session.load_document(DOCUMENT)

    assert session.has_copied is False
    assert session.copy_to_clipboard() is True
    assert copied == [DOCUMENT]
    assert session.has_copied is True

    clock.now += 1.9
    assert session.has_copied is True
    clock.now += 0.2
    assert session.has_copied is False


def test_copy_failure_sets_error() -> None:
    def broken_copy(_: str) -> None:
        msg = "No clipboard tool found"
        raise ClipboardError(msg)

    session = ReadmeSession(StubBackend(), copy=broken_copy)

    assert session.copy_to_clipboard() is False
    assert session.has_copied is False
    assert session.error == "No clipboard tool found"
