"""Tests for the readme-forge command functions.

The commands are called directly with a stub backend patched in, so no
network or clipboard access happens.
"""

from __future__ import annotations

import typing as typ

import msgspec.json
import pytest

from readme_forge import cli
from readme_forge.errors import HttpStatusError

if typ.TYPE_CHECKING:
    from pathlib import Path

GENERATED = "```markdown\n# Demo\nA demo.\n## Usage\nRun it\n```"


class StubBackend:
    def __init__(self, reply: str | Exception) -> None:
        self.reply = reply
        self.prompts: list[str] = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if isinstance(self.reply, Exception):
            raise self.reply
        return self.reply


@pytest.fixture
def plan_file(tmp_path: Path) -> Path:
    path = tmp_path / "plan.txt"
    path.write_text("Project Name: Demo\nDescription: A demo.\n", encoding="utf-8")
    return path


def _use_backend(monkeypatch: pytest.MonkeyPatch, backend: StubBackend) -> None:
    monkeypatch.setattr(cli, "_build_backend", lambda: backend)


def _forbid_backend(monkeypatch: pytest.MonkeyPatch) -> None:
    def _build() -> StubBackend:
        msg = "this command must not build a generation client"
        raise AssertionError(msg)

    monkeypatch.setattr(cli, "_build_backend", _build)


def test_generate_writes_readme_and_preview(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    plan_file: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    backend = StubBackend(GENERATED)
    _use_backend(monkeypatch, backend)
    output = tmp_path / "README.md"
    preview = tmp_path / "preview.html"

    cli.generate(plan=plan_file, output=output, preview=preview)

    assert output.read_text(encoding="utf-8") == "# Demo\nA demo.\n## Usage\nRun it\n"
    assert 'data-section-id="section-1"' in preview.read_text(encoding="utf-8")
    assert "Project Name: Demo" in backend.prompts[0]
    assert "wrote" in capsys.readouterr().out


def test_generate_applies_options_file(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, plan_file: Path
) -> None:
    backend = StubBackend(GENERATED)
    _use_backend(monkeypatch, backend)
    options = tmp_path / "readme.yaml"
    options.write_text("options:\n  emoji-style: none\n", encoding="utf-8")

    cli.generate(plan=plan_file, options=options, output=tmp_path / "README.md")

    assert "Do not use emojis." in backend.prompts[0]


def test_generate_failure_exits_with_message(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    plan_file: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    _use_backend(monkeypatch, StubBackend(HttpStatusError(429, "quota")))
    output = tmp_path / "README.md"

    with pytest.raises(SystemExit) as excinfo:
        cli.generate(plan=plan_file, output=output)

    assert excinfo.value.code == 1
    assert not output.exists()
    assert (
        "error: Rate limit reached. Please wait a moment before trying again."
        in capsys.readouterr().err
    )


def test_generate_rejects_bad_options(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    plan_file: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    backend = StubBackend(GENERATED)
    _use_backend(monkeypatch, backend)
    options = tmp_path / "readme.yaml"
    options.write_text("options:\n  badge-style: round\n", encoding="utf-8")

    with pytest.raises(SystemExit):
        cli.generate(plan=plan_file, options=options, output=tmp_path / "README.md")

    assert "badge style" in capsys.readouterr().err
    assert backend.prompts == []


def test_update_replays_changes_file(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, plan_file: Path
) -> None:
    backend = StubBackend("# Demo\nA demo.")
    _use_backend(monkeypatch, backend)
    readme = tmp_path / "README.md"
    readme.write_text("# Demo\nA demo.\n## Usage\nRun it\n", encoding="utf-8")
    changes = tmp_path / "changes.yaml"
    changes.write_text(
        "changes:\n  - action: remove\n    section: section-1\n", encoding="utf-8"
    )

    cli.update(plan=plan_file, readme=readme, changes=changes, instructions="Be brief.")

    prompt = backend.prompts[0]
    assert "CHANGES TO MAKE:\nREMOVE these sections: Usage" in prompt
    assert "ADDITIONAL INSTRUCTIONS: Be brief." in prompt
    assert readme.read_text(encoding="utf-8") == "# Demo\nA demo.\n"


def test_update_rejects_unknown_section(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    plan_file: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    backend = StubBackend("unused")
    _use_backend(monkeypatch, backend)
    readme = tmp_path / "README.md"
    readme.write_text("# Demo\n", encoding="utf-8")
    changes = tmp_path / "changes.yaml"
    changes.write_text(
        "changes:\n  - action: remove\n    section: section-7\n", encoding="utf-8"
    )

    with pytest.raises(SystemExit):
        cli.update(plan=plan_file, readme=readme, changes=changes)

    assert "section-7" in capsys.readouterr().err
    assert backend.prompts == []


def test_sections_lists_ids(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    readme = tmp_path / "README.md"
    readme.write_text("Lead\n# Demo\n## Usage\nRun it", encoding="utf-8")

    cli.sections(readme)

    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "intro\tintro\t0\tIntroduction",
        "section-1\ttitle\t1\tDemo",
        "section-2\tsection\t2\tUsage",
    ]


def test_sections_json(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    readme = tmp_path / "README.md"
    readme.write_text("# Demo\n## Usage\nRun it", encoding="utf-8")

    cli.sections(readme, json=True)

    payload = msgspec.json.decode(capsys.readouterr().out)
    assert [entry["id"] for entry in payload] == ["section-0", "section-1"]
    assert payload[1]["content"] == "## Usage\nRun it"
    assert payload[1]["start_line"] == 1


def test_missing_readme_fails(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit):
        cli.sections(tmp_path / "absent.md")
    assert "not found" in capsys.readouterr().err


def test_format_rewrites_file(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    path = tmp_path / "README.md"
    path.write_text("ab cde", encoding="utf-8")

    cli.format_span(path, start=3, end=6, kind="bold")

    assert path.read_text(encoding="utf-8") == "ab **cde**"
    assert "cursor at 10" in capsys.readouterr().out


def test_format_rejects_bad_range(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    path = tmp_path / "README.md"
    path.write_text("abc", encoding="utf-8")

    with pytest.raises(SystemExit):
        cli.format_span(path, start=2, end=9, kind="bold")

    assert path.read_text(encoding="utf-8") == "abc"
    assert "outside a buffer" in capsys.readouterr().err


def test_preview_marks_pending_changes(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    _forbid_backend(monkeypatch)
    readme = tmp_path / "README.md"
    readme.write_text("# Demo\n## Usage\nRun it\n", encoding="utf-8")
    changes = tmp_path / "changes.yaml"
    changes.write_text(
        "changes:\n  - action: center\n    section: section-0\n", encoding="utf-8"
    )
    output = tmp_path / "page.html"

    cli.preview(readme, output=output, changes=changes)

    html = output.read_text(encoding="utf-8")
    assert "readme-section--centered" in html
    assert "CENTER these sections with" in html


def test_copy_uses_clipboard(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    _forbid_backend(monkeypatch)
    copied: list[str] = []
    monkeypatch.setattr("readme_forge.session.copy_text", copied.append)
    readme = tmp_path / "README.md"
    readme.write_text("# Demo\n", encoding="utf-8")

    cli.copy(readme)

    assert copied == ["# Demo\n"]
    assert "copied" in capsys.readouterr().out


def test_preview_and_copy_work_without_an_api_key(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    monkeypatch.setattr("readme_forge.session.copy_text", lambda _: None)
    readme = tmp_path / "README.md"
    readme.write_text("# Demo\n", encoding="utf-8")

    cli.preview(readme, output=tmp_path / "page.html")
    cli.copy(readme)

    assert (tmp_path / "page.html").exists()


def test_missing_options_file_is_reported(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    plan_file: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    _use_backend(monkeypatch, StubBackend(GENERATED))

    with pytest.raises(SystemExit):
        cli.generate(
            plan=plan_file,
            options=tmp_path / "absent.yaml",
            output=tmp_path / "README.md",
        )

    assert "Options file" in capsys.readouterr().err
    assert not (tmp_path / "README.md").exists()
