"""Cyclopts CLI entrypoint for generating and editing README files.

The ``readme-forge`` console script defined here turns a project plan into a
README through the generation endpoint, replays section edits from a YAML
changes file, lists a README's sections, renders the click-to-edit preview
page, applies inline formatting to a span of a file, and copies a README to
the clipboard.

Examples
--------
Generate a README with the default options:

>>> from readme_forge.cli import main
>>> main()  # doctest: +SKIP

Generate with an options file and write the editor preview alongside:

>>> from readme_forge.cli import app
>>> app(
...     ["generate", "--plan", "plan.txt", "--options", "readme.yaml",
...      "--preview", "readme.html"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
import msgspec.json
from cyclopts import App, Parameter

from .change_file import load_change_actions
from .client import GenerativeLanguageClient
from .config import load_options, load_settings
from .errors import ReadmeForgeError, describe_error
from .formatter import FORMAT_KINDS, apply_inline_format
from .markdown_parser import parse_sections
from .preview import EditorPageBuilder
from .session import ReadmeSession

if typ.TYPE_CHECKING:
    from .client import GenerationBackend

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = Path("README.md")
DEFAULT_PREVIEW = Path("readme-preview.html")

app = App(
    name="readme-forge",
    config=cyclopts.config.Env("README_FORGE_", command=False),  # type: ignore[unknown-argument]
)


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _build_backend() -> GenerationBackend:
    settings = load_settings()
    logger.debug("Using model %s at %s", settings.model, settings.api_base)
    return GenerativeLanguageClient.from_settings(settings)


def _fail(message: str) -> typ.NoReturn:
    print(f"error: {message}", file=sys.stderr)
    raise SystemExit(1)


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        _fail(f"'{_format_path(path)}' not found.")


def _write_document(path: Path, document: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    text = document if document.endswith("\n") else document + "\n"
    path.write_text(text, encoding="utf-8")
    print(f"wrote {_format_path(path)}")


@app.command(help="Generate a README from a project plan.")
def generate(
    *,
    plan: typ.Annotated[Path, Parameter(help="Path to the project plan text")],
    options: typ.Annotated[
        Path | None, Parameter(help="YAML file with generation options")
    ] = None,
    output: typ.Annotated[
        Path, Parameter(help="Where to write the README")
    ] = DEFAULT_OUTPUT,
    preview: typ.Annotated[
        Path | None, Parameter(help="Also write the editor preview page here")
    ] = None,
    verbose: bool = False,
) -> None:
    """Generate a README and write it to ``output``.

    Parameters
    ----------
    plan : Path
        Text file holding the free-text project plan.
    options : Path or None, optional
        YAML file whose ``options`` mapping overrides the defaults.
    output : Path, optional
        Destination for the generated markdown; defaults to ``README.md``.
    preview : Path or None, optional
        When set, the editor page for the new document is written here.
    verbose : bool, optional
        Log debug output, including request details.

    Returns
    -------
    None
        Writes the README (and optionally the preview) and prints the paths.
        Exits with status 1 and a message on stderr when generation fails.
    """
    _configure_logging(verbose=verbose)
    try:
        generation_options = load_options(options)
    except FileNotFoundError as exc:
        _fail(str(exc))
    except ReadmeForgeError as exc:
        _fail(describe_error(exc))

    session = ReadmeSession(
        _build_backend(), plan=_read_text(plan), options=generation_options
    )
    if not session.generate():
        _fail(session.error)
    _write_document(output, session.document)
    if preview:
        path = EditorPageBuilder(session).run(preview)
        print(f"wrote {_format_path(path)}")


@app.command(help="Apply section edits from a changes file and regenerate.")
def update(
    *,
    plan: typ.Annotated[Path, Parameter(help="Path to the project plan text")],
    readme: typ.Annotated[Path, Parameter(help="README to update")],
    changes: typ.Annotated[
        Path | None, Parameter(help="YAML file listing section edits")
    ] = None,
    instructions: typ.Annotated[
        str | None, Parameter(help="Extra free-text regeneration instructions")
    ] = None,
    output: typ.Annotated[
        Path | None, Parameter(help="Where to write the result (defaults to --readme)")
    ] = None,
    verbose: bool = False,
) -> None:
    """Replay edits against ``readme`` and write the regenerated document.

    Section ids in the changes file refer to the ids printed by ``sections``.
    """
    _configure_logging(verbose=verbose)
    session = ReadmeSession(_build_backend(), plan=_read_text(plan))
    session.load_document(_read_text(readme))
    try:
        actions = load_change_actions(changes) if changes else []
        for action in actions:
            session.dispatch(action)
    except FileNotFoundError as exc:
        _fail(str(exc))
    except ReadmeForgeError as exc:
        _fail(describe_error(exc))

    if not session.apply_changes(instructions):
        _fail(session.error)
    _write_document(output or readme, session.document)


@app.command(help="List the sections of a README.")
def sections(
    readme: Path,
    *,
    json: typ.Annotated[bool, Parameter(help="Print sections as JSON")] = False,
) -> None:
    """Print the id, type, start line and title of every section."""
    parsed = parse_sections(_read_text(readme))
    if json:
        sys.stdout.write(msgspec.json.encode(parsed).decode("utf-8") + "\n")
        return
    for section in parsed:
        print(f"{section.id}\t{section.type}\t{section.start_line}\t{section.title}")


@app.command(help="Render the click-to-edit preview page for a README.")
def preview(
    readme: Path,
    *,
    output: typ.Annotated[
        Path, Parameter(help="Where to write the HTML page")
    ] = DEFAULT_PREVIEW,
    changes: typ.Annotated[
        Path | None, Parameter(help="Show pending edits from this changes file")
    ] = None,
) -> None:
    """Write the editor page for ``readme``, with any pending edits marked."""
    session = ReadmeSession()
    session.load_document(_read_text(readme))
    try:
        for action in load_change_actions(changes) if changes else []:
            session.dispatch(action)
    except FileNotFoundError as exc:
        _fail(str(exc))
    except ReadmeForgeError as exc:
        _fail(describe_error(exc))
    path = EditorPageBuilder(session).run(output)
    print(f"wrote {_format_path(path)}")


@app.command(name="format", help="Apply inline formatting to a span of a file.")
def format_span(
    path: Path,
    *,
    start: typ.Annotated[int, Parameter(help="Selection start offset")],
    end: typ.Annotated[int, Parameter(help="Selection end offset (exclusive)")],
    kind: typ.Annotated[
        str, Parameter(help=f"One of: {', '.join(FORMAT_KINDS)}")
    ],
    url: str | None = None,
    style: str | None = None,
    color: str | None = None,
) -> None:
    """Rewrite ``path`` with ``[start, end)`` formatted in place."""
    text = _read_text(path)
    try:
        result = apply_inline_format(
            text, start, end, kind, url=url, style=style, color=color
        )
    except ValueError as exc:
        _fail(str(exc))
    path.write_text(result.text, encoding="utf-8")
    print(f"wrote {_format_path(path)} (cursor at {result.cursor})")


@app.command(help="Copy a README to the system clipboard.")
def copy(readme: Path) -> None:
    """Copy the contents of ``readme`` to the clipboard."""
    session = ReadmeSession()
    session.load_document(_read_text(readme))
    if not session.copy_to_clipboard():
        _fail(session.error)
    print(f"copied {_format_path(readme)} to the clipboard")


def main() -> None:
    """Invoke the Cyclopts application behind the ``readme-forge`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
