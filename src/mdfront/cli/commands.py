"""CLI command implementations"""

import json
from pathlib import Path
from typing import Annotated, Optional

import typer

from mdfront.config import Settings, load_config
from mdfront.core.models import Document
from mdfront.core.parse import parse_file
from mdfront.core.pipeline import run_check, run_ingest, run_list
from mdfront.core.render import render_html
from mdfront.core.serialize import format_value
from mdfront.crud.database import init_db, make_engine
from mdfront.errors import DocumentError


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _content_path(path: Optional[str], settings: Settings) -> Path:
    """Resolve the PATH argument, falling back to the configured content_dir."""
    target = Path(path or settings.content_dir)
    if not target.exists():
        _fail(f"Path not found: {target}")
    return target


def _summary(doc: Document) -> dict:
    return {
        "slug": doc.slug,
        "title": doc.title,
        "date": doc.date.isoformat(),
        "draft": doc.draft,
        "description": doc.description,
        "tags": doc.tags,
        "path": str(doc.path) if doc.path else None,
    }


def _doc_line(doc: Document) -> str:
    line = f"  {doc.date:%Y-%m-%d}  {doc.slug}  {doc.title}"
    return f"{line}  [draft]" if doc.draft else line


def check_cmd(
    path: Annotated[Optional[str], typer.Argument(help="File or directory to validate")] = None,
    ):
    """Validate front matter of every document; exit 1 if any is invalid."""
    settings = _settings()
    target = _content_path(path, settings)
    results = run_check(target)
    if not results:
        typer.echo(f"No markdown documents found under {target}.")
        raise typer.Exit(1)

    invalid = 0
    for src, err in results:
        if err is None:
            typer.echo(f"  ok: {src}")
            continue
        invalid += 1
        field = f" [field: {err.field}]" if err.field else ""
        typer.echo(f"  error: {src}: {err.message}{field}")
    typer.echo(f"Checked {len(results)} document(s) - {len(results) - invalid} ok, {invalid} invalid")
    if invalid:
        raise typer.Exit(1)


def list_cmd(
    path: Annotated[Optional[str], typer.Argument(help="File or directory to list")] = None,
    drafts: Annotated[Optional[bool], typer.Option("--drafts/--no-drafts", help="Include draft documents")] = None,
    tag: Annotated[Optional[str], typer.Option("--tag", help="Only documents carrying this tag")] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print a JSON array instead of lines")] = False,
    ):
    """List documents newest first; drafts are excluded unless --drafts."""
    settings = _settings(overrides={"include_drafts": drafts})
    target = _content_path(path, settings)
    try:
        docs = run_list(target, settings.include_drafts, tag, settings.strict)
    except DocumentError as e:
        _fail("Listing failed", e)

    if not docs:
        typer.echo("No published documents found.")
        raise typer.Exit(1)
    if as_json:
        typer.echo(json.dumps([_summary(d) for d in docs], indent=2, ensure_ascii=False))
        return
    for doc in docs:
        typer.echo(_doc_line(doc))
    typer.echo(f"{len(docs)} document(s)")


def show_cmd(
    file: Annotated[str, typer.Argument(help="Markdown document to parse")],
    html: Annotated[bool, typer.Option("--html", help="Render the body to HTML")] = False,
    as_json: Annotated[bool, typer.Option("--json", help="Print the parsed document as JSON")] = False,
    ):
    """Parse one document and print its metadata and body."""
    settings = _settings()
    try:
        doc = parse_file(Path(file))
    except DocumentError as e:
        _fail("Invalid document", e)
    except OSError as e:
        _fail(f"Cannot read {file}", e)

    if as_json:
        data = {**_summary(doc), "metadata": doc.metadata, "body": doc.body}
        typer.echo(json.dumps(data, indent=2, ensure_ascii=False, default=str))
        return
    if html:
        try:
            typer.echo(render_html(doc.body, settings.parser_config))
        except ValueError as e:
            _fail("Render failed", e)
        return
    for key, value in doc.metadata.items():
        typer.echo(f"{key}: {format_value(value)}")
    typer.echo(f"slug: {doc.slug}")
    typer.echo("")
    typer.echo(doc.body, nl=False)


def ingest_cmd(
    path: Annotated[Optional[str], typer.Argument(help="File or directory to ingest")] = None,
    drafts: Annotated[Optional[bool], typer.Option("--drafts/--no-drafts", help="Also catalog draft documents")] = None,
    ):
    """Upsert parsed documents into the catalog database."""
    settings = _settings(overrides={"include_drafts": drafts})
    target = _content_path(path, settings)
    engine = make_engine(settings.db_url)
    init_db(engine)

    try:
        counts, changes = run_ingest(engine, target, settings.include_drafts, settings.strict)
    except DocumentError as e:
        _fail("Ingest failed", e)

    for status, slug in changes:
        typer.echo(f"  {status}: {slug}")
    typer.echo(
        f"Ingest complete - "
        f"{counts['created']} created, "
        f"{counts['updated']} updated, "
        f"{counts['unchanged']} unchanged, "
        f"{counts['skipped']} drafts skipped, "
        f"{counts['invalid']} invalid"
    )


def init_cmd(
    reset: Annotated[bool, typer.Option("--reset", help="Drop and recreate all tables")] = False,
    ):
    """Initialize the catalog schema. Use --reset to clear existing data."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    init_db(engine, reset=reset)
    if reset:
        typer.echo("Existing data cleared.")
    typer.echo(f"Catalog initialized at: {settings.db_url}")
