"""CLI for snipnotes (terminal UI, listing, search, export)."""

import json
import sqlite3
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from snipnotes.clipboard import SystemClipboard
from snipnotes.config import AppPaths
from snipnotes.core.code_store import CodeStore
from snipnotes.core.database.schema import connect, migrate_schema
from snipnotes.core.database.store import load_sections
from snipnotes.core.search.local import LocalProvider
from snipnotes.core.session.controller import SessionController
from snipnotes.errors import ExportError, StoreError
from snipnotes.export import Exporter
from snipnotes.logging_config import configure_logging
from snipnotes.models.note import ExportFormat, Section

app = typer.Typer(help="snipnotes: sections of notes with attached code snippets.")


@dataclass(frozen=True)
class CliState:
    paths: AppPaths
    verbose: bool


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    base_dir: Annotated[
        Path | None,
        typer.Option("--base-dir", "-d", help="Data directory (default: $SNIPNOTES_HOME)"),
    ] = None,
) -> None:
    configure_logging(verbose=verbose)
    ctx.obj = CliState(paths=AppPaths.resolve(base_dir), verbose=verbose)


def _open_store(paths: AppPaths) -> sqlite3.Connection:
    """Create the data directories and open the database, exiting on failure."""
    try:
        paths.ensure()
        conn = connect(paths.db_path)
        migrate_schema(conn)
    except (OSError, sqlite3.Error) as e:
        logger.error("Cannot open store at {}: {}", paths.db_path, e)
        raise typer.Exit(1) from e
    return conn


def _load(conn: sqlite3.Connection) -> list[Section]:
    try:
        return load_sections(conn)
    except StoreError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from e


@app.command()
def run(ctx: typer.Context) -> None:
    """Start the interactive terminal UI."""
    from snipnotes.tui.app import run as run_tui

    state: CliState = ctx.obj
    conn = _open_store(state.paths)
    try:
        controller = SessionController(
            conn,
            CodeStore(state.paths.code_dir),
            exporter=Exporter(state.paths.export_dir),
            clipboard=SystemClipboard(),
        )
        try:
            controller.load()
        except StoreError as e:
            logger.error("{}", e)
            raise typer.Exit(1) from e
        # The UI owns the terminal from here on.
        configure_logging(verbose=state.verbose, log_file=state.paths.log_file)
        run_tui(controller)
    finally:
        conn.close()


@app.command()
def sections(ctx: typer.Context) -> None:
    """List sections with their detail counts."""
    state: CliState = ctx.obj
    conn = _open_store(state.paths)
    try:
        for section in _load(conn):
            typer.echo(f"{section.title}  ({len(section.details)} details)")
            for detail in section.details:
                typer.echo(f"    {detail.language.icon} {detail.title}")
    finally:
        conn.close()


@app.command()
def search(
    ctx: typer.Context,
    query: str = typer.Argument(..., help="Substring to search for"),
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Search section titles and detail text in the local store."""
    state: CliState = ctx.obj
    conn = _open_store(state.paths)
    try:
        try:
            results = LocalProvider(conn).search(query)
        except StoreError as e:
            logger.error("{}", e)
            raise typer.Exit(1) from e

        if output_json:
            data = {
                "results": [
                    {**asdict(r), "source": r.source.value} for r in results
                ],
                "total": len(results),
            }
            typer.echo(json.dumps(data, indent=2, ensure_ascii=False))
        else:
            typer.echo(f"Found {len(results)} results:\n")
            for r in results:
                typer.echo(f"  {r.title}")
                if r.description:
                    typer.echo(f"    {r.description.splitlines()[0][:80]}")
    finally:
        conn.close()


@app.command()
def export(
    ctx: typer.Context,
    fmt: ExportFormat = typer.Argument(..., metavar="FORMAT", help="json, html or csv"),
) -> None:
    """Export all sections without starting the UI."""
    state: CliState = ctx.obj
    conn = _open_store(state.paths)
    try:
        all_sections = _load(conn)
        try:
            path = Exporter(state.paths.export_dir).write(all_sections, fmt)
        except ExportError as e:
            logger.error("{}", e)
            raise typer.Exit(1) from e
        typer.echo(f"Exported {len(all_sections)} sections to {path}")
    finally:
        conn.close()
