"""Command-line interface for the MileStone project catalogue."""
from __future__ import annotations

import os
import sqlite3
import subprocess
import sys
import time
from pathlib import Path
from typing import Dict, List, Optional
from urllib import error as urllib_error, request as urllib_request

import typer
from rich import print as rprint
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from . import sections, state, store
from .editor import ProjectEditor
from .flow import chip_rows
from .models import ProjectRecord, apply_payload, new_project_template, parse_date
from .timeline import group_by_year, timeline_entries

app = typer.Typer(help="Catalogue portfolio projects from the command line")
project_app = typer.Typer(help="Create, inspect, and edit projects")
section_app = typer.Typer(help="Show, add, and delete optional project sections")
item_app = typer.Typer(help="Edit tech stack, key feature, and tag entries")
image_app = typer.Typer(help="Manage project images")
resume_app = typer.Typer(help="Store the résumé PDF")
service_app = typer.Typer(help="Background web service utilities")

SERVER_MODULE_PATH = "milestone.server"
ITEM_FIELDS = {"tech": "tech_stack", "feature": "key_features", "tag": "tags"}

DbOption = typer.Option(None, "--db", help="Path to the project database (defaults to the configured one)")


def _connect(db: Optional[Path]) -> sqlite3.Connection:
    return store.connect(state.database_path(db))


def _resolve_project_id(conn: sqlite3.Connection, project_id: str) -> str:
    """Accept a full id or an unambiguous prefix of one."""
    rows = conn.execute(
        "SELECT id FROM projects WHERE substr(id, 1, ?) = ? ORDER BY id",
        (len(project_id), project_id),
    ).fetchall()
    if not rows:
        raise typer.BadParameter(f"Project '{project_id}' not found.")
    if len(rows) > 1 and rows[0]["id"] != project_id:
        raise typer.BadParameter(f"Project id prefix '{project_id}' is ambiguous.")
    return rows[0]["id"]


def _load(conn: sqlite3.Connection, project_id: str) -> ProjectRecord:
    return store.load_project(conn, _resolve_project_id(conn, project_id))


def _item_field(name: str) -> str:
    field_name = ITEM_FIELDS.get(name.strip().lower())
    if field_name is None:
        raise typer.BadParameter(f"Unknown field '{name}'. Expected one of: {', '.join(ITEM_FIELDS)}")
    return field_name


def _section(name: str) -> sections.SectionId:
    try:
        return sections.parse_section(name)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _apply(record: ProjectRecord, payload: Dict[str, object]) -> None:
    try:
        apply_payload(record, payload)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _chip_lines(labels: List[str], width: int, spacing: int) -> List[str]:
    rows = chip_rows(labels, width, spacing)
    gap = " " * spacing
    return [gap.join(f"[cyan]{escape(f'[{label}]')}[/cyan]" for label in row) for row in rows]


def _render_section(record: ProjectRecord, section: sections.SectionId, width: int, spacing: int) -> List[str]:
    lines: List[str] = []
    if section is sections.SectionId.OVERVIEW:
        for label, value in (("Problem", record.problem), ("Solution", record.solution), ("Goals", record.goals)):
            if value.strip():
                lines.append(f"[bold]{label}:[/bold] {escape(value)}")
    elif section is sections.SectionId.DETAILS:
        lines.extend(f"• {escape(feature)}" for feature in record.key_features if feature.strip())
        if record.challenges.strip():
            lines.append(f"[bold]Challenges:[/bold] {escape(record.challenges)}")
    elif section is sections.SectionId.VISUALS:
        lines.append(f"{len(record.images)} image(s)")
    elif section is sections.SectionId.LINKS:
        for label, url in (("GitHub", record.github_url), ("Live", record.live_url), ("Figma", record.figma_url)):
            if url:
                lines.append(f"{label}: {escape(url)}")
    elif section is sections.SectionId.NOTES:
        lines.append(escape(record.notes))
    elif section is sections.SectionId.TAGS:
        lines.extend(_chip_lines([tag for tag in record.tags if tag.strip()], width, spacing))
    return lines or ["[dim](empty)[/dim]"]


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------

@project_app.command("add")
def project_add(
    title: str = typer.Argument(..., help="Project title"),
    description: str = typer.Option(..., "--description", "-d", help="Short description"),
    start_date: Optional[str] = typer.Option(None, "--start-date", help="ISO start date (defaults to today)"),
    end_date: Optional[str] = typer.Option(None, "--end-date", help="ISO end date; omit for ongoing projects"),
    tagline: str = typer.Option("", "--tagline", help="One-line tagline"),
    tech: Optional[List[str]] = typer.Option(None, "--tech", "-t", help="Tech stack entry (repeatable)"),
    tag: Optional[List[str]] = typer.Option(None, "--tag", help="Tag (repeatable)"),
    db: Optional[Path] = DbOption,
) -> None:
    """Create a project record."""

    if not title.strip():
        raise typer.BadParameter("Title must not be blank.")
    try:
        start = parse_date(start_date)
        end = parse_date(end_date)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    record = new_project_template()
    record.title = title.strip()
    record.description = description
    record.tagline = tagline
    record.tech_stack = list(tech or [])
    record.tags = list(tag or [])
    if start is not None:
        record.start_date = start
    record.end_date = end

    conn = _connect(db)
    try:
        store.insert_project(conn, record)
    finally:
        conn.close()
    typer.echo(f"Created project '{record.title}' ({record.id}).")


@project_app.command("new")
def project_new(db: Optional[Path] = DbOption) -> None:
    """Create a placeholder project to fill in later."""

    record = new_project_template()
    conn = _connect(db)
    try:
        store.insert_project(conn, record)
    finally:
        conn.close()
    typer.echo(f"Created project '{record.title}' ({record.id}).")


@project_app.command("list")
def project_list(
    favorites: bool = typer.Option(False, "--favorites", help="Only show favourite projects"),
    search: Optional[str] = typer.Option(None, "--search", "-s", help="Only show projects whose title contains TEXT"),
    db: Optional[Path] = DbOption,
) -> None:
    """List projects, newest first."""

    conn = _connect(db)
    try:
        records = store.list_projects(conn, search=search)
    finally:
        conn.close()
    if favorites:
        records = [record for record in records if record.is_favorite]
    if not records:
        typer.echo("No projects found.")
        raise typer.Exit(code=0)

    table = Table(title="Projects")
    table.add_column("ID", style="cyan")
    table.add_column("Title")
    table.add_column("Status")
    table.add_column("Dates")
    table.add_column("Tech")
    for record in records:
        star = "★ " if record.is_favorite else ""
        table.add_row(
            record.id[:8],
            f"{star}{escape(record.title)}",
            f"[{record.status.color}]{record.status.label}[/{record.status.color}]",
            f"{record.date_range_text()} ({record.duration_text()})",
            escape(", ".join(item for item in record.tech_stack if item.strip())),
        )
    rprint(table)


@project_app.command("show")
def project_show(
    project_id: str = typer.Argument(..., help="Project id or id prefix"),
    width: Optional[int] = typer.Option(None, "--width", help="Wrap width for chips (defaults to the terminal)"),
    db: Optional[Path] = DbOption,
) -> None:
    """Show a project with its active sections."""

    conn = _connect(db)
    try:
        record = _load(conn, project_id)
    finally:
        conn.close()
    state.record_project_open({"id": record.id, "title": record.title})

    wrap_width = width or Console().width
    spacing = int(state.load_settings().get("chipSpacing", 1))
    visibility = sections.recompute_visibility(record)

    star = " ★" if record.is_favorite else ""
    rprint(f"[bold]{escape(record.title)}[/bold]{star}  [dim]{record.id}[/dim]")
    if record.tagline:
        rprint(f"[italic]{escape(record.tagline)}[/italic]")
    rprint(
        f"[{record.status.color}]{record.status.label}[/{record.status.color}] • {record.project_type.label}"
        f" • {record.date_range_text()} ({record.duration_text()})"
    )
    if record.description:
        rprint(escape(record.description))
    if record.role or record.team_size:
        rprint(f"Role: {escape(record.role or '-')} • Team: {escape(record.team_size or '-')}")
    tech = [item for item in record.tech_stack if item.strip()]
    if tech:
        rprint("[bold]Tech stack[/bold]")
        for line in _chip_lines(tech, wrap_width, spacing):
            rprint(line)

    tree = Tree("[bold]Sections[/bold]")
    for section in visibility.active:
        branch = tree.add(f"[magenta]{sections.SECTION_TABLE[section].title}[/magenta]")
        for line in _render_section(record, section, wrap_width, spacing):
            branch.add(line)
    rprint(tree)
    if visibility.available:
        typer.echo("Available to add: " + ", ".join(section.value for section in visibility.available))


@project_app.command("update")
def project_update(
    project_id: str = typer.Argument(..., help="Project id or id prefix"),
    title: Optional[str] = typer.Option(None, "--title"),
    tagline: Optional[str] = typer.Option(None, "--tagline"),
    description: Optional[str] = typer.Option(None, "--description", "-d"),
    role: Optional[str] = typer.Option(None, "--role"),
    team_size: Optional[str] = typer.Option(None, "--team-size"),
    start_date: Optional[str] = typer.Option(None, "--start-date", help="ISO start date"),
    end_date: Optional[str] = typer.Option(None, "--end-date", help="ISO end date"),
    ongoing: bool = typer.Option(False, "--ongoing", help="Clear the end date"),
    status: Optional[str] = typer.Option(None, "--status", "-s", help="inProgress, completed, or launched"),
    project_type: Optional[str] = typer.Option(None, "--type", help="personal or team"),
    github: Optional[str] = typer.Option(None, "--github", help="GitHub URL (empty string clears it)"),
    live: Optional[str] = typer.Option(None, "--live", help="Live URL (empty string clears it)"),
    figma: Optional[str] = typer.Option(None, "--figma", help="Figma URL (empty string clears it)"),
    problem: Optional[str] = typer.Option(None, "--problem"),
    solution: Optional[str] = typer.Option(None, "--solution"),
    goals: Optional[str] = typer.Option(None, "--goals"),
    challenges: Optional[str] = typer.Option(None, "--challenges"),
    notes: Optional[str] = typer.Option(None, "--notes"),
    db: Optional[Path] = DbOption,
) -> None:
    """Update fields on an existing project."""

    if end_date and ongoing:
        raise typer.BadParameter("Cannot specify both --end-date and --ongoing.")
    payload: Dict[str, object] = {
        key: value
        for key, value in (
            ("title", title),
            ("tagline", tagline),
            ("description", description),
            ("role", role),
            ("teamSize", team_size),
            ("startDate", start_date),
            ("endDate", end_date),
            ("status", status),
            ("projectType", project_type),
            ("githubURL", github),
            ("liveURL", live),
            ("figmaURL", figma),
            ("problem", problem),
            ("solution", solution),
            ("goals", goals),
            ("challenges", challenges),
            ("notes", notes),
        )
        if value is not None
    }
    if ongoing:
        payload["endDate"] = None
    if not payload:
        typer.echo("No updates specified; nothing to do.")
        raise typer.Exit(code=0)

    conn = _connect(db)
    try:
        record = _load(conn, project_id)
        _apply(record, payload)
        store.save_project(conn, record)
    finally:
        conn.close()
    typer.echo(f"Updated project '{record.title}'.")


@project_app.command("delete")
def project_delete(
    project_id: str = typer.Argument(..., help="Project id or id prefix"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
    db: Optional[Path] = DbOption,
) -> None:
    """Delete a project permanently."""

    conn = _connect(db)
    try:
        record = _load(conn, project_id)
        if not yes:
            typer.confirm(f"Delete '{record.title}'?", abort=True)
        store.delete_project(conn, record.id)
    finally:
        conn.close()
    typer.echo(f"Deleted project '{record.title}'.")


@project_app.command("favorite")
def project_favorite(
    project_id: str = typer.Argument(..., help="Project id or id prefix"),
    db: Optional[Path] = DbOption,
) -> None:
    """Toggle the favourite flag."""

    conn = _connect(db)
    try:
        record = _load(conn, project_id)
        is_favorite = ProjectEditor(record).toggle_favorite()
        store.save_project(conn, record)
    finally:
        conn.close()
    typer.echo(f"'{record.title}' is {'now' if is_favorite else 'no longer'} a favourite.")


@project_app.command("tidy")
def project_tidy(
    project_id: str = typer.Argument(..., help="Project id or id prefix"),
    db: Optional[Path] = DbOption,
) -> None:
    """Drop blank tech stack, key feature, and tag entries."""

    conn = _connect(db)
    try:
        record = _load(conn, project_id)
        sections.prune_blank_entries(record)
        store.save_project(conn, record)
    finally:
        conn.close()
    typer.echo(f"Tidied '{record.title}'.")


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------

@section_app.command("list")
def section_list(
    project_id: str = typer.Argument(..., help="Project id or id prefix"),
    db: Optional[Path] = DbOption,
) -> None:
    """Show which sections are active and which can be added."""

    conn = _connect(db)
    try:
        record = _load(conn, project_id)
    finally:
        conn.close()

    active = set(sections.active_sections(record))
    table = Table(title=f"Sections for {escape(record.title)}")
    table.add_column("Section", style="cyan")
    table.add_column("State")
    table.add_column("Enabled")
    for section in sections.CANONICAL_ORDER:
        table.add_row(
            section.value,
            "[green]active[/green]" if section in active else "[dim]available[/dim]",
            "yes" if section.value in record.enabled_sections else "",
        )
    rprint(table)


@section_app.command("add")
def section_add(
    project_id: str = typer.Argument(..., help="Project id or id prefix"),
    section_name: str = typer.Argument(..., help="overview, details, visuals, links, notes, or tags"),
    db: Optional[Path] = DbOption,
) -> None:
    """Enable a section even while its fields are empty."""

    section = _section(section_name)
    conn = _connect(db)
    try:
        record = _load(conn, project_id)
        sections.add_section(record, section)
        store.save_project(conn, record)
    finally:
        conn.close()
    typer.echo(f"Added section '{section.value}'.")


@section_app.command("delete")
def section_delete(
    project_id: str = typer.Argument(..., help="Project id or id prefix"),
    section_name: str = typer.Argument(..., help="overview, details, visuals, links, notes, or tags"),
    db: Optional[Path] = DbOption,
) -> None:
    """Clear a section's fields and hide it."""

    section = _section(section_name)
    conn = _connect(db)
    try:
        record = _load(conn, project_id)
        sections.delete_section(record, section)
        store.save_project(conn, record)
    finally:
        conn.close()
    typer.echo(f"Deleted section '{section.value}'.")


# ---------------------------------------------------------------------------
# List items and images
# ---------------------------------------------------------------------------

@item_app.command("add")
def item_add(
    project_id: str = typer.Argument(..., help="Project id or id prefix"),
    field_name: str = typer.Argument(..., help="tech, feature, or tag"),
    value: str = typer.Argument(..., help="Entry text"),
    db: Optional[Path] = DbOption,
) -> None:
    """Append an entry."""

    attribute = _item_field(field_name)
    conn = _connect(db)
    try:
        record = _load(conn, project_id)
        index = ProjectEditor(record).append_item(attribute, value)
        store.save_project(conn, record)
    finally:
        conn.close()
    typer.echo(f"Added {field_name} #{index}.")


@item_app.command("set")
def item_set(
    project_id: str = typer.Argument(..., help="Project id or id prefix"),
    field_name: str = typer.Argument(..., help="tech, feature, or tag"),
    index: int = typer.Argument(..., help="Zero-based entry index"),
    value: str = typer.Argument(..., help="New entry text"),
    db: Optional[Path] = DbOption,
) -> None:
    """Replace an entry."""

    attribute = _item_field(field_name)
    conn = _connect(db)
    try:
        record = _load(conn, project_id)
        changed = ProjectEditor(record).update_item(attribute, index, value)
        if changed:
            store.save_project(conn, record)
    finally:
        conn.close()
    typer.echo(f"Updated {field_name} #{index}." if changed else f"No {field_name} at index {index}; nothing changed.")


@item_app.command("remove")
def item_remove(
    project_id: str = typer.Argument(..., help="Project id or id prefix"),
    field_name: str = typer.Argument(..., help="tech, feature, or tag"),
    index: int = typer.Argument(..., help="Zero-based entry index"),
    db: Optional[Path] = DbOption,
) -> None:
    """Remove an entry."""

    attribute = _item_field(field_name)
    conn = _connect(db)
    try:
        record = _load(conn, project_id)
        changed = ProjectEditor(record).remove_item(attribute, index)
        if changed:
            store.save_project(conn, record)
    finally:
        conn.close()
    typer.echo(f"Removed {field_name} #{index}." if changed else f"No {field_name} at index {index}; nothing changed.")


@image_app.command("add")
def image_add(
    project_id: str = typer.Argument(..., help="Project id or id prefix"),
    path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Image file"),
    thumbnail: bool = typer.Option(False, "--thumbnail", help="Use the image as the project thumbnail"),
    db: Optional[Path] = DbOption,
) -> None:
    """Attach an image file to a project."""

    data = path.read_bytes()
    conn = _connect(db)
    try:
        record = _load(conn, project_id)
        editor = ProjectEditor(record)
        if thumbnail:
            editor.complete_thumbnail_load(editor.begin_load("thumbnail"), data)
        else:
            editor.complete_images_load(editor.begin_load("images"), [data])
        store.save_project(conn, record)
    finally:
        conn.close()
    typer.echo(f"Set thumbnail for '{record.title}'." if thumbnail else f"Added image to '{record.title}'.")


@image_app.command("remove")
def image_remove(
    project_id: str = typer.Argument(..., help="Project id or id prefix"),
    index: int = typer.Argument(..., help="Zero-based image index"),
    db: Optional[Path] = DbOption,
) -> None:
    """Remove an image."""

    conn = _connect(db)
    try:
        record = _load(conn, project_id)
        changed = ProjectEditor(record).remove_image(index)
        if changed:
            store.save_project(conn, record)
    finally:
        conn.close()
    typer.echo(f"Removed image #{index}." if changed else f"No image at index {index}; nothing changed.")


# ---------------------------------------------------------------------------
# Timeline and résumé
# ---------------------------------------------------------------------------

@app.command("timeline")
def timeline(
    by_year: bool = typer.Option(False, "--by-year", help="Group projects by start year instead"),
    db: Optional[Path] = DbOption,
) -> None:
    """Show projects in chronological order."""

    conn = _connect(db)
    try:
        records = store.list_projects(conn)
    finally:
        conn.close()
    if not records:
        typer.echo("No projects found.")
        raise typer.Exit(code=0)

    tree = Tree("[bold]Timeline[/bold]")
    if by_year:
        for year, group in group_by_year(records).items():
            branch = tree.add(f"[cyan]{year}[/cyan]")
            for record in group:
                branch.add(f"{escape(record.title)} • {record.date_range_text()}")
    else:
        for entry in timeline_entries(records):
            label = f"[cyan]{entry.date_label}[/cyan] {escape(entry.record.title)}"
            if entry.duration_label:
                label += f" [dim]({entry.duration_label})[/dim]"
            tree.add(label)
    rprint(tree)


@resume_app.command("import")
def resume_import(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="PDF file"),
    db: Optional[Path] = DbOption,
) -> None:
    """Store a résumé PDF, replacing any previous one."""

    conn = _connect(db)
    try:
        store.set_resume(conn, path.read_bytes())
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    finally:
        conn.close()
    typer.echo(f"Imported résumé from {path}.")


@resume_app.command("export")
def resume_export(
    path: Path = typer.Argument(..., help="Destination file"),
    db: Optional[Path] = DbOption,
) -> None:
    """Write the stored résumé PDF to a file."""

    conn = _connect(db)
    try:
        data = store.get_resume(conn)
    finally:
        conn.close()
    if data is None:
        raise typer.BadParameter("No résumé stored. Run `milestone resume import` first.")
    path.write_bytes(data)
    typer.echo(f"Wrote {path}")


@resume_app.command("clear")
def resume_clear(db: Optional[Path] = DbOption) -> None:
    """Remove the stored résumé."""

    conn = _connect(db)
    try:
        removed = store.clear_resume(conn)
    finally:
        conn.close()
    typer.echo("Résumé removed." if removed else "No résumé stored.")


@resume_app.command("status")
def resume_status(db: Optional[Path] = DbOption) -> None:
    """Report whether a résumé is stored."""

    conn = _connect(db)
    try:
        data = store.get_resume(conn)
    finally:
        conn.close()
    if data is None:
        typer.echo("No résumé stored.")
    else:
        typer.echo(f"Résumé stored ({len(data) / 1024:.2f} KB).")


# ---------------------------------------------------------------------------
# Background service
# ---------------------------------------------------------------------------

def _server_log_path() -> Path:
    return state.global_runtime_dir() / "server.log"


def _server_port() -> int:
    return int(state.load_settings()["port"])


def _ping_server(port: int, timeout: float = 0.5) -> bool:
    try:
        with urllib_request.urlopen(f"http://127.0.0.1:{port}/__health", timeout=timeout) as response:
            return response.status == 200
    except (urllib_error.URLError, urllib_error.HTTPError, ConnectionError):
        return False


def _start_server_process(port: int, db: Optional[Path]) -> subprocess.Popen:
    server_log = _server_log_path()
    server_log.parent.mkdir(parents=True, exist_ok=True)
    cmd = [sys.executable, "-m", SERVER_MODULE_PATH, "--port", str(port)]
    if db is not None:
        cmd.extend(["--db", str(state.database_path(db))])
    # the child keeps its own copy of the descriptor
    with open(server_log, "a", encoding="utf-8", buffering=1) as log_handle:
        return subprocess.Popen(
            cmd,
            stdout=log_handle,
            stderr=log_handle,
            stdin=subprocess.DEVNULL,
            close_fds=os.name != "nt",
            start_new_session=os.name != "nt",
        )


def _get_or_start_server(port: int, db: Optional[Path] = None) -> int:
    """Reuse a running server on ``port`` or start one.

    Raises:
        typer.BadParameter: If the server does not answer its health check within 5 seconds
    """
    if _ping_server(port):
        return port

    process = _start_server_process(port, db)
    start = time.time()
    while time.time() - start < 5:
        if process.poll() is not None:
            break
        if _ping_server(port):
            return port
        time.sleep(0.2)

    process.terminate()
    raise typer.BadParameter(
        f"Failed to start MileStone web server. Check log file for details:\n{_server_log_path()}"
    )


def _shutdown_service(port: int) -> bool:
    """Ask the server to stop and wait for it; returns False if it was not running or did not stop."""
    if not _ping_server(port):
        return False

    request_obj = urllib_request.Request(
        f"http://127.0.0.1:{port}/__stop",
        data=b"{}",
        headers={"Content-Type": "application/json"},
    )
    try:
        with urllib_request.urlopen(request_obj, timeout=1) as resp:
            if resp.status == 200:
                for _ in range(25):
                    if not _ping_server(port):
                        return True
                    time.sleep(0.2)
    except (urllib_error.URLError, ConnectionError):
        return False

    return False


@service_app.command("start")
def service_start(db: Optional[Path] = DbOption) -> None:
    """Start the background web service."""

    port = _server_port()
    if _ping_server(port):
        typer.echo(f"MileStone web service is already running on port {port}.")
        return
    _get_or_start_server(port, db)
    typer.echo(f"MileStone web service started on port {port}.")
    typer.echo(f"Server logs: {_server_log_path()}")


@service_app.command("stop")
def service_stop() -> None:
    """Stop the background web service."""

    port = _server_port()
    if not _ping_server(port):
        typer.echo("MileStone web service is not running.")
        return
    typer.echo(f"Stopping MileStone web service on port {port}...")
    graceful = _shutdown_service(port)
    typer.echo("Service stopped cleanly." if graceful else "Service stopped.")


@service_app.command("restart")
def service_restart(db: Optional[Path] = DbOption) -> None:
    """Restart the background web service."""

    port = _server_port()
    typer.echo("Restarting MileStone web service...")
    _shutdown_service(port)
    _get_or_start_server(port, db)
    typer.echo(f"MileStone web service restarted on port {port}.")


@service_app.command("status")
def service_status() -> None:
    """Check whether the web service is running."""

    port = _server_port()
    if _ping_server(port):
        typer.echo(f"MileStone web service is running on port {port}.")
        typer.echo(f"API root: http://127.0.0.1:{port}/api/projects")
    else:
        typer.echo("MileStone web service is not running.")
    typer.echo(f"Server logs: {_server_log_path()}")


@service_app.command("logs")
def service_logs() -> None:
    """Show the location of the server log file."""

    log_path = _server_log_path()
    typer.echo(f"Server log file: {log_path}")
    if log_path.exists():
        typer.echo(f"Log file size: {log_path.stat().st_size / 1024:.2f} KB")
    else:
        typer.echo("Log file does not exist yet (server has not been started).")


app.add_typer(project_app, name="project")
app.add_typer(section_app, name="section")
app.add_typer(item_app, name="item")
app.add_typer(image_app, name="image")
app.add_typer(resume_app, name="resume")
app.add_typer(service_app, name="service")


if __name__ == "__main__":
    app()
