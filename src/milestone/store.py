"""sqlite persistence for project records and the résumé slot."""
from __future__ import annotations

import json
import sqlite3
from pathlib import Path
from typing import List, Optional

from .models import ProjectRecord, ProjectStatus, ProjectType, parse_date

RESUME_KEY = "resume_pdf"
PDF_MAGIC = b"%PDF-"

SCHEMA_SQL = """
PRAGMA journal_mode=WAL;

CREATE TABLE IF NOT EXISTS projects (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    tagline TEXT NOT NULL DEFAULT '',
    description TEXT NOT NULL DEFAULT '',
    role TEXT NOT NULL DEFAULT '',
    team_size TEXT NOT NULL DEFAULT '',
    start_date TEXT NOT NULL,
    end_date TEXT,
    status TEXT NOT NULL DEFAULT 'inProgress',
    project_type TEXT NOT NULL DEFAULT 'personal',
    is_favorite INTEGER NOT NULL DEFAULT 0,
    tech_stack TEXT NOT NULL DEFAULT '[]',
    key_features TEXT NOT NULL DEFAULT '[]',
    tags TEXT NOT NULL DEFAULT '[]',
    github_url TEXT,
    live_url TEXT,
    figma_url TEXT,
    problem TEXT NOT NULL DEFAULT '',
    solution TEXT NOT NULL DEFAULT '',
    goals TEXT NOT NULL DEFAULT '',
    challenges TEXT NOT NULL DEFAULT '',
    notes TEXT NOT NULL DEFAULT '',
    thumbnail BLOB,
    created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP,
    updated_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS project_images (
    project_id TEXT NOT NULL REFERENCES projects(id) ON DELETE CASCADE,
    position INTEGER NOT NULL,
    data BLOB NOT NULL,
    PRIMARY KEY (project_id, position)
);

CREATE TABLE IF NOT EXISTS blobs (
    key TEXT PRIMARY KEY,
    data BLOB NOT NULL,
    updated_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
);
"""

_COLUMNS = (
    "id",
    "title",
    "tagline",
    "description",
    "role",
    "team_size",
    "start_date",
    "end_date",
    "status",
    "project_type",
    "is_favorite",
    "tech_stack",
    "key_features",
    "tags",
    "github_url",
    "live_url",
    "figma_url",
    "problem",
    "solution",
    "goals",
    "challenges",
    "notes",
    "thumbnail",
    "enabled_sections",
)


def _column_exists(conn: sqlite3.Connection, table: str, column: str) -> bool:
    rows = conn.execute(f"PRAGMA table_info({table})").fetchall()
    return any(row[1] == column for row in rows)


def _maybe_add_column(conn: sqlite3.Connection, table: str, column: str, column_sql: str) -> None:
    if not _column_exists(conn, table, column):
        conn.execute(f"ALTER TABLE {table} ADD COLUMN {column_sql}")
        conn.commit()


def _ensure_schema(conn: sqlite3.Connection) -> None:
    conn.executescript(SCHEMA_SQL)
    # enabled_sections was introduced after the first release of the table
    _maybe_add_column(conn, "projects", "enabled_sections", "enabled_sections TEXT NOT NULL DEFAULT '[]'")


def connect(db_path: Path) -> sqlite3.Connection:
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    _ensure_schema(conn)
    return conn


def _record_values(record: ProjectRecord) -> List[object]:
    return [
        record.id,
        record.title,
        record.tagline,
        record.description,
        record.role,
        record.team_size,
        record.start_date.isoformat(),
        record.end_date.isoformat() if record.end_date else None,
        record.status.value,
        record.project_type.value,
        1 if record.is_favorite else 0,
        json.dumps(record.tech_stack),
        json.dumps(record.key_features),
        json.dumps(record.tags),
        record.github_url,
        record.live_url,
        record.figma_url,
        record.problem,
        record.solution,
        record.goals,
        record.challenges,
        record.notes,
        record.thumbnail,
        json.dumps(sorted(record.enabled_sections)),
    ]


def _row_to_record(row: sqlite3.Row, images: List[bytes]) -> ProjectRecord:
    return ProjectRecord(
        id=row["id"],
        title=row["title"],
        tagline=row["tagline"],
        description=row["description"],
        role=row["role"],
        team_size=row["team_size"],
        start_date=parse_date(row["start_date"]),
        end_date=parse_date(row["end_date"]),
        status=ProjectStatus(row["status"]),
        project_type=ProjectType(row["project_type"]),
        is_favorite=bool(row["is_favorite"]),
        tech_stack=json.loads(row["tech_stack"]),
        key_features=json.loads(row["key_features"]),
        tags=json.loads(row["tags"]),
        images=images,
        github_url=row["github_url"],
        live_url=row["live_url"],
        figma_url=row["figma_url"],
        problem=row["problem"],
        solution=row["solution"],
        goals=row["goals"],
        challenges=row["challenges"],
        notes=row["notes"],
        thumbnail=row["thumbnail"],
        enabled_sections=set(json.loads(row["enabled_sections"] or "[]")),
    )


def _load_images(conn: sqlite3.Connection, project_id: str) -> List[bytes]:
    rows = conn.execute(
        "SELECT data FROM project_images WHERE project_id = ? ORDER BY position",
        (project_id,),
    ).fetchall()
    return [bytes(row["data"]) for row in rows]


def _write_images(conn: sqlite3.Connection, record: ProjectRecord) -> None:
    conn.execute("DELETE FROM project_images WHERE project_id = ?", (record.id,))
    conn.executemany(
        "INSERT INTO project_images (project_id, position, data) VALUES (?, ?, ?)",
        [(record.id, position, data) for position, data in enumerate(record.images)],
    )


def insert_project(conn: sqlite3.Connection, record: ProjectRecord) -> str:
    placeholders = ", ".join("?" for _ in _COLUMNS)
    with conn:
        conn.execute(
            f"INSERT INTO projects ({', '.join(_COLUMNS)}) VALUES ({placeholders})",
            _record_values(record),
        )
        _write_images(conn, record)
    return record.id


def save_project(conn: sqlite3.Connection, record: ProjectRecord) -> None:
    """Persist every field of an existing record in a single transaction."""
    set_clause = ", ".join(f"{column} = ?" for column in _COLUMNS[1:])
    values = _record_values(record)[1:]
    values.append(record.id)
    with conn:
        cursor = conn.execute(
            f"UPDATE projects SET {set_clause}, updated_at = CURRENT_TIMESTAMP WHERE id = ?",
            values,
        )
        if cursor.rowcount == 0:
            raise KeyError(f"Project '{record.id}' not found")
        _write_images(conn, record)


def load_project(conn: sqlite3.Connection, project_id: str) -> ProjectRecord:
    row = conn.execute("SELECT * FROM projects WHERE id = ?", (project_id,)).fetchone()
    if row is None:
        raise KeyError(f"Project '{project_id}' not found")
    return _row_to_record(row, _load_images(conn, project_id))


def list_projects(conn: sqlite3.Connection, search: Optional[str] = None) -> List[ProjectRecord]:
    """Return projects newest first, optionally only those whose title contains ``search``."""
    rows = conn.execute("SELECT * FROM projects ORDER BY start_date DESC, title").fetchall()
    records = [_row_to_record(row, _load_images(conn, row["id"])) for row in rows]
    needle = (search or "").strip().casefold()
    if needle:
        records = [record for record in records if needle in record.title.casefold()]
    return records


def delete_project(conn: sqlite3.Connection, project_id: str) -> None:
    with conn:
        cursor = conn.execute("DELETE FROM projects WHERE id = ?", (project_id,))
        if cursor.rowcount == 0:
            raise KeyError(f"Project '{project_id}' not found")


def get_resume(conn: sqlite3.Connection) -> Optional[bytes]:
    row = conn.execute("SELECT data FROM blobs WHERE key = ?", (RESUME_KEY,)).fetchone()
    return bytes(row["data"]) if row else None


def set_resume(conn: sqlite3.Connection, data: bytes) -> None:
    if not data.startswith(PDF_MAGIC):
        raise ValueError("Résumé data is not a PDF document")
    with conn:
        conn.execute(
            "INSERT INTO blobs (key, data) VALUES (?, ?) "
            "ON CONFLICT(key) DO UPDATE SET data = excluded.data, updated_at = CURRENT_TIMESTAMP",
            (RESUME_KEY, data),
        )


def clear_resume(conn: sqlite3.Connection) -> bool:
    with conn:
        cursor = conn.execute("DELETE FROM blobs WHERE key = ?", (RESUME_KEY,))
    return cursor.rowcount > 0
