"""Flask application serving the MileStone JSON APIs."""
from __future__ import annotations

import argparse
import os
import signal
import sqlite3
import threading
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

from flask import Flask, Response, jsonify, request

from . import sections, state, store
from .editor import ProjectEditor
from .flow import measure_chips, pack
from .models import LIST_FIELDS, ProjectRecord, apply_payload, record_from_payload
from .timeline import group_by_year, timeline_entries

CHIP_FIELDS = {"techStack": "tech_stack", "keyFeatures": "key_features", "tags": "tags"}

app = Flask(__name__)
app.config.setdefault("MILESTONE_DB", None)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _connect() -> sqlite3.Connection:
    override = app.config.get("MILESTONE_DB")
    return store.connect(state.database_path(Path(override) if override else None))


def _json_payload() -> Dict[str, Any]:
    payload = request.get_json(force=True, silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValueError("Expected a JSON object")
    return payload


def _detail(record: ProjectRecord) -> Dict[str, Any]:
    visibility = sections.recompute_visibility(record)
    detail = record.to_dict()
    detail["sections"] = {
        "active": [section.value for section in visibility.active],
        "available": [section.value for section in visibility.available],
    }
    return detail


def _summary(record: ProjectRecord) -> Dict[str, Any]:
    return {
        "id": record.id,
        "title": record.title,
        "tagline": record.tagline,
        "status": record.status.value,
        "statusColor": record.status.color,
        "isFavorite": record.is_favorite,
        "techStack": list(record.tech_stack),
        "dateRange": record.date_range_text(),
        "duration": record.duration_text(),
    }


def _float_arg(name: str, default: float) -> float:
    raw = request.args.get(name)
    if raw in (None, ""):
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"Invalid {name} parameter") from None


def _mutate(project_id: str, change) -> Response:
    """Load a record, apply ``change`` to it and persist it in one go."""
    conn = _connect()
    try:
        record = store.load_project(conn, project_id)
        change(record)
        store.save_project(conn, record)
        return jsonify({"status": "ok", "project": _detail(record)})
    except KeyError:
        return Response(f"Project '{project_id}' not found", status=404)
    except ValueError as exc:
        return Response(str(exc), status=400)
    finally:
        conn.close()


# ---------------------------------------------------------------------------
# API Endpoints
# ---------------------------------------------------------------------------

@app.get("/api/projects")
def api_projects():
    conn = _connect()
    try:
        records = store.list_projects(conn, search=request.args.get("q"))
    finally:
        conn.close()
    return jsonify({"projects": [_summary(record) for record in records]})


@app.post("/api/projects/create")
def api_create_project():
    try:
        record = record_from_payload(_json_payload())
    except ValueError as exc:
        return (str(exc), 400)
    conn = _connect()
    try:
        store.insert_project(conn, record)
    finally:
        conn.close()
    app.logger.info("Created project %s", record.id)
    return jsonify({"status": "ok", "project": _detail(record)}), 201


@app.get("/api/projects/<project_id>")
def api_project_detail(project_id: str):
    conn = _connect()
    try:
        record = store.load_project(conn, project_id)
    except KeyError:
        return (f"Project '{project_id}' not found", 404)
    finally:
        conn.close()
    state.record_project_open({"id": record.id, "title": record.title})
    return jsonify(_detail(record))


@app.post("/api/projects/<project_id>/update")
def api_update_project(project_id: str):
    try:
        payload = _json_payload()
    except ValueError as exc:
        return (str(exc), 400)
    return _mutate(project_id, lambda record: apply_payload(record, payload))


@app.post("/api/projects/<project_id>/delete")
def api_delete_project(project_id: str):
    conn = _connect()
    try:
        store.delete_project(conn, project_id)
    except KeyError:
        return (f"Project '{project_id}' not found", 404)
    finally:
        conn.close()
    app.logger.info("Deleted project %s", project_id)
    return jsonify({"status": "ok"})


@app.post("/api/projects/<project_id>/favorite")
def api_toggle_favorite(project_id: str):
    return _mutate(project_id, lambda record: ProjectEditor(record).toggle_favorite())


@app.post("/api/projects/<project_id>/cleanup")
def api_cleanup(project_id: str):
    return _mutate(project_id, sections.prune_blank_entries)


@app.post("/api/projects/<project_id>/sections/add")
def api_add_section(project_id: str):
    try:
        section = sections.parse_section(_json_payload().get("section", ""))
    except ValueError as exc:
        return (str(exc), 400)
    return _mutate(project_id, lambda record: sections.add_section(record, section))


@app.post("/api/projects/<project_id>/sections/delete")
def api_delete_section(project_id: str):
    try:
        section = sections.parse_section(_json_payload().get("section", ""))
    except ValueError as exc:
        return (str(exc), 400)
    return _mutate(project_id, lambda record: sections.delete_section(record, section))


@app.get("/api/projects/<project_id>/chips")
def api_chip_layout(project_id: str):
    field_key = request.args.get("field", "tags")
    attribute = CHIP_FIELDS.get(field_key)
    if attribute is None or attribute not in LIST_FIELDS:
        return (f"Unknown chip field '{field_key}'", 400)
    try:
        width = _float_arg("width", 320.0)
        spacing = _float_arg("spacing", 8.0)
        char_width = _float_arg("charWidth", 7.0)
    except ValueError as exc:
        return (str(exc), 400)

    conn = _connect()
    try:
        record = store.load_project(conn, project_id)
    except KeyError:
        return (f"Project '{project_id}' not found", 404)
    finally:
        conn.close()

    labels: List[str] = getattr(record, attribute)
    sizes = measure_chips(labels, char_width=char_width)
    result = pack(width, sizes, spacing)
    return jsonify(
        {
            "field": field_key,
            "width": result.size.width,
            "height": result.size.height,
            "lines": result.line_count,
            "chips": [
                {"label": label, "x": point.x, "y": point.y, "width": size.width, "height": size.height}
                for label, point, size in zip(labels, result.offsets, sizes)
            ],
        }
    )


@app.get("/api/timeline")
def api_timeline():
    conn = _connect()
    try:
        records = store.list_projects(conn)
    finally:
        conn.close()
    years = [
        {"year": year, "projects": [_summary(record) for record in group]}
        for year, group in group_by_year(records).items()
    ]
    entries = [
        {
            "project": _summary(entry.record),
            "isFirst": entry.is_first,
            "isLast": entry.is_last,
            "dateLabel": entry.date_label,
            "durationLabel": entry.duration_label,
        }
        for entry in timeline_entries(records)
    ]
    return jsonify({"years": years, "entries": entries})


@app.get("/api/resume")
def api_resume():
    conn = _connect()
    try:
        data = store.get_resume(conn)
    finally:
        conn.close()
    if data is None:
        return ("No résumé uploaded", 404)
    return Response(data, mimetype="application/pdf")


@app.post("/api/resume")
def api_upload_resume():
    conn = _connect()
    try:
        store.set_resume(conn, request.get_data())
    except ValueError as exc:
        app.logger.warning("Rejected résumé upload: %s", exc)
        return (str(exc), 400)
    finally:
        conn.close()
    return jsonify({"status": "ok"})


@app.delete("/api/resume")
def api_clear_resume():
    conn = _connect()
    try:
        removed = store.clear_resume(conn)
    finally:
        conn.close()
    return jsonify({"status": "ok", "removed": removed})


@app.post("/__stop")
def shutdown_server() -> dict:
    def _shutdown():
        time.sleep(1)
        os.kill(os.getpid(), signal.SIGTERM)

    threading.Thread(target=_shutdown, daemon=True).start()
    return {"status": "stopping"}


@app.get("/__health")
def healthcheck() -> dict:
    return {"status": "ok"}


def main(argv: Optional[List[str]] = None) -> None:
    settings = state.load_settings()
    parser = argparse.ArgumentParser(description="MileStone Flask server")
    parser.add_argument("--port", type=int, default=settings["port"], help="Port to bind")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind")
    parser.add_argument("--db", default=None, help="Path to the project database")
    args = parser.parse_args(argv)

    if args.db:
        app.config["MILESTONE_DB"] = args.db
    app.run(host=args.host, port=args.port)


if __name__ == "__main__":  # pragma: no cover
    main()
