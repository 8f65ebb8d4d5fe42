"""Shared settings and history helpers for the MileStone CLI and web server."""
from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

SETTINGS_FILENAME = "settings.json"
HISTORY_FILENAME = "history.json"
DB_FILENAME = "milestone.db"
DEFAULT_PORT = 8123
GLOBAL_STATE_ROOT = Path.home() / ".milestone"
HISTORY_LIMIT = 20


def _global_root() -> Path:
    GLOBAL_STATE_ROOT.mkdir(parents=True, exist_ok=True)
    return GLOBAL_STATE_ROOT


def global_runtime_dir() -> Path:
    return _global_root()


def _settings_path() -> Path:
    return _global_root() / SETTINGS_FILENAME


def _history_path() -> Path:
    return _global_root() / HISTORY_FILENAME


def default_settings() -> Dict[str, Any]:
    return {
        "database": str(_global_root() / DB_FILENAME),
        "port": DEFAULT_PORT,
        "chipSpacing": 1,
    }


def load_settings() -> Dict[str, Any]:
    settings = default_settings()
    path = _settings_path()
    if path.exists():
        try:
            settings.update(json.loads(path.read_text(encoding="utf-8")))
        except json.JSONDecodeError:
            pass
    return settings


def save_settings(settings: Dict[str, Any]) -> None:
    path = _settings_path()
    path.write_text(json.dumps(settings, indent=2), encoding="utf-8")


def database_path(override: Optional[Path] = None) -> Path:
    if override is not None:
        return override.expanduser().resolve()
    return Path(load_settings()["database"]).expanduser()


def load_history() -> Dict[str, Any]:
    path = _history_path()
    if path.exists():
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            pass
    return {"projects": [], "current_project": None, "last_opened_at": None}


def save_history(history: Dict[str, Any]) -> None:
    path = _history_path()
    path.write_text(json.dumps(history, indent=2), encoding="utf-8")


def record_project_open(entry: Dict[str, Any]) -> Dict[str, Any]:
    history = load_history()
    entry_id = entry.get("id")
    if not entry_id:
        return history

    now = datetime.now(timezone.utc).isoformat()
    projects: List[Dict[str, Any]] = [
        project for project in history.get("projects", []) if project.get("id") != entry_id
    ]
    projects.insert(0, {**entry, "last_opened": now})

    history["projects"] = projects[:HISTORY_LIMIT]
    history["current_project"] = entry_id
    history["last_opened_at"] = now
    save_history(history)
    return history
