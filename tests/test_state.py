from pathlib import Path

from milestone import state


def test_settings_default_to_global_root(isolated_state):
    settings = state.load_settings()

    assert settings["port"] == state.DEFAULT_PORT
    assert Path(settings["database"]) == isolated_state / state.DB_FILENAME


def test_corrupt_settings_fall_back_to_defaults(isolated_state):
    isolated_state.mkdir(parents=True, exist_ok=True)
    (isolated_state / state.SETTINGS_FILENAME).write_text("{not json", encoding="utf-8")

    assert state.load_settings()["chipSpacing"] == 1


def test_saved_settings_override_defaults(tmp_path):
    state.save_settings({"port": 9000, "database": str(tmp_path / "other.db")})

    assert state.load_settings()["port"] == 9000
    assert state.database_path() == tmp_path / "other.db"


def test_explicit_database_path_wins(tmp_path):
    assert state.database_path(tmp_path / "x.db") == (tmp_path / "x.db").resolve()


def test_record_project_open_keeps_most_recent_first():
    state.record_project_open({"id": "a", "title": "A"})
    state.record_project_open({"id": "b", "title": "B"})
    history = state.record_project_open({"id": "a", "title": "A renamed"})

    assert [entry["id"] for entry in history["projects"]] == ["a", "b"]
    assert history["projects"][0]["title"] == "A renamed"
    assert history["current_project"] == "a"


def test_record_project_open_ignores_entries_without_id():
    assert state.record_project_open({"title": "nameless"})["projects"] == []
