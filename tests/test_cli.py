import pytest
from typer.testing import CliRunner

from milestone import cli, state, store
from milestone.cli import app

runner = CliRunner()


def _invoke(db_path, *args, **kwargs):
    return runner.invoke(app, [*args, "--db", str(db_path)], **kwargs)


def _only_project(db_path):
    conn = store.connect(db_path)
    try:
        (record,) = store.list_projects(conn)
    finally:
        conn.close()
    return record


@pytest.fixture
def project_id(db_path):
    result = _invoke(
        db_path,
        "project", "add", "Portfolio",
        "--description", "Static site",
        "--start-date", "2024-01-01",
        "--tech", "Python",
        "--tech", "Flask",
    )
    assert result.exit_code == 0, result.output
    return _only_project(db_path).id


def test_project_add_and_list(db_path, project_id):
    record = _only_project(db_path)
    assert record.tech_stack == ["Python", "Flask"]

    result = _invoke(db_path, "project", "list")

    assert result.exit_code == 0
    assert "Portfolio" in result.output


def test_project_add_rejects_bad_date(db_path):
    result = _invoke(db_path, "project", "add", "X", "--description", "d", "--start-date", "yesterday")

    assert result.exit_code == 2
    assert "Invalid date" in result.output


def test_project_show_accepts_id_prefix(db_path, project_id):
    result = _invoke(db_path, "project", "show", project_id[:6], "--width", "40")

    assert result.exit_code == 0, result.output
    assert "Portfolio" in result.output
    assert "Available to add: overview, details, visuals, links, notes, tags" in result.output


def test_unknown_project(db_path):
    result = _invoke(db_path, "project", "show", "does-not-exist")

    assert result.exit_code == 2
    assert "not found" in result.output


def test_id_prefix_is_matched_literally(db_path, project_id):
    for pattern in ("%", "_", "%%"):
        result = _invoke(db_path, "project", "delete", pattern, "--yes")
        assert result.exit_code == 2
        assert "not found" in result.output

    assert _only_project(db_path).id == project_id


def test_project_list_search(db_path, project_id):
    _invoke(db_path, "project", "add", "Chess engine", "--description", "d")

    result = _invoke(db_path, "project", "list", "--search", "PORT")

    assert result.exit_code == 0
    assert "Portfolio" in result.output
    assert "Chess" not in result.output


def test_project_update_and_ongoing(db_path, project_id):
    result = _invoke(
        db_path, "project", "update", project_id,
        "--end-date", "2024-03-01", "--status", "completed", "--github", "",
    )
    assert result.exit_code == 0, result.output
    record = _only_project(db_path)
    assert record.status.value == "completed"
    assert record.end_date is not None
    assert record.github_url is None

    result = _invoke(db_path, "project", "update", project_id, "--ongoing")
    assert result.exit_code == 0
    assert _only_project(db_path).end_date is None


def test_section_add_then_delete(db_path, project_id):
    result = _invoke(db_path, "section", "add", project_id, "tags")
    assert result.exit_code == 0, result.output
    record = _only_project(db_path)
    assert record.tags == [""]
    assert "tags" in record.enabled_sections

    result = _invoke(db_path, "section", "list", project_id)
    assert result.exit_code == 0
    assert "active" in result.output

    result = _invoke(db_path, "section", "delete", project_id, "tags")
    assert result.exit_code == 0
    record = _only_project(db_path)
    assert record.tags == []
    assert record.enabled_sections == set()


def test_section_unknown_name(db_path, project_id):
    result = _invoke(db_path, "section", "add", project_id, "gallery")

    assert result.exit_code == 2


def test_item_commands(db_path, project_id):
    assert _invoke(db_path, "item", "add", project_id, "tag", "web").exit_code == 0
    assert _invoke(db_path, "item", "set", project_id, "tech", "1", "Django").exit_code == 0

    result = _invoke(db_path, "item", "remove", project_id, "tech", "7")
    assert result.exit_code == 0
    assert "nothing changed" in result.output

    record = _only_project(db_path)
    assert record.tags == ["web"]
    assert record.tech_stack == ["Python", "Django"]


def test_tidy_prunes_blank_entries(db_path, project_id):
    _invoke(db_path, "item", "add", project_id, "tech", "  ")

    result = _invoke(db_path, "project", "tidy", project_id)

    assert result.exit_code == 0
    assert _only_project(db_path).tech_stack == ["Python", "Flask"]


def test_favorite_and_delete(db_path, project_id):
    result = _invoke(db_path, "project", "favorite", project_id)
    assert "now a favourite" in result.output

    result = _invoke(db_path, "project", "delete", project_id, "--yes")
    assert result.exit_code == 0
    assert "No projects found." in _invoke(db_path, "project", "list").output


def test_images(db_path, project_id, tmp_path):
    image = tmp_path / "shot.png"
    image.write_bytes(b"\x89PNG data")

    assert _invoke(db_path, "image", "add", project_id, str(image)).exit_code == 0
    assert _invoke(db_path, "image", "add", project_id, str(image), "--thumbnail").exit_code == 0
    record = _only_project(db_path)
    assert record.images == [b"\x89PNG data"]
    assert record.thumbnail == b"\x89PNG data"

    assert _invoke(db_path, "image", "remove", project_id, "0").exit_code == 0
    assert _only_project(db_path).images == []


def test_timeline(db_path, project_id):
    result = _invoke(db_path, "timeline")

    assert result.exit_code == 0
    assert "Jan 1" in result.output
    assert "Portfolio" in result.output


def test_resume_commands(db_path, tmp_path):
    bogus = tmp_path / "resume.txt"
    bogus.write_bytes(b"plain text")
    assert _invoke(db_path, "resume", "import", str(bogus)).exit_code == 2

    pdf = tmp_path / "resume.pdf"
    pdf.write_bytes(b"%PDF-1.5 content")
    assert _invoke(db_path, "resume", "import", str(pdf)).exit_code == 0
    assert "Résumé stored" in _invoke(db_path, "resume", "status").output

    exported = tmp_path / "out.pdf"
    assert _invoke(db_path, "resume", "export", str(exported)).exit_code == 0
    assert exported.read_bytes() == b"%PDF-1.5 content"

    assert "Résumé removed." in _invoke(db_path, "resume", "clear").output


def test_project_new_uses_template(db_path):
    result = _invoke(db_path, "project", "new")

    assert result.exit_code == 0
    record = _only_project(db_path)
    assert record.title == "New Project"
    assert record.tech_stack == ["Python"]


def test_start_server_process_closes_parent_log_handle(monkeypatch, db_path):
    launched = {}

    def fake_popen(cmd, stdout, **kwargs):
        launched["cmd"] = cmd
        launched["log"] = stdout
        return "process"

    monkeypatch.setattr(cli.subprocess, "Popen", fake_popen)

    assert cli._start_server_process(8123, db_path) == "process"
    assert launched["cmd"][-2:] == ["--db", str(state.database_path(db_path))]
    assert launched["log"].closed
