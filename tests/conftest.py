import sys
from datetime import date
from pathlib import Path

import pytest

# Ensure the src directory is on the path for imports
root = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(root / "src"))

from milestone import state  # noqa: E402
from milestone.models import ProjectRecord  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_state(tmp_path, monkeypatch):
    """Keep settings, history and the default database out of the real home directory."""
    state_root = tmp_path / "state"
    monkeypatch.setattr(state, "GLOBAL_STATE_ROOT", state_root)
    return state_root


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "catalogue.db"


@pytest.fixture
def record():
    return ProjectRecord(
        title="Portfolio site",
        description="Static site for my work",
        start_date=date(2024, 1, 1),
    )
