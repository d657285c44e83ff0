"""Shared test fixtures."""
import json
import pytest
from fastapi.testclient import TestClient
from medical_schedule.database import ScheduleStore
from medical_schedule.main import create_app


@pytest.fixture
def data_file(tmp_path):
    """Path of a schedule file that does not exist yet."""
    return tmp_path / "medical_schedule_data.json"


@pytest.fixture
def store(data_file) -> ScheduleStore:
    return ScheduleStore(str(data_file))


@pytest.fixture
def write_document(data_file):
    """Write a raw document straight to the data file."""
    def _write(document):
        data_file.write_text(json.dumps(document), encoding="utf-8")
    return _write


@pytest.fixture
def client(store):
    """FastAPI test client backed by a temporary schedule file."""
    return TestClient(create_app(store=store, static_dir=None))


@pytest.fixture
def sample_schedule():
    return {
        "card_1": {
            "Monday": {
                "09:00": {"name": "Ana Souza", "hours": "09:00-12:00", "type": "consult"},
                "14:00": {"name": "Dr. Silva", "type": "surgery", "note": "room B"},
            },
            "Tuesday": {
                "09:00": {"name": "Ana Souza", "type": "consult"},
            },
        },
        "ped_2": {
            "Monday": {
                "10:00": {"name": "mariana", "type": "on-call"},
                "11:00": {"name": "Ana Souza", "type": "consult"},
            },
        },
    }
