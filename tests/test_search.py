"""Test doctor search and the specialty lookup."""
import pytest
from datetime import datetime, timezone
from unittest.mock import Mock
from medical_schedule.database import ScheduleStore
from medical_schedule.services.schedule_service import ScheduleService
from medical_schedule.utils.common import backup_filename, get_specialty_from_office_id, iso_timestamp


@pytest.mark.parametrize("office_id, specialty", [
    ("card_201", "cardiology"),
    ("derm_1", "dermatology"),
    ("oftal_2", "ophthalmology"),
    ("ped_3", "pediatrics"),
    ("gine_4", "gynecology"),
    ("psiq_5", "psychiatry"),
    ("unknown_1", "general"),
    ("card", "cardiology"),
    ("cardio_1", "general"),
    ("", "general"),
])
def test_specialty_from_office_id(office_id, specialty):
    assert get_specialty_from_office_id(office_id) == specialty


@pytest.mark.parametrize("query", [None, "", "a"])
def test_short_query_returns_empty_without_loading(query):
    """Short queries never touch the store."""
    store = Mock(spec=ScheduleStore)
    assert ScheduleService.search_doctors_by_name(store, query) == {}
    store.get_all.assert_not_called()
    store.load.assert_not_called()


def test_search_is_case_insensitive_substring(store, sample_schedule):
    store.restore({"medicalSchedule": sample_schedule})

    results = ScheduleService.search_doctors_by_name(store, "ANA")

    assert list(results) == ["Ana Souza", "mariana"]


def test_search_groups_occurrences_in_file_order(store, sample_schedule):
    store.restore({"medicalSchedule": sample_schedule})

    results = ScheduleService.search_doctors_by_name(store, "ana")
    ana = results["Ana Souza"]

    assert [(s.office, s.day, s.time) for s in ana.schedules] == [
        ("card_1", "Monday", "09:00"),
        ("card_1", "Tuesday", "09:00"),
        ("ped_2", "Monday", "11:00"),
    ]
    assert ana.schedules[0].hours == "09:00-12:00"
    assert ana.schedules[1].hours == ""
    assert ana.schedules[1].note == ""
    assert ana.schedules[0].type == "consult"


def test_search_specialty_is_taken_from_first_office(store, sample_schedule):
    store.restore({"medicalSchedule": sample_schedule})

    results = ScheduleService.search_doctors_by_name(store, "ana")

    assert results["Ana Souza"].specialty == "cardiology"
    assert results["mariana"].specialty == "pediatrics"


def test_search_skips_assignments_without_name(store):
    store.restore({"medicalSchedule": {
        "card_1": {"Monday": {
            "09:00": {"type": "consult"},
            "10:00": {"name": "", "type": "consult"},
            "11:00": {"name": "Dr. Silva"},
        }},
    }})

    results = ScheduleService.search_doctors_by_name(store, "dr")

    assert list(results) == ["Dr. Silva"]
    assert results["Dr. Silva"].schedules[0].type is None


def test_search_without_matches_returns_empty(store, sample_schedule):
    store.restore({"medicalSchedule": sample_schedule})
    assert ScheduleService.search_doctors_by_name(store, "zzz") == {}


def test_search_on_missing_file_returns_empty(store):
    assert ScheduleService.search_doctors_by_name(store, "ana") == {}


def test_search_tolerates_malformed_restored_data(store):
    store.restore({"medicalSchedule": {
        "card_1": "not an office",
        "ped_1": {"Monday": ["not", "a", "day"], "Friday": {"08:00": "not a doctor"}},
        "derm_1": {"Monday": {"08:00": {"name": "Dr. Ana"}}},
    }})

    results = ScheduleService.search_doctors_by_name(store, "ana")

    assert list(results) == ["Dr. Ana"]
    assert results["Dr. Ana"].specialty == "dermatology"


def test_iso_timestamp_format():
    moment = datetime(2025, 10, 25, 14, 11, 12, 814000, tzinfo=timezone.utc)
    assert iso_timestamp(moment) == "2025-10-25T14:11:12.814Z"


def test_backup_filename_uses_date():
    moment = datetime(2025, 3, 7, 23, 59, tzinfo=timezone.utc)
    assert backup_filename(moment) == "backup_escalas_2025-03-07.json"
