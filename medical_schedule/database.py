import json
import logging
import os
import tempfile
import threading
from copy import deepcopy

from decouple import config
from fastapi import Request

from medical_schedule.exceptions import NotFoundError, PersistenceError, ValidationError
from medical_schedule.utils.common import backup_filename, is_empty_value, iso_timestamp, is_missing

logger = logging.getLogger(__name__)

DATA_FILE = config("DATA_FILE", default="medical_schedule_data.json")


def empty_document() -> dict:
    return {"medicalSchedule": {}, "lastUpdated": iso_timestamp()}


class ScheduleStore:
    """
    Weekly office schedule kept as one JSON document on disk.

    Layout: medicalSchedule[officeId][day][timeSlot] -> doctor assignment.
    Every operation reads the whole file and every write replaces it, nothing
    is cached between calls. Load-mutate-save cycles are serialized by one
    lock for the whole document.
    """

    def __init__(self, path: str = DATA_FILE):
        self.path = path
        self._lock = threading.RLock()

    # 📖 Reading / writing the whole document
    def load(self) -> dict:
        """
        Returns the stored document. Never fails: a missing, unreadable or
        corrupt file gives a fresh empty document.
        """
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.info(f"📂 {self.path} not found, starting with an empty schedule")
            return empty_document()
        except (OSError, ValueError) as e:
            logger.warning(f"⚠️ Could not read {self.path}, starting with an empty schedule: {e}")
            return empty_document()

        if not isinstance(data, dict):
            logger.warning(f"⚠️ {self.path} does not hold a JSON object, starting with an empty schedule")
            return empty_document()

        data.setdefault("medicalSchedule", {})
        return data

    def save(self, data: dict) -> dict:
        """Stamps lastUpdated and overwrites the file (temp file + rename)."""
        data["lastUpdated"] = iso_timestamp()
        directory = os.path.dirname(os.path.abspath(self.path))
        tmp_path = None
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix=".schedule_", suffix=".tmp", dir=directory)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
            tmp_path = None
        except (OSError, TypeError, ValueError) as e:
            raise PersistenceError(f"Could not write {self.path}", cause=e) from e
        finally:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)

        logger.info(f"💾 Schedule saved to {self.path}")
        return data

    def get_all(self) -> tuple[dict, str | None]:
        data = self.load()
        return data["medicalSchedule"], data.get("lastUpdated")

    # ✏️ Slot operations
    def set_slot(self, office_id: str, day: str, time_slot: str, assignment: dict | None) -> dict:
        if any(is_missing(v) for v in (office_id, day, time_slot)) or assignment is None:
            raise ValidationError("Incomplete data")

        with self._lock:
            data = self.load()
            day_schedule = _day_schedule(_schedule_of(data), office_id, day, create=True)
            day_schedule[time_slot] = deepcopy(assignment)
            self.save(data)
            return day_schedule[time_slot]

    def delete_slot(self, office_id: str, day: str, time_slot: str) -> None:
        with self._lock:
            data = self.load()
            schedule = data["medicalSchedule"]
            day_schedule = _day_schedule(schedule, office_id, day) if isinstance(schedule, dict) else None
            if day_schedule is None or day_schedule.get(time_slot) is None:
                raise NotFoundError("Schedule entry not found")

            del day_schedule[time_slot]
            # only the day is pruned, an office without days is kept
            if not day_schedule:
                del schedule[office_id][day]

            self.save(data)

    # 🗄 Whole-document replacement
    def restore(self, document) -> dict:
        if not isinstance(document, dict) or is_empty_value(document.get("medicalSchedule")):
            raise ValidationError("Invalid backup file")

        with self._lock:
            return self.save(deepcopy(document))

    def backup(self) -> tuple[dict, str]:
        """Current document as stored (not re-stamped) and its attachment filename."""
        return self.load(), backup_filename()


def _schedule_of(data: dict) -> dict:
    schedule = data["medicalSchedule"]
    if not isinstance(schedule, dict):
        raise PersistenceError("Stored medicalSchedule is not an object")
    return schedule


def _day_schedule(schedule: dict, office_id: str, day: str, create: bool = False) -> dict | None:
    """
    Resolves medicalSchedule[office_id][day]. Without create, anything that
    is not an object gives None. With create, empty containers are created
    and a non-object value left by a restore raises PersistenceError.
    """
    office = _container(schedule, office_id, create)
    if office is None:
        return None
    return _container(office, day, create)


def _container(parent: dict, key: str, create: bool) -> dict | None:
    value = parent.get(key)
    if isinstance(value, dict):
        return value
    if not create:
        return None
    if not is_empty_value(value):
        raise PersistenceError(f"Stored entry '{key}' is not an object")
    value = parent[key] = {}
    return value


def get_store(request: Request) -> ScheduleStore:
    """FastAPI dependency: the store created for this application."""
    return request.app.state.store
