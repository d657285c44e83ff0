import logging
from urllib.parse import unquote
from fastapi import APIRouter, Depends, Request
from medical_schedule.database import ScheduleStore, get_store
from medical_schedule.exceptions import PersistenceError, ScheduleError
from medical_schedule.models.schedule import (
    MessageResponse,
    ScheduleEntryRequest,
    ScheduleEntryResponse,
    ScheduleResponse,
)

router = APIRouter()
logger = logging.getLogger(__name__)


def slot_from_raw_path(request: Request, office_id: str, day: str, time_slot: str) -> tuple[str, str, str]:
    """
    The router sees the decoded path, so "08%2F12" would split into two
    segments. Take the last three segments of the undecoded path instead.
    """
    raw_path = request.scope.get("raw_path")
    if not raw_path:
        return office_id, day, time_slot
    segments = raw_path.split(b"?", 1)[0].decode("latin-1").rstrip("/").split("/")
    if len(segments) < 3:
        return office_id, day, time_slot
    return tuple(unquote(s) for s in segments[-3:])


# 📘 Whole schedule
@router.get("", response_model=ScheduleResponse)
async def get_schedule(store: ScheduleStore = Depends(get_store)):
    try:
        schedule, last_updated = store.get_all()
    except ScheduleError:
        raise
    except Exception as e:
        raise PersistenceError("Error loading data", cause=e) from e

    return ScheduleResponse(data=schedule, lastUpdated=last_updated)


# ✏️ Create or overwrite one slot
@router.post("", response_model=ScheduleEntryResponse)
async def save_schedule_entry(entry: ScheduleEntryRequest, store: ScheduleStore = Depends(get_store)):
    """
    Stores doctorData at officeId/day/timeSlot, replacing whatever was there.
    - 400: one of the four fields is missing.
    """
    doctor_data = entry.doctorData.model_dump(exclude_unset=True) if entry.doctorData else None
    try:
        stored = store.set_slot(entry.officeId, entry.day, entry.timeSlot, doctor_data)
    except ScheduleError:
        raise
    except Exception as e:
        raise PersistenceError("Error saving data", cause=e) from e

    logger.info(f"✅ Saved {entry.officeId}/{entry.day}/{entry.timeSlot}")
    return ScheduleEntryResponse(message="Schedule saved successfully", data=stored)


# ❌ Delete one slot
@router.delete("/{office_id}/{day}/{time_slot:path}", response_model=MessageResponse)
async def delete_schedule_entry(
    request: Request,
    office_id: str,
    day: str,
    time_slot: str,
    store: ScheduleStore = Depends(get_store),
):
    """
    Removes one assignment; the day is dropped once its last slot is gone.
    Segments may hold an encoded "/" (08%2F12).
    - 404: nothing is stored at this slot.
    """
    office_id, day, time_slot = slot_from_raw_path(request, office_id, day, time_slot)
    try:
        store.delete_slot(office_id, day, time_slot)
    except ScheduleError:
        raise
    except Exception as e:
        raise PersistenceError("Error deleting data", cause=e) from e

    logger.info(f"🗑 Deleted {office_id}/{day}/{time_slot}")
    return MessageResponse(message="Schedule deleted successfully")
