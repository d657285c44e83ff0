from fastapi import APIRouter, Depends, Query
from medical_schedule.database import ScheduleStore, get_store
from medical_schedule.exceptions import PersistenceError, ScheduleError
from medical_schedule.models.doctor_search import DoctorSearchResponse
from medical_schedule.services.schedule_service import ScheduleService

router = APIRouter()


# 🔎 Doctor search
@router.get("/doctor", response_model=DoctorSearchResponse)
async def search_doctor(
    name: str | None = Query(None, description="Part of the doctor's name, at least 2 characters"),
    store: ScheduleStore = Depends(get_store),
):
    try:
        results = ScheduleService.search_doctors_by_name(store, name)
    except ScheduleError:
        raise
    except Exception as e:
        raise PersistenceError("Search failed", cause=e) from e

    return DoctorSearchResponse(results=results)
