from pydantic import BaseModel
from typing import Any, Dict, List

class DoctorScheduleEntry(BaseModel):
    office: str
    day: str
    time: str
    # copied from the stored assignment as-is, restored backups may hold any JSON
    hours: Any = ""
    type: Any = None
    note: Any = ""

class DoctorMatch(BaseModel):
    specialty: str
    schedules: List[DoctorScheduleEntry]

class DoctorSearchResponse(BaseModel):
    success: bool = True
    results: Dict[str, DoctorMatch]
