from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Optional

class DoctorAssignment(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = Field(None, description="Doctor name, the field searched by /api/search/doctor")
    hours: Optional[str] = None
    type: Optional[str] = Field(None, description="Kind of assignment, free text", examples=["consult"])
    note: Optional[str] = None

class ScheduleEntryRequest(BaseModel):
    officeId: Optional[str] = Field(None, examples=["card_1"])
    day: Optional[str] = Field(None, examples=["Monday"])
    timeSlot: Optional[str] = Field(None, examples=["09:00"])
    doctorData: Optional[DoctorAssignment] = None

class ScheduleResponse(BaseModel):
    success: bool = True
    data: Any = Field(default_factory=dict, description="medicalSchedule: officeId -> day -> timeSlot -> assignment")
    lastUpdated: Optional[str] = Field(None, examples=["2025-10-25T14:11:12.814Z"])

class ScheduleEntryResponse(BaseModel):
    success: bool = True
    message: str
    data: dict

class MessageResponse(BaseModel):
    success: bool = True
    message: str

class HealthResponse(BaseModel):
    success: bool = True
    message: str
    timestamp: str

class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    error: Optional[str] = None
