import json
import logging
from typing import Any
from fastapi import APIRouter, Body, Depends, Response
from medical_schedule.database import ScheduleStore, get_store
from medical_schedule.exceptions import PersistenceError, ScheduleError
from medical_schedule.models.schedule import MessageResponse

router = APIRouter()
logger = logging.getLogger(__name__)


# 📥 Download the whole document
@router.get("/backup", response_class=Response)
async def download_backup(store: ScheduleStore = Depends(get_store)):
    try:
        data, filename = store.backup()
        content = json.dumps(data, ensure_ascii=False, indent=2)
    except Exception as e:
        raise PersistenceError("Error generating backup", cause=e) from e

    return Response(
        content=content,
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# 📤 Replace the whole document
@router.post("/restore", response_model=MessageResponse)
async def restore_backup(document: Any = Body(None), store: ScheduleStore = Depends(get_store)):
    """
    Overwrites the stored schedule with the uploaded backup, nothing is merged.
    - 400: the body has no medicalSchedule.
    """
    try:
        store.restore(document)
    except ScheduleError:
        raise
    except Exception as e:
        raise PersistenceError("Error restoring backup", cause=e) from e

    logger.info("♻️ Backup restored")
    return MessageResponse(message="Backup restored successfully")
