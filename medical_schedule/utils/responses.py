from fastapi.responses import JSONResponse
from medical_schedule.models.schedule import ErrorResponse


def error_response(status_code: int, message: str, error: str | None = None, headers: dict | None = None) -> JSONResponse:
    """{success: false, message, error} envelope used by every failing request"""
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(message=message, error=error).model_dump(exclude_none=True),
        headers=headers,
    )
