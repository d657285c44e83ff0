import logging
import os
from contextlib import asynccontextmanager
from decouple import Csv, config
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from medical_schedule.database import DATA_FILE, ScheduleStore
from medical_schedule.exceptions import NotFoundError, PersistenceError, ScheduleError, ValidationError
from medical_schedule.middleware import BodySizeLimitMiddleware
from medical_schedule.models.schedule import HealthResponse
from medical_schedule.routers import backup, schedule, search
from medical_schedule.utils.common import iso_timestamp
from medical_schedule.utils.responses import error_response

HOST = config("HOST", default="0.0.0.0")
PORT = config("PORT", default=3000, cast=int)
LOG_LEVEL = config("LOG_LEVEL", default="INFO")
STATIC_DIR = config("STATIC_DIR", default="public")
CORS_ORIGINS = config("CORS_ORIGINS", default="*", cast=Csv())
MAX_BODY_SIZE = config("MAX_BODY_SIZE", default=10 * 1024 * 1024, cast=int)

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s [%(levelname)s] %(message)s")
logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    PersistenceError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def create_app(
    store: ScheduleStore | None = None,
    static_dir: str | None = STATIC_DIR,
    max_body_size: int = MAX_BODY_SIZE,
) -> FastAPI:
    serve_static = bool(static_dir) and os.path.isdir(static_dir)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("🚀 Starting up...")
        logger.info(f"📋 Schedule file: {app.state.store.path}")
        if serve_static:
            logger.info(f"🗂 Static files: {os.path.abspath(static_dir)}")
        else:
            logger.info("🗂 Static files: disabled")
        yield
        logger.info("🛑 Shutting down...")

    app = FastAPI(title="Medical Office Schedule API", lifespan=lifespan)
    # the store is owned by the app, created here so it exists without the lifespan too
    app.state.store = store or ScheduleStore(DATA_FILE)

    # added first so CORS wraps it and 413 responses carry CORS headers
    app.add_middleware(BodySizeLimitMiddleware, max_body_size=max_body_size)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ScheduleError)
    async def schedule_error_handler(request: Request, exc: ScheduleError):
        status_code = ERROR_STATUS.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
        if status_code >= 500:
            logger.error(f"❌ {request.method} {request.url.path}: {exc}", exc_info=exc.cause)
            error = str(exc.cause) if exc.cause else exc.message
            return error_response(status_code, exc.message, error)
        return error_response(status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # unknown paths, wrong methods, static misses, oversized chunked bodies
        return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Validation error: {exc.errors()}")
        return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request", str(exc.errors()))

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unexpected error: {exc}", exc_info=True)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", str(exc))

    app.include_router(schedule.router, prefix="/api/schedule", tags=["Schedule"])
    app.include_router(search.router, prefix="/api/search", tags=["Search"])
    app.include_router(backup.router, prefix="/api", tags=["Backup"])

    @app.get("/api/test", response_model=HealthResponse, tags=["Health"])
    async def liveness():
        return HealthResponse(message="Backend is running!", timestamp=iso_timestamp())

    # mounted last: API routes take precedence, "/" answers with index.html
    if serve_static:
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
    elif static_dir:
        logger.warning(f"⚠️ Static directory '{static_dir}' not found, serving the API only")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logger.info(f"🏥 Server listening on http://{HOST}:{PORT}")
    uvicorn.run(app, host=HOST, port=PORT, log_level=LOG_LEVEL.lower())
