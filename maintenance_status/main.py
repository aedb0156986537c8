import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, APIRouter, Request
from fastapi.responses import JSONResponse

from maintenance_status.core.config import settings, StorageMode
from maintenance_status.core.exceptions import StorageError
from maintenance_status.core.maintenance_state import MaintenanceModeService
from maintenance_status.core.storage import StorageProviderFactory
from .database import init_db
from .middleware.maintenance import maintenance_mode_middleware
from .routers import maintenance

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.STORAGE_MODE == StorageMode.DATABASE:
        init_db()
    app.state.maintenance_service = await MaintenanceModeService.create(
        settings.maintenance_override(),
        StorageProviderFactory(settings),
    )
    yield

app = FastAPI(
    lifespan=lifespan,
    title="Maintenance Status API",
    version="1.0.0",
    docs_url=None,
    redoc_url=None
)

#maintenance gate
app.middleware("http")(maintenance_mode_middleware)

api_router = APIRouter(prefix=settings.API_V1_STR)

api_router.include_router(maintenance.router)

app.include_router(api_router)

@app.get("/", include_in_schema=False)
def read_root():
    return {"message": "OK"}

@app.get("/health", tags=["health"])
async def health_check(request: Request):
    service = getattr(request.app.state, "maintenance_service", None)
    current = await service.get_status() if service is not None and service.is_initialized else None
    return {
        "status": "healthy",
        "project_name": settings.PROJECT_NAME,
        "version": "1.0.0",
        "maintenance_mode": current.is_in_maintenance_mode if current else None,
        "content_frozen": current.is_content_frozen if current else None,
    }

@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    logger.error(f"Storage error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=503,
        content={"detail": "Maintenance status storage is unavailable", "status": "storage_error"}
    )
