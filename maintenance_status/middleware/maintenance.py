import logging
from fastapi import Request, status
from fastapi.responses import JSONResponse
from maintenance_status.core.config import settings
from maintenance_status.core.exceptions import StorageError

logger = logging.getLogger(__name__)

#content freeze only blocks requests that change something
SAFE_METHODS = {"GET", "HEAD", "OPTIONS"}


def _is_ignored(path: str) -> bool:
    return any(path == p or path.startswith(p.rstrip("/") + "/") for p in settings.MAINTENANCE_IGNORED_PATHS)


def _is_content_path(path: str) -> bool:
    return any(path.startswith(p) for p in settings.CONTENT_PATH_PREFIXES)


async def maintenance_mode_middleware(request: Request, call_next):
    """Check if maintenance mode is enabled or content is frozen"""

    #allow health check and the maintenance controls themselves
    if _is_ignored(request.url.path):
        return await call_next(request)

    service = getattr(request.app.state, "maintenance_service", None)
    if service is None or not service.is_initialized:
        return await call_next(request)

    try:
        current = await service.get_status()
    except StorageError as e:
        #fail open when the backend is unreachable
        logger.warning(f"Maintenance status unavailable, letting request through: {e}")
        current = None

    if current is None:
        return await call_next(request)

    if current.is_in_maintenance_mode:
        view_model = current.settings.view_model
        retry_after = str(settings.RETRY_AFTER_SECONDS)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "detail": view_model.text,
                "status": "maintenance",
                "viewModel": view_model.model_dump(by_alias=True),
                "retry_after": settings.RETRY_AFTER_SECONDS,
            },
            headers={"Retry-After": retry_after},
        )

    if current.is_content_frozen and request.method not in SAFE_METHODS and _is_content_path(request.url.path):
        return JSONResponse(
            status_code=status.HTTP_423_LOCKED,
            content={
                "detail": "Content is frozen, changes are not accepted right now",
                "status": "content_frozen",
            },
        )

    return await call_next(request)
