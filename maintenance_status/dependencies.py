from fastapi import HTTPException, Request, status

from .core.maintenance_state import MaintenanceModeService


def get_maintenance_service(request: Request) -> MaintenanceModeService:
    service = getattr(request.app.state, "maintenance_service", None)
    if service is None or not service.is_initialized:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Maintenance status is not available yet",
        )
    return service
