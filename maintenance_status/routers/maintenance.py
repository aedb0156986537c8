from fastapi import APIRouter, Depends
from maintenance_status import schemas
from maintenance_status.core.maintenance_state import MaintenanceModeService
from maintenance_status.dependencies import get_maintenance_service

#access control is left to the host application mounting this router
router = APIRouter(prefix="/admin/maintenance", tags=["admin-maintenance"])


@router.get("/status", response_model=schemas.MaintenanceModeStatus, response_model_by_alias=True)
async def get_maintenance_status(service: MaintenanceModeService = Depends(get_maintenance_service)):
    """Get current maintenance mode status"""
    return await service.get_status()


@router.post("/toggle", response_model=schemas.MaintenanceModeStatus, response_model_by_alias=True)
async def toggle_maintenance(
    toggle: schemas.MaintenanceToggle,
    service: MaintenanceModeService = Depends(get_maintenance_service)
):
    """Enable or disable maintenance mode"""
    await service.toggle_maintenance_mode(toggle.enabled)
    return await service.get_status()


@router.post("/content-freeze", response_model=schemas.MaintenanceModeStatus, response_model_by_alias=True)
async def toggle_content_freeze(
    toggle: schemas.MaintenanceToggle,
    service: MaintenanceModeService = Depends(get_maintenance_service)
):
    """Freeze or unfreeze content"""
    await service.toggle_content_freeze(toggle.enabled)
    return await service.get_status()


@router.put("/settings", response_model=schemas.MaintenanceModeStatus, response_model_by_alias=True)
async def save_maintenance_settings(
    status_settings: schemas.StatusSettings,
    service: MaintenanceModeService = Depends(get_maintenance_service)
):
    """Replace the view model and display settings"""
    await service.save_settings(status_settings)
    return await service.get_status()
