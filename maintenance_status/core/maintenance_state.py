"""Maintenance mode state manager"""
import asyncio
import logging
from typing import Optional

from maintenance_status.schemas import MaintenanceModeStatus, StatusSettings
from .config import MaintenanceModeSettings, StorageMode
from .exceptions import ServiceNotInitializedError, StorageError
from .storage import StorageProvider, StorageProviderFactory

logger = logging.getLogger(__name__)


class MaintenanceModeService:
    """Tracks maintenance mode and content freeze for this process.

    Construct once per process, then ``await initialize()`` before use (or use
    ``create()``). In database storage mode the status is re-read from storage
    on every access so that all running instances agree; in every other mode
    the tracked in-process copy is served.

    Mutations are serialized by a lock and the tracked status is only replaced
    after the new value has been persisted.
    """

    def __init__(self, override: Optional[MaintenanceModeSettings], storage_provider_factory: StorageProviderFactory):
        self._override = override
        self._storage_provider_factory = storage_provider_factory
        self._lock = asyncio.Lock()
        self._tracked: Optional[MaintenanceModeStatus] = None

    @classmethod
    async def create(cls, override: Optional[MaintenanceModeSettings], storage_provider_factory: StorageProviderFactory) -> "MaintenanceModeService":
        service = cls(override, storage_provider_factory)
        await service.initialize()
        return service

    @property
    def storage_provider(self) -> StorageProvider:
        return self._storage_provider_factory.get_provider()

    @property
    def storage_mode(self) -> StorageMode:
        return self._storage_provider_factory.storage_mode

    @property
    def is_initialized(self) -> bool:
        return self._tracked is not None

    async def initialize(self) -> None:
        async with self._lock:
            if self._tracked is not None:
                return
            self._tracked = await self._load_status()

    async def get_status(self) -> MaintenanceModeStatus:
        self._ensure_initialized()

        if self.storage_mode == StorageMode.DATABASE:
            stored = await self.storage_provider.read()
            if stored is None:
                async with self._lock:
                    return self._tracked.model_copy(deep=True)
            return self._apply_override(stored)

        async with self._lock:
            return self._tracked.model_copy(deep=True)

    async def toggle_maintenance_mode(self, maintenance_mode: bool) -> None:
        self._ensure_initialized()

        async with self._lock:
            #compared against the tracked value even in database mode, toggles
            #are expected to come through the instance that owns the control surface
            if maintenance_mode == self._tracked.is_in_maintenance_mode:
                logger.debug(f"Maintenance mode already {'on' if maintenance_mode else 'off'}")
                return

            updated = self._tracked.model_copy(deep=True, update={"is_in_maintenance_mode": maintenance_mode, "using_web_config": False})
            await self._persist(updated)
            logger.info(f"Maintenance mode turned {'on' if maintenance_mode else 'off'}")

    async def toggle_content_freeze(self, is_content_frozen: bool) -> None:
        self._ensure_initialized()

        async with self._lock:
            if is_content_frozen == self._tracked.is_content_frozen:
                logger.debug(f"Content freeze already {'on' if is_content_frozen else 'off'}")
                return

            updated = self._tracked.model_copy(deep=True, update={"is_content_frozen": is_content_frozen, "using_web_config": False})
            await self._persist(updated)
            logger.info(f"Content freeze turned {'on' if is_content_frozen else 'off'}")

    async def save_settings(self, settings: StatusSettings) -> None:
        self._ensure_initialized()

        async with self._lock:
            updated = self._tracked.model_copy(deep=True, update={"settings": settings.model_copy(deep=True)})
            await self._persist(updated)
            logger.info("Maintenance mode settings saved")

    async def _persist(self, status: MaintenanceModeStatus) -> None:
        try:
            await self.storage_provider.save(status)
        except StorageError as e:
            logger.error(f"Failed to persist maintenance status: {e}")
            raise
        self._tracked = status

    async def _load_status(self) -> MaintenanceModeStatus:
        #fallback - compiled-in defaults
        status = MaintenanceModeStatus()

        #read from the storage location, if available
        try:
            stored = await self.storage_provider.read()
        except StorageError as e:
            logger.warning(f"Could not read maintenance status from storage, using defaults: {e}")
            stored = None

        if stored is not None:
            status = stored

        #override from configuration, if applicable
        status = self._apply_override(status)
        logger.info(
            f"Maintenance status loaded: maintenance={status.is_in_maintenance_mode} "
            f"frozen={status.is_content_frozen} override={status.using_web_config}"
        )
        return status

    def _apply_override(self, status: MaintenanceModeStatus) -> MaintenanceModeStatus:
        override = self._override
        if override is None or not override.is_in_maintenance_mode:
            if override is not None and override.is_content_frozen and not self.is_initialized:
                logger.warning("Content freeze override ignored because maintenance mode override is off")
            return status

        return status.model_copy(update={
            "is_in_maintenance_mode": override.is_in_maintenance_mode,
            "is_content_frozen": override.is_content_frozen,
            "using_web_config": True,
        })

    def _ensure_initialized(self) -> None:
        if self._tracked is None:
            raise ServiceNotInitializedError("MaintenanceModeService.initialize() has not been awaited")
