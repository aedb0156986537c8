import enum
from pathlib import Path
from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional


class StorageMode(str, enum.Enum):
    DATABASE = "database"
    FILE = "file"
    IN_MEMORY = "in_memory"


class MaintenanceModeSettings(BaseModel):
    """Static override supplied at process start, immutable afterwards"""

    model_config = ConfigDict(frozen=True)

    is_in_maintenance_mode: bool = False
    is_content_frozen: bool = False
    storage_mode: StorageMode = StorageMode.FILE


class Settings(BaseSettings):
    # --- Project Settings ---
    PROJECT_NAME: str = "Maintenance Status"
    API_V1_STR: str = "/api/v1"
    BASE_DIR: Path = Path(__file__).resolve().parent.parent
    LOG_LEVEL: str = "INFO"

    # --- Maintenance Override ---
    IS_IN_MAINTENANCE_MODE: bool = False
    IS_CONTENT_FROZEN: bool = False

    # --- Storage Settings ---
    STORAGE_MODE: StorageMode = StorageMode.FILE
    STATUS_FILE_PATH: Optional[Path] = None
    DATABASE_URL: str = "sqlite:///./maintenance_status.db"

    @property
    def status_file_path(self) -> Path:
        if self.STATUS_FILE_PATH:
            return self.STATUS_FILE_PATH
        return self.BASE_DIR / "maintenance-mode.json"

    # --- Gate Settings ---
    MAINTENANCE_IGNORED_PATHS: List[str] = ["/health", "/api/v1/admin/maintenance"]
    CONTENT_PATH_PREFIXES: List[str] = ["/api/v1/content"]
    RETRY_AFTER_SECONDS: int = 3600

    model_config = SettingsConfigDict(case_sensitive=True, env_file=".env")

    def maintenance_override(self) -> MaintenanceModeSettings:
        return MaintenanceModeSettings(
            is_in_maintenance_mode=self.IS_IN_MAINTENANCE_MODE,
            is_content_frozen=self.IS_CONTENT_FROZEN,
            storage_mode=self.STORAGE_MODE,
        )


settings = Settings()
