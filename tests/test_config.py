"""tests for configuration and the static override"""
import pytest
from pydantic import ValidationError

from maintenance_status.core.config import MaintenanceModeSettings, Settings, StorageMode


def test_defaults():
    """test no environment => file storage and no override"""
    config = Settings(_env_file=None)
    assert config.STORAGE_MODE == StorageMode.FILE
    assert config.status_file_path == config.BASE_DIR / "maintenance-mode.json"

    override = config.maintenance_override()
    assert override == MaintenanceModeSettings()


def test_override_from_environment(monkeypatch):
    """test environment variables feed the override"""
    monkeypatch.setenv("IS_IN_MAINTENANCE_MODE", "true")
    monkeypatch.setenv("IS_CONTENT_FROZEN", "1")
    monkeypatch.setenv("STORAGE_MODE", "database")

    override = Settings(_env_file=None).maintenance_override()

    assert override.is_in_maintenance_mode is True
    assert override.is_content_frozen is True
    assert override.storage_mode == StorageMode.DATABASE


def test_unknown_storage_mode_rejected(monkeypatch):
    """test a storage mode outside the enum fails at start-up"""
    monkeypatch.setenv("STORAGE_MODE", "redis")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_override_is_immutable():
    """test the override cannot be changed after construction"""
    override = MaintenanceModeSettings(is_in_maintenance_mode=True)
    with pytest.raises(ValidationError):
        override.is_in_maintenance_mode = False


def test_status_file_path_from_setting(tmp_path):
    """test STATUS_FILE_PATH wins over the default location"""
    config = Settings(_env_file=None, STATUS_FILE_PATH=tmp_path / "status.json")
    assert config.status_file_path == tmp_path / "status.json"
