import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from unittest import mock

from maintenance_status.core.config import StorageMode, MaintenanceModeSettings, settings
from maintenance_status.core.storage import DatabaseStorageProvider, FileStorageProvider
from maintenance_status.database import Base, init_db
from maintenance_status.main import app
from tests.helpers import RecordingProvider

SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def session_factory():
    """fresh in-memory database for each test"""
    init_db(bind=engine)
    try:
        yield TestingSessionLocal
    finally:
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def database_provider(session_factory):
    return DatabaseStorageProvider(session_factory)


@pytest.fixture(scope="function")
def file_provider(tmp_path):
    return FileStorageProvider(tmp_path / "maintenance-mode.json")


@pytest.fixture(scope="function")
def memory_provider():
    return RecordingProvider()


@pytest.fixture(scope="function")
def no_override():
    return MaintenanceModeSettings()


@pytest.fixture(scope="function")
def client():
    """test client backed by in-memory storage"""
    with (
        mock.patch.object(settings, "STORAGE_MODE", StorageMode.IN_MEMORY),
        mock.patch.object(settings, "IS_IN_MAINTENANCE_MODE", False),
        mock.patch.object(settings, "IS_CONTENT_FROZEN", False),
    ):
        with TestClient(app, base_url="http://localhost:8000") as test_client:
            yield test_client
