"""Storage providers for the maintenance mode status record.

Every provider reads and writes the full ``MaintenanceModeStatus`` as one
unit. ``read()`` returns ``None`` when nothing has been persisted yet and
raises a ``StorageError`` subclass for real failures. Blocking work (file
and database I/O) is pushed to the thread pool so the event loop is never
held up by a slow backend.
"""
import logging
import os
import stat
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Dict, Optional

from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from maintenance_status import crud
from maintenance_status.schemas import MaintenanceModeStatus
from .config import Settings, StorageMode
from .exceptions import BackendCorruptError, BackendUnavailableError, StorageWriteConflictError

logger = logging.getLogger(__name__)

DEFAULT_FILE_MODE = 0o644


class StorageProvider(ABC):
    @abstractmethod
    async def read(self) -> Optional[MaintenanceModeStatus]:
        ...

    @abstractmethod
    async def save(self, status: MaintenanceModeStatus) -> None:
        ...


def parse_status(raw: str, source: str) -> MaintenanceModeStatus:
    try:
        return MaintenanceModeStatus.from_json(raw)
    except ValidationError as e:
        raise BackendCorruptError(f"Stored maintenance status in {source} is invalid: {e}") from e


# ============= IN MEMORY =============

class InMemoryStorageProvider(StorageProvider):
    """Process-local storage, lost on restart"""

    def __init__(self):
        self._status: Optional[MaintenanceModeStatus] = None

    async def read(self) -> Optional[MaintenanceModeStatus]:
        if self._status is None:
            return None
        return self._status.model_copy(deep=True)

    async def save(self, status: MaintenanceModeStatus) -> None:
        self._status = status.model_copy(deep=True)


# ============= FILE =============

class FileStorageProvider(StorageProvider):
    """JSON file on disk, replaced atomically on every save"""

    def __init__(self, path: Path):
        self.path = Path(path)

    async def read(self) -> Optional[MaintenanceModeStatus]:
        return await run_in_threadpool(self._read)

    async def save(self, status: MaintenanceModeStatus) -> None:
        await run_in_threadpool(self._write, status.to_json())

    def _read(self) -> Optional[MaintenanceModeStatus]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except UnicodeDecodeError as e:
            raise BackendCorruptError(f"Stored maintenance status in {self.path} is not valid UTF-8: {e}") from e
        except OSError as e:
            raise BackendUnavailableError(f"Could not read {self.path}: {e}") from e

        return parse_status(raw, str(self.path))

    def _file_mode(self) -> int:
        #mkstemp creates 0600, keep the mode of the file being replaced
        try:
            return stat.S_IMODE(os.stat(self.path).st_mode)
        except FileNotFoundError:
            return DEFAULT_FILE_MODE

    def _write(self, raw: str) -> None:
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(raw)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_name, self._file_mode())
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise BackendUnavailableError(f"Could not write {self.path}: {e}") from e


# ============= DATABASE =============

class DatabaseStorageProvider(StorageProvider):
    """Single row in a shared database table, visible to every instance"""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    async def read(self) -> Optional[MaintenanceModeStatus]:
        raw = await run_in_threadpool(self._read)
        if raw is None:
            return None
        return parse_status(raw, "database")

    async def save(self, status: MaintenanceModeStatus) -> None:
        await run_in_threadpool(self._write, status.to_json())

    def _read(self) -> Optional[str]:
        db = self.session_factory()
        try:
            record = crud.get_status_record(db)
            return record.value if record else None
        except SQLAlchemyError as e:
            raise BackendUnavailableError(f"Could not read maintenance status: {e}") from e
        finally:
            db.close()

    def _write(self, raw: str) -> None:
        db = self.session_factory()
        try:
            crud.upsert_status_record(db, raw)
        except IntegrityError as e:
            db.rollback()
            raise StorageWriteConflictError(f"Maintenance status was written concurrently: {e}") from e
        except SQLAlchemyError as e:
            db.rollback()
            raise BackendUnavailableError(f"Could not save maintenance status: {e}") from e
        finally:
            db.close()


# ============= FACTORY =============

class StorageProviderFactory:
    """Builds the provider for the configured storage mode once and keeps it"""

    def __init__(self, settings: Settings, session_factory: Optional[Callable[[], Session]] = None):
        self.storage_mode: StorageMode = settings.STORAGE_MODE
        self._settings = settings
        self._session_factory = session_factory
        self._provider: Optional[StorageProvider] = None
        self._builders: Dict[StorageMode, Callable[[], StorageProvider]] = {
            StorageMode.DATABASE: self._build_database,
            StorageMode.FILE: self._build_file,
            StorageMode.IN_MEMORY: InMemoryStorageProvider,
        }

    def get_provider(self) -> StorageProvider:
        if self._provider is None:
            self._provider = self._builders[self.storage_mode]()
            logger.info(f"Using {type(self._provider).__name__} for storage mode '{self.storage_mode.value}'")
        return self._provider

    def _build_file(self) -> StorageProvider:
        return FileStorageProvider(self._settings.status_file_path)

    def _build_database(self) -> StorageProvider:
        session_factory = self._session_factory
        if session_factory is None:
            from maintenance_status.database import SessionLocal

            session_factory = SessionLocal
        return DatabaseStorageProvider(session_factory)
