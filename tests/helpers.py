"""shared test doubles"""
from maintenance_status.core.config import Settings
from maintenance_status.core.storage import InMemoryStorageProvider, StorageProviderFactory


class RecordingProvider(InMemoryStorageProvider):
    """in-memory provider that counts calls and can be told to fail"""

    def __init__(self, read_error=None, save_error=None):
        super().__init__()
        self.save_calls = 0
        self.read_calls = 0
        self.read_error = read_error
        self.save_error = save_error

    async def read(self):
        self.read_calls += 1
        if self.read_error:
            raise self.read_error
        return await super().read()

    async def save(self, status):
        self.save_calls += 1
        if self.save_error:
            raise self.save_error
        await super().save(status)


class FixedProviderFactory(StorageProviderFactory):
    """factory that hands out a provider built by the test"""

    def __init__(self, storage_mode, provider):
        super().__init__(Settings(STORAGE_MODE=storage_mode))
        self._provider = provider
