import threading

import pytest

from shorturl.dao.base import MappingBaseDAO
from shorturl.dao.exceptions import ConflictError, NotFoundError


class InMemoryMappingDAO(MappingBaseDAO):
    """Thread-safe in-memory mapping store with the same conflict semantics as MappingRedisDAO.

    The lock plays the role of Redis executing the insert_or_get script atomically.
    """

    def __init__(self):
        self.ids: dict[str, str] = {}
        self.urls: dict[str, str] = {}
        self._lock = threading.Lock()

    @classmethod
    def initialize(cls, location: str, **kwargs) -> 'InMemoryMappingDAO':
        return cls()

    def insert_or_get(self, short_id: str, long_url: str, **kwargs) -> str:
        with self._lock:
            if long_url in self.urls:
                return self.urls[long_url]
            if short_id in self.ids:
                raise ConflictError(f"Short URL with id '{short_id}' already exists for a different url.")
            self.ids[short_id] = long_url
            self.urls[long_url] = short_id
            return short_id

    def lookup_by_id(self, short_id: str, **kwargs) -> str:
        try:
            return self.ids[short_id]
        except KeyError:
            raise NotFoundError(f"Short URL with id '{short_id}' not found.") from None

    def lookup_by_url(self, long_url: str, **kwargs) -> str:
        try:
            return self.urls[long_url]
        except KeyError:
            raise NotFoundError(f"Short URL for '{long_url}' not found.") from None


@pytest.fixture
def memory_store() -> InMemoryMappingDAO:
    return InMemoryMappingDAO()
