"""Abstract base class for UrlMapping data access objects (DAOs).

This class establishes a consistent contract for all mapping store implementations,
regardless of the underlying storage mechanism (e.g., Redis, PostgreSQL, SQLite).

Responsibilities:
    - Provide an interface for creating and resolving short id <-> long url mappings.
    - Guarantee uniqueness of both the short id and the long url at the storage level.
    - Standardize error handling across multiple data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from shorturl.dao.redis import MappingRedisDAO

        >>> dao = MappingRedisDAO.initialize('redis://localhost:6379/0')

        >>> dao.insert_or_get('a1b2c3', 'https://example.com/blog/article-123')
        'a1b2c3'

        >>> dao.insert_or_get('zZ9-_x', 'https://example.com/blog/article-123')
        'a1b2c3'

        >>> dao.lookup_by_id('a1b2c3')
        'https://example.com/blog/article-123'
"""

from abc import ABC, abstractmethod


class MappingBaseDAO(ABC):
    """Interface for UrlMapping data access objects (DAOs).

    Methods:
        initialize(location: str, **kwargs) -> MappingBaseDAO:
            Open or create the data store at `location` and verify its schema.
            Raises StorageInitError if the location is inaccessible or the schema is invalid.

        insert_or_get(short_id: str, long_url: str, **kwargs) -> str:
            Atomically insert a mapping, or return the short id already stored for the url.
            Raises ConflictError if the short id belongs to a different url.
            Raises StorageError on connection or write failure.

        lookup_by_id(short_id: str, **kwargs) -> str:
            Return the long url stored for a short id.
            Raises NotFoundError if the mapping does not exist.
            Raises StorageError on connection or read failure.

        lookup_by_url(long_url: str, **kwargs) -> str:
            Return the short id stored for a long url.
            Raises NotFoundError if the mapping does not exist.
            Raises StorageError on connection or read failure.

    Subclassing:
        Datastore-specific implementations (e.g., MappingRedisDAO) must extend
        this class and implement all abstract methods.

    NOTE:
        - Mappings are immutable. The DAO does not provide an interface to
          update or delete entries.
        - Conflicts must be detected in a single atomic operation. Callers
          never check for existence before inserting.
    """

    @classmethod
    @abstractmethod
    def initialize(cls, location: str, **kwargs) -> 'MappingBaseDAO':
        """Open or create the data store at `location`.

        Idempotent: safe to call on an already initialized location.

        Args:
            location (str):
                Backend-specific location of the data store.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            MappingBaseDAO: a DAO connected to the initialized data store.

        Raises:
            StorageInitError:
                If the location is inaccessible or the schema can't be created or verified.
        """
        pass

    @abstractmethod
    def insert_or_get(self, short_id: str, long_url: str, **kwargs) -> str:
        """Insert a new mapping, or return the existing short id for `long_url`.

        Args:
            short_id (str):
                Candidate short id for the new mapping.

            long_url (str):
                The original long URL.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            str: the short id actually stored for `long_url`. This is the existing
                 short id when the url was already shortened, otherwise the candidate.

        Raises:
            ConflictError:
                If the candidate short id already exists for a different url.

            StorageError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def lookup_by_id(self, short_id: str, **kwargs) -> str:
        """Retrieve the long url for a short id.

        Raises:
            NotFoundError:
                If no mapping with the given short id exists.

            StorageError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def lookup_by_url(self, long_url: str, **kwargs) -> str:
        """Retrieve the short id for a long url.

        Raises:
            NotFoundError:
                If no mapping with the given long url exists.

            StorageError:
                If there is an error in the data store.
        """
        pass
