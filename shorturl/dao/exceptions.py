"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    NotFoundError:
        Raised when no mapping exists for the requested short id (or url).

    ConflictError:
        Raised when a candidate short id is already taken by a different url.

    StorageError:
        Raised when there is an error in the data store (e.g., connection issues, timeouts, OOM, etc.).

    StorageInitError:
        Raised when the data store can't be opened or its schema can't be verified.

Example:
    >>> from shorturl.dao.exceptions import NotFoundError
    >>> raise NotFoundError("Short URL with id 'zzzzzz' not found.")
    Traceback (most recent call last):
        ...
    shorturl.dao.exceptions.NotFoundError: Short URL with id 'zzzzzz' not found.
"""

from shorturl.exceptions import ShortURLError


class DAOError(ShortURLError):
    """Generic base class for DAO-related exceptions."""

    error_code = 'dao:dao_error'


class NotFoundError(DAOError):
    """Raised when a UrlMapping is not found in the data store."""

    error_code = 'dao:not_found_error'


class ConflictError(DAOError):
    """Raised when a candidate short id already belongs to a different url.

    The data store never resolves this on its own; callers retry with a new candidate.
    """

    error_code = 'dao:conflict_error'


class StorageError(DAOError):
    """Raised when the data store encounters an error.

    Examples include connection issues, timeouts, and out-of-memory failures.
    """

    error_code = 'dao:storage_error'


class StorageInitError(StorageError):
    """Raised when the data store location is inaccessible or its schema is invalid."""

    error_code = 'dao:storage_init_error'
