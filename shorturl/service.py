"""Shortening service: short id allocation on top of a mapping store

Responsibilities:
    - Validate URLs submitted for shortening;
    - Mint random candidate short ids and retry on id collisions;
    - Expose the shorten() / resolve() operations used by the Lambda handlers.

The service holds no mutable state besides a handle to the store. Conflicts
are detected only by the store's atomic insert_or_get(); the service never
checks for existence before inserting, so any number of service instances can
share one store.

Example:
    >>> from shorturl.dao.redis import MappingRedisDAO
    >>> from shorturl.service import ShorteningService

    >>> service = ShorteningService(MappingRedisDAO.initialize('redis://localhost:6379/0'))
    >>> short_id = service.shorten('https://example.com/a')
    >>> short_id
    'Xk3_9a'
    >>> service.shorten('https://example.com/a') == short_id
    True
    >>> service.resolve(short_id)
    'https://example.com/a'
"""

import logging

from shorturl.constants import Defaults, SHORT_ID_ALPHABET
from shorturl.dao.base import MappingBaseDAO
from shorturl.dao.exceptions import ConflictError
from shorturl.exceptions import IdSpaceExhaustedError
from shorturl.utils.shortener import generate_short_id, validate_url


logger = logging.getLogger(__name__)


class ShorteningService:
    """Create and resolve short URL mappings.

    Attributes:
        store (MappingBaseDAO):
            Mapping store that enforces uniqueness of short ids and long urls.
        id_length (int):
            Number of characters in generated short ids.
        max_attempts (int):
            Total number of candidate ids tried per shorten() call.
            1 means a single attempt without retries.
    """

    def __init__(
        self,
        store: MappingBaseDAO,
        id_length: int = Defaults.SHORT_ID_LENGTH,
        max_attempts: int = Defaults.MAX_ATTEMPTS,
    ):
        if id_length < 1:
            raise ValueError(f'Short id length must be a positive integer (given value: {id_length}).')
        if max_attempts < 1:
            raise ValueError(f'Max attempts must be a positive integer (given value: {max_attempts}).')

        self.store = store
        self.id_length = id_length
        self.max_attempts = max_attempts

    def shorten(self, long_url: str) -> str:
        """Return the short id for `long_url`, creating the mapping if needed

        Shortening the same url twice returns the same short id: when the url
        is already stored, the store returns the existing id instead of the
        freshly generated candidate.

        Args:
            long_url (str):
                Absolute URL to shorten.

        Returns:
            str: the short id stored for `long_url`.

        Raises:
            InvalidInputError:
                If `long_url` is empty or malformed. Nothing is stored.
            IdSpaceExhaustedError:
                If every one of `max_attempts` candidates collided with another url.
            StorageError:
                If the store fails. Not retried.
        """
        validate_url(long_url)

        for attempt in range(1, self.max_attempts + 1):
            candidate = generate_short_id(self.id_length, SHORT_ID_ALPHABET)
            try:
                short_id = self.store.insert_or_get(candidate, long_url)
            except ConflictError:
                logger.warning(
                    'Short id collision. Retrying with a new candidate.',
                    extra={'shortId': candidate, 'attempt': attempt, 'maxAttempts': self.max_attempts},
                )
                continue

            if short_id != candidate:
                logger.debug('URL already shortened. Reusing existing short id.', extra={'shortId': short_id})
            return short_id

        logger.error(
            'Exhausted short id candidates.',
            extra={'idLength': self.id_length, 'maxAttempts': self.max_attempts},
        )
        raise IdSpaceExhaustedError(
            f'Could not allocate a unique short id of length {self.id_length} after {self.max_attempts} attempts.'
        )

    def resolve(self, short_id: str) -> str:
        """Return the long url for `short_id`.

        Raises:
            NotFoundError:
                If no mapping exists for `short_id`.
            StorageError:
                If the store fails.
        """
        return self.store.lookup_by_id(short_id)
