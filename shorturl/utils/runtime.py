"""Runtime utilities

Functions:
    get_service(config: ShortenerConfig) -> ShorteningService:
        Build the shortening service for a configuration once per process.

Example:
    >>> from shorturl.utils.config import load_config
    >>> from shorturl.utils.runtime import get_service
    >>> service = get_service(load_config())
    >>> get_service(load_config()) is service
    True
"""

import functools
import logging

from shorturl.dao.redis import MappingRedisDAO
from shorturl.service import ShorteningService
from shorturl.utils.config import ShortenerConfig


logger = logging.getLogger(__name__)


@functools.lru_cache(maxsize=1)
def get_service(config: ShortenerConfig) -> ShorteningService:
    """Initialize the mapping store and wrap it in a ShorteningService

    The result is cached per configuration, so a warm Lambda container reuses
    one Redis connection pool across invocations.

    Raises:
        StorageInitError:
            If the mapping store can't be initialized.
    """
    store = MappingRedisDAO.initialize(config.storage_location, prefix=config.prefix)
    logger.info('Connected to mapping store.', extra={'prefix': config.prefix})
    return ShorteningService(store, id_length=config.id_length, max_attempts=config.max_attempts)
