"""Data Access Object (DAO) implementation for managing short URL mappings in Redis

This module provides a Redis-based implementation of MappingBaseDAO. The
conceptual `short_urls` table (id PRIMARY KEY, url UNIQUE) is laid out as two
key families, one for each unique column (see RedisKeySchema).

Responsibilities:
    - Initialize and verify the key layout of a Redis data store;
    - Insert mappings with atomic, conflict-aware upsert semantics;
    - Resolve mappings by short id and by long url;
    - Raise appropriate DAO exceptions on conflicts and Redis failures.

Classes:
    MappingRedisDAO:
        DAO for storing and retrieving UrlMapping rows in a Redis datastore.

Example:
    >>> from shorturl.dao.redis import MappingRedisDAO

    >>> dao = MappingRedisDAO.initialize('redis://localhost:6379/0', prefix='shorturl:dev')

    >>> dao.insert_or_get('abc123', 'https://example.com/page')
    'abc123'
    >>> dao.insert_or_get('xyz789', 'https://example.com/page')
    'abc123'
    >>> dao.insert_or_get('abc123', 'https://example.com/other')
    Traceback (most recent call last):
        ...
    shorturl.dao.exceptions.ConflictError: Short URL with id 'abc123' already exists for a different url.

    >>> dao.lookup_by_id('abc123')
    'https://example.com/page'
"""

import redis
from beartype import beartype

from shorturl.constants import SCHEMA_VERSION
from shorturl.dao.base import MappingBaseDAO
from shorturl.dao.redis.mixins import RedisClientMixin
from shorturl.dao.redis.helpers import handle_redis_error, redis_location
from shorturl.dao.exceptions import ConflictError, NotFoundError, StorageError, StorageInitError


# Outcomes reported by INSERT_OR_GET_SCRIPT
CREATED = 'created'
EXISTS = 'exists'
CONFLICT = 'conflict'

# KEYS[1]: short_urls:id:<short_id>    ARGV[1]: candidate short id
# KEYS[2]: short_urls:url:<long_url>   ARGV[2]: long url
INSERT_OR_GET_SCRIPT = """
local existing_id = redis.call('GET', KEYS[2])
if existing_id then
    return {'exists', existing_id}
end
if redis.call('EXISTS', KEYS[1]) == 1 then
    return {'conflict', ARGV[1]}
end
redis.call('SET', KEYS[1], ARGV[2])
redis.call('SET', KEYS[2], ARGV[1])
return {'created', ARGV[1]}
"""


class MappingRedisDAO(RedisClientMixin, MappingBaseDAO):
    """Redis-based Data Access Object (DAO) for managing short URL mappings

    This class implements the MappingBaseDAO interface using Redis as a data store.

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Methods:
        initialize(location: str, **kwargs) -> MappingRedisDAO:
            Connect to the Redis URL `location` and verify the key layout version.
            Raises StorageInitError when Redis is unreachable or the layout is unknown.

        insert_or_get(short_id: str, long_url: str, **kwargs) -> str:
            Insert a mapping, or return the short id already stored for the url.
            Raises ConflictError when the short id belongs to a different url.
            Raises StorageError on Redis failures.

        lookup_by_id(short_id: str, **kwargs) -> str:
            Return the long url for a short id.
            Raises NotFoundError when the short id doesn't exist.
            Raises StorageError on Redis failures.

        lookup_by_url(long_url: str, **kwargs) -> str:
            Return the short id for a long url.
            Raises NotFoundError when the url was never shortened.
            Raises StorageError on Redis failures.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._insert_or_get_script = self.redis.register_script(INSERT_OR_GET_SCRIPT)

    @classmethod
    def initialize(cls, location: str, **kwargs) -> 'MappingRedisDAO':
        """Open the Redis data store at `location` and ensure its key layout

        The schema marker key is written with SET NX, so concurrent or repeated
        initialization of the same location is harmless.

        Args:
            location (str):
                Redis URL, e.g. 'redis://localhost:6379/0'.
            **kwargs:
                Forwarded to RedisClientMixin (e.g. prefix, redis_client).

        Returns:
            MappingRedisDAO: a DAO connected to the initialized data store.

        Raises:
            StorageInitError:
                If the URL is malformed, the client doesn't decode responses, Redis is
                unreachable, or the schema marker holds a version this code doesn't understand.

        Example:
            >>> dao = MappingRedisDAO.initialize('redis://localhost:6379/0', prefix='shorturl:dev')
        """
        try:
            dao = cls(redis_url=location, **kwargs)
        except ValueError as e:
            raise StorageInitError(f"Invalid Redis location '{location}' ({e}).") from e
        except StorageError as e:
            raise StorageInitError(str(e)) from e

        schema_key = dao.keys.schema_key()
        try:
            with dao.redis.pipeline(transaction=True) as pipe:
                pipe.set(schema_key, SCHEMA_VERSION, nx=True)
                pipe.get(schema_key)
                _, version = pipe.execute()
        except redis.exceptions.RedisError as e:
            raise StorageInitError(f"Can't create schema in Redis at {redis_location(dao.redis)}.") from e

        if version != SCHEMA_VERSION:
            raise StorageInitError(
                f"Unexpected schema version '{version}' in Redis at {redis_location(dao.redis)} (expected '{SCHEMA_VERSION}')."
            )
        return dao

    @handle_redis_error
    @beartype
    def insert_or_get(self, short_id: str, long_url: str, **kwargs) -> str:
        """Insert a short URL mapping into Redis, or get the existing one

        The lookup of both unique keys and the write of both keys happen inside
        one Lua script, which Redis executes without interleaving other commands.
        Two concurrent callers shortening the same url (or drawing the same
        candidate id) are therefore serialized by Redis itself:

            (caller 1): insert_or_get('aaaaaa', 'https://example.com')
                        -> script: url key missing, id key missing => SET both
            (caller 2): insert_or_get('bbbbbb', 'https://example.com')
                        -> script: url key found => returns 'aaaaaa'

        Args:
            short_id (str):
                Candidate short id for the new mapping.
            long_url (str):
                The original long URL.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            str: the short id stored for `long_url` (pre-existing or the candidate).

        Raises:
            ConflictError:
                If the candidate short id is already mapped to a different url.
            StorageError:
                If a Redis failure occurs while running the script.

        Example:
            >>> dao.insert_or_get('abc123', 'https://example.com')
            'abc123'
        """
        id_key = self.keys.mapping_id_key(short_id)
        url_key = self.keys.mapping_url_key(long_url)

        status, stored_id = self._insert_or_get_script(keys=[id_key, url_key], args=[short_id, long_url])

        if status == CONFLICT:
            raise ConflictError(f"Short URL with id '{short_id}' already exists for a different url.")
        return stored_id

    @handle_redis_error
    @beartype
    def lookup_by_id(self, short_id: str, **kwargs) -> str:
        """Retrieve the long url stored for a short id

        Raises:
            NotFoundError:
                If the short id does not exist in Redis.
            StorageError:
                If Redis connectivity issues occur.

        Example:
            >>> dao.lookup_by_id('abc123')
            'https://example.com'
        """
        long_url = self.redis.get(self.keys.mapping_id_key(short_id))
        if long_url is None:
            raise NotFoundError(f"Short URL with id '{short_id}' not found.")
        return long_url

    @handle_redis_error
    @beartype
    def lookup_by_url(self, long_url: str, **kwargs) -> str:
        """Retrieve the short id stored for a long url

        Raises:
            NotFoundError:
                If the url was never shortened.
            StorageError:
                If Redis connectivity issues occur.
        """
        short_id = self.redis.get(self.keys.mapping_url_key(long_url))
        if short_id is None:
            raise NotFoundError(f"Short URL for '{long_url}' not found.")
        return short_id
