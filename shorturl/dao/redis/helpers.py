import functools
import redis
from typing import TypeVar, Any
from collections.abc import Callable

from shorturl.dao.exceptions import StorageError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])


def redis_location(client: redis.Redis) -> str:
    """Return '<host>:<port>/<db>' of the server a Redis client talks to"""
    info = client.connection_pool.connection_kwargs
    return f"{info.get('host')}:{info.get('port')}/{info.get('db')}"


def handle_redis_error[F](method: F) -> F:
    """Wrap Redis-interacting DAO methods to translate Redis failures into StorageError

    Connection and timeout errors are reported as connectivity issues. Any other
    Redis error (e.g. a failing script or an OOM response) is reported as-is.
    Errors are never retried here; retry policy belongs to the caller.

    Args:
        method (Callable[..., Any]):
            DAO method performing Redis operations which may raise redis.exceptions.RedisError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises StorageError on Redis failures.

    Example:
        >>> @handle_redis_error
        ... def lookup(self, key):
        ...     return self.redis.get(key)
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            raise StorageError(f"Can't connect to Redis at {redis_location(self.redis)}.") from e
        except redis.exceptions.RedisError as e:
            raise StorageError(f'Redis at {redis_location(self.redis)} failed: {e}') from e

    return wrapper
