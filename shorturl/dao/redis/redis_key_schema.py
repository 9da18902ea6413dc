import functools
from collections.abc import Callable


__all__ = ['RedisKeySchema']  # hide internal decorator prefix_key from imports


def prefix_key(func: Callable) -> Callable:
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs) -> str:
        key = func(self, *args, **kwargs)
        return f'{self.prefix}:{key}' if self.prefix is not None else key

    return wrapper


class RedisKeySchema:
    """Provide standardized Redis keys for the short_urls mapping table.

    The table is stored as two key families, one per unique column:
        short_urls:id:<short_id>  -> long url
        short_urls:url:<long_url> -> short id

    An optional prefix can be provided to namespace all generated keys.
    It is highly encouraged to set a custom prefix for each app and environment,
    e.g. "shorturl:prod" or "shorturl:dev".
    """

    def __init__(self, prefix: str | None = None):
        if prefix is not None and not isinstance(prefix, str):
            raise TypeError(f'Prefix must be of type string (given type: {type(prefix)}).')

        self.prefix = prefix

    @prefix_key
    def mapping_id_key(self, short_id: str) -> str:
        return f'short_urls:id:{short_id}'

    @prefix_key
    def mapping_url_key(self, long_url: str) -> str:
        return f'short_urls:url:{long_url}'

    @prefix_key
    def schema_key(self) -> str:
        return 'short_urls:schema'
