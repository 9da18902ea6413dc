from shorturl.dao.redis.redis_key_schema import RedisKeySchema
from shorturl.dao.redis.mixins import RedisClientMixin
from shorturl.dao.redis.mapping_redis_dao import MappingRedisDAO


__all__ = [
    'RedisKeySchema',
    'RedisClientMixin',
    'MappingRedisDAO',
]
