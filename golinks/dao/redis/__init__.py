from golinks.dao.redis.redis_key_schema import RedisKeySchema
from golinks.dao.redis.mixins import RedisClientMixin
from golinks.dao.redis.link_redis_dao import LinkRedisDAO, LinkExpiringRedisDAO
from golinks.dao.redis.link_map_redis_dao import LinkMapRedisDAO
from golinks.dao.redis.destination_list_redis_dao import DestinationListRedisDAO


__all__ = [
    'RedisKeySchema',
    'RedisClientMixin',
    'LinkRedisDAO',
    'LinkExpiringRedisDAO',
    'LinkMapRedisDAO',
    'DestinationListRedisDAO',
]
