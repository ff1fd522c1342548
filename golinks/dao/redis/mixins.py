"""Shared Redis client wiring for the Redis-backed link stores

Every Redis DAO is built from the `redis` section of the lambda's AppConfig
document. The factory in golinks.dao.factory turns each setting into a
`redis_<setting>` keyword argument, e.g. {'host': 'cache', 'db': 2} becomes
RedisClientMixin(redis_host='cache', redis_db=2).

Example:
    >>> class DestinationListRedisDAO(RedisClientMixin, DestinationListBaseDAO):
    ...     ...
    >>> dao = DestinationListRedisDAO(redis_host='cache', prefix='golinks:prod')
    >>> dao.keys.destinations_key('42')
    'golinks:prod:items:42:links'
"""

from typing import Optional

import redis

from golinks.dao.redis.redis_key_schema import RedisKeySchema
from golinks.dao.redis.helpers import REDIS_CONNECTIVITY_ERRORS, redis_address
from golinks.dao.exceptions import DataStoreError


class RedisClientMixin:
    """Attach a Redis client and a key schema to a DAO

    A connectivity check runs on construction, so a misconfigured store fails
    while the DAO is built rather than on the first request it serves.

    Attributes:
        redis (redis.Redis):
            Client shared by all operations of the DAO.
        keys (RedisKeySchema):
            Namespaced key names (prefix is usually `app_prefix()`).

    Raises:
        DataStoreError:
            If Redis doesn't answer PING.
    """

    def __init__(
        self,
        redis_host: Optional[str] = 'localhost',
        redis_port: Optional[int] = 6379,
        redis_db: Optional[int] = 0,
        redis_decode_responses: Optional[bool] = True,
        redis_username: Optional[str] = None,
        redis_password: Optional[str] = None,
        redis_client: Optional[redis.Redis] = None,
        prefix: Optional[str] = None,
    ):
        if redis_client is None:
            # AppConfig documents may carry the port and db as strings
            redis_client = redis.Redis(
                host=redis_host,
                port=int(redis_port),
                db=int(redis_db),
                decode_responses=redis_decode_responses,
                username=redis_username,
                password=redis_password,
            )

        self.redis = redis_client
        self.keys = RedisKeySchema(prefix=prefix)
        self._healthcheck()

    def _healthcheck(self) -> None:
        try:
            self.redis.ping()
        except REDIS_CONNECTIVITY_ERRORS as e:
            raise DataStoreError(
                f"Can't connect to Redis at {redis_address(self.redis)}. Check the provided configuration parameters."
            ) from e
