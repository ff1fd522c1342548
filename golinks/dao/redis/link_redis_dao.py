"""Data Access Objects (DAO) for storing link mappings as one Redis key per token

This module implements the two per-key lifecycle policies of the link mapping
store:

    - permanent: `<prefix>:links:<token>:url` is stored without a TTL.
    - expiring:  the same key carries a sliding 30 day TTL, refreshed by every put.
                 Redis drops mappings that haven't been refreshed in time.

Classes:
    LinkRedisDAO:
        Permanent key-value policy.

    LinkExpiringRedisDAO:
        Expiring (sliding TTL) policy.

Example:
    >>> from golinks.models import LinkModel
    >>> from golinks.dao.redis import LinkExpiringRedisDAO

    >>> dao = LinkExpiringRedisDAO(prefix="golinks:dev")
    >>> dao.put(LinkModel(target='http://example.com', token='a9b9f04336'))
    <LinkExpiringRedisDAO>

    >>> link = dao.resolve('a9b9f04336')
    >>> link.target
    'http://example.com'
    >>> link.expires_at
    <datetime>
"""

from datetime import datetime, timedelta, UTC
from collections.abc import Callable, Sequence

import redis
from beartype import beartype

from golinks.models import LinkModel
from golinks.dao.base import LinkBaseDAO
from golinks.dao.redis.mixins import RedisClientMixin
from golinks.dao.redis.helpers import handle_redis_connection_error, run_transaction
from golinks.dao.exceptions import LinkNotFoundError
from golinks.utils.constants import LINK_TTL_SECONDS


class LinkRedisDAO(RedisClientMixin, LinkBaseDAO):
    """Redis-based DAO storing each link mapping under its own key

    Attributes:
        ttl (int | None):
            Seconds a mapping lives after its last put. None for permanent mappings.

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Methods:
        put(link: LinkModel, **kwargs) -> LinkRedisDAO:
            SET the token's key to the destination URL (overwrites any previous value).
            Raises DataStoreError on connectivity issues with Redis.

        put_many(links: Sequence[LinkModel], **kwargs) -> LinkRedisDAO:
            SET several keys in a single Redis transaction.
            Raises DataStoreError on connectivity issues with Redis.

        resolve(token: str, **kwargs) -> LinkModel:
            GET the token's key along with its TTL.
            Raises LinkNotFoundError when the key doesn't exist (or expired).
            Raises DataStoreError on connectivity issues with Redis.
    """

    ttl: int | None = None

    @handle_redis_connection_error
    @beartype
    def put(self, link: LinkModel, **kwargs) -> 'LinkRedisDAO':
        """Create or refresh a link mapping

        Example:
            >>> dao.put(LinkModel(target='http://example.com', token='a9b9f04336'))
            <LinkRedisDAO>
        """
        self.redis.set(self.keys.link_url_key(link.token), link.target, ex=self.ttl)
        return self

    @handle_redis_connection_error
    @beartype
    def put_many(self, links: Sequence[LinkModel], **kwargs) -> 'LinkRedisDAO':
        """Create or refresh several link mappings atomically

        All SET commands run in one MULTI/EXEC transaction, so a failing save
        either refreshes every mapping or none of them.
        """
        if not links:
            return self

        run_transaction(self.redis, lambda pipe: self.stage_links(pipe, links), watch=self.watched_keys())
        return self

    def watched_keys(self) -> list[str]:
        """Keys to WATCH while staging links (none, every token has its own key)"""
        return []

    def stage_links(self, pipe: redis.client.Pipeline, links: Sequence[LinkModel]) -> Callable[[redis.client.Pipeline], None]:
        """Prepare the writes of put_many() for a shared transaction (see run_transaction)"""

        def queue(pipe: redis.client.Pipeline) -> None:
            for link in links:
                pipe.set(self.keys.link_url_key(link.token), link.target, ex=self.ttl)

        return queue

    @handle_redis_connection_error
    @beartype
    def resolve(self, token: str, **kwargs) -> LinkModel:
        """Retrieve the live mapping of a token

        GET and TTL run in one transaction so the expiry matches the value read.

        Raises:
            LinkNotFoundError:
                If the token has no mapping (never stored or expired).
            DataStoreError:
                If Redis connectivity issues occur.

        Example:
            >>> dao.resolve('a9b9f04336')
            LinkModel(target='http://example.com', token='a9b9f04336', updated_at=None, expires_at=None)
        """
        link_url_key = self.keys.link_url_key(token)

        with self.redis.pipeline(transaction=True) as pipe:
            pipe.get(link_url_key)
            pipe.ttl(link_url_key)
            target, ttl = pipe.execute()

        if target is None:
            raise LinkNotFoundError(f"Link with token '{token}' not found.")

        return LinkModel(target=target, token=token, **self._timestamps(ttl))

    def _timestamps(self, ttl: int | None) -> dict[str, datetime | None]:
        # TTL is -1 for keys without expiry
        if ttl is None or ttl < 0:
            return {'updated_at': None, 'expires_at': None}

        expires_at = datetime.now(UTC) + timedelta(seconds=ttl)
        updated_at = expires_at - timedelta(seconds=self.ttl) if self.ttl else None
        return {'updated_at': updated_at, 'expires_at': expires_at}


class LinkExpiringRedisDAO(LinkRedisDAO):
    """Redis-based DAO for link mappings with a sliding 30 day TTL

    Every put() resets the TTL. resolve() doesn't refresh it, so a link that
    is only ever visited (never saved or displayed again) expires 30 days
    after its last put.
    """

    ttl = LINK_TTL_SECONDS
