"""Data Access Object (DAO) storing all link mappings in one consolidated Redis map

The whole token -> destination URL table is serialized as a single JSON object
under `<prefix>:links:map`. Every put is a read-modify-write of that table, made
atomic with optimistic locking:

    WATCH <prefix>:links:map
    GET   <prefix>:links:map        -> decode, upsert entries, encode
    MULTI
    SET   <prefix>:links:map <table>
    EXEC                            -> aborted (WatchError) if another writer won

An aborted transaction is re-attempted from the GET, up to MAP_CAS_ATTEMPTS times.
Without the WATCH, two concurrent puts for different tokens would both read the
same table and the second SET would drop the first writer's entry.

Example:
    >>> dao = LinkMapRedisDAO(prefix="golinks:dev")
    >>> dao.put(LinkModel(target='http://example.com', token='a9b9f04336'))
    <LinkMapRedisDAO>
    >>> dao.resolve('a9b9f04336').target
    'http://example.com'
"""

import json
from collections.abc import Callable, Sequence

import redis
from beartype import beartype

from golinks.models import LinkModel
from golinks.dao.base import LinkBaseDAO
from golinks.dao.redis.mixins import RedisClientMixin
from golinks.dao.redis.helpers import handle_redis_connection_error, run_transaction
from golinks.dao.exceptions import DataStoreError, LinkNotFoundError
from golinks.utils.constants import MAP_CAS_ATTEMPTS


class LinkMapRedisDAO(RedisClientMixin, LinkBaseDAO):
    """Redis-based DAO keeping every link mapping in a single serialized table

    Methods:
        put(link: LinkModel, **kwargs) -> LinkMapRedisDAO:
            Upsert one entry of the table (compare-and-swap).
            Raises DataStoreError on connectivity issues or when every attempt conflicts.

        put_many(links: Sequence[LinkModel], **kwargs) -> LinkMapRedisDAO:
            Upsert several entries in a single compare-and-swap.

        resolve(token: str, **kwargs) -> LinkModel:
            Read the table and look up the token.
            Raises LinkNotFoundError when the token isn't in the table.
            Raises DataStoreError if the table can't be decoded.
    """

    @beartype
    def put(self, link: LinkModel, **kwargs) -> 'LinkMapRedisDAO':
        return self.put_many([link], **kwargs)

    @handle_redis_connection_error
    @beartype
    def put_many(self, links: Sequence[LinkModel], **kwargs) -> 'LinkMapRedisDAO':
        if not links:
            return self

        run_transaction(
            self.redis,
            lambda pipe: self.stage_links(pipe, links),
            watch=self.watched_keys(),
            attempts=MAP_CAS_ATTEMPTS,
        )
        return self

    def watched_keys(self) -> list[str]:
        """Keys to WATCH while staging links (the whole table)"""
        return [self.keys.link_map_key()]

    def stage_links(self, pipe: redis.client.Pipeline, links: Sequence[LinkModel]) -> Callable[[redis.client.Pipeline], None]:
        """Read the watched table, merge the links and return the write of the new table

        Must run while the table key is watched (see run_transaction), so the
        read happens immediately and a concurrent writer aborts the EXEC.
        """
        link_map_key = self.keys.link_map_key()
        table = self._decode(pipe.get(link_map_key))
        table.update({link.token: link.target for link in links})
        blob = json.dumps(table, sort_keys=True)

        return lambda pipe: pipe.set(link_map_key, blob)

    @handle_redis_connection_error
    @beartype
    def resolve(self, token: str, **kwargs) -> LinkModel:
        table = self._decode(self.redis.get(self.keys.link_map_key()))

        target = table.get(token)
        if target is None:
            raise LinkNotFoundError(f"Link with token '{token}' not found.")

        return LinkModel(target=target, token=token)

    @staticmethod
    def _decode(blob: str | bytes | None) -> dict[str, str]:
        if blob is None:
            return {}

        try:
            table = json.loads(blob)
        except ValueError as e:
            raise DataStoreError('Link map is corrupted (invalid JSON).') from e

        if not isinstance(table, dict):
            raise DataStoreError(f'Link map is corrupted (expected a JSON object, got {type(table).__name__}).')
        return table
