"""Data Access Object (DAO) for content item destination lists in Redis

Keys:
    <prefix>:items:<content_id>:links   -> Redis LIST of destination URLs (editor order)
    <prefix>:items:<content_id>:link    -> first destination URL (legacy single-link field)

A save writes the list together with the link mappings of its URLs. The link
DAO stages its writes into the same MULTI/EXEC, so either both the mappings
and the list are stored or neither is.

Example:
    >>> link_dao = LinkExpiringRedisDAO(prefix="golinks:dev")
    >>> dao = DestinationListRedisDAO(link_dao=link_dao, prefix="golinks:dev")
    >>> dao.put(
    ...     DestinationListModel(content_id='42', urls=('https://example.com/a',)),
    ...     links=[LinkModel(target='https://example.com/a', token='cd69b81ea0')],
    ... )
    <DestinationListRedisDAO>
    >>> dao.get('42').urls
    ('https://example.com/a',)
"""

from collections.abc import Callable, Sequence

import redis
from beartype import beartype

from golinks.models import LinkModel, DestinationListModel
from golinks.dao.base import DestinationListBaseDAO
from golinks.dao.redis.mixins import RedisClientMixin
from golinks.dao.redis.link_redis_dao import LinkRedisDAO
from golinks.dao.redis.link_map_redis_dao import LinkMapRedisDAO
from golinks.dao.redis.helpers import handle_redis_connection_error, run_transaction
from golinks.exceptions import BadConfigurationError
from golinks.utils.constants import MAP_CAS_ATTEMPTS


class DestinationListRedisDAO(RedisClientMixin, DestinationListBaseDAO):
    """Redis-based DAO for destination lists

    Attributes:
        link_dao (LinkRedisDAO | LinkMapRedisDAO | None):
            Link mapping store written together with the list. Its Redis
            client is reused unless another one is given.
    """

    def __init__(self, link_dao: LinkRedisDAO | LinkMapRedisDAO | None = None, **kwargs):
        if link_dao is not None:
            kwargs.setdefault('redis_client', link_dao.redis)
        super().__init__(**kwargs)
        self.link_dao = link_dao

    @handle_redis_connection_error
    @beartype
    def get(self, content_id: str, **kwargs) -> DestinationListModel:
        destinations_key = self.keys.destinations_key(content_id)
        legacy_key = self.keys.legacy_destination_key(content_id)

        with self.redis.pipeline(transaction=True) as pipe:
            pipe.lrange(destinations_key, 0, -1)
            pipe.get(legacy_key)
            urls, legacy_url = pipe.execute()

        # Content saved before lists existed only has the single-link field
        if not urls and legacy_url:
            urls = [legacy_url]

        return DestinationListModel(content_id=content_id, urls=tuple(urls or ()))

    @handle_redis_connection_error
    @beartype
    def put(self, destinations: DestinationListModel, links: Sequence[LinkModel] = (), **kwargs) -> 'DestinationListRedisDAO':
        """Replace a destination list and upsert its link mappings in one transaction

        The list is replaced with DEL + RPUSH + SET. An empty list (and no
        links) deletes the content item's keys instead. With the map policy
        the table stays WATCHed, so a concurrent table writer aborts the whole
        save, which is then re-attempted.

        Raises:
            BadConfigurationError:
                If links are given but the DAO has no link mapping store.
            DataStoreError:
                If Redis can't be reached or every attempt conflicts.
        """
        if not destinations.urls and not links:
            return self.delete(destinations.content_id)

        if links and self.link_dao is None:
            raise BadConfigurationError('DestinationListRedisDAO was created without a link mapping store.')

        def stage(pipe: redis.client.Pipeline) -> Callable[[redis.client.Pipeline], None]:
            queue_links = self.link_dao.stage_links(pipe, links) if links else None

            def queue(pipe: redis.client.Pipeline) -> None:
                if queue_links is not None:
                    queue_links(pipe)
                self._queue_destinations(pipe, destinations)

            return queue

        run_transaction(
            self.redis,
            stage,
            watch=self.link_dao.watched_keys() if links else [],
            attempts=MAP_CAS_ATTEMPTS,
        )
        return self

    @handle_redis_connection_error
    @beartype
    def delete(self, content_id: str, **kwargs) -> 'DestinationListRedisDAO':
        self.redis.delete(self.keys.destinations_key(content_id), self.keys.legacy_destination_key(content_id))
        return self

    def _queue_destinations(self, pipe: redis.client.Pipeline, destinations: DestinationListModel) -> None:
        destinations_key = self.keys.destinations_key(destinations.content_id)
        legacy_key = self.keys.legacy_destination_key(destinations.content_id)

        pipe.delete(destinations_key)
        if destinations.urls:
            pipe.rpush(destinations_key, *destinations.urls)
            pipe.set(legacy_key, destinations.urls[0])
        else:
            pipe.delete(legacy_key)
