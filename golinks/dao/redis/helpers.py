import logging
import functools
import redis
from typing import TypeVar, Any
from collections.abc import Callable, Sequence

from golinks.dao.exceptions import DataStoreError


__all__ = []

logger = logging.getLogger(__name__)

F = TypeVar('F', bound=Callable[..., Any])

REDIS_CONNECTIVITY_ERRORS = (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError)


def redis_address(client: redis.Redis) -> str:
    """Render the 'host:port/db' a Redis client points to (for error messages)"""
    info = client.connection_pool.connection_kwargs
    return f"{info.get('host')}:{info.get('port')}/{info.get('db')}"


def handle_redis_connection_error[F](method: F) -> F:
    """Wrap Redis-interacting DAO methods to handle connection errors

    Args:
        method (Callable[..., Any]):
            DAO method performing Redis operations which may raise
            redis.exceptions.ConnectionError or redis.exceptions.TimeoutError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on connectivity issues with Redis.

    Example:
        >>> @handle_redis_connection_error
        ... def resolve(self, token):
        ...     return self.redis.get(token)
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except REDIS_CONNECTIVITY_ERRORS as e:
            raise DataStoreError(f"Can't connect to Redis at {redis_address(self.redis)}.") from e

    return wrapper


def run_transaction(
    client: redis.Redis,
    stage: Callable[[redis.client.Pipeline], Callable[[redis.client.Pipeline], None]],
    watch: Sequence[str] = (),
    attempts: int = 1,
) -> None:
    """Run writes in one MULTI/EXEC transaction, optionally guarded by WATCH

    `stage(pipe)` runs first. While keys are watched the pipeline executes
    commands immediately, so stage() may read them. It returns a callable that
    queues the writes once MULTI has started. A transaction aborted because a
    watched key changed is re-attempted from stage(), up to `attempts` times.

    Raises:
        DataStoreError:
            If every attempt was aborted by a concurrent writer.

    Example:
        >>> def stage(pipe):
        ...     table = json.loads(pipe.get('links:map') or '{}')
        ...     table['a9b9f04336'] = 'http://example.com'
        ...     return lambda pipe: pipe.set('links:map', json.dumps(table))
        >>> run_transaction(client, stage, watch=['links:map'], attempts=5)
    """
    for attempt in range(1, attempts + 1):
        with client.pipeline(transaction=True) as pipe:
            try:
                if watch:
                    pipe.watch(*watch)
                queue = stage(pipe)
                if watch:
                    pipe.multi()
                queue(pipe)
                pipe.execute()
            except redis.exceptions.WatchError:
                logger.debug('Watched keys changed during transaction. Retrying.', extra={'attempt': attempt, 'keys': list(watch)})
            else:
                return

    raise DataStoreError(f'Transaction kept conflicting with concurrent writers ({attempts} attempts).')
