"""Build DAOs from a lambda's configuration section

The link mapping store has four lifecycle policies. The AppConfig document
picks one through its active backend and, for Redis, the 'policy' field:

    active_backend  policy       DAO                    lifecycle
    --------------  -----------  ---------------------  ----------------------------
    redis           expiring     LinkExpiringRedisDAO   one key per token, 30 day sliding TTL
    redis           permanent    LinkRedisDAO           one key per token, no TTL (default)
    redis           map          LinkMapRedisDAO        one JSON table for all tokens, CAS upsert
    dynamodb        record       LinkDynamoDBDAO        one record per token, no TTL (default)

Destination lists always live in the same backend as the link mappings.

Example:
    >>> app_config = load_config('redirect_url')
    >>> app_config
    {'redis': {'host': 'redis.internal', 'port': 6379, 'db': 0, 'policy': 'expiring'}}
    >>> link_dao_from_config(app_config, prefix='golinks:prod')
    <LinkExpiringRedisDAO>
"""

import logging
from typing import Any

from golinks.types import LambdaConfiguration
from golinks.exceptions import BadConfigurationError
from golinks.dao.base import LinkBaseDAO, DestinationListBaseDAO
from golinks.dao.redis import LinkRedisDAO, LinkExpiringRedisDAO, LinkMapRedisDAO, DestinationListRedisDAO
from golinks.dao.dynamodb import LinkDynamoDBDAO, DestinationListDynamoDBDAO
from golinks.utils.constants import LinkPolicy


logger = logging.getLogger(__name__)

REDIS_LINK_POLICIES = {
    LinkPolicy.EXPIRING: LinkExpiringRedisDAO,
    LinkPolicy.PERMANENT: LinkRedisDAO,
    LinkPolicy.MAP: LinkMapRedisDAO,
}
DYNAMODB_LINK_POLICIES = {
    LinkPolicy.RECORD: LinkDynamoDBDAO,
}
DEFAULT_POLICIES = {
    'redis': LinkPolicy.PERMANENT,
    'dynamodb': LinkPolicy.RECORD,
}


def _backend_settings(app_config: LambdaConfiguration) -> tuple[str, LinkPolicy, dict[str, Any]]:
    if not isinstance(app_config, dict) or len(app_config) != 1:
        raise BadConfigurationError('Lambda configuration must hold exactly one active backend section.')

    backend, settings = next(iter(app_config.items()))
    if backend not in DEFAULT_POLICIES:
        raise BadConfigurationError(f"Unsupported backend '{backend}' (expected one of: {', '.join(DEFAULT_POLICIES)}).")

    settings = dict(settings or {})
    try:
        policy = LinkPolicy(settings.pop('policy', DEFAULT_POLICIES[backend]))
    except ValueError as e:
        raise BadConfigurationError(f'Unknown link policy for backend {backend!r}.') from e

    # Connection settings map onto DAO constructor arguments, e.g. host -> redis_host
    kwargs = {f'{backend}_{key}': value for key, value in settings.items()}
    return backend, policy, kwargs


def link_dao_from_config(app_config: LambdaConfiguration, prefix: str | None = None) -> LinkBaseDAO:
    """Create the link mapping DAO for the configured backend and policy

    Raises:
        BadConfigurationError:
            If the backend is unknown or doesn't support the policy.
        DataStoreError:
            If the backend is unreachable (Redis healthcheck).
    """
    backend, policy, kwargs = _backend_settings(app_config)
    policies = REDIS_LINK_POLICIES if backend == 'redis' else DYNAMODB_LINK_POLICIES

    dao_class = policies.get(policy)
    if dao_class is None:
        raise BadConfigurationError(f"Backend '{backend}' doesn't support the '{policy}' link policy.")

    logger.debug('Using link mapping store.', extra={'backend': backend, 'policy': str(policy)})
    return dao_class(**kwargs, prefix=prefix)


def destination_list_dao_from_config(
    app_config: LambdaConfiguration,
    prefix: str | None = None,
    link_dao: LinkBaseDAO | None = None,
) -> DestinationListBaseDAO:
    """Create the destination list DAO for the configured backend

    Pass the link mapping DAO of the same configuration as link_dao to save
    lists together with their mappings.

    Raises:
        BadConfigurationError:
            If the backend is unknown.
        DataStoreError:
            If the backend is unreachable (Redis healthcheck).
    """
    backend, _, kwargs = _backend_settings(app_config)
    dao_class = DestinationListRedisDAO if backend == 'redis' else DestinationListDynamoDBDAO
    return dao_class(**kwargs, prefix=prefix, link_dao=link_dao)
