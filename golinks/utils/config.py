"""Utility functions for application configuration management.

This module provides a standardized interface for Lambda functions to
access configuration data stored in **AWS AppConfig**. Each environment
(`APP_ENV`) has a dedicated AppConfig *Environment* within the shared
AppConfig *Application* identified by `APP_NAME`. Configuration data is
stored as a JSON document under a configuration profile (typically
`backend-config`) and deployed to the corresponding environment.

The configuration JSON follows this structure:

    {
        "build": 7,
        "active_backend": "redis",
        "configs": {
            "redirect_url": {
                "redis": {"host": ..., "port": ..., "db": ..., "policy": "expiring"},
                "dynamodb": {"table_name": ..., "region": ...}
            },
            "save_links": {
                ...
            }
        }
    }

Each Lambda loads its own section (e.g., `"redirect_url"`) from this
AppConfig document, determined by the current application environment.
The `active_backend` picks the storage engine; for Redis, `policy` picks
the link lifecycle policy (see golinks.dao.factory).

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`) value,
        defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return application prefix for DAOs, or None if `APP_NAME` is not set.

    token_factory() -> TokenFactory
        Return the token derivation strategy, resolved once per process
        from `TOKEN_FACTORY` (defaults to derive_token).

    load_config(lambda_name: str) -> dict
        Load configuration for a given Lambda from AWS AppConfig and
        return it as a Python dictionary. Cached per container. In SAM,
        load configuration from a local AppConfig agent.

Example:
    Typical usage inside a Lambda handler:

        >>> from golinks.utils.config import load_config
        >>> config = load_config('redirect_url')
        >>> print(config['redis']['host'])
        redis-15501.host.docker.internal
"""

import os
import json
import functools
import importlib
import urllib.parse
import urllib.request
import logging
from collections.abc import Callable

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from golinks.types import LambdaConfiguration, TokenFactory
from golinks.exceptions import AppConfigError, BadConfigurationError
from golinks.utils.helpers import require_environment
from golinks.utils.runtime import running_locally
from golinks.utils.shortener import derive_token
from golinks.utils.constants import (
    APP_ENV_ENV,
    APP_NAME_ENV,
    TOKEN_FACTORY_ENV,
    APPCONFIG_APP_ID_ENV,
    APPCONFIG_ENV_ID_ENV,
    APPCONFIG_PROFILE_ID_ENV,
    APPCONFIG_AGENT_URL_ENV,
    APPCONFIG_PROFILE_NAME_ENV,
)


logger = logging.getLogger(__name__)


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Returns:
        str:
            Value of `APP_ENV` environment variable, `'local'` by default.

    Example:
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_env()
        'dev'
    """
    return os.environ.get(APP_ENV_ENV, 'local').lower()


def app_name() -> str | None:
    """Return the current application name by reading 'APP_NAME'

    Returns:
        str:
            Value of `APP_NAME` environment variable.
            None if variable is not set.
    """
    return os.environ.get(APP_NAME_ENV)


def app_prefix() -> str | None:
    """Return application prefix for DAOs

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'golinks'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'golinks:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


@functools.cache
def token_factory() -> TokenFactory:
    """Return the token derivation strategy for this process

    An embedding environment may override how tokens are derived by setting
    `TOKEN_FACTORY` to a 'package.module:callable' path. The callable receives
    the destination URL and returns the token. The strategy is resolved once
    (on first use) and cached for the lifetime of the Lambda container.

    Returns:
        TokenFactory: the configured callable, derive_token() by default.

    Raises:
        BadConfigurationError:
            If `TOKEN_FACTORY` is malformed or doesn't point to a callable.

    Example:
        >>> os.environ['TOKEN_FACTORY'] = 'myhost.links:legacy_token'
        >>> token_factory()
        <function legacy_token at 0x...>
    """
    path = os.getenv(TOKEN_FACTORY_ENV)
    if not path:
        return derive_token

    module_name, _, attribute = path.partition(':')
    if not module_name or not attribute:
        raise BadConfigurationError(f"Token factory must be given as 'module:attribute' (given value: {path!r}).")

    try:
        factory = getattr(importlib.import_module(module_name), attribute)
    except (ImportError, AttributeError) as e:
        raise BadConfigurationError(f'Token factory {path!r} cannot be imported.') from e

    if not callable(factory):
        raise BadConfigurationError(f'Token factory {path!r} is not callable.')

    logger.info('Using custom token factory.', extra={'tokenFactory': path})
    return factory


def _sam_load_local_appconfig(func: Callable[[str], LambdaConfiguration]) -> Callable[[str], LambdaConfiguration]:  # pragma: no cover
    """Decorator: load AppConfig from a local AppConfig Agent when running under SAM

    Behavior:
        - If the application is running locally and `APPCONFIG_AGENT_URL` is set
          to a safe local URL, fetch the app configuration JSON from the local AppConfig agent.
        - Else, call the wrapped function (which pulls from AWS AppConfig via boto3).

    Environment variables used:
        APPCONFIG_AGENT_URL     : Base URL of the local AppConfig Agent (e.g., http://host.docker.internal:2772).
        APPCONFIG_PROFILE_NAME  : Optional profile name (default: "backend-config").
    """

    # ruff: noqa: E701
    def __validate_appconfig_url(url: str) -> str:
        if not url:
            return ''
        components = urllib.parse.urlparse(url)
        if components.scheme not in {'http', 'https'}:
            raise BadConfigurationError(f'Bad scheme {url}')
        if components.hostname not in {'localhost', '127.0.0.1', 'host.docker.internal', 'appconfig-agent'}:
            raise BadConfigurationError(f'Bad host {url}')
        if components.port not in {2772, None}:
            raise BadConfigurationError(f'Bad port {url}')
        return url

    # ruff: enable

    @functools.wraps(func)
    def wrapper(lambda_name: str) -> LambdaConfiguration:
        agent_url = __validate_appconfig_url(os.getenv(APPCONFIG_AGENT_URL_ENV))
        if not running_locally() or not agent_url:
            return func(lambda_name)

        profile_name = os.getenv(APPCONFIG_PROFILE_NAME_ENV, 'backend-config')
        url = f'{agent_url}/applications/{app_name()}/environments/{app_env()}/configurations/{profile_name}'

        logger.debug('Trying to load AppConfig from local agent.', extra={'agentUrl': url, 'lambdaName': lambda_name})
        with urllib.request.urlopen(url, timeout=5) as r:  # noqa: S310
            config = json.load(r)

        data = _lambda_section(config, lambda_name)
        logger.debug('Loaded AppConfig from local agent.', extra={'lambdaName': lambda_name, 'build': config.get('build')})
        return data

    return wrapper


def _lambda_section(document: dict, lambda_name: str) -> LambdaConfiguration:
    """Extract {<active backend>: <backend config>} for one lambda from an AppConfig document"""
    try:
        backend = document['active_backend']
        return {backend: document['configs'][lambda_name][backend]}
    except (KeyError, TypeError) as e:
        raise BadConfigurationError(f"AppConfig document has no active backend section for '{lambda_name}'.") from e


@functools.cache
@_sam_load_local_appconfig
@require_environment(APPCONFIG_APP_ID_ENV, APPCONFIG_ENV_ID_ENV, APPCONFIG_PROFILE_ID_ENV)
def load_config(lambda_name: str) -> LambdaConfiguration:
    """Load configuration for a given Lambda from AWS AppConfig

    Fetches the AppConfig JSON once per container and returns the section
    relevant to the requested Lambda function (e.g., 'redirect_url',
    'save_links'). Later calls return the cached section; failed loads
    aren't cached.

    Environment variables required:
        APPCONFIG_APP_ID       : AppConfig Application ID
        APPCONFIG_ENV_ID       : AppConfig Environment ID
        APPCONFIG_PROFILE_ID   : AppConfig Configuration Profile ID

    Args:
        lambda_name (str):
            Name of the Lambda (e.g., "redirect_url" or "save_links").

    Returns:
        dict: The lambda's config section as a Python dictionary.

    Raises:
        MissingEnvironmentVariableError:
            If AppConfig identifiers are not set.
        AppConfigError:
            If AppConfig can't be reached or returns a non-JSON document.
        BadConfigurationError:
            If the document has no section for this lambda's active backend.

    Example:
        >>> app_config = load_config('redirect_url')
        >>> app_config['redis']['policy']
        'permanent'
    """
    logger.debug('Trying to load AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name})

    try:
        appconfig = boto3.client('appconfigdata')

        # Start an AppConfig data session
        session_token = appconfig.start_configuration_session(
            ApplicationIdentifier=os.environ[APPCONFIG_APP_ID_ENV],
            EnvironmentIdentifier=os.environ[APPCONFIG_ENV_ID_ENV],
            ConfigurationProfileIdentifier=os.environ[APPCONFIG_PROFILE_ID_ENV],
        )['InitialConfigurationToken']

        # Fetch the configuration
        response = appconfig.get_latest_configuration(ConfigurationToken=session_token)
        content = response['Configuration'].read()
        config = json.loads(content.decode('utf-8'))
    except (BotoCoreError, ClientError) as e:
        raise AppConfigError('Failed to fetch configuration from AWS AppConfig.') from e
    except (KeyError, ValueError) as e:
        raise AppConfigError('AWS AppConfig responded with a malformed configuration.') from e

    data = _lambda_section(config, lambda_name)
    logger.debug('Loaded AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name, 'build': config.get('build')})
    return data
