"""Helper utilities for AWS lambda functions.

Functions:
    base_url() -> str
        Extract correct public base URL from API Gateway event
    get_short_url() -> str
        Get string representation of short link for a given token
    link_payload() -> dict
        JSON representation of a link mapping, short link included
    request_body() -> dict
        Decode the JSON object body of an API Gateway event
    require_environment(*names: str) -> Callable
        Decorator: Ensure required environment variables are present
    guarantee_500_response(func=None, *, headers=None) -> Callable
        Decorator: Turn unhandled lambda handler exceptions into a 500 response

Example:
    Typical usage inside a Lambda handler:

        >>> from golinks.utils.helpers import base_url
        >>> event = {
        ...     "requestContext": {
        ...         "domainName": "abc123.execute-api.us-east-1.amazonaws.com",
        ...         "stage": "Prod"
        ...     }
        ... }
        >>> base_url(event)
        'https://abc123.execute-api.us-east-1.amazonaws.com/Prod'

        >>> event = {
        ...     "requestContext": {
        ...         "domainName": "links.example.org",
        ...         "stage": "Prod"
        ...     }
        ... }
        >>> base_url(event)
        'https://links.example.org'

        >>> base_url({})
        'http://localhost:3000'
"""

import os
import json
import base64
import logging
import functools
from typing import Any
from collections.abc import Callable

from golinks.types import HttpHeaders, LambdaContext, LambdaEvent, LambdaResponse
from golinks.models import LinkModel
from golinks.exceptions import MissingEnvironmentVariableError
from golinks.utils.runtime import running_locally
from golinks.utils.responses import response_500
from golinks.utils.constants import UNKNOWN_INTERNAL_SERVER_ERROR


logger = logging.getLogger(__name__)


def base_url(event: dict[str, Any]) -> str:
    """Extract public base URL from API Gateway event

    Works seamlessly with both custom and default AWS API Gateway domains.
    If a custom domain is configured, the stage name is omitted.
    If using the default AWS execute-api domain, the stage name is included.

    Args:
        event (dict): API Gateway event object passed to Lambda handler

    Returns:
        str: Base URL, e.g.:
             - "https://links.example.org"
             - "https://abc123.execute-api.us-east-1.amazonaws.com/Prod"
    """
    request_context = event.get('requestContext', {})
    domain = request_context.get('domainName', '')
    stage = request_context.get('stage', '')

    if domain and 'execute-api' not in domain:
        # If the domain is a custom domain (no execute-api), skip stage
        return f'https://{domain}'
    elif domain:
        # Otherwise include the stage (for AWS default domains)
        return f'https://{domain}/{stage}'
    else:
        # Fallback: local invocation (SAM CLI, tests, etc.)
        return 'http://localhost:3000'


def get_short_url(token: str, event: dict[str, Any]) -> str:
    """Get string representation of a short link

    Args:
        token (str): link token
        event (dict): API Gateway event object passed to Lambda handler

    Returns:
        str: short link, e.g. 'https://links.example.org/go/a9b9f04336/'
    """
    return f'{base_url(event).rstrip("/")}/go/{token}/'


def link_payload(link: LinkModel, event: dict[str, Any]) -> dict[str, str]:
    """JSON representation of a link mapping returned by editor-facing endpoints

    Example:
        >>> link_payload(LinkModel(target='http://example.com', token='a9b9f04336'), {})
        {'target': 'http://example.com', 'token': 'a9b9f04336', 'short_url': 'http://localhost:3000/go/a9b9f04336/'}
    """
    return {
        'target': link.target,
        'token': link.token,
        'short_url': get_short_url(link.token, event),
    }


def request_body(event: dict[str, Any]) -> dict[str, Any]:
    """Decode the JSON object body of an API Gateway event

    A missing body decodes to an empty dict.

    Raises:
        ValueError:
            If the body isn't valid JSON or isn't a JSON object.
    """
    raw = event.get('body') or '{}'
    if event.get('isBase64Encoded'):
        raw = base64.b64decode(raw).decode('utf-8')

    try:
        body = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError('invalid JSON body') from e

    if not isinstance(body, dict):
        raise ValueError('JSON body must be an object')
    return body


def require_environment(*names: str) -> Callable:
    """Decorator ensuring required environment variables are present.

    Args:
        *names (str):
            Names of required environment variables.

    Raises:
        MissingEnvironmentVariableError:
            If any required environment variable is missing or empty.

    Example:
        >>> @require_environment('APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID')
        ... def my_function():
        ...     pass
        >>> my_function()
        MissingEnvironmentVariableError: Missing required environment variables: 'APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID'
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            missing = [name for name in names if not os.environ.get(name)]
            if missing:
                missing_list = ', '.join(f"'{name}'" for name in missing)
                raise MissingEnvironmentVariableError(f'Missing required environment variables: {missing_list}')
            return func(*args, **kwargs)

        return wrapper

    return decorator


def guarantee_500_response(func: Callable | None = None, *, headers: HttpHeaders | None = None) -> Callable:
    """Decorator: respond with 500 when a lambda handler raises unexpectedly

    When running locally the original exception is re-raised so SAM prints
    the full traceback.

    Args:
        func (Callable | None):
            Lambda handler. Omitted when the decorator is called with arguments.
        headers (HttpHeaders | None):
            Extra headers attached to the 500 response.

    Example:
        >>> @guarantee_500_response(headers={'X-Robots-Tag': 'noindex'})
        ... def lambda_handler(event, context):
        ...     raise RuntimeError('boom')
        >>> lambda_handler({}, None)['statusCode']
        500
    """

    def decorator(handler: Callable[[LambdaEvent, LambdaContext], LambdaResponse]) -> Callable:
        @functools.wraps(handler)
        def wrapper(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
            try:
                return handler(event, context)
            except Exception:
                if running_locally():
                    raise
                logger.exception(
                    'Unhandled exception in lambda handler. Responding with 500.',
                    extra={'event': UNKNOWN_INTERNAL_SERVER_ERROR},
                )
                return response_500(error_code=UNKNOWN_INTERNAL_SERVER_ERROR, headers=headers)

        return wrapper

    return decorator if func is None else decorator(func)
