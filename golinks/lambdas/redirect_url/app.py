import logging

from golinks.types import LambdaEvent, LambdaContext, LambdaResponse
from golinks.links import LinkService
from golinks.dao import link_dao_from_config
from golinks.dao.exceptions import LinkNotFoundError, DataStoreError
from golinks.exceptions import ConfigurationError, InfrastructureError
from golinks.utils import load_config, app_prefix, get_short_url
from golinks.utils.helpers import guarantee_500_response
from golinks.utils.responses import response_302, response_404, response_500, response_503
from golinks.utils.constants import ROBOTS_HEADERS
from golinks.lambdas.redirect_url.constants import (
    MISSING_TOKEN,
    LINK_NOT_FOUND,
    REDIRECT_SUCCESS,
    STORE_UNAVAILABLE,
    CONFIG_UNAVAILABLE,
)


logger = logging.getLogger(__name__)


@guarantee_500_response(headers=ROBOTS_HEADERS)
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to short links (GET /go/{token}/)

    This Lambda handler follows this procedure to redirect clients:
    - Step 1: Extract token from request path
    - Step 2: Resolve token via the configured link mapping store
    - Step 3: Redirect client to destination URL

    Every response (errors included) carries the X-Robots-Tag header so that
    crawlers never index the redirect endpoint itself.

    HTTP responses:
        302: Successful redirect
            headers:
                Location: destination URL
        404: Not found
            message: token is missing or has no live mapping
        503: Service unavailable
            message: link mapping store can't be reached
        500: Internal server error
            message: server experienced an internal error

    Args:
        event (LambdaEvent):
            API Gateway event payload containing the token path parameter.
        context (LambdaContext):
            AWS Lambda runtime context object (not used directly).

    Returns:
        LambdaResponse:
            API Gateway-compatible response including statusCode, headers, and body.

    Example:
        >>> event = {'pathParameters': {'token': 'a9b9f04336'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        302
        >>> response['headers']['Location']
        'http://example.com'
    """
    # 0- Get application's config
    try:
        app_config = load_config('redirect_url')
    except (ConfigurationError, InfrastructureError):
        logger.exception(
            'Failed to load AppConfig for redirect URL function. Responding with 500.',
            extra={'event': CONFIG_UNAVAILABLE},
        )
        return response_500(error_code=CONFIG_UNAVAILABLE, headers=ROBOTS_HEADERS)

    # 1- Extract token from request's path
    token = (event.get('pathParameters') or {}).get('token')
    if not token:
        logger.info(
            'Missing "token" in path. Responding with 404.',
            extra={'event': MISSING_TOKEN},
        )
        return response_404(message="missing 'token' in path", error_code=MISSING_TOKEN, headers=ROBOTS_HEADERS)
    logger.debug('Client requested short link %s.', get_short_url(token, event))

    # 2- Resolve token via the link mapping store
    try:
        service = LinkService(link_dao_from_config(app_config, prefix=app_prefix()))
        link = service.resolve(token)
    except LinkNotFoundError:
        logger.info(
            'Link mapping not found. Responding with 404.',
            extra={'token': token, 'event': LINK_NOT_FOUND},
        )
        return response_404(
            message=f"short link {get_short_url(token, event)} doesn't exist",
            error_code=LINK_NOT_FOUND,
            headers=ROBOTS_HEADERS,
        )
    except DataStoreError:
        logger.exception(
            'Link mapping store is unavailable. Responding with 503.',
            extra={'token': token, 'event': STORE_UNAVAILABLE},
        )
        return response_503(error_code=STORE_UNAVAILABLE, headers=ROBOTS_HEADERS)

    # 3- Redirect client to destination URL
    logger.info(
        'Redirecting client to destination URL. Responding with 302.',
        extra={'token': token, 'event': REDIRECT_SUCCESS},
    )
    return response_302(location=link.target, headers=ROBOTS_HEADERS)
