import logging

from golinks.types import LambdaEvent, LambdaContext, LambdaResponse
from golinks.links import LinkService
from golinks.dao import link_dao_from_config
from golinks.dao.exceptions import DataStoreError
from golinks.exceptions import ConfigurationError, InfrastructureError, InvalidURLError
from golinks.utils import load_config, app_prefix, token_factory, link_payload, request_body
from golinks.utils.helpers import guarantee_500_response
from golinks.utils.responses import response_200, response_400, response_500, response_503
from golinks.utils.constants import CORS_HEADERS
from golinks.lambdas.shorten_url.constants import (
    INVALID_REQUEST_BODY,
    MISSING_TARGET_URL,
    INVALID_TARGET_URL,
    LINK_SHORTENED,
    STORE_UNAVAILABLE,
    CONFIG_UNAVAILABLE,
)


logger = logging.getLogger(__name__)


@guarantee_500_response(headers=CORS_HEADERS)
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to shorten a URL (POST /v1/shorten)

    HTTP responses:
        200: Successful URL shortening
            message: success message
            target: cleaned destination URL
            token: derived token
            short_url: short link
        400: Bad client request
            message: invalid JSON, missing or unusable 'target_url'
        503: Service unavailable
            message: link mapping store can't be reached
        500: Internal server error
            message: server experienced an internal error

    Example:
        >>> event = {'body': '{"target_url": "http://example.com"}'}
        >>> response = lambda_handler(event, None)
        >>> json.loads(response['body'])['token']
        'a9b9f04336'
    """
    # 0- Get application's config
    try:
        app_config = load_config('shorten_url')
        factory = token_factory()
    except (ConfigurationError, InfrastructureError):
        logger.exception(
            'Failed to load configuration for shorten URL function. Responding with 500.',
            extra={'event': CONFIG_UNAVAILABLE},
        )
        return response_500(error_code=CONFIG_UNAVAILABLE, headers=CORS_HEADERS)

    # 1- Extract destination URL from request body
    try:
        body = request_body(event)
    except ValueError as e:
        logger.info('Invalid request body. Responding with 400.', extra={'event': INVALID_REQUEST_BODY, 'reason': str(e)})
        return response_400(message=str(e), error_code=INVALID_REQUEST_BODY, headers=CORS_HEADERS)

    target_url = body.get('target_url')
    if not target_url:
        logger.info("Missing 'target_url' in JSON body. Responding with 400.", extra={'event': MISSING_TARGET_URL})
        return response_400(message="missing 'target_url' in JSON body", error_code=MISSING_TARGET_URL, headers=CORS_HEADERS)

    # 2- Store token and destination URL mapping
    try:
        service = LinkService(link_dao_from_config(app_config, prefix=app_prefix()), token_factory=factory)
        link = service.shorten(target_url)
    except InvalidURLError as e:
        logger.info('Unusable target URL. Responding with 400.', extra={'event': INVALID_TARGET_URL, 'reason': str(e)})
        return response_400(message=str(e), error_code=INVALID_TARGET_URL, headers=CORS_HEADERS)
    except DataStoreError:
        logger.exception('Link mapping store is unavailable. Responding with 503.', extra={'event': STORE_UNAVAILABLE})
        return response_503(error_code=STORE_UNAVAILABLE, headers=CORS_HEADERS)

    # 3- Return short link to client
    payload = link_payload(link, event)
    logger.info(
        'Shortened destination URL. Responding with 200.',
        extra={'token': link.token, 'event': LINK_SHORTENED},
    )
    return response_200(
        {'message': f"Successfully shortened {link.target} to {payload['short_url']}", **payload},
        headers=CORS_HEADERS,
    )
