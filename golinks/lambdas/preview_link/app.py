import logging

from golinks.types import LambdaEvent, LambdaContext, LambdaResponse
from golinks.links import preview_link
from golinks.exceptions import ConfigurationError, InvalidURLError
from golinks.utils import token_factory, link_payload, request_body
from golinks.utils.helpers import guarantee_500_response
from golinks.utils.responses import response_200, response_400, response_500
from golinks.utils.constants import CORS_HEADERS
from golinks.lambdas.preview_link.constants import (
    INVALID_REQUEST_BODY,
    MISSING_URL,
    INVALID_URL,
    PREVIEW_SUCCESS,
    CONFIG_UNAVAILABLE,
)


logger = logging.getLogger(__name__)


@guarantee_500_response(headers=CORS_HEADERS)
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Preview the short link of a candidate URL while editing (POST /links/preview)

    Nothing is stored. The token is computed exactly the way a save would
    compute it (same cleaning, same scheme coercion, same token factory).

    Request body:
        {"url": "example.com/x"}

    HTTP responses:
        200: Preview
            target: cleaned destination URL
            token: derived token
            short_url: short link the URL will get once saved
        400: Bad client request
            message: invalid JSON, missing or unusable 'url'
        500: Internal server error
            message: server experienced an internal error

    Example:
        >>> response = lambda_handler({'body': '{"url": "example.com/x"}'}, None)
        >>> json.loads(response['body'])['token']
        'fce167385b'
    """
    # 0- Resolve token derivation strategy
    try:
        factory = token_factory()
    except ConfigurationError:
        logger.exception('Failed to resolve token factory. Responding with 500.', extra={'event': CONFIG_UNAVAILABLE})
        return response_500(error_code=CONFIG_UNAVAILABLE, headers=CORS_HEADERS)

    # 1- Extract candidate URL from request body
    try:
        body = request_body(event)
    except ValueError as e:
        logger.info('Invalid request body. Responding with 400.', extra={'event': INVALID_REQUEST_BODY, 'reason': str(e)})
        return response_400(message=str(e), error_code=INVALID_REQUEST_BODY, headers=CORS_HEADERS)

    raw_url = body.get('url')
    if not raw_url:
        logger.info("Missing 'url' in JSON body. Responding with 400.", extra={'event': MISSING_URL})
        return response_400(message="missing 'url' in JSON body", error_code=MISSING_URL, headers=CORS_HEADERS)

    # 2- Compute the would-be mapping
    try:
        link = preview_link(raw_url, factory)
    except InvalidURLError as e:
        logger.info('Unusable URL. Responding with 400.', extra={'event': INVALID_URL, 'reason': str(e)})
        return response_400(message=str(e), error_code=INVALID_URL, headers=CORS_HEADERS)

    logger.debug('Previewed short link.', extra={'token': link.token, 'event': PREVIEW_SUCCESS})
    return response_200(link_payload(link, event), headers=CORS_HEADERS)
