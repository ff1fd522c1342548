import logging

from golinks.types import LambdaEvent, LambdaContext, LambdaResponse
from golinks.links import LinkService
from golinks.dao import link_dao_from_config, destination_list_dao_from_config
from golinks.dao.exceptions import DataStoreError
from golinks.exceptions import ConfigurationError, InfrastructureError
from golinks.utils import load_config, app_prefix, token_factory, link_payload, request_body
from golinks.utils.helpers import guarantee_500_response
from golinks.utils.responses import response_200, response_400, response_500, response_503
from golinks.utils.constants import CORS_HEADERS
from golinks.lambdas.save_links.constants import (
    MISSING_CONTENT_ID,
    INVALID_REQUEST_BODY,
    INVALID_URL_LIST,
    LINKS_SAVED,
    LINKS_CLEARED,
    STORE_UNAVAILABLE,
    CONFIG_UNAVAILABLE,
)


logger = logging.getLogger(__name__)


@guarantee_500_response(headers=CORS_HEADERS)
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Save the destination list of a content item (PUT /items/{content_id}/links)

    Request body:
        {"urls": ["example.com/a", "https://example.com/b", ""]}

    The list replaces the content item's previous list. Empty and invalid
    entries are dropped. Every remaining URL gets its link mapping created or
    refreshed. An empty cleaned list deletes the content item's list.

    HTTP responses:
        200: Destination list saved (or cleared)
            content_id: content item id
            links: [{target, token, short_url}, ...] in editor order
        400: Bad client request
            message: missing content id, invalid JSON or 'urls' not a list
        503: Service unavailable
            message: a store can't be reached, nothing was saved
        500: Internal server error
            message: server experienced an internal error
    """
    # 0- Get application's config
    try:
        app_config = load_config('save_links')
        factory = token_factory()
    except (ConfigurationError, InfrastructureError):
        logger.exception(
            'Failed to load configuration for save links function. Responding with 500.',
            extra={'event': CONFIG_UNAVAILABLE},
        )
        return response_500(error_code=CONFIG_UNAVAILABLE, headers=CORS_HEADERS)

    # 1- Extract content item id and raw destination URLs
    content_id = (event.get('pathParameters') or {}).get('content_id')
    if not content_id:
        logger.info('Missing "content_id" in path. Responding with 400.', extra={'event': MISSING_CONTENT_ID})
        return response_400(message="missing 'content_id' in path", error_code=MISSING_CONTENT_ID, headers=CORS_HEADERS)

    try:
        body = request_body(event)
    except ValueError as e:
        logger.info('Invalid request body. Responding with 400.', extra={'event': INVALID_REQUEST_BODY, 'reason': str(e)})
        return response_400(message=str(e), error_code=INVALID_REQUEST_BODY, headers=CORS_HEADERS)

    raw_urls = body.get('urls', [])
    if not isinstance(raw_urls, list):
        logger.info("'urls' is not a list. Responding with 400.", extra={'event': INVALID_URL_LIST})
        return response_400(message="'urls' must be a list of strings", error_code=INVALID_URL_LIST, headers=CORS_HEADERS)

    # 2- Replace the destination list and upsert its link mappings in one transaction
    try:
        link_dao = link_dao_from_config(app_config, prefix=app_prefix())
        service = LinkService(
            link_dao,
            destination_list_dao_from_config(app_config, prefix=app_prefix(), link_dao=link_dao),
            token_factory=factory,
        )
        destinations, links = service.save_destinations(content_id, raw_urls)
    except DataStoreError:
        logger.exception(
            'Store is unavailable. Destination list not saved. Responding with 503.',
            extra={'contentId': content_id, 'event': STORE_UNAVAILABLE},
        )
        return response_503(error_code=STORE_UNAVAILABLE, headers=CORS_HEADERS)

    # 3- Return the saved list with its short links
    logger.info(
        'Saved destination list. Responding with 200.',
        extra={
            'contentId': content_id,
            'count': len(links),
            'dropped': len(raw_urls) - len(destinations.urls),
            'event': LINKS_SAVED if links else LINKS_CLEARED,
        },
    )
    return response_200(
        {'content_id': content_id, 'links': [link_payload(link, event) for link in links]},
        headers=CORS_HEADERS,
    )
