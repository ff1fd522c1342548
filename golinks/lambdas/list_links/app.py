import logging

from golinks.types import LambdaEvent, LambdaContext, LambdaResponse
from golinks.links import LinkService
from golinks.dao import link_dao_from_config, destination_list_dao_from_config
from golinks.dao.exceptions import DataStoreError
from golinks.exceptions import ConfigurationError, InfrastructureError
from golinks.utils import load_config, app_prefix, token_factory, link_payload
from golinks.utils.helpers import guarantee_500_response
from golinks.utils.responses import response_200, response_400, response_500, response_503
from golinks.utils.constants import CORS_HEADERS
from golinks.lambdas.list_links.constants import (
    MISSING_CONTENT_ID,
    LINKS_LISTED,
    STORE_UNAVAILABLE,
    CONFIG_UNAVAILABLE,
)


logger = logging.getLogger(__name__)


@guarantee_500_response(headers=CORS_HEADERS)
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """List the destination URLs of a content item (GET /items/{content_id}/links)

    Used by the link editor to render the editable list. Displaying a link
    refreshes its mapping, so expiring links that are still in use don't
    expire while the content item keeps them.

    HTTP responses:
        200: Destination list (possibly empty)
            content_id: content item id
            links: [{target, token, short_url}, ...] in editor order
        400: Bad client request
            message: missing content id
        503: Service unavailable
            message: a store can't be reached
        500: Internal server error
            message: server experienced an internal error
    """
    # 0- Get application's config
    try:
        app_config = load_config('list_links')
        factory = token_factory()
    except (ConfigurationError, InfrastructureError):
        logger.exception(
            'Failed to load configuration for list links function. Responding with 500.',
            extra={'event': CONFIG_UNAVAILABLE},
        )
        return response_500(error_code=CONFIG_UNAVAILABLE, headers=CORS_HEADERS)

    # 1- Extract content item id
    content_id = (event.get('pathParameters') or {}).get('content_id')
    if not content_id:
        logger.info('Missing "content_id" in path. Responding with 400.', extra={'event': MISSING_CONTENT_ID})
        return response_400(message="missing 'content_id' in path", error_code=MISSING_CONTENT_ID, headers=CORS_HEADERS)

    # 2- Read the destination list and refresh its link mappings
    try:
        link_dao = link_dao_from_config(app_config, prefix=app_prefix())
        service = LinkService(
            link_dao,
            destination_list_dao_from_config(app_config, prefix=app_prefix(), link_dao=link_dao),
            token_factory=factory,
        )
        _, links = service.list_destinations(content_id)
    except DataStoreError:
        logger.exception(
            'Store is unavailable. Responding with 503.',
            extra={'contentId': content_id, 'event': STORE_UNAVAILABLE},
        )
        return response_503(error_code=STORE_UNAVAILABLE, headers=CORS_HEADERS)

    logger.info(
        'Listed destination URLs. Responding with 200.',
        extra={'contentId': content_id, 'count': len(links), 'event': LINKS_LISTED},
    )
    return response_200(
        {'content_id': content_id, 'links': [link_payload(link, event) for link in links]},
        headers=CORS_HEADERS,
    )
