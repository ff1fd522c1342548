"""Link mapping operations shared by all lambda handlers

LinkService glues together URL cleaning, token derivation and the configured
stores. It doesn't know which backend or lifecycle policy is active; that is
decided by golinks.dao.factory.

Write path (save):
    raw URLs -> clean_destination_urls() -> token_factory(url)
             -> destination list DAO put(list, links)  (one transaction with the link store)

Read path (redirect):
    token -> link DAO resolve() -> LinkModel

Example:
    >>> service = LinkService(link_dao_from_config(app_config))
    >>> link = service.shorten('http://example.com')
    >>> link.token
    'a9b9f04336'
    >>> service.resolve('a9b9f04336').target
    'http://example.com'
"""

import logging
from collections.abc import Iterable, Sequence

from golinks.types import TokenFactory
from golinks.models import LinkModel, DestinationListModel
from golinks.dao.base import LinkBaseDAO, DestinationListBaseDAO
from golinks.dao.exceptions import LinkNotFoundError
from golinks.exceptions import BadConfigurationError
from golinks.utils.shortener import clean_url, clean_destination_urls, derive_token, is_token


logger = logging.getLogger(__name__)


def preview_link(raw_url: str, token_factory: TokenFactory = derive_token) -> LinkModel:
    """Compute the mapping a URL would get on save, without touching any store

    Raises:
        InvalidURLError:
            If the URL can't be coerced into an absolute URL.

    Example:
        >>> preview_link('example.com/x')
        LinkModel(target='https://example.com/x', token='fce167385b', updated_at=None, expires_at=None)
    """
    url = clean_url(raw_url)
    return LinkModel(target=url, token=_token(token_factory, url))


def _token(token_factory: TokenFactory, url: str) -> str:
    token = token_factory(url)
    if not is_token(token):
        raise BadConfigurationError(f'Token factory returned a malformed token ({token!r}) for {url!r}.')
    return token


class LinkService:
    """Create, refresh and resolve link mappings

    Attributes:
        link_dao (LinkBaseDAO):
            Link mapping store (any lifecycle policy).
        destination_list_dao (DestinationListBaseDAO | None):
            Destination list store. Only needed by save_destinations() and list_destinations().
        token_factory (TokenFactory):
            Token derivation strategy, derive_token() unless overridden.

    Methods:
        shorten(raw_url) -> LinkModel
        shorten_many(urls) -> list[LinkModel]
        resolve(token) -> LinkModel
        save_destinations(content_id, raw_urls) -> tuple[DestinationListModel, list[LinkModel]]
        list_destinations(content_id) -> tuple[DestinationListModel, list[LinkModel]]
    """

    def __init__(
        self,
        link_dao: LinkBaseDAO,
        destination_list_dao: DestinationListBaseDAO | None = None,
        token_factory: TokenFactory = derive_token,
    ):
        self.link_dao = link_dao
        self.destination_list_dao = destination_list_dao
        self.token_factory = token_factory

    def shorten(self, raw_url: str) -> LinkModel:
        """Clean a URL and create or refresh its mapping

        Calling shorten() twice with the same URL yields the same token and
        overwrites the same mapping.

        Raises:
            InvalidURLError:
                If the URL can't be coerced into an absolute URL.
            DataStoreError:
                If the link mapping store can't be written.
        """
        link = preview_link(raw_url, self.token_factory)
        self.link_dao.put(link)
        logger.debug('Stored link mapping.', extra={'token': link.token})
        return link

    def shorten_many(self, urls: Sequence[str]) -> list[LinkModel]:
        """Create or refresh the mappings of already cleaned URLs in one batch"""
        links = [LinkModel(target=url, token=_token(self.token_factory, url)) for url in urls]
        if links:
            self.link_dao.put_many(links)
        return links

    def resolve(self, token: str) -> LinkModel:
        """Retrieve the live mapping of a token

        Malformed tokens never reach the store; they simply have no mapping.

        Raises:
            LinkNotFoundError:
                If the token has no live mapping.
            DataStoreError:
                If the link mapping store can't be read.
        """
        if not is_token(token):
            raise LinkNotFoundError(f'Malformed token {token!r} has no link mapping.')
        return self.link_dao.resolve(token)

    def save_destinations(self, content_id: str, raw_urls: Iterable[str]) -> tuple[DestinationListModel, list[LinkModel]]:
        """Replace the destination list of a content item

        Invalid and empty entries are dropped. The mappings and the list are
        written in one store transaction, so a failed save persists nothing and
        the previous destination list stays as it was. An empty cleaned list
        deletes the content item's destination list.

        Raises:
            DataStoreError:
                If the save transaction fails.
        """
        destination_list_dao = self._require_destination_list_dao()

        urls = clean_destination_urls(raw_urls)
        links = [LinkModel(target=url, token=_token(self.token_factory, url)) for url in urls]

        destinations = DestinationListModel(content_id=content_id, urls=tuple(urls))
        destination_list_dao.put(destinations, links=links)

        logger.debug('Saved destination list.', extra={'contentId': content_id, 'count': len(urls)})
        return destinations, links

    def list_destinations(self, content_id: str) -> tuple[DestinationListModel, list[LinkModel]]:
        """Read the destination list of a content item along with its links

        Every mapping is refreshed on the way out, which extends the sliding
        TTL of expiring mappings that are still displayed by the editor.

        Raises:
            DataStoreError:
                If either store can't be accessed.
        """
        destinations = self._require_destination_list_dao().get(content_id)
        links = self.shorten_many(destinations.urls)
        return destinations, links

    def _require_destination_list_dao(self) -> DestinationListBaseDAO:
        if self.destination_list_dao is None:
            raise BadConfigurationError('LinkService was created without a destination list store.')
        return self.destination_list_dao
