"""Abstract base class for destination list data access objects (DAOs).

A destination list is the ordered list of URLs a content item wants
short-linked. It is owned by exactly one content item and replaced wholesale
on every save.

Example:
    >>> from golinks.dao.redis import DestinationListRedisDAO
    >>> dao = DestinationListRedisDAO(...)

    >>> dao.put(DestinationListModel(content_id='42', urls=('https://example.com',)))
    >>> dao.get('42').urls
    ('https://example.com',)

    >>> dao.delete('42')
    >>> dao.get('42').urls
    ()
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from golinks.models import LinkModel, DestinationListModel


class DestinationListBaseDAO(ABC):
    """Interface for destination list data access objects (DAOs)

    Methods:
        get(content_id: str, **kwargs) -> DestinationListModel:
            Retrieve the destination list of a content item.
            Returns an empty list if the content item has none.
            Raises DataStoreError on read failure.

        put(destinations: DestinationListModel, links: Sequence[LinkModel] = (), **kwargs) -> DestinationListBaseDAO:
            Replace the destination list of a content item and, in the same
            transaction, create or refresh the link mappings of its URLs.
            Nothing is stored if any write fails. An empty list deletes it.
            Raises DataStoreError on write failure.

        delete(content_id: str, **kwargs) -> DestinationListBaseDAO:
            Delete the destination list of a content item (no-op if missing).
            Raises DataStoreError on write failure.

    NOTE:
        - Link mappings are written through the link DAO the implementation was
          created with, which always lives in the same backend.
        - Implementations also keep the first URL under a legacy single-link
          entry, and fall back to it when the list itself is missing.
        - Deleting a list never deletes the link mappings of its URLs, since
          other content items may share them.
    """

    @abstractmethod
    def get(self, content_id: str, **kwargs) -> DestinationListModel:
        pass

    @abstractmethod
    def put(self, destinations: DestinationListModel, links: Sequence[LinkModel] = (), **kwargs) -> 'DestinationListBaseDAO':
        pass

    @abstractmethod
    def delete(self, content_id: str, **kwargs) -> 'DestinationListBaseDAO':
        pass
