"""Abstract base class for link mapping data access objects (DAOs).

This class establishes a consistent contract for all link mapping store
implementations, regardless of the underlying storage mechanism (Redis keys,
a consolidated Redis map, DynamoDB records) and lifecycle policy (expiring or
permanent).

Responsibilities:
    - Provide an interface for upserting and resolving LinkModel objects.
    - Standardize error handling across multiple data store implementations.
    - Enforce a consistent API for use by Lambda functions.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from golinks.models import LinkModel
        >>> from golinks.dao.redis import LinkRedisDAO

        >>> dao = LinkRedisDAO(...)

        >>> link = LinkModel(target='http://example.com', token='a9b9f04336')
        >>> dao.put(link)

        >>> dao.resolve('a9b9f04336').target
        'http://example.com'
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from golinks.models import LinkModel


class LinkBaseDAO(ABC):
    """Interface for link mapping data access objects (DAOs).

    Methods:
        put(link: LinkModel, **kwargs) -> LinkBaseDAO:
            Create or refresh the mapping for link.token.
            Overwrites whatever the token mapped to before (last write wins).
            Raises DataStoreError on connection or write failure.

        put_many(links: Sequence[LinkModel], **kwargs) -> LinkBaseDAO:
            Create or refresh several mappings.
            Raises DataStoreError on connection or write failure.

        resolve(token: str, **kwargs) -> LinkModel:
            Retrieve the live mapping of a token.
            Raises LinkNotFoundError if the token has no live mapping.
            Raises DataStoreError on connection or read failure.

    Subclassing:
        Datastore-specific implementations (e.g., LinkRedisDAO or
        LinkDynamoDBDAO) must extend this class and implement put() and
        resolve(). put_many() may be overridden to batch writes.

    NOTE:
        - put() is idempotent: the token is a function of the destination URL,
          so storing the same link twice refreshes one entry.
        - Mappings are never deleted through the DAO. Expiring stores drop
          them after their TTL.
    """

    @abstractmethod
    def put(self, link: LinkModel, **kwargs) -> 'LinkBaseDAO':
        """Create or refresh a link mapping in the data store.

        Args:
            link (LinkModel):
                The mapping to store. Only token and target are persisted;
                timestamps are managed by the data store.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            LinkBaseDAO: self (for method chaining)

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    def put_many(self, links: Sequence[LinkModel], **kwargs) -> 'LinkBaseDAO':
        """Create or refresh several link mappings (one put() per link by default)."""
        for link in links:
            self.put(link, **kwargs)
        return self

    @abstractmethod
    def resolve(self, token: str, **kwargs) -> LinkModel:
        """Retrieve the live mapping of a token.

        Args:
            token (str):
                Token embedded in the short link.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            LinkModel: The live mapping.

        Raises:
            LinkNotFoundError:
                If the token was never stored or its mapping expired.

            DataStoreError:
                If there is an error in the data store.
        """
        pass
