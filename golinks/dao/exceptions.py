"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    LinkNotFoundError:
        Raised when a token has no live mapping in the data store
        (never stored, expired, or store cleared).

    DataStoreError:
        Raised when there is an error in the data store (e.g., connection issues, timeouts, OOM, etc.).

Example:
    >>> from golinks.dao.exceptions import LinkNotFoundError
    >>> raise LinkNotFoundError("Link with token 'a9b9f04336' not found.")
    Traceback (most recent call last):
        ...
    golinks.dao.exceptions.LinkNotFoundError: Link with token 'a9b9f04336' not found.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class LinkNotFoundError(DAOError):
    """Exception raised when a token has no live mapping in the data store."""

    pass


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, OOM, etc.
    """

    pass
