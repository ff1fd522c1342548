from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class LinkModel:
    """Represent a token to destination URL mapping.

    Attributes:
        target (str):
            The destination URL the short link redirects to.
        token (str):
            The 10 hex character token embedded in the short link.
        updated_at (Optional[datetime]):
            When the mapping was created or last refreshed, if the backend
            keeps track of it.
        expires_at (Optional[datetime]):
            When the mapping expires. None for permanent mappings.

    Example:
        >>> link = LinkModel(target='http://example.com', token='a9b9f04336')
        >>> link.token
        'a9b9f04336'
        >>> link.expires_at is None
        True
    """

    target: str
    token: str
    updated_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
