"""Token derivation and destination URL cleaning

A token is the first 10 lowercase hex digits of the MD5 digest of the
destination URL, after the URL has been given a scheme. The derivation is a
wire-level contract: short links issued in the past and link previews computed
by the editor UI must keep matching, so the hash function and the truncation
rule never change.

Functions:
    ensure_scheme(url) -> str:
        Prepend 'https://' to URLs without a 'scheme://' prefix.

    derive_token(url) -> str:
        Derive the 10 hex character token of a destination URL.

    clean_url(raw) -> str:
        Validate and normalize a raw destination URL.
        Raises InvalidURLError when the URL can't be used.

    clean_destination_urls(raw_urls) -> list[str]:
        Clean a list of raw destination URLs, dropping invalid and empty entries.

Example:
    >>> from golinks.utils.shortener import derive_token
    >>> derive_token('http://example.com')
    'a9b9f04336'
    >>> derive_token('example.com/x') == derive_token('https://example.com/x')
    True

NOTE:
    - 10 hex digits leave 40 bits of hash space. Two destination URLs sharing a
      token overwrite each other's mapping (last write wins). This is accepted.
"""

import re
import hashlib
import logging
from typing import Any
from urllib.parse import urlsplit
from collections.abc import Iterable

from golinks.exceptions import InvalidURLError
from golinks.utils.constants import ALLOWED_SCHEMES, DEFAULT_SCHEME, TOKEN_LENGTH


logger = logging.getLogger(__name__)

SCHEME_PREFIX = re.compile(r'^[a-zA-Z][a-zA-Z0-9+.-]*://')
TOKEN_PATTERN = re.compile(r'^[A-Za-z0-9]+$')
# Anything outside this set is stripped from destination URLs (after spaces become %20)
DISALLOWED_CHARACTERS = re.compile(r"[^a-zA-Z0-9\-~+_.?#=!&;,/:%@$|*'()\[\]\u0080-\U0010ffff]")


def ensure_scheme(url: str) -> str:
    """Prepend the default scheme to a URL lacking a 'scheme://' prefix

    Example:
        >>> ensure_scheme('example.com/x')
        'https://example.com/x'
        >>> ensure_scheme('http://example.com')
        'http://example.com'
    """
    return url if SCHEME_PREFIX.match(url) else f'{DEFAULT_SCHEME}://{url}'


def derive_token(url: str) -> str:
    """Derive the short link token of a destination URL

    Args:
        url (str):
            Destination URL, with or without a scheme.

    Returns:
        str: first 10 hex digits of md5(ensure_scheme(url)).
    """
    digest = hashlib.md5(ensure_scheme(url).encode('utf-8'), usedforsecurity=False).hexdigest()
    return digest[:TOKEN_LENGTH]


def is_token(value: Any) -> bool:
    """Check if a value has the shape of a link token (alphanumeric)"""
    return isinstance(value, str) and TOKEN_PATTERN.match(value) is not None


def clean_url(raw: str) -> str:
    """Validate and normalize a raw destination URL

    Steps:
        - Trim surrounding whitespace
        - Encode inner spaces as %20 and strip characters a URL can't carry
          ({}<>"`^, backslashes and control characters)
        - Prepend 'https://' if the URL has no scheme
        - Reject URLs with an unsupported scheme
        - Reject URLs without a (well-formed) host

    Args:
        raw (str):
            URL as typed by the editor.

    Returns:
        str: normalized destination URL.

    Raises:
        InvalidURLError:
            If the URL is empty or can't be coerced into an absolute URL.

    Example:
        >>> clean_url('  example.com/search?q=a b ')
        'https://example.com/search?q=a%20b'
        >>> clean_url('example.com/{id}')
        'https://example.com/id'
        >>> clean_url('javascript://alert(1)')
        InvalidURLError: Unsupported URL scheme 'javascript'
    """
    if not isinstance(raw, str):
        raise InvalidURLError(f'Destination URL must be of type string (given type: {type(raw)}).')

    url = DISALLOWED_CHARACTERS.sub('', raw.strip().replace(' ', '%20'))
    if not url:
        raise InvalidURLError('Destination URL is empty.')

    # Same coercion rule as derive_token() so previews match saved links
    url = ensure_scheme(url)

    try:
        components = urlsplit(url)
        hostname = components.hostname
    except ValueError as e:
        raise InvalidURLError(f'Destination URL {url!r} is malformed.') from e

    scheme = components.scheme.lower()
    if scheme not in ALLOWED_SCHEMES:
        raise InvalidURLError(f'Unsupported URL scheme {scheme!r}')
    if not hostname:
        raise InvalidURLError(f'Destination URL {url!r} has no host.')
    if '%' in hostname:
        raise InvalidURLError(f'Destination URL {url!r} has an invalid host.')

    return url


def clean_destination_urls(raw_urls: Iterable[Any]) -> list[str]:
    """Clean a list of raw destination URLs

    Empty entries are skipped, invalid entries are dropped silently (logged at
    INFO level). Order and duplicates are preserved.

    Example:
        >>> clean_destination_urls(['example.com', '', 'javascript://x', 'example.com'])
        ['https://example.com', 'https://example.com']
    """
    clean = []
    for index, raw in enumerate(raw_urls):
        if isinstance(raw, str) and not raw.strip():
            continue
        try:
            clean.append(clean_url(raw))
        except InvalidURLError as e:
            logger.info('Dropping invalid destination URL.', extra={'index': index, 'reason': str(e)})
    return clean
