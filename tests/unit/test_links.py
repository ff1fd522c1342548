"""Unit tests for LinkService and preview_link

Test coverage includes:

1. Shortening
   - Ensures put then resolve round-trips the normalized URL.
   - Ensures shortening the same URL twice keeps exactly one mapping.
   - Ensures the later URL wins when two URLs share a token.
   - Confirms unusable URLs raise InvalidURLError without touching the store.

2. Resolving
   - Confirms unknown and malformed tokens raise LinkNotFoundError.

3. Token factory
   - Ensures a custom token factory is used for every mapping.
   - Confirms a factory returning malformed tokens raises BadConfigurationError.

4. Destination lists
   - Ensures save cleans the list and hands list and mappings to one store write.
   - Ensures saving an empty list removes the stored list.
   - Confirms a failed list write leaves no mapping and keeps the previous list.
   - Ensures listing refreshes every mapping.

5. Preview
   - Ensures preview matches what a save computes and never touches a store.
"""

from unittest.mock import MagicMock

import pytest

from golinks.links import LinkService, preview_link
from golinks.models import LinkModel, DestinationListModel
from golinks.dao.base import LinkBaseDAO, DestinationListBaseDAO
from golinks.dao.exceptions import DataStoreError, LinkNotFoundError
from golinks.exceptions import BadConfigurationError, InvalidURLError
from golinks.utils.shortener import derive_token


# -------------------------------
# Fixtures
# -------------------------------


class InMemoryLinkDAO(LinkBaseDAO):
    def __init__(self):
        self.table = {}
        self.puts = 0

    def put(self, link, **kwargs):
        self.table[link.token] = link.target
        self.puts += 1
        return self

    def resolve(self, token, **kwargs):
        if token not in self.table:
            raise LinkNotFoundError(f"Link with token '{token}' not found.")
        return LinkModel(target=self.table[token], token=token)


class InMemoryDestinationListDAO(DestinationListBaseDAO):
    """Writes the list and its mappings together, or neither when fail_with is set"""

    def __init__(self, link_dao=None):
        self.link_dao = link_dao
        self.lists = {}
        self.fail_with = None

    def get(self, content_id, **kwargs):
        return DestinationListModel(content_id=content_id, urls=self.lists.get(content_id, ()))

    def put(self, destinations, links=(), **kwargs):
        if self.fail_with is not None:
            raise self.fail_with
        for link in links:
            self.link_dao.put(link)
        if not destinations.urls:
            return self.delete(destinations.content_id)
        self.lists[destinations.content_id] = destinations.urls
        return self

    def delete(self, content_id, **kwargs):
        self.lists.pop(content_id, None)
        return self


@pytest.fixture
def link_dao():
    return InMemoryLinkDAO()


@pytest.fixture
def destination_list_dao(link_dao):
    return InMemoryDestinationListDAO(link_dao)


@pytest.fixture
def service(link_dao, destination_list_dao):
    return LinkService(link_dao, destination_list_dao)


# -------------------------------
# 1. Shortening
# -------------------------------


def test_shorten_concrete_scenario(service):
    link = service.shorten('http://example.com')

    assert link.token == 'a9b9f04336'
    assert service.resolve(link.token).target == 'http://example.com'


@pytest.mark.parametrize(
    'raw_url, normalized',
    [
        ('https://example.com/blog/article-123', 'https://example.com/blog/article-123'),
        ('example.com/x', 'https://example.com/x'),
        ('  ftp://files.example.com/a.zip ', 'ftp://files.example.com/a.zip'),
    ],
)
def test_shorten_round_trip(service, raw_url, normalized):
    link = service.shorten(raw_url)

    assert link.target == normalized
    assert link.token == derive_token(normalized)
    assert service.resolve(link.token).target == normalized


def test_shorten_is_idempotent(service, link_dao):
    first = service.shorten('https://example.com/a')
    second = service.shorten('https://example.com/a')

    assert first.token == second.token
    assert link_dao.table == {first.token: 'https://example.com/a'}


def test_shorten_collision_last_write_wins(link_dao):
    """Two URLs sharing a token overwrite each other; this is an accepted limitation."""
    service = LinkService(link_dao, token_factory=lambda url: '0123456789')

    service.shorten('https://example.com/a')
    service.shorten('https://example.com/b')

    assert service.resolve('0123456789').target == 'https://example.com/b'
    assert len(link_dao.table) == 1


@pytest.mark.parametrize('raw_url', ['', '   ', 'javascript://alert(1)', 'https://', 'https://exa mple.com'])
def test_shorten_invalid_url(service, link_dao, raw_url):
    with pytest.raises(InvalidURLError):
        service.shorten(raw_url)

    assert link_dao.puts == 0


# -------------------------------
# 2. Resolving
# -------------------------------


def test_resolve_unknown_token(service):
    with pytest.raises(LinkNotFoundError):
        service.resolve('0000000000')


@pytest.mark.parametrize('token', ['', '../etc', 'a9b9f04336/', None])
def test_resolve_malformed_token_skips_store(token):
    dao = MagicMock(spec=LinkBaseDAO)
    service = LinkService(dao)

    with pytest.raises(LinkNotFoundError):
        service.resolve(token)

    dao.resolve.assert_not_called()


# -------------------------------
# 3. Token factory
# -------------------------------


def test_custom_token_factory(link_dao):
    service = LinkService(link_dao, token_factory=lambda url: 'custom' + derive_token(url)[:4])

    link = service.shorten('http://example.com')

    assert link.token == 'customa9b9'
    assert link_dao.table == {'customa9b9': 'http://example.com'}


def test_token_factory_returning_malformed_token(link_dao):
    service = LinkService(link_dao, token_factory=lambda url: 'not/a/token')

    with pytest.raises(BadConfigurationError, match='malformed token'):
        service.shorten('http://example.com')


# -------------------------------
# 4. Destination lists
# -------------------------------


def test_save_destinations(service, link_dao, destination_list_dao):
    raw_urls = ['example.com/a', '', 'https://example.com/b', 'javascript://alert(1)', 'example.com/a']

    destinations, links = service.save_destinations('42', raw_urls)

    expected = ('https://example.com/a', 'https://example.com/b', 'https://example.com/a')
    assert destinations == DestinationListModel(content_id='42', urls=expected)
    assert destination_list_dao.lists == {'42': expected}
    assert [link.target for link in links] == list(expected)
    assert link_dao.table == {
        'cd69b81ea0': 'https://example.com/a',
        '43cc12e82d': 'https://example.com/b',
    }


def test_save_destinations_replaces_previous_list(service, destination_list_dao):
    service.save_destinations('42', ['https://example.com/a', 'https://example.com/b'])
    service.save_destinations('42', ['https://example.com/b'])

    assert destination_list_dao.lists == {'42': ('https://example.com/b',)}


@pytest.mark.parametrize('raw_urls', [[], ['', '  '], ['javascript://alert(1)']])
def test_save_empty_list_removes_it(service, link_dao, destination_list_dao, raw_urls):
    destination_list_dao.lists['42'] = ('https://example.com/a',)

    destinations, links = service.save_destinations('42', raw_urls)

    assert destinations.urls == ()
    assert links == []
    assert destination_list_dao.lists == {}
    assert link_dao.puts == 0


def test_save_with_failing_list_write_persists_nothing(service, link_dao, destination_list_dao):
    """A save whose list write fails leaves no new mapping behind and keeps the previous list."""
    destination_list_dao.lists['42'] = ('https://example.com/a',)
    destination_list_dao.fail_with = DataStoreError("Can't connect to Redis at redis.test:6379/0.")

    with pytest.raises(DataStoreError):
        service.save_destinations('42', ['https://example.com/b'])

    assert destination_list_dao.lists == {'42': ('https://example.com/a',)}
    with pytest.raises(LinkNotFoundError):
        service.resolve('43cc12e82d')


def test_save_passes_mappings_to_list_store(link_dao):
    destination_list_dao = MagicMock(spec=DestinationListBaseDAO)
    service = LinkService(link_dao, destination_list_dao)

    service.save_destinations('42', ['https://example.com/a'])

    destination_list_dao.put.assert_called_once_with(
        DestinationListModel(content_id='42', urls=('https://example.com/a',)),
        links=[LinkModel(target='https://example.com/a', token='cd69b81ea0')],
    )
    assert link_dao.puts == 0


def test_save_without_destination_list_store(link_dao):
    with pytest.raises(BadConfigurationError):
        LinkService(link_dao).save_destinations('42', ['https://example.com/a'])


def test_list_destinations_refreshes_mappings(service, link_dao, destination_list_dao):
    destination_list_dao.lists['42'] = ('https://example.com/a', 'https://example.com/b')

    destinations, links = service.list_destinations('42')

    assert destinations.urls == ('https://example.com/a', 'https://example.com/b')
    assert [link.token for link in links] == ['cd69b81ea0', '43cc12e82d']
    assert link_dao.puts == 2


def test_list_destinations_without_links(service, link_dao):
    destinations, links = service.list_destinations('42')

    assert destinations.urls == ()
    assert links == []
    assert link_dao.puts == 0


# -------------------------------
# 5. Preview
# -------------------------------


@pytest.mark.parametrize('raw_url', ['example.com/x', 'https://example.com/x', '  example.com/x  '])
def test_preview_matches_save(service, raw_url):
    preview = preview_link(raw_url)
    saved = service.shorten(raw_url)

    assert preview == saved
    assert preview.token == 'fce167385b'


def test_preview_invalid_url():
    with pytest.raises(InvalidURLError):
        preview_link('   ')
