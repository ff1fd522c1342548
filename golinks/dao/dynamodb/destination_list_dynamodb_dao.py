"""Data Access Object (DAO) for content item destination lists in DynamoDB

Record layout:
    {
        "pk": "<prefix>:item#<content_id>",
        "urls": ["https://example.com/a", "https://example.com/b"],
        "legacy_url": "https://example.com/a"
    }

A save writes the list record and the link records of its URLs in one
TransactWriteItems call, so DynamoDB stores all of them or none.
"""

from collections.abc import Sequence

from beartype import beartype

from golinks.models import LinkModel, DestinationListModel
from golinks.dao.base import DestinationListBaseDAO
from golinks.dao.dynamodb.mixins import DynamoDBTableMixin
from golinks.dao.dynamodb.link_dynamodb_dao import LinkDynamoDBDAO
from golinks.dao.dynamodb.helpers import handle_dynamodb_error, put_request, delete_request, transact_write
from golinks.exceptions import BadConfigurationError


class DestinationListDynamoDBDAO(DynamoDBTableMixin, DestinationListBaseDAO):
    """DynamoDB-based DAO for destination lists

    Attributes:
        link_dao (LinkDynamoDBDAO | None):
            Link mapping store written together with the list. Its table is
            reused unless another one is given.
    """

    def __init__(self, link_dao: LinkDynamoDBDAO | None = None, **kwargs):
        if link_dao is not None:
            kwargs.setdefault('dynamodb_table', link_dao.table)
        super().__init__(**kwargs)
        self.link_dao = link_dao

    @handle_dynamodb_error
    @beartype
    def get(self, content_id: str, **kwargs) -> DestinationListModel:
        response = self.table.get_item(Key={'pk': self.keys.destinations_record_id(content_id)}, ConsistentRead=True)
        record = response.get('Item') or {}

        urls = list(record.get('urls') or [])
        if not urls and record.get('legacy_url'):
            urls = [record['legacy_url']]

        return DestinationListModel(content_id=content_id, urls=tuple(urls))

    @handle_dynamodb_error
    @beartype
    def put(self, destinations: DestinationListModel, links: Sequence[LinkModel] = (), **kwargs) -> 'DestinationListDynamoDBDAO':
        if not destinations.urls and not links:
            return self.delete(destinations.content_id)

        if links and self.link_dao is None:
            raise BadConfigurationError('DestinationListDynamoDBDAO was created without a link mapping store.')

        pk = self.keys.destinations_record_id(destinations.content_id)
        if destinations.urls:
            list_request = put_request(
                self.table,
                {'pk': pk, 'urls': list(destinations.urls), 'legacy_url': destinations.urls[0]},
            )
        else:
            list_request = delete_request(self.table, pk)

        link_requests = self.link_dao.write_requests(links) if links else []
        transact_write(self.table, [*link_requests, list_request])
        return self

    @handle_dynamodb_error
    @beartype
    def delete(self, content_id: str, **kwargs) -> 'DestinationListDynamoDBDAO':
        self.table.delete_item(Key={'pk': self.keys.destinations_record_id(content_id)})
        return self
