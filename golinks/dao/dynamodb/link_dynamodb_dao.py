"""Data Access Object (DAO) storing one DynamoDB record per link mapping

Record layout:
    {
        "pk": "<prefix>:link#<token>",
        "token": "<token>",
        "target": "<destination url>",
        "updated_at": "2026-01-05T12:00:00+00:00"
    }

PutItem overwrites the whole record, so put() both creates and refreshes a
mapping. Records never expire. Batches go through TransactWriteItems, so a
failing batch stores none of its mappings.

Example:
    >>> dao = LinkDynamoDBDAO(dynamodb_table_name='golinks-links', prefix='golinks:prod')
    >>> dao.put(LinkModel(target='http://example.com', token='a9b9f04336'))
    <LinkDynamoDBDAO>
    >>> dao.resolve('a9b9f04336').updated_at
    datetime.datetime(2026, 1, 5, 12, 0, tzinfo=datetime.timezone.utc)
"""

from typing import Any
from datetime import datetime, UTC
from collections.abc import Sequence

from beartype import beartype

from golinks.models import LinkModel
from golinks.dao.base import LinkBaseDAO
from golinks.dao.dynamodb.mixins import DynamoDBTableMixin
from golinks.dao.dynamodb.helpers import handle_dynamodb_error, put_request, transact_write
from golinks.dao.exceptions import LinkNotFoundError


class LinkDynamoDBDAO(DynamoDBTableMixin, LinkBaseDAO):
    """DynamoDB-based DAO for the record-per-mapping policy"""

    @handle_dynamodb_error
    @beartype
    def put(self, link: LinkModel, **kwargs) -> 'LinkDynamoDBDAO':
        self.table.put_item(Item=self._record(link))
        return self

    @handle_dynamodb_error
    @beartype
    def put_many(self, links: Sequence[LinkModel], **kwargs) -> 'LinkDynamoDBDAO':
        """Create or refresh several mappings in one TransactWriteItems call (all or nothing)"""
        transact_write(self.table, self.write_requests(links))
        return self

    def write_requests(self, links: Sequence[LinkModel]) -> list[dict[str, Any]]:
        """TransactWriteItems requests upserting the links (see transact_write)"""
        return [put_request(self.table, self._record(link)) for link in links]

    @handle_dynamodb_error
    @beartype
    def resolve(self, token: str, **kwargs) -> LinkModel:
        response = self.table.get_item(Key={'pk': self.keys.link_record_id(token)}, ConsistentRead=True)
        record = response.get('Item')
        if not record or not record.get('target'):
            raise LinkNotFoundError(f"Link with token '{token}' not found.")

        updated_at = record.get('updated_at')
        return LinkModel(
            target=record['target'],
            token=token,
            updated_at=datetime.fromisoformat(updated_at) if updated_at else None,
        )

    def _record(self, link: LinkModel) -> dict[str, str]:
        return {
            'pk': self.keys.link_record_id(link.token),
            'token': link.token,
            'target': link.target,
            'updated_at': datetime.now(UTC).isoformat(),
        }
