import functools
from typing import TypeVar, Any
from collections.abc import Callable, Sequence

from boto3.dynamodb.types import TypeSerializer
from botocore.exceptions import BotoCoreError, ClientError

from golinks.dao.exceptions import DataStoreError
from golinks.utils.constants import DYNAMODB_TRANSACTION_LIMIT


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])


def handle_dynamodb_error[F](method: F) -> F:
    """Wrap DynamoDB-interacting DAO methods to handle AWS errors

    Args:
        method (Callable[..., Any]):
            DAO method performing DynamoDB operations which may raise
            botocore ClientError (throttling, missing table, ...) or
            BotoCoreError (endpoint unreachable, credentials, ...).

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError instead.

    Example:
        >>> @handle_dynamodb_error
        ... def resolve(self, token):
        ...     return self.table.get_item(Key={'pk': token})
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except ClientError as e:
            code = e.response.get('Error', {}).get('Code', 'Unknown')
            raise DataStoreError(f"DynamoDB table '{self.table.name}' request failed ({code}).") from e
        except BotoCoreError as e:
            raise DataStoreError(f"Can't reach DynamoDB table '{self.table.name}'.") from e

    return wrapper


_serializer = TypeSerializer()


def put_request(table: Any, item: dict[str, Any]) -> dict[str, Any]:
    """Low-level TransactWriteItems 'Put' request for a resource-style item"""
    return {'Put': {'TableName': table.name, 'Item': {key: _serializer.serialize(value) for key, value in item.items()}}}


def delete_request(table: Any, pk: str) -> dict[str, Any]:
    """Low-level TransactWriteItems 'Delete' request for the record keyed by pk"""
    return {'Delete': {'TableName': table.name, 'Key': {'pk': _serializer.serialize(pk)}}}


def transact_write(table: Any, requests: Sequence[dict[str, Any]]) -> None:
    """Apply write requests all-or-nothing with TransactWriteItems

    Requests touching the same record are collapsed (last one wins), since a
    transaction may touch each record only once.

    Raises:
        DataStoreError:
            If the writes don't fit in one transaction.
        botocore ClientError:
            If DynamoDB cancels the transaction (see handle_dynamodb_error).
    """
    by_record = {}
    for request in requests:
        (operation,) = request.values()
        by_record[operation.get('Item', operation.get('Key'))['pk']['S']] = request

    if len(by_record) > DYNAMODB_TRANSACTION_LIMIT:
        raise DataStoreError(
            f'{len(by_record)} records exceed the DynamoDB transaction limit ({DYNAMODB_TRANSACTION_LIMIT}).'
        )
    if by_record:
        table.meta.client.transact_write_items(TransactItems=list(by_record.values()))
