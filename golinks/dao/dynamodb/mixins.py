"""DynamoDB mixin providing shared table initialization.

Responsibilities:
    - Initialize a boto3 DynamoDB Table resource (LocalStack aware)
    - Wire the DynamoDB key schema

Example:
    >>> class LinkDynamoDBDAO(DynamoDBTableMixin, LinkBaseDAO):
    ...     pass
    ...
    >>> dao = LinkDynamoDBDAO(dynamodb_table_name='golinks-links', prefix='golinks:prod')
    >>> dao.table.name
    'golinks-links'
"""

import os
from typing import Any, Optional

import boto3

from golinks.dao.dynamodb.dynamodb_key_schema import DynamoDBKeySchema
from golinks.utils.runtime import running_locally
from golinks.utils.constants import LOCALSTACK_ENDPOINT_ENV


class DynamoDBTableMixin:
    """Mixin DynamoDB table setup for DynamoDB-backed DAOs.

    Attributes:
        table (boto3 DynamoDB Table):
            Table resource used by subclasses. Records are keyed by 'pk'.

        keys (DynamoDBKeySchema):
            Helper class for generating namespaced record identifiers.
    """

    def __init__(
        self,
        dynamodb_table_name: Optional[str] = None,
        dynamodb_region: Optional[str] = None,
        dynamodb_endpoint_url: Optional[str] = None,
        dynamodb_table: Optional[Any] = None,
        prefix: Optional[str] = None,
    ):
        """Initialize a DynamoDB-based DAO

        Args:
            dynamodb_table_name (Optional[str]):
                Name of the DynamoDB table. Required unless dynamodb_table is given.

            dynamodb_region (Optional[str]):
                AWS region of the table. Defaults to the Lambda's region.

            dynamodb_endpoint_url (Optional[str]):
                Custom endpoint. When running locally, defaults to LocalStack.

            dynamodb_table (Optional[Any]):
                Pre-initialized Table resource. If None, a new one is created.

            prefix (Optional[str]):
                Namespace prefix for all record identifiers, e.g. 'app:env'.

        Raises:
            ValueError:
                If neither a table nor a table name is given.
        """
        if dynamodb_table is None:
            if not dynamodb_table_name:
                raise ValueError('DynamoDB table name must be a non-empty string.')

            # fmt: off
            endpoint_url = dynamodb_endpoint_url or (
                os.environ.get(LOCALSTACK_ENDPOINT_ENV, 'http://localhost:4566') if running_locally() else None
            )
            # fmt: on
            dynamodb = boto3.resource('dynamodb', region_name=dynamodb_region, endpoint_url=endpoint_url)
            dynamodb_table = dynamodb.Table(dynamodb_table_name)

        self.table = dynamodb_table
        self.keys = DynamoDBKeySchema(prefix=prefix)
