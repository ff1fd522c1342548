from golinks.dao.dynamodb.dynamodb_key_schema import DynamoDBKeySchema
from golinks.dao.dynamodb.mixins import DynamoDBTableMixin
from golinks.dao.dynamodb.link_dynamodb_dao import LinkDynamoDBDAO
from golinks.dao.dynamodb.destination_list_dynamodb_dao import DestinationListDynamoDBDAO


__all__ = [
    'DynamoDBKeySchema',
    'DynamoDBTableMixin',
    'LinkDynamoDBDAO',
    'DestinationListDynamoDBDAO',
]
