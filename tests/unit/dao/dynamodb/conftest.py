from unittest.mock import MagicMock

import pytest


@pytest.fixture
def app_prefix() -> str:
    return 'testapp:test'


@pytest.fixture
def table() -> MagicMock:
    """Mock a boto3 DynamoDB Table resource."""
    _table = MagicMock()
    _table.name = 'golinks-test'
    _table.get_item.return_value = {}
    return _table
