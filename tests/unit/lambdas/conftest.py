from typing import cast

import pytest

from golinks.types import LambdaContext
from golinks.utils.constants import APP_ENV_ENV, APP_NAME_ENV, AWS_SAM_LOCAL_ENV


@pytest.fixture(autouse=True)
def _deployed_environment(monkeypatch):
    """Run handlers as if deployed, so unexpected errors become 500 responses."""
    monkeypatch.setenv(APP_ENV_ENV, 'test')
    monkeypatch.setenv(APP_NAME_ENV, 'golinks')
    monkeypatch.delenv(AWS_SAM_LOCAL_ENV, raising=False)


@pytest.fixture
def context() -> LambdaContext:
    return cast(LambdaContext, {'function_name': 'golinks-test'})
