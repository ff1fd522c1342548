"""Unit tests for the redirect_url AWS Lambda handler.

Test coverage includes:

1. Successful redirect
   - Ensures a live token redirects (HTTP 302) to its destination URL.

2. Missing or unknown tokens
   - Ensures a missing path token returns HTTP 404.
   - Ensures tokens without a live mapping return HTTP 404 naming the short link.
   - Confirms malformed tokens never reach the store.

3. Failures
   - Ensures store failures return HTTP 503.
   - Ensures configuration failures and unexpected errors return HTTP 500.

Every response, successful or not, must carry the X-Robots-Tag header.
"""

import json
from typing import cast
from unittest.mock import MagicMock

import pytest
from pytest import MonkeyPatch

from golinks.types import LambdaEvent, LambdaContext, LambdaConfiguration
from golinks.lambdas.redirect_url import app
from golinks.models import LinkModel
from golinks.dao.base import LinkBaseDAO
from golinks.dao.exceptions import LinkNotFoundError, DataStoreError
from golinks.exceptions import AppConfigError


ROBOTS_TAG = 'noindex, nofollow, noarchive'


# -------------------------------
# Fixtures
# -------------------------------


def make_event(path_parameters) -> LambdaEvent:
    return cast(LambdaEvent, {
        'resource': '/go/{token}',
        'pathParameters': path_parameters,
        'httpMethod': 'GET',
        'path': '/go/a9b9f04336/',
        'requestContext': {'resourcePath': '/go/{token}', 'httpMethod': 'GET', 'domainName': 'testhost:1000', 'stage': 'test'},
    })


@pytest.fixture
def successful_event_302() -> LambdaEvent:
    return make_event({'token': 'a9b9f04336'})


@pytest.fixture
def missing_token_404() -> LambdaEvent:
    return make_event({'invalid': 'path'})


class TestRedirectUrlHandler:

    @pytest.fixture
    def config(self) -> LambdaConfiguration:
        return cast(LambdaConfiguration, {'redis': {'host': 'redis.test', 'port': 6379, 'db': 0, 'policy': 'expiring'}})

    @pytest.fixture
    def link_dao(self) -> LinkBaseDAO:
        dao = MagicMock(spec=LinkBaseDAO)
        dao.resolve.return_value = LinkModel(target='http://example.com', token='a9b9f04336')
        return dao

    @pytest.fixture(autouse=True)
    def setup(
        self,
        monkeypatch: MonkeyPatch,
        context: LambdaContext,
        config: LambdaConfiguration,
        link_dao: LinkBaseDAO,
    ) -> None:
        # Patch Lambda dependencies
        self.dao_factory = MagicMock(return_value=link_dao)
        monkeypatch.setattr(app, 'load_config', lambda *a, **kw: config)
        monkeypatch.setattr(app, 'link_dao_from_config', self.dao_factory)

        self.context = context
        self.config = config
        self.link_dao = link_dao

    # -------------------------------
    # 1. Successful redirect
    # -------------------------------

    def test_lambda_handler(self, successful_event_302: LambdaEvent) -> None:
        response = app.lambda_handler(successful_event_302, self.context)
        headers = response['headers']
        body = json.loads(response['body'])

        assert response['statusCode'] == 302
        assert body == {}
        assert headers['Location'] == 'http://example.com'
        assert headers['X-Robots-Tag'] == ROBOTS_TAG

        self.link_dao.resolve.assert_called_once_with('a9b9f04336')
        self.dao_factory.assert_called_once_with(self.config, prefix='golinks:test')

    # -------------------------------
    # 2. Missing or unknown tokens
    # -------------------------------

    def test_lambda_handler_with_missing_token(self, missing_token_404: LambdaEvent) -> None:
        response = app.lambda_handler(missing_token_404, self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 404
        assert response['headers']['X-Robots-Tag'] == ROBOTS_TAG
        assert body['message'] == "Not Found (missing 'token' in path)"
        assert body['errorCode'] == 'MISSING_TOKEN'
        self.link_dao.resolve.assert_not_called()

    def test_lambda_handler_without_path_parameters(self) -> None:
        response = app.lambda_handler(make_event(None), self.context)

        assert response['statusCode'] == 404
        assert json.loads(response['body'])['errorCode'] == 'MISSING_TOKEN'

    def test_lambda_handler_with_unknown_token(self) -> None:
        self.link_dao.resolve.side_effect = LinkNotFoundError()

        response = app.lambda_handler(make_event({'token': '0000000000'}), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 404
        assert response['headers']['X-Robots-Tag'] == ROBOTS_TAG
        assert body['message'] == "Not Found (short link https://testhost:1000/go/0000000000/ doesn't exist)"
        assert body['errorCode'] == 'LINK_NOT_FOUND'
        self.link_dao.resolve.assert_called_once_with('0000000000')

    def test_lambda_handler_with_malformed_token(self) -> None:
        response = app.lambda_handler(make_event({'token': 'a9b9-f043'}), self.context)

        assert response['statusCode'] == 404
        assert json.loads(response['body'])['errorCode'] == 'LINK_NOT_FOUND'
        self.link_dao.resolve.assert_not_called()

    # -------------------------------
    # 3. Failures
    # -------------------------------

    def test_lambda_handler_with_unavailable_store(self, successful_event_302: LambdaEvent) -> None:
        self.link_dao.resolve.side_effect = DataStoreError('connection refused')

        response = app.lambda_handler(successful_event_302, self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 503
        assert response['headers']['X-Robots-Tag'] == ROBOTS_TAG
        assert body['errorCode'] == 'STORE_UNAVAILABLE'
        assert 'Location' not in response['headers']

    def test_lambda_handler_with_unavailable_config(self, monkeypatch: MonkeyPatch, successful_event_302: LambdaEvent) -> None:
        monkeypatch.setattr(app, 'load_config', MagicMock(side_effect=AppConfigError('Something goes wrong')))

        response = app.lambda_handler(successful_event_302, self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 500
        assert response['headers']['X-Robots-Tag'] == ROBOTS_TAG
        assert body == {'message': 'Internal Server Error', 'errorCode': 'CONFIG_UNAVAILABLE'}
        self.link_dao.resolve.assert_not_called()

    def test_lambda_handler_with_unexpected_error(self, successful_event_302: LambdaEvent) -> None:
        self.link_dao.resolve.side_effect = RuntimeError('boom')

        response = app.lambda_handler(successful_event_302, self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 500
        assert response['headers']['X-Robots-Tag'] == ROBOTS_TAG
        assert body['errorCode'] == 'UNKNOWN_INTERNAL_SERVER_ERROR'
