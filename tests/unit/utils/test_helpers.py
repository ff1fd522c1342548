"""Unit tests for helper functions in helpers.py.

Test coverage includes:

1. base_url() correct extraction
   - 1.1. Ensures URLs include the stage (e.g., `/Prod`) when invoked via AWS.
   - 1.2. Ensures URLs do NOT include stage information for clean public links.
   - 1.3. Confirms a proper localhost fallback when API Gateway data is missing.

2. get_short_url() and link_payload() build '/go/<token>/' short links

3. request_body() decodes JSON object bodies

4. require_environment() decorator behavior
   - 4.1. Ensures decorated functions execute when all env vars are present.
   - 4.2. Ensures missing or empty env vars raise MissingEnvironmentVariableError.

5. guarantee_500_response() decorator behavior
"""

import json
import base64

import pytest

from golinks.models import LinkModel
from golinks.exceptions import MissingEnvironmentVariableError
from golinks.utils.helpers import (
    base_url,
    get_short_url,
    link_payload,
    request_body,
    require_environment,
    guarantee_500_response,
)
from golinks.utils.constants import ROBOTS_HEADERS


# -------------------------------
# 1.1. AWS default domain handling
# -------------------------------


@pytest.mark.parametrize(
    'domain, stage, expected',
    [
        ('abc123.execute-api.us-east-1.amazonaws.com', 'Dev', 'https://abc123.execute-api.us-east-1.amazonaws.com/Dev'),
        ('abc123.execute-api.us-east-1.amazonaws.com', 'Prod', 'https://abc123.execute-api.us-east-1.amazonaws.com/Prod'),
    ],
)
def test_base_url_with_aws_domain(domain, stage, expected):
    """Ensure base_url() appends stage for default AWS execute-api domains."""
    event = {'requestContext': {'domainName': domain, 'stage': stage}}
    assert base_url(event) == expected


# -------------------------------
# 1.2. Custom domain handling
# -------------------------------


@pytest.mark.parametrize(
    'domain, stage, expected',
    [
        ('links.example.org', 'Dev', 'https://links.example.org'),
        ('example.com', 'Prod', 'https://example.com'),
    ],
)
def test_base_url_with_custom_domain(domain, stage, expected):
    """Ensure base_url() excludes stage for custom user-defined domains."""
    event = {'requestContext': {'domainName': domain, 'stage': stage}}
    assert base_url(event) == expected


# -------------------------------
# 1.3. Local fallback behavior
# -------------------------------


@pytest.mark.parametrize(
    'event',
    [
        {},
        {'requestContext': {}},
        {'requestContext': {'domainName': ''}},
        {'requestContext': {'stage': 'Dev'}},
    ],
)
def test_base_url_local_fallback(event):
    """Ensure base_url() falls back to localhost when requestContext is incomplete."""
    assert base_url(event) == 'http://localhost:3000'


# -------------------------------
# 2. Short links
# -------------------------------


@pytest.mark.parametrize(
    'token, event, expected',
    [
        ('a9b9f04336', {'requestContext': {'domainName': 'links.example.org', 'stage': 'Prod'}}, 'https://links.example.org/go/a9b9f04336/'),
        ('cd69b81ea0', {'requestContext': {'domainName': 'abc.execute-api.eu-west-1.amazonaws.com', 'stage': 'Dev'}}, 'https://abc.execute-api.eu-west-1.amazonaws.com/Dev/go/cd69b81ea0/'),
        ('a9b9f04336', {}, 'http://localhost:3000/go/a9b9f04336/'),
    ],
)
def test_get_short_url(token, event, expected):
    assert get_short_url(token, event) == expected


def test_link_payload():
    link = LinkModel(target='http://example.com', token='a9b9f04336')
    event = {'requestContext': {'domainName': 'links.example.org', 'stage': 'Prod'}}

    assert link_payload(link, event) == {
        'target': 'http://example.com',
        'token': 'a9b9f04336',
        'short_url': 'https://links.example.org/go/a9b9f04336/',
    }


# -------------------------------
# 3. Request bodies
# -------------------------------


@pytest.mark.parametrize(
    'event, expected',
    [
        ({'body': '{"url": "example.com"}'}, {'url': 'example.com'}),
        ({'body': None}, {}),
        ({}, {}),
        ({'body': base64.b64encode(b'{"urls": []}').decode(), 'isBase64Encoded': True}, {'urls': []}),
    ],
)
def test_request_body(event, expected):
    assert request_body(event) == expected


@pytest.mark.parametrize(
    'body, message',
    [
        ('{not json', 'invalid JSON body'),
        ('["example.com"]', 'JSON body must be an object'),
        ('"example.com"', 'JSON body must be an object'),
    ],
)
def test_request_body_rejects(body, message):
    with pytest.raises(ValueError, match=message):
        request_body({'body': body})


# -------------------------------
# 4.1. require_environment() happy path
# -------------------------------


def test_require_environment_happy_path(monkeypatch):
    """4.1. Decorated function executes when all env vars are present."""
    monkeypatch.setenv('ENV1', 'value1')
    monkeypatch.setenv('ENV2', 'value2')

    @require_environment('ENV1', 'ENV2')
    def sample_function(x: int) -> int:
        return x + 1

    assert sample_function(1) == 2


# -------------------------------
# 4.2. require_environment() missing or empty env vars
# -------------------------------


@pytest.mark.parametrize(
    'env_setup, missing_names',
    [
        ({'ENV1': None, 'ENV2': 'value2'}, ["'ENV1'"]),
        ({'ENV1': '', 'ENV2': 'value2'}, ["'ENV1'"]),
        ({'ENV1': None, 'ENV2': None}, ["'ENV1'", "'ENV2'"]),
    ],
)
def test_require_environment_missing_or_empty(monkeypatch, env_setup, missing_names):
    """4.2. Missing or empty env vars raise a descriptive MissingEnvironmentVariableError."""
    for name, value in env_setup.items():
        if value is None:
            monkeypatch.delenv(name, raising=False)
        else:
            monkeypatch.setenv(name, value)

    @require_environment('ENV1', 'ENV2')
    def sample_function() -> None:
        pass

    expected_message = f'Missing required environment variables: {", ".join(missing_names)}'
    with pytest.raises(MissingEnvironmentVariableError, match=expected_message):
        sample_function()


# -------------------------------
# 5. guarantee_500_response() behavior
# -------------------------------


def test_guarantee_500_response(monkeypatch):
    """5.1. Faulty lambda handler returns 500 response when not running locally."""
    monkeypatch.setattr('golinks.utils.helpers.running_locally', lambda: False)

    @guarantee_500_response
    def faulty_lambda_handler(event, context):
        raise RuntimeError('boom')

    response = faulty_lambda_handler({}, None)
    body = json.loads(response['body'])

    assert response['statusCode'] == 500
    assert body['errorCode'] == 'UNKNOWN_INTERNAL_SERVER_ERROR'


def test_guarantee_500_response_with_headers(monkeypatch):
    """5.2. Extra headers are attached to the 500 response."""
    monkeypatch.setattr('golinks.utils.helpers.running_locally', lambda: False)

    @guarantee_500_response(headers=ROBOTS_HEADERS)
    def faulty_lambda_handler(event, context):
        raise RuntimeError('boom')

    response = faulty_lambda_handler({}, None)

    assert response['statusCode'] == 500
    assert response['headers']['X-Robots-Tag'] == 'noindex, nofollow, noarchive'


def test_guarantee_500_response_passes_through(monkeypatch):
    """5.3. Successful responses are returned untouched."""
    monkeypatch.setattr('golinks.utils.helpers.running_locally', lambda: False)

    @guarantee_500_response
    def lambda_handler(event, context):
        return {'statusCode': 200}

    assert lambda_handler({}, None) == {'statusCode': 200}


def test_guarantee_500_response_reraises_locally(monkeypatch):
    """5.4. Exceptions propagate when running locally."""
    monkeypatch.setattr('golinks.utils.helpers.running_locally', lambda: True)

    @guarantee_500_response
    def faulty_lambda_handler(event, context):
        raise RuntimeError('boom')

    with pytest.raises(RuntimeError, match='boom'):
        faulty_lambda_handler({}, None)
