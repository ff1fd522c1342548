"""API Gateway (Lambda proxy) response builders

Every builder returns a JSON-serializable dict with 'statusCode', 'headers'
and a JSON 'body'. Extra headers (robots, CORS) are merged on top of the
defaults.

Example:
    >>> response_404(message="short link doesn't exist", error_code='LINK_NOT_FOUND')
    {'statusCode': 404, 'headers': {'Content-Type': 'application/json'}, 'body': '{"message": ...}'}
"""

import json
from typing import Any

from golinks.types import HttpHeaders, LambdaResponse


def _response(status_code: int, body: dict[str, Any], headers: HttpHeaders | None = None) -> LambdaResponse:
    return {
        'statusCode': status_code,
        'headers': {'Content-Type': 'application/json', **(headers or {})},
        'body': json.dumps(body),
    }


def _error_body(base: str, message: str | None, error_code: str | None) -> dict[str, Any]:
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return body


def response_200(body: dict[str, Any], headers: HttpHeaders | None = None) -> LambdaResponse:
    return _response(200, body, headers)


def response_302(*, location: str, headers: HttpHeaders | None = None) -> LambdaResponse:
    return {
        'statusCode': 302,
        'headers': {'Location': location, **(headers or {})},
        'body': json.dumps({}),  # no body needed for redirects
    }


def response_400(message: str | None = None, error_code: str | None = None, headers: HttpHeaders | None = None) -> LambdaResponse:
    return _response(400, _error_body('Bad Request', message, error_code), headers)


def response_404(message: str | None = None, error_code: str | None = None, headers: HttpHeaders | None = None) -> LambdaResponse:
    return _response(404, _error_body('Not Found', message, error_code), headers)


def response_500(message: str | None = None, error_code: str | None = None, headers: HttpHeaders | None = None) -> LambdaResponse:
    return _response(500, _error_body('Internal Server Error', message, error_code), headers)


def response_503(message: str | None = None, error_code: str | None = None, headers: HttpHeaders | None = None) -> LambdaResponse:
    return _response(503, _error_body('Service Unavailable', message, error_code), headers)
