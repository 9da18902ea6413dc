"""API Gateway (Lambda proxy integration) response builders

Every error response carries a JSON body {"message": ..., "errorCode": ...}.
"""

import json

from shorturl.types import LambdaResponse


def _json_response(status_code: int, body: dict, headers: dict | None = None) -> LambdaResponse:
    return {
        'statusCode': status_code,
        'headers': {'Content-Type': 'application/json', **(headers or {})},
        'body': json.dumps(body),
    }


def _error_body(base: str, message: str | None, error_code: str | None) -> dict:
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return body


def response_201(*, short_url: str) -> LambdaResponse:
    return _json_response(201, {'url': short_url})


def response_308(*, location: str) -> LambdaResponse:
    return {
        'statusCode': 308,
        'headers': {'Location': location},
        'body': '',  # no body needed for redirects
    }


def response_404(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _json_response(404, _error_body('Not Found', message, error_code))


def response_422(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _json_response(422, _error_body('Unprocessable Entity', message, error_code))


def response_500(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _json_response(500, _error_body('Internal Server Error', message, error_code))
