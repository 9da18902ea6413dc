"""Unit tests for the shorten_url AWS Lambda handler.

Verify that the Lambda correctly handles incoming API Gateway events,
interacts with the shortening service, and returns proper HTTP responses in
both success and error scenarios.

Test coverage includes:

1. Successful shortening
   - Ensures the Lambda returns the short URL with HTTP 201.
   - Ensures base64-encoded bodies are decoded.
   - Ensures the listen address is used when the event has no domain.

2. Invalid JSON body
   - Ensures malformed request bodies return HTTP 422.

3. Missing `url` key
   - Ensures requests missing the required field return HTTP 422.

4. Malformed URL
   - Ensures InvalidInputError from the service returns HTTP 422.

5. Server-side failures
   - Ensures configuration, storage and id allocation errors return HTTP 500.
   - Ensures unexpected exceptions return HTTP 500.

Fixtures:
    - `apigw_event`: valid POST / API Gateway event.
    - `context`: mock AWS Lambda context object.
    - `config`: application configuration.
    - `service`: mock ShorteningService.
    - `_patch_lambda_dependencies`: autouse fixture that monkeypatches app dependencies
                                    (config loader and service factory).
"""

import base64
import json
from unittest.mock import MagicMock, patch

import pytest

from shorturl.lambdas.shorten_url import app
from shorturl.service import ShorteningService
from shorturl.exceptions import BadConfigurationError, IdSpaceExhaustedError, InvalidInputError
from shorturl.dao.exceptions import StorageError
from shorturl.utils.config import ShortenerConfig


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture()
def apigw_event():
    return {
        'body': json.dumps({'url': 'https://example.com/blog/chuck-norris-is-awesome'}),
        'resource': '/',
        'headers': {'User-Agent': 'pytest', 'Content-Type': 'application/json'},
        'httpMethod': 'POST',
        'path': '/',
        'isBase64Encoded': False,
        'requestContext': {
            'resourcePath': '/',
            'httpMethod': 'POST',
            'domainName': 'testhost:1000',
            'stage': 'test',
        },
    }


@pytest.fixture()
def context():
    class _Context:
        function_name = 'shorten_url'

    return _Context()


@pytest.fixture()
def config():
    return ShortenerConfig(storage_location='redis://redis.test:6379/0', listen_addr='127.0.0.1:8080')


@pytest.fixture()
def service():
    _service = MagicMock(spec=ShorteningService)
    _service.shorten.return_value = 'abc123'
    return _service


@pytest.fixture(autouse=True)
def _patch_lambda_dependencies(monkeypatch, config, service):
    monkeypatch.setattr(app, 'load_config', lambda *a, **kw: config)
    monkeypatch.setattr(app, 'get_service', lambda *a, **kw: service)


# -------------------------------
# 1. Successful shortening
# -------------------------------


def test_lambda_handler(apigw_event, context, service):
    """Ensure Lambda successfully shortens URLs."""
    response = app.lambda_handler(apigw_event, context)
    body = json.loads(response['body'])

    assert response['statusCode'] == 201
    assert response['headers']['Content-Type'] == 'application/json'
    assert body == {'url': 'https://testhost:1000/abc123'}
    service.shorten.assert_called_once_with('https://example.com/blog/chuck-norris-is-awesome')


def test_lambda_handler_with_base64_body(apigw_event, context, service):
    apigw_event['body'] = base64.b64encode(apigw_event['body'].encode('utf-8')).decode('ascii')
    apigw_event['isBase64Encoded'] = True

    response = app.lambda_handler(apigw_event, context)

    assert response['statusCode'] == 201
    service.shorten.assert_called_once_with('https://example.com/blog/chuck-norris-is-awesome')


def test_lambda_handler_without_domain_uses_listen_addr(apigw_event, context):
    del apigw_event['requestContext']['domainName']

    response = app.lambda_handler(apigw_event, context)

    assert json.loads(response['body'])['url'] == 'http://127.0.0.1:8080/abc123'


# -------------------------------
# 2. Invalid JSON body
# -------------------------------


@pytest.mark.parametrize('body', ['{"url": "https://example.com"', 'not json at all'])
def test_lambda_handler_with_invalid_json(apigw_event, context, service, body):
    """Ensure invalid JSON body returns HTTP 422."""
    apigw_event['body'] = body

    response = app.lambda_handler(apigw_event, context)
    body = json.loads(response['body'])

    assert response['statusCode'] == 422
    assert body['message'] == 'Unprocessable Entity (invalid JSON body)'
    assert body['errorCode'] == 'INVALID_JSON_BODY'
    service.shorten.assert_not_called()


def test_lambda_handler_with_invalid_base64_body(apigw_event, context):
    apigw_event['body'] = '%%%not-base64%%%'
    apigw_event['isBase64Encoded'] = True

    response = app.lambda_handler(apigw_event, context)

    assert response['statusCode'] == 422


# -------------------------------
# 3. Missing url field
# -------------------------------


@pytest.mark.parametrize('body', [json.dumps({'target_url': 'https://example.com'}), '[]', '"https://example.com"', None, ''])
def test_lambda_handler_with_missing_url(apigw_event, context, service, body):
    """Ensure missing 'url' in JSON body returns HTTP 422."""
    apigw_event['body'] = body

    response = app.lambda_handler(apigw_event, context)
    body = json.loads(response['body'])

    assert response['statusCode'] == 422
    assert body['message'] == "Unprocessable Entity (missing 'url' in JSON body)"
    assert body['errorCode'] == 'MISSING_URL'
    service.shorten.assert_not_called()


# -------------------------------
# 4. Malformed URL
# -------------------------------


def test_lambda_handler_with_malformed_url(apigw_event, context, service):
    service.shorten.side_effect = InvalidInputError("Invalid URL 'not a url' (URL must not contain whitespace).")

    response = app.lambda_handler(apigw_event, context)
    body = json.loads(response['body'])

    assert response['statusCode'] == 422
    assert body['message'] == "Unprocessable Entity (Invalid URL 'not a url' (URL must not contain whitespace).)"
    assert body['errorCode'] == 'INVALID_URL'


# -------------------------------
# 5. Server-side failures
# -------------------------------


def test_lambda_handler_with_invalid_configuration(apigw_event, context):
    """Ensure configuration errors in load_config return HTTP 500."""
    with patch('shorturl.lambdas.shorten_url.app.load_config') as mock_load_config:
        mock_load_config.side_effect = BadConfigurationError('id_length must be >= 1 (given value: 0).')
        response = app.lambda_handler(apigw_event, context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 500
        assert body['message'] == 'Internal Server Error'
        assert body['errorCode'] == 'config:bad_configuration_error'


def test_lambda_handler_with_id_space_exhausted(apigw_event, context, service):
    service.shorten.side_effect = IdSpaceExhaustedError()

    response = app.lambda_handler(apigw_event, context)
    body = json.loads(response['body'])

    assert response['statusCode'] == 500
    assert body['errorCode'] == 'app:id_space_exhausted_error'


def test_lambda_handler_with_storage_error(apigw_event, context, service):
    service.shorten.side_effect = StorageError("Can't connect to Redis at redis.test:6379/0.")

    response = app.lambda_handler(apigw_event, context)
    body = json.loads(response['body'])

    assert response['statusCode'] == 500
    assert body['errorCode'] == 'dao:storage_error'


def test_lambda_handler_with_unexpected_error(apigw_event, context, service):
    """Ensure unexpected exceptions never escape the handler."""
    service.shorten.side_effect = RuntimeError('boom')

    response = app.lambda_handler(apigw_event, context)
    body = json.loads(response['body'])

    assert response['statusCode'] == 500
    assert body['errorCode'] == 'UNKNOWN_INTERNAL_SERVER_ERROR'
