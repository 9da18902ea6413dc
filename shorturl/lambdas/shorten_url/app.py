import base64
import binascii
import json
import logging

from shorturl.types import LambdaEvent, LambdaContext, LambdaResponse
from shorturl.models import UrlMapping
from shorturl.exceptions import ConfigurationError, IdSpaceExhaustedError, InvalidInputError
from shorturl.dao.exceptions import StorageError
from shorturl.utils import load_config, get_short_url
from shorturl.utils.helpers import guarantee_500_response
from shorturl.utils.responses import response_201, response_422, response_500
from shorturl.utils.runtime import get_service
from shorturl.lambdas.shorten_url.constants import (
    INVALID_JSON_BODY,
    MISSING_URL,
    INVALID_URL,
    ID_SPACE_EXHAUSTED,
    STORAGE_FAILURE,
    SHORTEN_SUCCESS,
)


logger = logging.getLogger(__name__)


def _request_body(event: LambdaEvent) -> str:
    body = event.get('body') or '{}'
    if event.get('isBase64Encoded'):
        body = base64.b64decode(body).decode('utf-8')
    return body


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to shorten URLs (POST /)

    This Lambda handler follows this procedure to shorten URLs:
    - Step 1: Load the application's config
    - Step 2: Extract long URL from request body
    - Step 3: Shorten it (idempotent: a known URL gets its existing short id)
    - Step 4: Respond to user with 201 and the short URL

    HTTP responses:
        201: URL shortened (or already shortened)
            url: short url (base URL + short id)
        422: Unprocessable request
            message: invalid JSON body, missing 'url', or malformed URL
        500: Internal server error
            message: configuration, storage, or id allocation failure

    Args:
        event (LambdaEvent):
            API Gateway event payload in Lambda Proxy format.
        context (LambdaContext):
            AWS Lambda context object containing runtime information.

    Returns:
        LambdaResponse:
            JSON-serializable response following API Gateway Lambda Proxy output format.

    Example:
        >>> event = {'body': '{"url": "https://example.com/a"}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        201
        >>> json.loads(response['body'])['url']
        'http://127.0.0.1:8080/Xk3_9a'
    """
    # 1- Get application's config
    try:
        config = load_config()
    except ConfigurationError as e:
        logger.exception('Failed to load configuration for shorten URL function. Responding with 500.')
        return response_500(error_code=e.error_code)

    # 2- Extract long URL from request body
    try:
        request_body = json.loads(_request_body(event))
    except (json.JSONDecodeError, binascii.Error, UnicodeDecodeError):
        logger.info('Invalid JSON body. Responding with 422.', extra={'event': INVALID_JSON_BODY})
        return response_422(message='invalid JSON body', error_code=INVALID_JSON_BODY)

    long_url = request_body.get('url') if isinstance(request_body, dict) else None
    if not long_url:
        logger.info("Missing 'url' in JSON body. Responding with 422.", extra={'event': MISSING_URL})
        return response_422(message="missing 'url' in JSON body", error_code=MISSING_URL)

    # 3- Shorten the long URL
    try:
        short_id = get_service(config).shorten(long_url)
    except InvalidInputError as e:
        logger.info('Malformed URL. Responding with 422.', extra={'event': INVALID_URL, 'reason': str(e)})
        return response_422(message=str(e), error_code=INVALID_URL)
    except IdSpaceExhaustedError as e:
        logger.error('No free short id found. Responding with 500.', extra={'event': ID_SPACE_EXHAUSTED})
        return response_500(error_code=e.error_code)
    except StorageError as e:
        logger.exception('Mapping store failed. Responding with 500.', extra={'event': STORAGE_FAILURE})
        return response_500(error_code=e.error_code)

    # 4- Return the short URL to the user
    mapping = UrlMapping(short_id=short_id, long_url=long_url)
    short_url = get_short_url(mapping.short_id, event, config.listen_addr)
    logger.info(
        'Shortened URL. Responding with 201.',
        extra={'shortId': mapping.short_id, 'longUrl': mapping.long_url, 'event': SHORTEN_SUCCESS},
    )
    return response_201(short_url=short_url)
