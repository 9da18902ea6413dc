import logging

from shorturl.types import LambdaEvent, LambdaContext, LambdaResponse
from shorturl.exceptions import ConfigurationError
from shorturl.dao.exceptions import NotFoundError, StorageError
from shorturl.utils import load_config
from shorturl.utils.helpers import guarantee_500_response
from shorturl.utils.responses import response_308, response_404, response_500
from shorturl.utils.runtime import get_service
from shorturl.lambdas.redirect_url.constants import (
    MISSING_SHORT_ID,
    SHORT_URL_NOT_FOUND,
    STORAGE_FAILURE,
    REDIRECT_SUCCESS,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to redirect URLs (GET /{short_id})

    This Lambda handler follows this procedure to redirect URLs:
    - Step 1: Load the application's config
    - Step 2: Extract short id from request path
    - Step 3: Resolve the long URL from the mapping store
    - Step 4: Redirect client to the long URL

    HTTP responses:
        308: Permanent redirect
            headers:
                Location: long URL
        404: Not found
            message: missing or unknown short id
        500: Internal server error
            message: server experienced an internal error

    Args:
        event (LambdaEvent):
            API Gateway event payload containing the short_id path parameter.
        context (LambdaContext):
            AWS Lambda runtime context object (not used directly).

    Returns:
        LambdaResponse:
            API Gateway-compatible response including statusCode, headers, and body.

    Example:
        >>> event = {'pathParameters': {'short_id': 'Xk3_9a'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        308
        >>> response['headers']['Location']
        'https://example.com/a'
    """
    # 1- Get application's config
    try:
        config = load_config()
    except ConfigurationError as e:
        logger.exception('Failed to load configuration for redirect URL function. Responding with 500.')
        return response_500(error_code=e.error_code)

    # 2- Extract short id from request's path
    short_id = (event.get('pathParameters') or {}).get('short_id')
    if not short_id:
        logger.info('Missing "short_id" in path. Responding with 404.', extra={'event': MISSING_SHORT_ID})
        return response_404(message="missing 'short_id' in path", error_code=MISSING_SHORT_ID)

    # 3- Resolve the long URL
    try:
        long_url = get_service(config).resolve(short_id)
    except NotFoundError:
        logger.info(
            'Short URL record not found in database. Responding with 404.',
            extra={'shortId': short_id, 'event': SHORT_URL_NOT_FOUND},
        )
        return response_404(message=f"short id '{short_id}' doesn't exist", error_code=SHORT_URL_NOT_FOUND)
    except StorageError as e:
        logger.exception(
            'Mapping store failed. Responding with 500.',
            extra={'shortId': short_id, 'event': STORAGE_FAILURE},
        )
        return response_500(error_code=e.error_code)

    # 4- Redirect client to the long URL
    logger.info(
        'Redirecting client to long URL. Responding with 308.',
        extra={'shortId': short_id, 'event': REDIRECT_SUCCESS},
    )
    return response_308(location=long_url)
