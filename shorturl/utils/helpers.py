"""Helper utilities for AWS lambda functions.

Functions:
    base_url() -> str
        Extract correct public base URL from API Gateway event
    get_short_url() -> str
        Get string representation of short URL for a given short id
    require_environment(*names: str) -> Callable
        Decorator: Ensure required environment variables are present
    guarantee_500_response(handler) -> Callable
        Decorator: Turn unexpected handler exceptions into HTTP 500 responses

Example:
    Typical usage inside a Lambda handler:

        >>> from shorturl.utils.helpers import base_url
        >>> event = {
        ...     "requestContext": {
        ...         "domainName": "abc123.execute-api.us-east-1.amazonaws.com",
        ...         "stage": "Prod"
        ...     }
        ... }
        >>> base_url(event)
        'https://abc123.execute-api.us-east-1.amazonaws.com/Prod'

        >>> base_url({}, listen_addr='127.0.0.1:8080')
        'http://127.0.0.1:8080'
"""

import os
import functools
import logging
from collections.abc import Callable

from shorturl.constants import Defaults, UNKNOWN_INTERNAL_SERVER_ERROR
from shorturl.exceptions import MissingEnvironmentVariableError
from shorturl.types import LambdaEvent, LambdaContext, LambdaResponse
from shorturl.utils.responses import response_500


logger = logging.getLogger(__name__)


def base_url(event: LambdaEvent, listen_addr: str = Defaults.LISTEN_ADDR) -> str:
    """Extract public base URL from API Gateway event

    Works seamlessly with both custom and default AWS API Gateway domains.
    If a custom domain is configured, the stage name is omitted.
    If using the default AWS execute-api domain, the stage name is included.
    Without a domain (local invocation, tests), the listen address is used.

    Args:
        event (dict): API Gateway event object passed to Lambda handler
        listen_addr (str): host:port the service listens on locally

    Returns:
        str: Base URL, e.g.:
             - "https://sho.rt"
             - "https://abc123.execute-api.us-east-1.amazonaws.com/Prod"
             - "http://127.0.0.1:8080"
    """
    request_context = event.get('requestContext', {})
    domain = request_context.get('domainName', '')
    stage = request_context.get('stage', '')

    if domain and 'execute-api' not in domain:
        return f'https://{domain}'
    elif domain:
        return f'https://{domain}/{stage}'
    else:
        return f'http://{listen_addr}'


def get_short_url(short_id: str, event: LambdaEvent, listen_addr: str = Defaults.LISTEN_ADDR) -> str:
    """Get string representation of shortened URL

    Args:
        short_id (str): short id
        event (dict): API Gateway event object passed to Lambda handler
        listen_addr (str): host:port fallback when the event has no domain

    Returns:
        str: short url string representation
    """
    return f'{base_url(event, listen_addr).rstrip("/")}/{short_id}'


def require_environment(*names: str) -> Callable:
    """Decorator ensuring required environment variables are present.

    Args:
        *names (str):
            Names of required environment variables.

    Raises:
        MissingEnvironmentVariableError:
            If any required environment variable is missing or empty.

    Example:
        >>> @require_environment('APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID')
        ... def my_function():
        ...     pass
        >>> my_function()
        MissingEnvironmentVariableError: Missing required environment variables: 'APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID'
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            missing = [name for name in names if not os.environ.get(name)]
            if missing:
                missing_list = ', '.join(f"'{name}'" for name in missing)
                raise MissingEnvironmentVariableError(f'Missing required environment variables: {missing_list}')
            return func(*args, **kwargs)

        return wrapper

    return decorator


def guarantee_500_response(handler: Callable[[LambdaEvent, LambdaContext], LambdaResponse]) -> Callable:
    """Decorator: respond with HTTP 500 instead of crashing on unexpected exceptions

    The exception and its traceback are logged before responding.
    """

    @functools.wraps(handler)
    def wrapper(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
        try:
            return handler(event, context)
        except Exception as e:
            logger.exception(
                'Unhandled exception in Lambda handler. Responding with 500.',
                extra={'event': UNKNOWN_INTERNAL_SERVER_ERROR},
            )
            error_code = getattr(e, 'error_code', UNKNOWN_INTERNAL_SERVER_ERROR)
            return response_500(error_code=error_code)

    return wrapper
