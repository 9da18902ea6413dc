from shorturl.utils.config import ShortenerConfig, app_env, app_name, app_prefix, load_config
from shorturl.utils.helpers import base_url, get_short_url, require_environment, guarantee_500_response
from shorturl.utils.shortener import generate_short_id, validate_url
from shorturl.utils.logging import initialize_logging


__all__ = [
    'ShortenerConfig',
    'generate_short_id',
    'validate_url',
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'base_url',
    'get_short_url',
    'require_environment',
    'guarantee_500_response',
    'initialize_logging',
]
