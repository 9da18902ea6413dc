"""Utility functions for application configuration management.

The service is configured once at startup with an explicit, immutable
ShortenerConfig which is handed to the mapping store and the shortening
service. Nothing reads configuration from ambient globals afterwards.

Configuration sources, lowest precedence first:
    1. Built-in defaults (see shorturl.constants.Defaults).
    2. Environment variables (see shorturl.constants.ENV.Shortener).
    3. The `shortener` section of an **AWS AppConfig** JSON document, when
       the AppConfig identifiers are present in the environment.

The AppConfig document is fetched once per process for a given set of
identifiers, so a warm Lambda container makes no AppConfig calls after the
first invocation.

The AppConfig document follows this structure:

    {
        "build": 12,
        "shortener": {
            "storage_location": "redis://redis.internal:6379/0",
            "listen_addr": "sho.rt",
            "id_length": 6,
            "max_attempts": 5
        }
    }

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`), defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return application prefix for DAOs, or None if `APP_NAME` is not set.

    load_config() -> ShortenerConfig
        Build the startup configuration from the environment and, when
        configured, AWS AppConfig.

Example:
    Typical usage inside a Lambda handler:

        >>> from shorturl.utils.config import load_config
        >>> config = load_config()
        >>> config.storage_location
        'redis://localhost:6379/0'
"""

import os
import functools
import json
import logging
from dataclasses import dataclass, fields, replace

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from shorturl.constants import Defaults, ENV
from shorturl.exceptions import BadConfigurationError, ConfigurationError
from shorturl.types import AppConfigDocument
from shorturl.utils.helpers import require_environment


logger = logging.getLogger(__name__)


def app_env() -> str:
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    return os.environ.get(ENV.App.APP_NAME)


def app_prefix() -> str | None:
    """Return application prefix for DAOs

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'shorturl'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'shorturl:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def _positive_int(name: str, value: int | str) -> int:
    try:
        iv = int(value)
    except (TypeError, ValueError):
        raise BadConfigurationError(f'{name} must be an integer (given value: {value!r}).') from None
    if iv < 1:
        raise BadConfigurationError(f'{name} must be >= 1 (given value: {iv}).')
    return iv


@dataclass(frozen=True)
class ShortenerConfig:
    """Startup configuration shared by the mapping store and the shortening service.

    Attributes:
        storage_location (str):
            Redis URL of the mapping store.
        listen_addr (str):
            host[:port] the service is reachable at; used to build short URLs
            when the request doesn't carry a domain.
        id_length (int):
            Number of characters in generated short ids.
        max_attempts (int):
            Total candidate ids tried per shorten() call.
        prefix (str | None):
            Namespace prefix for store keys, e.g. 'shorturl:dev'.
    """

    storage_location: str = Defaults.STORAGE_LOCATION
    listen_addr: str = Defaults.LISTEN_ADDR
    id_length: int = Defaults.SHORT_ID_LENGTH
    max_attempts: int = Defaults.MAX_ATTEMPTS
    prefix: str | None = None

    def __post_init__(self):
        if not self.storage_location:
            raise BadConfigurationError('storage_location must be a non-empty string.')
        if not self.listen_addr:
            raise BadConfigurationError('listen_addr must be a non-empty string.')
        # frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, 'id_length', _positive_int('id_length', self.id_length))
        object.__setattr__(self, 'max_attempts', _positive_int('max_attempts', self.max_attempts))

    @classmethod
    def from_environment(cls) -> 'ShortenerConfig':
        """Build configuration from environment variables, falling back to defaults"""
        return cls(
            storage_location=os.environ.get(ENV.Shortener.STORAGE_LOCATION, Defaults.STORAGE_LOCATION),
            listen_addr=os.environ.get(ENV.Shortener.LISTEN_ADDR, Defaults.LISTEN_ADDR),
            id_length=os.environ.get(ENV.Shortener.SHORT_ID_LENGTH, Defaults.SHORT_ID_LENGTH),
            max_attempts=os.environ.get(ENV.Shortener.MAX_ATTEMPTS, Defaults.MAX_ATTEMPTS),
            prefix=app_prefix(),
        )

    def overlay(self, section: dict) -> 'ShortenerConfig':
        """Return a copy with known keys of `section` taking precedence

        Raises:
            BadConfigurationError: If `section` holds unknown keys or invalid values.
        """
        known = {f.name for f in fields(self)}
        unknown = set(section) - known
        if unknown:
            raise BadConfigurationError(f'Unknown configuration keys: {", ".join(sorted(unknown))}')
        return replace(self, **section)


@functools.lru_cache(maxsize=1)
def _fetch_appconfig_document(app_id: str, env_id: str, profile_id: str) -> AppConfigDocument:
    """Fetch the latest configuration document from AWS AppConfig

    Cached per process: a warm Lambda container starts one AppConfig session
    and reuses the document for every later invocation. Failures are not cached.

    Raises:
        ConfigurationError:
            If AppConfig can't be reached.
        BadConfigurationError:
            If the document is not valid JSON.
    """
    logger.debug('Trying to load AppConfig from AWS AppConfig.')

    try:
        appconfig = boto3.client('appconfigdata')
        session_token = appconfig.start_configuration_session(
            ApplicationIdentifier=app_id,
            EnvironmentIdentifier=env_id,
            ConfigurationProfileIdentifier=profile_id,
        )['InitialConfigurationToken']
        response = appconfig.get_latest_configuration(ConfigurationToken=session_token)
        content = response['Configuration'].read()
    except (BotoCoreError, ClientError) as e:
        raise ConfigurationError(f"Can't load configuration from AWS AppConfig: {e}") from e

    try:
        document = json.loads(content.decode('utf-8'))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise BadConfigurationError('AWS AppConfig document is not valid JSON.') from e

    logger.debug('Loaded AppConfig from AWS AppConfig.', extra={'build': document.get('build')})
    return document


@require_environment(ENV.AppConfig.APP_ID, ENV.AppConfig.ENV_ID, ENV.AppConfig.PROFILE_ID)
def _load_appconfig_document() -> AppConfigDocument:
    """Return the AppConfig document for the identifiers in the environment

    Environment variables required:
        APPCONFIG_APP_ID       – AppConfig Application ID
        APPCONFIG_ENV_ID       – AppConfig Environment ID
        APPCONFIG_PROFILE_ID   – AppConfig Configuration Profile ID

    Raises:
        MissingEnvironmentVariableError:
            If any AppConfig identifier is missing.
    """
    return _fetch_appconfig_document(
        os.environ[ENV.AppConfig.APP_ID],
        os.environ[ENV.AppConfig.ENV_ID],
        os.environ[ENV.AppConfig.PROFILE_ID],
    )


def load_config() -> ShortenerConfig:
    """Build the startup configuration

    Uses AWS AppConfig when any of the AppConfig identifiers is set in the
    environment; a partially configured AppConfig is an error rather than a
    silent fallback.

    Returns:
        ShortenerConfig: the validated configuration.

    Raises:
        ConfigurationError (or a subclass):
            If the configuration is incomplete, invalid, or AppConfig fails.

    Example:
        >>> os.environ['STORAGE_LOCATION'] = 'redis://redis.test:6379/1'
        >>> load_config().storage_location
        'redis://redis.test:6379/1'
    """
    config = ShortenerConfig.from_environment()

    if any(os.environ.get(name) for name in ENV.AppConfig):
        document = _load_appconfig_document()
        config = config.overlay(document.get('shortener', {}))

    logger.debug(
        'Loaded configuration.',
        extra={'listenAddr': config.listen_addr, 'idLength': config.id_length, 'maxAttempts': config.max_attempts},
    )
    return config
