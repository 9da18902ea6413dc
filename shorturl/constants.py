import string
from enum import StrEnum


class Defaults:
    """Default values for the startup configuration."""

    STORAGE_LOCATION = 'redis://localhost:6379/0'
    LISTEN_ADDR = '127.0.0.1:8080'
    SHORT_ID_LENGTH = 6
    MAX_ATTEMPTS = 5  # total insert attempts per shorten() call, first one included
    LOG_LEVEL = 'INFO'


# 26 uppercase + 26 lowercase + 10 digits + '-' + '_' = 64 URL-safe symbols
SHORT_ID_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits + '-_'

# Longest URL accepted by shorten()
MAX_URL_LENGTH = 2048

# Version of the Redis key layout written by MappingRedisDAO.initialize()
SCHEMA_VERSION = '1'


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        LOG_LEVEL = 'LOG_LEVEL'

    class Shortener(StrEnum):
        STORAGE_LOCATION = 'STORAGE_LOCATION'  # e.g. redis://localhost:6379/0
        LISTEN_ADDR = 'LISTEN_ADDR'  # e.g. 127.0.0.1:8080
        SHORT_ID_LENGTH = 'SHORT_ID_LENGTH'
        MAX_ATTEMPTS = 'MAX_ATTEMPTS'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'


# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
