class ShortURLError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:shorturl_error'


class InvalidInputError(ShortURLError):
    """Raised when a URL submitted for shortening is empty or malformed."""

    error_code = 'app:invalid_input_error'


class IdSpaceExhaustedError(ShortURLError):
    """Raised when every candidate short id collided with an existing mapping.

    Indicates the id length should be increased or the store is near saturation.
    """

    error_code = 'app:id_space_exhausted_error'


class ConfigurationError(ShortURLError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
