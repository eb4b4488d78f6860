class ShortClientError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:shortclient_error'


class ValidationError(ShortClientError):
    """Raised when a candidate string is not a syntactically valid absolute URL."""

    error_code = 'input:validation_error'


class RequestFailure(ShortClientError):
    """Raised when the remote shorten endpoint cannot produce a usable response.

    Covers unreachable service, non-2xx status and undecodable payloads.
    """

    error_code = 'net:request_failure'

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class PersistenceFailure(ShortClientError):
    """Base exception for durable history storage failures."""

    error_code = 'storage:persistence_failure'


class ConfigurationError(ShortClientError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required setting (usually an environment variable) is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the client is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
