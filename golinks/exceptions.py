class GoLinksError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:golinks_error'


class InvalidURLError(GoLinksError, ValueError):
    """Raised when a destination URL can't be coerced into an absolute URL."""

    error_code = 'app:invalid_url_error'


class ConfigurationError(GoLinksError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'


class InfrastructureError(GoLinksError):
    """Base exception for all infrastructure (AWS) errors."""

    error_code = 'infra:infrastructure_error'


class AppConfigError(InfrastructureError):
    """Raised when AppConfig can't be reached or responds with erroneous data."""

    error_code = 'infra:appconfig_error'
