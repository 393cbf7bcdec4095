"""Error taxonomy for the generation pipeline.

Per-endpoint errors (FetchError, EmissionError, endpoint-level
ValidationError) are recorded and never abort sibling endpoints.
Run-level errors (FormatError, ConfigError, PersistenceError) stop the run.
"""


class ApiTypesError(Exception):
    """Base class for all api-types-gen errors."""


class ValidationError(ApiTypesError):
    """Raised when an endpoint name, URL or run option is invalid."""


class FormatError(ValidationError):
    """Raised when the requested output format is not supported."""


class ConfigError(ApiTypesError):
    """Raised when a config file is missing or cannot be parsed."""


class FetchError(ApiTypesError):
    """Raised when fetching sample data for one endpoint fails."""


class EmissionError(ApiTypesError):
    """Raised when the inference engine cannot generate types for a sample."""


class PersistenceError(ApiTypesError):
    """Raised when generated files cannot be written."""
