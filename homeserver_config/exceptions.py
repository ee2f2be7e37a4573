class HomeserverConfigError(Exception):
    """Base exception for homeserver connection configuration errors."""


class InvalidConfigurationError(HomeserverConfigError):
    """Exception raised when a connection configuration fails validation."""


class DecodeError(HomeserverConfigError):
    """Exception raised when a JSON document cannot be decoded."""
