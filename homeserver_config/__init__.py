"""Homeserver and identity server connection configuration."""

from .certificate_pin import CertificatePin
from .connection_config import ConnectionConfig
from .credentials import Credentials
from .exceptions import DecodeError, HomeserverConfigError, InvalidConfigurationError
from .fingerprint import Fingerprint, HashType

__all__ = [
    "CertificatePin",
    "ConnectionConfig",
    "Credentials",
    "DecodeError",
    "Fingerprint",
    "HashType",
    "HomeserverConfigError",
    "InvalidConfigurationError",
]
