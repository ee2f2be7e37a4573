"""Connection parameters for a homeserver and its identity server."""

import json
import logging
from collections.abc import Iterable, Mapping
from typing import Any
from urllib.parse import urlsplit

from homeserver_config.certificate_pin import CertificatePin
from homeserver_config.constants import (
    CERTIFICATE_PINS_JSON_KEY,
    CREDENTIALS_JSON_KEY,
    HOME_SERVER_URL_JSON_KEY,
    IDENTITY_SERVER_URL_JSON_KEY,
    SUPPORTED_SCHEMES,
)
from homeserver_config.credentials import Credentials
from homeserver_config.exceptions import DecodeError, InvalidConfigurationError
from homeserver_config.fingerprint import Fingerprint


logger = logging.getLogger(__name__)


def _has_supported_scheme(uri: Any) -> bool:
    """Check the literal scheme of the URI, case-sensitive."""
    if not isinstance(uri, str):
        return False
    scheme, separator, _ = uri.partition(":")
    return bool(separator) and scheme in SUPPORTED_SCHEMES


def _strip_trailing_slash(uri: str, kind: str) -> str:
    """Remove exactly one trailing slash and check the result still parses."""
    if not uri.endswith("/"):
        return uri

    stripped = uri[:-1]
    try:
        urlsplit(stripped)
    except ValueError as e:
        logger.error("Failed to parse %s URI after normalization: %s", kind, uri)
        raise InvalidConfigurationError(f"Invalid {kind} URI: {uri}") from e

    logger.debug("Removed trailing slash from %s URI %s", kind, uri)
    return stripped


class ConnectionConfig:
    """How to connect to a specific homeserver, may include credentials to use.

    The configuration is a mutable value holder. URIs are validated and
    normalized once, at construction; the setters store values as given.
    """

    def __init__(
        self,
        server_uri: str,
        identity_uri: str | None = None,
        credentials: Credentials | None = None,
        certificate_pins: Iterable[CertificatePin] | None = None,
    ):
        """Initialize the connection configuration.

        Args:
            server_uri: URI used to connect to the homeserver
            identity_uri: URI of the identity server, defaults to the homeserver URI
            credentials: Credentials to use, if needed
            certificate_pins: Pins handed to the transport layer, copied in order

        Raises:
            InvalidConfigurationError: If a URI is missing, has an unsupported
                scheme or cannot be parsed
        """
        if not _has_supported_scheme(server_uri):
            logger.error("Invalid home server URI: %s", server_uri)
            raise InvalidConfigurationError(f"Invalid home server URI: {server_uri}")

        # Kept for compatibility: the home server scheme is checked here, so
        # any identity server scheme is accepted.
        if identity_uri is not None and not _has_supported_scheme(server_uri):
            logger.error("Invalid identity server URI: %s", identity_uri)
            raise InvalidConfigurationError(
                f"Invalid identity server URI: {identity_uri}"
            )
        if identity_uri is not None and not isinstance(identity_uri, str):
            logger.error("Identity server URI is not a string: %r", identity_uri)
            raise InvalidConfigurationError(
                f"Invalid identity server URI: {identity_uri!r}"
            )

        self._server_uri = _strip_trailing_slash(server_uri, "home server")
        self._identity_uri = (
            _strip_trailing_slash(identity_uri, "identity server")
            if identity_uri is not None
            else None
        )
        self._credentials = credentials
        self._certificate_pins: list[CertificatePin] = list(certificate_pins or [])

    @classmethod
    def from_server_uri(cls, server_uri: str) -> "ConnectionConfig":
        """Create a configuration with only a homeserver URI."""
        return cls.with_credentials(server_uri, None)

    @classmethod
    def with_credentials(
        cls, server_uri: str, credentials: Credentials | None
    ) -> "ConnectionConfig":
        """Create a configuration for a homeserver and optional credentials."""
        return cls(server_uri, None, credentials, [])

    @property
    def server_uri(self) -> str:
        return self._server_uri

    @server_uri.setter
    def server_uri(self, uri: str) -> None:
        self._server_uri = uri

    @property
    def identity_uri(self) -> str:
        """Identity server URI, falling back to the homeserver URI when unset."""
        return self._server_uri if self._identity_uri is None else self._identity_uri

    @identity_uri.setter
    def identity_uri(self, uri: str | None) -> None:
        self._identity_uri = uri

    @property
    def credentials(self) -> Credentials | None:
        return self._credentials

    @credentials.setter
    def credentials(self, credentials: Credentials | None) -> None:
        self._credentials = credentials

    @property
    def certificate_pins(self) -> list[CertificatePin]:
        """Live list of pins; changes made through it apply to this config."""
        return self._certificate_pins

    # API compatibility with the older pinning interface
    def should_pin(self) -> bool:
        return False

    # API compatibility with the older pinning interface
    def get_allowed_fingerprints(self) -> list[Fingerprint]:
        return []

    def __repr__(self) -> str:
        return (
            f"ConnectionConfig(server_uri={self._server_uri!r}, "
            f"identity_uri={self._identity_uri!r}, "
            f"credentials={self._credentials!r}, "
            f"certificate_pins={self._certificate_pins!r})"
        )

    def to_json(self) -> dict[str, Any]:
        """Convert the configuration into its JSON representation.

        The identity server URL is always written with its effective value.

        Returns:
            dict[str, Any]: JSON object ready for ``json.dumps``
        """
        data: dict[str, Any] = {
            HOME_SERVER_URL_JSON_KEY: str(self._server_uri),
            IDENTITY_SERVER_URL_JSON_KEY: str(self.identity_uri),
        }
        if self._credentials is not None:
            data[CREDENTIALS_JSON_KEY] = self._credentials.to_json()
        data[CERTIFICATE_PINS_JSON_KEY] = [
            pin.to_json() for pin in self._certificate_pins
        ]
        return data

    def to_json_string(self, **kwargs: Any) -> str:
        """Serialize the configuration to JSON text.

        Args:
            **kwargs: Passed through to ``json.dumps``
        """
        return json.dumps(self.to_json(), **kwargs)

    @classmethod
    def from_json(cls, obj: Mapping[str, Any]) -> "ConnectionConfig":
        """Build a configuration from its JSON representation.

        Args:
            obj: Decoded JSON object

        Returns:
            ConnectionConfig: The decoded configuration

        Raises:
            DecodeError: If a required field is missing or has the wrong type
            InvalidConfigurationError: If the decoded values fail validation
        """
        if not isinstance(obj, Mapping):
            logger.error("Connection config is not a JSON object: %r", obj)
            raise DecodeError("Connection config must be a JSON object")

        try:
            server_uri = obj[HOME_SERVER_URL_JSON_KEY]
        except KeyError as e:
            logger.error("Connection config is missing key: %s", e)
            raise DecodeError(f"Connection config is missing key {e}") from e
        if not isinstance(server_uri, str):
            raise DecodeError(f"'{HOME_SERVER_URL_JSON_KEY}' must be a string")

        identity_uri = obj.get(IDENTITY_SERVER_URL_JSON_KEY)
        if identity_uri is not None and not isinstance(identity_uri, str):
            raise DecodeError(f"'{IDENTITY_SERVER_URL_JSON_KEY}' must be a string")

        credentials_obj = obj.get(CREDENTIALS_JSON_KEY)
        if credentials_obj is not None and not isinstance(credentials_obj, Mapping):
            raise DecodeError(f"'{CREDENTIALS_JSON_KEY}' must be a JSON object")
        credentials = (
            Credentials.from_json(credentials_obj)
            if credentials_obj is not None
            else None
        )

        pins_obj = obj.get(CERTIFICATE_PINS_JSON_KEY)
        if pins_obj is None:
            pins_obj = []
        if not isinstance(pins_obj, list):
            raise DecodeError(f"'{CERTIFICATE_PINS_JSON_KEY}' must be a JSON array")
        certificate_pins = [CertificatePin.from_json(pin) for pin in pins_obj]

        return cls(server_uri, identity_uri, credentials, certificate_pins)

    @classmethod
    def from_json_string(cls, text: str | bytes) -> "ConnectionConfig":
        """Parse JSON text into a configuration.

        Raises:
            DecodeError: If the text is not valid JSON or misses required fields
            InvalidConfigurationError: If the decoded values fail validation
        """
        try:
            obj = json.loads(text)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error("Connection config is not valid JSON: %s", e)
            raise DecodeError("Connection config is not valid JSON") from e
        return cls.from_json(obj)
