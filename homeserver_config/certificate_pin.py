"""Certificate pins consumed by the transport layer."""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from homeserver_config.constants import HOSTNAME_JSON_KEY, PUBLIC_HASH_KEY_JSON_KEY
from homeserver_config.exceptions import DecodeError


logger = logging.getLogger(__name__)


class CertificatePin(BaseModel):
    """Pin of a public key hash to a hostname.

    The hash uses the okhttp ``CertificatePinner`` notation, e.g.
    ``sha256/AAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAA=``. Its value is not
    inspected here.
    """

    model_config = ConfigDict(frozen=True)

    hostname: str
    public_key_hash: str

    def to_json(self) -> dict[str, str]:
        """Convert the pin into its JSON representation.

        Returns:
            dict[str, str]: ``{"hostname": ..., "publicHashKey": ...}``
        """
        return {
            HOSTNAME_JSON_KEY: self.hostname,
            PUBLIC_HASH_KEY_JSON_KEY: self.public_key_hash,
        }

    @classmethod
    def from_json(cls, obj: Mapping[str, Any]) -> "CertificatePin":
        """Build a pin from its JSON representation.

        Args:
            obj: Decoded JSON object

        Returns:
            CertificatePin: The decoded pin

        Raises:
            DecodeError: If a key is missing or is not a string
        """
        try:
            return cls(
                hostname=obj[HOSTNAME_JSON_KEY],
                public_key_hash=obj[PUBLIC_HASH_KEY_JSON_KEY],
            )
        except KeyError as e:
            logger.error("Certificate pin is missing key: %s", e)
            raise DecodeError(f"Certificate pin is missing key {e}") from e
        except (TypeError, ValidationError) as e:
            logger.error("Failed to parse certificate pin: %s", e)
            raise DecodeError("Invalid certificate pin format") from e
