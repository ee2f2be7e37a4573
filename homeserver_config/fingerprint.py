"""Legacy certificate fingerprints.

Only kept so that code written against the older pinning API keeps working,
see ``ConnectionConfig.get_allowed_fingerprints``.
"""

import hashlib
from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class HashType(StrEnum):
    SHA1 = "sha1"
    SHA256 = "sha256"


class Fingerprint(BaseModel):
    """Digest of a DER encoded certificate."""

    model_config = ConfigDict(frozen=True)

    digest: bytes
    hash_type: HashType = HashType.SHA256

    def matches_cert(self, der: bytes) -> bool:
        """Check whether the certificate hashes to this fingerprint.

        Args:
            der: DER encoded certificate

        Returns:
            bool: True if the digests are equal
        """
        return hashlib.new(self.hash_type.value, der).digest() == self.digest
