"""
Initialization vectors for AES-CBC.

An IV is always exactly one cipher block (16 bytes). Besides random
generation and hex import, an IV can be derived from a seed string so that
the same human-chosen name (a session id, say) always gives the same IV.
"""

import os
import hashlib
import logging
from dataclasses import dataclass

from .codec import hex_to_bytes
from .errors import ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IV:
    """Validated 16-byte initialization vector."""

    LENGTH = 16  # bytes, one AES block

    bytes: bytes

    def __post_init__(self):
        if not isinstance(self.bytes, bytes):
            raise ValidationError("iv must be bytes")
        if len(self.bytes) != self.LENGTH:
            raise ValidationError(f"iv must be {self.LENGTH} bytes, got {len(self.bytes)}")

    @classmethod
    def generate(cls) -> "IV":
        """Generate 16 random bytes from os.urandom()."""
        return cls(os.urandom(cls.LENGTH))

    @classmethod
    def from_hex(cls, hex_iv: str) -> "IV":
        """
        Import an IV from its hex export.

        Args:
            hex_iv: 32 lowercase hex characters

        Raises:
            ValidationError: If hex_iv is malformed or not 16 bytes long
        """
        try:
            data = hex_to_bytes(hex_iv, lowercase=True)
        except ValueError as e:
            raise ValidationError(f"invalid iv hex: {e}") from e
        return cls(data)

    @classmethod
    def from_seed(cls, seed: str) -> "IV":
        """
        Derive an IV deterministically from a seed string.

        The seed is UTF-8 encoded and hashed with SHA-256; the first 16 bytes
        of the digest become the IV. Identical seeds give identical IVs.

        Args:
            seed: Any non-empty string

        Raises:
            ValidationError: If seed is empty, not a string or not encodable
                as UTF-8 (a lone surrogate, for instance)
        """
        if not isinstance(seed, str):
            raise ValidationError("iv seed must be a string")
        if not seed:
            raise ValidationError("iv seed must not be empty")

        try:
            data = seed.encode("utf-8")
        except UnicodeEncodeError as e:
            raise ValidationError(f"iv seed is not encodable as UTF-8: {e.reason}") from e

        digest = hashlib.sha256(data).digest()
        logger.debug("Derived IV from seed")
        return cls(digest[:cls.LENGTH])

    # Older name for from_seed
    from_string = from_seed

    def to_hex(self) -> str:
        """Export the IV as 32 lowercase hex characters."""
        return self.bytes.hex()
