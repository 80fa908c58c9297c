"""
AES-128-CBC key material.

A Key is only built through validated paths: random generation or hex import.
Anything that does not match the fixed AES-CBC / 128-bit / encrypt+decrypt
profile is rejected at construction time.
"""

import os
import logging
from dataclasses import dataclass, field

from .codec import hex_to_bytes
from .errors import ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Key:
    """Validated wrapper around raw AES-128 key material."""

    ALGORITHM = "AES-CBC"
    LENGTH = 128  # bits
    USAGES = ("encrypt", "decrypt")

    material: bytes = field(repr=False)
    algorithm: str = ALGORITHM
    length: int = LENGTH
    usages: tuple[str, ...] = USAGES

    def __post_init__(self):
        """Reject anything outside the fixed key profile."""
        if not isinstance(self.material, bytes):
            raise ValidationError("key material must be bytes")
        if self.algorithm != self.ALGORITHM:
            raise ValidationError(f"key algorithm must be {self.ALGORITHM}, got {self.algorithm!r}")
        if self.length != self.LENGTH:
            raise ValidationError(f"key length must be {self.LENGTH} bits, got {self.length}")
        if not isinstance(self.usages, (tuple, list)) or tuple(self.usages) != self.USAGES:
            raise ValidationError(f"key usages must be {self.USAGES}, got {self.usages!r}")
        if len(self.material) * 8 != self.LENGTH:
            raise ValidationError(
                f"key must be {self.LENGTH // 8} bytes, got {len(self.material)}"
            )

    @classmethod
    def generate(cls) -> "Key":
        """
        Generate a fresh random key.

        Returns:
            A Key holding 16 bytes from os.urandom()
        """
        logger.debug("Generating new AES-128 key")
        return cls(os.urandom(cls.LENGTH // 8))

    @classmethod
    def from_hex(cls, hex_key: str) -> "Key":
        """
        Import a key from its hex export.

        Args:
            hex_key: 32 lowercase hex characters

        Returns:
            The imported Key

        Raises:
            ValidationError: If hex_key is malformed or not 16 bytes long
        """
        try:
            material = hex_to_bytes(hex_key, lowercase=True)
        except ValueError as e:
            raise ValidationError(f"invalid key hex: {e}") from e
        return cls(material)

    def to_hex(self) -> str:
        """Export the key material as 32 lowercase hex characters."""
        return self.material.hex()
