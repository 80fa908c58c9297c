"""
hexcrypt: AES-128-CBC text encryption with hex serialization.

Handles:
- Key generation and hex import/export
- IV generation, hex import/export and derivation from a seed string
- Encryption/decryption of text to and from hex (Crypter)
- SHA-256 hex digests and UUID v4 helpers
"""

from .errors import HexcryptError, ValidationError, DecryptionError
from .key import Key
from .iv import IV
from .crypter import Crypter, encrypt_to_hex, decrypt_from_hex
from .ids import sha256_hex, random_uuid, is_uuid

__version__ = "1.0.0"

__all__ = [
    "Key",
    "IV",
    "Crypter",
    "encrypt_to_hex",
    "decrypt_from_hex",
    "sha256_hex",
    "random_uuid",
    "is_uuid",
    "HexcryptError",
    "ValidationError",
    "DecryptionError",
]
