"""
Exceptions raised by hexcrypt.

Both derive from ValueError so callers that already guard bad input with
``except ValueError`` keep working.
"""


class HexcryptError(ValueError):
    """Base class for all hexcrypt errors."""


class ValidationError(HexcryptError):
    """Raised when a Key, IV or Crypter cannot be constructed from its input."""


class DecryptionError(HexcryptError):
    """Raised when ciphertext cannot be turned back into clear text."""
