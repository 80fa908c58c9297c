"""
AES-CBC encryption of short text payloads.

A Crypter pairs one Key with one IV and uses that pair for every call, so
the same clear text always encrypts to the same ciphertext. Callers that need
unlinkable ciphertexts should use the module-level encrypt_to_hex(), which
draws a fresh IV per message and ships it in front of the ciphertext.

There is no integrity protection: CBC gives confidentiality only.
"""

import logging
from dataclasses import dataclass

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .codec import hex_to_bytes
from .errors import DecryptionError, ValidationError
from .iv import IV
from .key import Key

logger = logging.getLogger(__name__)

BLOCK_SIZE = 16  # bytes
IV_HEX_LEN = IV.LENGTH * 2


@dataclass(frozen=True)
class Crypter:
    """Encrypts and decrypts text with a fixed (Key, IV) pair."""

    key: Key
    iv: IV

    def __post_init__(self):
        if not isinstance(self.key, Key):
            raise ValidationError(f"crypter key must be a Key, got {type(self.key).__name__}")
        if not isinstance(self.iv, IV):
            raise ValidationError(f"crypter iv must be an IV, got {type(self.iv).__name__}")

    @classmethod
    def generate(cls) -> "Crypter":
        """Build a Crypter around a fresh random Key and IV."""
        return cls(Key.generate(), IV.generate())

    @classmethod
    def from_hex(cls, hex_key: str, hex_iv: str) -> "Crypter":
        """
        Build a Crypter from the hex exports of a key and an IV.

        Raises:
            ValidationError: If either hex string is rejected
        """
        return cls(Key.from_hex(hex_key), IV.from_hex(hex_iv))

    @classmethod
    def from_seed(cls, key: Key, seed: str) -> "Crypter":
        """Pair key with the IV derived from seed."""
        return cls(key, IV.from_seed(seed))

    def to_hex(self) -> tuple[str, str]:
        """Export (key_hex, iv_hex)."""
        return self.key.to_hex(), self.iv.to_hex()

    def _cipher(self) -> Cipher:
        return Cipher(algorithms.AES(self.key.material), modes.CBC(self.iv.bytes))

    def encrypt(self, data: bytes) -> bytes:
        """
        Encrypt raw bytes.

        The data is PKCS#7 padded, so the result is always at least one block,
        including for empty input.
        """
        padder = padding.PKCS7(BLOCK_SIZE * 8).padder()
        padded = padder.update(data) + padder.finalize()

        encryptor = self._cipher().encryptor()
        return encryptor.update(padded) + encryptor.finalize()

    def decrypt(self, ciphertext: bytes) -> bytes:
        """
        Decrypt raw bytes and strip the padding.

        Raises:
            DecryptionError: If the ciphertext is misaligned or badly padded
        """
        if not ciphertext or len(ciphertext) % BLOCK_SIZE:
            logger.warning(f"Rejected ciphertext of {len(ciphertext)} bytes")
            raise DecryptionError(
                f"ciphertext must be a positive multiple of {BLOCK_SIZE} bytes, got {len(ciphertext)}"
            )

        decryptor = self._cipher().decryptor()
        padded = decryptor.update(ciphertext) + decryptor.finalize()

        unpadder = padding.PKCS7(BLOCK_SIZE * 8).unpadder()
        try:
            return unpadder.update(padded) + unpadder.finalize()
        except ValueError as e:
            logger.warning("Ciphertext padding check failed")
            raise DecryptionError("invalid padding; wrong key, wrong iv or corrupted ciphertext") from e

    def encrypt_to_hex(self, clear_text: str) -> str:
        """
        Encrypt a string.

        Args:
            clear_text: Any string, including the empty string

        Returns:
            Lowercase hex of the ciphertext

        Raises:
            ValidationError: If clear_text contains lone surrogates, which
                have no UTF-8 encoding and could not be decrypted back
        """
        try:
            data = clear_text.encode("utf-8")
        except UnicodeEncodeError as e:
            raise ValidationError(f"clear text is not encodable as UTF-8: {e.reason}") from e
        return self.encrypt(data).hex()

    def decrypt_from_hex(self, hex_cipher: str) -> str:
        """
        Decrypt the output of encrypt_to_hex().

        Raises:
            DecryptionError: If hex_cipher is not hex, is not block aligned,
                fails the padding check or does not decode as UTF-8
        """
        try:
            ciphertext = hex_to_bytes(hex_cipher)
        except ValueError as e:
            logger.warning("Rejected malformed ciphertext hex")
            raise DecryptionError(f"invalid ciphertext hex: {e}") from e

        data = self.decrypt(ciphertext)
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            logger.warning("Decrypted data is not valid UTF-8")
            raise DecryptionError("decrypted data is not valid UTF-8") from e


def encrypt_to_hex(clear_text: str, key: Key) -> str:
    """
    Encrypt a string under key with a fresh random IV.

    Two calls with the same text give different results.

    Returns:
        iv_hex followed by the ciphertext hex
    """
    crypter = Crypter(key, IV.generate())
    return crypter.iv.to_hex() + crypter.encrypt_to_hex(clear_text)


def decrypt_from_hex(hex_with_iv: str, key: Key) -> str:
    """
    Decrypt the output of encrypt_to_hex().

    Raises:
        DecryptionError: If the IV prefix is missing or malformed, or the
            ciphertext part is rejected by Crypter.decrypt_from_hex()
    """
    if not isinstance(hex_with_iv, str) or len(hex_with_iv) <= IV_HEX_LEN:
        raise DecryptionError("ciphertext is too short to carry an iv")

    try:
        iv = IV.from_hex(hex_with_iv[:IV_HEX_LEN].lower())
    except ValidationError as e:
        raise DecryptionError(f"invalid iv prefix: {e}") from e

    return Crypter(key, iv).decrypt_from_hex(hex_with_iv[IV_HEX_LEN:])
