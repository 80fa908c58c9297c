"""
Hashing and unique-identifier helpers.

Stateless wrappers around hashlib and uuid; none of them keep state between
calls.
"""

import re
import uuid
import hashlib

_UUID = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)


def sha256_hex(s: str) -> str:
    """
    Return the lowercase hex SHA-256 digest of s encoded as UTF-8.

    Lone surrogates are encoded with surrogatepass so every string hashes.
    """
    return hashlib.sha256(s.encode("utf-8", "surrogatepass")).hexdigest()


def random_uuid() -> str:
    """Return a random version 4 UUID in canonical 8-4-4-4-12 form."""
    return str(uuid.uuid4())


def is_uuid(s) -> bool:
    """
    Check whether s looks like a UUID.

    Only the textual grammar is checked: 36 characters, hyphens at positions
    8, 13, 18 and 23, hex digits everywhere else. Version and variant
    nibbles are not inspected. Never raises.
    """
    return isinstance(s, str) and _UUID.fullmatch(s) is not None
