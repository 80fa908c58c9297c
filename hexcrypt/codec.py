"""
Hex decoding helpers.

``bytes.fromhex`` tolerates whitespace between byte pairs, which would break
the hex round trip of keys and IVs, so input is matched against a strict
pattern first.
"""

import re

_HEX = re.compile(r"(?:[0-9a-fA-F]{2})*")
_LOWER_HEX = re.compile(r"(?:[0-9a-f]{2})*")


def is_hex(text: str, lowercase: bool = False) -> bool:
    """Check that text is an even-length run of hex digits."""
    if not isinstance(text, str):
        return False
    pattern = _LOWER_HEX if lowercase else _HEX
    return pattern.fullmatch(text) is not None


def hex_to_bytes(text: str, lowercase: bool = False) -> bytes:
    """
    Decode a hex string.

    Args:
        text: Hex digits, two per byte, no separators
        lowercase: Reject upper-case digits

    Returns:
        The decoded bytes

    Raises:
        ValueError: If text is not hex in the requested form
    """
    if not is_hex(text, lowercase):
        raise ValueError(f"not a {'lowercase ' if lowercase else ''}hex string")
    return bytes.fromhex(text)
