"""
Configuration for the hexcrypt command-line tool.
"""

import os
import logging
from dataclasses import dataclass, field


def _env(name: str, default: str = ""):
    return field(default_factory=lambda: os.getenv(name, default))


@dataclass
class Config:
    """Application configuration, read from the environment."""

    # Key material (32 lowercase hex characters)
    KEY_HEX: str = _env("HEXCRYPT_KEY")

    # IV: either explicit hex or a seed to derive it from; hex wins if both are set
    IV_HEX: str = _env("HEXCRYPT_IV")
    IV_SEED: str = _env("HEXCRYPT_IV_SEED")

    # Logging
    LOG_LEVEL: str = _env("HEXCRYPT_LOG_LEVEL", "WARNING")

    @property
    def has_key(self) -> bool:
        """Check if a key has been configured."""
        return bool(self.KEY_HEX)

    @property
    def has_iv(self) -> bool:
        """Check if an IV or IV seed has been configured."""
        return bool(self.IV_HEX or self.IV_SEED)

    @property
    def log_level_value(self) -> int:
        """Numeric logging level; unknown names fall back to WARNING."""
        level = logging.getLevelName(self.LOG_LEVEL.strip().upper())
        return level if isinstance(level, int) else logging.WARNING


# Global config instance
config = Config()
