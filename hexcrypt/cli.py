"""
hexcrypt - Command-line entry point

Generates keys and IVs, encrypts and decrypts text, and exposes the hash and
UUID helpers. Key and IV fall back to the HEXCRYPT_* environment variables
when not given on the command line.
"""

import sys
import logging
import argparse
import dataclasses
from typing import Optional

from .config import Config, config
from .crypter import Crypter, decrypt_from_hex, encrypt_to_hex
from .errors import HexcryptError
from .ids import is_uuid, random_uuid, sha256_hex
from .iv import IV
from .key import Key

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FALSE = 1
EXIT_ERROR = 2


class UsageError(Exception):
    """Raised when required key/IV input is missing."""


# ============================================================================
# Key / IV resolution
# ============================================================================

def resolve_key(args: argparse.Namespace, cfg: Config) -> Key:
    """Build the Key from --key or the configured HEXCRYPT_KEY."""
    if args.key:
        return Key.from_hex(args.key)
    if not cfg.has_key:
        raise UsageError("no key given; pass --key or set HEXCRYPT_KEY")
    return Key.from_hex(cfg.KEY_HEX)


def resolve_iv(args: argparse.Namespace, cfg: Config) -> IV:
    """
    Build the IV from the command line, then from configuration.

    Command-line values always win over configured ones; within each source
    an explicit hex IV wins over a seed.
    """
    if args.iv:
        return IV.from_hex(args.iv)
    if args.seed:
        return IV.from_seed(args.seed)
    if not cfg.has_iv:
        raise UsageError("no iv given; pass --iv or --seed, or set HEXCRYPT_IV or HEXCRYPT_IV_SEED")
    if cfg.IV_HEX:
        return IV.from_hex(cfg.IV_HEX)
    return IV.from_seed(cfg.IV_SEED)


# ============================================================================
# Commands
# ============================================================================

def cmd_keygen(args, cfg) -> int:
    print(Key.generate().to_hex())
    return EXIT_OK


def cmd_ivgen(args, cfg) -> int:
    iv = IV.from_seed(args.seed) if args.seed else IV.generate()
    print(iv.to_hex())
    return EXIT_OK


def cmd_encrypt(args, cfg) -> int:
    crypter = Crypter(resolve_key(args, cfg), resolve_iv(args, cfg))
    print(crypter.encrypt_to_hex(args.text))
    return EXIT_OK


def cmd_decrypt(args, cfg) -> int:
    crypter = Crypter(resolve_key(args, cfg), resolve_iv(args, cfg))
    print(crypter.decrypt_from_hex(args.hex))
    return EXIT_OK


def cmd_seal(args, cfg) -> int:
    print(encrypt_to_hex(args.text, resolve_key(args, cfg)))
    return EXIT_OK


def cmd_open(args, cfg) -> int:
    print(decrypt_from_hex(args.hex, resolve_key(args, cfg)))
    return EXIT_OK


def cmd_sha256(args, cfg) -> int:
    print(sha256_hex(args.text))
    return EXIT_OK


def cmd_uuid(args, cfg) -> int:
    print(random_uuid())
    return EXIT_OK


def cmd_isuuid(args, cfg) -> int:
    valid = is_uuid(args.text)
    print("true" if valid else "false")
    return EXIT_OK if valid else EXIT_FALSE


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with one subcommand per operation."""
    parser = argparse.ArgumentParser(
        prog="hexcrypt",
        description="AES-128-CBC text encryption with hex keys, IVs and ciphertext",
    )
    parser.add_argument("--log-level", help="override HEXCRYPT_LOG_LEVEL")
    sub = parser.add_subparsers(dest="command", required=True)

    def with_key(p):
        p.add_argument("--key", help="32 hex character key (default: HEXCRYPT_KEY)")

    def with_iv(p):
        group = p.add_mutually_exclusive_group()
        group.add_argument("--iv", help="32 hex character IV (default: HEXCRYPT_IV)")
        group.add_argument("--seed", help="derive the IV from this string (default: HEXCRYPT_IV_SEED)")

    p = sub.add_parser("keygen", help="print a new random key")
    p.set_defaults(func=cmd_keygen)

    p = sub.add_parser("ivgen", help="print a new random IV, or one derived from --seed")
    p.add_argument("--seed", help="derive the IV from this string")
    p.set_defaults(func=cmd_ivgen)

    p = sub.add_parser("encrypt", help="encrypt TEXT with a fixed key and IV")
    p.add_argument("text")
    with_key(p)
    with_iv(p)
    p.set_defaults(func=cmd_encrypt)

    p = sub.add_parser("decrypt", help="decrypt HEX with a fixed key and IV")
    p.add_argument("hex")
    with_key(p)
    with_iv(p)
    p.set_defaults(func=cmd_decrypt)

    p = sub.add_parser("seal", help="encrypt TEXT with a fresh IV carried in the output")
    p.add_argument("text")
    with_key(p)
    p.set_defaults(func=cmd_seal)

    p = sub.add_parser("open", help="decrypt the output of seal")
    p.add_argument("hex")
    with_key(p)
    p.set_defaults(func=cmd_open)

    p = sub.add_parser("sha256", help="print the SHA-256 hex digest of TEXT")
    p.add_argument("text")
    p.set_defaults(func=cmd_sha256)

    p = sub.add_parser("uuid", help="print a random UUID")
    p.set_defaults(func=cmd_uuid)

    p = sub.add_parser("isuuid", help="check whether TEXT is a UUID")
    p.add_argument("text")
    p.set_defaults(func=cmd_isuuid)

    return parser


# ============================================================================
# Main Entry Point
# ============================================================================

def main(argv: Optional[list[str]] = None, cfg: Optional[Config] = None) -> int:
    """Run the CLI and return the process exit status."""
    cfg = cfg or config
    args = build_parser().parse_args(argv)

    if args.log_level:
        cfg = dataclasses.replace(cfg, LOG_LEVEL=args.log_level)
    logging.basicConfig(
        level=cfg.log_level_value,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    logger.debug(f"Running command: {args.command}")
    try:
        return args.func(args, cfg)
    except (HexcryptError, UsageError) as e:
        logger.debug(f"Command {args.command} failed: {type(e).__name__}")
        print(f"error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
