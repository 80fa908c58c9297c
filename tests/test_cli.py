import argparse
import io
import unittest
from contextlib import redirect_stderr, redirect_stdout

from hexcrypt import IV, Crypter, cli, is_uuid
from hexcrypt import config as config_module
from hexcrypt.config import Config

KEY = "2b7e151628aed2a6abf7158809cf4f3c"
IV_HEX = "000102030405060708090a0b0c0d0e0f"


def run(argv, cfg=None):
    cfg = cfg or Config(KEY_HEX="", IV_HEX="", IV_SEED="", LOG_LEVEL="WARNING")
    out, err = io.StringIO(), io.StringIO()
    with redirect_stdout(out), redirect_stderr(err):
        code = cli.main(argv, cfg)
    return code, out.getvalue().strip(), err.getvalue().strip()


class TestCommands(unittest.TestCase):
    def test_keygen(self):
        code, out, _ = run(["keygen"])
        self.assertEqual(code, 0)
        self.assertEqual(len(out), 32)

    def test_ivgen_random_and_seeded(self):
        code, out, _ = run(["ivgen"])
        self.assertEqual(code, 0)
        self.assertEqual(len(out), 32)

        code, out, _ = run(["ivgen", "--seed", "hello world"])
        self.assertEqual(code, 0)
        self.assertEqual(out, IV.from_seed("hello world").to_hex())

    def test_encrypt_decrypt_with_flags(self):
        code, hex_cipher, _ = run(["encrypt", "hello world", "--key", KEY, "--iv", IV_HEX])
        self.assertEqual(code, 0)
        self.assertEqual(hex_cipher, Crypter.from_hex(KEY, IV_HEX).encrypt_to_hex("hello world"))

        code, out, _ = run(["decrypt", hex_cipher, "--key", KEY, "--iv", IV_HEX])
        self.assertEqual(code, 0)
        self.assertEqual(out, "hello world")

    def test_encrypt_with_seed(self):
        code, hex_cipher, _ = run(["encrypt", "hi", "--key", KEY, "--seed", "session"])
        self.assertEqual(code, 0)
        code, out, _ = run(["decrypt", hex_cipher, "--key", KEY, "--seed", "session"])
        self.assertEqual(out, "hi")

    def test_key_and_iv_from_config(self):
        cfg = Config(KEY_HEX=KEY, IV_HEX="", IV_SEED="session", LOG_LEVEL="WARNING")
        code, hex_cipher, _ = run(["encrypt", "from config"], cfg)
        self.assertEqual(code, 0)
        code, out, _ = run(["decrypt", hex_cipher, "--key", KEY, "--seed", "session"])
        self.assertEqual(out, "from config")

    def test_flags_override_config(self):
        cfg = Config(KEY_HEX=KEY, IV_HEX=IV_HEX, IV_SEED="", LOG_LEVEL="WARNING")
        _, from_cfg, _ = run(["encrypt", "x"], cfg)
        _, from_seed, _ = run(["encrypt", "x", "--seed", "other"], cfg)
        self.assertNotEqual(from_cfg, from_seed)

    def test_seal_open(self):
        code, sealed, _ = run(["seal", "secret", "--key", KEY])
        self.assertEqual(code, 0)
        code, out, _ = run(["open", sealed, "--key", KEY])
        self.assertEqual(code, 0)
        self.assertEqual(out, "secret")

    def test_sha256(self):
        code, out, _ = run(["sha256", "hello world"])
        self.assertEqual(code, 0)
        self.assertEqual(out, "b94d27b9934d3e08a52e52d7da7dabfac484efe37a5380ee9088f7ace2efcde9")

    def test_uuid_and_isuuid(self):
        code, out, _ = run(["uuid"])
        self.assertEqual(code, 0)
        self.assertTrue(is_uuid(out))

        code, verdict, _ = run(["isuuid", out])
        self.assertEqual((code, verdict), (0, "true"))

        code, verdict, _ = run(["isuuid", out + out])
        self.assertEqual((code, verdict), (1, "false"))


class TestErrors(unittest.TestCase):
    def test_missing_key(self):
        code, out, err = run(["encrypt", "x", "--iv", IV_HEX])
        self.assertEqual(code, 2)
        self.assertEqual(out, "")
        self.assertIn("HEXCRYPT_KEY", err)

    def test_missing_iv(self):
        code, _, err = run(["encrypt", "x", "--key", KEY])
        self.assertEqual(code, 2)
        self.assertIn("no iv", err)

    def test_bad_key(self):
        code, _, err = run(["encrypt", "x", "--key", "abcd", "--iv", IV_HEX])
        self.assertEqual(code, 2)
        self.assertIn("error:", err)

    def test_garbage_ciphertext(self):
        code, out, err = run(["decrypt", "abc", "--key", KEY, "--iv", IV_HEX])
        self.assertEqual(code, 2)
        self.assertEqual(out, "")
        self.assertIn("error:", err)

    def test_iv_and_seed_are_exclusive(self):
        with self.assertRaises(SystemExit):
            run(["encrypt", "x", "--key", KEY, "--iv", IV_HEX, "--seed", "s"])


class TestResolve(unittest.TestCase):
    def args(self, key=None, iv=None, seed=None):
        return argparse.Namespace(key=key, iv=iv, seed=seed)

    def test_configured_key_used_when_flag_missing(self):
        cfg = Config(KEY_HEX=KEY, IV_HEX="", IV_SEED="", LOG_LEVEL="WARNING")
        self.assertTrue(cfg.has_key)
        self.assertEqual(cli.resolve_key(self.args(), cfg).to_hex(), KEY)

    def test_no_key_configured(self):
        cfg = Config(KEY_HEX="", IV_HEX="", IV_SEED="", LOG_LEVEL="WARNING")
        with self.assertRaises(cli.UsageError):
            cli.resolve_key(self.args(), cfg)

    def test_configured_iv_prefers_hex_over_seed(self):
        cfg = Config(KEY_HEX="", IV_HEX=IV_HEX, IV_SEED="session", LOG_LEVEL="WARNING")
        self.assertEqual(cli.resolve_iv(self.args(), cfg).to_hex(), IV_HEX)

    def test_configured_seed_used_without_hex(self):
        cfg = Config(KEY_HEX="", IV_HEX="", IV_SEED="session", LOG_LEVEL="WARNING")
        self.assertEqual(cli.resolve_iv(self.args(), cfg), IV.from_seed("session"))

    def test_no_iv_configured(self):
        cfg = Config(KEY_HEX="", IV_HEX="", IV_SEED="", LOG_LEVEL="WARNING")
        self.assertFalse(cfg.has_iv)
        with self.assertRaises(cli.UsageError):
            cli.resolve_iv(self.args(), cfg)


class TestUnencodableArguments(unittest.TestCase):
    # argv bytes that are not UTF-8 arrive as lone surrogates (surrogateescape)

    def test_encrypt_reports_error(self):
        code, out, err = run(["encrypt", "caf\udce9", "--key", KEY, "--iv", IV_HEX])
        self.assertEqual(code, 2)
        self.assertEqual(out, "")
        self.assertIn("UTF-8", err)

    def test_seal_reports_error(self):
        code, _, err = run(["seal", "caf\udce9", "--key", KEY])
        self.assertEqual(code, 2)
        self.assertIn("error:", err)

    def test_seed_reports_error(self):
        code, _, err = run(["ivgen", "--seed", "\udcff"])
        self.assertEqual(code, 2)
        self.assertIn("error:", err)

        code, _, _ = run(["encrypt", "x", "--key", KEY, "--seed", "\udcff"])
        self.assertEqual(code, 2)

    def test_sha256_still_hashes(self):
        code, out, _ = run(["sha256", "\udcff"])
        self.assertEqual(code, 0)
        self.assertEqual(len(out), 64)


class TestLogLevelOverride(unittest.TestCase):
    def test_does_not_modify_passed_config(self):
        cfg = Config(KEY_HEX="", IV_HEX="", IV_SEED="", LOG_LEVEL="WARNING")
        code, _, _ = run(["--log-level", "DEBUG", "uuid"], cfg)
        self.assertEqual(code, 0)
        self.assertEqual(cfg.LOG_LEVEL, "WARNING")

    def test_does_not_modify_global_config(self):
        before = config_module.config.LOG_LEVEL
        out = io.StringIO()
        with redirect_stdout(out):
            code = cli.main(["--log-level", "CRITICAL", "uuid"])
        self.assertEqual(code, 0)
        self.assertEqual(config_module.config.LOG_LEVEL, before)


if __name__ == "__main__":
    unittest.main()
