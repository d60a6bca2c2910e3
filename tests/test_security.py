"""Unit tests for app.core.security: bcrypt hashing and JWT issue/verify."""

import random
import string
import unittest
from datetime import UTC, datetime, timedelta
from unittest.mock import patch

import jwt

from app.core.security import (
    HashingError,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

SECRET = "unit-test-secret-key-with-32-plus-bytes"


def _random_password(rng: random.Random) -> str:
    alphabet = string.ascii_letters + string.digits + string.punctuation + " "
    return "".join(rng.choice(alphabet) for _ in range(rng.randint(1, 40)))


def _mutate(rng: random.Random, password: str) -> str:
    """Return a different string: change one character or append one."""
    if rng.random() < 0.5:
        return password + rng.choice(string.ascii_letters)
    i = rng.randrange(len(password))
    replacement = "a" if password[i] != "a" else "b"
    return password[:i] + replacement + password[i + 1 :]


class TestHashPassword(unittest.TestCase):
    def test_hash_is_bcrypt_not_plaintext(self) -> None:
        hashed = hash_password("correct horse battery staple", rounds=4)
        self.assertNotEqual(hashed, "correct horse battery staple")
        self.assertTrue(hashed.startswith("$2b$04$"))

    def test_salt_differs_between_calls(self) -> None:
        a = hash_password("same-password", rounds=4)
        b = hash_password("same-password", rounds=4)
        self.assertNotEqual(a, b)
        self.assertEqual(len(a), len(b))

    def test_invalid_rounds_raise_hashing_error(self) -> None:
        with self.assertRaises(HashingError):
            hash_password("pw", rounds=1)

    def test_bcrypt_failure_raises_hashing_error(self) -> None:
        with patch("app.core.security.bcrypt.hashpw", side_effect=ValueError("boom")):
            with self.assertRaises(HashingError):
                hash_password("pw", rounds=4)


class TestVerifyPassword(unittest.TestCase):
    def test_randomized_passwords_verify_only_themselves(self) -> None:
        rng = random.Random(20261019)
        for _ in range(100):
            password = _random_password(rng)
            other = _mutate(rng, password)
            hashed = hash_password(password, rounds=4)
            with self.subTest(password=password, other=other):
                self.assertTrue(verify_password(password, hashed))
                self.assertFalse(verify_password(other, hashed))

    def test_malformed_hash_returns_false(self) -> None:
        self.assertFalse(verify_password("pw", "not-a-bcrypt-hash"))
        self.assertFalse(verify_password("pw", ""))

    def test_unicode_password(self) -> None:
        hashed = hash_password("pässwörd-密码", rounds=4)
        self.assertTrue(verify_password("pässwörd-密码", hashed))
        self.assertFalse(verify_password("passwort-密码", hashed))

    def test_passwords_sharing_first_72_bytes_do_not_collide(self) -> None:
        prefix = "a" * 71
        hashed = hash_password(prefix + "X", rounds=4)
        self.assertTrue(verify_password(prefix + "X", hashed))
        self.assertFalse(verify_password(prefix + "XY", hashed))
        self.assertFalse(verify_password("a" * 72 + "X", hashed))

    def test_password_over_72_bytes_is_not_hashed(self) -> None:
        with self.assertRaises(HashingError):
            hash_password("a" * 72 + "X", rounds=4)
        # 36 two-byte characters: 72 bytes, the largest accepted input.
        self.assertTrue(verify_password("é" * 36, hash_password("é" * 36, rounds=4)))
        with self.assertRaises(HashingError):
            hash_password("é" * 37, rounds=4)


class TestAccessToken(unittest.TestCase):
    claims = {"id": "3f1c2b7e-0000-4000-8000-000000000001", "email": "a@example.com", "role": "user"}

    def test_claims_round_trip(self) -> None:
        token = create_access_token(self.claims, secret=SECRET, ttl=timedelta(minutes=5))
        payload = decode_access_token(token, secret=SECRET)
        self.assertEqual(payload["id"], self.claims["id"])
        self.assertEqual(payload["email"], "a@example.com")
        self.assertEqual(payload["role"], "user")
        self.assertEqual(payload["exp"] - payload["iat"], 300)

    def test_valid_before_expiry(self) -> None:
        ttl = timedelta(minutes=10)
        issued = datetime.now(UTC) - ttl + timedelta(seconds=60)
        token = create_access_token(self.claims, secret=SECRET, ttl=ttl, issued_at=issued)
        self.assertEqual(decode_access_token(token, secret=SECRET)["email"], "a@example.com")

    def test_rejected_after_expiry(self) -> None:
        ttl = timedelta(minutes=10)
        issued = datetime.now(UTC) - ttl - timedelta(seconds=1)
        token = create_access_token(self.claims, secret=SECRET, ttl=ttl, issued_at=issued)
        with self.assertRaises(jwt.ExpiredSignatureError):
            decode_access_token(token, secret=SECRET)

    def test_wrong_secret_rejected(self) -> None:
        token = create_access_token(self.claims, secret=SECRET)
        with self.assertRaises(jwt.InvalidSignatureError):
            decode_access_token(token, secret="another-secret-key-with-32-plus-bytes")

    def test_defaults_come_from_settings(self) -> None:
        token = create_access_token(self.claims)
        payload = decode_access_token(token)
        self.assertEqual(payload["exp"] - payload["iat"], 60 * 60)


if __name__ == "__main__":
    unittest.main()
