"""
Tests for the bcrypt password hasher.
"""

import pytest

from auth.password import PasswordHasher


@pytest.fixture(scope="module")
def hasher():
    return PasswordHasher(rounds=4)


class TestPasswordHasher:
    def test_hash_then_verify(self, hasher):
        assert hasher.verify("secret123", hasher.hash("secret123"))

    def test_wrong_password_rejected(self, hasher):
        assert not hasher.verify("secret124", hasher.hash("secret123"))

    def test_same_password_hashes_differ(self, hasher):
        first = hasher.hash("secret123")
        second = hasher.hash("secret123")
        assert first != second
        assert hasher.verify("secret123", first)
        assert hasher.verify("secret123", second)

    def test_hash_is_not_plaintext(self, hasher):
        assert "secret123" not in hasher.hash("secret123")

    def test_work_factor_is_embedded(self, hasher):
        assert hasher.hash("x").startswith("$2b$04$")

    @pytest.mark.parametrize("bad_hash", ["", "not-a-hash", "$2b$04$short", "plaintext"])
    def test_malformed_hash_returns_false(self, hasher, bad_hash):
        assert hasher.verify("secret123", bad_hash) is False

    def test_long_password_round_trip(self, hasher):
        long_password = "x" * 200
        assert hasher.verify(long_password, hasher.hash(long_password))

    def test_long_passwords_differ_past_72_bytes(self, hasher):
        stored = hasher.hash("a" * 72 + "one")
        assert not hasher.verify("a" * 72 + "two", stored)

    def test_burn_always_false(self, hasher):
        assert hasher.burn("anything") is False

    @pytest.mark.parametrize("rounds", [3, 32])
    def test_rounds_out_of_range(self, rounds):
        with pytest.raises(ValueError):
            PasswordHasher(rounds=rounds)
