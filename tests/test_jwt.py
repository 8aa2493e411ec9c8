"""
Tests for token issuance and verification.
"""

import json
from base64 import urlsafe_b64decode, urlsafe_b64encode

import pytest

from auth.jwt import TokenService
from auth.models import AuthError


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def _service(clock=None, secret="test-secret", ttl=3600):
    return TokenService(secret, ttl, clock or FakeClock())


def _flip_last(text: str) -> str:
    return text[:-1] + ("0" if text[-1] != "0" else "1")


class TestIssueAndVerify:
    def test_round_trip(self):
        tokens = _service()
        result = tokens.verify(tokens.issue("user-1"))
        assert result.ok
        assert result.value == "user-1"

    def test_payload_claims(self):
        clock = FakeClock(1000.0)
        token = _service(clock, ttl=60).issue("user-1")
        payload = json.loads(urlsafe_b64decode(token.split(".")[0]))
        assert payload == {"sub": "user-1", "iat": 1000, "exp": 1060}

    def test_valid_until_exactly_expiry(self):
        clock = FakeClock()
        tokens = _service(clock, ttl=60)
        token = tokens.issue("user-1")
        clock.advance(60)
        assert tokens.verify(token).ok

    def test_expired_after_ttl(self):
        clock = FakeClock()
        tokens = _service(clock, ttl=60)
        token = tokens.issue("user-1")
        clock.advance(61)
        result = tokens.verify(token)
        assert not result.ok
        assert result.error is AuthError.EXPIRED


class TestTampering:
    def test_altered_signature(self):
        tokens = _service()
        result = tokens.verify(_flip_last(tokens.issue("user-1")))
        assert result.error is AuthError.INVALID_SIGNATURE

    def test_altered_payload(self):
        tokens = _service()
        token = tokens.issue("user-1")
        _, sig = token.split(".")
        forged = urlsafe_b64encode(
            json.dumps({"sub": "admin", "iat": 0, "exp": 9_999_999_999}).encode()
        ).decode()
        assert tokens.verify(forged + "." + sig).error is AuthError.INVALID_SIGNATURE

    def test_other_secret(self):
        token = _service(secret="one").issue("user-1")
        assert _service(secret="two").verify(token).error is AuthError.INVALID_SIGNATURE

    def test_signature_checked_before_expiry(self):
        clock = FakeClock()
        tokens = _service(clock, ttl=1)
        token = tokens.issue("user-1")
        clock.advance(10)
        assert tokens.verify(_flip_last(token)).error is AuthError.INVALID_SIGNATURE


class TestMalformed:
    @pytest.mark.parametrize("token", ["", "no-dot", ".sig", "body.", "ünïcode.abc"])
    def test_unparseable(self, token):
        assert _service().verify(token).error is AuthError.MALFORMED

    @pytest.mark.parametrize("suffix", [".extra", "."])
    def test_extra_separator(self, suffix):
        tokens = _service()
        assert tokens.verify(tokens.issue("user-1") + suffix).error is AuthError.MALFORMED

    def test_non_string(self):
        assert _service().verify(None).error is AuthError.MALFORMED

    def test_signed_garbage_payload(self):
        tokens = _service()
        body = b"not-base64-json!"
        token = body.decode() + "." + tokens._sign(body)
        assert tokens.verify(token).error is AuthError.MALFORMED

    def test_signed_payload_missing_claims(self):
        tokens = _service()
        body = urlsafe_b64encode(json.dumps({"sub": "user-1"}).encode())
        token = body.decode() + "." + tokens._sign(body)
        assert tokens.verify(token).error is AuthError.MALFORMED


class TestConstruction:
    def test_empty_secret(self):
        with pytest.raises(ValueError):
            TokenService("", 60)

    @pytest.mark.parametrize("ttl", [0, -5])
    def test_non_positive_ttl(self, ttl):
        with pytest.raises(ValueError):
            TokenService("s", ttl)
