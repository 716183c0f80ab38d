"""Tests for request signing (gengo_client.api.auth)."""

from __future__ import annotations

import hashlib
import hmac

from gengo_client.api import auth
from gengo_client.api.auth import auth_fields, current_timestamp, sign


class TestSign:
    def test_rfc2202_vector(self):
        """HMAC-SHA1 test case 2 from RFC 2202."""
        assert sign("Jefe", "what do ya want for nothing?") == (
            "effcdf6ae5eb2fa2d27416d5f184df9c259a7c79"
        )

    def test_deterministic(self):
        assert sign("secret", "1700000000") == sign("secret", "1700000000")

    def test_matches_stdlib_hmac(self):
        expected = hmac.new(b"secret", b"1700000000", hashlib.sha1).hexdigest()
        assert sign("secret", "1700000000") == expected

    def test_lowercase_hex(self):
        sig = sign("secret", "1700000000")
        assert len(sig) == 40
        assert sig == sig.lower()
        int(sig, 16)

    def test_key_changes_signature(self):
        assert sign("secret-a", "1700000000") != sign("secret-b", "1700000000")

    def test_timestamp_changes_signature(self):
        assert sign("secret", "1700000000") != sign("secret", "1700000001")

    def test_non_ascii_key_is_utf8_encoded(self):
        expected = hmac.new("clé".encode("utf-8"), b"1", hashlib.sha1).hexdigest()
        assert sign("clé", "1") == expected


class TestAuthFields:
    def test_signed_fields(self, monkeypatch):
        monkeypatch.setattr(auth.time, "time", lambda: 1700000000.75)
        fields = auth_fields("pub", "priv")
        assert fields == {
            "api_key": "pub",
            "ts": "1700000000",
            "api_sig": sign("priv", "1700000000"),
        }

    def test_unsigned_fields_only_carry_api_key(self):
        assert auth_fields("pub", "priv", signed=False) == {"api_key": "pub"}

    def test_private_key_never_included(self):
        fields = auth_fields("pub", "very-secret")
        assert "very-secret" not in fields.values()

    def test_fresh_timestamp_each_call(self, monkeypatch):
        stamps = iter(["1700000000", "1700000005"])
        monkeypatch.setattr(auth, "current_timestamp", lambda: next(stamps))
        first = auth_fields("pub", "priv")
        second = auth_fields("pub", "priv")
        assert first["ts"] != second["ts"]
        assert first["api_sig"] != second["api_sig"]

    def test_current_timestamp_is_whole_seconds(self, monkeypatch):
        monkeypatch.setattr(auth.time, "time", lambda: 1234.999)
        assert current_timestamp() == "1234"
