"""Request signing for the Gengo API.

WHY: Gengo authenticates a call by the public key plus an HMAC-SHA1 of
the current Unix timestamp keyed by the private key. The private key is
never sent, and a signature is only valid around the moment it was made.

HOW: sign() is the pure hashing step; auth_fields() stamps a fresh
timestamp and returns the fields to merge into a query string, form
body, or multipart body.

RULES:
- Signatures are lowercase hex digests
- Both key and timestamp are UTF-8 encoded before hashing
- auth_fields() computes a new timestamp on every call (no reuse)
"""

from __future__ import annotations

import hashlib
import hmac
import time


def sign(private_key: str, timestamp: str) -> str:
    """Return the HMAC-SHA1 hex digest of ``timestamp`` keyed by ``private_key``."""
    return hmac.new(
        private_key.encode("utf-8"),
        timestamp.encode("utf-8"),
        hashlib.sha1,
    ).hexdigest()


def current_timestamp() -> str:
    """Unix time in whole seconds, as a decimal string."""
    return str(int(time.time()))


def auth_fields(public_key: str, private_key: str, signed: bool = True) -> dict[str, str]:
    """Build the authentication fields for one request.

    RULES:
    - api_key is always present
    - ts and api_sig are added only when signed is True
    """
    fields = {"api_key": public_key}
    if signed:
        ts = current_timestamp()
        fields["ts"] = ts
        fields["api_sig"] = sign(private_key, ts)
    return fields
