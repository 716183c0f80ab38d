"""Configuration constants, endpoint selection, and .env loading.

WHY: Keys, endpoints, and timeouts differ between a developer's sandbox
account and production. Keeping them in one module (and in the
environment rather than in code) makes switching explicit and keeps the
private key out of source control.

HOW: python-dotenv loads the .env file on import. Endpoints are plain
module-level strings, ClientMode picks between them, and load_keys()
gives a clear error when the key pair is missing.

RULES:
- Base URLs always end with "/" so relative paths join underneath them
- GENGO_MODE selects the default endpoint (sandbox unless set otherwise)
- GENGO_BASE_URL, when set, replaces GENGO_MODE; explicit arguments win over both
- Keys are loaded from the environment, never hardcoded
"""

from __future__ import annotations

import enum
import os

from dotenv import load_dotenv

from gengo_client.errors import GengoConfigError

# Load .env from the working directory
load_dotenv()

# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

PRODUCTION_BASE_URL = "https://api.gengo.com/v2/"
SANDBOX_BASE_URL = "https://api.sandbox.gengo.com/v2/"


class ClientMode(str, enum.Enum):
    """Which of the two hosted Gengo environments to talk to."""

    PRODUCTION = "production"
    SANDBOX = "sandbox"


_BASE_URLS: dict[ClientMode, str] = {
    ClientMode.PRODUCTION: PRODUCTION_BASE_URL,
    ClientMode.SANDBOX: SANDBOX_BASE_URL,
}


def base_url_for(mode: ClientMode | str) -> str:
    """Return the base URL for a client mode.

    RULES:
    - Accepts the enum or its string value ("production" / "sandbox")
    - Raises GengoConfigError for anything else
    """
    try:
        return _BASE_URLS[ClientMode(mode)]
    except ValueError:
        raise GengoConfigError(
            "Unknown client mode {!r} (expected 'production' or 'sandbox')".format(mode)
        ) from None


# ---------------------------------------------------------------------------
# Defaults (overridable via environment)
# ---------------------------------------------------------------------------

GENGO_MODE = os.getenv("GENGO_MODE", ClientMode.SANDBOX.value).strip().lower()
GENGO_BASE_URL = os.getenv("GENGO_BASE_URL", "").strip() or None
DEFAULT_TIMEOUT = 60.0


def load_timeout() -> float:
    """Request timeout in seconds from GENGO_TIMEOUT (default 60).

    RULES:
    - Read at client construction, so a bad value never breaks import
    - Raises GengoConfigError naming the variable for non-numeric or
      non-positive values
    """
    raw = os.getenv("GENGO_TIMEOUT", "").strip()
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError:
        raise GengoConfigError(
            "GENGO_TIMEOUT must be a number of seconds, got {!r}".format(raw)
        ) from None
    if not timeout > 0:
        raise GengoConfigError("GENGO_TIMEOUT must be positive, got {!r}".format(raw))
    return timeout


def load_keys() -> tuple[str, str]:
    """Load the Gengo key pair from the environment.

    WHY: Both keys are needed for every signed call. Loading them from
    the environment (via .env) keeps them out of source code.

    HOW: Reads GENGO_PUBLIC_KEY and GENGO_PRIVATE_KEY from os.environ
    (populated by python-dotenv).

    RULES:
    - Returns (public_key, private_key)
    - Raises GengoConfigError naming the missing variable
    - Never returns a default/placeholder value
    """
    public_key = os.getenv("GENGO_PUBLIC_KEY", "").strip()
    private_key = os.getenv("GENGO_PRIVATE_KEY", "").strip()
    if not public_key:
        raise GengoConfigError(
            "Gengo public key not configured. "
            "Add GENGO_PUBLIC_KEY to the .env file or the environment."
        )
    if not private_key:
        raise GengoConfigError(
            "Gengo private key not configured. "
            "Add GENGO_PRIVATE_KEY to the .env file or the environment."
        )
    return public_key, private_key
