"""Gengo Client: async Python interface to the Gengo translation API.

WHY: Gengo exposes human translation as a signed JSON-over-HTTP API. Every
call needs the same plumbing: timestamp signing, query/form/multipart
encoding, and unwrapping the ``{opstat, response|err}`` envelope. This
package does that once and exposes typed methods per API area.

HOW: Three layers: signing (api.auth), transport and envelope handling
(api.client), and resource groups (groups/) that build paths and shape
results into payload dataclasses (api.models).

RULES:
- All HTTP traffic goes through GengoClient
- Resource groups never talk to httpx directly
- Payload objects are immutable views over the API JSON
"""

__version__ = "0.1.0"

from gengo_client.api.client import GengoClient  # noqa: E402
from gengo_client.errors import (  # noqa: E402
    GengoAPIError,
    GengoClientClosedError,
    GengoConfigError,
    GengoResponseError,
    GengoValidationError,
)
from gengo_client.config import ClientMode  # noqa: E402

__all__ = [
    "ClientMode",
    "GengoAPIError",
    "GengoClient",
    "GengoClientClosedError",
    "GengoConfigError",
    "GengoResponseError",
    "GengoValidationError",
    "__version__",
]
