"""Exception types raised by the Gengo client.

WHY: Callers must be able to tell apart three failure families: they
passed bad input (fix and retry), the network failed (maybe retry), or
Gengo rejected the call (read the code). Mixing them would force callers
to parse messages.

HOW: Local input problems are ValueError subclasses. Gengo envelope
errors carry the API's message, opstat, and code. Network failures are
NOT wrapped here; httpx exceptions reach the caller unchanged.

RULES:
- GengoValidationError / GengoConfigError: raised before any request
- GengoAPIError: raised only from envelope unpacking
- GengoResponseError: body was not a JSON object
- GengoClientClosedError: client used after aclose()
"""

from __future__ import annotations


class GengoValidationError(ValueError):
    """A required argument was missing, blank, or malformed."""


class GengoConfigError(GengoValidationError):
    """Client configuration (keys, base URL, request path) is invalid."""


class GengoAPIError(Exception):
    """Raised when a Gengo response envelope carries an ``err`` object.

    WHY: Gengo reports business failures (bad job id, insufficient
    credits, invalid data) inside a normal JSON body. Callers need the
    machine-readable code as well as the human message.

    RULES:
    - message is err.msg, code is err.code, opstat mirrors the envelope
    - code is kept as a string ("2800"), matching the wire format
    """

    def __init__(self, message: str | None, opstat: str | None = None, code: str | None = None) -> None:
        self.message = message
        self.opstat = opstat
        self.code = code
        super().__init__("Gengo API error {}: {}".format(code, message))


class GengoResponseError(GengoAPIError):
    """The response body could not be read as a JSON envelope."""


class GengoClientClosedError(RuntimeError):
    """A call was attempted after the client released its connection pool."""
