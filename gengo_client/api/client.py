"""Async HTTP client for the Gengo translation API (v2).

WHY: Every Gengo call repeats the same plumbing: sign a fresh timestamp,
encode parameters into a query string, form body, or multipart body, and
unwrap the ``{opstat, response|err}`` envelope. This module does it once
so the resource groups only build paths and shape results.

HOW: Wraps a single httpx.AsyncClient created with the client and closed
by aclose() (or by leaving ``async with``). The request verbs are thin
methods over one _send() coroutine; unpack_envelope() turns the body into
the ``response`` value or a GengoAPIError.

RULES:
- Exactly one network call per transport method, never retried
- httpx errors propagate unchanged (they are not Gengo errors)
- Signed calls get a new ts/api_sig every time
- A closed client raises GengoClientClosedError before building anything
"""

from __future__ import annotations

import enum
import json
import logging
from collections.abc import Callable, Iterable
from typing import Any, Optional, TypeVar

import httpx

from gengo_client import __version__
from gengo_client.api.auth import auth_fields
from gengo_client.api.models import PostableFile
from gengo_client.config import (
    GENGO_BASE_URL,
    GENGO_MODE,
    ClientMode,
    base_url_for,
    load_keys,
    load_timeout,
)
from gengo_client.errors import (
    GengoAPIError,
    GengoClientClosedError,
    GengoConfigError,
    GengoResponseError,
    GengoValidationError,
)
from gengo_client.groups import (
    AccountMethodGroup,
    JobMethodGroup,
    JobsMethodGroup,
    OrderMethodGroup,
    ServiceMethodGroup,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

_USER_AGENT = "gengo-client/{}".format(__version__)
_JSON_MIME = "application/json"


# ---------------------------------------------------------------------------
# Envelope
# ---------------------------------------------------------------------------


def unpack_envelope(raw: str | bytes, parse: Optional[Callable[[Any], T]] = None) -> Any:
    """Return the ``response`` member of a Gengo envelope, parsed.

    WHY: Every Gengo response, success or failure, is wrapped as
    ``{"opstat": ..., "response": ...}`` or ``{"opstat": ..., "err": ...}``.
    Business failures arrive here rather than as HTTP status codes.

    HOW: Parses the body, raises on ``err``, and hands ``response`` to the
    caller-supplied parse function.

    RULES:
    - err present → GengoAPIError(err.msg, opstat, err.code)
    - no err → parse(response), or response itself when parse is None
    - response missing → None, parse is not called
    - body not a JSON object → GengoResponseError
    """
    try:
        envelope = json.loads(raw)
    except ValueError as exc:
        raise GengoResponseError("Response body is not valid JSON: {}".format(exc)) from exc

    if not isinstance(envelope, dict):
        raise GengoResponseError("Response body is not a JSON object")

    opstat = envelope.get("opstat")
    err = envelope.get("err")
    if err is not None:
        if not isinstance(err, dict):
            err = {"msg": str(err)}
        code = err.get("code")
        code = str(code) if code is not None else None
        message = err.get("msg")
        logger.warning("Gengo API error %s (opstat=%s): %s", code, opstat, message)
        raise GengoAPIError(message, opstat=opstat, code=code)

    if "response" not in envelope:
        logger.warning("Gengo envelope has neither response nor err (opstat=%s)", opstat)
        return None

    response = envelope["response"]
    if response is None or parse is None:
        return response
    return parse(response)


def _stringify(value: Any) -> str:
    """Render a parameter value the way Gengo expects it on the wire."""
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, enum.Enum):
        return str(value.value)
    return str(value)


def _clean_params(params: Optional[dict[str, Any]]) -> dict[str, str]:
    return {k: _stringify(v) for k, v in (params or {}).items() if v is not None}


def _resolve_base_url(mode: ClientMode | str | None, base_url: Optional[str]) -> httpx.URL:
    """Pick and validate the endpoint; the result always ends with "/".

    RULES:
    - Precedence: base_url, then mode, then GENGO_BASE_URL, then GENGO_MODE
    - An explicit mode is never overridden by the environment
    """
    if base_url is None and mode is None:
        base_url = GENGO_BASE_URL
    if base_url is None:
        return httpx.URL(base_url_for(mode or GENGO_MODE))

    if not base_url.strip():
        raise GengoConfigError("Base URL not specified")
    try:
        url = httpx.URL(base_url.strip())
    except httpx.InvalidURL as exc:
        raise GengoConfigError("Base URL {!r} is not valid: {}".format(base_url, exc)) from exc
    if url.scheme not in ("http", "https") or not url.host:
        raise GengoConfigError("Base URL {!r} is not an absolute http(s) URL".format(base_url))
    if not url.path.endswith("/"):
        url = url.copy_with(path=url.path + "/")
    return url


class GengoClient:
    """Async client for the Gengo API.

    WHY: Provides the authenticated request primitives plus one attribute
    per API area (account, job, jobs, service, order), so callers write
    ``await client.job.get(42)`` and never see signing or envelopes.

    HOW: Holds the immutable key pair and base URL and owns one
    httpx.AsyncClient for its whole lifetime. Use as an async context
    manager, or call aclose() when done.

    RULES:
    - Keys default to load_keys() (GENGO_PUBLIC_KEY / GENGO_PRIVATE_KEY)
    - Endpoint: base_url, else mode, else GENGO_BASE_URL, else GENGO_MODE
    - timeout defaults to GENGO_TIMEOUT (load_timeout())
    - Concurrent calls are independent; no locking is needed
    - aclose() is idempotent and releases the pool exactly once
    """

    def __init__(
        self,
        public_key: Optional[str] = None,
        private_key: Optional[str] = None,
        mode: ClientMode | str | None = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if public_key is None or private_key is None:
            env_public, env_private = load_keys()
            public_key = env_public if public_key is None else public_key
            private_key = env_private if private_key is None else private_key

        if not public_key.strip():
            raise GengoConfigError("Public key not specified")
        if not private_key.strip():
            raise GengoConfigError("Private key not specified")

        self._public_key = public_key
        self._private_key = private_key
        self._base_url = _resolve_base_url(mode, base_url)
        self._closed = False

        total = timeout if timeout is not None else load_timeout()
        self._http = httpx.AsyncClient(
            headers={
                "User-Agent": _USER_AGENT,
                "Accept": _JSON_MIME,
                "Accept-Charset": "utf-8",
            },
            timeout=httpx.Timeout(total, connect=min(10.0, total)),
            transport=transport,
        )

        self.account = AccountMethodGroup(self)
        self.job = JobMethodGroup(self)
        self.jobs = JobsMethodGroup(self)
        self.service = ServiceMethodGroup(self)
        self.order = OrderMethodGroup(self)

    @property
    def base_url(self) -> httpx.URL:
        return self._base_url

    @property
    def public_key(self) -> str:
        return self._public_key

    @property
    def is_closed(self) -> bool:
        return self._closed

    async def __aenter__(self) -> GengoClient:
        self._ensure_open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        await self.aclose()

    async def aclose(self) -> None:
        """Release the connection pool. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        await self._http.aclose()

    def _ensure_open(self) -> httpx.AsyncClient:
        """Return the active httpx client, raising if it was closed."""
        if self._closed:
            raise GengoClientClosedError(
                "GengoClient has been closed; create a new client to make further calls."
            )
        return self._http

    # ------------------------------------------------------------------
    # Request building
    # ------------------------------------------------------------------

    @staticmethod
    def _check_path(path: str) -> None:
        """Reject anything that is not a plain relative reference."""
        if not isinstance(path, str) or not path.strip():
            raise GengoConfigError("Request path not provided")
        if (
            path.startswith("/")
            or any(ch.isspace() for ch in path)
            or "?" in path
            or "#" in path
        ):
            raise GengoConfigError("Request path {!r} is not a valid relative path".format(path))
        try:
            absolute = httpx.URL(path).is_absolute_url
        except httpx.InvalidURL as exc:
            raise GengoConfigError("Request path {!r} is not valid: {}".format(path, exc)) from exc
        if absolute or ":" in path.split("/", 1)[0]:
            raise GengoConfigError("Request path {!r} must be relative".format(path))

    def _url(self, path: str) -> httpx.URL:
        self._check_path(path)
        return self._base_url.join(path)

    def _auth(self, signed: bool = True) -> dict[str, str]:
        return auth_fields(self._public_key, self._private_key, signed=signed)

    def build_url(
        self,
        path: str,
        params: Optional[dict[str, Any]] = None,
        signed: bool = True,
    ) -> httpx.URL:
        """Return the absolute request URL with auth fields in the query.

        RULES:
        - api_key is always added; ts/api_sig only when signed
        - None-valued params are dropped, booleans become 1/0
        - Malformed paths raise GengoConfigError before any I/O
        """
        url = self._url(path)
        query = _clean_params(params)
        query.update(self._auth(signed))
        return url.copy_merge_params(query)

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _send(self, method: str, path: str, url: httpx.URL, **kwargs: Any) -> httpx.Response:
        client = self._ensure_open()
        logger.debug("%s %s", method, path)
        return await client.request(method, url, **kwargs)

    @staticmethod
    def _unpack(resp: httpx.Response, parse: Optional[Callable[[Any], T]]) -> Any:
        try:
            return unpack_envelope(resp.content, parse)
        except GengoResponseError:
            # Not an envelope: an HTTP error status is a transport failure.
            resp.raise_for_status()
            raise

    async def get_string(
        self,
        path: str,
        params: Optional[dict[str, Any]] = None,
        signed: bool = True,
    ) -> str:
        """GET and return the body text; non-2xx raises httpx.HTTPStatusError."""
        self._ensure_open()
        resp = await self._send("GET", path, self.build_url(path, params, signed))
        resp.raise_for_status()
        return resp.text

    async def get_bytes(
        self,
        path: str,
        params: Optional[dict[str, Any]] = None,
        signed: bool = True,
    ) -> bytes:
        """GET and return the raw body (e.g. JPEG previews)."""
        self._ensure_open()
        resp = await self._send("GET", path, self.build_url(path, params, signed))
        resp.raise_for_status()
        return resp.content

    async def get_json(
        self,
        path: str,
        params: Optional[dict[str, Any]] = None,
        signed: bool = True,
        parse: Optional[Callable[[Any], T]] = None,
    ) -> Any:
        """GET and unpack the envelope."""
        self._ensure_open()
        resp = await self._send("GET", path, self.build_url(path, params, signed))
        return self._unpack(resp, parse)

    async def delete_json(
        self,
        path: str,
        params: Optional[dict[str, Any]] = None,
        parse: Optional[Callable[[Any], T]] = None,
    ) -> Any:
        """Signed DELETE, unpacking the envelope."""
        self._ensure_open()
        resp = await self._send("DELETE", path, self.build_url(path, params, signed=True))
        return self._unpack(resp, parse)

    async def post_form(
        self,
        path: str,
        values: dict[str, Any],
        parse: Optional[Callable[[Any], T]] = None,
    ) -> Any:
        """POST an url-encoded form; auth fields go in the body, not the URL."""
        self._ensure_open()
        if values is None:
            raise GengoValidationError("Form values not provided")
        url = self._url(path)
        body = _clean_params(values)
        body.update(self._auth())
        resp = await self._send("POST", path, url, data=body)
        return self._unpack(resp, parse)

    async def post_json(
        self,
        path: str,
        payload: Any,
        files: Optional[Iterable[PostableFile]] = None,
        parse: Optional[Callable[[Any], T]] = None,
    ) -> Any:
        """POST a multipart body carrying the JSON payload and optional files."""
        return await self._transfer_json("POST", path, payload, files, parse)

    async def put_json(
        self,
        path: str,
        payload: Any,
        parse: Optional[Callable[[Any], T]] = None,
    ) -> Any:
        """PUT a multipart body carrying the JSON payload."""
        return await self._transfer_json("PUT", path, payload, None, parse)

    async def _transfer_json(
        self,
        method: str,
        path: str,
        payload: Any,
        files: Optional[Iterable[PostableFile]],
        parse: Optional[Callable[[Any], T]],
    ) -> Any:
        """Send auth fields, the ``data`` JSON part, and files as multipart.

        RULES:
        - Each auth field is its own text part
        - The payload is serialised into a part named "data" (application/json)
        - Each file is a part named by its file_key, with filename and bytes
        """
        self._ensure_open()
        if payload is None:
            raise GengoValidationError("JSON payload not provided")
        url = self._url(path)

        parts: list[tuple[str, tuple[Optional[str], Any, str]]] = [
            ("data", (None, json.dumps(payload), _JSON_MIME)),
        ]
        for f in files or ():
            parts.append(
                (f.file_key, (f.filename, f.content, f.content_type or "application/octet-stream"))
            )

        resp = await self._send(method, path, url, data=self._auth(), files=parts)
        return self._unpack(resp, parse)
