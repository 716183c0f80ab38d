"""Shared test fixtures for the gengo_client test suite.

WHY: Almost every test needs a GengoClient whose HTTP traffic is captured
and answered with canned Gengo envelopes. Centralizing the fake here keeps
the individual tests focused on what they assert.

HOW: FakeGengo is an httpx.MockTransport handler: tests queue responses
(or exceptions) with reply()/fail(), run client code through the ``call``
fixture, then inspect the recorded httpx.Request objects.

RULES:
- No test touches the network
- Keys are fixed ("test-public" / "test-private") so signatures are checkable
- Each test gets a fresh FakeGengo (no shared state between tests)
"""

from __future__ import annotations

import asyncio
import json
import re
from typing import Any, Dict, List, Optional
from urllib.parse import parse_qs

import httpx
import pytest

from gengo_client.api.client import GengoClient

PUBLIC_KEY = "test-public"
PRIVATE_KEY = "test-private"
BASE_URL = "https://api.test.gengo.com/v2/"


def ok(response: Any) -> Dict[str, Any]:
    """A successful Gengo envelope."""
    return {"opstat": "ok", "response": response}


def error(code: str, msg: str) -> Dict[str, Any]:
    """A failed Gengo envelope."""
    return {"opstat": "error", "err": {"code": code, "msg": msg}}


class FakeGengo:
    """Records requests and answers them from a queue of canned responses."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self._queue: List[Any] = []

    def reply(self, body: Any = None, status: int = 200, content: Optional[bytes] = None) -> None:
        if content is not None:
            self._queue.append(httpx.Response(status, content=content))
        else:
            self._queue.append(httpx.Response(status, json=body))

    def fail(self, exc_factory) -> None:
        """Queue an exception; exc_factory receives the request."""
        self._queue.append(exc_factory)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._queue:
            raise AssertionError("Unexpected request: {} {}".format(request.method, request.url))
        item = self._queue.pop(0)
        if callable(item):
            raise item(request)
        return item

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def make_client(self, **kwargs) -> GengoClient:
        kwargs.setdefault("public_key", PUBLIC_KEY)
        kwargs.setdefault("private_key", PRIVATE_KEY)
        kwargs.setdefault("base_url", BASE_URL)
        return GengoClient(transport=httpx.MockTransport(self.handler), **kwargs)


def query(request: httpx.Request) -> Dict[str, str]:
    """The request's query parameters as a plain dict."""
    return dict(request.url.params)


def form(request: httpx.Request) -> Dict[str, str]:
    """The request's url-encoded body as a plain dict."""
    return {k: v[0] for k, v in parse_qs(request.content.decode("utf-8")).items()}


def multipart(request: httpx.Request) -> Dict[str, Dict[str, Any]]:
    """Split a multipart body into {name: {"filename", "headers", "body"}}."""
    content_type = request.headers["content-type"]
    assert content_type.startswith("multipart/form-data"), content_type
    boundary = content_type.split("boundary=", 1)[1].encode("ascii")

    parts: Dict[str, Dict[str, Any]] = {}
    for chunk in request.content.split(b"--" + boundary):
        if not chunk.strip() or chunk.startswith(b"--"):
            continue
        if chunk.startswith(b"\r\n"):
            chunk = chunk[2:]
        head, _, body = chunk.partition(b"\r\n\r\n")
        if body.endswith(b"\r\n"):
            body = body[:-2]
        name = re.search(rb'name="([^"]*)"', head).group(1).decode("utf-8")
        filename = re.search(rb'filename="([^"]*)"', head)
        parts[name] = {
            "filename": filename.group(1).decode("utf-8") if filename else None,
            "headers": head.decode("utf-8"),
            "body": body,
        }
    return parts


def data_part(request: httpx.Request) -> Any:
    """Decode the JSON ``data`` part of a multipart request."""
    return json.loads(multipart(request)["data"]["body"])


@pytest.fixture
def fake_api() -> FakeGengo:
    return FakeGengo()


@pytest.fixture
def call(fake_api):
    """Run ``fn(client)`` against a fresh client inside one event loop.

    Usage: ``job = call(lambda c: c.job.get(42))``
    """

    def _call(fn, **client_kwargs):
        async def _go():
            async with fake_api.make_client(**client_kwargs) as client:
                return await fn(client)

        return asyncio.run(_go())

    return _call
