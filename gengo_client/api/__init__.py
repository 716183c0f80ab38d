"""Gengo API plumbing: signing, transport, envelope handling, payloads.

WHY: The resource groups should only decide paths and result shapes. All
of the HTTP detail (auth fields, body encoding, envelope unpacking)
lives in this package.

HOW: auth.py signs timestamps, client.py owns the httpx.AsyncClient and
the request verbs, models.py holds the typed payload dataclasses.

RULES:
- All HTTP calls go through GengoClient (no direct httpx usage elsewhere)
- Authentication is api_key plus an HMAC-SHA1 timestamp signature
"""

from gengo_client.api.client import GengoClient, unpack_envelope
from gengo_client.api.models import PostableFile, SubmittedJob, TranslationJob

__all__ = ["GengoClient", "PostableFile", "SubmittedJob", "TranslationJob", "unpack_envelope"]
