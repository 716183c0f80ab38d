"""Shared base class and argument/response helpers for resource groups.

WHY: Every resource group method does the same three things around its
one API call: check its arguments, format a path, and pick a named member
out of the unpacked ``response``. Keeping those helpers here keeps each
group method down to the part that actually differs.

HOW: MethodGroup stores the owning client. The require_* helpers raise
GengoValidationError before any request is built. pluck() and
pluck_list() build the parse functions handed to the client's transport
methods.

RULES:
- Validation always happens before the client is touched
- Blank means empty or whitespace-only
- Ids must be positive integers (numeric strings are accepted)
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any, Optional, TypeVar

from gengo_client.api.models import TranslationJob
from gengo_client.errors import GengoValidationError

if TYPE_CHECKING:
    from gengo_client.api.client import GengoClient

T = TypeVar("T")


class MethodGroup:
    """Base for the per-area method groups exposed on GengoClient."""

    def __init__(self, client: GengoClient) -> None:
        if client is None:
            raise ValueError("client is required")
        self._client = client


# ---------------------------------------------------------------------------
# Argument validation
# ---------------------------------------------------------------------------


def require_text(value: Optional[str], name: str, message: Optional[str] = None) -> str:
    """Return value unchanged, or raise if it is None/blank."""
    if value is None or not str(value).strip():
        raise GengoValidationError(message or "{} must not be empty".format(name))
    return value


def require_id(value: Any, name: str) -> int:
    """Coerce value to a positive int (ids, counts).

    RULES:
    - bools are rejected even though they are ints
    - floats must be whole numbers; 42.9 is not silently read as 42
    """
    message = "{} must be a positive integer, got {!r}".format(name, value)
    if isinstance(value, bool):
        raise GengoValidationError(message)
    if isinstance(value, float) and not value.is_integer():
        raise GengoValidationError(message)
    try:
        ident = int(value)
    except (TypeError, ValueError, OverflowError):
        raise GengoValidationError(message) from None
    if ident <= 0:
        raise GengoValidationError(message)
    return ident


def require_jobs(jobs: Iterable[TranslationJob], files_required: bool = False) -> list[TranslationJob]:
    """Validate a batch of job descriptions for quoting or submission.

    RULES:
    - At least one job
    - source and target are non-blank
    - Exactly one of body / file / identifier per job
    - file_key values are unique across the batch
    - files_required: every job must carry an uploaded file
    """
    jobs = list(jobs or [])
    if not jobs:
        raise GengoValidationError("At least one job is required")

    seen_keys: set[str] = set()
    for index, job in enumerate(jobs, start=1):
        require_text(job.source, "job {} source language".format(index))
        require_text(job.target, "job {} target language".format(index))

        sources = [s for s in (job.body, job.file, job.identifier) if s is not None]
        if len(sources) != 1:
            raise GengoValidationError(
                "Job {} needs exactly one of body, file, or identifier".format(index)
            )
        if job.body is not None:
            require_text(job.body, "job {} body".format(index))
        if files_required and job.file is None:
            raise GengoValidationError("Job {} has no file to upload".format(index))
        if job.file is not None:
            key = require_text(job.file.file_key, "job {} file key".format(index))
            if key in seen_keys:
                raise GengoValidationError("Duplicate file key {!r}".format(key))
            seen_keys.add(key)
    return jobs


def jobs_payload(jobs: list[TranslationJob]) -> dict[str, dict]:
    """Key each job as job_1, job_2, ... the way Gengo expects the jobs map."""
    return {"job_{}".format(i): job.to_dict() for i, job in enumerate(jobs, start=1)}


# ---------------------------------------------------------------------------
# Response shaping
# ---------------------------------------------------------------------------


def pluck(key: str, factory: Callable[[Any], T]) -> Callable[[Any], Optional[T]]:
    """Parser: build one object from response[key] (None if absent)."""

    def parse(response: Any) -> Optional[T]:
        value = response.get(key) if isinstance(response, dict) else None
        return factory(value) if value is not None else None

    return parse


def pluck_list(key: Optional[str], factory: Callable[[Any], T]) -> Callable[[Any], list[T]]:
    """Parser: build a list from response[key], or from response itself when key is None."""

    def parse(response: Any) -> list[T]:
        if key is not None:
            response = response.get(key) if isinstance(response, dict) else None
        return [factory(item) for item in response or []]

    return parse
