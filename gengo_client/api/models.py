"""Gengo API request and response dataclasses.

WHY: The Gengo API returns loosely typed JSON: ids arrive as strings or
numbers, credits as strings or floats, timestamps as Unix seconds. Typed
dataclasses make these structures explicit, normalise the types once,
and give callers IDE autocompletion instead of dict lookups.

HOW: Each response dataclass maps one Gengo JSON object and has a
from_dict() factory that copies the named fields out of the parsed
response. Request-side types (TranslationJob, PostableFile) have
to_dict() / from_path() helpers instead.

RULES:
- Response dataclasses are frozen; they are views, not live objects
- Ids are int, credits are Decimal, timestamps are aware UTC datetimes
- Absent optional fields become None, never KeyError
- Unknown statuses and tiers are kept as plain strings
"""

from __future__ import annotations

import enum
import mimetypes
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import Any, Optional

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class Stars(enum.IntEnum):
    """Quality rating given when approving a job."""

    ONE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5


class RejectionReason(str, enum.Enum):
    """Reason codes accepted by the reject action."""

    QUALITY = "quality"
    INCOMPLETE = "incomplete"
    OTHER = "other"


class Tier(str, enum.Enum):
    """Translation quality tier."""

    MACHINE = "machine"
    STANDARD = "standard"
    PRO = "pro"
    ULTRA = "ultra"


class JobStatus(str, enum.Enum):
    """Job states reported by Gengo.

    Inherits from str so members compare equal to the raw status strings
    found on SubmittedJob.status.
    """

    QUEUED = "queued"
    AVAILABLE = "available"
    PENDING = "pending"
    REVIEWABLE = "reviewable"
    APPROVED = "approved"
    REVISING = "revising"
    REJECTED = "rejected"
    CANCELED = "canceled"
    HOLD = "hold"


# ---------------------------------------------------------------------------
# Field converters (module-private)
# ---------------------------------------------------------------------------


def _int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    return int(value)


def _decimal(value: Any) -> Optional[Decimal]:
    if value is None or value == "":
        return None
    return Decimal(str(value))


def _bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes")
    return bool(value)


def _timestamp(value: Any) -> Optional[datetime]:
    """Convert Unix seconds (int, float, or numeric string) to aware UTC."""
    if value is None or value == "":
        return None
    return datetime.fromtimestamp(float(value), tz=timezone.utc)


def _int_list(values: Any) -> list[int]:
    return [int(v) for v in values or []]


# ---------------------------------------------------------------------------
# Account
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AccountStats:
    """Response of GET account/stats."""

    user_since: Optional[datetime]
    credits_spent: Optional[Decimal]
    currency: Optional[str] = None
    billing_type: Optional[str] = None
    customer_type: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> AccountStats:
        return cls(
            user_since=_timestamp(data.get("user_since")),
            credits_spent=_decimal(data.get("credits_spent")),
            currency=data.get("currency"),
            billing_type=data.get("billing_type"),
            customer_type=data.get("customer_type"),
        )


@dataclass(frozen=True)
class AccountBalance:
    """Response of GET account/balance."""

    credits: Optional[Decimal]
    currency: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> AccountBalance:
        return cls(
            credits=_decimal(data.get("credits")),
            currency=data.get("currency"),
        )


@dataclass(frozen=True)
class AccountInfo:
    """Response of GET account/me."""

    email: Optional[str]
    full_name: Optional[str] = None
    display_name: Optional[str] = None
    language_code: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> AccountInfo:
        return cls(
            email=data.get("email"),
            full_name=data.get("full_name"),
            display_name=data.get("display_name"),
            language_code=data.get("language_code"),
        )


@dataclass(frozen=True)
class PreferredTranslator:
    """One translator on the account's preferred list."""

    id: int
    number_of_jobs: Optional[int] = None
    last_login: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: dict) -> PreferredTranslator:
        return cls(
            id=int(data["id"]),
            number_of_jobs=_int(data.get("number_of_jobs")),
            last_login=_timestamp(data.get("last_login")),
        )


@dataclass(frozen=True)
class PreferredTranslatorGroup:
    """Preferred translators for one language pair and tier.

    RULES:
    - source/target are Gengo language codes (lc_src / lc_tgt)
    - translators keeps the API's order
    """

    source: str
    target: str
    tier: str
    translators: tuple[PreferredTranslator, ...] = ()

    @classmethod
    def from_dict(cls, data: dict) -> PreferredTranslatorGroup:
        return cls(
            source=data["lc_src"],
            target=data["lc_tgt"],
            tier=data["tier"],
            translators=tuple(
                PreferredTranslator.from_dict(t) for t in data.get("translators") or []
            ),
        )


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Language:
    """A language supported by the service."""

    code: str
    name: str
    localized_name: Optional[str] = None
    unit_type: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> Language:
        return cls(
            code=data["lc"],
            name=data["language"],
            localized_name=data.get("localized_name"),
            unit_type=data.get("unit_type"),
        )


@dataclass(frozen=True)
class LanguagePair:
    """A supported source/target pair with its price for one tier."""

    source: str
    target: str
    tier: str
    unit_price: Optional[Decimal] = None
    currency: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> LanguagePair:
        return cls(
            source=data["lc_src"],
            target=data["lc_tgt"],
            tier=data["tier"],
            unit_price=_decimal(data.get("unit_price")),
            currency=data.get("currency"),
        )


@dataclass(frozen=True)
class Quote:
    """Price estimate for one job in a quote request.

    RULES:
    - identifier is only set for file quotes; pass it back on submission
    - eta is the estimated turnaround in seconds
    """

    unit_count: Optional[int]
    credits: Optional[Decimal]
    eta: Optional[int] = None
    currency: Optional[str] = None
    type: Optional[str] = None
    source: Optional[str] = None
    identifier: Optional[str] = None
    title: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> Quote:
        return cls(
            unit_count=_int(data.get("unit_count")),
            credits=_decimal(data.get("credits")),
            eta=_int(data.get("eta")),
            currency=data.get("currency"),
            type=data.get("type"),
            source=data.get("lc_src"),
            identifier=data.get("identifier"),
            title=data.get("title"),
        )


# ---------------------------------------------------------------------------
# Jobs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SubmittedJob:
    """A job as returned by GET translate/job/{id} and translate/jobs/{ids}.

    WHY: This is the object callers poll to follow a translation through
    available → pending → reviewable → approved.

    HOW: Copies the documented job fields. body_tgt is only populated once
    a translation (or, with pre_mt, a machine preview) exists.

    RULES:
    - id comes from job_id and is always present
    - status is the raw string; compare with JobStatus members
    - custom_data is returned untouched (Gengo stores it as text)
    """

    id: int
    status: Optional[str]
    order_id: Optional[int] = None
    slug: Optional[str] = None
    body_src: Optional[str] = None
    body_tgt: Optional[str] = None
    source: Optional[str] = None
    target: Optional[str] = None
    tier: Optional[str] = None
    unit_count: Optional[int] = None
    credits: Optional[Decimal] = None
    currency: Optional[str] = None
    eta: Optional[int] = None
    created: Optional[datetime] = None
    auto_approve: bool = False
    custom_data: Optional[str] = None
    callback_url: Optional[str] = None
    captcha_url: Optional[str] = None
    preview_url: Optional[str] = None
    position: Optional[int] = None

    @classmethod
    def _fields_from_dict(cls, data: dict) -> dict:
        return {
            "id": int(data["job_id"]),
            "status": data.get("status"),
            "order_id": _int(data.get("order_id")),
            "slug": data.get("slug"),
            "body_src": data.get("body_src"),
            "body_tgt": data.get("body_tgt"),
            "source": data.get("lc_src"),
            "target": data.get("lc_tgt"),
            "tier": data.get("tier"),
            "unit_count": _int(data.get("unit_count")),
            "credits": _decimal(data.get("credits")),
            "currency": data.get("currency"),
            "eta": _int(data.get("eta")),
            "created": _timestamp(data.get("ctime")),
            "auto_approve": _bool(data.get("auto_approve", False)),
            "custom_data": data.get("custom_data"),
            "callback_url": data.get("callback_url"),
            "captcha_url": data.get("captcha_url"),
            "preview_url": data.get("preview_url"),
            "position": _int(data.get("position")),
        }

    @classmethod
    def from_dict(cls, data: dict) -> SubmittedJob:
        return cls(**cls._fields_from_dict(data))


@dataclass(frozen=True)
class SubmittedFileJob(SubmittedJob):
    """A file job; adds the download link for the translated file."""

    translated_file_url: Optional[str] = None
    source_file_url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> SubmittedFileJob:
        return cls(
            **cls._fields_from_dict(data),
            translated_file_url=data.get("tgt_file_link"),
            source_file_url=data.get("src_file_link"),
        )


@dataclass(frozen=True)
class Feedback:
    """Rating and comment left when a job was approved."""

    rating: Optional[int]
    for_translator: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> Feedback:
        rating = data.get("rating")
        return cls(
            rating=int(float(rating)) if rating not in (None, "") else None,
            for_translator=data.get("for_translator"),
        )


@dataclass(frozen=True)
class Revision:
    """One stored revision of a job's translation."""

    body_tgt: Optional[str]
    created: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: dict) -> Revision:
        return cls(
            body_tgt=data.get("body_tgt"),
            created=_timestamp(data.get("ctime")),
        )


@dataclass(frozen=True)
class TimestampedId:
    """An id paired with its creation time (revision lists, job lists).

    RULES:
    - id_key names the JSON field holding the id ("rev_id", "job_id", ...)
    """

    id: int
    created: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: dict, id_key: str = "id", time_key: str = "ctime") -> TimestampedId:
        return cls(id=int(data[id_key]), created=_timestamp(data.get(time_key)))


@dataclass(frozen=True)
class Comment:
    """An entry in a job or order comment thread."""

    body: str
    author: Optional[str] = None
    created: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: dict) -> Comment:
        return cls(
            body=data.get("body", ""),
            author=data.get("author"),
            created=_timestamp(data.get("ctime")),
        )


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class OrderConfirmation:
    """Response of POST translate/jobs."""

    order_id: int
    job_count: Optional[int] = None
    credits_used: Optional[Decimal] = None
    currency: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> OrderConfirmation:
        return cls(
            order_id=int(data["order_id"]),
            job_count=_int(data.get("job_count")),
            credits_used=_decimal(data.get("credits_used")),
            currency=data.get("currency"),
        )


@dataclass(frozen=True)
class Order:
    """Response of GET translate/order/{id}.

    HOW: Gengo lists the job ids of the order bucketed by state; each
    bucket becomes a tuple of ints.
    """

    id: int
    total_credits: Optional[Decimal] = None
    total_units: Optional[int] = None
    total_jobs: Optional[int] = None
    currency: Optional[str] = None
    jobs_queued: tuple[int, ...] = ()
    jobs_available: tuple[int, ...] = ()
    jobs_pending: tuple[int, ...] = ()
    jobs_reviewable: tuple[int, ...] = ()
    jobs_approved: tuple[int, ...] = ()
    jobs_revising: tuple[int, ...] = ()
    jobs_cancelled: tuple[int, ...] = ()

    @classmethod
    def from_dict(cls, data: dict) -> Order:
        return cls(
            id=int(data["order_id"]),
            total_credits=_decimal(data.get("total_credits")),
            total_units=_int(data.get("total_units")),
            total_jobs=_int(data.get("total_jobs")),
            currency=data.get("currency"),
            jobs_queued=tuple(_int_list(data.get("jobs_queued"))),
            jobs_available=tuple(_int_list(data.get("jobs_available"))),
            jobs_pending=tuple(_int_list(data.get("jobs_pending"))),
            jobs_reviewable=tuple(_int_list(data.get("jobs_reviewable"))),
            jobs_approved=tuple(_int_list(data.get("jobs_approved"))),
            jobs_revising=tuple(_int_list(data.get("jobs_revising"))),
            jobs_cancelled=tuple(_int_list(data.get("jobs_cancelled"))),
        )


# ---------------------------------------------------------------------------
# Request-side types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PostableFile:
    """A file to upload as one multipart part.

    RULES:
    - file_key is the multipart field name and must match the job's file_key
    - content is the raw bytes; nothing is streamed from disk lazily
    """

    file_key: str
    filename: str
    content: bytes
    content_type: Optional[str] = None

    @classmethod
    def from_path(cls, file_key: str, path: Path | str) -> PostableFile:
        path = Path(path)
        content_type, _ = mimetypes.guess_type(path.name)
        return cls(
            file_key=file_key,
            filename=path.name,
            content=path.read_bytes(),
            content_type=content_type or "application/octet-stream",
        )


@dataclass
class TranslationJob:
    """Description of one job to quote or submit.

    WHY: Text jobs and file jobs share almost every option; only the
    source differs (body text vs. an uploaded file or a quoted file
    identifier).

    HOW: to_dict() produces the JSON object Gengo expects inside the
    ``jobs`` map. File jobs reference their upload via file_key; the
    PostableFile itself travels as a separate multipart part.

    RULES:
    - Exactly one of body, file, identifier describes the source
    - Boolean flags are sent as 0/1 integers
    - Options left as None are omitted from the payload
    """

    source: str
    target: str
    body: Optional[str] = None
    file: Optional[PostableFile] = None
    identifier: Optional[str] = None
    tier: Tier | str = Tier.STANDARD
    slug: Optional[str] = None
    comment: Optional[str] = None
    custom_data: Optional[str] = None
    callback_url: Optional[str] = None
    auto_approve: bool = False
    force: bool = False
    use_preferred: bool = False
    purpose: Optional[str] = None
    tone: Optional[str] = None
    max_chars: Optional[int] = None
    position: Optional[int] = None
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def is_file_job(self) -> bool:
        return self.file is not None or self.identifier is not None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "type": "file" if self.is_file_job else "text",
            "lc_src": self.source,
            "lc_tgt": self.target,
            "tier": self.tier.value if isinstance(self.tier, Tier) else self.tier,
            "auto_approve": int(self.auto_approve),
            "force": int(self.force),
            "use_preferred": int(self.use_preferred),
        }
        if self.body is not None:
            data["body_src"] = self.body
        if self.file is not None:
            data["file_key"] = self.file.file_key
        if self.identifier is not None:
            data["identifier"] = self.identifier
        optional = {
            "slug": self.slug,
            "comment": self.comment,
            "custom_data": self.custom_data,
            "callback_url": self.callback_url,
            "purpose": self.purpose,
            "tone": self.tone,
            "max_chars": self.max_chars,
            "position": self.position,
        }
        data.update({k: v for k, v in optional.items() if v is not None})
        data.update(self.extra)
        return data
