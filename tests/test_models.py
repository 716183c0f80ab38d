"""Tests for the payload dataclasses and request-side types."""

from __future__ import annotations

import dataclasses
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from gengo_client.api.models import (
    AccountBalance,
    Feedback,
    JobStatus,
    Order,
    PostableFile,
    Quote,
    SubmittedFileJob,
    SubmittedJob,
    Tier,
    TimestampedId,
    TranslationJob,
)


class TestSubmittedJob:
    def test_full_job(self):
        job = SubmittedJob.from_dict({
            "job_id": "384985",
            "order_id": "232",
            "status": "approved",
            "slug": "API Job test",
            "body_src": "Liverpool FC",
            "body_tgt": "リバプールFC",
            "lc_src": "en",
            "lc_tgt": "ja",
            "tier": "standard",
            "unit_count": "2",
            "credits": "0.10",
            "currency": "USD",
            "eta": -1,
            "ctime": 1313475693,
            "auto_approve": "0",
            "custom_data": "{\"ref\": 7}",
            "position": 0,
        })
        assert job.id == 384985
        assert job.order_id == 232
        assert job.status == JobStatus.APPROVED
        assert job.target == "ja"
        assert job.unit_count == 2
        assert job.credits == Decimal("0.10")
        assert job.eta == -1
        assert job.created == datetime.fromtimestamp(1313475693, tz=timezone.utc)
        assert job.auto_approve is False
        assert job.custom_data == "{\"ref\": 7}"
        assert job.position == 0

    def test_minimal_job_defaults(self):
        job = SubmittedJob.from_dict({"job_id": 1})
        assert job.status is None
        assert job.body_tgt is None
        assert job.credits is None
        assert job.created is None
        assert job.auto_approve is False

    @pytest.mark.parametrize("raw,expected", [("1", True), ("true", True), (1, True), ("0", False), (0, False)])
    def test_auto_approve_flag(self, raw, expected):
        assert SubmittedJob.from_dict({"job_id": 1, "auto_approve": raw}).auto_approve is expected

    def test_unknown_status_kept_as_string(self):
        assert SubmittedJob.from_dict({"job_id": 1, "status": "archived"}).status == "archived"

    def test_missing_id_fails(self):
        with pytest.raises(KeyError):
            SubmittedJob.from_dict({"status": "available"})

    def test_is_frozen(self):
        job = SubmittedJob.from_dict({"job_id": 1})
        with pytest.raises(dataclasses.FrozenInstanceError):
            job.status = "approved"

    def test_file_job_links(self):
        job = SubmittedFileJob.from_dict({
            "job_id": "5",
            "status": "approved",
            "src_file_link": "https://gengo.example.com/src/5",
            "tgt_file_link": "https://gengo.example.com/tgt/5",
        })
        assert isinstance(job, SubmittedJob)
        assert job.id == 5
        assert job.source_file_url.endswith("/src/5")
        assert job.translated_file_url.endswith("/tgt/5")


class TestConverters:
    def test_credits_from_float_do_not_gain_binary_noise(self):
        assert AccountBalance.from_dict({"credits": 0.1}).credits == Decimal("0.1")

    def test_blank_credits_become_none(self):
        assert AccountBalance.from_dict({"credits": ""}).credits is None

    def test_feedback_rating_from_float_string(self):
        assert Feedback.from_dict({"rating": "3.0"}).rating == 3

    def test_feedback_without_rating(self):
        assert Feedback.from_dict({}).rating is None

    def test_timestamped_id_custom_key(self):
        item = TimestampedId.from_dict({"rev_id": "9", "ctime": "1700000000"}, "rev_id")
        assert item.id == 9
        assert item.created.tzinfo is timezone.utc

    def test_quote_maps_source(self):
        quote = Quote.from_dict({"unit_count": 4, "credits": "0.20", "lc_src": "en", "type": "text"})
        assert quote.source == "en"
        assert quote.eta is None

    def test_order_buckets(self):
        order = Order.from_dict({
            "order_id": 10,
            "jobs_reviewable": ["3", 4],
            "jobs_cancelled": None,
        })
        assert order.jobs_reviewable == (3, 4)
        assert order.jobs_cancelled == ()
        assert order.jobs_approved == ()


class TestTranslationJob:
    def test_text_job_defaults(self):
        assert TranslationJob(source="en", target="ja", body="Hello").to_dict() == {
            "type": "text",
            "lc_src": "en",
            "lc_tgt": "ja",
            "tier": "standard",
            "auto_approve": 0,
            "force": 0,
            "use_preferred": 0,
            "body_src": "Hello",
        }

    def test_options_and_flags(self):
        job = TranslationJob(
            source="en",
            target="es",
            body="Hi",
            tier=Tier.PRO,
            slug="greeting",
            comment="Casual register",
            custom_data="ref-7",
            callback_url="https://example.com/hook",
            auto_approve=True,
            force=True,
            use_preferred=True,
            max_chars=40,
        )
        data = job.to_dict()
        assert data["tier"] == "pro"
        assert data["auto_approve"] == 1
        assert data["force"] == 1
        assert data["use_preferred"] == 1
        assert data["comment"] == "Casual register"
        assert data["callback_url"] == "https://example.com/hook"
        assert data["max_chars"] == 40
        assert "tone" not in data
        assert "purpose" not in data

    def test_string_tier_passes_through(self):
        assert TranslationJob(source="en", target="ja", body="x", tier="ultra").to_dict()["tier"] == "ultra"

    def test_file_job(self):
        doc = PostableFile("file_a", "a.txt", b"text")
        job = TranslationJob(source="en", target="ja", file=doc)
        assert job.is_file_job
        data = job.to_dict()
        assert data["type"] == "file"
        assert data["file_key"] == "file_a"
        assert "body_src" not in data

    def test_identifier_job(self):
        job = TranslationJob(source="en", target="ja", identifier="abc")
        assert job.is_file_job
        assert job.to_dict()["identifier"] == "abc"

    def test_extra_fields_merged(self):
        job = TranslationJob(source="en", target="ja", body="x", extra={"glossary_id": 12})
        assert job.to_dict()["glossary_id"] == 12


class TestPostableFile:
    def test_from_path(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_bytes(b"Translate me")
        doc = PostableFile.from_path("file_01", path)
        assert doc.file_key == "file_01"
        assert doc.filename == "notes.txt"
        assert doc.content == b"Translate me"
        assert doc.content_type == "text/plain"

    def test_unknown_extension_falls_back_to_octet_stream(self, tmp_path):
        path = tmp_path / "blob.gengoxyz"
        path.write_bytes(b"\x00\x01")
        assert PostableFile.from_path("k", str(path)).content_type == "application/octet-stream"
