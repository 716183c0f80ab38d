"""Service method group: languages, language pairs, and price quotes.

WHY: Before submitting, callers need to know which language pairs and
tiers Gengo offers, and what a batch of jobs will cost.

HOW: The language listings are public and sent unsigned (api_key only).
Quotes POST the same jobs map used for submission; file quotes upload
the files and return an identifier per job that a later submission can
reference instead of re-uploading.

RULES:
- get_languages / get_language_pairs are unsigned
- get_file_quote requires every job to carry a file
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Optional

from gengo_client.api.models import Language, LanguagePair, Quote, TranslationJob
from gengo_client.groups.base import MethodGroup, jobs_payload, pluck_list, require_jobs

_LANGUAGES = "translate/service/languages"
_LANGUAGE_PAIRS = "translate/service/language_pairs"
_QUOTE = "translate/service/quote"
_FILE_QUOTE = "translate/service/quote/file"


def _parse_quotes(response: Any) -> dict[str, Quote]:
    """Map job keys to quotes.

    Gengo returns ``jobs`` either as an object keyed by job key or as a
    list of such objects.
    """
    jobs = response.get("jobs") if isinstance(response, dict) else None
    if isinstance(jobs, list):
        merged: dict[str, Any] = {}
        for item in jobs:
            merged.update(item)
        jobs = merged
    return {key: Quote.from_dict(value) for key, value in (jobs or {}).items()}


class ServiceMethodGroup(MethodGroup):
    """Methods of the Gengo ``translate/service`` area."""

    async def get_languages(self) -> list[Language]:
        return await self._client.get_json(
            _LANGUAGES, signed=False, parse=pluck_list(None, Language.from_dict)
        )

    async def get_language_pairs(self, source: Optional[str] = None) -> list[LanguagePair]:
        """Supported pairs and prices, optionally only from one source language."""
        params = {"lc_src": source} if source and source.strip() else None
        return await self._client.get_json(
            _LANGUAGE_PAIRS,
            params,
            signed=False,
            parse=pluck_list(None, LanguagePair.from_dict),
        )

    async def get_quote(self, jobs: Iterable[TranslationJob]) -> dict[str, Quote]:
        """Price and turnaround estimate for text jobs, keyed job_1, job_2, ..."""
        jobs = require_jobs(jobs)
        return await self._client.post_json(
            _QUOTE, {"jobs": jobs_payload(jobs)}, parse=_parse_quotes
        )

    async def get_file_quote(self, jobs: Iterable[TranslationJob]) -> dict[str, Quote]:
        """Upload files and quote them; each Quote carries an identifier."""
        jobs = require_jobs(jobs, files_required=True)
        files = [job.file for job in jobs]
        return await self._client.post_json(
            _FILE_QUOTE, {"jobs": jobs_payload(jobs)}, files=files, parse=_parse_quotes
        )
