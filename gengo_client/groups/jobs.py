"""Jobs method group: submitting and listing jobs in bulk."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import Optional

from gengo_client.api.models import (
    JobStatus,
    OrderConfirmation,
    SubmittedJob,
    TimestampedId,
    TranslationJob,
)
from gengo_client.groups.base import (
    MethodGroup,
    jobs_payload,
    pluck_list,
    require_id,
    require_jobs,
)
from gengo_client.errors import GengoValidationError

_JOBS = "translate/jobs"
_JOBS_BY_ID = "translate/jobs/{ids}"


class JobsMethodGroup(MethodGroup):
    """Methods of the Gengo ``translate/jobs`` area."""

    async def submit(self, jobs: Iterable[TranslationJob], as_group: bool = False) -> OrderConfirmation:
        """Submit one or more jobs as a new order.

        WHY: Gengo only accepts jobs in batches; even a single job becomes
        an order.

        HOW: Sends the jobs map as the multipart ``data`` part. File jobs
        reference their upload by file_key and the files travel as extra
        parts in the same request.

        RULES:
        - Jobs are validated (see require_jobs) before any request
        - as_group asks Gengo to assign one translator to the whole batch
        """
        jobs = require_jobs(jobs)
        payload = {"jobs": jobs_payload(jobs), "as_group": int(as_group)}
        files = [job.file for job in jobs if job.file is not None]
        return await self._client.post_json(
            _JOBS, payload, files=files, parse=OrderConfirmation.from_dict
        )

    async def get_recent(
        self,
        status: Optional[JobStatus | str] = None,
        timestamp_after: Optional[datetime | int] = None,
        count: Optional[int] = None,
    ) -> list[TimestampedId]:
        """List recent job ids, optionally filtered.

        Args:
            status: Only jobs in this state.
            timestamp_after: Only jobs created after this moment
                (datetime or Unix seconds).
            count: Maximum number of ids to return.
        """
        if isinstance(timestamp_after, datetime):
            timestamp_after = int(timestamp_after.timestamp())
        if count is not None:
            count = require_id(count, "count")

        params = {
            "status": status,
            "timestamp_after": timestamp_after,
            "count": count,
        }
        return await self._client.get_json(
            _JOBS,
            params,
            parse=pluck_list(None, lambda o: TimestampedId.from_dict(o, "job_id")),
        )

    async def get_by_ids(self, job_ids: Iterable[int]) -> list[SubmittedJob]:
        """Fetch several jobs in one call."""
        ids = [require_id(job_id, "job_id") for job_id in job_ids or []]
        if not ids:
            raise GengoValidationError("At least one job id is required")
        return await self._client.get_json(
            _JOBS_BY_ID.format(ids=",".join(str(i) for i in ids)),
            parse=pluck_list("jobs", SubmittedJob.from_dict),
        )
