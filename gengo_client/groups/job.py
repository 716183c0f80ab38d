"""Job method group: operations on a single submitted job.

WHY: After submission a job is reviewed, commented on, approved,
rejected, or sent back for revision. All of these address one job by id
under ``translate/job/{id}``.

HOW: Reads are signed GETs whose ``response`` member is plucked into a
payload dataclass. State transitions are PUTs with an ``action`` field.
Cancellation is a DELETE; new comments are POSTed as JSON.

RULES:
- Mandatory free text (reject comment/captcha, revise comment, comment
  body) is validated before any request
- Optional comments that are blank are simply not sent
- Every method makes exactly one request
"""

from __future__ import annotations

from typing import Optional

from gengo_client.api.models import (
    Comment,
    Feedback,
    RejectionReason,
    Revision,
    Stars,
    SubmittedFileJob,
    SubmittedJob,
    TimestampedId,
)
from gengo_client.errors import GengoValidationError
from gengo_client.groups.base import (
    MethodGroup,
    pluck,
    pluck_list,
    require_id,
    require_text,
)

_JOB = "translate/job/{job_id}"
_COMMENT = "translate/job/{job_id}/comment"
_COMMENTS = "translate/job/{job_id}/comments"
_FEEDBACK = "translate/job/{job_id}/feedback"
_PREVIEW = "translate/job/{job_id}/preview"
_REVISION = "translate/job/{job_id}/revision/{revision_id}"
_REVISIONS = "translate/job/{job_id}/revisions"


def _has_text(value: Optional[str]) -> bool:
    return value is not None and bool(value.strip())


class JobMethodGroup(MethodGroup):
    """Methods of the Gengo ``translate/job`` area."""

    async def get(self, job_id: int, include_machine_translation: bool = False) -> SubmittedJob:
        """Fetch a submitted job.

        Args:
            job_id: The job id.
            include_machine_translation: Ask for a machine-translated
                preview in body_tgt while no human translation exists.
        """
        job_id = require_id(job_id, "job_id")
        return await self._client.get_json(
            _JOB.format(job_id=job_id),
            {"pre_mt": include_machine_translation},
            parse=pluck("job", SubmittedJob.from_dict),
        )

    async def get_file(self, job_id: int, include_machine_translation: bool = False) -> SubmittedFileJob:
        """Fetch a file job, including the translated file link."""
        job_id = require_id(job_id, "job_id")
        return await self._client.get_json(
            _JOB.format(job_id=job_id),
            {"pre_mt": include_machine_translation},
            parse=pluck("job", SubmittedFileJob.from_dict),
        )

    async def get_feedback(self, job_id: int) -> Feedback:
        """Feedback left for an approved job."""
        job_id = require_id(job_id, "job_id")
        return await self._client.get_json(
            _FEEDBACK.format(job_id=job_id),
            parse=pluck("feedback", Feedback.from_dict),
        )

    async def get_preview_image(self, job_id: int) -> bytes:
        """Raw JPEG preview of the translated text."""
        job_id = require_id(job_id, "job_id")
        return await self._client.get_bytes(_PREVIEW.format(job_id=job_id))

    async def get_revision(self, job_id: int, revision_id: int) -> Revision:
        job_id = require_id(job_id, "job_id")
        revision_id = require_id(revision_id, "revision_id")
        return await self._client.get_json(
            _REVISION.format(job_id=job_id, revision_id=revision_id),
            parse=pluck("revision", Revision.from_dict),
        )

    async def get_revisions(self, job_id: int) -> list[TimestampedId]:
        """Revision ids of a job, each with its creation time."""
        job_id = require_id(job_id, "job_id")
        return await self._client.get_json(
            _REVISIONS.format(job_id=job_id),
            parse=pluck_list("revisions", lambda o: TimestampedId.from_dict(o, "rev_id")),
        )

    async def approve(
        self,
        job_id: int,
        stars: Stars | int,
        comment_for_translator: Optional[str] = None,
        comment_for_gengo: Optional[str] = None,
        gengo_comment_is_public: bool = False,
    ) -> None:
        """Approve a job in the reviewable state.

        RULES:
        - stars must be 1–5
        - public is only sent together with a comment for Gengo
        """
        job_id = require_id(job_id, "job_id")
        try:
            rating = Stars(stars)
        except ValueError:
            raise GengoValidationError("stars must be between 1 and 5, got {!r}".format(stars)) from None

        data = {"action": "approve", "rating": str(int(rating))}
        if _has_text(comment_for_translator):
            data["for_translator"] = comment_for_translator
        if _has_text(comment_for_gengo):
            data["for_mygengo"] = comment_for_gengo
            data["public"] = str(int(gengo_comment_is_public))

        await self._client.put_json(_JOB.format(job_id=job_id), data)

    async def reject(
        self,
        job_id: int,
        reason: RejectionReason | str,
        comment: str,
        captcha: str,
        requeue: bool = True,
    ) -> None:
        """Reject a reviewable job.

        Args:
            job_id: The job id.
            reason: Why the translation is rejected.
            comment: Elaboration on the reason (mandatory).
            captcha: Text of the captcha image linked from the job's
                captcha_url (mandatory).
            requeue: Put the job back for another translator instead of
                cancelling it.
        """
        job_id = require_id(job_id, "job_id")
        require_text(comment, "comment", "A comment is mandatory when rejecting a job")
        require_text(captcha, "captcha", "The captcha text must be provided when rejecting a job")
        try:
            reason = RejectionReason(reason)
        except ValueError:
            raise GengoValidationError("Unknown rejection reason {!r}".format(reason)) from None

        data = {
            "action": "reject",
            "reason": reason.value,
            "comment": comment,
            "captcha": captcha,
            "follow_up": "requeue" if requeue else "cancel",
        }
        await self._client.put_json(_JOB.format(job_id=job_id), data)

    async def return_for_revision(self, job_id: int, comment: str) -> None:
        """Send a reviewable job back to the translator with a comment."""
        job_id = require_id(job_id, "job_id")
        require_text(comment, "comment", "A comment is mandatory when requesting a revision")
        await self._client.put_json(
            _JOB.format(job_id=job_id),
            {"action": "revise", "comment": comment},
        )

    async def delete(self, job_id: int) -> None:
        """Cancel a job that is still available (not yet picked up)."""
        job_id = require_id(job_id, "job_id")
        await self._client.delete_json(_JOB.format(job_id=job_id))

    async def get_comments(self, job_id: int) -> list[Comment]:
        job_id = require_id(job_id, "job_id")
        return await self._client.get_json(
            _COMMENTS.format(job_id=job_id),
            parse=pluck_list("thread", Comment.from_dict),
        )

    async def post_comment(self, job_id: int, body: str) -> None:
        job_id = require_id(job_id, "job_id")
        require_text(body, "body", "Comment body not provided")
        await self._client.post_json(_COMMENT.format(job_id=job_id), {"body": body})
