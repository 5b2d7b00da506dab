"""Capture workflow for the job information form.

Coordinates manual edits, resume upload/extraction and submission. Only one
extraction result is ever applied: each file selection issues a new request
token, and a completion whose token is no longer the latest (or that arrives
after the resume was cleared) is dropped.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum

from jobinfo_capture.clients.extraction_client import ErrorKind, ExtractionClient, ExtractionError
from jobinfo_capture.models.attachment import ResumeAttachment
from jobinfo_capture.models.job_info import (
    DEFAULT_EXPERIENCE_LEVEL,
    EXPERIENCE_LEVELS,
    JobInfo,
    JobInfoDraft,
)
from jobinfo_capture.models.technologies import AVAILABLE_TECHNOLOGIES, TechnologyList
from jobinfo_capture.storage.job_info_store import JobInfoRepository
from jobinfo_capture.validation import validate_job_info

logger = logging.getLogger(__name__)

SAVE_ERROR_MESSAGE = "There was an error saving your job information"

# notify(level, message), e.g. ("error", "Please select a PDF file.")
Notifier = Callable[[str, str], None]


class CaptureState(str, Enum):
    MANUAL = "manual"
    RESUME_PENDING = "resume_pending"
    RESUME_APPLIED = "resume_applied"
    RESUME_FAILED = "resume_failed"


@dataclass
class SubmitResult:
    """Outcome of a submit attempt."""

    ok: bool
    field_errors: dict[str, str] = field(default_factory=dict)
    message: str | None = None
    job_info_id: str | None = None


class CaptureStateMachine:
    """Owns the draft, the capture mode and the attached resume."""

    def __init__(
        self,
        extraction: ExtractionClient,
        repository: JobInfoRepository,
        *,
        job_info: JobInfo | None = None,
        experience_levels: Sequence[str] = EXPERIENCE_LEVELS,
        default_experience_level: str = DEFAULT_EXPERIENCE_LEVEL,
        available_technologies: Sequence[str] = AVAILABLE_TECHNOLOGIES,
        notify: Notifier | None = None,
    ):
        self.extraction = extraction
        self.repository = repository
        self.experience_levels = tuple(experience_levels)
        self.available_technologies = tuple(available_technologies)
        self._notify_cb = notify

        if job_info is not None:
            self.job_info_id: str | None = job_info.id
            self._draft = JobInfoDraft.from_job_info(job_info)
        else:
            self.job_info_id = None
            self._draft = JobInfoDraft(experience_level=default_experience_level)

        self._state = CaptureState.MANUAL
        self._attachment: ResumeAttachment | None = None
        self._token = 0
        self._submitting = False
        self.field_errors: dict[str, str] = {}
        self.closed = False

    # --- read-only views ---

    @property
    def state(self) -> CaptureState:
        return self._state

    @property
    def attachment(self) -> ResumeAttachment | None:
        return self._attachment

    @property
    def has_resume(self) -> bool:
        return self._draft.has_resume

    @property
    def technologies(self) -> TechnologyList:
        return self._draft.technologies

    @property
    def technology_controls_enabled(self) -> bool:
        """Manual add/remove is only allowed while no resume is in play."""
        return self._state is CaptureState.MANUAL

    @property
    def is_submitting(self) -> bool:
        return self._submitting

    @property
    def draft(self) -> JobInfoDraft:
        """Snapshot of the current draft, detached from further edits."""
        return self._draft.model_copy(
            update={"technologies": TechnologyList(self._draft.technologies)}
        )

    def technology_options(self) -> list[str]:
        """Predefined technologies not already selected."""
        return [t for t in self.available_technologies if t not in self._draft.technologies]

    def validate(self) -> dict[str, str]:
        return validate_job_info(self._draft, self.has_resume, self.experience_levels)

    # --- field edits (allowed in every state) ---

    def set_name(self, name: str) -> None:
        self._draft.name = name

    def set_title(self, title: str | None) -> None:
        self._draft.title = title

    def set_experience_level(self, level: str) -> None:
        self._draft.experience_level = level

    def set_description(self, description: str) -> None:
        self._draft.description = description

    # --- technologies ---

    def add_technology(self, name: str) -> bool:
        """Add a technology by hand. Returns False if rejected or already present."""
        if not self.technology_controls_enabled:
            logger.debug("Rejected manual add of %r in state %s", name, self._state.value)
            return False
        return self._draft.technologies.add(name)

    def remove_technology(self, name: str) -> bool:
        """Remove a technology by hand. Returns False if rejected or absent."""
        if not self.technology_controls_enabled:
            logger.debug("Rejected manual remove of %r in state %s", name, self._state.value)
            return False
        return self._draft.technologies.remove(name)

    # --- resume workflow ---

    async def select_file(self, attachment: ResumeAttachment) -> CaptureState:
        """Attach a resume and apply the technologies extracted from it.

        A non-PDF file is reported and leaves everything untouched. Selecting
        a new file while an extraction is in flight supersedes it.
        """
        if not attachment.is_pdf:
            self._notify("error", "Please select a PDF file.")
            logger.info(
                "Rejected %s: %s (%s)",
                attachment.filename,
                ErrorKind.INVALID_FILE_TYPE.value,
                attachment.media_type,
            )
            return self._state

        self._token += 1
        token = self._token
        self._attachment = attachment
        # Description becomes optional as soon as a resume is attached
        self._draft.has_resume = True
        self._transition(CaptureState.RESUME_PENDING)

        try:
            technologies = await self.extraction.extract(attachment)
        except ExtractionError as exc:
            if self._is_current(token):
                self._fail(exc.kind, exc.message)
            else:
                logger.debug("Discarding stale extraction failure (token %d)", token)
            return self._state
        except Exception:
            logger.error("Unexpected error during resume extraction", exc_info=True)
            if self._is_current(token):
                self._fail(ErrorKind.NETWORK_FAILURE, "Failed to parse resume.")
            return self._state

        if not self._is_current(token):
            logger.debug("Discarding stale extraction result (token %d)", token)
            return self._state

        try:
            self._draft.technologies.replace_all(technologies)
        except TypeError as exc:
            self._fail(
                ErrorKind.MALFORMED_RESPONSE, f"Resume parser returned invalid technologies: {exc}"
            )
            return self._state
        self._transition(CaptureState.RESUME_APPLIED)
        return self._state

    def clear_resume(self) -> None:
        """Drop the attached resume and hand the technology list back to manual control."""
        if self._state is CaptureState.MANUAL:
            return
        # An in-flight extraction must not land after this
        self._token += 1
        self._draft.technologies.clear()
        self._draft.has_resume = False
        self._attachment = None
        self._transition(CaptureState.MANUAL)

    def _is_current(self, token: int) -> bool:
        return token == self._token and self._state is CaptureState.RESUME_PENDING

    def _fail(self, kind: ErrorKind, message: str) -> None:
        logger.warning("Resume extraction failed (%s): %s", kind.value, message)
        self._transition(CaptureState.RESUME_FAILED)
        self._notify("error", message)
        self._draft.has_resume = False
        self._attachment = None
        self._transition(CaptureState.MANUAL)

    def _transition(self, new_state: CaptureState) -> None:
        logger.debug("Capture state %s -> %s", self._state.value, new_state.value)
        self._state = new_state

    # --- submission ---

    async def submit(self) -> SubmitResult:
        """Validate the draft and hand it to the repository.

        Validation errors block the call; repository failures are reported and
        leave the draft in place so the user can retry.
        """
        if self._submitting:
            return SubmitResult(ok=False, message="Submission already in progress")

        self.field_errors = self.validate()
        if self.field_errors:
            return SubmitResult(ok=False, field_errors=dict(self.field_errors))

        draft = self.draft
        self._submitting = True
        try:
            if self.job_info_id is None:
                result = await self.repository.create_job_info(draft)
            else:
                result = await self.repository.update_job_info(self.job_info_id, draft)
        except Exception:
            logger.error("Saving job info failed", exc_info=True)
            self._notify("error", SAVE_ERROR_MESSAGE)
            return SubmitResult(ok=False, message=SAVE_ERROR_MESSAGE)
        finally:
            self._submitting = False

        if result.error:
            message = result.message or SAVE_ERROR_MESSAGE
            self._notify("error", message)
            return SubmitResult(ok=False, message=message)

        self.closed = True
        return SubmitResult(ok=True, job_info_id=result.job_info_id or self.job_info_id)

    def _notify(self, level: str, message: str) -> None:
        if self._notify_cb:
            self._notify_cb(level, message)
