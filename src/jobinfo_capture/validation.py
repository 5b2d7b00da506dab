"""Field validation for job information drafts.

Which fields are required depends on runtime state: the description may be
left empty while a resume is attached, since the resume stands in for it.
The rules are kept as an explicit table of per-field checks so the
conditional requirement is visible in one place.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from jobinfo_capture.models.job_info import EXPERIENCE_LEVELS, JobInfoDraft

REQUIRED = "Required"

# (draft, has_resume, experience_levels) -> error message or None
FieldCheck = Callable[[JobInfoDraft, bool, Sequence[str]], str | None]


def _check_name(draft: JobInfoDraft, has_resume: bool, levels: Sequence[str]) -> str | None:
    return REQUIRED if not draft.name.strip() else None


def _check_title(draft: JobInfoDraft, has_resume: bool, levels: Sequence[str]) -> str | None:
    return None


def _check_experience_level(
    draft: JobInfoDraft, has_resume: bool, levels: Sequence[str]
) -> str | None:
    if draft.experience_level in levels:
        return None
    expected = " | ".join(f"'{level}'" for level in levels)
    return f"Expected {expected}, received '{draft.experience_level}'"


def _check_technologies(draft: JobInfoDraft, has_resume: bool, levels: Sequence[str]) -> str | None:
    return None


def _check_description(draft: JobInfoDraft, has_resume: bool, levels: Sequence[str]) -> str | None:
    if has_resume:
        return None
    return REQUIRED if not draft.description.strip() else None


FIELD_CHECKS: dict[str, FieldCheck] = {
    "name": _check_name,
    "title": _check_title,
    "experience_level": _check_experience_level,
    "technologies": _check_technologies,
    "description": _check_description,
}


def validate_job_info(
    draft: JobInfoDraft,
    has_resume: bool,
    experience_levels: Sequence[str] = EXPERIENCE_LEVELS,
) -> dict[str, str]:
    """Return a mapping of field name to error message.

    Fields that pass are left out, so an empty dict means the draft may be
    submitted. Pure: no I/O and no mutation of the draft.
    """
    errors: dict[str, str] = {}
    for field_name, check in FIELD_CHECKS.items():
        message = check(draft, has_resume, experience_levels)
        if message is not None:
            errors[field_name] = message
    return errors
