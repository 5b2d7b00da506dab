"""Data models for job information capture."""

from jobinfo_capture.models.attachment import ResumeAttachment
from jobinfo_capture.models.job_info import (
    EXPERIENCE_LEVELS,
    JobInfo,
    JobInfoDraft,
    format_experience_level,
)
from jobinfo_capture.models.technologies import TechnologyList

__all__ = [
    "EXPERIENCE_LEVELS",
    "JobInfo",
    "JobInfoDraft",
    "ResumeAttachment",
    "TechnologyList",
    "format_experience_level",
]
