"""Pydantic models for job information records and in-progress drafts."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from jobinfo_capture.models.technologies import TechnologyList

EXPERIENCE_LEVELS: tuple[str, ...] = ("junior", "mid-level", "senior")
DEFAULT_EXPERIENCE_LEVEL = "junior"


def format_experience_level(level: str) -> str:
    """Display label for an experience level ("mid-level" -> "Mid-Level")."""
    return "-".join(part.capitalize() for part in level.split("-"))


class JobInfo(BaseModel):
    """A stored job information record."""

    id: str
    name: str
    title: str | None = None
    experience_level: str = DEFAULT_EXPERIENCE_LEVEL
    technologies: list[str] = Field(default_factory=list)
    description: str = ""
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)


class JobInfoDraft(BaseModel):
    """In-progress job information being edited in the capture form."""

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    name: str = ""
    title: str | None = None
    experience_level: str = DEFAULT_EXPERIENCE_LEVEL
    technologies: TechnologyList = Field(default_factory=TechnologyList)
    description: str = ""
    has_resume: bool = False

    @field_validator("title", mode="before")
    @classmethod
    def _blank_title_is_none(cls, value: str | None) -> str | None:
        # A cleared title input means "no title"
        if isinstance(value, str) and not value:
            return None
        return value

    @field_validator("technologies", mode="before")
    @classmethod
    def _coerce_technologies(cls, value: Iterable[str]) -> TechnologyList:
        if isinstance(value, TechnologyList):
            return value
        if isinstance(value, str):
            raise ValueError("technologies must be a list of names, not a string")
        try:
            return TechnologyList(value)
        except TypeError as exc:
            raise ValueError(str(exc)) from exc

    @field_serializer("technologies")
    def _serialize_technologies(self, value: TechnologyList) -> list[str]:
        return value.to_list()

    @classmethod
    def from_job_info(cls, job_info: JobInfo) -> JobInfoDraft:
        """Pre-populate a draft from an existing record."""
        return cls(
            name=job_info.name,
            title=job_info.title,
            experience_level=job_info.experience_level,
            technologies=job_info.technologies,
            description=job_info.description,
        )
