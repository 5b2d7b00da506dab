"""Shared test fixtures."""

from __future__ import annotations

import asyncio
from datetime import datetime
from unittest.mock import AsyncMock

import pytest

from jobinfo_capture.clients.extraction_client import ExtractionClient
from jobinfo_capture.models.attachment import ResumeAttachment
from jobinfo_capture.models.job_info import JobInfo
from jobinfo_capture.storage.job_info_store import JobInfoStore, PersistenceResult

PDF_BYTES = b"%PDF-1.4\n1 0 obj << /Type /Catalog >> endobj\ntrailer << >>\n%%EOF\n"


def make_pdf(filename: str = "resume.pdf") -> ResumeAttachment:
    return ResumeAttachment(filename=filename, content=PDF_BYTES, media_type="application/pdf")


class ControlledExtraction:
    """Extraction stand-in whose calls stay pending until resolved by the test."""

    def __init__(self):
        self.calls: list[str] = []
        self._pending: dict[str, asyncio.Future] = {}

    async def extract(self, attachment: ResumeAttachment) -> list[str]:
        self.calls.append(attachment.filename)
        future = asyncio.get_running_loop().create_future()
        self._pending[attachment.filename] = future
        return await future

    def resolve(self, filename: str, technologies: list[str]) -> None:
        self._pending[filename].set_result(technologies)

    def fail(self, filename: str, exc: Exception) -> None:
        self._pending[filename].set_exception(exc)


@pytest.fixture
def sample_pdf() -> ResumeAttachment:
    return make_pdf()


@pytest.fixture
def sample_docx() -> ResumeAttachment:
    return ResumeAttachment(
        filename="resume.docx",
        content=b"PK\x03\x04",
        media_type="application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    )


@pytest.fixture
def sample_job_info() -> JobInfo:
    return JobInfo(
        id="job-123",
        name="Acme backend",
        title="Backend Engineer",
        experience_level="mid-level",
        technologies=["Python", "PostgreSQL"],
        description="Python services on Postgres behind a REST API.",
        created_at=datetime(2024, 1, 1),
        updated_at=datetime(2024, 1, 1),
    )


@pytest.fixture
def mock_extraction() -> ExtractionClient:
    """Create a mock extraction client."""
    client = AsyncMock(spec=ExtractionClient)
    client.extract = AsyncMock(return_value=["Python", "SQL"])
    return client


@pytest.fixture
def controlled_extraction() -> ControlledExtraction:
    return ControlledExtraction()


@pytest.fixture
def mock_repository() -> JobInfoStore:
    """Create a mock persistence collaborator that always succeeds."""
    repo = AsyncMock(spec=JobInfoStore)
    repo.create_job_info = AsyncMock(
        return_value=PersistenceResult(error=False, job_info_id="new-id")
    )
    repo.update_job_info = AsyncMock(
        return_value=PersistenceResult(error=False, job_info_id="job-123")
    )
    return repo


@pytest.fixture
def pdf_factory():
    return make_pdf
