"""Async client for the resume technology-extraction service."""

from __future__ import annotations

import logging
import os
from enum import Enum

import httpx

from jobinfo_capture.models.attachment import ResumeAttachment

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "http://localhost:5000/parse-resume"


class ErrorKind(str, Enum):
    INVALID_FILE_TYPE = "invalid_file_type"
    NETWORK_FAILURE = "network_failure"
    MALFORMED_RESPONSE = "malformed_response"


class ExtractionError(Exception):
    """Raised when a resume could not be turned into a technology list."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message


class ExtractionClient:
    """Posts a PDF resume to the extraction endpoint and returns its technologies.

    No retries: a failed upload is retried by the user selecting the file again.
    """

    def __init__(
        self,
        endpoint: str | None = None,
        *,
        file_field: str = "resume",
        result_field: str = "technologies",
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.endpoint = endpoint or os.environ.get("EXTRACTION_API_URL") or DEFAULT_ENDPOINT
        self.file_field = file_field
        self.result_field = result_field
        self.client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def extract(self, attachment: ResumeAttachment) -> list[str]:
        """Upload the resume and return the reported technologies unchanged.

        Raises:
            ExtractionError: INVALID_FILE_TYPE before any I/O for non-PDF input,
                NETWORK_FAILURE for transport errors or non-2xx status,
                MALFORMED_RESPONSE when the body lacks a list of name strings.
        """
        if not attachment.is_pdf:
            raise ExtractionError(
                ErrorKind.INVALID_FILE_TYPE,
                f"Please select a PDF file (got {attachment.media_type}).",
            )

        logger.info("Extracting technologies from %s", attachment.filename)
        files = {
            self.file_field: (attachment.filename, attachment.content, attachment.media_type),
        }
        try:
            response = await self.client.post(self.endpoint, files=files)
        except httpx.HTTPError as exc:
            logger.warning("Extraction request failed", exc_info=True)
            raise ExtractionError(
                ErrorKind.NETWORK_FAILURE, "Failed to reach the resume parser."
            ) from exc

        if not response.is_success:
            logger.warning(
                "Extraction service returned %d: %s", response.status_code, response.text[:200]
            )
            raise ExtractionError(
                ErrorKind.NETWORK_FAILURE,
                f"Failed to parse resume (status {response.status_code}).",
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise ExtractionError(
                ErrorKind.MALFORMED_RESPONSE, "Resume parser returned invalid JSON."
            ) from exc

        technologies = payload.get(self.result_field) if isinstance(payload, dict) else None
        if not isinstance(technologies, list) or not all(isinstance(t, str) for t in technologies):
            raise ExtractionError(
                ErrorKind.MALFORMED_RESPONSE,
                f"Resume parser response has no '{self.result_field}' list of names.",
            )

        logger.debug("Extracted %d technologies", len(technologies))
        return technologies

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> ExtractionClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
