"""Clients for external services."""
from jobinfo_capture.clients.extraction_client import (
    ErrorKind,
    ExtractionClient,
    ExtractionError,
)

__all__ = ["ErrorKind", "ExtractionClient", "ExtractionError"]
