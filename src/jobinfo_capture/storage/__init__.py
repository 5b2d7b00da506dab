"""Persistence for job information records."""
from jobinfo_capture.storage.job_info_store import (
    JobInfoRepository,
    JobInfoStore,
    PersistenceResult,
)

__all__ = ["JobInfoRepository", "JobInfoStore", "PersistenceResult"]
