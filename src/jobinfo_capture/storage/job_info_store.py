"""SQLite-backed persistence for job information records."""

from __future__ import annotations

import asyncio
import json
import logging
import sqlite3
import uuid
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Protocol

from jobinfo_capture.models.job_info import EXPERIENCE_LEVELS, JobInfo, JobInfoDraft
from jobinfo_capture.validation import validate_job_info

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = "~/.jobinfo-capture/jobinfo.db"


@dataclass
class PersistenceResult:
    """Outcome of a create or update call."""

    error: bool
    message: str | None = None
    job_info_id: str | None = None


class JobInfoRepository(Protocol):
    async def create_job_info(self, draft: JobInfoDraft) -> PersistenceResult: ...

    async def update_job_info(self, job_info_id: str, draft: JobInfoDraft) -> PersistenceResult: ...


class JobInfoStore:
    """SQLite store for job infos with WAL mode."""

    def __init__(
        self,
        db_path: str | Path = DEFAULT_DB_PATH,
        experience_levels: tuple[str, ...] = EXPERIENCE_LEVELS,
    ):
        self.db_path = Path(db_path).expanduser()
        self.experience_levels = experience_levels
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self.db_path))
        conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _init_db(self) -> None:
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS job_infos (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    title TEXT,
                    experience_level TEXT NOT NULL,
                    technologies TEXT NOT NULL DEFAULT '[]',
                    description TEXT NOT NULL DEFAULT '',
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)

    def _is_valid(self, draft: JobInfoDraft) -> bool:
        return not validate_job_info(draft, draft.has_resume, self.experience_levels)

    async def create_job_info(self, draft: JobInfoDraft) -> PersistenceResult:
        """Insert a new record from a validated draft."""
        if not self._is_valid(draft):
            return PersistenceResult(error=True, message="Invalid job information")
        job_info_id = str(uuid.uuid4())
        await asyncio.to_thread(self._insert, job_info_id, draft)
        logger.info("Created job info %s", job_info_id)
        return PersistenceResult(error=False, job_info_id=job_info_id)

    async def update_job_info(self, job_info_id: str, draft: JobInfoDraft) -> PersistenceResult:
        """Overwrite an existing record. Unknown ids are reported, not created."""
        if not self._is_valid(draft):
            return PersistenceResult(error=True, message="Invalid job information")
        updated = await asyncio.to_thread(self._update, job_info_id, draft)
        if not updated:
            return PersistenceResult(error=True, message="Job information not found")
        logger.info("Updated job info %s", job_info_id)
        return PersistenceResult(error=False, job_info_id=job_info_id)

    def _insert(self, job_info_id: str, draft: JobInfoDraft) -> None:
        now = datetime.now().isoformat()
        with self._connect() as conn:
            conn.execute(
                """INSERT INTO job_infos
                   (id, name, title, experience_level, technologies,
                    description, created_at, updated_at)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
                (
                    job_info_id,
                    draft.name.strip(),
                    draft.title,
                    draft.experience_level,
                    json.dumps(draft.technologies.to_list()),
                    draft.description,
                    now,
                    now,
                ),
            )

    def _update(self, job_info_id: str, draft: JobInfoDraft) -> bool:
        with self._connect() as conn:
            cursor = conn.execute(
                """UPDATE job_infos
                   SET name = ?, title = ?, experience_level = ?, technologies = ?,
                       description = ?, updated_at = ?
                   WHERE id = ?""",
                (
                    draft.name.strip(),
                    draft.title,
                    draft.experience_level,
                    json.dumps(draft.technologies.to_list()),
                    draft.description,
                    datetime.now().isoformat(),
                    job_info_id,
                ),
            )
            return cursor.rowcount > 0

    def get(self, job_info_id: str) -> JobInfo | None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM job_infos WHERE id = ?", (job_info_id,)
            ).fetchone()
        return self._row_to_job_info(row) if row else None

    def list_job_infos(self, limit: int = 50) -> list[JobInfo]:
        """Most recently updated first."""
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM job_infos ORDER BY updated_at DESC LIMIT ?", (limit,)
            ).fetchall()
        return [self._row_to_job_info(row) for row in rows]

    @staticmethod
    def _row_to_job_info(row: tuple) -> JobInfo:
        return JobInfo(
            id=row[0],
            name=row[1],
            title=row[2],
            experience_level=row[3],
            technologies=json.loads(row[4]),
            description=row[5],
            created_at=datetime.fromisoformat(row[6]),
            updated_at=datetime.fromisoformat(row[7]),
        )
