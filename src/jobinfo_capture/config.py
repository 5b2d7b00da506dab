"""Application configuration loaded from config.yaml."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from jobinfo_capture.clients.extraction_client import DEFAULT_ENDPOINT
from jobinfo_capture.models.job_info import DEFAULT_EXPERIENCE_LEVEL, EXPERIENCE_LEVELS
from jobinfo_capture.models.technologies import AVAILABLE_TECHNOLOGIES
from jobinfo_capture.storage.job_info_store import DEFAULT_DB_PATH


@dataclass(frozen=True)
class ExtractionConfig:
    endpoint: str = DEFAULT_ENDPOINT
    file_field: str = "resume"
    result_field: str = "technologies"
    timeout: float | None = None  # None waits indefinitely

    def __post_init__(self) -> None:
        if not self.endpoint:
            raise ValueError("extraction.endpoint must not be empty")
        if not self.file_field:
            raise ValueError("extraction.file_field must not be empty")
        if not self.result_field:
            raise ValueError("extraction.result_field must not be empty")
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"extraction.timeout must be positive, got {self.timeout}")


@dataclass(frozen=True)
class FormConfig:
    experience_levels: tuple[str, ...] = EXPERIENCE_LEVELS
    default_experience_level: str = DEFAULT_EXPERIENCE_LEVEL
    available_technologies: tuple[str, ...] = AVAILABLE_TECHNOLOGIES

    def __post_init__(self) -> None:
        if not self.experience_levels:
            raise ValueError("form.experience_levels must not be empty")
        if self.default_experience_level not in self.experience_levels:
            raise ValueError(
                f"form.default_experience_level {self.default_experience_level!r} "
                f"is not one of {list(self.experience_levels)}"
            )


@dataclass(frozen=True)
class StoreConfig:
    db_path: str = DEFAULT_DB_PATH

    @property
    def resolved_db_path(self) -> Path:
        return Path(self.db_path).expanduser()


@dataclass(frozen=True)
class AppConfig:
    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)
    form: FormConfig = field(default_factory=FormConfig)
    store: StoreConfig = field(default_factory=StoreConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults.

    EXTRACTION_API_URL, when set, overrides extraction.endpoint.
    """
    if path is None:
        candidate = Path.cwd() / "config.yaml"
        if candidate.exists():
            path = candidate

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text()) or {}

    extraction = dict(raw.get("extraction", {}))
    env_endpoint = os.environ.get("EXTRACTION_API_URL")
    if env_endpoint:
        extraction["endpoint"] = env_endpoint

    # YAML gives lists; the config stays hashable/frozen with tuples
    form = {
        key: tuple(value) if isinstance(value, list) else value
        for key, value in raw.get("form", {}).items()
    }

    return AppConfig(
        extraction=ExtractionConfig(**extraction),
        form=FormConfig(**form),
        store=StoreConfig(**raw.get("store", {})),
    )
