"""File reference attached to the capture form."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

PDF_MEDIA_TYPE = "application/pdf"

_EXT_MEDIA_TYPES = {
    ".pdf": PDF_MEDIA_TYPE,
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ".doc": "application/msword",
    ".txt": "text/plain",
    ".md": "text/markdown",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
}


def media_type_for(filename: str) -> str:
    """Guess the media type from a filename extension."""
    return _EXT_MEDIA_TYPES.get(Path(filename).suffix.lower(), "application/octet-stream")


@dataclass(frozen=True)
class ResumeAttachment:
    """An uploaded resume file: name, raw bytes and declared media type."""

    filename: str
    content: bytes = field(repr=False)
    media_type: str

    @property
    def is_pdf(self) -> bool:
        return self.media_type == PDF_MEDIA_TYPE

    @classmethod
    def from_path(cls, path: str | Path) -> ResumeAttachment:
        p = Path(path)
        return cls(filename=p.name, content=p.read_bytes(), media_type=media_type_for(p.name))
