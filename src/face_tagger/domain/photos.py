"""Domain models for analyzed photos."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class PhotoStatus(StrEnum):
    """Lifecycle status of an analyzed photo record."""

    PENDING = "pending"
    ANALYZED = "analyzed"
    ERROR = "error"


@dataclass(frozen=True)
class AnalyzedPhoto:
    """A candidate photo tagged with its best-matching identity."""

    id: UUID
    image: str
    matched_identity_id: UUID | None
    confidence: float
    timestamp: datetime
    status: PhotoStatus
    source_name: str | None = None
