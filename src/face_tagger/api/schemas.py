"""Response models for the HTTP API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from face_tagger.domain.identities import Identity
from face_tagger.domain.photos import AnalyzedPhoto
from face_tagger.domain.queue import QueueItem
from face_tagger.domain.stats import IdentityFrequency, ScanSummary


class IdentityOut(BaseModel):
    """Registered identity as returned by the API."""

    id: UUID
    name: str
    reference_image: str
    created_at: datetime

    @classmethod
    def from_domain(cls, identity: Identity) -> "IdentityOut":
        return cls(
            id=identity.id,
            name=identity.name,
            reference_image=identity.reference_image,
            created_at=identity.created_at,
        )


class QueueItemOut(BaseModel):
    """Visible state of a queued file."""

    id: UUID
    display_name: str
    state: str
    error: str | None = None

    @classmethod
    def from_domain(cls, item: QueueItem) -> "QueueItemOut":
        return cls(
            id=item.id,
            display_name=item.display_name,
            state=str(item.state),
            error=item.error,
        )


class ScanAccepted(BaseModel):
    """Files accepted by a scan request plus the queue after submission."""

    accepted: list[QueueItemOut]
    queue: list[QueueItemOut]


class PhotoOut(BaseModel):
    """Analyzed photo with its resolved identity name."""

    id: UUID
    image: str
    matched_identity_id: UUID | None
    matched_identity_name: str | None
    confidence: float
    timestamp: datetime
    status: str
    source_name: str | None = None

    @classmethod
    def from_domain(
        cls, photo: AnalyzedPhoto, identity: Identity | None
    ) -> "PhotoOut":
        return cls(
            id=photo.id,
            image=photo.image,
            matched_identity_id=photo.matched_identity_id,
            matched_identity_name=identity.name if identity else None,
            confidence=photo.confidence,
            timestamp=photo.timestamp,
            status=str(photo.status),
            source_name=photo.source_name,
        )


class FrequencyOut(BaseModel):
    """One bar of the scan activity chart."""

    key: str
    label: str
    count: int
    share: float

    @classmethod
    def from_domain(cls, frequency: IdentityFrequency) -> "FrequencyOut":
        return cls(
            key=frequency.key,
            label=frequency.label,
            count=frequency.count,
            share=frequency.share,
        )


class StatsOut(BaseModel):
    """Dashboard statistics."""

    total_photos: int
    recognized: int
    unknown: int
    frequencies: list[FrequencyOut]

    @classmethod
    def from_domain(
        cls, summary: ScanSummary, frequencies: list[IdentityFrequency]
    ) -> "StatsOut":
        return cls(
            total_photos=summary.total_photos,
            recognized=summary.recognized,
            unknown=summary.unknown,
            frequencies=[FrequencyOut.from_domain(item) for item in frequencies],
        )
