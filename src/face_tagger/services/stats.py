"""Statistics and gallery filtering for analyzed photos."""

from dataclasses import dataclass

from face_tagger.domain.identities import Identity
from face_tagger.domain.photos import AnalyzedPhoto
from face_tagger.domain.stats import IdentityFrequency, ScanSummary
from face_tagger.services.store import SessionStore

ALL_FILTER = "all"
UNKNOWN_FILTER = "unknown"


@dataclass
class StatsService:
    """Service for dashboard counts, frequencies and photo filters."""

    store: SessionStore

    def summary(self) -> ScanSummary:
        """Return total, recognized and unknown photo counts."""
        photos = self.store.list_photos()
        known_ids = {identity.id for identity in self.store.list_identities()}
        recognized = sum(
            1 for photo in photos if photo.matched_identity_id in known_ids
        )
        return ScanSummary(
            total_photos=len(photos),
            recognized=recognized,
            unknown=len(photos) - recognized,
        )

    def frequencies(self) -> list[IdentityFrequency]:
        """Return per-identity scan counts, most frequent first."""
        photos = self.store.list_photos()
        counts: list[tuple[str, str, int]] = []
        for identity in self.store.list_identities():
            count = sum(
                1 for photo in photos if photo.matched_identity_id == identity.id
            )
            counts.append((str(identity.id), identity.name, count))
        counts.append((UNKNOWN_FILTER, "Unknown", self.summary().unknown))

        counts.sort(key=lambda entry: entry[2], reverse=True)
        peak = max((entry[2] for entry in counts), default=0) or 1
        return [
            IdentityFrequency(
                key=key, label=label, count=count, share=count / peak * 100
            )
            for key, label, count in counts
        ]

    def filter_photos(self, filter_key: str = ALL_FILTER) -> list[AnalyzedPhoto]:
        """Return photos matching all, unknown, or a single identity id."""
        photos = self.store.list_photos()
        if filter_key == ALL_FILTER:
            return photos
        if filter_key == UNKNOWN_FILTER:
            return [photo for photo in photos if self.resolve_identity(photo) is None]
        return [
            photo
            for photo in photos
            if photo.matched_identity_id is not None
            and str(photo.matched_identity_id) == filter_key
        ]

    def resolve_identity(self, photo: AnalyzedPhoto) -> Identity | None:
        """Return the matched identity, or None for unknown or removed ones."""
        if photo.matched_identity_id is None:
            return None
        return self.store.get_identity(photo.matched_identity_id)
