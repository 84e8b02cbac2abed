"""In-process session store."""

from dataclasses import dataclass, field
from uuid import UUID

from face_tagger.domain.identities import Identity
from face_tagger.domain.photos import AnalyzedPhoto
from face_tagger.services.store import SessionStore


@dataclass
class InMemorySessionStore(SessionStore):
    """Session store that keeps everything in process memory."""

    identities: list[Identity] = field(default_factory=list)
    photos: list[AnalyzedPhoto] = field(default_factory=list)

    def add_identity(self, identity: Identity) -> None:
        self.identities.append(identity)

    def remove_identity(self, identity_id: UUID) -> bool:
        remaining = [item for item in self.identities if item.id != identity_id]
        removed = len(remaining) != len(self.identities)
        self.identities = remaining
        return removed

    def get_identity(self, identity_id: UUID) -> Identity | None:
        for identity in self.identities:
            if identity.id == identity_id:
                return identity
        return None

    def list_identities(self) -> list[Identity]:
        return list(self.identities)

    def add_photo(self, photo: AnalyzedPhoto) -> None:
        self.photos.insert(0, photo)

    def list_photos(self) -> list[AnalyzedPhoto]:
        return list(self.photos)
