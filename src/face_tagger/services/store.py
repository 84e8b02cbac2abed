"""Session state shared by the scanner and the dashboard."""

from typing import Protocol
from uuid import UUID

from face_tagger.domain.identities import Identity
from face_tagger.domain.photos import AnalyzedPhoto


class SessionStore(Protocol):
    """Storage interface for identities and analyzed photos."""

    def add_identity(self, identity: Identity) -> None:
        """Append a newly registered identity."""

    def remove_identity(self, identity_id: UUID) -> bool:
        """Remove an identity and return whether it existed."""

    def get_identity(self, identity_id: UUID) -> Identity | None:
        """Return an identity by id, if present."""

    def list_identities(self) -> list[Identity]:
        """Return identities in registration order."""

    def add_photo(self, photo: AnalyzedPhoto) -> None:
        """Record an analyzed photo."""

    def list_photos(self) -> list[AnalyzedPhoto]:
        """Return analyzed photos, newest first."""
