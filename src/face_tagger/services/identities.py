"""Identity registration and removal."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID, uuid4

from face_tagger.domain.identities import Identity
from face_tagger.services.image_codec import ImageSource, encode, is_image
from face_tagger.services.store import SessionStore

_logger = logging.getLogger(__name__)


class IdentityValidationError(ValueError):
    """Raised when an identity cannot be registered."""


@dataclass
class IdentityService:
    """Application service for the registered identity list."""

    store: SessionStore

    async def register(self, name: str, reference: ImageSource) -> Identity:
        """Register a person with a reference photo and return the identity."""
        cleaned = name.strip()
        if not cleaned:
            raise IdentityValidationError("Identity name must not be empty")
        if not is_image(reference):
            raise IdentityValidationError("Reference file must be an image")

        identity = Identity(
            id=uuid4(),
            name=cleaned,
            reference_image=await encode(reference),
            created_at=datetime.now(tz=UTC),
        )
        self.store.add_identity(identity)
        _logger.info("Registered identity %s (%s)", identity.id, identity.name)
        return identity

    def remove(self, identity_id: UUID) -> bool:
        """Remove an identity; analyzed photos keep their stale reference."""
        removed = self.store.remove_identity(identity_id)
        if removed:
            _logger.info("Removed identity %s", identity_id)
        return removed

    def list_identities(self) -> list[Identity]:
        """Return identities in registration order."""
        return self.store.list_identities()
