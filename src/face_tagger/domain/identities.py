"""Domain models for registered identities."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class Identity:
    """A registered person with a single reference image."""

    id: UUID
    name: str
    reference_image: str
    created_at: datetime
