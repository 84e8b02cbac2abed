"""Pipeline bookkeeping for files waiting in the scan queue."""

from dataclasses import dataclass, field
from enum import StrEnum
from uuid import UUID, uuid4


class QueueState(StrEnum):
    """Visible state of a queued file."""

    PENDING = "pending"
    PROCESSING = "processing"
    ERROR = "error"


@dataclass
class QueueItem:
    """A file accepted by the scanner and not yet analyzed."""

    display_name: str
    state: QueueState = QueueState.PENDING
    error: str | None = None
    id: UUID = field(default_factory=uuid4)
