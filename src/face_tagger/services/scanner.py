"""Sequential scan queue that tags uploaded photos with identities."""

import asyncio
import logging
from collections import deque
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

from face_tagger.domain.photos import AnalyzedPhoto, PhotoStatus
from face_tagger.domain.queue import QueueItem, QueueState
from face_tagger.services.image_codec import ImageSource, encode, is_image
from face_tagger.services.recognition import RecognitionService
from face_tagger.services.store import SessionStore

_logger = logging.getLogger(__name__)


@dataclass
class _QueueEntry:
    item: QueueItem
    source: ImageSource


@dataclass
class Scanner:
    """Queue controller that analyzes accepted files one at a time.

    Files are serviced in submission order across overlapping submissions.
    A file that fails stays in the visible queue with an error state and is
    never retried; successfully analyzed files leave the queue and are
    recorded in the session store.
    """

    recognition: RecognitionService
    store: SessionStore
    on_analysis_complete: Callable[[AnalyzedPhoto], None] | None = None
    _items: list[QueueItem] = field(default_factory=list, init=False)
    _pending: deque[_QueueEntry] = field(default_factory=deque, init=False)
    _drain_task: asyncio.Task[None] | None = field(default=None, init=False)

    @property
    def queue(self) -> list[QueueItem]:
        """Return the visible queue in processing order."""
        return list(self._items)

    @property
    def is_busy(self) -> bool:
        """Return True while queued files are still being drained."""
        return self._drain_task is not None and not self._drain_task.done()

    def submit(self, files: Iterable[ImageSource]) -> list[QueueItem]:
        """Queue image files for analysis and return the accepted items.

        Must be called from a running event loop. Non-image files are skipped.
        """
        accepted: list[QueueItem] = []
        for source in files:
            if not is_image(source):
                _logger.debug("Skipping non-image file %s", source.filename)
                continue
            item = QueueItem(display_name=source.filename or "untitled")
            self._items.append(item)
            self._pending.append(_QueueEntry(item=item, source=source))
            accepted.append(item)

        if self._pending and not self.is_busy:
            self._drain_task = asyncio.get_running_loop().create_task(self._drain())
        return accepted

    async def join(self) -> None:
        """Wait until every queued file has reached a terminal outcome."""
        while self.is_busy and self._drain_task is not None:
            await self._drain_task

    def clear_failed(self) -> int:
        """Drop failed items from the visible queue and return how many."""
        remaining = [item for item in self._items if item.state != QueueState.ERROR]
        cleared = len(self._items) - len(remaining)
        self._items = remaining
        return cleared

    async def _drain(self) -> None:
        try:
            while self._pending:
                entry = self._pending.popleft()
                await self._process(entry)
        except asyncio.CancelledError:
            _logger.warning(
                "Scan queue cancelled with %s files left", len(self._pending)
            )
            while self._pending:
                skipped = self._pending.popleft().item
                skipped.state = QueueState.ERROR
                skipped.error = "cancelled"
            raise

    async def _process(self, entry: _QueueEntry) -> None:
        item = entry.item
        item.state = QueueState.PROCESSING
        try:
            image = await encode(entry.source)
            result = await self.recognition.classify(
                image, self.store.list_identities()
            )
            photo = AnalyzedPhoto(
                id=uuid4(),
                image=image,
                matched_identity_id=result.matched_identity_id,
                confidence=result.confidence,
                timestamp=datetime.now(tz=UTC),
                status=PhotoStatus.ANALYZED,
                source_name=entry.source.filename,
            )
            self.store.add_photo(photo)
        except asyncio.CancelledError:
            item.state = QueueState.ERROR
            item.error = "cancelled"
            raise
        except Exception as exc:
            _logger.exception("Failed to analyze %s", item.display_name)
            item.state = QueueState.ERROR
            item.error = str(exc) or type(exc).__name__
            return

        self._items = [queued for queued in self._items if queued.id != item.id]
        if result.is_match:
            _logger.info(
                "Analyzed %s: matched %s (confidence %.2f)",
                item.display_name,
                result.matched_identity_id,
                result.confidence,
            )
        else:
            _logger.info("Analyzed %s: unknown (%s)", item.display_name, result.reason)
        if self.on_analysis_complete is None:
            return
        try:
            self.on_analysis_complete(photo)
        except Exception:
            _logger.exception("Analysis listener failed for %s", item.display_name)
