"""
Deduplicating priority queue of contacts waiting for a pipeline pass.

At most one item exists per contact (``Contact.key``). Re-enqueuing a
queued contact only matters when the new run type is strictly more urgent:
the stored run type and timestamp are then replaced. Dequeue order is
priority descending, then enqueue time ascending (FIFO within a class).

The queue has no internal locking; a multi-threaded host must serialize
access itself.
"""

from __future__ import annotations

import itertools
import time
from collections.abc import Callable

from contact_curator.contact.models import Contact
from contact_curator.core.logging import get_logger
from contact_curator.curation.models import QueueItem, QueueStatus, RunType

logger = get_logger(__name__)


class CuratorQueue:
    """Priority queue of :class:`QueueItem`, one per contact."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._items: list[QueueItem] = []
        self._clock = clock
        self._sequence = itertools.count()
        self._is_processing = False
        self._active_contact: str | None = None

    def enqueue(self, contact: Contact, run_type: RunType) -> bool:
        """
        Queue a contact, or upgrade its queued run type.

        Returns:
            True if the queue changed (new item or priority upgrade)
        """
        existing = self._find(contact.key)
        if existing is not None:
            if run_type.priority <= existing.run_type.priority:
                logger.debug(
                    "queue.duplicate",
                    contact=contact.key,
                    queued=existing.run_type.value,
                    requested=run_type.value,
                )
                return False
            logger.debug(
                "queue.upgraded",
                contact=contact.key,
                previous=existing.run_type.value,
                run_type=run_type.value,
            )
            existing.run_type = run_type
            existing.enqueued_at = self._clock()
            existing.sequence = next(self._sequence)
            self._sort()
            return True

        self._items.append(
            QueueItem(
                contact=contact,
                run_type=run_type,
                enqueued_at=self._clock(),
                sequence=next(self._sequence),
            )
        )
        self._sort()
        logger.debug("queue.enqueued", contact=contact.key, run_type=run_type.value, size=len(self._items))
        return True

    def dequeue(self) -> QueueItem | None:
        """Remove and return the most urgent item."""
        if not self._items:
            return None
        return self._items.pop(0)

    def peek(self) -> QueueItem | None:
        return self._items[0] if self._items else None

    def size(self) -> int:
        return len(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def clear(self) -> None:
        self._items.clear()

    def set_processing_status(self, processing: bool, contact: str | None = None) -> None:
        """Record what the runner is doing; informational only."""
        self._is_processing = processing
        self._active_contact = contact

    def get_status(self) -> QueueStatus:
        return QueueStatus(
            queue_length=len(self._items),
            is_processing=self._is_processing,
            active_contact=self._active_contact,
        )

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, contact: object) -> bool:
        return isinstance(contact, Contact) and self._find(contact.key) is not None

    def _find(self, key: str) -> QueueItem | None:
        for item in self._items:
            if item.contact.key == key:
                return item
        return None

    def _sort(self) -> None:
        self._items.sort(key=lambda item: (-item.run_type.priority, item.enqueued_at, item.sequence))


__all__ = ["CuratorQueue"]
