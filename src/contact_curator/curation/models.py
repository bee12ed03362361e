"""Curation pipeline data types: run types, processor descriptors, queue items, results."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum

from contact_curator.contact.models import Contact
from contact_curator.core.errors import ProcessorFailedError


class RunType(str, Enum):
    """Urgency tier of a processor or queue item (highest first)."""

    IMMEDIATE = "IMMEDIATE"
    UPCOMING = "UPCOMING"
    IMPROVEMENT = "IMPROVEMENT"

    @property
    def priority(self) -> int:
        return _PRIORITY[self]


_PRIORITY = {
    RunType.IMMEDIATE: 3,
    RunType.UPCOMING: 2,
    RunType.IMPROVEMENT: 1,
}


Gate = Callable[[Contact], bool]
Mutation = Callable[[Contact], None]


@dataclass(frozen=True)
class Processor:
    """
    A registrable unit of contact mutation.

    ``gate`` decides whether the processor applies to a contact; ``mutate``
    changes the contact in place. ``dependencies`` name processors that
    must run earlier in the same pass when they are registered.
    """

    name: str
    run_type: RunType
    gate: Gate
    mutate: Mutation
    dependencies: tuple[str, ...] = ()
    description: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Processor name must not be empty")
        # Accept any iterable of names; store an immutable tuple.
        object.__setattr__(self, "dependencies", tuple(self.dependencies))


@dataclass
class QueueItem:
    contact: Contact
    run_type: RunType
    enqueued_at: float
    sequence: int = 0


@dataclass(frozen=True)
class QueueStatus:
    queue_length: int
    is_processing: bool
    active_contact: str | None


class ContactStatus(str, Enum):
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class ContactResult:
    """Report of one pipeline pass over one contact."""

    contact: Contact
    status: ContactStatus = ContactStatus.COMPLETED
    ran: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    errors: list[ProcessorFailedError] = field(default_factory=list)
    run_type: RunType | None = None
    started_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    completed_at: datetime | None = None

    @property
    def ok(self) -> bool:
        return self.status == ContactStatus.COMPLETED

    @property
    def error(self) -> ProcessorFailedError | None:
        """First failure of the pass, if any."""
        return self.errors[0] if self.errors else None

    @property
    def duration_seconds(self) -> float | None:
        if self.completed_at is None:
            return None
        return (self.completed_at - self.started_at).total_seconds()

    def raise_for_error(self) -> None:
        """Re-raise the first processor failure of this pass."""
        if self.errors:
            raise self.errors[0]


__all__ = [
    "RunType",
    "Gate",
    "Mutation",
    "Processor",
    "QueueItem",
    "QueueStatus",
    "ContactStatus",
    "ContactResult",
]
