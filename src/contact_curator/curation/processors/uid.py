"""Identifier processor: every contact gets a ``urn:uuid:`` identifier."""

from __future__ import annotations

from collections.abc import Callable
from uuid import uuid4

from contact_curator.contact.models import Contact
from contact_curator.core.logging import get_logger
from contact_curator.core.settings import CuratorSettings, get_settings
from contact_curator.curation.models import Processor, RunType

NAME = "uid"

log = get_logger(__name__)


def _new_uuid() -> str:
    return str(uuid4())


def make_uid_processor(
    settings: CuratorSettings | None = None,
    uid_factory: Callable[[], str] | None = None,
) -> Processor:
    settings = settings or get_settings()
    field = settings.uid_field
    factory = uid_factory or _new_uuid

    def gate(contact: Contact) -> bool:
        return not contact.fields.get(field)

    def mutate(contact: Contact) -> None:
        contact.fields[field] = f"urn:uuid:{factory()}"
        log.info("uid.assigned", uid=contact.fields[field])

    return Processor(
        name=NAME,
        run_type=RunType.IMMEDIATE,
        gate=gate,
        mutate=mutate,
        description="Ensure every contact has a UID",
    )
