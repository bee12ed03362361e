"""
Relationship list → structured fields.

The ``## Related`` list is the source of truth for this direction: whenever
the ``RELATED.*`` fields differ from the list they are all removed and
regenerated, with types stored in their genderless form
(``mother`` → ``RELATED.PARENT``).
"""

from __future__ import annotations

from contact_curator.contact.frontmatter import RELATED_PREFIX, generate_related_fields, strip_related_fields
from contact_curator.contact.gender import normalize
from contact_curator.contact.models import Contact
from contact_curator.contact.related_list import NameResolver, parse_related_list, resolve_targets
from contact_curator.core.logging import get_logger
from contact_curator.core.settings import CuratorSettings, get_settings
from contact_curator.curation.models import Processor, RunType

NAME = "related_frontmatter"

log = get_logger(__name__)


def make_related_frontmatter_processor(
    settings: CuratorSettings | None = None,
    resolver: NameResolver | None = None,
) -> Processor:
    """
    Args:
        settings: Curator settings (heading name)
        resolver: Optional display-name → reference lookup; unresolved
            names are stored as ``name:<display name>``
    """
    settings = settings or get_settings()
    heading = settings.related_heading

    def gate(contact: Contact) -> bool:
        return True

    def mutate(contact: Contact) -> None:
        relationships = [
            rel.with_type(normalize(rel.type))
            for rel in parse_related_list(contact.content, heading)
        ]
        if resolver is not None:
            relationships = resolve_targets(relationships, resolver)

        generated = generate_related_fields(relationships)
        current = {key: value for key, value in contact.fields.items() if key.startswith(RELATED_PREFIX)}
        if current == generated:
            return

        removed = strip_related_fields(contact.fields)
        contact.fields.update(generated)
        log.debug("related_frontmatter.synced", removed=len(removed), written=len(generated))

    return Processor(
        name=NAME,
        run_type=RunType.UPCOMING,
        gate=gate,
        mutate=mutate,
        description="Sync relationships from the Related list to RELATED fields",
    )
