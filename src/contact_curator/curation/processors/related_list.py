"""
Structured fields → relationship list.

Rewrites (or appends) the ``## Related`` section from the ``RELATED.*``
fields. When the existing list already names the same targets with the
same genderless types (names compared ignoring case), the text is left
alone, so a rendered ``- mother [[Ann]]`` is not flipped back to
``- parent [[Ann]]``. When the list does need rewriting, entries that
still match keep their written type and name.
Fields absent from the list are never deleted here.
"""

from __future__ import annotations

from collections.abc import Callable

from contact_curator.contact.frontmatter import has_related_fields, parse_related_fields
from contact_curator.contact.markdown import replace_section
from contact_curator.contact.models import Contact, Namespace, Relationship
from contact_curator.contact.related_list import (
    generate_related_list,
    keep_written_entries,
    locate_related_heading,
    parse_related_list,
    same_relationships,
)
from contact_curator.core.logging import get_logger
from contact_curator.core.settings import CuratorSettings, get_settings
from contact_curator.curation.models import Processor, RunType

NAME = "related_list"

log = get_logger(__name__)


def make_related_list_processor(
    settings: CuratorSettings | None = None,
    namer: Callable[[str], str | None] | None = None,
) -> Processor:
    """
    Args:
        settings: Curator settings (heading name)
        namer: Optional uid → display name lookup used for list entries;
            without it, identifiers are listed as-is
    """
    settings = settings or get_settings()
    heading = settings.related_heading

    def with_display_names(relationships: list[Relationship]) -> list[Relationship]:
        if namer is None:
            return relationships
        named = []
        for rel in relationships:
            name = namer(rel.target_uid) if rel.namespace != Namespace.NAME else None
            named.append(
                Relationship(
                    type=rel.type,
                    target_uid=rel.target_uid,
                    target_name=name or rel.target_name,
                    namespace=rel.namespace,
                )
            )
        return named

    def gate(contact: Contact) -> bool:
        return has_related_fields(contact.fields)

    def mutate(contact: Contact) -> None:
        relationships = with_display_names(parse_related_fields(contact.fields))
        if not relationships:
            return

        if locate_related_heading(contact.content, heading) is not None:
            current = parse_related_list(contact.content, heading)
            if same_relationships(current, relationships):
                log.debug("related_list.unchanged", count=len(current))
                return
            relationships = keep_written_entries(relationships, current)

        block = generate_related_list(relationships, heading)
        contact.content = replace_section(contact.content, heading, block)
        log.debug("related_list.rendered", count=len(relationships))

    return Processor(
        name=NAME,
        run_type=RunType.UPCOMING,
        gate=gate,
        mutate=mutate,
        description="Sync relationships from RELATED fields to the Related list",
    )
