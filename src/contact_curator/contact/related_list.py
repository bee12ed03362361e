"""
The human-edited relationship list.

::

    ## Related

    - mother [[Ann Doe]]
    - friend [[Bob]]

Parsing yields ``namespace=name`` relationships with an empty
``target_uid``; turning display names into identifiers is left to the
caller (see :func:`resolve_targets`).
"""

from __future__ import annotations

import re
from collections import Counter
from collections.abc import Callable

from contact_curator.contact.gender import normalize
from contact_curator.contact.markdown import HeadingMatch, locate_heading, section_bounds
from contact_curator.contact.models import Namespace, Relationship
from contact_curator.contact.namespace import parse_reference

DEFAULT_HEADING = "Related"

_ITEM = re.compile(r"-\s+([\w-]+)\s+\[\[([^\]]+)\]\]")

NameResolver = Callable[[str], "str | None"]


def locate_related_heading(text: str, heading: str = DEFAULT_HEADING) -> HeadingMatch | None:
    return locate_heading(text, heading)


def parse_related_list(text: str, heading: str = DEFAULT_HEADING) -> list[Relationship]:
    """Relationships listed under the heading; empty if the heading is absent."""
    bounds = section_bounds(text, heading)
    if bounds is None:
        return []

    _, start, end = bounds
    relationships = []
    for line in text[start:end].splitlines():
        match = _ITEM.match(line)
        if match is None:
            continue
        relationships.append(
            Relationship(
                type=match.group(1).lower(),
                target_uid="",
                target_name=match.group(2),
                namespace=Namespace.NAME,
            )
        )
    return relationships


def generate_related_list(relationships: list[Relationship], heading: str = DEFAULT_HEADING) -> str:
    """Render the list block, or ``""`` when there is nothing to list.

    An empty string tells the caller to omit the section entirely.
    """
    if not relationships:
        return ""
    lines = [f"## {heading}", ""]
    lines.extend(f"- {rel.type} [[{rel.display_name}]]" for rel in relationships)
    return "\n".join(lines)


def resolve_targets(relationships: list[Relationship], resolver: NameResolver) -> list[Relationship]:
    """Fill in identifiers for name-only relationships.

    ``resolver`` maps a display name to a reference (``urn:uuid:…``,
    ``uid:…`` or a bare uid) or ``None``. Unresolved entries are returned
    unchanged.
    """
    resolved = []
    for rel in relationships:
        if rel.namespace != Namespace.NAME or rel.target_uid:
            resolved.append(rel)
            continue
        reference = resolver(rel.display_name)
        if not reference:
            resolved.append(rel)
            continue
        namespace, uid = parse_reference(reference)
        resolved.append(
            Relationship(type=rel.type, target_uid=uid, target_name=rel.target_name, namespace=namespace)
        )
    return resolved


def _signature(rel: Relationship) -> tuple[str, str]:
    return normalize(rel.type), rel.display_name.casefold()


def same_relationships(left: list[Relationship], right: list[Relationship]) -> bool:
    """True if both lists name the same targets with the same genderless types.

    Display names are compared ignoring case.
    """
    return Counter(map(_signature, left)) == Counter(map(_signature, right))


def keep_written_entries(relationships: list[Relationship], current: list[Relationship]) -> list[Relationship]:
    """Reuse the written type and name of ``current`` entries for matching targets.

    A relationship matches a list entry with the same genderless type and
    display name (ignoring case); each entry is used at most once. The
    returned relationships keep their own identifiers.
    """
    remaining = list(current)
    kept = []
    for rel in relationships:
        wanted = _signature(rel)
        index = next((i for i, entry in enumerate(remaining) if _signature(entry) == wanted), None)
        if index is None:
            kept.append(rel)
            continue
        entry = remaining.pop(index)
        kept.append(
            Relationship(
                type=entry.type,
                target_uid=rel.target_uid,
                target_name=entry.target_name,
                namespace=rel.namespace,
            )
        )
    return kept


__all__ = [
    "DEFAULT_HEADING",
    "NameResolver",
    "locate_related_heading",
    "parse_related_list",
    "generate_related_list",
    "resolve_targets",
    "same_relationships",
    "keep_written_entries",
]
