"""
Relationship target references.

A reference is the string stored in a ``RELATED.*`` field::

    urn:uuid:5f0c...   → namespace urn:uuid
    uid:abc-123        → namespace uid
    name:Jane Doe      → namespace name
    abc-123            → namespace uid (no recognized prefix)

Parsing is total: anything without a known prefix is treated as a raw uid.
A ``name:`` reference parses back into the ``uid`` slot, not into
``target_name``; forward-reference resolution relies on this.
"""

from __future__ import annotations

from typing import NamedTuple

from contact_curator.contact.models import Namespace, Relationship

# Checked in order; "urn:uuid:" must win over any shorter prefix.
_PREFIXES: tuple[tuple[str, Namespace], ...] = (
    ("urn:uuid:", Namespace.URN_UUID),
    ("uid:", Namespace.UID),
    ("name:", Namespace.NAME),
)


class ParsedReference(NamedTuple):
    namespace: Namespace
    uid: str


def parse_reference(reference: str) -> ParsedReference:
    """Split a reference string into namespace and identifier."""
    for prefix, namespace in _PREFIXES:
        if reference.startswith(prefix):
            return ParsedReference(namespace, reference[len(prefix):])
    return ParsedReference(Namespace.UID, reference)


def format_reference(relationship: Relationship) -> str:
    """Render the reference string for a relationship's target."""
    if relationship.namespace == Namespace.URN_UUID:
        return f"urn:uuid:{relationship.target_uid}"
    if relationship.namespace == Namespace.NAME:
        return f"name:{relationship.target_name or relationship.target_uid}"
    return f"uid:{relationship.target_uid}"


__all__ = ["ParsedReference", "parse_reference", "format_reference"]
