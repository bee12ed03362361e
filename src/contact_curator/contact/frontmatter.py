"""
Structured fields ("frontmatter") of a contact.

Relationship keys
─────────────────
A contact's relationships are flattened into the structured fields as::

    RELATED.FRIEND: uid:abc            # the only friend
    RELATED.PARENT.0: urn:uuid:1234    # several parents → contiguous
    RELATED.PARENT.1: name:Ann         #   zero-based indices

``parse_related_fields`` / ``generate_related_fields`` convert between
those keys and ``Relationship`` records; the dotted key is purely a
serialization concern of this module.

Documents
─────────
``split_document`` / ``render_document`` convert a markdown document with
a leading ``---`` YAML block into ``(fields, body)`` and back (PyYAML).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

import yaml

from contact_curator.contact.models import Relationship
from contact_curator.contact.namespace import format_reference, parse_reference
from contact_curator.core.errors import ParseError

RELATED_PREFIX = "RELATED."

_RELATED_KEY = re.compile(r"RELATED\.([^.]+)(?:\.(\d+))?")
_EMPTY_FRONTMATTER = re.compile(r"---[ \t]*\r?\n---[ \t]*(?:\r?\n|$)(.*)", re.DOTALL)
_FRONTMATTER = re.compile(r"---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|$)(.*)", re.DOTALL)


# ── Relationship fields ──────────────────────────────────────────────────


def parse_related_fields(fields: dict[str, Any]) -> list[Relationship]:
    """Relationships encoded in ``RELATED.*`` keys, in map iteration order.

    Non-matching keys and non-string values are ignored.
    """
    relationships: list[Relationship] = []
    for key, value in fields.items():
        match = _RELATED_KEY.fullmatch(key)
        if match is None or not isinstance(value, str):
            continue
        namespace, uid = parse_reference(value)
        relationships.append(
            Relationship(type=match.group(1).lower(), target_uid=uid, namespace=namespace)
        )
    return relationships


def generate_related_fields(relationships: list[Relationship]) -> dict[str, str]:
    """Flatten relationships into ``RELATED.<TYPE>[.<index>]`` keys.

    Groups are emitted in first-seen order of their type; within a group
    the input order fixes the index. Existing fields are not consulted.
    """
    groups: dict[str, list[Relationship]] = {}
    for relationship in relationships:
        groups.setdefault(relationship.type.upper(), []).append(relationship)

    result: dict[str, str] = {}
    for type_key, members in groups.items():
        if len(members) == 1:
            result[f"{RELATED_PREFIX}{type_key}"] = format_reference(members[0])
            continue
        for index, relationship in enumerate(members):
            result[f"{RELATED_PREFIX}{type_key}.{index}"] = format_reference(relationship)
    return result


def has_related_fields(fields: dict[str, Any]) -> bool:
    return any(key.startswith(RELATED_PREFIX) for key in fields)


def strip_related_fields(fields: dict[str, Any]) -> dict[str, Any]:
    """Remove every ``RELATED.*`` key in place; return what was removed."""
    removed = {key: fields[key] for key in fields if key.startswith(RELATED_PREFIX)}
    for key in removed:
        del fields[key]
    return removed


# ── Documents ────────────────────────────────────────────────────────────


def split_document(text: str) -> tuple[dict[str, Any], str]:
    """Split a document into its YAML fields and markdown body.

    A document without a leading ``---`` block has no fields.

    Raises:
        ParseError: If the YAML block is malformed or is not a mapping.
    """
    match = _EMPTY_FRONTMATTER.match(text)
    if match:
        return {}, match.group(1)

    match = _FRONTMATTER.match(text)
    if match is None:
        return {}, text

    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError as e:
        raise ParseError(f"Invalid frontmatter: {e}", cause=e) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ParseError(f"Frontmatter must be a mapping, got {type(data).__name__}")
    return {str(k): v for k, v in data.items()}, match.group(2)


def render_document(fields: dict[str, Any], body: str) -> str:
    """Inverse of :func:`split_document`; key order is preserved."""
    if not fields:
        return body
    dumped = yaml.safe_dump(
        fields,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )
    return f"---\n{dumped}---\n{body}"


@dataclass
class FieldValidation:
    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def validate_fields(fields: dict[str, Any]) -> FieldValidation:
    """Check the fields every contact is expected to carry."""
    errors: list[str] = []
    warnings: list[str] = []

    if not fields.get("UID"):
        errors.append("Missing required field: UID")
    elif not isinstance(fields["UID"], str):
        errors.append("UID must be a string")

    if not fields.get("FN"):
        errors.append("Missing required field: FN (formatted name)")

    for key, value in fields.items():
        if value is None:
            warnings.append(f"Field {key} is empty")

    return FieldValidation(valid=not errors, errors=errors, warnings=warnings)


def remove_invalid_fields(fields: dict[str, Any]) -> dict[str, Any]:
    """Copy without empty values and ``_private`` keys."""
    return {
        key: value
        for key, value in fields.items()
        if value is not None and value != "" and not key.startswith("_")
    }


__all__ = [
    "RELATED_PREFIX",
    "parse_related_fields",
    "generate_related_fields",
    "has_related_fields",
    "strip_related_fields",
    "split_document",
    "render_document",
    "FieldValidation",
    "validate_fields",
    "remove_invalid_fields",
]
