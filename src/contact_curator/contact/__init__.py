"""
Contact records and the codecs that read and write their relationships.

- ``namespace``    — relationship target references (``urn:uuid:``, ``uid:``, ``name:``)
- ``gender``       — gendered ↔ genderless relationship vocabulary
- ``graph``        — reverse-relationship rules
- ``frontmatter``  — ``RELATED.*`` structured fields and YAML documents
- ``markdown``     — heading-delimited sections
- ``related_list`` — the ``## Related`` bullet list
- ``index``        — uid/path/name lookups used to resolve list entries

Every function here is pure over plain data and never fails on missing
structure.
"""

from contact_curator.contact.frontmatter import (
    generate_related_fields,
    has_related_fields,
    parse_related_fields,
    render_document,
    split_document,
    strip_related_fields,
)
from contact_curator.contact.gender import gendered_form, infer_gender, normalize
from contact_curator.contact.index import ContactIndex, IndexEntry
from contact_curator.contact.markdown import append_section, find_section, locate_heading, replace_section
from contact_curator.contact.models import Contact, Namespace, Relationship
from contact_curator.contact.namespace import format_reference, parse_reference
from contact_curator.contact.related_list import (
    generate_related_list,
    parse_related_list,
    resolve_targets,
)

__all__ = [
    # Models
    "Contact",
    "Relationship",
    "Namespace",
    # Namespace
    "parse_reference",
    "format_reference",
    # Gender
    "normalize",
    "infer_gender",
    "gendered_form",
    # Structured fields
    "parse_related_fields",
    "generate_related_fields",
    "has_related_fields",
    "strip_related_fields",
    "split_document",
    "render_document",
    # Sections
    "locate_heading",
    "find_section",
    "replace_section",
    "append_section",
    "parse_related_list",
    "generate_related_list",
    "resolve_targets",
    # Index
    "ContactIndex",
    "IndexEntry",
]
