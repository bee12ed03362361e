"""Reverse-relationship rules for keeping both ends of an edge consistent.

If Jane lists ``- mother [[Ann]]``, Ann's list should carry a ``child``
edge back to Jane. These helpers answer "what should the other side say"
and "do these two sides agree". The ``check`` command reports one-sided
edges between the documents it is given.
"""

from __future__ import annotations

from contact_curator.contact.models import Relationship

REVERSE_TYPES: dict[str, str] = {
    # Family
    "parent": "child",
    "child": "parent",
    "sibling": "sibling",
    "spouse": "spouse",
    "partner": "partner",
    # Gendered family
    "mother": "child",
    "father": "child",
    "mom": "child",
    "dad": "child",
    "son": "parent",
    "daughter": "parent",
    "sister": "sibling",
    "brother": "sibling",
    "husband": "spouse",
    "wife": "spouse",
    "boyfriend": "partner",
    "girlfriend": "partner",
    # Extended family
    "grandparent": "grandchild",
    "grandchild": "grandparent",
    "grandmother": "grandchild",
    "grandfather": "grandchild",
    "grandson": "grandparent",
    "granddaughter": "grandparent",
    "aunt": "niece-nephew",
    "uncle": "niece-nephew",
    "niece": "aunt-uncle",
    "nephew": "aunt-uncle",
    "cousin": "cousin",
    # Professional
    "manager": "report",
    "report": "manager",
    "supervisor": "supervisee",
    "supervisee": "supervisor",
    "mentor": "mentee",
    "mentee": "mentor",
    "colleague": "colleague",
    "coworker": "coworker",
    # Social
    "friend": "friend",
    "acquaintance": "acquaintance",
    "neighbor": "neighbor",
    "roommate": "roommate",
}

SYMMETRIC_TYPES: frozenset[str] = frozenset(
    {
        "sibling", "sister", "brother",
        "spouse", "husband", "wife",
        "partner", "boyfriend", "girlfriend",
        "cousin",
        "colleague", "coworker",
        "friend", "acquaintance", "neighbor", "roommate",
    }
)

# Wider than gender.GENDERLESS: covers grand-relations as well.
_COMPARISON_TYPES: dict[str, str] = {
    "mother": "parent",
    "father": "parent",
    "mom": "parent",
    "dad": "parent",
    "son": "child",
    "daughter": "child",
    "sister": "sibling",
    "brother": "sibling",
    "grandmother": "grandparent",
    "grandfather": "grandparent",
    "grandson": "grandchild",
    "granddaughter": "grandchild",
    "husband": "spouse",
    "wife": "spouse",
    "boyfriend": "partner",
    "girlfriend": "partner",
}

_GENDERED_VARIANTS: dict[str, list[str]] = {
    "parent": ["mother", "father", "mom", "dad"],
    "child": ["son", "daughter"],
    "sibling": ["sister", "brother"],
    "grandparent": ["grandmother", "grandfather"],
    "grandchild": ["grandson", "granddaughter"],
    "spouse": ["husband", "wife"],
    "partner": ["boyfriend", "girlfriend"],
}


def reverse_type(type: str) -> str:
    """Type the target contact should use for the reverse edge."""
    return REVERSE_TYPES.get(type.lower(), type)


def is_symmetric(type: str) -> bool:
    return type.lower() in SYMMETRIC_TYPES


def comparison_type(type: str) -> str:
    """Genderless form used when comparing two relationship types."""
    folded = type.lower()
    return _COMPARISON_TYPES.get(folded, folded)


def validate_pair(source_type: str, target_type: str) -> bool:
    """True if ``target_type`` is an acceptable reverse of ``source_type``."""
    expected = comparison_type(reverse_type(source_type))
    return expected == comparison_type(target_type)


def possible_reverse_types(type: str) -> list[str]:
    """All reverse types, gendered variants included."""
    base = reverse_type(type)
    return [base, *_GENDERED_VARIANTS.get(base, [])]


def missing_reverse_edges(related: dict[str, list[Relationship]]) -> dict[str, list[str]]:
    """
    Edges whose target has no acceptable edge back.

    ``related`` maps each contact's display name to the relationships it
    lists. Only targets that are themselves keys of ``related`` are checked;
    names match ignoring case. Returns descriptions keyed by the contact
    that lists the one-sided edge.
    """
    names = {name.casefold(): name for name in related}
    missing: dict[str, list[str]] = {}
    for name, relationships in related.items():
        for rel in relationships:
            target = names.get(rel.display_name.casefold())
            if target is None or target == name:
                continue
            back = [r.type for r in related[target] if r.display_name.casefold() == name.casefold()]
            if not any(validate_pair(rel.type, back_type) for back_type in back):
                missing.setdefault(name, []).append(f"{target} does not list {name} as {reverse_type(rel.type)}")
    return missing


__all__ = [
    "REVERSE_TYPES",
    "SYMMETRIC_TYPES",
    "reverse_type",
    "is_symmetric",
    "comparison_type",
    "validate_pair",
    "possible_reverse_types",
    "missing_reverse_edges",
]
