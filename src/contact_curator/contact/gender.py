"""
Gendered and genderless relationship vocabulary.

Relationship types are stored genderless (``parent``) in the structured
fields and rendered gendered (``mother``) in the relationship list when
the contact's gender is known. All lookups are case-insensitive and depend
only on the tables below.
"""

from __future__ import annotations

GENDERLESS: dict[str, str] = {
    "mother": "parent",
    "mom": "parent",
    "father": "parent",
    "dad": "parent",
    "sister": "sibling",
    "brother": "sibling",
    "son": "child",
    "daughter": "child",
    "husband": "spouse",
    "wife": "spouse",
    "boyfriend": "partner",
    "girlfriend": "partner",
}

INFERRED_GENDER: dict[str, str] = {
    "mother": "F",
    "mom": "F",
    "father": "M",
    "dad": "M",
    "sister": "F",
    "brother": "M",
    "son": "M",
    "daughter": "F",
    "husband": "M",
    "wife": "F",
    "boyfriend": "M",
    "girlfriend": "F",
}

GENDERED: dict[str, dict[str, str]] = {
    "parent": {"M": "father", "F": "mother"},
    "sibling": {"M": "brother", "F": "sister"},
    "child": {"M": "son", "F": "daughter"},
    "spouse": {"M": "husband", "F": "wife"},
    "partner": {"M": "boyfriend", "F": "girlfriend"},
}


def normalize(type: str) -> str:
    """Genderless, lower-case form of a relationship type."""
    folded = type.lower()
    return GENDERLESS.get(folded, folded)


def infer_gender(type: str) -> str | None:
    """Gender implied by a gendered term, ``None`` for anything else."""
    return INFERRED_GENDER.get(type.lower())


def gendered_form(type: str, gender: str | None) -> str:
    """
    Display term for a genderless type and a gender.

    Pairs missing from the table (unknown type, empty gender, ``O``/``N``/``U``)
    return ``type`` unchanged.
    """
    if not gender:
        return type
    forms = GENDERED.get(type.lower())
    if forms is None:
        return type
    return forms.get(gender.upper(), type)


def is_gendered(type: str) -> bool:
    return type.lower() in GENDERLESS


__all__ = [
    "GENDERLESS",
    "INFERRED_GENDER",
    "GENDERED",
    "normalize",
    "infer_gender",
    "gendered_form",
    "is_gendered",
]
