"""Contact and relationship records."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Namespace(str, Enum):
    """Reference-encoding scheme for a relationship target."""

    URN_UUID = "urn:uuid"
    UID = "uid"
    NAME = "name"


@dataclass
class Relationship:
    """
    One edge of the contact graph, as seen from the owning contact.

    ``type`` is lower-case and may be genderless (``parent``) or gendered
    (``mother``). With ``namespace=NAME`` the target is identified by
    ``target_name`` (or, after a round trip through the structured fields,
    by ``target_uid``).
    """

    type: str
    target_uid: str
    target_name: str | None = None
    namespace: Namespace = Namespace.UID

    @property
    def display_name(self) -> str:
        """Name shown in the relationship list."""
        return self.target_name or self.target_uid

    def with_type(self, type: str) -> Relationship:
        """Copy of this relationship with another type."""
        return Relationship(
            type=type,
            target_uid=self.target_uid,
            target_name=self.target_name,
            namespace=self.namespace,
        )


@dataclass
class Contact:
    """
    The unit of work handed to the curator pipeline.

    Attributes:
        path: Opaque identifier of the contact (usually its file path)
        fields: Structured fields (frontmatter), mutated in place
        content: Free-form document text, mutated in place
    """

    path: str
    fields: dict[str, Any] = field(default_factory=dict)
    content: str = ""

    @property
    def key(self) -> str:
        """Identity used for queue deduplication."""
        return self.path

    def __repr__(self) -> str:
        return f"Contact(path={self.path!r}, fields={len(self.fields)})"
