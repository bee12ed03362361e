"""In-memory index of known contacts by uid and by path.

The index is the usual name resolver for
:func:`contact_curator.contact.related_list.resolve_targets`::

    index = ContactIndex()
    index.add(IndexEntry(uid="urn:uuid:1234", path="people/ann.md", name="Ann Doe"))
    resolve_targets(relationships, index.resolve_name)
"""

from __future__ import annotations

from dataclasses import dataclass

from contact_curator.core.logging import get_logger

logger = get_logger(__name__)


@dataclass
class IndexEntry:
    uid: str
    path: str
    name: str
    mtime: float = 0.0


class ContactIndex:
    """UID → entry and path → UID lookups kept in step."""

    def __init__(self, entries: list[IndexEntry] | None = None) -> None:
        self._by_uid: dict[str, IndexEntry] = {}
        self._by_path: dict[str, str] = {}
        for entry in entries or []:
            self.add(entry)

    def add(self, entry: IndexEntry) -> None:
        """Insert or update an entry. Entries without a uid are ignored."""
        if not entry.uid:
            logger.debug("index.skip_without_uid", path=entry.path)
            return
        previous = self._by_uid.get(entry.uid)
        if previous is not None and previous.path != entry.path:
            self._by_path.pop(previous.path, None)
        self._by_uid[entry.uid] = entry
        if entry.path:
            self._by_path[entry.path] = entry.uid

    def remove(self, uid: str) -> bool:
        entry = self._by_uid.pop(uid, None)
        if entry is None:
            return False
        if entry.path:
            self._by_path.pop(entry.path, None)
        return True

    def get_by_uid(self, uid: str) -> IndexEntry | None:
        return self._by_uid.get(uid)

    def get_by_path(self, path: str) -> IndexEntry | None:
        uid = self._by_path.get(path)
        if uid is None:
            return None
        return self._by_uid.get(uid)

    def entries(self) -> list[IndexEntry]:
        return list(self._by_uid.values())

    def clear(self) -> None:
        self._by_uid.clear()
        self._by_path.clear()

    def resolve_name(self, name: str) -> str | None:
        """UID of the first contact whose display name matches, ignoring case."""
        wanted = name.strip().casefold()
        for entry in self._by_uid.values():
            if entry.name.strip().casefold() == wanted:
                return entry.uid
        return None

    def validate(self) -> list[str]:
        """Consistency errors between the two lookups (empty when sound)."""
        errors = []
        for path, uid in self._by_path.items():
            if uid not in self._by_uid:
                errors.append(f"Path {path} references UID {uid} which is not in UID index")
        for uid, entry in self._by_uid.items():
            if entry.path and self._by_path.get(entry.path) != uid:
                errors.append(f"UID {uid} has path {entry.path} which is not correctly indexed")
        return errors

    def __len__(self) -> int:
        return len(self._by_uid)

    def __contains__(self, uid: object) -> bool:
        return uid in self._by_uid
