"""Tests for contact_curator.contact.index."""

from contact_curator.contact.index import ContactIndex, IndexEntry


def entry(uid="urn:uuid:1", path="people/ann.md", name="Ann Doe"):
    return IndexEntry(uid=uid, path=path, name=name)


class TestContactIndex:
    """Tests for uid/path lookups."""

    def test_add_and_lookup(self):
        index = ContactIndex([entry()])
        assert index.get_by_uid("urn:uuid:1").name == "Ann Doe"
        assert index.get_by_path("people/ann.md").uid == "urn:uuid:1"
        assert "urn:uuid:1" in index
        assert len(index) == 1

    def test_entries_without_uid_ignored(self):
        index = ContactIndex()
        index.add(entry(uid=""))
        assert len(index) == 0

    def test_moved_contact_drops_old_path(self):
        index = ContactIndex([entry()])
        index.add(entry(path="archive/ann.md"))
        assert index.get_by_path("people/ann.md") is None
        assert index.get_by_path("archive/ann.md").uid == "urn:uuid:1"
        assert index.validate() == []

    def test_remove(self):
        index = ContactIndex([entry()])
        assert index.remove("urn:uuid:1") is True
        assert index.remove("urn:uuid:1") is False
        assert index.get_by_path("people/ann.md") is None

    def test_clear(self):
        index = ContactIndex([entry(), entry(uid="urn:uuid:2", path="b.md", name="Bob")])
        index.clear()
        assert index.entries() == []


class TestResolveName:
    def test_case_insensitive(self):
        index = ContactIndex([entry()])
        assert index.resolve_name("  ann doe ") == "urn:uuid:1"

    def test_unknown(self):
        assert ContactIndex([entry()]).resolve_name("Bob") is None
