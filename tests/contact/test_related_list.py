"""Tests for the ## Related list codec."""

from contact_curator.contact.models import Namespace, Relationship
from contact_curator.contact.related_list import (
    generate_related_list,
    locate_related_heading,
    parse_related_list,
    keep_written_entries,
    resolve_targets,
    same_relationships,
)


def named(type, name):
    return Relationship(type=type, target_uid="", target_name=name, namespace=Namespace.NAME)


class TestParseRelatedList:
    """Tests for reading list items."""

    def test_items(self):
        text = "# Jane\n\n## Related\n\n- Mother [[Ann Doe]]\n- friend [[Bob]]\n"
        assert parse_related_list(text) == [named("mother", "Ann Doe"), named("friend", "Bob")]

    def test_hyphenated_type(self):
        assert parse_related_list("## Related\n\n- niece-nephew [[Kim]]\n") == [named("niece-nephew", "Kim")]

    def test_non_matching_lines_skipped(self):
        text = "## Related\n\nSome prose.\n- friend Bob\n- [[Nobody]]\n- friend [[Bob]] since 2010\n"
        assert parse_related_list(text) == [named("friend", "Bob")]

    def test_stops_at_next_heading(self):
        text = "## Related\n\n- friend [[Bob]]\n\n## Notes\n\n- friend [[Carl]]\n"
        assert parse_related_list(text) == [named("friend", "Bob")]

    def test_missing_heading(self):
        assert parse_related_list("# Jane\n\n- friend [[Bob]]\n") == []

    def test_custom_heading(self):
        text = "## Relationships\n\n- friend [[Bob]]\n"
        assert parse_related_list(text, "Relationships") == [named("friend", "Bob")]
        assert locate_related_heading(text) is None


class TestGenerateRelatedList:
    def test_block(self):
        rels = [named("mother", "Ann Doe"), Relationship(type="friend", target_uid="abc")]
        assert generate_related_list(rels) == "## Related\n\n- mother [[Ann Doe]]\n- friend [[abc]]"

    def test_empty_is_empty_string(self):
        assert generate_related_list([]) == ""

    def test_parse_of_generated(self):
        rels = [named("sister", "Bea"), named("friend", "Bob")]
        assert parse_related_list(generate_related_list(rels)) == rels


class TestResolveTargets:
    def test_resolved_names_get_identifiers(self):
        lookup = {"Ann Doe": "urn:uuid:1234", "Bob": "abc"}
        resolved = resolve_targets([named("parent", "Ann Doe"), named("friend", "Bob")], lookup.get)
        assert resolved[0] == Relationship(
            type="parent", target_uid="1234", target_name="Ann Doe", namespace=Namespace.URN_UUID
        )
        assert resolved[1].namespace == Namespace.UID
        assert resolved[1].target_uid == "abc"

    def test_unresolved_names_unchanged(self):
        rel = named("friend", "Stranger")
        assert resolve_targets([rel], lambda name: None) == [rel]

    def test_identified_relationships_untouched(self):
        rel = Relationship(type="friend", target_uid="abc")
        assert resolve_targets([rel], lambda name: "urn:uuid:zzz") == [rel]


class TestSameRelationships:
    def test_gendered_and_genderless_match(self):
        assert same_relationships([named("mother", "Ann")], [named("parent", "Ann")])

    def test_order_insensitive(self):
        left = [named("friend", "Bob"), named("parent", "Ann")]
        right = [named("parent", "Ann"), named("friend", "Bob")]
        assert same_relationships(left, right)

    def test_different_targets(self):
        assert not same_relationships([named("friend", "Bob")], [named("friend", "Carl")])

    def test_multiplicity_counts(self):
        assert not same_relationships([named("friend", "Bob")], [named("friend", "Bob")] * 2)

    def test_names_compared_ignoring_case(self):
        assert same_relationships([named("mother", "ann doe")], [named("parent", "Ann Doe")])


class TestKeepWrittenEntries:
    def test_matching_entry_keeps_type_and_name(self):
        field = Relationship(type="parent", target_uid="aaaa", target_name="Ann Doe", namespace=Namespace.URN_UUID)
        (kept,) = keep_written_entries([field], [named("mother", "ann doe")])
        assert kept.type == "mother"
        assert kept.target_name == "ann doe"
        assert kept.target_uid == "aaaa"
        assert kept.namespace == Namespace.URN_UUID

    def test_unmatched_relationships_unchanged(self):
        carl = named("friend", "Carl")
        assert keep_written_entries([carl], [named("friend", "Bob")]) == [carl]

    def test_each_entry_used_once(self):
        kept = keep_written_entries([named("sibling", "Sam"), named("sibling", "Sam")], [named("sister", "Sam")])
        assert [rel.type for rel in kept] == ["sister", "sibling"]
