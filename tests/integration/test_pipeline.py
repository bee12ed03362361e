"""
End-to-end curator passes over the standard processors.

Scenarios:
- gendered list entry → genderless field → inferred gender → rendered term
- list names resolved through a contact index regardless of case
- repeated passes settle (no flip-flopping between passes)
- contacts without relationships never gain an empty Related section
- fields ↔ list round trip through a contact index
"""

from contact_curator.cli.utils import build_index, name_lookup
from contact_curator.contact.frontmatter import generate_related_fields, parse_related_fields
from contact_curator.contact.index import ContactIndex, IndexEntry
from contact_curator.contact.models import Contact, Namespace, Relationship
from contact_curator.contact.related_list import generate_related_list
from contact_curator.core.settings import load_settings
from contact_curator.curation import CuratorRunner, RunType, build_registry
from contact_curator.curation.processors import (
    make_related_frontmatter_processor,
    make_related_list_processor,
)


def related(fields):
    return {k: v for k, v in fields.items() if k.startswith("RELATED.")}


class TestGenderedPass:
    """A gendered list entry through a full pass."""

    def test_mother_scenario(self, registry, settings, jane):
        result = CuratorRunner(registry, settings=settings).process(jane, RunType.UPCOMING)

        assert result.ok
        assert result.ran == ["uid", "related_frontmatter", "related_list", "gender_inference", "gender_render"]
        assert jane.fields["GENDER"] == "F"
        assert related(jane.fields) == {"RELATED.PARENT": "name:Ann Doe"}
        assert jane.fields["UID"] == "urn:uuid:00000000-0000-0000-0000-000000000001"
        assert jane.content == "# Jane Doe\n\n## Related\n\n- mother [[Ann Doe]]\n"

    def test_second_pass_is_stable(self, registry, settings, jane):
        runner = CuratorRunner(registry, settings=settings)
        runner.process(jane)
        fields, content = dict(jane.fields), jane.content

        result = runner.process(jane)

        assert jane.fields == fields
        assert jane.content == content
        assert "uid" in result.skipped

    def test_genderless_list_rendered_once_gender_known(self, registry, settings):
        contact = Contact(
            path="people/kim.md",
            fields={"GENDER": "M"},
            content="# Kim\n\n## Related\n\n- parent [[Lee]]\n- friend [[Sam]]\n",
        )
        CuratorRunner(registry, settings=settings).process(contact)
        assert contact.content == "# Kim\n\n## Related\n\n- father [[Lee]]\n- friend [[Sam]]\n"
        assert related(contact.fields) == {"RELATED.PARENT": "name:Lee", "RELATED.FRIEND": "name:Sam"}

    def test_index_names_differing_in_case(self, settings, uid_factory):
        """A list name resolved through the index keeps its gendered term."""
        jane = Contact(
            path="people/jane.md",
            fields={"FN": "Jane Doe"},
            content="# Jane Doe\n\n## Related\n\n- mother [[ann doe]]\n",
        )
        ann = Contact(path="people/ann.md", fields={"FN": "Ann Doe", "UID": "urn:uuid:aaaa"}, content="# Ann Doe\n")
        index = build_index([jane, ann])
        registry = build_registry(
            settings, uid_factory=uid_factory, resolver=index.resolve_name, namer=name_lookup(index)
        )

        CuratorRunner(registry, settings=settings).process(jane)

        assert jane.fields["GENDER"] == "F"
        assert related(jane.fields) == {"RELATED.PARENT": "urn:uuid:aaaa"}
        assert jane.content == "# Jane Doe\n\n## Related\n\n- mother [[ann doe]]\n"


class TestEmptySections:
    def test_no_relationships_no_heading(self, registry, settings):
        contact = Contact(path="people/solo.md", content="# Solo\n")
        CuratorRunner(registry, settings=settings).process(contact)
        assert contact.content == "# Solo\n"
        assert "## Related" not in contact.content
        assert list(contact.fields) == ["UID"]

    def test_generate_empty_list_is_empty_string(self):
        assert generate_related_list([]) == ""


class TestFieldsAndListRoundTrip:
    """Structured fields and the list agree after syncing both ways."""

    def test_multi_valued_field_generation(self):
        rels = [
            Relationship(type="friend", target_uid="a", namespace=Namespace.UID),
            Relationship(type="friend", target_uid="b", namespace=Namespace.UID),
        ]
        assert generate_related_fields(rels) == {"RELATED.FRIEND.0": "uid:a", "RELATED.FRIEND.1": "uid:b"}

    def test_round_trip_through_index(self, settings):
        index = ContactIndex(
            [
                IndexEntry(uid="urn:uuid:aaaa", path="people/ann.md", name="Ann Doe"),
                IndexEntry(uid="uid:bbbb", path="people/bob.md", name="Bob"),
            ]
        )

        def namer(uid):
            for candidate in (f"urn:uuid:{uid}", f"uid:{uid}"):
                entry = index.get_by_uid(candidate)
                if entry is not None:
                    return entry.name
            return None

        original = {"RELATED.PARENT": "urn:uuid:aaaa", "RELATED.FRIEND": "uid:bbbb"}
        contact = Contact(path="people/jane.md", fields=dict(original), content="# Jane\n")

        make_related_list_processor(settings, namer=namer).mutate(contact)
        assert contact.content == "# Jane\n\n## Related\n\n- parent [[Ann Doe]]\n- friend [[Bob]]\n"

        make_related_frontmatter_processor(settings, resolver=index.resolve_name).mutate(contact)
        assert sorted(
            (r.type, r.namespace, r.target_uid) for r in parse_related_fields(contact.fields)
        ) == sorted(
            (r.type, r.namespace, r.target_uid) for r in parse_related_fields(original)
        )

    def test_fields_only_contact_gains_list(self, uid_factory, bob):
        """With list→fields disabled, fields are rendered into a new list."""
        settings = load_settings(disabled_processors=["related_frontmatter"])
        registry = build_registry(settings, uid_factory=uid_factory)
        CuratorRunner(registry, settings=settings).process(bob)
        assert "## Related\n\n- friend [[Ann Doe]]\n- friend [[Carl]]\n" in bob.content

        full = load_settings()
        CuratorRunner(build_registry(full, uid_factory=uid_factory), settings=full).process(bob)
        assert related(bob.fields) == {"RELATED.FRIEND.0": "name:Ann Doe", "RELATED.FRIEND.1": "name:Carl"}


class TestQueueDrivenRun:
    def test_mixed_batch(self, registry, settings, jane, bob, clock):
        from contact_curator.curation import CuratorQueue

        runner = CuratorRunner(registry, queue=CuratorQueue(clock=clock), settings=settings)
        solo = Contact(path="people/solo.md", content="# Solo\n")
        runner.submit(bob, RunType.IMPROVEMENT)
        runner.submit(jane, RunType.UPCOMING)
        runner.submit(solo, RunType.IMMEDIATE)
        runner.submit(jane, RunType.IMPROVEMENT)

        results = runner.drain()
        assert [r.contact.path for r in results] == ["people/solo.md", "people/jane.md", "people/bob.md"]
        assert all(r.ok for r in results)
        assert solo.fields["UID"].startswith("urn:uuid:")
