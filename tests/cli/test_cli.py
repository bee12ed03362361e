"""Tests for contact_curator.cli — command smoke tests via CliRunner.

Tests cover the processors, run and check commands against contact
documents written to a temporary directory.
"""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from contact_curator import __version__
from contact_curator.cli.app import app
from contact_curator.contact.frontmatter import split_document
from contact_curator.core.logging import configure_logging

runner = CliRunner()

JANE = "---\nFN: Jane Doe\n---\n# Jane Doe\n\n## Related\n\n- mother [[Ann Doe]]\n"
ANN = "---\nFN: Ann Doe\nUID: urn:uuid:aaaa\n---\n# Ann Doe\n"


@pytest.fixture(autouse=True)
def restore_logging():
    """The CLI binds logging to the runner's streams; rebind after each test."""
    yield
    configure_logging(level="WARNING", format="console", force=True)


@pytest.fixture
def docs(tmp_path):
    jane = tmp_path / "jane.md"
    ann = tmp_path / "ann.md"
    jane.write_text(JANE, encoding="utf-8")
    ann.write_text(ANN, encoding="utf-8")
    return jane, ann


def invoke(*args):
    return runner.invoke(app, ["--log-level", "ERROR", *args])


# ─── Root ────────────────────────────────────────────────────────────────


class TestRoot:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"contact-curator {__version__}" in result.stdout


# ─── processors ──────────────────────────────────────────────────────────


class TestProcessorsCommand:
    def test_json(self):
        result = invoke("processors", "--json")
        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert [p["name"] for p in payload] == [
            "uid",
            "related_frontmatter",
            "related_list",
            "gender_inference",
            "gender_render",
        ]
        assert payload[0]["run_type"] == "IMMEDIATE"
        assert payload[4]["dependencies"] == ["gender_inference"]

    def test_table(self):
        assert invoke("processors").exit_code == 0


# ─── run ─────────────────────────────────────────────────────────────────


class TestRunCommand:
    """Tests for the 'run' command."""

    def test_dry_run_leaves_files(self, docs):
        jane, ann = docs
        result = invoke("run", str(jane), str(ann), "--json")

        assert result.exit_code == 0
        payload = {item["path"]: item for item in json.loads(result.stdout)}
        assert payload[str(jane)]["changed"] is True
        assert payload[str(jane)]["status"] == "completed"
        assert payload[str(ann)]["changed"] is False
        assert jane.read_text(encoding="utf-8") == JANE

    def test_write_resolves_names_through_index(self, docs):
        jane, ann = docs
        result = invoke("run", str(jane), str(ann), "--write", "--json")
        assert result.exit_code == 0

        fields, body = split_document(jane.read_text(encoding="utf-8"))
        assert fields["FN"] == "Jane Doe"
        assert fields["UID"].startswith("urn:uuid:")
        assert fields["RELATED.PARENT"] == "urn:uuid:aaaa"
        assert fields["GENDER"] == "F"
        assert body == "# Jane Doe\n\n## Related\n\n- mother [[Ann Doe]]\n"
        assert ann.read_text(encoding="utf-8") == ANN

    def test_second_run_changes_nothing(self, docs):
        jane, ann = docs
        invoke("run", str(jane), str(ann), "--write")
        result = invoke("run", str(jane), str(ann), "--json")
        assert all(item["changed"] is False for item in json.loads(result.stdout))

    def test_run_type_option(self, docs):
        jane, _ = docs
        result = invoke("run", str(jane), "--run-type", "immediate", "--json")
        assert result.exit_code == 0

    def test_invalid_failure_policy(self, docs):
        jane, _ = docs
        result = invoke("run", str(jane), "--failure-policy", "retry")
        assert result.exit_code != 0

    def test_unparseable_document(self, tmp_path):
        broken = tmp_path / "broken.md"
        broken.write_text("---\nFN: [oops\n---\nbody\n", encoding="utf-8")
        result = invoke("run", str(broken))
        assert result.exit_code == 1

    def test_missing_file(self, tmp_path):
        result = invoke("run", str(tmp_path / "nope.md"))
        assert result.exit_code != 0


# ─── check ───────────────────────────────────────────────────────────────


class TestCheckCommand:
    def test_valid(self, docs):
        _, ann = docs
        assert invoke("check", str(ann)).exit_code == 0

    def test_invalid(self, docs):
        jane, ann = docs
        assert invoke("check", str(jane), str(ann)).exit_code == 1

    def test_one_sided_relationship_is_only_a_warning(self, docs):
        jane, ann = docs
        jane.write_text(JANE.replace("FN: Jane Doe\n", "FN: Jane Doe\nUID: urn:uuid:jjjj\n"), encoding="utf-8")
        assert invoke("check", str(jane), str(ann)).exit_code == 0
