"""
CLI utility helpers — document loading and output formatting.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from contact_curator.contact.frontmatter import render_document, split_document
from contact_curator.contact.index import ContactIndex, IndexEntry
from contact_curator.contact.models import Contact
from contact_curator.core.errors import ParseError

console = Console()
err_console = Console(stderr=True)


# ── Documents ────────────────────────────────────────────────────────────


def load_contact(path: Path) -> Contact:
    """Read a markdown contact document into a ``Contact``."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ParseError(f"Cannot read {path}: {e}", cause=e).with_context(contact=str(path)) from e
    try:
        fields, body = split_document(text)
    except ParseError as e:
        raise e.with_context(contact=str(path))
    return Contact(path=str(path), fields=fields, content=body)


def save_contact(contact: Contact) -> None:
    Path(contact.path).write_text(render_document(contact.fields, contact.content), encoding="utf-8")


def load_contacts(paths: list[Path]) -> list[Contact]:
    """Load every document or exit with code 1 on the first unreadable one."""
    contacts = []
    for path in paths:
        try:
            contacts.append(load_contact(path))
        except ParseError as e:
            err_console.print(f"[bold red]Error[/bold red] ({e.category.value}): {e.message}")
            raise typer.Exit(code=1) from e
    return contacts


def contact_name(contact: Contact) -> str:
    """Display name of a document: its ``FN`` field, else the file stem."""
    return str(contact.fields.get("FN") or Path(contact.path).stem)


def build_index(contacts: list[Contact], uid_field: str = "UID") -> ContactIndex:
    """Index the contacts that already carry an identifier."""
    index = ContactIndex()
    for contact in contacts:
        uid = contact.fields.get(uid_field)
        if not isinstance(uid, str) or not uid:
            continue
        index.add(IndexEntry(uid=uid, path=contact.path, name=contact_name(contact)))
    return index


def name_lookup(index: ContactIndex):
    """uid → display name, accepting identifiers with or without ``urn:uuid:``."""

    def namer(uid: str) -> str | None:
        for candidate in (uid, f"urn:uuid:{uid}", f"uid:{uid}"):
            entry = index.get_by_uid(candidate)
            if entry is not None:
                return entry.name
        return None

    return namer


# ── Output helpers ───────────────────────────────────────────────────────


def print_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2, default=str))


def print_table(title: str, columns: list[str], rows: list[list[Any]]) -> None:
    table = Table(title=title)
    for column in columns:
        table.add_column(column)
    for row in rows:
        table.add_row(*[str(value) for value in row])
    console.print(table)
