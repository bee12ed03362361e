"""
Root Typer application for the contact-curator CLI.

Commands:
    processors   show the resolved processor order
    run          run the curator pipeline over contact documents
    check        validate contact frontmatter and reverse relationships
"""

from __future__ import annotations

from pathlib import Path

import typer

from contact_curator import __version__
from contact_curator.cli.utils import (
    build_index,
    contact_name,
    err_console,
    load_contacts,
    name_lookup,
    print_json,
    print_table,
    save_contact,
)
from contact_curator.contact.frontmatter import render_document, validate_fields
from contact_curator.contact.graph import missing_reverse_edges
from contact_curator.contact.related_list import parse_related_list
from contact_curator.core.errors import ConfigError, CycleDetectedError
from contact_curator.core.logging import configure_logging
from contact_curator.core.settings import load_settings
from contact_curator.curation import CuratorRunner, RunType, build_registry

app = typer.Typer(
    name="contact-curator",
    help="contact-curator — keep contact relationships in sync.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"contact-curator {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING or ERROR"),
) -> None:
    """contact-curator CLI — curate contact documents."""
    configure_logging(level=log_level.upper() if log_level else None, force=True)


@app.command("processors")
def list_processors(
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Show the processors in execution order."""
    registry = build_registry(load_settings())
    try:
        order = registry.resolve_order()
    except CycleDetectedError as e:
        err_console.print(f"[bold red]Error[/bold red] ({e.category.value}): {e.message}")
        raise typer.Exit(code=1) from e

    rows = [
        [p.name, p.run_type.value, ", ".join(p.dependencies) or "-", p.description]
        for p in order
    ]
    if json_out:
        print_json(
            [
                {"name": p.name, "run_type": p.run_type.value, "dependencies": list(p.dependencies)}
                for p in order
            ]
        )
        return
    print_table("Processors", ["Name", "Run type", "Depends on", "Description"], rows)


@app.command("run")
def run_pipeline(
    paths: list[Path] = typer.Argument(..., exists=True, dir_okay=False, help="Contact documents"),
    run_type: RunType = typer.Option(RunType.UPCOMING, "--run-type", case_sensitive=False),
    failure_policy: str | None = typer.Option(None, "--failure-policy", help="stop or continue"),
    write: bool = typer.Option(False, "--write", help="Save changed documents"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Run the curator pipeline over contact documents."""
    overrides = {"failure_policy": failure_policy} if failure_policy else {}
    try:
        settings = load_settings(**overrides)
    except ConfigError as e:
        err_console.print(f"[bold red]Error[/bold red] ({e.category.value}): {e.message}")
        raise typer.Exit(code=1) from e

    contacts = load_contacts(paths)
    originals = {c.path: render_document(c.fields, c.content) for c in contacts}
    index = build_index(contacts, settings.uid_field)

    registry = build_registry(settings, resolver=index.resolve_name, namer=name_lookup(index))
    runner = CuratorRunner(registry, settings=settings)
    for contact in contacts:
        runner.submit(contact, run_type)
    results = runner.drain()

    rows = []
    payload = []
    for result in results:
        changed = render_document(result.contact.fields, result.contact.content) != originals[result.contact.path]
        if write and changed and result.ok:
            save_contact(result.contact)
        error = str(result.error) if result.error else ""
        rows.append([result.contact.path, result.status.value, ", ".join(result.ran) or "-", changed, error])
        payload.append(
            {
                "path": result.contact.path,
                "status": result.status.value,
                "ran": result.ran,
                "skipped": result.skipped,
                "changed": changed,
                "error": error or None,
            }
        )

    if json_out:
        print_json(payload)
    else:
        print_table("Curator run", ["Contact", "Status", "Ran", "Changed", "Error"], rows)

    if any(not r.ok for r in results):
        raise typer.Exit(code=1)


@app.command("check")
def check_documents(
    paths: list[Path] = typer.Argument(..., exists=True, dir_okay=False, help="Contact documents"),
) -> None:
    """Validate required frontmatter fields and report one-sided relationships."""
    heading = load_settings().related_heading
    contacts = load_contacts(paths)
    missing = missing_reverse_edges(
        {contact_name(c): parse_related_list(c.content, heading) for c in contacts}
    )

    invalid = 0
    rows = []
    for contact in contacts:
        validation = validate_fields(contact.fields)
        warnings = [*validation.warnings, *missing.get(contact_name(contact), [])]
        if not validation.valid:
            invalid += 1
        rows.append(
            [
                contact.path,
                "ok" if validation.valid else "invalid",
                "; ".join(validation.errors) or "-",
                "; ".join(warnings) or "-",
            ]
        )
    print_table("Contact check", ["Contact", "Result", "Errors", "Warnings"], rows)
    if invalid:
        raise typer.Exit(code=1)
