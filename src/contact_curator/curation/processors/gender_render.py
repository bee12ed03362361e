"""Gender rendering: list relationship types in their gendered form.

Uses the contact's own gender field. Types without a gendered form for
that gender are listed as written.
"""

from __future__ import annotations

from contact_curator.contact.gender import gendered_form, normalize
from contact_curator.contact.markdown import replace_section
from contact_curator.contact.models import Contact
from contact_curator.contact.related_list import generate_related_list, parse_related_list
from contact_curator.core.settings import CuratorSettings, get_settings
from contact_curator.curation.models import Processor, RunType
from contact_curator.curation.processors import gender_inference

NAME = "gender_render"


def render_type(type: str, gender: str) -> str:
    base = normalize(type)
    rendered = gendered_form(base, gender)
    return rendered if rendered != base else type


def make_gender_render_processor(settings: CuratorSettings | None = None) -> Processor:
    settings = settings or get_settings()
    heading = settings.related_heading
    field = settings.gender_field

    def gate(contact: Contact) -> bool:
        if not contact.fields.get(field):
            return False
        return bool(parse_related_list(contact.content, heading))

    def mutate(contact: Contact) -> None:
        gender = str(contact.fields.get(field) or "")
        if not gender:
            return
        relationships = [
            rel.with_type(render_type(rel.type, gender))
            for rel in parse_related_list(contact.content, heading)
        ]
        block = generate_related_list(relationships, heading)
        contact.content = replace_section(contact.content, heading, block)

    return Processor(
        name=NAME,
        run_type=RunType.UPCOMING,
        gate=gate,
        mutate=mutate,
        dependencies=(gender_inference.NAME,),
        description="Render relationships with gender-specific terms",
    )
