"""Gender inference: a gendered relationship term sets the contact's gender.

The first relationship with a gendered term wins (``- mother [[Ann]]``
→ ``GENDER: F``); later terms are not consulted.
"""

from __future__ import annotations

from contact_curator.contact.gender import infer_gender
from contact_curator.contact.models import Contact
from contact_curator.contact.related_list import parse_related_list
from contact_curator.core.logging import get_logger
from contact_curator.core.settings import CuratorSettings, get_settings
from contact_curator.curation.models import Processor, RunType
from contact_curator.curation.processors import related_frontmatter

NAME = "gender_inference"

log = get_logger(__name__)


def make_gender_inference_processor(settings: CuratorSettings | None = None) -> Processor:
    settings = settings or get_settings()
    heading = settings.related_heading
    field = settings.gender_field

    def gate(contact: Contact) -> bool:
        if contact.fields.get(field):
            return False
        return bool(parse_related_list(contact.content, heading))

    def mutate(contact: Contact) -> None:
        for rel in parse_related_list(contact.content, heading):
            gender = infer_gender(rel.type)
            if gender:
                contact.fields[field] = gender
                log.info("gender_inference.inferred", gender=gender, from_type=rel.type)
                return

    return Processor(
        name=NAME,
        run_type=RunType.UPCOMING,
        gate=gate,
        mutate=mutate,
        dependencies=(related_frontmatter.NAME,),
        description="Infer gender from relationship terms",
    )
