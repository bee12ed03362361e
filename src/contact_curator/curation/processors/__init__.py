"""
Standard curator processors.

Registration order (dependencies resolved by the registry)::

    uid                  IMMEDIATE
    related_frontmatter  UPCOMING                     list → fields
    related_list         UPCOMING                     fields → list
    gender_inference     UPCOMING  ← related_frontmatter
    gender_render        UPCOMING  ← gender_inference
"""

from __future__ import annotations

from collections.abc import Callable

from contact_curator.contact.related_list import NameResolver
from contact_curator.core.errors import ConfigError
from contact_curator.core.settings import CuratorSettings, get_settings
from contact_curator.curation.models import Processor
from contact_curator.curation.processors.uid import make_uid_processor
from contact_curator.curation.processors.related_frontmatter import make_related_frontmatter_processor
from contact_curator.curation.processors.related_list import make_related_list_processor
from contact_curator.curation.processors.gender_inference import make_gender_inference_processor
from contact_curator.curation.processors.gender_render import make_gender_render_processor
from contact_curator.curation.registry import ProcessorRegistry


def standard_processors(
    settings: CuratorSettings | None = None,
    *,
    uid_factory: Callable[[], str] | None = None,
    resolver: NameResolver | None = None,
    namer: Callable[[str], str | None] | None = None,
) -> list[Processor]:
    """The five standard processors in registration order.

    ``resolver`` stores list names as identifiers, so it needs a ``namer``
    to turn those identifiers back into list names.

    Raises:
        ConfigError: If a resolver is given without a namer
    """
    if resolver is not None and namer is None:
        raise ConfigError("A name resolver requires a namer for the Related list")
    settings = settings or get_settings()
    return [
        make_uid_processor(settings, uid_factory=uid_factory),
        make_related_frontmatter_processor(settings, resolver=resolver),
        make_related_list_processor(settings, namer=namer),
        make_gender_inference_processor(settings),
        make_gender_render_processor(settings),
    ]


def build_registry(
    settings: CuratorSettings | None = None,
    *,
    uid_factory: Callable[[], str] | None = None,
    resolver: NameResolver | None = None,
    namer: Callable[[str], str | None] | None = None,
) -> ProcessorRegistry:
    """A registry holding the standard processors."""
    return ProcessorRegistry(
        standard_processors(settings, uid_factory=uid_factory, resolver=resolver, namer=namer)
    )


__all__ = [
    "standard_processors",
    "build_registry",
    "make_uid_processor",
    "make_related_frontmatter_processor",
    "make_related_list_processor",
    "make_gender_inference_processor",
    "make_gender_render_processor",
]
