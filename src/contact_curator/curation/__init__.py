"""
Curation pipeline: registry, queue and runner for contact processors.

Usage:
    from contact_curator.curation import CuratorRunner, RunType, build_registry

    runner = CuratorRunner(build_registry())
    runner.submit(contact, RunType.IMMEDIATE)
    results = runner.drain()
"""

from contact_curator.curation.models import (
    ContactResult,
    ContactStatus,
    Processor,
    QueueItem,
    QueueStatus,
    RunType,
)
from contact_curator.curation.queue import CuratorQueue
from contact_curator.curation.registry import ProcessorRegistry
from contact_curator.curation.runner import CuratorRunner
from contact_curator.curation.processors import build_registry, standard_processors

__all__ = [
    "RunType",
    "Processor",
    "QueueItem",
    "QueueStatus",
    "ContactResult",
    "ContactStatus",
    "ProcessorRegistry",
    "CuratorQueue",
    "CuratorRunner",
    "build_registry",
    "standard_processors",
]
