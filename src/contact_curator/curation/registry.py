"""
Processor registry with dependency-first ordering.

Manifesto:
    Processors are registered by name on a registry the caller owns; the
    runner asks the registry for an order instead of hard-coding one, so a
    new processor is added without touching the runner.

ARCHITECTURE
────────────
::

    register(processor)   → stores by name (last write wins)
    resolve_order()       → cycle check, then dependency-first DFS

Ordering walks processors in registration order and emits each one after
its registered dependencies. Dependencies that are not registered are
skipped; the dependent is still emitted. This is deliberately not a Kahn
sort: for an acyclic graph the output is deterministic for a given
registration order and respects every registered dependency.

Tags:
    contact-curator, curation, registry, dependency-order

Doc-Types:
    api-reference
"""

from __future__ import annotations

from contact_curator.core.errors import CycleDetectedError, ProcessorNotFoundError
from contact_curator.core.logging import get_logger
from contact_curator.curation.models import Processor

logger = get_logger(__name__)


class ProcessorRegistry:
    """Named processors in registration order."""

    def __init__(self, processors: list[Processor] | None = None) -> None:
        self._processors: dict[str, Processor] = {}
        for processor in processors or []:
            self.register(processor)

    def register(self, processor: Processor) -> Processor:
        """Add a processor; an existing one with the same name is replaced."""
        if processor.name in self._processors:
            logger.warning("registry.overwrite", processor=processor.name)
        self._processors[processor.name] = processor
        logger.debug(
            "registry.registered",
            processor=processor.name,
            run_type=processor.run_type.value,
            dependencies=list(processor.dependencies),
        )
        return processor

    def get(self, name: str) -> Processor:
        """
        Get a processor by name.

        Raises:
            ProcessorNotFoundError: If no processor has that name
        """
        if name not in self._processors:
            raise ProcessorNotFoundError(name, self.names())
        return self._processors[name]

    def has(self, name: str) -> bool:
        return name in self._processors

    def remove(self, name: str) -> bool:
        """Remove a processor; False if it was not registered."""
        return self._processors.pop(name, None) is not None

    def clear(self) -> None:
        self._processors.clear()

    def names(self) -> list[str]:
        return list(self._processors)

    def all(self) -> list[Processor]:
        return list(self._processors.values())

    def __len__(self) -> int:
        return len(self._processors)

    def __contains__(self, name: object) -> bool:
        return name in self._processors

    def validate(self) -> None:
        """
        Reject cyclic dependencies among registered processors.

        Three-colour DFS: a GRAY neighbour is on the current path, so the
        path from it to here is a cycle.

        Raises:
            CycleDetectedError: With the cycle path, e.g. ``["a", "b", "a"]``
        """
        WHITE, GRAY, BLACK = 0, 1, 2
        color = dict.fromkeys(self._processors, WHITE)
        path: list[str] = []

        def dfs(name: str) -> list[str] | None:
            color[name] = GRAY
            path.append(name)
            for dep in self._processors[name].dependencies:
                if dep not in color:
                    continue
                if color[dep] == GRAY:
                    return path[path.index(dep):] + [dep]
                if color[dep] == WHITE:
                    cycle = dfs(dep)
                    if cycle:
                        return cycle
            color[name] = BLACK
            path.pop()
            return None

        for name in self._processors:
            if color[name] == WHITE:
                cycle = dfs(name)
                if cycle:
                    raise CycleDetectedError(cycle)

    def resolve_order(self) -> list[Processor]:
        """
        Processors in execution order, each after its registered dependencies.

        Raises:
            CycleDetectedError: If the dependency graph is cyclic
        """
        self.validate()

        ordered: list[Processor] = []
        added: set[str] = set()

        def add(processor: Processor) -> None:
            if processor.name in added:
                return
            for dep_name in processor.dependencies:
                dep = self._processors.get(dep_name)
                if dep is not None and dep_name not in added:
                    add(dep)
            ordered.append(processor)
            added.add(processor.name)

        for processor in self._processors.values():
            add(processor)

        return ordered


__all__ = ["ProcessorRegistry"]
