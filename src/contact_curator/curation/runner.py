"""
Curator runner: drives contacts through the registered processors.

Manifesto:
    The runner executes processors with a consistent lifecycle
    (gate → mutate → record) so processors never manage their own error
    capture or logging context.

One pass over a contact::

    order = registry.resolve_order()          # CycleDetectedError is fatal
    for processor in order:
        if processor.gate(contact):
            processor.mutate(contact)         # visible to later processors

A processor that raises is reported as ``ProcessorFailedError`` (contact
and processor named) in the pass's ``ContactResult``. With
``failure_policy="stop"`` the contact's remaining processors are skipped;
with ``"continue"`` they still run. Either way the next queued contact is
processed normally.

Execution is single-threaded and sequential: a contact's pass finishes
before the next contact starts.

Tags:
    contact-curator, curation, runner, lifecycle

Doc-Types:
    api-reference
"""

from __future__ import annotations

from datetime import UTC, datetime

from contact_curator.contact.models import Contact
from contact_curator.core.errors import ProcessorFailedError
from contact_curator.core.logging import LogContext, get_logger, log_step
from contact_curator.core.settings import CuratorSettings, get_settings
from contact_curator.curation.models import ContactResult, ContactStatus, Processor, RunType
from contact_curator.curation.queue import CuratorQueue
from contact_curator.curation.registry import ProcessorRegistry

log = get_logger(__name__)


class CuratorRunner:
    """
    Sequential pipeline runner over a caller-owned registry and queue.

    Example:
        runner = CuratorRunner(build_registry())
        runner.submit(contact, RunType.UPCOMING)
        for result in runner.drain():
            result.raise_for_error()
    """

    def __init__(
        self,
        registry: ProcessorRegistry,
        queue: CuratorQueue | None = None,
        settings: CuratorSettings | None = None,
    ) -> None:
        self.registry = registry
        self.queue = queue if queue is not None else CuratorQueue()
        self.settings = settings or get_settings()

    def submit(self, contact: Contact, run_type: RunType = RunType.UPCOMING) -> bool:
        """Queue a contact for a later pass."""
        return self.queue.enqueue(contact, run_type)

    def process(self, contact: Contact, run_type: RunType | None = None) -> ContactResult:
        """
        Run one full pass over ``contact``.

        Returns:
            ContactResult listing processors run, skipped and failed

        Raises:
            CycleDetectedError: If the registry's dependencies are cyclic
        """
        order = self.registry.resolve_order()
        result = ContactResult(contact=contact, run_type=run_type)
        disabled = set(self.settings.disabled_processors)
        stop_on_failure = self.settings.failure_policy == "stop"

        with LogContext(contact=contact.path), log_step("runner.pass") as metrics:
            for index, processor in enumerate(order):
                if processor.name in disabled:
                    result.skipped.append(processor.name)
                    continue

                error = self._run_processor(processor, contact, result)
                if error is None:
                    continue

                result.errors.append(error)
                result.status = ContactStatus.FAILED
                if stop_on_failure:
                    remaining = [p.name for p in order[index + 1:]]
                    result.skipped.extend(remaining)
                    log.warning("runner.stopped", failed_at=processor.name, skipped=remaining)
                    break

            metrics["ran"] = len(result.ran)
            metrics["status"] = result.status.value

        result.completed_at = datetime.now(UTC)
        return result

    def _run_processor(
        self, processor: Processor, contact: Contact, result: ContactResult
    ) -> ProcessorFailedError | None:
        step = "gate"
        try:
            if not processor.gate(contact):
                result.skipped.append(processor.name)
                return None
            step = "mutate"
            processor.mutate(contact)
        except Exception as e:
            error = ProcessorFailedError(contact.path, processor.name, e, step=step)
            log.error("runner.processor_failed", **error.to_dict())
            return error

        result.ran.append(processor.name)
        log.debug("runner.processor_ran", processor=processor.name)
        return None

    def run_next(self) -> ContactResult | None:
        """Dequeue the most urgent contact and process it."""
        item = self.queue.dequeue()
        if item is None:
            return None

        self.queue.set_processing_status(True, item.contact.path)
        try:
            return self.process(item.contact, item.run_type)
        finally:
            self.queue.set_processing_status(False)

    def drain(self) -> list[ContactResult]:
        """Process queued contacts until the queue is empty."""
        results = []
        while (result := self.run_next()) is not None:
            results.append(result)
        failed = sum(1 for r in results if not r.ok)
        log.info("runner.drained", processed=len(results), failed=failed)
        return results


__all__ = ["CuratorRunner"]
