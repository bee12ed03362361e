"""
Structured error types for contact-curator.

Every error raised by the curator carries a category, a retry flag and an
``ErrorContext`` naming the contact and processor involved, so that the
runner can report *which* processor failed on *which* contact without
string-parsing exception messages.

Manifesto:
    - **Typed Error Hierarchy:** configuration, parse and pipeline failures
      are distinct types
    - **Rich Context:** errors carry contact/processor metadata for logging
    - **Error Chaining:** the original exception is kept as ``cause``

Architecture:
    ::

        CuratorError  (category, retryable, context, cause)
          ├── ConfigError          (CONFIG)
          ├── ValidationError      (VALIDATION)
          ├── ParseError           (PARSE)
          ├── PipelineError        (PIPELINE)
          │     └── ProcessorFailedError
          └── OrchestrationError   (ORCHESTRATION)
                ├── ProcessorNotFoundError
                └── CycleDetectedError

    Codecs never raise for malformed or missing input; they degrade to a
    best-effort or empty result. The only setup-fatal error is
    ``CycleDetectedError``.

Tags:
    error-handling, exception-hierarchy, error-context, contact-curator

Doc-Types:
    api-reference
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Error categories used for classification and log routing."""

    PARSE = "PARSE"                  # Frontmatter/document parsing
    VALIDATION = "VALIDATION"        # Field constraints
    CONFIG = "CONFIG"                # Settings, registry setup
    PIPELINE = "PIPELINE"            # Processor execution failures
    ORCHESTRATION = "ORCHESTRATION"  # Registry/queue misuse
    INTERNAL = "INTERNAL"            # Bugs, unexpected state


@dataclass
class ErrorContext:
    """
    Structured metadata attached to a ``CuratorError``.

    Attributes:
        contact: Path/identifier of the contact being processed
        processor: Name of the processor that was running
        run_type: Priority class of the queue item
        step: ``"gate"`` or ``"mutate"``
        metadata: Additional key-value pairs
    """

    contact: str | None = None
    processor: str | None = None
    run_type: str | None = None
    step: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["contact", "processor", "run_type", "step"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class CuratorError(Exception):
    """
    Base exception for all contact-curator errors.

    Subclasses set ``default_category`` and ``default_retryable`` so callers
    rarely pass them explicitly.

    Examples:
        >>> error = CuratorError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.with_context(contact="people/jane.md").context.contact
        'people/jane.md'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> CuratorError:
        """
        Add context to this error (fluent API).

        Usage:
            raise ParseError("bad yaml").with_context(contact="people/jane.md")
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Serialize for structured logging."""
        result: dict[str, Any] = {
            "error_type": type(self).__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        context = self.context.to_dict()
        if context:
            result["context"] = context
        if self.cause is not None:
            result["cause"] = f"{type(self.cause).__name__}: {self.cause}"
        return result

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, category={self.category.value})"


class ConfigError(CuratorError):
    """Invalid or missing configuration."""

    default_category = ErrorCategory.CONFIG


class ValidationError(CuratorError):
    """A contact's fields violate a required constraint."""

    default_category = ErrorCategory.VALIDATION


class ParseError(CuratorError):
    """A contact document could not be parsed."""

    default_category = ErrorCategory.PARSE


class PipelineError(CuratorError):
    """Base class for failures while running processors."""

    default_category = ErrorCategory.PIPELINE


class OrchestrationError(CuratorError):
    """Base class for registry and queue misuse."""

    default_category = ErrorCategory.ORCHESTRATION


class ProcessorNotFoundError(OrchestrationError):
    """Raised when a processor name is not registered."""

    def __init__(self, name: str, available: list[str] | None = None):
        self.processor_name = name
        listing = ", ".join(available) if available else "(none)"
        super().__init__(
            f"Processor '{name}' not found. Available: {listing}",
            context=ErrorContext(processor=name),
        )


class CycleDetectedError(OrchestrationError):
    """Raised when processor dependencies form a cycle."""

    default_category = ErrorCategory.CONFIG

    def __init__(self, cycle: list[str]):
        self.cycle = cycle
        cycle_str = " -> ".join(cycle)
        super().__init__(f"Cycle detected in processor dependencies: {cycle_str}")


class ProcessorFailedError(PipelineError):
    """
    A processor's gate or mutation raised while processing a contact.

    The original exception is available as ``cause`` (and ``__cause__``).
    """

    def __init__(self, contact: str, processor: str, cause: Exception, *, step: str = "mutate"):
        self.contact = contact
        self.processor = processor
        self.step = step
        super().__init__(
            f"Processor '{processor}' failed during {step} for contact '{contact}': "
            f"{type(cause).__name__}: {cause}",
            context=ErrorContext(contact=contact, processor=processor, step=step),
            cause=cause,
        )


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "CuratorError",
    "ConfigError",
    "ValidationError",
    "ParseError",
    "PipelineError",
    "OrchestrationError",
    "ProcessorNotFoundError",
    "CycleDetectedError",
    "ProcessorFailedError",
]
