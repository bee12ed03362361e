"""Core primitives shared across contact-curator: errors, logging, settings."""

from contact_curator.core.errors import (
    ConfigError,
    CuratorError,
    CycleDetectedError,
    ErrorCategory,
    ErrorContext,
    OrchestrationError,
    ParseError,
    PipelineError,
    ProcessorFailedError,
    ProcessorNotFoundError,
    ValidationError,
)
from contact_curator.core.logging import LogContext, configure_logging, get_logger, log_step
from contact_curator.core.settings import CuratorSettings, get_settings, load_settings

__all__ = [
    # Errors
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
    # Logging
    "configure_logging",
    "get_logger",
    "log_step",
    "LogContext",
    # Settings
    "CuratorSettings",
    "get_settings",
    "load_settings",
]
