"""Structlog-based logging configuration for versioned-settings.

Library modules log through the standard ``logging`` module. Applications
and the command-line tool call ``configure_structlog`` once at startup to
route those records, and structlog's own events, through one renderer:
- JSON output when stdout is not a terminal (services, containers, pipes)
- Human-readable console output otherwise
"""

import logging
import sys
from collections.abc import Callable
from importlib import metadata
from typing import Any

import structlog

from versioned_settings.config.models import LoggingConfig


def get_package_version() -> str:
    """Get the installed versioned-settings version for log context."""
    try:
        return metadata.version("versioned-settings")
    except metadata.PackageNotFoundError:
        return "unknown"


def _add_static_context(extra_fields: dict[str, str]) -> Callable:
    """Processor to add static context fields to all log entries."""

    def processor(
        logger: structlog.BoundLogger, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        event_dict.update(extra_fields)
        return event_dict

    return processor


def _use_json(config: LoggingConfig) -> bool:
    """Decide between JSON and console rendering."""
    if config.json_logs is not None:
        return config.json_logs
    return not sys.stdout.isatty()


def _configure_processors(config: LoggingConfig) -> list:
    """Configure structlog processors."""
    extra_fields = {
        "service": "versioned-settings",
        "version": get_package_version(),
        **config.extra_fields,  # Allow config to override/add fields
    }

    processors = [
        structlog.contextvars.merge_contextvars,
        _add_static_context(extra_fields),
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="ISO"),
    ]

    if _use_json(config):
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    return processors


def _configure_handlers(config: LoggingConfig, processors: list) -> None:
    """Send standard library log records to stderr at the configured level."""
    root_logger = logging.getLogger()
    log_level = getattr(logging, config.level.upper(), logging.INFO)

    # Clear existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(log_level)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(log_level)
    stderr_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=processors[-1],
            foreign_pre_chain=processors[:-1],
        )
    )
    root_logger.addHandler(stderr_handler)


def configure_structlog(config: LoggingConfig) -> None:
    """Configure structlog-based logging system.

    Args:
        config: Logging section of the provider configuration.
    """
    processors = _configure_processors(config)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, config.level.upper(), logging.INFO)
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    _configure_handlers(config, processors)

    logger = structlog.get_logger(__name__)
    logger.debug(
        "Structured logging configured",
        package_version=get_package_version(),
        log_level=config.level,
        json_output=_use_json(config),
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structlog logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured structlog BoundLogger instance
    """
    return structlog.get_logger(name)
