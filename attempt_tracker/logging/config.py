"""
Centralized logging configuration for the attempt tracker.

This module provides standardized logging configuration using structlog
for all components. Every module should obtain its logger from here so
that attempt identities and transitions are logged in one consistent,
structured format.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import EventDict, FilteringBoundLogger

from .. import __version__

SERVICE_NAME = "attempt-tracker"


def add_service_context(_logger: Any, _method_name: str, event_dict: EventDict) -> EventDict:
    """Stamp every event with the service name and package version."""
    event_dict.setdefault("service", SERVICE_NAME)
    event_dict.setdefault("version", __version__)
    return event_dict


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the attempt tracker.

    Events are routed through stdlib logging on stdout. Each event carries
    the service name and version, and timer events carry the attempt they
    belong to.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: Render events as JSON lines instead of console output
        include_timestamp: Add an ISO timestamp to each event
        include_caller: Add filename and line number of the call site
        extra_processors: Processors to run before rendering
    """
    log_level = getattr(logging, level.upper())
    logging.basicConfig(level=log_level, stream=sys.stdout, format="%(message)s")

    processors: list = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        add_service_context,
        structlog.processors.format_exc_info,
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso", utc=True))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                        structlog.processors.CallsiteParameter.LINENO]
        ))

    processors.extend(extra_processors or [])

    if format_json:
        processors.append(structlog.processors.JSONRenderer(sort_keys=True))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str, **context: Any) -> FilteringBoundLogger:
    """Logger for `name`, with `context` bound when given."""
    logger = structlog.get_logger(name)
    if context:
        return logger.bind(**context)
    return logger


def get_timer_logger(name: str, attempt: Optional[str] = None) -> FilteringBoundLogger:
    """
    Get a logger bound for timer lifecycle events.

    Args:
        name: Logger name (typically __name__)
        attempt: Printable attempt identity, bound when known

    Returns:
        Logger carrying the timer subsystem and audit markers
    """
    context: dict[str, Any] = {"subsystem": "attempt_timer", "audit_trail": True}
    if attempt is not None:
        context["attempt"] = attempt
    return get_logger(name, **context)


def log_state_transition(
    logger: FilteringBoundLogger,
    attempt: str,
    from_state: str,
    to_state: str,
    trigger: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a timer state transition with standardized format.

    Args:
        logger: Structlog logger instance
        attempt: Printable attempt identity
        from_state: Current state
        to_state: Target state
        trigger: What triggered the transition
        context: Additional context data
    """
    bound_logger = logger.bind(
        attempt=attempt,
        from_state=from_state,
        to_state=to_state,
        trigger=trigger,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("State transition")
