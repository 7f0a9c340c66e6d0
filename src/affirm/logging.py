"""Structured logging for affirm.

Verification reports are logged as structured events through structlog:
soft sessions emit ``verification_failed`` (and ``verification_passed`` when
passing reports are enabled) carrying the session id, the batch mode and the
full report transcript. Internal modules keep using ``logging.getLogger``.

Setup, typically from a ``conftest.py``:

    from affirm.logging import configure_logging

    configure_logging(json_format=True)  # one JSON object per event, for CI

Scoping extra fields to a block of verifications:

    with verification_context(test="test_checkout", build="1234"):
        soft.verify()  # events carry test and build
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog
from structlog.types import EventDict, Processor

_configured = False


def split_report_lines(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Turn a multi-line ``report`` field into a list of lines, for JSON output."""
    report = event_dict.get("report")
    if isinstance(report, str):
        event_dict["report"] = report.splitlines()
    return event_dict


def _processors(json_format: bool) -> list[Processor]:
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if json_format:
        processors.extend([split_report_lines, structlog.processors.JSONRenderer()])
    else:
        # Reports are multi-line; the console renderer keeps their line breaks
        processors.append(
            structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty(), exception_formatter=structlog.dev.plain_traceback)
        )
    return processors


def configure_logging(
    json_format: bool = False,
    level: int = logging.INFO,
    logger_factory: Any = None,
) -> None:
    """Configure structured logging for verification reports.

    Safe to call more than once; the last call wins.

    Args:
        json_format: Render events as JSON instead of console text
        level: Minimum level for both structlog events and stdlib loggers
        logger_factory: Custom structlog logger factory (for testing)
    """
    global _configured

    # Stdlib loggers used inside the package (polling attempts, hard failures)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stdout,
    )

    structlog.configure(
        processors=_processors(json_format),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=logger_factory or structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    _configured = True


def is_configured() -> bool:
    return _configured


def get_logger(name: str) -> Any:
    """Get a structlog logger, configuring console defaults on first use."""
    if not _configured:
        configure_logging()
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Attach fields to every subsequent event in the current context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    """Drop every bound field. Call at the end of a test to avoid leakage."""
    structlog.contextvars.clear_contextvars()


@contextmanager
def verification_context(**kwargs: Any) -> Iterator[None]:
    """Attach fields to events logged inside the block only."""
    with structlog.contextvars.bound_contextvars(**kwargs):
        yield


def session_logger(session_id: str) -> Any:
    """Logger for a soft verification session, with ``session_id`` bound."""
    return get_logger("affirm.session").bind(session_id=session_id)
