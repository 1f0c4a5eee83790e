"""Booking-session correlation ID shared by the wizard, availability and store loggers.

Every booking wizard gets a session ID ("WZ-XXXXXXXX"). While the wizard
checks availability or submits, the ID is bound to the current async
context, and every washbook logger stamps it on its records so one
customer's attempt can be followed from the time step through the
reservation write.

Usage:
    from washbook.logging_context import get_session_logger, session_scope

    logger = get_session_logger(__name__)
    with session_scope("WZ-1A2B3C4D"):
        logger.info("Submitting reservation")  # record.session_id == "WZ-1A2B3C4D"
"""

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

NO_SESSION = "NO_SESSION"

_session_id: ContextVar[str] = ContextVar("session_id", default=NO_SESSION)


def get_session_id() -> str:
    return _session_id.get()


@contextmanager
def session_scope(session_id: str) -> Iterator[None]:
    """Bind the ID for the duration of the block, then restore the previous one."""
    token = _session_id.set(session_id)
    try:
        yield
    finally:
        _session_id.reset(token)


class SessionIdFilter(logging.Filter):
    """Stamps the bound session ID on each record as ``session_id``."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.session_id = _session_id.get()  # type: ignore[attr-defined]
        return True


def get_session_logger(name: str) -> logging.Logger:
    """Return ``logging.getLogger(name)`` with one SessionIdFilter attached.

    Formatters can then use ``%(session_id)s``.
    """
    logger = logging.getLogger(name)
    if not any(isinstance(f, SessionIdFilter) for f in logger.filters):
        logger.addFilter(SessionIdFilter())
    return logger
