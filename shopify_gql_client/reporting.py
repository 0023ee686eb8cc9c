"""Error-reporting sinks."""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

logger = logging.getLogger(__name__)


class ErrorReporter(ABC):
    """Receives exceptions for out-of-band reporting (Sentry, Bugsnag, ...)."""

    @abstractmethod
    def report(self, exc: BaseException) -> None:
        raise NotImplementedError


class LoggingReporter(ErrorReporter):
    """Report exceptions to a logger with their traceback attached."""

    def __init__(self, log: Any = None) -> None:
        self.log = log if log is not None else logger

    def report(self, exc: BaseException) -> None:
        self.log.warning("Reported exception: %s", exc, exc_info=exc)


def report_safely(reporter: ErrorReporter, exc: BaseException, log: Any = None) -> None:
    """Hand ``exc`` to ``reporter``; a failing reporter is logged, never raised."""
    try:
        reporter.report(exc)
    except Exception:
        (log if log is not None else logger).warning(
            "Error reporter %r failed", reporter, exc_info=True
        )
