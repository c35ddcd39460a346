"""
Result and error types shared by the metric source readers.

Every reader returns a SourceResult instead of raising, so one broken
subsystem (quota not configured, cgroup not mounted) never stops a run.
A failed result keeps the error that caused it; an empty successful
result means the source was read and simply had nothing to report.
"""

from typing import Any, Dict, Optional


class SourceUnavailable(Exception):
    """A command or system file could not be read."""


class SourceFormatError(Exception):
    """A source was read but its output did not have the expected layout."""


class SourceResult:
    """Metrics produced by one source, plus the error if reading it failed"""

    def __init__(self, source: str, metrics: Optional[Dict[str, Any]] = None,
                 error: Optional[Exception] = None):
        self.source = source
        self.metrics = metrics if metrics is not None else {}
        self.error = error

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failed(cls, source: str, error: Exception) -> "SourceResult":
        return cls(source, {}, error)

    def __repr__(self):
        state = "ok" if self.ok else f"failed: {self.error}"
        return f"SourceResult({self.source!r}, {len(self.metrics)} metrics, {state})"
