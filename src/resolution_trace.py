"""Ordered, severity-tagged trace of the decision steps of a resolution."""

import logging
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class Severity(str, Enum):
    """Severity tag of a trace entry."""

    INFO = "INFO"
    SUCCESS = "SUCCESS"
    WARNING = "WARNING"
    ERROR = "ERROR"
    ACTION = "ACTION"


@dataclass(frozen=True)
class TraceEntry:
    """A single decision step."""

    severity: Severity
    message: str

    def to_dict(self) -> dict[str, str]:
        """Return a JSON-ready representation."""
        return {"severity": self.severity.value, "message": self.message}

    def __str__(self) -> str:
        return f"[{self.severity.value}] {self.message}"


class ResolutionTrace:
    """Collects trace entries in the order the engine takes its steps."""

    def __init__(self) -> None:
        """Start an empty trace."""
        self._entries: list[TraceEntry] = []

    def add(self, severity: Severity, message: str) -> None:
        """Append an entry and mirror it to the module logger."""
        self._entries.append(TraceEntry(severity, message))
        logger.debug("[%s] %s", severity.value, message)

    def info(self, message: str) -> None:
        """Record an informational step."""
        self.add(Severity.INFO, message)

    def success(self, message: str) -> None:
        """Record a step that succeeded."""
        self.add(Severity.SUCCESS, message)

    def warning(self, message: str) -> None:
        """Record a step that needs attention."""
        self.add(Severity.WARNING, message)

    def error(self, message: str) -> None:
        """Record a failed step."""
        self.add(Severity.ERROR, message)

    def action(self, message: str) -> None:
        """Record a step the caller is expected to carry out."""
        self.add(Severity.ACTION, message)

    @property
    def entries(self) -> tuple[TraceEntry, ...]:
        """Entries recorded so far, oldest first."""
        return tuple(self._entries)
