"""Data models for item-specific resolution results."""

from dataclasses import dataclass
from typing import Any

from src.destination import Destination
from src.resolution_action import ResolutionAction
from src.rule_code import RuleCode


@dataclass(frozen=True)
class ResolutionResult:
    """Represents the outcome of resolving one item specific for one prefix."""

    action: ResolutionAction
    rule_code: RuleCode
    value: str | None = None
    destination: Destination = Destination.NONE
    locked: bool = False
    escalated: bool = False
    confidence: int | None = None
    note: str | None = None
    task_title: str | None = None  # Set only for escalations

    @property
    def writes(self) -> bool:
        """Whether the caller has a value to persist."""
        return self.value is not None and self.destination in {
            Destination.STRUCTURED_STORE,
            Destination.LISTING_ONLY,
        }

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready representation."""
        return {
            "action": self.action.value,
            "rule_code": self.rule_code.value,
            "value": self.value,
            "destination": self.destination.value,
            "locked": self.locked,
            "escalated": self.escalated,
            "confidence": self.confidence,
            "note": self.note,
            "task_title": self.task_title,
        }
