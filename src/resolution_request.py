"""Data model for an explicit resolution request."""

from dataclasses import dataclass

from src.errors import InvalidRequest

MIN_CONFIDENCE = 0
MAX_CONFIDENCE = 100


@dataclass(frozen=True)
class ResolutionRequest:
    """The prefix, item specific and simulated confidence to resolve."""

    prefix: str
    attribute: str
    confidence: int

    def __post_init__(self) -> None:
        """Reject confidence values outside the 0-100 integer range."""
        if isinstance(self.confidence, bool) or not isinstance(self.confidence, int):
            msg = f"Confidence must be an integer, got {self.confidence!r}"
            raise InvalidRequest(msg)
        if not MIN_CONFIDENCE <= self.confidence <= MAX_CONFIDENCE:
            msg = (
                f"Confidence must be between {MIN_CONFIDENCE} and "
                f"{MAX_CONFIDENCE}, got {self.confidence}"
            )
            raise InvalidRequest(msg)
