"""Stable identifiers for the outcome of a single resolution."""

from enum import Enum


class ResolutionAction(str, Enum):
    """What the caller should do with a resolved item specific."""

    WRITE_AND_LOCK = "write-and-lock"
    WRITE_LISTING = "write-listing"
    WRITE_DOES_NOT_APPLY = "write-does-not-apply"
    SKIP = "skip"
    SKIP_LOW_CONFIDENCE = "skip-low-confidence"
    LEAVE_BLANK = "leave-blank"
    ESCALATE = "escalate"
    ERROR = "error"
