"""Named destinations that receive resolved values."""

from enum import Enum


class Destination(str, Enum):
    """Where a resolution result is meant to be written."""

    STRUCTURED_STORE = "structured-store"
    LISTING_ONLY = "listing-only"
    TASK_TRACKER = "task-tracker"
    NONE = "none"


class DestinationClass(str, Enum):
    """Persistence class a rule type writes to when it succeeds."""

    STRUCTURED_STORE = "structured-store"
    LISTING_ONLY = "listing-only"
    NONE = "none"
