"""Confidence threshold for automated writes."""

CONFIDENCE_THRESHOLD = 75


def meets_threshold(confidence: int) -> bool:
    """Return True when confidence is high enough for an automated write."""
    return confidence >= CONFIDENCE_THRESHOLD
