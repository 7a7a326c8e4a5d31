"""Lookup contracts the resolution engine consumes from its caller."""

from dataclasses import dataclass
from typing import Protocol

from src.master_record import MasterRecord


class FixedValueLookup(Protocol):
    """Return the configured fixed value for an item specific, if any.

    Must be deterministic for a given (prefix, attribute).
    """

    def __call__(self, prefix: str, attribute: str) -> str | None: ...


class MasterRecordLookup(Protocol):
    """Return the master record matching a prefix, if any."""

    def __call__(self, prefix: str) -> MasterRecord | None: ...


class AIValueGenerator(Protocol):
    """Produce a value for an item specific.

    Implementations that cannot produce a value raise ValueGenerationError.
    """

    def __call__(self, attribute: str, prefix: str) -> str: ...


@dataclass(frozen=True)
class Capabilities:
    """Bundle of lookup capabilities supplied to every resolution.

    ``ipn_interpreter`` serves the IPN-interpretation rule (V2); when it is
    not supplied, that rule falls back to ``ai_value_generator``.
    """

    fixed_value_lookup: FixedValueLookup
    master_record_lookup: MasterRecordLookup
    ai_value_generator: AIValueGenerator
    ipn_interpreter: AIValueGenerator | None = None

    @property
    def interpreter(self) -> AIValueGenerator:
        """The capability used to interpret IPNs."""
        return self.ipn_interpreter or self.ai_value_generator
