"""Configuration-backed implementations of the lookup capabilities."""

import logging
from collections.abc import Mapping
from typing import Any

from src.capabilities import Capabilities
from src.master_record import MasterRecord

logger = logging.getLogger(__name__)

DEFAULT_GENERATED_VALUE = "AI-Generated-Value"

# Deterministic stand-ins used when no scripted response matches.
FALLBACK_VALUES: dict[str, str] = {
    "Fitment Type": "Direct Replacement",
    "Placement on Vehicle": "Front",
    "Condition": "New",
    "Material": "Ceramic",
    "Engine Type": "V6 3.5L",
    "Warranty": "1 Year",
}


class FixedValueTable:
    """Fixed values keyed by prefix, then item specific."""

    def __init__(self, values: Mapping[str, Mapping[str, Any]]) -> None:
        """Copy the table so later config edits cannot change lookups."""
        self.values = {
            str(prefix): {str(k): str(v) for k, v in (row or {}).items() if v}
            for prefix, row in values.items()
        }

    def __call__(self, prefix: str, attribute: str) -> str | None:
        return self.values.get(prefix, {}).get(attribute)


class MasterPartsTable:
    """Master part records keyed by IPN, in configuration order."""

    def __init__(self, records: Mapping[str, MasterRecord]) -> None:
        """Store the records."""
        self.records = dict(records)

    @classmethod
    def from_config(cls, raw: Mapping[str, Any]) -> "MasterPartsTable":
        """Build the table from the ``master_records`` config section."""
        records = {}
        for ipn, spec in raw.items():
            raw_record = {} if spec is None else spec
            records[str(ipn)] = MasterRecord.from_config(str(ipn), raw_record)
        return cls(records)

    def __call__(self, prefix: str) -> MasterRecord | None:
        """Return the first record whose IPN starts with the prefix.

        Dot-number prefixes ("663.") are matched without the separator.
        """
        needle = prefix.replace(".", "")
        for ipn, record in self.records.items():
            if ipn.startswith(needle):
                return record
        return None

    def by_registry_prefix(self, prefix: str) -> MasterRecord | None:
        """Return the first record filed under exactly this registry prefix."""
        for record in self.records.values():
            if record.prefix == prefix:
                return record
        return None


class ScriptedValueGenerator:
    """Answers from scripted AI responses keyed by item specific and IPN."""

    def __init__(
        self,
        responses: Mapping[str, Mapping[str, Any]],
        parts: MasterPartsTable,
        fallbacks: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize with scripted responses and the parts they refer to."""
        self.responses = responses
        self.parts = parts
        self.fallbacks = dict(FALLBACK_VALUES if fallbacks is None else fallbacks)

    def __call__(self, attribute: str, prefix: str) -> str:
        record = self.parts.by_registry_prefix(prefix) or self.parts(prefix)
        if record is not None:
            scripted = (self.responses.get(attribute) or {}).get(record.ipn) or {}
            value = scripted.get("value")
            if value:
                return str(value)

        if attribute == "Manufacturer Part Number":
            return f"MPN-{prefix.rstrip('.')}"

        value = self.fallbacks.get(attribute, DEFAULT_GENERATED_VALUE)
        logger.debug(
            "No scripted response for %s/%s, using %r", prefix, attribute, value
        )
        return value


def build_capabilities(config: dict[str, Any]) -> Capabilities:
    """Build table-backed capabilities from a loaded configuration."""
    parts = MasterPartsTable.from_config(config.get("master_records") or {})
    generator = ScriptedValueGenerator(config.get("ai_responses") or {}, parts)
    return Capabilities(
        fixed_value_lookup=FixedValueTable(config.get("fixed_values") or {}),
        master_record_lookup=parts,
        ai_value_generator=generator,
    )
