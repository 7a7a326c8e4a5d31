"""Read-only registry mapping IPN prefixes to their rule bindings."""

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from src.errors import (
    ExcludedPrefix,
    InvalidRequest,
    RegistryConfigError,
    UnknownRuleCode,
)
from src.part_type_entry import PartTypeEntry
from src.rule_catalog import rule_type
from src.rule_code import RuleCode

logger = logging.getLogger(__name__)

DEFAULT_EXCLUSION_REASON = "Excluded prefix per policy"


class PartTypeRegistry:
    """Looks up part-type entries and the rule code bound to an attribute."""

    def __init__(self, entries: Iterable[PartTypeEntry]) -> None:
        """Index entries by prefix, validating registry invariants."""
        indexed: dict[str, PartTypeEntry] = {}
        for entry in entries:
            if entry.prefix in indexed:
                msg = f"Duplicate part-type prefix: {entry.prefix!r}"
                raise RegistryConfigError(msg)
            if entry.excluded and entry.attribute_rules:
                msg = (
                    f"Excluded prefix {entry.prefix!r} must not bind any "
                    "item specifics"
                )
                raise RegistryConfigError(msg)
            indexed[entry.prefix] = entry
        self._entries = MappingProxyType(indexed)

    @classmethod
    def from_config(cls, part_types: Mapping[str, Any]) -> "PartTypeRegistry":
        """Build a registry from the ``part_types`` section of the config."""
        entries = []
        for prefix, raw in part_types.items():
            entries.append(_entry_from_config(str(prefix), raw or {}))
        registry = cls(entries)
        logger.debug("Loaded %d part-type entries", len(entries))
        return registry

    def entry(self, prefix: str) -> PartTypeEntry:
        """Return the registry entry for a prefix."""
        try:
            return self._entries[prefix]
        except KeyError:
            msg = f"Unregistered prefix: {prefix!r}"
            raise InvalidRequest(msg) from None

    def rule_code_for(self, prefix: str, attribute: str) -> RuleCode:
        """Return the rule code bound to an attribute of a non-excluded prefix."""
        entry = self.entry(prefix)
        if entry.excluded:
            raise ExcludedPrefix(
                prefix, entry.exclusion_reason or DEFAULT_EXCLUSION_REASON
            )
        try:
            return entry.attribute_rules[attribute]
        except KeyError:
            msg = f"Item specific {attribute!r} is not bound for prefix {prefix!r}"
            raise InvalidRequest(msg) from None

    def prefixes(self) -> list[str]:
        """Return every registered prefix in registry order."""
        return list(self._entries)

    def attributes(self, prefix: str) -> list[str]:
        """Return the item specifics bound for a prefix in registry order."""
        return list(self.entry(prefix).attribute_rules)

    def __contains__(self, prefix: object) -> bool:
        return prefix in self._entries

    def __len__(self) -> int:
        return len(self._entries)


def _entry_from_config(prefix: str, raw: Any) -> PartTypeEntry:
    if not isinstance(raw, Mapping):
        msg = f"Part type {prefix!r} must be a mapping, got {type(raw).__name__}"
        raise RegistryConfigError(msg)
    bindings = raw.get("item_specifics") or {}
    if not isinstance(bindings, Mapping):
        msg = (
            f"Part type {prefix!r}: item_specifics must map each item specific "
            "to a rule code"
        )
        raise RegistryConfigError(msg)

    rules: dict[str, RuleCode] = {}
    for attribute, code in bindings.items():
        try:
            rules[str(attribute)] = rule_type(code).code
        except UnknownRuleCode as exc:
            msg = f"Prefix {prefix!r}, item specific {attribute!r}: {exc}"
            raise RegistryConfigError(msg) from exc

    excluded = bool(raw.get("excluded", False))
    reason = raw.get("reason")
    if excluded and not reason:
        reason = DEFAULT_EXCLUSION_REASON

    return PartTypeEntry(
        prefix=prefix,
        name=str(raw.get("name", prefix)),
        attribute_rules=MappingProxyType(rules),
        category=raw.get("category"),
        excluded=excluded,
        exclusion_reason=reason,
        is_dot_number_variant=bool(raw.get("is_dot_number", False)),
    )
