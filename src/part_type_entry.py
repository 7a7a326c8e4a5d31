"""Data model for a part-type registry entry."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from src.rule_code import RuleCode


@dataclass(frozen=True)
class PartTypeEntry:
    """Rule bindings for every item specific of one IPN prefix."""

    prefix: str
    name: str
    attribute_rules: Mapping[str, RuleCode] = field(
        default_factory=lambda: MappingProxyType({}), hash=False
    )
    category: str | None = None
    excluded: bool = False
    exclusion_reason: str | None = None
    is_dot_number_variant: bool = False
