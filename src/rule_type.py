"""Data model for a rule type and its behavioral metadata."""

from dataclasses import dataclass

from src.destination import DestinationClass
from src.rule_code import RuleCode


@dataclass(frozen=True)
class RuleType:
    """Describes how a bound item specific is resolved and persisted."""

    code: RuleCode
    name: str
    description: str
    destination_class: DestinationClass
    locks: bool = False
    uses_inference: bool = False
    escalates: bool = False
    optional: bool = False
    skips_dot_numbers: bool = False
    always_manual: bool = False
