"""Static catalog of the eight rule types."""

from types import MappingProxyType

from src.destination import DestinationClass
from src.errors import UnknownRuleCode
from src.rule_code import RuleCode
from src.rule_type import RuleType

RULE_CATALOG: MappingProxyType[RuleCode, RuleType] = MappingProxyType(
    {
        RuleCode.F: RuleType(
            code=RuleCode.F,
            name="Fixed",
            description="Known value for prefix. Write + lock immediately.",
            destination_class=DestinationClass.STRUCTURED_STORE,
            locks=True,
        ),
        RuleCode.FSV: RuleType(
            code=RuleCode.FSV,
            name="Fixed Source → Variable",
            description=(
                "Pull from the master parts table. If missing, write "
                '"Does Not Apply" to the listing only.'
            ),
            destination_class=DestinationClass.LISTING_ONLY,
        ),
        RuleCode.VF: RuleType(
            code=RuleCode.VF,
            name="Variable → Fixed",
            description=(
                "AI determines value. If confident, write + lock. "
                "Skip dot-number IPNs."
            ),
            destination_class=DestinationClass.STRUCTURED_STORE,
            locks=True,
            uses_inference=True,
            skips_dot_numbers=True,
        ),
        RuleCode.V1: RuleType(
            code=RuleCode.V1,
            name="Variable (Listing-Only)",
            description=(
                "AI sources from inventory/title/condition. "
                "Write to listing only. Never lock."
            ),
            destination_class=DestinationClass.LISTING_ONLY,
            uses_inference=True,
        ),
        RuleCode.V2: RuleType(
            code=RuleCode.V2,
            name="Variable (IPN Interpretation)",
            description="AI interprets IPN via external lookup. Listing only.",
            destination_class=DestinationClass.LISTING_ONLY,
            uses_inference=True,
        ),
        RuleCode.VB: RuleType(
            code=RuleCode.VB,
            name="Variable / Blank",
            description=(
                "Optional field. AI fills if confident, else leave blank. "
                "Never lock."
            ),
            destination_class=DestinationClass.LISTING_ONLY,
            uses_inference=True,
            optional=True,
        ),
        RuleCode.VMF: RuleType(
            code=RuleCode.VMF,
            name="Variable → Manual → Fixed",
            description=(
                "AI tries first. If not confident, create a review task. "
                "Lock after manual entry."
            ),
            destination_class=DestinationClass.STRUCTURED_STORE,
            locks=True,
            uses_inference=True,
            escalates=True,
        ),
        RuleCode.MF: RuleType(
            code=RuleCode.MF,
            name="Manual → Fixed",
            description=(
                "Always human research. Create a research task immediately. "
                "Lock after entry."
            ),
            destination_class=DestinationClass.STRUCTURED_STORE,
            locks=True,
            escalates=True,
            always_manual=True,
        ),
    }
)


def rule_type(code: RuleCode | str) -> RuleType:
    """Return the catalog entry for a rule code.

    Accepts either a RuleCode member or its registry string ("FsV", "VMF").
    """
    try:
        return RULE_CATALOG[RuleCode(code)]
    except (KeyError, ValueError):
        msg = f"Unknown rule code: {code!r}"
        raise UnknownRuleCode(msg) from None
