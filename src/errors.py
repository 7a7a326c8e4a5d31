"""Exceptions raised by the rule catalog, registry and resolution engine."""


class RuleEngineError(Exception):
    """Base class for all rule engine errors."""


class InvalidRequest(RuleEngineError):
    """The prefix, attribute or confidence of a request does not resolve."""


class ExcludedPrefix(RuleEngineError):
    """The prefix is excluded from ingestion and must not be resolved."""

    def __init__(self, prefix: str, reason: str) -> None:
        """Store the refused prefix and the registry's exclusion reason."""
        super().__init__(f'Prefix "{prefix}" is excluded: {reason}')
        self.prefix = prefix
        self.reason = reason


class UnknownRuleCode(RuleEngineError):
    """A rule code is not present in the rule catalog."""


class RegistryConfigError(RuleEngineError):
    """Registry configuration violates a registry invariant."""


class ValueGenerationError(RuleEngineError):
    """A value generator could not produce a value for an item specific."""
