"""Rule dispatch and per-rule decision procedures for item specifics.

The engine is stateless: every call builds its own trace and result from the
request, the registry entry, and the capabilities supplied by the caller. It
never writes anywhere; destinations on the result tell the caller where the
value belongs.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import assert_never

from src.capabilities import AIValueGenerator, Capabilities
from src.confidence import CONFIDENCE_THRESHOLD, meets_threshold
from src.destination import Destination
from src.errors import ExcludedPrefix, ValueGenerationError
from src.load_config import load_config
from src.part_type_entry import PartTypeEntry
from src.part_type_registry import DEFAULT_EXCLUSION_REASON, PartTypeRegistry
from src.resolution_action import ResolutionAction
from src.resolution_request import ResolutionRequest
from src.resolution_result import ResolutionResult
from src.resolution_trace import ResolutionTrace, TraceEntry
from src.rule_catalog import rule_type
from src.rule_code import RuleCode
from src.source_fields import source_value

logger = logging.getLogger(__name__)

DOES_NOT_APPLY = "Does Not Apply"


@dataclass(frozen=True)
class _RuleContext:
    request: ResolutionRequest
    entry: PartTypeEntry
    capabilities: Capabilities
    trace: ResolutionTrace

    @property
    def prefix(self) -> str:
        return self.request.prefix

    @property
    def attribute(self) -> str:
        return self.request.attribute

    @property
    def confidence(self) -> int:
        return self.request.confidence


class ResolutionEngine:
    """Resolves item specifics against a part-type registry."""

    def __init__(self, registry: PartTypeRegistry) -> None:
        """Initialize the engine with the registry it dispatches on."""
        self.registry = registry

    def resolve(
        self, request: ResolutionRequest, capabilities: Capabilities
    ) -> tuple[ResolutionResult, tuple[TraceEntry, ...]]:
        """Resolve one item specific and return the result with its trace.

        Raises InvalidRequest for an unregistered prefix or unbound attribute
        and ExcludedPrefix for an excluded prefix, before any rule runs.
        """
        entry = self.registry.entry(request.prefix)
        if entry.excluded:
            reason = entry.exclusion_reason or DEFAULT_EXCLUSION_REASON
            logger.warning(
                'Prefix "%s" is excluded - never ingest (%s)', entry.prefix, reason
            )
            raise ExcludedPrefix(entry.prefix, reason)

        code = self.registry.rule_code_for(request.prefix, request.attribute)
        rule = rule_type(code)

        trace = ResolutionTrace()
        trace.info(f"Processing: {request.attribute} for prefix {request.prefix}")
        trace.info(f"Rule Type: {code.value} ({rule.name})")
        if entry.is_dot_number_variant:
            trace.warning("Dot-number IPN detected - special handling applies")

        ctx = _RuleContext(request, entry, capabilities, trace)
        result = _dispatch(code, ctx)
        return result, trace.entries


def _dispatch(code: RuleCode, ctx: _RuleContext) -> ResolutionResult:
    match code:
        case RuleCode.F:
            return _resolve_fixed(ctx)
        case RuleCode.FSV:
            return _resolve_fixed_source(ctx)
        case RuleCode.VF:
            return _resolve_variable_fixed(ctx)
        case RuleCode.V1:
            return _resolve_listing_only(ctx)
        case RuleCode.V2:
            return _resolve_ipn_interpretation(ctx)
        case RuleCode.VB:
            return _resolve_optional(ctx)
        case RuleCode.VMF:
            return _resolve_variable_manual_fixed(ctx)
        case RuleCode.MF:
            return _resolve_manual_fixed(ctx)
        case _:
            assert_never(code)


def _resolve_fixed(ctx: _RuleContext) -> ResolutionResult:
    ctx.trace.action("Rule F: Looking up fixed value...")
    value = ctx.capabilities.fixed_value_lookup(ctx.prefix, ctx.attribute)

    if not value:
        ctx.trace.error("No fixed value defined for this prefix/field combination")
        logger.warning(
            "Missing fixed value for prefix %s, item specific %s",
            ctx.prefix,
            ctx.attribute,
        )
        return ResolutionResult(
            action=ResolutionAction.ERROR,
            rule_code=RuleCode.F,
            note="Missing fixed-value configuration",
        )

    ctx.trace.success(f'Found fixed value: "{value}"')
    return _write_and_lock(ctx, RuleCode.F, value)


def _resolve_fixed_source(ctx: _RuleContext) -> ResolutionResult:
    ctx.trace.action("Rule FsV: Checking master parts table for source value...")
    record = ctx.capabilities.master_record_lookup(ctx.prefix)
    value = source_value(record, ctx.attribute)

    if value:
        ctx.trace.success(f'Found source value: "{value}"')
        ctx.trace.action("Writing to listing...")
        return ResolutionResult(
            action=ResolutionAction.WRITE_LISTING,
            rule_code=RuleCode.FSV,
            value=value,
            destination=Destination.LISTING_ONLY,
            note="Sourced from master record",
        )

    ctx.trace.warning("Source value not found in master parts table")
    ctx.trace.action(f'Writing "{DOES_NOT_APPLY}" to listing only...')
    return ResolutionResult(
        action=ResolutionAction.WRITE_DOES_NOT_APPLY,
        rule_code=RuleCode.FSV,
        value=DOES_NOT_APPLY,
        destination=Destination.LISTING_ONLY,
        note=(
            f'Value missing from source - "{DOES_NOT_APPLY}" written to the '
            "listing only (never to the structured store)"
        ),
    )


def _resolve_variable_fixed(ctx: _RuleContext) -> ResolutionResult:
    if ctx.entry.is_dot_number_variant:
        ctx.trace.warning("Rule VF: Skipping dot-number IPN")
        ctx.trace.info("Dot-number IPNs (.xxxx) are excluded from VF rules by policy")
        return ResolutionResult(
            action=ResolutionAction.SKIP,
            rule_code=RuleCode.VF,
            note="Dot-number IPN - VF rule skipped (excluded by policy)",
        )

    ctx.trace.action("Rule VF: Running AI classification...")
    _trace_confidence(ctx, with_threshold=True)

    if not meets_threshold(ctx.confidence):
        _trace_too_low(ctx)
        ctx.trace.info("No action taken - field remains unset")
        return ResolutionResult(
            action=ResolutionAction.SKIP_LOW_CONFIDENCE,
            rule_code=RuleCode.VF,
            confidence=ctx.confidence,
            note=(
                f"Confidence {ctx.confidence}% below {CONFIDENCE_THRESHOLD}% "
                f"threshold (short by {CONFIDENCE_THRESHOLD - ctx.confidence}%)"
            ),
        )

    value = _generate(ctx, ctx.capabilities.ai_value_generator)
    if value is None:
        return _generation_failed(RuleCode.VF, ctx.confidence)
    ctx.trace.success(f'AI confident ({ctx.confidence}%): "{value}"')
    return _write_and_lock(ctx, RuleCode.VF, value, confidence=ctx.confidence)


def _resolve_listing_only(ctx: _RuleContext) -> ResolutionResult:
    ctx.trace.action(
        "Rule V1: Running AI classification from inventory/title/condition..."
    )
    value = _generate(ctx, ctx.capabilities.ai_value_generator)
    if value is None:
        return _generation_failed(RuleCode.V1)

    ctx.trace.success(f'AI determined value: "{value}"')
    ctx.trace.action("Writing to listing...")
    ctx.trace.info("Field will NOT be locked (listing-only value)")
    return ResolutionResult(
        action=ResolutionAction.WRITE_LISTING,
        rule_code=RuleCode.V1,
        value=value,
        destination=Destination.LISTING_ONLY,
        note="Listing-only value - never persisted to the structured store",
    )


def _resolve_ipn_interpretation(ctx: _RuleContext) -> ResolutionResult:
    ctx.trace.action("Rule V2: Interpreting IPN via external lookup...")
    value = _generate(ctx, ctx.capabilities.interpreter)
    if value is None:
        return _generation_failed(RuleCode.V2)

    ctx.trace.success(f'External lookup result: "{value}"')
    ctx.trace.action("Writing to listing...")
    return ResolutionResult(
        action=ResolutionAction.WRITE_LISTING,
        rule_code=RuleCode.V2,
        value=value,
        destination=Destination.LISTING_ONLY,
        note=(
            "IPN interpretation - listing-only, never persisted to the "
            "structured store"
        ),
    )


def _resolve_optional(ctx: _RuleContext) -> ResolutionResult:
    ctx.trace.action("Rule VB: AI attempting optional field...")
    _trace_confidence(ctx, with_threshold=False)

    if not meets_threshold(ctx.confidence):
        ctx.trace.info(f"AI not confident enough ({ctx.confidence}%)")
        ctx.trace.action("Leaving field blank (optional field)")
        return ResolutionResult(
            action=ResolutionAction.LEAVE_BLANK,
            rule_code=RuleCode.VB,
            confidence=ctx.confidence,
            note="Optional field left blank - no penalty",
        )

    value = _generate(ctx, ctx.capabilities.ai_value_generator)
    if value is None:
        return _generation_failed(RuleCode.VB, ctx.confidence)
    ctx.trace.success(f'AI confident ({ctx.confidence}%): "{value}"')
    ctx.trace.action("Writing to listing...")
    return ResolutionResult(
        action=ResolutionAction.WRITE_LISTING,
        rule_code=RuleCode.VB,
        value=value,
        destination=Destination.LISTING_ONLY,
        confidence=ctx.confidence,
        note="Optional field - filled by AI",
    )


def _resolve_variable_manual_fixed(ctx: _RuleContext) -> ResolutionResult:
    ctx.trace.action("Rule VMF: AI attempting first...")
    _trace_confidence(ctx, with_threshold=True)

    if not meets_threshold(ctx.confidence):
        _trace_too_low(ctx)
        return _escalate(
            ctx,
            RuleCode.VMF,
            task_title=f"Review {ctx.attribute} for prefix {ctx.prefix}",
            confidence=ctx.confidence,
            note="Escalated to manual review - will be locked after human entry",
        )

    value = _generate(ctx, ctx.capabilities.ai_value_generator)
    if value is None:
        return _generation_failed(RuleCode.VMF, ctx.confidence)
    ctx.trace.success(f'AI confident ({ctx.confidence}%): "{value}"')
    return _write_and_lock(ctx, RuleCode.VMF, value, confidence=ctx.confidence)


def _resolve_manual_fixed(ctx: _RuleContext) -> ResolutionResult:
    ctx.trace.action("Rule MF: Manual-only field - always requires human research")
    return _escalate(
        ctx,
        RuleCode.MF,
        task_title=f"Research {ctx.attribute} for prefix {ctx.prefix}",
        note="Manual-only field - always requires human research",
        immediately=True,
    )


def _write_and_lock(
    ctx: _RuleContext, code: RuleCode, value: str, confidence: int | None = None
) -> ResolutionResult:
    ctx.trace.action("Writing to structured store...")
    ctx.trace.action("Applying physical field lock...")
    ctx.trace.success("Field locked successfully")
    return ResolutionResult(
        action=ResolutionAction.WRITE_AND_LOCK,
        rule_code=code,
        value=value,
        destination=Destination.STRUCTURED_STORE,
        locked=True,
        confidence=confidence,
    )


def _escalate(
    ctx: _RuleContext,
    code: RuleCode,
    task_title: str,
    note: str,
    confidence: int | None = None,
    *,
    immediately: bool = False,
) -> ResolutionResult:
    if immediately:
        ctx.trace.action("Requesting task-tracker task immediately...")
    else:
        ctx.trace.action("Requesting task-tracker task for manual review...")
    ctx.trace.success(f'Task requested: "{task_title}"')
    ctx.trace.info("Awaiting manual entry - field will be locked after human input")
    return ResolutionResult(
        action=ResolutionAction.ESCALATE,
        rule_code=code,
        destination=Destination.TASK_TRACKER,
        escalated=True,
        confidence=confidence,
        note=note,
        task_title=task_title,
    )


def _trace_confidence(ctx: _RuleContext, *, with_threshold: bool) -> None:
    if with_threshold:
        ctx.trace.info(f"Confidence threshold: {CONFIDENCE_THRESHOLD}%")
    ctx.trace.info(f"Simulated confidence: {ctx.confidence}%")


def _trace_too_low(ctx: _RuleContext) -> None:
    ctx.trace.warning(
        f"AI confidence too low ({ctx.confidence}% < {CONFIDENCE_THRESHOLD}%)"
    )


def _generate(ctx: _RuleContext, generator: AIValueGenerator) -> str | None:
    """Call a generator capability, returning None when it cannot answer."""
    try:
        value = generator(ctx.attribute, ctx.prefix)
    except ValueGenerationError as exc:
        ctx.trace.error(f"AI value generation failed: {exc}")
        logger.warning(
            "Value generation failed for prefix %s, item specific %s: %s",
            ctx.prefix,
            ctx.attribute,
            exc,
        )
        return None
    if not value:
        ctx.trace.error("AI value generation returned no value")
        return None
    return value


def _generation_failed(
    code: RuleCode, confidence: int | None = None
) -> ResolutionResult:
    return ResolutionResult(
        action=ResolutionAction.ERROR,
        rule_code=code,
        confidence=confidence,
        note="AI value generation failed - no value written",
    )


@lru_cache(maxsize=1)
def default_engine() -> ResolutionEngine:
    """Return an engine over the built-in part-type registry."""
    return ResolutionEngine(PartTypeRegistry.from_config(load_config()["part_types"]))


def resolve(
    prefix: str,
    attribute: str,
    confidence: int,
    capabilities: Capabilities,
    engine: ResolutionEngine | None = None,
) -> tuple[ResolutionResult, tuple[TraceEntry, ...]]:
    """Resolve one item specific with a flat argument list.

    Uses the built-in registry unless an engine is given.
    """
    request = ResolutionRequest(prefix, attribute, confidence)
    return (engine or default_engine()).resolve(request, capabilities)
