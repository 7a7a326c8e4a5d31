"""Tests for the resolution engine's dispatch and rule procedures."""

from unittest.mock import MagicMock

import pytest

from src.capabilities import Capabilities
from src.destination import Destination
from src.errors import ExcludedPrefix, InvalidRequest, ValueGenerationError
from src.master_record import MasterRecord
from src.part_type_registry import PartTypeRegistry
from src.resolution_action import ResolutionAction
from src.resolution_engine import DOES_NOT_APPLY, ResolutionEngine, resolve
from src.resolution_request import ResolutionRequest
from src.resolution_result import ResolutionResult
from src.resolution_trace import Severity, TraceEntry
from src.rule_code import RuleCode

PART_TYPES = {
    "663": {
        "name": "Brake Components",
        "item_specifics": {
            "Brand": "F",
            "Manufacturer Part Number": "VF",
            "Placement on Vehicle": "V1",
            "Fitment Type": "VMF",
            "Weight": "FsV",
            "Material": "VB",
            "Country of Manufacture": "MF",
        },
    },
    "663.": {
        "name": "Dot-Number IPN (Special Handling)",
        "is_dot_number": True,
        "item_specifics": {"Brand": "F", "Manufacturer Part Number": "VF"},
    },
    "450": {
        "name": "Engine Components",
        "item_specifics": {
            "Engine Type": "V2",
            "Weight": "FsV",
            "Dimensions": "FsV",
        },
    },
    "900": {"name": "EXCLUDED", "excluded": True, "reason": "excluded per policy"},
}


@pytest.fixture
def engine() -> ResolutionEngine:
    """Engine over a small registry covering every rule type."""
    return ResolutionEngine(PartTypeRegistry.from_config(PART_TYPES))


@pytest.fixture
def fixed() -> MagicMock:
    """Fixed-value lookup that finds a brand."""
    return MagicMock(return_value="Dorman")


@pytest.fixture
def master() -> MagicMock:
    """Master-record lookup that finds nothing."""
    return MagicMock(return_value=None)


@pytest.fixture
def ai() -> MagicMock:
    """AI-value generator returning a fixed answer."""
    return MagicMock(return_value="Direct Replacement")


@pytest.fixture
def capabilities(fixed: MagicMock, master: MagicMock, ai: MagicMock) -> Capabilities:
    """Capabilities bundle built from the mock lookups."""
    return Capabilities(
        fixed_value_lookup=fixed,
        master_record_lookup=master,
        ai_value_generator=ai,
    )


def run(
    engine: ResolutionEngine,
    capabilities: Capabilities,
    prefix: str,
    attribute: str,
    confidence: int = 80,
) -> tuple[ResolutionResult, tuple[TraceEntry, ...]]:
    """Resolve a request built from the arguments."""
    request = ResolutionRequest(prefix, attribute, confidence)
    return engine.resolve(request, capabilities)


@pytest.mark.parametrize("attribute", ["Brand", "Fitment Type", "Anything"])
def test_excluded_prefix_refused_for_every_attribute(
    engine: ResolutionEngine,
    capabilities: Capabilities,
    fixed: MagicMock,
    master: MagicMock,
    ai: MagicMock,
    attribute: str,
) -> None:
    """Verify excluded prefixes fail before any rule logic runs."""
    with pytest.raises(ExcludedPrefix) as exc_info:
        run(engine, capabilities, "900", attribute)

    assert exc_info.value.reason == "excluded per policy"
    assert exc_info.value.prefix == "900"
    fixed.assert_not_called()
    master.assert_not_called()
    ai.assert_not_called()


def test_unregistered_prefix_is_invalid(
    engine: ResolutionEngine, capabilities: Capabilities
) -> None:
    """Verify an unknown prefix is refused instead of guessed."""
    with pytest.raises(InvalidRequest):
        run(engine, capabilities, "123", "Brand")


def test_unbound_attribute_is_invalid(
    engine: ResolutionEngine, capabilities: Capabilities
) -> None:
    """Verify an attribute not bound for the prefix is refused."""
    with pytest.raises(InvalidRequest):
        run(engine, capabilities, "450", "Brand")


@pytest.mark.parametrize("confidence", [-1, 101, 75.0, True])
def test_confidence_out_of_range_is_invalid(confidence: object) -> None:
    """Verify confidence must be an integer between 0 and 100."""
    with pytest.raises(InvalidRequest):
        ResolutionRequest("663", "Material", confidence)  # type: ignore[arg-type]


def test_fixed_writes_and_locks(
    engine: ResolutionEngine, capabilities: Capabilities, fixed: MagicMock
) -> None:
    """Verify a configured fixed value is written to the store and locked."""
    result, _ = run(engine, capabilities, "663", "Brand")

    fixed.assert_called_once_with("663", "Brand")
    assert result.action == ResolutionAction.WRITE_AND_LOCK
    assert result.value == "Dorman"
    assert result.locked is True
    assert result.destination == Destination.STRUCTURED_STORE
    assert result.rule_code == RuleCode.F


def test_fixed_missing_value_is_error(
    engine: ResolutionEngine, capabilities: Capabilities, fixed: MagicMock
) -> None:
    """Verify a missing fixed value yields an error result with no value."""
    fixed.return_value = None
    result, trace = run(engine, capabilities, "663", "Brand")

    assert result.action == ResolutionAction.ERROR
    assert result.value is None
    assert result.locked is False
    assert result.note == "Missing fixed-value configuration"
    assert trace[-1].severity == Severity.ERROR


def test_fixed_source_formats_weight(
    engine: ResolutionEngine, capabilities: Capabilities, master: MagicMock
) -> None:
    """Verify a weight on the master record is written to the listing."""
    master.return_value = MasterRecord(ipn="450-9012", prefix="450", weight=5.2)
    result, _ = run(engine, capabilities, "450", "Weight")

    master.assert_called_once_with("450")
    assert result.action == ResolutionAction.WRITE_LISTING
    assert result.value == "5.2 lbs"
    assert result.locked is False
    assert result.destination == Destination.LISTING_ONLY
    assert result.note == "Sourced from master record"


def test_fixed_source_dimensions(
    engine: ResolutionEngine, capabilities: Capabilities, master: MagicMock
) -> None:
    """Verify dimensions are taken verbatim from the master record."""
    master.return_value = MasterRecord(
        ipn="450-9012", prefix="450", dimensions="10x8x6"
    )
    result, _ = run(engine, capabilities, "450", "Dimensions")

    assert result.action == ResolutionAction.WRITE_LISTING
    assert result.value == "10x8x6"


def test_fixed_source_missing_record_writes_does_not_apply(
    engine: ResolutionEngine, capabilities: Capabilities
) -> None:
    """Verify a missing record writes "Does Not Apply" to the listing only."""
    result, _ = run(engine, capabilities, "450", "Weight")

    assert result.action == ResolutionAction.WRITE_DOES_NOT_APPLY
    assert result.value == DOES_NOT_APPLY == "Does Not Apply"
    assert result.destination == Destination.LISTING_ONLY
    assert result.locked is False
    assert result.note is not None
    assert "listing only" in result.note
    assert "never to the structured store" in result.note


def test_fixed_source_missing_field_writes_does_not_apply(
    engine: ResolutionEngine, capabilities: Capabilities, master: MagicMock
) -> None:
    """Verify a record without the source field also yields "Does Not Apply"."""
    master.return_value = MasterRecord(ipn="450-9012", prefix="450", weight=None)
    result, _ = run(engine, capabilities, "450", "Weight")

    assert result.action == ResolutionAction.WRITE_DOES_NOT_APPLY
    assert result.destination != Destination.STRUCTURED_STORE


@pytest.mark.parametrize("confidence", [0, 74, 75, 100])
def test_variable_fixed_skips_dot_numbers(
    engine: ResolutionEngine,
    capabilities: Capabilities,
    ai: MagicMock,
    confidence: int,
) -> None:
    """Verify VF on a dot-number variant skips regardless of confidence."""
    result, trace = run(
        engine, capabilities, "663.", "Manufacturer Part Number", confidence
    )

    assert result.action == ResolutionAction.SKIP
    assert result.value is None
    assert result.confidence is None
    assert result.locked is False
    ai.assert_not_called()
    assert trace[2] == TraceEntry(
        Severity.WARNING, "Dot-number IPN detected - special handling applies"
    )


def test_variable_fixed_below_threshold(
    engine: ResolutionEngine, capabilities: Capabilities, ai: MagicMock
) -> None:
    """Verify VF at 74 skips for low confidence without writing."""
    result, _ = run(engine, capabilities, "663", "Manufacturer Part Number", 74)

    assert result.action == ResolutionAction.SKIP_LOW_CONFIDENCE
    assert result.value is None
    assert result.destination == Destination.NONE
    assert result.confidence == 74  # noqa: PLR2004
    assert result.note == "Confidence 74% below 75% threshold (short by 1%)"
    ai.assert_not_called()


def test_variable_fixed_at_threshold(
    engine: ResolutionEngine, capabilities: Capabilities, ai: MagicMock
) -> None:
    """Verify VF at exactly 75 writes and locks."""
    result, _ = run(engine, capabilities, "663", "Manufacturer Part Number", 75)

    ai.assert_called_once_with("Manufacturer Part Number", "663")
    assert result.action == ResolutionAction.WRITE_AND_LOCK
    assert result.locked is True
    assert result.destination == Destination.STRUCTURED_STORE
    assert result.confidence == 75  # noqa: PLR2004


def test_listing_only_ignores_confidence(
    engine: ResolutionEngine, capabilities: Capabilities
) -> None:
    """Verify V1 writes to the listing unlocked even at zero confidence."""
    result, _ = run(engine, capabilities, "663", "Placement on Vehicle", 0)

    assert result.action == ResolutionAction.WRITE_LISTING
    assert result.value == "Direct Replacement"
    assert result.locked is False
    assert result.destination == Destination.LISTING_ONLY
    assert result.note is not None
    assert "never persisted to the structured store" in result.note


@pytest.mark.parametrize("confidence", [0, 50, 100])
def test_ipn_interpretation_engine_type(
    engine: ResolutionEngine, capabilities: Capabilities, confidence: int
) -> None:
    """Verify V2 for Engine Type writes a non-empty unlocked listing value."""
    result, _ = run(engine, capabilities, "450", "Engine Type", confidence)

    assert result.action == ResolutionAction.WRITE_LISTING
    assert result.value
    assert result.locked is False
    assert result.destination == Destination.LISTING_ONLY
    assert result.rule_code == RuleCode.V2


def test_ipn_interpretation_prefers_interpreter(
    engine: ResolutionEngine, fixed: MagicMock, master: MagicMock, ai: MagicMock
) -> None:
    """Verify V2 calls the IPN interpreter when one is supplied."""
    interpreter = MagicMock(return_value="V8 4.6L")
    caps = Capabilities(fixed, master, ai, ipn_interpreter=interpreter)

    result, _ = run(engine, caps, "450", "Engine Type")

    interpreter.assert_called_once_with("Engine Type", "450")
    ai.assert_not_called()
    assert result.value == "V8 4.6L"


def test_optional_at_threshold(
    engine: ResolutionEngine, capabilities: Capabilities
) -> None:
    """Verify VB at 75 writes an unlocked listing value."""
    result, _ = run(engine, capabilities, "663", "Material", 75)

    assert result.action == ResolutionAction.WRITE_LISTING
    assert result.locked is False
    assert result.confidence == 75  # noqa: PLR2004


def test_optional_below_threshold_leaves_blank(
    engine: ResolutionEngine, capabilities: Capabilities
) -> None:
    """Verify VB at 74 leaves the field blank without an error."""
    result, trace = run(engine, capabilities, "663", "Material", 74)

    assert result.action == ResolutionAction.LEAVE_BLANK
    assert result.action != ResolutionAction.ERROR
    assert result.value is None
    assert result.note == "Optional field left blank - no penalty"
    assert all(entry.severity != Severity.ERROR for entry in trace)


def test_variable_manual_fixed_at_threshold(
    engine: ResolutionEngine, capabilities: Capabilities
) -> None:
    """Verify VMF at 75 writes and locks like VF."""
    result, _ = run(engine, capabilities, "663", "Fitment Type", 75)

    assert result.action == ResolutionAction.WRITE_AND_LOCK
    assert result.locked is True
    assert result.escalated is False


def test_variable_manual_fixed_below_threshold_escalates(
    engine: ResolutionEngine, capabilities: Capabilities, ai: MagicMock
) -> None:
    """Verify VMF at 74 escalates with the exact decision trace."""
    result, trace = run(engine, capabilities, "663", "Fitment Type", 74)

    assert result.action == ResolutionAction.ESCALATE
    assert result.escalated is True
    assert result.locked is False
    assert result.destination == Destination.TASK_TRACKER
    assert result.task_title == "Review Fitment Type for prefix 663"
    ai.assert_not_called()
    assert [str(entry) for entry in trace] == [
        "[INFO] Processing: Fitment Type for prefix 663",
        "[INFO] Rule Type: VMF (Variable → Manual → Fixed)",
        "[ACTION] Rule VMF: AI attempting first...",
        "[INFO] Confidence threshold: 75%",
        "[INFO] Simulated confidence: 74%",
        "[WARNING] AI confidence too low (74% < 75%)",
        "[ACTION] Requesting task-tracker task for manual review...",
        '[SUCCESS] Task requested: "Review Fitment Type for prefix 663"',
        "[INFO] Awaiting manual entry - field will be locked after human input",
    ]


@pytest.mark.parametrize("confidence", [0, 1, 74, 75, 99, 100])
def test_manual_fixed_always_escalates(
    engine: ResolutionEngine,
    capabilities: Capabilities,
    ai: MagicMock,
    confidence: int,
) -> None:
    """Verify MF escalates for any confidence and never calls the generator."""
    result, _ = run(
        engine, capabilities, "663", "Country of Manufacture", confidence
    )

    assert result.action == ResolutionAction.ESCALATE
    assert result.escalated is True
    assert result.destination == Destination.TASK_TRACKER
    assert result.task_title == "Research Country of Manufacture for prefix 663"
    assert result.note == "Manual-only field - always requires human research"
    ai.assert_not_called()


def test_generator_failure_is_error(
    engine: ResolutionEngine, capabilities: Capabilities, ai: MagicMock
) -> None:
    """Verify a generator that cannot answer produces an error result."""
    ai.side_effect = ValueGenerationError("inference unavailable")
    result, trace = run(engine, capabilities, "663", "Placement on Vehicle")

    assert result.action == ResolutionAction.ERROR
    assert result.value is None
    assert result.locked is False
    assert trace[-1] == TraceEntry(
        Severity.ERROR, "AI value generation failed: inference unavailable"
    )


def test_generator_empty_value_is_error(
    engine: ResolutionEngine, capabilities: Capabilities, ai: MagicMock
) -> None:
    """Verify an empty generated value is never written."""
    ai.return_value = ""
    result, _ = run(engine, capabilities, "663", "Fitment Type", 90)

    assert result.action == ResolutionAction.ERROR
    assert result.confidence == 90  # noqa: PLR2004


def test_resolve_is_repeatable(
    engine: ResolutionEngine, capabilities: Capabilities
) -> None:
    """Verify identical inputs produce identical results and traces."""
    first = run(engine, capabilities, "663", "Fitment Type", 80)
    second = run(engine, capabilities, "663", "Fitment Type", 80)

    assert first == second


def test_module_level_resolve_uses_default_registry(
    capabilities: Capabilities,
) -> None:
    """Verify the flat resolve() signature resolves against built-in data."""
    result, trace = resolve("450", "OE Spec", 90, capabilities)

    assert result.action == ResolutionAction.ESCALATE
    assert trace[0].message == "Processing: OE Spec for prefix 450"
