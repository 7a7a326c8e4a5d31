"""Logic for resolving every item specific bound to a listing's prefix."""

from collections.abc import Mapping
from dataclasses import dataclass

from src.capabilities import Capabilities
from src.errors import ExcludedPrefix
from src.part_type_registry import DEFAULT_EXCLUSION_REASON
from src.resolution_engine import ResolutionEngine
from src.resolution_request import ResolutionRequest
from src.resolution_result import ResolutionResult
from src.resolution_trace import TraceEntry


@dataclass(frozen=True)
class AttributeResolution:
    """Result and trace for one item specific of an enriched listing."""

    prefix: str
    attribute: str
    result: ResolutionResult
    trace: tuple[TraceEntry, ...]


def enrich_listing(
    engine: ResolutionEngine,
    prefix: str,
    capabilities: Capabilities,
    confidence: int,
    confidences: Mapping[str, int] | None = None,
) -> list[AttributeResolution]:
    """Resolve all bound item specifics of a prefix in registry order.

    ``confidences`` overrides the default confidence per item specific.
    An excluded prefix is refused before any item specific is resolved.
    """
    entry = engine.registry.entry(prefix)
    if entry.excluded:
        raise ExcludedPrefix(prefix, entry.exclusion_reason or DEFAULT_EXCLUSION_REASON)

    overrides = confidences or {}
    resolutions = []
    for attribute in entry.attribute_rules:
        request = ResolutionRequest(
            prefix, attribute, overrides.get(attribute, confidence)
        )
        result, trace = engine.resolve(request, capabilities)
        resolutions.append(AttributeResolution(prefix, attribute, result, trace))
    return resolutions
