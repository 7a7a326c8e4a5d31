"""Logic for generating reports on item-specific resolution."""

import json
import time
from collections import Counter
from pathlib import Path
from typing import Any

from src.listing_enrichment import AttributeResolution
from src.resolution_action import ResolutionAction

CURRENT_SCHEMA_VERSION = 1


class ResolutionReport:
    """Collects and summarizes resolution results for one or more listings."""

    def __init__(
        self, config_hash: str, schema_version: int = CURRENT_SCHEMA_VERSION
    ) -> None:
        """Initialize the report with metadata."""
        self.config_hash = config_hash
        self.schema_version = schema_version
        self.results: list[AttributeResolution] = []
        self.start_time = time.time()

    def add_result(self, resolution: AttributeResolution) -> None:
        """Add a single resolution to the report."""
        self.results.append(resolution)

    def to_dict(self) -> dict[str, Any]:
        """Return the report as a JSON-ready mapping."""
        return {
            "meta": {
                "timestamp": time.time(),
                "duration": time.time() - self.start_time,
                "config_hash": self.config_hash,
                "schema_version": self.schema_version,
                "total_items": len(self.results),
            },
            "results": [
                {
                    "prefix": r.prefix,
                    "attribute": r.attribute,
                    **r.result.to_dict(),
                    "trace": [entry.to_dict() for entry in r.trace],
                }
                for r in self.results
            ],
            "stats": self._compute_stats(),
        }

    def generate_report(self, path: str) -> None:
        """Write the summary report to a JSON file."""
        Path(path).write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")

    def _compute_stats(self) -> dict[str, Any]:
        action_counts = Counter(r.result.action.value for r in self.results)
        rule_counts = Counter(r.result.rule_code.value for r in self.results)
        destination_counts = Counter(r.result.destination.value for r in self.results)

        return {
            "action_counts": dict(action_counts),
            "rule_counts": dict(rule_counts),
            "destination_counts": dict(destination_counts),
            "totals": {
                "locked": sum(1 for r in self.results if r.result.locked),
                "escalated": sum(1 for r in self.results if r.result.escalated),
                "errors": action_counts.get(ResolutionAction.ERROR.value, 0),
                "writes": sum(1 for r in self.results if r.result.writes),
            },
        }
