"""Logic for fingerprinting the rule configuration stamped into reports."""

import hashlib
import json
from collections.abc import Mapping
from typing import Any

# Sections that only change how the tool runs, not what it resolves.
NON_RULE_SECTIONS = frozenset({"logging"})


def compute_config_hash(config: Mapping[str, Any]) -> str:
    """Return a SHA-256 fingerprint of the rule-bearing config sections.

    Keys are sorted before hashing, so reordering a YAML override does not
    change the fingerprint. Changing the log level does not either.
    """
    rule_config = {k: v for k, v in config.items() if k not in NON_RULE_SECTIONS}
    canonical = json.dumps(rule_config, sort_keys=True, ensure_ascii=True, default=str)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
