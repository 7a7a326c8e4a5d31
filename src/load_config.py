"""Logic for loading the registry configuration and merging overrides."""

import copy
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from src.deep_merge import deep_merge
from src.default_data import AI_RESPONSES, FIXED_VALUES, MASTER_RECORDS, PART_TYPES
from src.errors import RegistryConfigError

DEFAULT_CONFIG: dict[str, Any] = {
    "part_types": PART_TYPES,
    "fixed_values": FIXED_VALUES,
    "master_records": MASTER_RECORDS,
    "ai_responses": AI_RESPONSES,
    "logging": {"level": "INFO"},
}

# Top-level sections every consumer reads; a null override may not drop them.
REQUIRED_SECTIONS = (
    "part_types",
    "fixed_values",
    "master_records",
    "ai_responses",
    "logging",
)


def load_config(path: str | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file and merge it with defaults."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    if path:
        p = Path(path)
        if p.exists():
            user_config = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
            if not isinstance(user_config, dict):
                msg = f"Config file {path} must contain a mapping"
                raise RegistryConfigError(msg)
            config = deep_merge(config, user_config)
    validate_config(config)
    return config


def validate_config(config: Mapping[str, Any]) -> None:
    """Check that the merged config still has the shape its readers expect.

    Entries inside ``part_types`` and ``master_records`` are checked when
    they are parsed, so errors there can name the prefix or IPN.
    """
    for section in REQUIRED_SECTIONS:
        if not isinstance(config.get(section), Mapping):
            msg = f"Config section {section!r} is missing or not a mapping"
            raise RegistryConfigError(msg)

    level = config["logging"].get("level")
    if not isinstance(level, str) or not level:
        msg = "Config key 'logging.level' must be a non-empty string"
        raise RegistryConfigError(msg)

    for prefix, row in config["fixed_values"].items():
        if row is not None and not isinstance(row, Mapping):
            msg = f"fixed_values for prefix {prefix!r} must be a mapping"
            raise RegistryConfigError(msg)

    for attribute, by_ipn in config["ai_responses"].items():
        if by_ipn is None:
            continue
        if not isinstance(by_ipn, Mapping) or not all(
            r is None or isinstance(r, Mapping) for r in by_ipn.values()
        ):
            msg = (
                f"ai_responses for {attribute!r} must map each IPN to a "
                "mapping with a 'value'"
            )
            raise RegistryConfigError(msg)
