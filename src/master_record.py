"""Data model for a master parts table record."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from src.errors import RegistryConfigError


@dataclass(frozen=True)
class LockedValue:
    """An item-specific value already stored on the master record."""

    value: str
    locked: bool = True


@dataclass(frozen=True)
class MasterRecord:
    """A part record from the master parts table."""

    ipn: str
    prefix: str
    title: str = ""
    category: str | None = None
    weight: float | None = None
    dimensions: str | None = None
    locked_fields: tuple[str, ...] = ()
    # Read-only; left out of the hash because mappings are unhashable.
    item_specifics: Mapping[str, LockedValue] = field(
        default_factory=lambda: MappingProxyType({}), hash=False
    )

    @classmethod
    def from_config(cls, ipn: str, raw: Any) -> "MasterRecord":
        """Build a record from one entry of the ``master_records`` config.

        Raises:
            RegistryConfigError: If the entry, its item specifics or its
                weight have the wrong shape.
        """
        if not isinstance(raw, Mapping):
            msg = f"Master record {ipn!r} must be a mapping"
            raise RegistryConfigError(msg)

        return cls(
            ipn=ipn,
            prefix=str(raw.get("prefix", "")),
            title=str(raw.get("title", "")),
            category=raw.get("category"),
            weight=_weight_from_config(ipn, raw.get("weight")),
            dimensions=raw.get("dimensions"),
            locked_fields=tuple(raw.get("locked_fields") or ()),
            item_specifics=MappingProxyType(
                _specifics_from_config(ipn, raw.get("item_specifics") or {})
            ),
        )


def _weight_from_config(ipn: str, weight: Any) -> float | None:
    if weight is None:
        return None
    if isinstance(weight, bool):
        msg = f"Master record {ipn!r}: weight must be a number, got {weight!r}"
        raise RegistryConfigError(msg)
    try:
        return float(weight)
    except (TypeError, ValueError):
        msg = f"Master record {ipn!r}: weight must be a number, got {weight!r}"
        raise RegistryConfigError(msg) from None


def _specifics_from_config(ipn: str, raw: Any) -> dict[str, LockedValue]:
    if not isinstance(raw, Mapping):
        msg = f"Master record {ipn!r}: item_specifics must be a mapping"
        raise RegistryConfigError(msg)

    specifics: dict[str, LockedValue] = {}
    for name, spec in raw.items():
        if spec is None:
            continue
        if not isinstance(spec, Mapping):
            msg = (
                f"Master record {ipn!r}, item specific {name!r}: expected a "
                f"mapping with 'value' and 'locked', got {spec!r}"
            )
            raise RegistryConfigError(msg)
        if spec.get("value") is None:
            continue
        specifics[str(name)] = LockedValue(
            value=str(spec["value"]), locked=bool(spec.get("locked", True))
        )
    return specifics
