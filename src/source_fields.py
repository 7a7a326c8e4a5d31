"""Mapping from item specifics to master record source fields."""

from collections.abc import Callable

from src.master_record import MasterRecord


def _weight(record: MasterRecord) -> str | None:
    if not record.weight:
        return None
    return f"{record.weight} lbs"


def _dimensions(record: MasterRecord) -> str | None:
    return record.dimensions or None


# Only these item specifics have a defined source field.
SOURCE_FIELDS: dict[str, Callable[[MasterRecord], str | None]] = {
    "Weight": _weight,
    "Dimensions": _dimensions,
}


def source_value(record: MasterRecord | None, attribute: str) -> str | None:
    """Return the formatted source value of an attribute, or None if absent."""
    if record is None:
        return None
    extract = SOURCE_FIELDS.get(attribute)
    if extract is None:
        return None
    return extract(record)
