"""Logic for mapping a full IPN to its part-type registry prefix."""

import re

from src.errors import InvalidRequest
from src.part_type_registry import PartTypeRegistry

_SEPARATORS = re.compile(r"[-\s/]")


def prefix_for_ipn(ipn: str, registry: PartTypeRegistry) -> str:
    """Return the registry prefix an IPN belongs to.

    "663.1234" maps to the dot-number variant "663." when that entry exists,
    otherwise to its parent "663". "663-7891" maps to "663". A value that is
    already a registered prefix is returned unchanged.
    """
    ipn = ipn.strip()
    if not ipn:
        msg = "IPN must not be empty"
        raise InvalidRequest(msg)
    if ipn in registry:
        return ipn

    if "." in ipn:
        head = ipn.split(".", 1)[0]
        if f"{head}." in registry:
            return f"{head}."
    else:
        head = _SEPARATORS.split(ipn, maxsplit=1)[0]

    if head in registry:
        return head
    msg = f"No registered prefix for IPN {ipn!r}"
    raise InvalidRequest(msg)
