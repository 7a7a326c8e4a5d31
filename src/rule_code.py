"""Enumeration of the rule types that can be bound to an item specific."""

from enum import Enum


class RuleCode(str, Enum):
    """Closed set of resolution strategies, valued by their registry codes."""

    F = "F"
    FSV = "FsV"
    VF = "VF"
    V1 = "V1"
    V2 = "V2"
    VB = "VB"
    VMF = "VMF"
    MF = "MF"
