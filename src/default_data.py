"""Built-in part-type logic, fixed values, master records and AI responses.

Override any of these from a YAML file passed to ``load_config``.
"""

from typing import Any

EXCLUSION_REASON = "Excluded prefix per policy"

PART_TYPES: dict[str, dict[str, Any]] = {
    "116": {
        "name": "Shared Prefix (Category Resolution Required)",
        "category": None,
        "item_specifics": {
            "Brand": "F",
            "Manufacturer Part Number": "VF",
            "Interchange Part Number": "F",
            "Fitment Type": "VMF",
            "Warranty": "F",
            "Country of Manufacture": "MF",
            "Placement on Vehicle": "V1",
        },
    },
    "663": {
        "name": "Brake Components",
        "category": "Brake Pads",
        "item_specifics": {
            "Brand": "F",
            "Manufacturer Part Number": "VF",
            "Placement on Vehicle": "V1",
            "Fitment Type": "VMF",
            "Weight": "FsV",
            "Condition": "V1",
            "Material": "VB",
        },
    },
    "663.": {
        "name": "Dot-Number IPN (Special Handling)",
        "category": "Brake Components - Variant",
        "is_dot_number": True,
        "item_specifics": {
            "Brand": "F",
            # VF skips dot-numbers, so MPN falls to VB here
            "Manufacturer Part Number": "VB",
            "Fitment Type": "VMF",
            "Placement on Vehicle": "V1",
            "Condition": "V1",
        },
    },
    "450": {
        "name": "Engine Components",
        "category": "Engine Parts",
        "item_specifics": {
            "Brand": "F",
            "Manufacturer Part Number": "VF",
            "Engine Type": "V2",
            "Fitment Type": "VMF",
            "OE Spec": "MF",
            "Warranty": "F",
        },
    },
    "900": {
        "name": "EXCLUDED - Never Ingest",
        "excluded": True,
        "reason": EXCLUSION_REASON,
    },
    "950": {
        "name": "EXCLUDED - Never Ingest",
        "excluded": True,
        "reason": EXCLUSION_REASON,
    },
    "999": {
        "name": "EXCLUDED - Never Ingest",
        "excluded": True,
        "reason": EXCLUSION_REASON,
    },
}

FIXED_VALUES: dict[str, dict[str, str]] = {
    "116": {
        "Brand": "ACDelco",
        "Interchange Part Number": "See Fitment",
        "Warranty": "1 Year",
    },
    "663": {"Brand": "Dorman", "Warranty": "1 Year"},
    "663.": {"Brand": "Dorman"},
    "450": {"Brand": "Motorcraft", "Warranty": "2 Years"},
}

MASTER_RECORDS: dict[str, dict[str, Any]] = {
    "116-5423": {
        "prefix": "116",
        "title": "ACDelco Professional Brake Pad Set",
        "category": None,
        "weight": 2.3,
        "dimensions": "8x6x4",
        "locked_fields": ["weight", "dimensions"],
        "item_specifics": {
            "Brand": {"value": "ACDelco", "locked": True},
            "Interchange Part Number": {"value": "See Fitment", "locked": True},
        },
    },
    "663-7891": {
        "prefix": "663",
        "title": "Dorman Front Brake Pad Kit",
        "category": "Brake Pads",
        "weight": None,
        "dimensions": None,
        "locked_fields": [],
        "item_specifics": {"Brand": {"value": "Dorman", "locked": True}},
    },
    "663.1234": {
        "prefix": "663.",
        "title": "Dorman Brake Pad Variant",
        "category": "Brake Pads",
        "weight": 1.8,
        "dimensions": "6x5x3",
        "locked_fields": ["weight"],
        "item_specifics": {"Brand": {"value": "Dorman", "locked": True}},
    },
    "450-9012": {
        "prefix": "450",
        "title": "Motorcraft Engine Mount",
        "category": "Engine Parts",
        "weight": 5.2,
        "dimensions": "10x8x6",
        "locked_fields": ["weight", "dimensions"],
        "item_specifics": {
            "Brand": {"value": "Motorcraft", "locked": True},
            "Warranty": {"value": "2 Years", "locked": True},
        },
    },
}

# Keyed by item specific, then IPN. Confidence is informational only; the
# engine compares the caller-supplied confidence against the threshold.
AI_RESPONSES: dict[str, dict[str, dict[str, Any]]] = {
    "Manufacturer Part Number": {
        "116-5423": {"value": "18046785", "confidence": 92},
        "663-7891": {"value": "D1092", "confidence": 88},
        "663.1234": {"value": "D1092-A", "confidence": 45},
        "450-9012": {"value": "YC2Z-6038-BA", "confidence": 95},
    },
    "Fitment Type": {
        "116-5423": {"value": "Direct Replacement", "confidence": 78},
        "663-7891": {"value": "Direct Replacement", "confidence": 82},
        "663.1234": {"value": "Performance Upgrade", "confidence": 65},
        "450-9012": {"value": "OEM Replacement", "confidence": 91},
    },
    "Placement on Vehicle": {
        "116-5423": {"value": "Front", "confidence": 85},
        "663-7891": {"value": "Front Left", "confidence": 79},
        "663.1234": {"value": "Front", "confidence": 72},
        "450-9012": {"value": "Engine Bay", "confidence": 88},
    },
    "Condition": {
        "116-5423": {"value": "New", "confidence": 99},
        "663-7891": {"value": "New", "confidence": 99},
        "663.1234": {"value": "New", "confidence": 99},
        "450-9012": {"value": "New", "confidence": 99},
    },
    "Material": {
        "663-7891": {"value": "Ceramic", "confidence": 71},
        "663.1234": {"value": "Semi-Metallic", "confidence": 55},
    },
    "Engine Type": {
        "450-9012": {"value": "V8 4.6L", "confidence": 86},
    },
}
