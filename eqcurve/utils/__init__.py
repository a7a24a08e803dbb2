"""
Utility module for EQ Curve.

Contains helper functions used by both Core and GUI.
"""

from .formatting import (
    family_label,
    parse_family_label,
    electronic_type_label,
    legacy_enum_string,
    filter_slope_label,
    format_frequency,
    format_db,
    format_gain,
    format_bandwidth,
)

__all__ = [
    "family_label",
    "parse_family_label",
    "electronic_type_label",
    "legacy_enum_string",
    "filter_slope_label",
    "format_frequency",
    "format_db",
    "format_gain",
    "format_bandwidth",
]
