"""
Filter type enumerations.

The catalog is closed: coefficient derivation only accepts members of
FilterFamily, and FilterKind tags the three independent filter variants.
Presentation labels and legacy text aliases live in utils.formatting.
"""

from enum import Enum


class FilterKind(Enum):
    """Which filter variant produces a response."""
    ALL_PASS = "all_pass"
    PARAMETRIC = "parametric"
    HIGH_LOW_PASS = "high_low_pass"


class ElectronicFilterType(Enum):
    """Electronic role of a high/low pass filter."""
    HIGH_LOW_PASS = "high_low_pass"
    LOW_PASS = "low_pass"
    HIGH_PASS = "high_pass"


class FilterFamily(Enum):
    """The 23 analog prototypes available to high/low pass filters."""
    SECOND_ORDER_HIGH_PASS = "second_order_high_pass"
    ELLIPTICAL_HIGH_PASS = "elliptical_high_pass"
    BUTTERWORTH_1_HIGH_PASS = "butterworth_1_high_pass"
    BUTTERWORTH_2_HIGH_PASS = "butterworth_2_high_pass"
    BUTTERWORTH_3_HIGH_PASS = "butterworth_3_high_pass"
    BUTTERWORTH_4_HIGH_PASS = "butterworth_4_high_pass"
    BUTTERWORTH_5_HIGH_PASS = "butterworth_5_high_pass"
    BUTTERWORTH_6_HIGH_PASS = "butterworth_6_high_pass"
    BUTTERWORTH_7_HIGH_PASS = "butterworth_7_high_pass"
    BUTTERWORTH_8_HIGH_PASS = "butterworth_8_high_pass"
    LINKWITZ_RILEY_2_HIGH_PASS = "linkwitz_riley_2_high_pass"
    LINKWITZ_RILEY_4_HIGH_PASS = "linkwitz_riley_4_high_pass"
    LOW_PASS = "low_pass"
    BUTTERWORTH_1_LOW_PASS = "butterworth_1_low_pass"
    BUTTERWORTH_2_LOW_PASS = "butterworth_2_low_pass"
    BUTTERWORTH_3_LOW_PASS = "butterworth_3_low_pass"
    BUTTERWORTH_4_LOW_PASS = "butterworth_4_low_pass"
    BUTTERWORTH_5_LOW_PASS = "butterworth_5_low_pass"
    BUTTERWORTH_6_LOW_PASS = "butterworth_6_low_pass"
    BUTTERWORTH_7_LOW_PASS = "butterworth_7_low_pass"
    BUTTERWORTH_8_LOW_PASS = "butterworth_8_low_pass"
    LINKWITZ_RILEY_2_LOW_PASS = "linkwitz_riley_2_low_pass"
    LINKWITZ_RILEY_4_LOW_PASS = "linkwitz_riley_4_low_pass"

    @property
    def is_high_pass(self) -> bool:
        return self.name.endswith("HIGH_PASS")

    @property
    def order(self) -> int:
        """Number of poles of the prototype."""
        return _FAMILY_ORDERS[self]


_FAMILY_ORDERS = {
    FilterFamily.SECOND_ORDER_HIGH_PASS: 2,
    FilterFamily.ELLIPTICAL_HIGH_PASS: 2,
    FilterFamily.LOW_PASS: 3,
    FilterFamily.LINKWITZ_RILEY_2_HIGH_PASS: 2,
    FilterFamily.LINKWITZ_RILEY_4_HIGH_PASS: 4,
    FilterFamily.LINKWITZ_RILEY_2_LOW_PASS: 2,
    FilterFamily.LINKWITZ_RILEY_4_LOW_PASS: 4,
}
for _family in FilterFamily:
    if _family.name.startswith("BUTTERWORTH_"):
        _FAMILY_ORDERS[_family] = int(_family.name.split("_")[1])
del _family


DEFAULT_FILTER_FAMILY = FilterFamily.LOW_PASS
DEFAULT_ELECTRONIC_FILTER_TYPE = ElectronicFilterType.HIGH_LOW_PASS
