"""
Analog Prototype Table

Analog-domain templates for the 23 high/low pass filter families.

Technical assumptions:
- Each template has exactly four sections; unused slots are pass-through
  (numerator equals denominator)
- A section is ((A, B, C), (D, E, F)) = (A·s² + B·s + C) / (D·s² + E·s + F)
  with s normalized to the cutoff frequency
- Odd orders use a first-order section s/(s + 1) or 1/(s + 1) for the
  solitary real pole
- Butterworth pole constants 2·cos(kπ/n) are computed once at import time,
  since the templates are rebuilt inside tight GUI refresh loops

Reference for the pole locations of each Butterworth stage:
http://alignment.hep.brandeis.edu/Lab/Filter/Filter.html
"""

import math

from .exceptions import FilterCatalogError
from .filter_types import FilterFamily
from .transform import AnalogSection, IDENTITY_ANALOG_SECTION


NUMBER_OF_BIQUAD_SECTIONS = 4

SQRT_TWO = math.sqrt(2.0)

# Sub-product constants for the legacy analog-derived shapes
LOW_PASS_AA = 0.107
LOW_PASS_BB = 0.893
LOW_PASS_CC = 0.9

SECOND_ORDER_HIGH_PASS_AA = 0.0
SECOND_ORDER_HIGH_PASS_BB = 1.0
SECOND_ORDER_HIGH_PASS_CC = 0.9

ELLIPTICAL_HIGH_PASS_AA = 0.107
ELLIPTICAL_HIGH_PASS_BB = 0.893
ELLIPTICAL_HIGH_PASS_CC = 0.9

# Butterworth 4th through 8th order pole constants (the 6th order K pair
# repeats the E damping)
BUTTERWORTH_4_E = 2.0 * math.cos(3.0 * math.pi / 8.0)
BUTTERWORTH_4_K = 2.0 * math.cos(math.pi / 8.0)
BUTTERWORTH_5_E = 2.0 * math.cos(math.pi / 5.0)
BUTTERWORTH_5_K = 2.0 * math.cos(2.0 * math.pi / 5.0)
BUTTERWORTH_6_E = 2.0 * math.cos(5.0 * math.pi / 12.0)
BUTTERWORTH_6_K = 2.0 * math.cos(5.0 * math.pi / 12.0)
BUTTERWORTH_6_Q = 2.0 * math.cos(3.0 * math.pi / 12.0)
BUTTERWORTH_7_E = 2.0 * math.cos(3.0 * math.pi / 7.0)
BUTTERWORTH_7_K = 2.0 * math.cos(2.0 * math.pi / 7.0)
BUTTERWORTH_7_Q = 2.0 * math.cos(math.pi / 7.0)
BUTTERWORTH_8_E = 2.0 * math.cos(7.0 * math.pi / 16.0)
BUTTERWORTH_8_K = 2.0 * math.cos(5.0 * math.pi / 16.0)
BUTTERWORTH_8_Q = 2.0 * math.cos(3.0 * math.pi / 16.0)
BUTTERWORTH_8_W = 2.0 * math.cos(math.pi / 16.0)

# Legacy LOW_PASS second-pole clamp, tuned against a reference curve
LOW_PASS_CLAMP_THRESHOLD_HZ = 160.0
LOW_PASS_CLAMPED_FREQUENCY_HZ = 447.0


def _high_pass_pair(damping: float) -> AnalogSection:
    """s² / (s² + damping·s + 1)"""
    return ((1.0, 0.0, 0.0), (1.0, damping, 1.0))


def _low_pass_pair(damping: float) -> AnalogSection:
    """1 / (s² + damping·s + 1)"""
    return ((0.0, 0.0, 1.0), (1.0, damping, 1.0))


def _legacy_section(aa: float, bb: float, cc: float, high_pass: bool) -> AnalogSection:
    if high_pass:
        numerator = (aa + bb, aa / cc, aa)
    else:
        numerator = (aa, aa / cc, aa + bb)
    return (numerator, (1.0, 1.0 / cc, 1.0))


def _padded(*sections: AnalogSection) -> tuple[AnalogSection, ...]:
    padding = (IDENTITY_ANALOG_SECTION,) * (NUMBER_OF_BIQUAD_SECTIONS - len(sections))
    return tuple(sections) + padding


HIGH_PASS_POLE: AnalogSection = ((0.0, 1.0, 0.0), (0.0, 1.0, 1.0))
LOW_PASS_POLE: AnalogSection = ((0.0, 0.0, 1.0), (0.0, 1.0, 1.0))

LOW_PASS_FIRST_SECTION = _legacy_section(LOW_PASS_AA, LOW_PASS_BB, LOW_PASS_CC, high_pass=False)


PROTOTYPE_TEMPLATES: dict[FilterFamily, tuple[AnalogSection, ...]] = {
    FilterFamily.SECOND_ORDER_HIGH_PASS: _padded(
        _legacy_section(
            SECOND_ORDER_HIGH_PASS_AA,
            SECOND_ORDER_HIGH_PASS_BB,
            SECOND_ORDER_HIGH_PASS_CC,
            high_pass=True,
        ),
    ),
    FilterFamily.ELLIPTICAL_HIGH_PASS: _padded(
        _legacy_section(
            ELLIPTICAL_HIGH_PASS_AA,
            ELLIPTICAL_HIGH_PASS_BB,
            ELLIPTICAL_HIGH_PASS_CC,
            high_pass=True,
        ),
    ),
    FilterFamily.BUTTERWORTH_1_HIGH_PASS: _padded(HIGH_PASS_POLE),
    FilterFamily.BUTTERWORTH_2_HIGH_PASS: _padded(_high_pass_pair(SQRT_TWO)),
    FilterFamily.BUTTERWORTH_3_HIGH_PASS: _padded(HIGH_PASS_POLE, _high_pass_pair(1.0)),
    FilterFamily.BUTTERWORTH_4_HIGH_PASS: _padded(
        _high_pass_pair(BUTTERWORTH_4_E),
        _high_pass_pair(BUTTERWORTH_4_K),
    ),
    FilterFamily.BUTTERWORTH_5_HIGH_PASS: _padded(
        _high_pass_pair(BUTTERWORTH_5_E),
        _high_pass_pair(BUTTERWORTH_5_K),
        HIGH_PASS_POLE,
    ),
    FilterFamily.BUTTERWORTH_6_HIGH_PASS: _padded(
        _high_pass_pair(BUTTERWORTH_6_E),
        _high_pass_pair(BUTTERWORTH_6_K),
        _high_pass_pair(BUTTERWORTH_6_Q),
    ),
    FilterFamily.BUTTERWORTH_7_HIGH_PASS: (
        _high_pass_pair(BUTTERWORTH_7_E),
        _high_pass_pair(BUTTERWORTH_7_K),
        _high_pass_pair(BUTTERWORTH_7_Q),
        HIGH_PASS_POLE,
    ),
    FilterFamily.BUTTERWORTH_8_HIGH_PASS: (
        _high_pass_pair(BUTTERWORTH_8_E),
        _high_pass_pair(BUTTERWORTH_8_K),
        _high_pass_pair(BUTTERWORTH_8_Q),
        _high_pass_pair(BUTTERWORTH_8_W),
    ),
    FilterFamily.LINKWITZ_RILEY_2_HIGH_PASS: _padded(HIGH_PASS_POLE, HIGH_PASS_POLE),
    FilterFamily.LINKWITZ_RILEY_4_HIGH_PASS: _padded(
        _high_pass_pair(SQRT_TWO),
        _high_pass_pair(SQRT_TWO),
    ),
    FilterFamily.BUTTERWORTH_1_LOW_PASS: _padded(LOW_PASS_POLE),
    FilterFamily.BUTTERWORTH_2_LOW_PASS: _padded(_low_pass_pair(SQRT_TWO)),
    FilterFamily.BUTTERWORTH_3_LOW_PASS: _padded(LOW_PASS_POLE, _low_pass_pair(1.0)),
    FilterFamily.BUTTERWORTH_4_LOW_PASS: _padded(
        _low_pass_pair(BUTTERWORTH_4_E),
        _low_pass_pair(BUTTERWORTH_4_K),
    ),
    FilterFamily.BUTTERWORTH_5_LOW_PASS: _padded(
        _low_pass_pair(BUTTERWORTH_5_E),
        _low_pass_pair(BUTTERWORTH_5_K),
        LOW_PASS_POLE,
    ),
    FilterFamily.BUTTERWORTH_6_LOW_PASS: _padded(
        _low_pass_pair(BUTTERWORTH_6_E),
        _low_pass_pair(BUTTERWORTH_6_K),
        _low_pass_pair(BUTTERWORTH_6_Q),
    ),
    FilterFamily.BUTTERWORTH_7_LOW_PASS: (
        _low_pass_pair(BUTTERWORTH_7_E),
        _low_pass_pair(BUTTERWORTH_7_K),
        _low_pass_pair(BUTTERWORTH_7_Q),
        LOW_PASS_POLE,
    ),
    FilterFamily.BUTTERWORTH_8_LOW_PASS: (
        _low_pass_pair(BUTTERWORTH_8_E),
        _low_pass_pair(BUTTERWORTH_8_K),
        _low_pass_pair(BUTTERWORTH_8_Q),
        _low_pass_pair(BUTTERWORTH_8_W),
    ),
    FilterFamily.LINKWITZ_RILEY_2_LOW_PASS: _padded(LOW_PASS_POLE, LOW_PASS_POLE),
    FilterFamily.LINKWITZ_RILEY_4_LOW_PASS: _padded(
        _low_pass_pair(SQRT_TWO),
        _low_pass_pair(SQRT_TWO),
    ),
}


def legacy_low_pass_clamped_frequency(fc: float) -> float:
    """Second-pole frequency of the legacy LOW_PASS shape (Hz)."""
    if fc <= LOW_PASS_CLAMP_THRESHOLD_HZ:
        return LOW_PASS_CLAMPED_FREQUENCY_HZ
    return (LOW_PASS_CLAMPED_FREQUENCY_HZ / LOW_PASS_CLAMP_THRESHOLD_HZ) * fc


def analog_template(
    family: FilterFamily,
    pole_angle: float,
    clamped_pole_angle: float = 0.0,
) -> tuple[AnalogSection, ...]:
    """
    Look up the four analog sections for a family.

    Only LOW_PASS depends on the pole angles: its second slot is a
    first-order section with its pole at the clamped frequency, expressed
    as w2 / (w·s + w2) in the cutoff-normalized s.

    Args:
        family: Prototype to expand
        pole_angle: Pole angle of the cutoff frequency (radians)
        clamped_pole_angle: Pole angle of the LOW_PASS clamped frequency

    Raises:
        FilterCatalogError: family is not part of the catalog
    """
    if family is FilterFamily.LOW_PASS:
        w2 = clamped_pole_angle
        second = ((0.0, 0.0, w2), (0.0, pole_angle, w2))
        return (LOW_PASS_FIRST_SECTION, second, IDENTITY_ANALOG_SECTION, IDENTITY_ANALOG_SECTION)

    try:
        return PROTOTYPE_TEMPLATES[family]
    except (KeyError, TypeError):
        raise FilterCatalogError(family) from None
