"""
Core filter-response module - fully testable without GUI dependencies.

This module contains all filter logic:
- Bilinear transform and biquad cascade evaluation
- Parametric, all-pass and high/low pass filters
- Filter banks and channel processing
- Response curve analysis
"""

from .base import AcousticalFilter
from .exceptions import EqCurveError, FilterCatalogError
from .filter_types import ElectronicFilterType, FilterFamily, FilterKind
from .transform import (
    DEFAULT_SAMPLING_FREQUENCY_HZ,
    EPSILON_SMALL,
    BiquadSection,
    bilinear_transform,
    evaluate_biquad_cascade,
    normalize_sections,
    pole_angle_radians,
    to_z_domain,
)
from .prototypes import PROTOTYPE_TEMPLATES, analog_template
from .parametric import ParametricFilter
from .all_pass import AllPassFilter
from .high_low_pass import HighLowPassFilter
from .banks import (
    FilterBank,
    ParametricFilterBank,
    AllPassFilterBank,
    GeneralParametricFilters,
    GeneralAllPassFilters,
)
from .response import (
    SweepConfig,
    ResponseCurve,
    frequency_axis,
    compute_response_curve,
    compute_composite_curve,
    to_sos,
)
from .processing import ChannelProcessing

__all__ = [
    "AcousticalFilter",
    "EqCurveError",
    "FilterCatalogError",
    "ElectronicFilterType",
    "FilterFamily",
    "FilterKind",
    "DEFAULT_SAMPLING_FREQUENCY_HZ",
    "EPSILON_SMALL",
    "BiquadSection",
    "bilinear_transform",
    "evaluate_biquad_cascade",
    "normalize_sections",
    "pole_angle_radians",
    "to_z_domain",
    "PROTOTYPE_TEMPLATES",
    "analog_template",
    "ParametricFilter",
    "AllPassFilter",
    "HighLowPassFilter",
    "FilterBank",
    "ParametricFilterBank",
    "AllPassFilterBank",
    "GeneralParametricFilters",
    "GeneralAllPassFilters",
    "SweepConfig",
    "ResponseCurve",
    "frequency_axis",
    "compute_response_curve",
    "compute_composite_curve",
    "to_sos",
    "ChannelProcessing",
]
