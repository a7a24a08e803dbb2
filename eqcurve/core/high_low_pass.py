"""
High/Low Pass Filter

Shelving filter built from one of the 23 analog prototypes in
prototypes.PROTOTYPE_TEMPLATES.

Technical assumptions:
- Always four digital sections, padded with pass-through sections
- Coefficients are bilinear-transformed at the pole angle of fc, then
  each section is normalized by its own a0
- The electronic filter type only selects defaults (fc, family) and the
  frequency range offered to the user; the family alone shapes the response
"""

import logging
from typing import Optional
import numpy as np

from .base import DeferredCommit
from .exceptions import FilterCatalogError
from .filter_types import (
    DEFAULT_ELECTRONIC_FILTER_TYPE,
    ElectronicFilterType,
    FilterFamily,
    FilterKind,
)
from .prototypes import analog_template, legacy_low_pass_clamped_frequency
from .transform import (
    DEFAULT_SAMPLING_FREQUENCY_HZ,
    EPSILON_SMALL,
    BiquadSection,
    bilinear_transform,
    clamp_frequency,
    evaluate_biquad_cascade,
    evaluate_biquad_cascade_array,
    normalize_sections,
    pole_angle_radians,
    to_z_domain,
    to_z_domain_array,
    validate_sampling_frequency,
    warn_if_above_nyquist,
)

logger = logging.getLogger(__name__)


# Default cutoff (Hz) and family per electronic filter type
FILTER_DEFAULTS: dict[ElectronicFilterType, tuple[float, FilterFamily]] = {
    ElectronicFilterType.HIGH_LOW_PASS: (100.0, FilterFamily.LOW_PASS),
    ElectronicFilterType.LOW_PASS: (160.0, FilterFamily.LOW_PASS),
    ElectronicFilterType.HIGH_PASS: (40.0, FilterFamily.SECOND_ORDER_HIGH_PASS),
}

# Cutoff ranges offered per electronic filter type (Hz)
FREQUENCY_RANGES: dict[ElectronicFilterType, tuple[float, float]] = {
    ElectronicFilterType.HIGH_LOW_PASS: (16.0, 20000.0),
    ElectronicFilterType.LOW_PASS: (32.0, 20000.0),
    ElectronicFilterType.HIGH_PASS: (16.0, 10000.0),
}


class HighLowPassFilter(DeferredCommit):
    """
    High or low pass filter from the prototype catalog.

    High/low pass filters are bypassed by default.

    Usage:
        hp = HighLowPassFilter.high_pass(fc=80.0, family=FilterFamily.BUTTERWORTH_4_HIGH_PASS)
        hp.bypassed = False
        h = hp.response(80.0)   # ≈ -3 dB
    """

    kind = FilterKind.HIGH_LOW_PASS

    BYPASSED_DEFAULT = True

    def __init__(
        self,
        electronic_filter_type: ElectronicFilterType = DEFAULT_ELECTRONIC_FILTER_TYPE,
        fc: Optional[float] = None,
        family: Optional[FilterFamily] = None,
        bypassed: bool = BYPASSED_DEFAULT,
        sampling_frequency_hz: float = DEFAULT_SAMPLING_FREQUENCY_HZ,
    ):
        """
        Initialize a high/low pass filter and compute its sections.

        Args:
            electronic_filter_type: Role of the filter; selects the defaults
            fc: Cutoff frequency in Hz (default: per electronic type)
            family: Analog prototype (default: per electronic type)
            bypassed: Bypass state
            sampling_frequency_hz: Sampling frequency used for pre-warping

        Raises:
            FilterCatalogError: family is not a FilterFamily member
        """
        self._electronic_filter_type = ElectronicFilterType(electronic_filter_type)
        default_fc, default_family = FILTER_DEFAULTS[self._electronic_filter_type]

        self._bypassed = bool(bypassed)
        self._fc = default_fc if fc is None else float(fc)
        self._family = _checked_family(default_family if family is None else family)
        self._sampling_frequency_hz = validate_sampling_frequency(sampling_frequency_hz)

        self._sections: tuple[BiquadSection, ...] = ()
        self.commit()

    @classmethod
    def low_pass(cls, **kwargs) -> "HighLowPassFilter":
        return cls(ElectronicFilterType.LOW_PASS, **kwargs)

    @classmethod
    def high_pass(cls, **kwargs) -> "HighLowPassFilter":
        return cls(ElectronicFilterType.HIGH_PASS, **kwargs)

    # ------------------------------------------------------------
    # Parameters
    # ------------------------------------------------------------

    @property
    def bypassed(self) -> bool:
        return self._bypassed

    @bypassed.setter
    def bypassed(self, value: bool) -> None:
        self._bypassed = bool(value)

    @property
    def fc(self) -> float:
        """Cutoff frequency in Hz."""
        return self._fc

    @fc.setter
    def fc(self, value: float) -> None:
        self._fc = float(value)
        self._changed()

    @property
    def family(self) -> FilterFamily:
        return self._family

    @family.setter
    def family(self, value: FilterFamily) -> None:
        self._family = _checked_family(value)
        self._changed()

    @property
    def electronic_filter_type(self) -> ElectronicFilterType:
        return self._electronic_filter_type

    @property
    def sampling_frequency_hz(self) -> float:
        return self._sampling_frequency_hz

    @sampling_frequency_hz.setter
    def sampling_frequency_hz(self, value: float) -> None:
        self._sampling_frequency_hz = validate_sampling_frequency(value)
        self._changed()

    @property
    def default_fc(self) -> float:
        return FILTER_DEFAULTS[self._electronic_filter_type][0]

    @property
    def default_family(self) -> FilterFamily:
        return FILTER_DEFAULTS[self._electronic_filter_type][1]

    @property
    def frequency_range(self) -> tuple[float, float]:
        return FREQUENCY_RANGES[self._electronic_filter_type]

    @property
    def is_high_pass(self) -> bool:
        return self._family.is_high_pass

    @property
    def sections(self) -> tuple[BiquadSection, ...]:
        """Cached normalized digital sections (always four)."""
        return self._sections

    def set_parameters(self, bypassed: bool, fc: float, family: FilterFamily) -> None:
        """Set all parameters with a single recompute."""
        with self.deferred():
            self.bypassed = bypassed
            self.fc = fc
            self.family = family

    def set_from(self, other: "HighLowPassFilter") -> None:
        """
        Take over parameters and sampling frequency of another filter.

        The electronic filter type stays as constructed, so defaults and
        the frequency range keep following this filter's own role.
        """
        with self.deferred():
            self._sampling_frequency_hz = other.sampling_frequency_hz
            self.set_parameters(other.bypassed, other.fc, other.family)

    def reset(self) -> None:
        self.set_parameters(self.BYPASSED_DEFAULT, self.default_fc, self.default_family)

    def copy(self) -> "HighLowPassFilter":
        return HighLowPassFilter(
            self._electronic_filter_type,
            fc=self._fc,
            family=self._family,
            bypassed=self._bypassed,
            sampling_frequency_hz=self._sampling_frequency_hz,
        )

    # ------------------------------------------------------------
    # Coefficients
    # ------------------------------------------------------------

    def commit(self) -> None:
        """Expand the family template into four normalized digital sections."""
        warn_if_above_nyquist(self._fc, self._sampling_frequency_hz, "Cutoff frequency")

        w = pole_angle_radians(self._fc, self._sampling_frequency_hz)

        w2 = 0.0
        if self._family is FilterFamily.LOW_PASS:
            clamped_frequency = legacy_low_pass_clamped_frequency(self._fc)
            w2 = pole_angle_radians(clamped_frequency, self._sampling_frequency_hz)

        analog_sections = analog_template(self._family, w, w2)
        self._sections = normalize_sections(bilinear_transform(analog_sections, w))

        logger.debug(
            "High/low pass sections: type=%s family=%s fc=%.2f",
            self._electronic_filter_type.name, self._family.name, self._fc,
        )

    # ------------------------------------------------------------
    # Response
    # ------------------------------------------------------------

    def response(self, frequency_hz: float) -> complex:
        """Complex (conjugated) response of all four sections, unity when bypassed."""
        if self._bypassed:
            return 1.0 + 0.0j

        f_adjusted = clamp_frequency(frequency_hz)

        z = to_z_domain(f_adjusted, self._sampling_frequency_hz)
        z_squared = z * z

        h = evaluate_biquad_cascade(z, z_squared, self._sections)
        return h.conjugate()

    def response_array(self, frequencies: np.ndarray) -> np.ndarray:
        """Vectorized response() over an array of frequencies."""
        frequencies = np.asarray(frequencies, dtype=float)
        if self._bypassed:
            return np.ones(frequencies.shape, dtype=complex)

        z = to_z_domain_array(np.maximum(frequencies, EPSILON_SMALL), self._sampling_frequency_hz)
        h = evaluate_biquad_cascade_array(z, z * z, self._sections)
        return np.conj(h)

    # ------------------------------------------------------------
    # Mode queries
    # ------------------------------------------------------------

    def is_active_eq_mode(self) -> bool:
        return not self._bypassed

    def is_eq_boost_mode(self) -> bool:
        return False

    def is_non_default_eq_mode(self) -> bool:
        return (
            self._bypassed != self.BYPASSED_DEFAULT
            or self._fc != self.default_fc
            or self._family is not self.default_family
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HighLowPassFilter):
            return NotImplemented
        return (
            self._electronic_filter_type is other._electronic_filter_type
            and self._bypassed == other._bypassed
            and self._fc == other._fc
            and self._family is other._family
            and self._sampling_frequency_hz == other._sampling_frequency_hz
        )

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"HighLowPassFilter({self._electronic_filter_type.name}, fc={self._fc!r}, "
            f"family={self._family.name}, bypassed={self._bypassed!r}, "
            f"sampling_frequency_hz={self._sampling_frequency_hz!r})"
        )


def _checked_family(family: object) -> FilterFamily:
    if not isinstance(family, FilterFamily):
        raise FilterCatalogError(family)
    return family
