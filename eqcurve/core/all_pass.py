"""
All-Pass Phase Filter

Second-order all-pass used to rotate phase around a center frequency
without touching the magnitude.

Technical assumptions:
- The section is rebuilt on every response() call: the pole angle used
  for pre-warping comes from the evaluation frequency, not from f
- The bandwidth o is used directly as Q (no octave conversion)
- Numerator and denominator are mirror images, so |H| = 1 everywhere
"""

import math
import numpy as np

from .base import DeferredCommit
from .filter_types import FilterKind
from .transform import (
    DEFAULT_SAMPLING_FREQUENCY_HZ,
    EPSILON_SMALL,
    TWO_PI,
    BiquadSection,
    angular_frequency_radians,
    clamp_frequency,
    evaluate_biquad_cascade,
    pole_angle_radians,
    to_z_domain,
    to_z_domain_array,
    validate_sampling_frequency,
    warn_if_above_nyquist,
)


class AllPassFilter(DeferredCommit):
    """
    Phase-only filter band.

    All-pass filters are bypassed by default.
    """

    kind = FilterKind.ALL_PASS

    BYPASSED_DEFAULT = True
    F_DEFAULT = 100.0
    O_DEFAULT = 1.0

    def __init__(
        self,
        f: float = F_DEFAULT,
        o: float = O_DEFAULT,
        bypassed: bool = BYPASSED_DEFAULT,
        sampling_frequency_hz: float = DEFAULT_SAMPLING_FREQUENCY_HZ,
    ):
        self._bypassed = bool(bypassed)
        self._f = float(f)
        self._o = float(o)
        self._sampling_frequency_hz = validate_sampling_frequency(sampling_frequency_hz)
        self._w = angular_frequency_radians(self._f)
        self._q = self._o
        self.commit()

    @classmethod
    def at_frequency(
        cls,
        f: float,
        sampling_frequency_hz: float = DEFAULT_SAMPLING_FREQUENCY_HZ,
    ) -> "AllPassFilter":
        """Default band placed at a bank center frequency."""
        return cls(f=f, sampling_frequency_hz=sampling_frequency_hz)

    @property
    def bypassed(self) -> bool:
        return self._bypassed

    @bypassed.setter
    def bypassed(self, value: bool) -> None:
        self._bypassed = bool(value)

    @property
    def f(self) -> float:
        """Center frequency in Hz."""
        return self._f

    @f.setter
    def f(self, value: float) -> None:
        self._f = float(value)
        self._w = angular_frequency_radians(self._f)
        self._changed()

    @property
    def o(self) -> float:
        """Bandwidth, used as Q."""
        return self._o

    @o.setter
    def o(self, value: float) -> None:
        self._o = float(value)
        self._q = self._o
        self._changed()

    @property
    def sampling_frequency_hz(self) -> float:
        return self._sampling_frequency_hz

    @sampling_frequency_hz.setter
    def sampling_frequency_hz(self, value: float) -> None:
        self._sampling_frequency_hz = validate_sampling_frequency(value)
        self._changed()

    @property
    def w(self) -> float:
        return self._w

    @property
    def q(self) -> float:
        return self._q

    def set_parameters(self, bypassed: bool, f: float, o: float) -> None:
        with self.deferred():
            self.bypassed = bypassed
            self.f = f
            self.o = o

    def set_from(self, other: "AllPassFilter") -> None:
        with self.deferred():
            self._sampling_frequency_hz = other.sampling_frequency_hz
            self.set_parameters(other.bypassed, other.f, other.o)

    def reset(self) -> None:
        self.set_parameters(self.BYPASSED_DEFAULT, self.F_DEFAULT, self.O_DEFAULT)

    def copy(self) -> "AllPassFilter":
        return AllPassFilter(
            f=self._f,
            o=self._o,
            bypassed=self._bypassed,
            sampling_frequency_hz=self._sampling_frequency_hz,
        )

    def commit(self) -> None:
        # Coefficients depend on the evaluation frequency; only validate here
        warn_if_above_nyquist(self._f, self._sampling_frequency_hz, "Center frequency")

    def section_at(self, frequency_hz: float) -> BiquadSection:
        """
        Digital section pre-warped at an evaluation frequency.

        Args:
            frequency_hz: Evaluation frequency in Hz (clamped to EPSILON_SMALL)

        Returns:
            Normalized section b = (B/A, C/A, 1), a = (1, C/A, B/A)
        """
        f_adjusted = clamp_frequency(frequency_hz)

        theta = pole_angle_radians(f_adjusted, self._sampling_frequency_hz)
        Q = self._q
        W = self._w
        P = (TWO_PI * f_adjusted) / math.tan(0.5 * theta)

        P2Q = P * P * Q
        PW = P * W
        QW2 = Q * W * W

        A = P2Q + PW + QW2
        B = (P2Q - PW) + QW2
        C = (-2.0 * P2Q) + (2.0 * QW2)

        return BiquadSection(B / A, C / A, 1.0, 1.0, C / A, B / A)

    def response(self, frequency_hz: float) -> complex:
        """Complex (conjugated) response, unity when bypassed."""
        if self._bypassed:
            return 1.0 + 0.0j

        f_adjusted = clamp_frequency(frequency_hz)
        z = to_z_domain(f_adjusted, self._sampling_frequency_hz)
        z_squared = z * z

        h = evaluate_biquad_cascade(z, z_squared, (self.section_at(f_adjusted),))
        return h.conjugate()

    def response_array(self, frequencies: np.ndarray) -> np.ndarray:
        """Vectorized response(), with the section pre-warped per frequency."""
        frequencies = np.maximum(np.asarray(frequencies, dtype=float), EPSILON_SMALL)
        if self._bypassed:
            return np.ones(frequencies.shape, dtype=complex)

        theta = TWO_PI * frequencies / self._sampling_frequency_hz
        Q = self._q
        W = self._w
        P = (TWO_PI * frequencies) / np.tan(0.5 * theta)

        P2Q = P * P * Q
        PW = P * W
        QW2 = Q * W * W

        A = P2Q + PW + QW2
        b_over_a = ((P2Q - PW) + QW2) / A
        c_over_a = ((-2.0 * P2Q) + (2.0 * QW2)) / A

        z = to_z_domain_array(frequencies, self._sampling_frequency_hz)
        z_squared = z * z

        numerator = b_over_a + c_over_a / z + 1.0 / z_squared
        denominator = 1.0 + c_over_a / z + b_over_a / z_squared
        h = np.ones(frequencies.shape, dtype=complex)
        np.divide(numerator, denominator, out=h, where=denominator != 0)
        return np.conj(h)

    def is_active_eq_mode(self) -> bool:
        return not self._bypassed

    def is_eq_boost_mode(self) -> bool:
        return False

    def is_non_default_eq_mode(self) -> bool:
        return (
            self._bypassed != self.BYPASSED_DEFAULT
            or self._f != self.F_DEFAULT
            or self._o != self.O_DEFAULT
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AllPassFilter):
            return NotImplemented
        return (
            self._bypassed == other._bypassed
            and self._f == other._f
            and self._o == other._o
            and self._sampling_frequency_hz == other._sampling_frequency_hz
        )

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"AllPassFilter(f={self._f!r}, o={self._o!r}, bypassed={self._bypassed!r}, "
            f"sampling_frequency_hz={self._sampling_frequency_hz!r})"
        )
