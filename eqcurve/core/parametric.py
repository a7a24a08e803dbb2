"""
Parametric (Peaking) EQ Filter

Single-band cut/boost filter with adjustable center frequency, bandwidth
and gain, after Robert Bristow-Johnson's biquad cookbook:
https://webaudio.github.io/Audio-EQ-Cookbook/Audio-EQ-Cookbook.txt

Technical assumptions:
- One biquad section, cached and recomputed only when f, o, c or the
  sampling frequency change
- The gain magnitude |c| drives G; the sign of c only selects whether the
  boost structure or its inverse is stored, so a cut is the exact
  reciprocal of the boost with the same |c|
- Responses are returned as complex conjugates, which keeps the sign of
  derived delay times consistent for downstream consumers
"""

import logging
import math
import numpy as np

from .base import DeferredCommit
from .filter_types import FilterKind
from .transform import (
    DEFAULT_SAMPLING_FREQUENCY_HZ,
    EPSILON_SMALL,
    BiquadSection,
    angular_frequency_radians,
    bandwidth_to_q,
    clamp_frequency,
    evaluate_biquad_cascade,
    evaluate_biquad_cascade_array,
    pole_angle_radians,
    to_z_domain,
    to_z_domain_array,
    validate_sampling_frequency,
    voltage_ratio,
    warn_if_above_nyquist,
)

logger = logging.getLogger(__name__)

# Gains closer to zero than this count as flat (single precision compare)
GAIN_EPSILON = np.float32(0.001)


class ParametricFilter(DeferredCommit):
    """
    Parametric EQ band.

    Parametric filters are enabled by default, since they start out flat.

    Usage:
        band = ParametricFilter(f=250.0, o=0.5, c=-6.0)
        h = band.response(250.0)   # ≈ 0.5 magnitude
    """

    kind = FilterKind.PARAMETRIC

    BYPASSED_DEFAULT = False
    F_DEFAULT = 1000.0
    O_DEFAULT = 1.0
    C_DEFAULT = 0.0

    # Center frequency, bandwidth (octaves) and cut/boost (dB) ranges
    F_RANGE = (20.0, 20000.0)
    O_RANGE = (0.1, 1.1)
    C_RANGE = (-15.0, 15.0)

    def __init__(
        self,
        f: float = F_DEFAULT,
        o: float = O_DEFAULT,
        c: float = C_DEFAULT,
        bypassed: bool = BYPASSED_DEFAULT,
        sampling_frequency_hz: float = DEFAULT_SAMPLING_FREQUENCY_HZ,
    ):
        """
        Initialize a parametric band and compute its coefficients.

        Args:
            f: Center frequency in Hz
            o: Bandwidth in octaves
            c: Cut/boost in dB
            bypassed: Bypass state
            sampling_frequency_hz: Sampling frequency used for pre-warping
        """
        self._bypassed = bool(bypassed)
        self._f = float(f)
        self._o = float(o)
        self._c = float(c)
        self._sampling_frequency_hz = validate_sampling_frequency(sampling_frequency_hz)

        # Equation domain parameters, derived from f/o/c
        self._w = angular_frequency_radians(self._f)
        self._q = bandwidth_to_q(self._o)
        self._g = voltage_ratio(abs(self._c))
        self._invert_h = self._c < 0.0
        self._section = BiquadSection(1.0, 1.0, 1.0, 1.0, 1.0, 1.0)

        self.commit()

    @classmethod
    def at_frequency(
        cls,
        f: float,
        sampling_frequency_hz: float = DEFAULT_SAMPLING_FREQUENCY_HZ,
    ) -> "ParametricFilter":
        """Default band placed at a bank center frequency."""
        return cls(f=f, sampling_frequency_hz=sampling_frequency_hz)

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
        """Bandwidth in octaves."""
        return self._o

    @o.setter
    def o(self, value: float) -> None:
        self._o = float(value)
        self._q = bandwidth_to_q(self._o)
        self._changed()

    @property
    def c(self) -> float:
        """Cut/boost in dB."""
        return self._c

    @c.setter
    def c(self, value: float) -> None:
        # G is taken from |c|; the sign only selects the inverted structure
        self._c = float(value)
        self._g = voltage_ratio(abs(self._c))
        self._invert_h = self._c < 0.0
        self._changed()

    @property
    def sampling_frequency_hz(self) -> float:
        return self._sampling_frequency_hz

    @sampling_frequency_hz.setter
    def sampling_frequency_hz(self, value: float) -> None:
        self._sampling_frequency_hz = validate_sampling_frequency(value)
        self._changed()

    @property
    def invert_h(self) -> bool:
        """True when the inverse (cut) structure is stored."""
        return self._invert_h

    @property
    def w(self) -> float:
        return self._w

    @property
    def q(self) -> float:
        return self._q

    @property
    def g(self) -> float:
        return self._g

    @property
    def section(self) -> BiquadSection:
        """Cached digital coefficients."""
        return self._section

    @property
    def sections(self) -> tuple[BiquadSection, ...]:
        return (self._section,)

    def set_parameters(
        self,
        bypassed: bool,
        f: float,
        o: float,
        c: float,
    ) -> None:
        """Set all parameters with a single recompute."""
        with self.deferred():
            self.bypassed = bypassed
            self.f = f
            self.o = o
            self.c = c

    def set_from(self, other: "ParametricFilter") -> None:
        """Take over the parameters of another band (values, not references)."""
        with self.deferred():
            self._sampling_frequency_hz = other.sampling_frequency_hz
            self.set_parameters(other.bypassed, other.f, other.o, other.c)

    def reset(self) -> None:
        self.set_parameters(self.BYPASSED_DEFAULT, self.F_DEFAULT, self.O_DEFAULT, self.C_DEFAULT)

    def copy(self) -> "ParametricFilter":
        """Deep value copy; the copy shares no mutable state with this band."""
        return ParametricFilter(
            f=self._f,
            o=self._o,
            c=self._c,
            bypassed=self._bypassed,
            sampling_frequency_hz=self._sampling_frequency_hz,
        )

    # ------------------------------------------------------------
    # Coefficients
    # ------------------------------------------------------------

    def commit(self) -> None:
        """Recompute the cached biquad from the equation domain parameters."""
        warn_if_above_nyquist(self._f, self._sampling_frequency_hz, "Center frequency")

        # Theta is the angle to the pole frequency (radians), in the z-plane
        theta = pole_angle_radians(self._f, self._sampling_frequency_hz)

        G = self._g
        Q = self._q
        W = self._w

        P = W / math.tan(0.5 * theta)

        P2Q = P * P * Q
        GPW = G * P * W
        QW2 = Q * W * W
        PW = P * W

        B0 = P2Q + GPW + QW2
        B1 = (-2.0 * P2Q) + (2.0 * QW2)
        B2 = (P2Q - GPW) + QW2

        A0 = P2Q + PW + QW2
        A1 = B1
        A2 = (P2Q - PW) + QW2

        if not self._invert_h:
            self._section = BiquadSection(B0 / A0, B1 / A0, B2 / A0, 1.0, B1 / A0, A2 / A0)
        else:
            self._section = BiquadSection(A0 / B0, A1 / B0, A2 / B0, 1.0, B1 / B0, B2 / B0)

        logger.debug(
            "Parametric coefficients: f=%.2f o=%.3f c=%.2f invert=%s",
            self._f, self._o, self._c, self._invert_h,
        )

    # ------------------------------------------------------------
    # Response
    # ------------------------------------------------------------

    def response(self, frequency_hz: float) -> complex:
        """
        Complex (conjugated) response at a frequency, unity when bypassed.

        Frequencies at or below zero are clamped to EPSILON_SMALL.
        """
        if self._bypassed:
            return 1.0 + 0.0j

        f_adjusted = clamp_frequency(frequency_hz)

        z = to_z_domain(f_adjusted, self._sampling_frequency_hz)
        z_squared = z * z

        h = evaluate_biquad_cascade(z, z_squared, self.sections)
        return h.conjugate()

    def response_array(self, frequencies: np.ndarray) -> np.ndarray:
        """Vectorized response() over an array of frequencies."""
        frequencies = np.asarray(frequencies, dtype=float)
        if self._bypassed:
            return np.ones(frequencies.shape, dtype=complex)

        z = to_z_domain_array(np.maximum(frequencies, EPSILON_SMALL), self._sampling_frequency_hz)
        h = evaluate_biquad_cascade_array(z, z * z, self.sections)
        return np.conj(h)

    # ------------------------------------------------------------
    # Mode queries
    # ------------------------------------------------------------

    def is_active_eq_mode(self) -> bool:
        """Not bypassed and carrying a non-negligible cut or boost."""
        if self._bypassed:
            return False
        fuzzy_c = np.float32(self._c)
        return bool((fuzzy_c <= -GAIN_EPSILON) or (fuzzy_c >= GAIN_EPSILON))

    def is_eq_boost_mode(self) -> bool:
        """Not bypassed and boosting."""
        if self._bypassed:
            return False
        return bool(np.float32(self._c) >= GAIN_EPSILON)

    def is_non_default_eq_mode(self) -> bool:
        return (
            self._bypassed != self.BYPASSED_DEFAULT
            or self._f != self.F_DEFAULT
            or self._o != self.O_DEFAULT
            or self._c != self.C_DEFAULT
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParametricFilter):
            return NotImplemented
        return (
            self._bypassed == other._bypassed
            and self._f == other._f
            and self._o == other._o
            and self._c == other._c
            and self._sampling_frequency_hz == other._sampling_frequency_hz
        )

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"ParametricFilter(f={self._f!r}, o={self._o!r}, c={self._c!r}, "
            f"bypassed={self._bypassed!r}, sampling_frequency_hz={self._sampling_frequency_hz!r})"
        )
