"""
Frequency-Domain Transform

Shared math for every filter kind: pole angles, z-domain mapping, the
bilinear transform of analog biquad prototypes and the evaluation of
cascaded digital biquad sections.

Technical assumptions:
- Digital sections use negative powers of z:
  H(z) = (b0 + b1·z⁻¹ + b2·z⁻²) / (a0 + a1·z⁻¹ + a2·z⁻²)
- Analog sections are coefficient triples of (s², s, 1) with s normalized
  to the pole frequency, for numerator and denominator
- Pre-warping is built into the substitution via tan(θ/2), so the critical
  frequency lands exactly on θ after the transform
- A section whose denominator evaluates to exactly zero contributes unity,
  so cascaded products never divide by zero
"""

import math
import warnings
from typing import NamedTuple, Sequence
import numpy as np


# Sampling frequency used when a filter is created without one (Hz)
DEFAULT_SAMPLING_FREQUENCY_HZ = 48000.0

# Queried frequencies are floored to this value before any division
EPSILON_SMALL = 1.0e-6

TWO_PI = 2.0 * math.pi

AnalogTriple = tuple[float, float, float]
AnalogSection = tuple[AnalogTriple, AnalogTriple]


class BiquadSection(NamedTuple):
    """
    One digital biquad section in negative powers of z.

    After normalization a0 is 1.0 (unless the raw a0 was exactly zero).
    """
    b0: float
    b1: float
    b2: float
    a0: float
    a1: float
    a2: float

    @property
    def numerator(self) -> tuple[float, float, float]:
        return (self.b0, self.b1, self.b2)

    @property
    def denominator(self) -> tuple[float, float, float]:
        return (self.a0, self.a1, self.a2)

    def normalized(self) -> "BiquadSection":
        """Divide all coefficients by a0 (no-op when a0 is zero)."""
        a0 = self.a0
        if a0 == 0.0:
            return self
        return BiquadSection(*(coefficient / a0 for coefficient in self))


# Pass-through section (numerator equals denominator)
IDENTITY_ANALOG_SECTION: AnalogSection = ((0.0, 0.0, 1.0), (0.0, 0.0, 1.0))
UNITY_SECTION = BiquadSection(1.0, 0.0, 0.0, 1.0, 0.0, 0.0)


# ============================================================
# ACOUSTICS HELPERS
# ============================================================

def angular_frequency_radians(freq_hz: float) -> float:
    """Angular frequency ω = 2πf (rad/s)."""
    return TWO_PI * freq_hz


def bandwidth_to_q(octaves: float) -> float:
    """
    Convert a bandwidth in octaves to the quality factor Q.

    Q = sqrt(2^N) / (2^N - 1)
    """
    two_to_n = 2.0 ** octaves
    return math.sqrt(two_to_n) / (two_to_n - 1.0)


def voltage_ratio(gain_db: float) -> float:
    """Linear amplitude ratio for a level in dB."""
    return 10.0 ** (gain_db / 20.0)


def clamp_frequency(freq_hz: float) -> float:
    """Floor a queried frequency to EPSILON_SMALL (zero and negatives included)."""
    return max(freq_hz, EPSILON_SMALL)


def validate_sampling_frequency(sampling_hz: float) -> float:
    """Return the sampling frequency as float, rejecting non-positive values."""
    sampling_hz = float(sampling_hz)
    if not sampling_hz > 0.0:
        raise ValueError(f"Sampling frequency must be positive, got: {sampling_hz}")
    return sampling_hz


def warn_if_above_nyquist(freq_hz: float, sampling_hz: float, name: str = "Frequency") -> None:
    """Emit a UserWarning when a pole frequency is at or above Nyquist."""
    nyquist = sampling_hz / 2.0
    if freq_hz >= nyquist:
        warnings.warn(
            f"{name} {freq_hz} Hz is at or above Nyquist ({nyquist} Hz); "
            "the response will fold back.",
            UserWarning,
            stacklevel=3,
        )


# ============================================================
# Z-DOMAIN MAPPING
# ============================================================

def pole_angle_radians(freq_hz: float, sampling_hz: float) -> float:
    """Angle to the pole (radians) in the z-plane: θ = 2π·f/fs."""
    frequency_ratio = freq_hz / sampling_hz
    return TWO_PI * frequency_ratio


def to_z_domain(freq_hz: float, sampling_hz: float) -> complex:
    """Map a frequency (Hz) onto the unit circle: z = cos θ + i·sin θ."""
    theta = pole_angle_radians(freq_hz, sampling_hz)
    return complex(math.cos(theta), math.sin(theta))


def to_z_domain_array(frequencies: np.ndarray, sampling_hz: float) -> np.ndarray:
    """Vectorized to_z_domain for an array of frequencies."""
    theta = TWO_PI * np.asarray(frequencies, dtype=float) / sampling_hz
    return np.cos(theta) + 1j * np.sin(theta)


# ============================================================
# BILINEAR TRANSFORM
# ============================================================

def digital_pole_coefficients(
    eq_sin: float,
    one_minus_cos: float,
    one_plus_cos: float,
    analog: AnalogTriple,
) -> tuple[float, float, float]:
    """
    Bilinear substitution of one analog triple (s², s, 1).

    The redundant naming follows textbook derivations for easy checking.
    """
    A, B, C = analog
    x0 = (A * one_plus_cos) + (B * eq_sin) + (C * one_minus_cos)
    x1 = (-2.0 * A * one_plus_cos) + (2.0 * C * one_minus_cos)
    x2 = ((A * one_plus_cos) - (B * eq_sin)) + (C * one_minus_cos)
    return x0, x1, x2


def bilinear_transform(
    analog_sections: Sequence[AnalogSection],
    pole_angle: float,
) -> tuple[BiquadSection, ...]:
    """
    Transform analog biquad prototypes into digital sections.

    sin θ, 1 - cos θ and 1 + cos θ are computed once and shared by all
    sections. The result is NOT normalized; see normalize_sections().

    Args:
        analog_sections: Sequence of (numerator, denominator) analog triples
        pole_angle: Pole angle θ in radians

    Returns:
        One digital section per analog section, in the same order
    """
    eq_sin = math.sin(pole_angle)
    eq_cos = math.cos(pole_angle)
    one_minus_cos = 1.0 - eq_cos
    one_plus_cos = 1.0 + eq_cos

    sections = []
    for numerator, denominator in analog_sections:
        b = digital_pole_coefficients(eq_sin, one_minus_cos, one_plus_cos, numerator)
        a = digital_pole_coefficients(eq_sin, one_minus_cos, one_plus_cos, denominator)
        sections.append(BiquadSection(*b, *a))

    return tuple(sections)


def normalize_sections(sections: Sequence[BiquadSection]) -> tuple[BiquadSection, ...]:
    """Normalize every section by its own leading denominator coefficient."""
    return tuple(section.normalized() for section in sections)


# ============================================================
# EVALUATION
# ============================================================

def quadratic_factor(
    z: complex,
    z_squared: complex,
    coefficients: Sequence[float],
) -> complex:
    """
    Evaluate c0 + c1/z + c2/z² (one numerator or denominator).

    Most software uses negative powers of z; firmware using positive powers
    needs the coefficients reversed.
    """
    c0, c1, c2 = coefficients
    return c0 + (c1 / z) + (c2 / z_squared)


def digital_biquad_response(z: complex, z_squared: complex, section: BiquadSection) -> complex:
    """Response of one section; unity if its denominator is exactly zero."""
    numerator = quadratic_factor(z, z_squared, section.numerator)
    denominator = quadratic_factor(z, z_squared, section.denominator)

    if denominator == 0:
        return 1.0 + 0.0j

    return numerator / denominator


def evaluate_biquad_cascade(
    z: complex,
    z_squared: complex,
    sections: Sequence[BiquadSection],
) -> complex:
    """Multiply the responses of all sections, in order."""
    result = 1.0 + 0.0j
    for section in sections:
        result *= digital_biquad_response(z, z_squared, section)
    return result


def evaluate_biquad_cascade_array(
    z: np.ndarray,
    z_squared: np.ndarray,
    sections: Sequence[BiquadSection],
) -> np.ndarray:
    """
    Vectorized evaluate_biquad_cascade for arrays of z.

    Same zero-denominator policy as the scalar path, element by element.
    """
    z = np.asarray(z, dtype=complex)
    z_squared = np.asarray(z_squared, dtype=complex)
    result = np.ones_like(z)

    for section in sections:
        b0, b1, b2, a0, a1, a2 = section
        numerator = b0 + b1 / z + b2 / z_squared
        denominator = a0 + a1 / z + a2 / z_squared
        ratio = np.ones_like(z)
        np.divide(numerator, denominator, out=ratio, where=denominator != 0)
        result = result * ratio

    return result
