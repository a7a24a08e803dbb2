"""
Response Curve Analysis

Sweeps filters, banks and channel processing over a frequency axis and
derives the quantities an EQ curve display needs.

Technical assumptions:
- Filter responses are conjugated (phase grows with delay), so
  group_delay_ms() takes the positive derivative of the unwrapped phase
- Logarithmic sweeps are the default, matching how EQ curves are plotted
- The SOS helpers use scipy's standard sign convention (not conjugated)
  and exist to cross-check the cascade against scipy.signal
"""

from dataclasses import dataclass
from typing import Iterable, Sequence, Union
import numpy as np
from scipy import signal

from .base import AcousticalFilter
from .transform import DEFAULT_SAMPLING_FREQUENCY_HZ, TWO_PI, BiquadSection


# ============================================================
# CONFIGURATION
# ============================================================

@dataclass
class SweepConfig:
    """Configuration for a response sweep."""
    sampling_frequency_hz: float = DEFAULT_SAMPLING_FREQUENCY_HZ
    f_min: float = 20.0              # Hz
    f_max: float = 20000.0           # Hz
    num_points: int = 512
    spacing: str = "log"             # "log" or "linear"

    def __post_init__(self):
        """Validate configuration parameters."""
        if self.sampling_frequency_hz <= 0:
            raise ValueError(f"sampling_frequency_hz must be positive, got: {self.sampling_frequency_hz}")

        if self.spacing not in ("log", "linear"):
            raise ValueError(f"spacing must be 'log' or 'linear', got: {self.spacing}")

        if self.f_min < 0 or (self.spacing == "log" and self.f_min == 0):
            raise ValueError(f"f_min must be positive for {self.spacing} spacing, got: {self.f_min}")

        if self.f_max <= self.f_min:
            raise ValueError(f"f_max ({self.f_max}) must be greater than f_min ({self.f_min})")

        nyquist = self.sampling_frequency_hz / 2
        if self.f_max > nyquist:
            raise ValueError(f"f_max ({self.f_max}) exceeds Nyquist frequency ({nyquist})")

        if self.num_points < 2:
            raise ValueError(f"num_points must be at least 2, got: {self.num_points}")


FrequencySpec = Union[SweepConfig, Sequence[float], np.ndarray]


def frequency_axis(config: SweepConfig) -> np.ndarray:
    """Frequencies (Hz) of a sweep, including both ends."""
    if config.spacing == "log":
        return np.geomspace(config.f_min, config.f_max, config.num_points)
    return np.linspace(config.f_min, config.f_max, config.num_points)


def as_frequencies(frequencies: FrequencySpec) -> np.ndarray:
    """Frequency axis of a SweepConfig, or explicit frequencies as an array."""
    if isinstance(frequencies, SweepConfig):
        return frequency_axis(frequencies)
    return np.asarray(frequencies, dtype=float)


# ============================================================
# RESPONSE CURVE
# ============================================================

@dataclass
class ResponseCurve:
    """
    Complex response sampled on a frequency axis.

    Attributes:
        frequencies: Frequency axis in Hz
        response: Complex (conjugated) response per frequency
    """
    frequencies: np.ndarray
    response: np.ndarray

    def __post_init__(self):
        self.frequencies = np.asarray(self.frequencies, dtype=float)
        self.response = np.asarray(self.response, dtype=complex)
        if self.frequencies.shape != self.response.shape:
            raise ValueError(
                f"frequencies {self.frequencies.shape} and response "
                f"{self.response.shape} must have the same shape"
            )

    def magnitude(self) -> np.ndarray:
        return np.abs(self.response)

    def magnitude_db(self, min_db: float = -120.0) -> np.ndarray:
        """
        Magnitude in dB, floored at min_db.

        Args:
            min_db: Floor applied before the log (avoids -inf for muted curves)
        """
        floor = 10.0 ** (min_db / 20.0)
        return 20.0 * np.log10(np.maximum(self.magnitude(), floor))

    def phase_deg(self) -> np.ndarray:
        """Wrapped phase in degrees (-180 to 180)."""
        return np.degrees(np.angle(self.response))

    def unwrapped_phase_deg(self) -> np.ndarray:
        return np.degrees(np.unwrap(np.angle(self.response)))

    def group_delay_ms(self) -> np.ndarray:
        """
        Group delay in ms from the unwrapped phase.

        The sweep must be dense enough that the phase moves less than π
        between neighbouring points.
        """
        phase = np.unwrap(np.angle(self.response))
        omega = TWO_PI * self.frequencies
        return 1000.0 * np.gradient(phase, omega)

    def combine(self, other: "ResponseCurve") -> "ResponseCurve":
        """Series combination (product) of two curves on the same axis."""
        if not np.array_equal(self.frequencies, other.frequencies):
            raise ValueError("Cannot combine response curves with different frequency axes")
        return ResponseCurve(self.frequencies.copy(), self.response * other.response)

    def __len__(self) -> int:
        return len(self.frequencies)


def filter_response_array(filt: AcousticalFilter, frequencies: np.ndarray) -> np.ndarray:
    """Vectorized response of any filter, falling back to per-frequency calls."""
    response_array = getattr(filt, "response_array", None)
    if response_array is not None:
        return response_array(frequencies)
    return np.array([filt.response(float(f)) for f in frequencies], dtype=complex)


def compute_response_curve(filt: AcousticalFilter, frequencies: FrequencySpec) -> ResponseCurve:
    """
    Sweep a filter, bank or channel over a frequency axis.

    Args:
        filt: Anything implementing AcousticalFilter
        frequencies: SweepConfig or explicit frequencies in Hz

    Returns:
        ResponseCurve of the filter
    """
    freqs = as_frequencies(frequencies)
    return ResponseCurve(freqs, filter_response_array(filt, freqs))


def compute_composite_curve(
    filters: Iterable[AcousticalFilter],
    frequencies: FrequencySpec,
) -> ResponseCurve:
    """Product of several filters' responses, multiplied in the given order."""
    freqs = as_frequencies(frequencies)
    h = np.ones(freqs.shape, dtype=complex)
    for filt in filters:
        h = h * filter_response_array(filt, freqs)
    return ResponseCurve(freqs, h)


# ============================================================
# SCIPY CROSS-CHECKS
# ============================================================

def to_sos(sections: Sequence[BiquadSection]) -> np.ndarray:
    """Stack sections into a scipy second-order-sections array of shape (n, 6)."""
    return np.array([tuple(section) for section in sections], dtype=float).reshape(-1, 6)


def to_transfer_function(sections: Sequence[BiquadSection]) -> tuple[np.ndarray, np.ndarray]:
    """Expand cascaded sections into one (b, a) transfer function."""
    return signal.sos2tf(to_sos(sections))


def sos_frequency_response(
    sos: np.ndarray,
    frequencies: np.ndarray,
    sampling_frequency_hz: float = DEFAULT_SAMPLING_FREQUENCY_HZ,
) -> np.ndarray:
    """Complex response of an SOS cascade via scipy (standard sign convention)."""
    _, h = signal.sosfreqz(sos, worN=np.asarray(frequencies, dtype=float), fs=sampling_frequency_hz)
    return h


def sos_group_delay(
    sos: np.ndarray,
    frequencies: np.ndarray,
    sampling_frequency_hz: float = DEFAULT_SAMPLING_FREQUENCY_HZ,
) -> np.ndarray:
    """
    Group delay of an SOS cascade in ms.

    Computed per section and summed, which stays well conditioned for
    high orders where the expanded polynomial does not.
    """
    frequencies = np.asarray(frequencies, dtype=float)
    delay_samples = np.zeros(frequencies.shape)
    for row in np.atleast_2d(sos):
        _, gd = signal.group_delay((row[:3], row[3:]), w=frequencies, fs=sampling_frequency_hz)
        delay_samples += gd
    return 1000.0 * delay_samples / sampling_frequency_hz
