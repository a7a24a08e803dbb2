"""
Channel Processing

Complete processing chain of one output channel: mute, gain, delay, a
high pass, a low pass, a parametric bank and an all-pass bank.

Technical assumptions:
- A muted channel has zero response
- Delay follows the filters' conjugate convention: exp(+i·2π·f·t)
- Gain and delay do not count as EQ; only the filters do
"""

import cmath
import logging
from typing import Optional
import numpy as np

from .banks import AllPassFilterBank, GeneralAllPassFilters, GeneralParametricFilters, ParametricFilterBank
from .high_low_pass import HighLowPassFilter
from .response import FrequencySpec, ResponseCurve, as_frequencies
from .transform import EPSILON_SMALL, TWO_PI, clamp_frequency, validate_sampling_frequency, voltage_ratio

logger = logging.getLogger(__name__)


class ChannelProcessing:
    """
    Signal chain of one channel.

    Usage:
        channel = ChannelProcessing(gain_db=-3.0, delay_ms=1.5)
        channel.parametric_filters[3].c = -6.0
        curve = channel.response_curve(SweepConfig())
    """

    MUTED_DEFAULT = False
    GAIN_DB_DEFAULT = 0.0
    DELAY_MS_DEFAULT = 0.0

    def __init__(
        self,
        muted: bool = MUTED_DEFAULT,
        gain_db: float = GAIN_DB_DEFAULT,
        delay_ms: float = DELAY_MS_DEFAULT,
        high_pass: Optional[HighLowPassFilter] = None,
        low_pass: Optional[HighLowPassFilter] = None,
        parametric_filters: Optional[ParametricFilterBank] = None,
        all_pass_filters: Optional[AllPassFilterBank] = None,
    ):
        """
        Initialize a channel; missing stages get their default filters.

        Filters and banks passed in are copied, never shared.
        """
        self.muted = muted
        self.gain_db = gain_db
        self.delay_ms = delay_ms

        self.high_pass = high_pass.copy() if high_pass is not None else HighLowPassFilter.high_pass()
        self.low_pass = low_pass.copy() if low_pass is not None else HighLowPassFilter.low_pass()
        self.parametric_filters = (
            parametric_filters.copy() if parametric_filters is not None else GeneralParametricFilters()
        )
        self.all_pass_filters = (
            all_pass_filters.copy() if all_pass_filters is not None else GeneralAllPassFilters()
        )

    @property
    def muted(self) -> bool:
        return self._muted

    @muted.setter
    def muted(self, value: bool) -> None:
        self._muted = bool(value)

    @property
    def gain_db(self) -> float:
        return self._gain_db

    @gain_db.setter
    def gain_db(self, value: float) -> None:
        self._gain_db = float(value)

    @property
    def delay_ms(self) -> float:
        return self._delay_ms

    @delay_ms.setter
    def delay_ms(self, value: float) -> None:
        value = float(value)
        if value < 0:
            raise ValueError(f"delay_ms must be non-negative, got: {value}")
        self._delay_ms = value

    @property
    def parametric_bypassed(self) -> bool:
        """Aggregate bypass of the parametric bank."""
        return self.parametric_filters.bypassed

    @parametric_bypassed.setter
    def parametric_bypassed(self, value: bool) -> None:
        self.parametric_filters.bypassed = value

    @property
    def filters(self) -> tuple:
        """Filter stages in evaluation order."""
        return (self.high_pass, self.low_pass, self.parametric_filters, self.all_pass_filters)

    @property
    def sampling_frequency_hz(self) -> float:
        return self.high_pass.sampling_frequency_hz

    @sampling_frequency_hz.setter
    def sampling_frequency_hz(self, value: float) -> None:
        value = validate_sampling_frequency(value)
        for stage in self.filters:
            stage.sampling_frequency_hz = value
        logger.debug("Channel sampling frequency set to %.1f Hz", value)

    # ------------------------------------------------------------
    # Response
    # ------------------------------------------------------------

    def response(
        self,
        frequency_hz: float,
        calculate_all_enabled_filters_override: bool = False,
    ) -> complex:
        """
        Complex (conjugated) response of the whole channel.

        Args:
            frequency_hz: Evaluation frequency in Hz
            calculate_all_enabled_filters_override: Evaluate every enabled
                bank member even when its bank is bypassed

        Returns:
            Zero when muted, else gain · delay · filters
        """
        if self._muted:
            return 0.0 + 0.0j

        f_adjusted = clamp_frequency(frequency_hz)
        override = calculate_all_enabled_filters_override

        h = complex(voltage_ratio(self._gain_db))
        h *= cmath.exp(1j * TWO_PI * f_adjusted * self._delay_ms / 1000.0)
        h *= self.high_pass.response(f_adjusted)
        h *= self.low_pass.response(f_adjusted)
        h *= self.parametric_filters.response(f_adjusted, override)
        h *= self.all_pass_filters.response(f_adjusted, override)
        return h

    def response_array(
        self,
        frequencies: np.ndarray,
        calculate_all_enabled_filters_override: bool = False,
    ) -> np.ndarray:
        """Vectorized response() over an array of frequencies."""
        frequencies = np.maximum(np.asarray(frequencies, dtype=float), EPSILON_SMALL)
        if self._muted:
            return np.zeros(frequencies.shape, dtype=complex)

        override = calculate_all_enabled_filters_override

        h = np.full(frequencies.shape, voltage_ratio(self._gain_db), dtype=complex)
        h = h * np.exp(1j * TWO_PI * frequencies * self._delay_ms / 1000.0)
        h = h * self.high_pass.response_array(frequencies)
        h = h * self.low_pass.response_array(frequencies)
        h = h * self.parametric_filters.response_array(frequencies, override)
        h = h * self.all_pass_filters.response_array(frequencies, override)
        return h

    def response_curve(
        self,
        frequencies: FrequencySpec,
        calculate_all_enabled_filters_override: bool = False,
    ) -> ResponseCurve:
        """Sweep the channel over a SweepConfig or explicit frequencies."""
        freqs = as_frequencies(frequencies)
        return ResponseCurve(freqs, self.response_array(freqs, calculate_all_enabled_filters_override))

    # ------------------------------------------------------------
    # Mode queries
    # ------------------------------------------------------------

    def is_active_eq_mode(
        self,
        calculate_all_enabled_filters_override: bool = False,
        ignore_muted_filters: bool = False,
    ) -> bool:
        """
        Whether any filter stage changes the response.

        Args:
            calculate_all_enabled_filters_override: Count active members of
                bypassed banks too
            ignore_muted_filters: Report the filters even when the channel
                is muted
        """
        if self._muted and not ignore_muted_filters:
            return False

        if self.high_pass.is_active_eq_mode() or self.low_pass.is_active_eq_mode():
            return True

        for bank in (self.parametric_filters, self.all_pass_filters):
            if calculate_all_enabled_filters_override:
                if any(filt.is_active_eq_mode() for filt in bank):
                    return True
            elif bank.is_active_eq_mode():
                return True

        return False

    def is_eq_boost_mode(self) -> bool:
        if self._muted:
            return False
        return self.parametric_filters.is_eq_boost_mode()

    def is_non_default_eq_mode(self) -> bool:
        return any(stage.is_non_default_eq_mode() for stage in self.filters)

    def reset(self) -> None:
        self.muted = self.MUTED_DEFAULT
        self.gain_db = self.GAIN_DB_DEFAULT
        self.delay_ms = self.DELAY_MS_DEFAULT
        for stage in self.filters:
            stage.reset()

    def copy(self) -> "ChannelProcessing":
        return ChannelProcessing(
            muted=self._muted,
            gain_db=self._gain_db,
            delay_ms=self._delay_ms,
            high_pass=self.high_pass,
            low_pass=self.low_pass,
            parametric_filters=self.parametric_filters,
            all_pass_filters=self.all_pass_filters,
        )

    def __copy__(self):
        return self.copy()

    def __deepcopy__(self, memo):
        return self.copy()
