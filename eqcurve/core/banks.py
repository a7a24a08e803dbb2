"""
Filter Banks

Fixed-size ordered collections of same-kind filters with one aggregate
bypass flag.

Technical assumptions:
- Aggregate bypass forces a unity composite response; otherwise the
  composite is the product of member responses (each folding in its own
  bypass), multiplied in array order for reproducible rounding
- Members are always owned by the bank: anything stored into a bank is
  copied by value, and copies of a bank never share members
- The number of members is fixed at construction
- Members are judged against their own class defaults (1 kHz parametric,
  100 Hz all-pass), so bands placed elsewhere count as non-default; only
  the bank remembers the center frequencies and restores them on reset()
"""

import logging
from typing import Iterator, Optional, Sequence, Union
import numpy as np

from .all_pass import AllPassFilter
from .filter_types import FilterKind
from .parametric import ParametricFilter
from .transform import DEFAULT_SAMPLING_FREQUENCY_HZ, validate_sampling_frequency

logger = logging.getLogger(__name__)


# Center frequencies of the general-purpose banks (Hz)
GENERAL_PARAMETRIC_CENTER_FREQUENCIES = (
    32.0, 63.0, 125.0, 250.0, 500.0, 1000.0, 2000.0, 4000.0, 8000.0, 16000.0,
)
GENERAL_ALL_PASS_CENTER_FREQUENCIES = (32.0, 64.0, 128.0)

# Bands reset by GeneralParametricFilters.reset_upper_filters()
FIRST_UPPER_PARAMETRIC_FILTER = 5

BankMember = Union[ParametricFilter, AllPassFilter]


class FilterBank:
    """
    Ordered bank of filters of one kind.

    Subclasses set filter_class and BYPASSED_DEFAULT.
    """

    filter_class: type = ParametricFilter
    BYPASSED_DEFAULT = False

    def __init__(
        self,
        center_frequencies: Optional[Sequence[float]] = None,
        filters: Optional[Sequence[BankMember]] = None,
        bypassed: Optional[bool] = None,
        sampling_frequency_hz: float = DEFAULT_SAMPLING_FREQUENCY_HZ,
    ):
        """
        Initialize a bank from center frequencies or from existing filters.

        Args:
            center_frequencies: One default member per frequency (Hz)
            filters: Members to copy (by value) into the bank
            bypassed: Aggregate bypass (default: BYPASSED_DEFAULT)
            sampling_frequency_hz: Sampling frequency for members built
                from center frequencies

        Raises:
            ValueError: Neither or both of center_frequencies and filters given
            TypeError: A filter does not match the bank's filter class
        """
        if (center_frequencies is None) == (filters is None):
            raise ValueError("Provide exactly one of center_frequencies or filters")

        self._bypassed = self.BYPASSED_DEFAULT if bypassed is None else bool(bypassed)

        if filters is not None:
            for filt in filters:
                self._check_member(filt)
            self._filters = [filt.copy() for filt in filters]
            self._center_frequencies = tuple(filt.f for filt in self._filters)
        else:
            sampling_frequency_hz = validate_sampling_frequency(sampling_frequency_hz)
            self._center_frequencies = tuple(float(f) for f in center_frequencies)
            self._filters = [
                self.filter_class.at_frequency(f, sampling_frequency_hz)
                for f in self._center_frequencies
            ]

    def _check_member(self, filt: object) -> None:
        if not isinstance(filt, self.filter_class):
            raise TypeError(
                f"{type(self).__name__} holds {self.filter_class.__name__} members, "
                f"got {type(filt).__name__}"
            )

    # ------------------------------------------------------------
    # Container protocol
    # ------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._filters)

    def __getitem__(self, index: int) -> BankMember:
        return self._filters[index]

    def __iter__(self) -> Iterator[BankMember]:
        return iter(self._filters)

    @property
    def kind(self) -> FilterKind:
        return self.filter_class.kind

    @property
    def number_of_filters(self) -> int:
        return len(self._filters)

    @property
    def center_frequencies(self) -> tuple[float, ...]:
        """Member frequencies restored by reset()."""
        return self._center_frequencies

    @property
    def filters(self) -> tuple[BankMember, ...]:
        return tuple(self._filters)

    @property
    def bypassed(self) -> bool:
        """Aggregate bypass of the whole bank."""
        return self._bypassed

    @bypassed.setter
    def bypassed(self, value: bool) -> None:
        self._bypassed = bool(value)

    @property
    def sampling_frequency_hz(self) -> float:
        return self._filters[0].sampling_frequency_hz if self._filters else DEFAULT_SAMPLING_FREQUENCY_HZ

    @sampling_frequency_hz.setter
    def sampling_frequency_hz(self, value: float) -> None:
        value = validate_sampling_frequency(value)
        for filt in self._filters:
            filt.sampling_frequency_hz = value

    # ------------------------------------------------------------
    # Response
    # ------------------------------------------------------------

    def response(
        self,
        frequency_hz: float,
        calculate_all_enabled_filters_override: bool = False,
    ) -> complex:
        """
        Composite (conjugated) response of all members.

        Args:
            frequency_hz: Evaluation frequency in Hz
            calculate_all_enabled_filters_override: Ignore the aggregate
                bypass and multiply every individually enabled member

        Returns:
            Unity when the bank is bypassed, else the product of members
        """
        h = 1.0 + 0.0j

        if self._bypassed and not calculate_all_enabled_filters_override:
            return h

        for filt in self._filters:
            h *= filt.response(frequency_hz)

        return h

    def response_array(
        self,
        frequencies: np.ndarray,
        calculate_all_enabled_filters_override: bool = False,
    ) -> np.ndarray:
        """Vectorized response() over an array of frequencies."""
        frequencies = np.asarray(frequencies, dtype=float)
        h = np.ones(frequencies.shape, dtype=complex)

        if self._bypassed and not calculate_all_enabled_filters_override:
            return h

        for filt in self._filters:
            h = h * filt.response_array(frequencies)

        return h

    # ------------------------------------------------------------
    # Aggregate queries
    # ------------------------------------------------------------

    def is_active_eq_mode(self) -> bool:
        """Bank enabled and at least one member active."""
        if self._bypassed:
            return False
        return any(filt.is_active_eq_mode() for filt in self._filters)

    def is_eq_boost_mode(self) -> bool:
        """Bank enabled and at least one member boosting."""
        if self._bypassed:
            return False
        return any(filt.is_eq_boost_mode() for filt in self._filters)

    def is_all_bypassed(self) -> bool:
        return all(filt.bypassed for filt in self._filters)

    def is_all_enabled(self) -> bool:
        return not any(filt.bypassed for filt in self._filters)

    def is_non_default_eq_mode(self) -> bool:
        if self._bypassed != self.BYPASSED_DEFAULT:
            return True
        return any(filt.is_non_default_eq_mode() for filt in self._filters)

    # ------------------------------------------------------------
    # Bulk mutators
    # ------------------------------------------------------------

    def set_all_bypassed(self, bypassed: bool) -> None:
        """Set every member's own bypass flag (the aggregate flag is untouched)."""
        for filt in self._filters:
            filt.bypassed = bypassed

    def set_filter(
        self,
        index: int,
        filt: BankMember,
        ignore_if_inactive: bool = False,
    ) -> None:
        """
        Store the values of a filter into the member at index.

        Args:
            index: Member index
            filt: Source filter (never aliased)
            ignore_if_inactive: Skip the write when the source is not active
        """
        self._check_member(filt)
        if ignore_if_inactive and not filt.is_active_eq_mode():
            return
        self._filters[index].set_from(filt)

    def copy_from(self, other: "FilterBank", ignore_inactive: bool = False) -> None:
        """
        Copy another bank into this one, by value.

        With ignore_inactive only the active members of the source are
        merged in and this bank's aggregate bypass is left as it is.
        """
        if not ignore_inactive:
            self._bypassed = other.bypassed

        number_to_copy = min(len(self), len(other))
        if number_to_copy != len(other):
            logger.warning(
                "Copying %d of %d filters into a bank of %d",
                number_to_copy, len(other), len(self),
            )

        for index in range(number_to_copy):
            self.set_filter(index, other[index], ignore_if_inactive=ignore_inactive)

    def reset(self) -> None:
        """Restore the aggregate bypass and put every member back at its center frequency."""
        self._bypassed = self.BYPASSED_DEFAULT
        for index in range(len(self._filters)):
            self._reset_member(index)

    def _reset_member(self, index: int) -> None:
        filt = self._filters[index]
        with filt.deferred():
            filt.reset()
            filt.f = self._center_frequencies[index]

    def copy(self) -> "FilterBank":
        clone = self.__class__.__new__(self.__class__)
        clone._bypassed = self._bypassed
        clone._center_frequencies = self._center_frequencies
        clone._filters = [filt.copy() for filt in self._filters]
        return clone

    def __copy__(self):
        return self.copy()

    def __deepcopy__(self, memo):
        return self.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FilterBank) or other.filter_class is not self.filter_class:
            return NotImplemented
        return self._bypassed == other._bypassed and self._filters == other._filters

    __hash__ = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(bypassed={self._bypassed!r}, filters={self._filters!r})"


class ParametricFilterBank(FilterBank):
    """Bank of parametric bands; enabled by default, since bands start flat."""

    filter_class = ParametricFilter
    BYPASSED_DEFAULT = False


class AllPassFilterBank(FilterBank):
    """Bank of all-pass bands; bypassed by default."""

    filter_class = AllPassFilter
    BYPASSED_DEFAULT = True


class GeneralParametricFilters(ParametricFilterBank):
    """Ten octave-spaced parametric bands from 32 Hz to 16 kHz."""

    def __init__(
        self,
        bypassed: Optional[bool] = None,
        sampling_frequency_hz: float = DEFAULT_SAMPLING_FREQUENCY_HZ,
    ):
        super().__init__(
            center_frequencies=GENERAL_PARAMETRIC_CENTER_FREQUENCIES,
            bypassed=bypassed,
            sampling_frequency_hz=sampling_frequency_hz,
        )

    def reset_upper_filters(self) -> None:
        """Reset bands 5 to 9 (1 kHz and up) to their defaults."""
        for index in range(FIRST_UPPER_PARAMETRIC_FILTER, len(self._filters)):
            self._reset_member(index)


class GeneralAllPassFilters(AllPassFilterBank):
    """Three all-pass bands at 32, 64 and 128 Hz."""

    def __init__(
        self,
        bypassed: Optional[bool] = None,
        sampling_frequency_hz: float = DEFAULT_SAMPLING_FREQUENCY_HZ,
    ):
        super().__init__(
            center_frequencies=GENERAL_ALL_PASS_CENTER_FREQUENCIES,
            bypassed=bypassed,
            sampling_frequency_hz=sampling_frequency_hz,
        )
