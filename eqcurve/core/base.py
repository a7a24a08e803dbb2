"""
Filter capability protocol and shared mutate/commit plumbing.

Every filter and filter bank is an AcousticalFilter: it produces a complex
response at a frequency and folds its own bypass state into that value.
The three filter variants do not share a base class for their state.
"""

from contextlib import contextmanager
from typing import Iterator, Protocol, runtime_checkable


@runtime_checkable
class AcousticalFilter(Protocol):
    """Anything that returns a complex amplitude/phase value at a frequency."""

    def response(self, frequency_hz: float) -> complex:
        ...

    def is_active_eq_mode(self) -> bool:
        ...

    def is_eq_boost_mode(self) -> bool:
        ...

    def is_non_default_eq_mode(self) -> bool:
        ...


class DeferredCommit:
    """
    Two-phase parameter updates: mutate, then commit once.

    Setters call _changed(); outside a deferred() block that recomputes the
    coefficient cache immediately, inside it the recompute waits for the
    block to exit. Subclasses implement commit().
    """

    _defer_depth: int = 0

    def commit(self) -> None:
        raise NotImplementedError

    @contextmanager
    def deferred(self) -> Iterator["DeferredCommit"]:
        """
        Batch several parameter writes into one recompute.

        Usage:
            with filt.deferred():
                filt.f = 250.0
                filt.o = 0.5
                filt.c = -3.0
            # one commit() here
        """
        self._defer_depth += 1
        try:
            yield self
        finally:
            self._defer_depth -= 1
            if self._defer_depth == 0:
                self.commit()

    @property
    def is_deferred(self) -> bool:
        return self._defer_depth > 0

    def _changed(self) -> None:
        if self._defer_depth == 0:
            self.commit()

    def __copy__(self):
        return self.copy()

    def __deepcopy__(self, memo):
        return self.copy()

    def copy(self):
        raise NotImplementedError
