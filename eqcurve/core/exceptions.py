"""Exception types raised by the filter-response core."""


class EqCurveError(Exception):
    """Base class for errors raised by eqcurve."""


class FilterCatalogError(EqCurveError, ValueError):
    """
    A filter family outside the prototype catalog reached coefficient derivation.

    This is a programming or configuration defect, never a runtime condition,
    so it is always raised rather than defaulted.
    """

    def __init__(self, family: object):
        self.family = family
        super().__init__(f"Unexpected filter family: {family!r}")
