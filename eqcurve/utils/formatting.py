"""
Formatierungsfunktionen für Anzeige.

Konvertiert Filtertypen und numerische Werte in lesbare Strings
und liest ältere Filterbezeichnungen wieder ein.
"""

import math
from typing import Optional

from eqcurve.core.filter_types import (
    DEFAULT_FILTER_FAMILY,
    ElectronicFilterType,
    FilterFamily,
)


FILTER_SLOPE_UNITS = " dB/Octave"

# Butterworth: 6 dB/Oktave pro Filterordnung
BUTTERWORTH_DB_PER_ORDER = 6


_FIXED_FAMILY_LABELS = {
    FilterFamily.SECOND_ORDER_HIGH_PASS: "2nd Order High Pass",
    FilterFamily.ELLIPTICAL_HIGH_PASS: "Elliptical High Pass",
    FilterFamily.LOW_PASS: "Low Pass",
}

# Ältere Bezeichnungen (Terminologie wurde irgendwann geändert)
_LEGACY_FAMILY_ALIASES = {
    "2nd order high pass": FilterFamily.SECOND_ORDER_HIGH_PASS,
    "highpass": FilterFamily.SECOND_ORDER_HIGH_PASS,
    "elliptical high pass": FilterFamily.ELLIPTICAL_HIGH_PASS,
    "ellipticalhighpass": FilterFamily.ELLIPTICAL_HIGH_PASS,
    "low pass": FilterFamily.LOW_PASS,
    "lowpass": FilterFamily.LOW_PASS,
}

_ELECTRONIC_TYPE_LABELS = {
    ElectronicFilterType.HIGH_LOW_PASS: "High/Low Pass",
    ElectronicFilterType.LOW_PASS: "Low Pass",
    ElectronicFilterType.HIGH_PASS: "High Pass",
}


# ============================================================
# FLANKENSTEILHEIT
# ============================================================

def butterworth_slope_db(order: int) -> int:
    """
    Flankensteilheit eines Butterworth-Filters.

    Args:
        order: Filterordnung

    Returns:
        Steilheit in dB/Oktave (6 dB pro Ordnung)
    """
    return order * BUTTERWORTH_DB_PER_ORDER


def butterworth_slope_order(slope_db: int) -> int:
    """Filterordnung zu einer Steilheit in dB/Oktave (abgerundet)."""
    return math.floor(slope_db / BUTTERWORTH_DB_PER_ORDER)


def filter_slope_label(slope_db: int) -> str:
    """Beschriftung einer Steilheit (z.B. "24 dB/Octave")."""
    return f"{slope_db}{FILTER_SLOPE_UNITS}"


def parse_filter_slope_db(label: str) -> int:
    """
    Lese die Steilheit aus einer Beschriftung.

    Args:
        label: z.B. "24 dB/Octave"

    Raises:
        ValueError: Beschriftung enthält keine ganze Zahl vor der Einheit
    """
    return int(label.split(FILTER_SLOPE_UNITS)[0].strip())


# ============================================================
# FILTERTYPEN
# ============================================================

def family_label(family: FilterFamily) -> str:
    """
    Anzeigename eines Filterprototyps.

    Butterworth- und Linkwitz-Riley-Filter werden über ihre Steilheit
    benannt; Hoch- und Tiefpass gleicher Ordnung teilen sich den Namen.

    Args:
        family: Filterprototyp

    Returns:
        Formatierter String (z.B. "Butterworth 24 dB/Octave")
    """
    if family in _FIXED_FAMILY_LABELS:
        return _FIXED_FAMILY_LABELS[family]

    if family.name.startswith("BUTTERWORTH_"):
        return "Butterworth " + filter_slope_label(butterworth_slope_db(family.order))

    if family.name.startswith("LINKWITZ_RILEY_"):
        return "Linkwitz-Riley " + filter_slope_label(butterworth_slope_db(family.order))

    raise ValueError(f"Unexpected FilterFamily {family!r}")


def parse_family_label(label: Optional[str], high_pass: bool) -> FilterFamily:
    """
    Filterprototyp zu einem Anzeigenamen oder einer älteren Bezeichnung.

    Args:
        label: Anzeigename, Alias oder Enum-Name (mit Leer- oder
            Unterstrichen); None ergibt den Standardprototyp
        high_pass: Wählt bei Steilheitsnamen den Hochpass statt Tiefpass

    Returns:
        Passender FilterFamily-Wert

    Raises:
        ValueError: Bezeichnung ist unbekannt
    """
    if label is None:
        return DEFAULT_FILTER_FAMILY

    key = label.strip().lower()
    if key in _LEGACY_FAMILY_ALIASES:
        return _LEGACY_FAMILY_ALIASES[key]

    for family in FilterFamily:
        if family in _FIXED_FAMILY_LABELS or family.is_high_pass != high_pass:
            continue
        if family_label(family).lower() == key:
            return family

    name = key.upper().replace(" ", "_")
    try:
        return FilterFamily[name]
    except KeyError:
        raise ValueError(f"Unknown filter family: {label!r}") from None


def electronic_type_label(electronic_type: ElectronicFilterType) -> str:
    """Anzeigename eines elektronischen Filtertyps (z.B. "High/Low Pass")."""
    return _ELECTRONIC_TYPE_LABELS[electronic_type]


def legacy_enum_string(value) -> str:
    """
    Enum-Name mit Leerzeichen statt Unterstrichen.

    Entspricht dem Format älterer Projektdateien (z.B. "BUTTERWORTH 4 LOW PASS").
    """
    return value.name.replace("_", " ")


# ============================================================
# ZAHLENWERTE
# ============================================================

def format_frequency(hz: float) -> str:
    """
    Formatiere Frequenz in lesbares Format.

    Args:
        hz: Frequenz in Hz

    Returns:
        Formatierter String (z.B. "1.5 kHz" oder "250 Hz")
    """
    if hz >= 1000:
        return f"{hz/1000:.1f} kHz"
    else:
        return f"{hz:.0f} Hz"


def format_db(db: float, precision: int = 1) -> str:
    """
    Formatiere dB-Wert.

    Args:
        db: Pegel in dB
        precision: Nachkommastellen

    Returns:
        Formatierter String (z.B. "-12.3 dB")
    """
    if db == float('-inf'):
        return "-∞ dB"
    return f"{db:.{precision}f} dB"


def format_gain(db: float, precision: int = 1) -> str:
    """
    Formatiere Anhebung/Absenkung mit Vorzeichen.

    Returns:
        Formatierter String (z.B. "+3.0 dB", "-6.0 dB", "0.0 dB")
    """
    if db > 0:
        return f"+{db:.{precision}f} dB"
    return format_db(db, precision)


def format_bandwidth(octaves: float) -> str:
    """Formatiere Bandbreite (z.B. "0.50 oct")."""
    return f"{octaves:.2f} oct"
