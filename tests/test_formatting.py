"""
Tests für die Formatierungsfunktionen.
"""

import pytest

from eqcurve.core.filter_types import ElectronicFilterType, FilterFamily
from eqcurve.utils.formatting import (
    butterworth_slope_db,
    butterworth_slope_order,
    electronic_type_label,
    family_label,
    filter_slope_label,
    format_bandwidth,
    format_db,
    format_frequency,
    format_gain,
    legacy_enum_string,
    parse_family_label,
    parse_filter_slope_db,
)


class TestFamilyLabels:
    """Tests für die Namen der Filterprototypen."""

    def test_fixed_labels(self):
        assert family_label(FilterFamily.SECOND_ORDER_HIGH_PASS) == "2nd Order High Pass"
        assert family_label(FilterFamily.ELLIPTICAL_HIGH_PASS) == "Elliptical High Pass"
        assert family_label(FilterFamily.LOW_PASS) == "Low Pass"

    def test_slope_labels(self):
        """Butterworth und Linkwitz-Riley über die Steilheit."""
        assert family_label(FilterFamily.BUTTERWORTH_4_LOW_PASS) == "Butterworth 24 dB/Octave"
        assert family_label(FilterFamily.BUTTERWORTH_4_HIGH_PASS) == "Butterworth 24 dB/Octave"
        assert family_label(FilterFamily.LINKWITZ_RILEY_2_HIGH_PASS) == "Linkwitz-Riley 12 dB/Octave"

    @pytest.mark.parametrize("family", list(FilterFamily))
    def test_round_trip(self, family):
        """Anzeigename und Richtung ergeben wieder den Prototyp."""
        assert parse_family_label(family_label(family), family.is_high_pass) is family

    @pytest.mark.parametrize("label, expected", [
        ("HighPass", FilterFamily.SECOND_ORDER_HIGH_PASS),
        ("EllipticalHighPass", FilterFamily.ELLIPTICAL_HIGH_PASS),
        ("LowPass", FilterFamily.LOW_PASS),
        ("  low pass ", FilterFamily.LOW_PASS),
    ])
    def test_legacy_aliases(self, label, expected):
        """Ältere Bezeichnungen werden erkannt."""
        assert parse_family_label(label, high_pass=False) is expected

    def test_none_is_default(self):
        """Fehlende Bezeichnung ergibt den Standard-Tiefpass."""
        assert parse_family_label(None, high_pass=True) is FilterFamily.LOW_PASS

    @pytest.mark.parametrize("label", [
        "BUTTERWORTH_4_LOW_PASS",
        "BUTTERWORTH 4 LOW PASS",
        "butterworth 4 low pass",
    ])
    def test_enum_names(self, label):
        """Enum-Namen mit Unter- oder Leerzeichen werden erkannt."""
        assert parse_family_label(label, high_pass=True) is FilterFamily.BUTTERWORTH_4_LOW_PASS

    def test_unknown_label(self):
        """Unbekannte Bezeichnungen führen zu ValueError."""
        with pytest.raises(ValueError):
            parse_family_label("Chebyshev 24 dB/Octave", high_pass=False)

    def test_legacy_enum_string(self):
        assert legacy_enum_string(FilterFamily.LINKWITZ_RILEY_4_LOW_PASS) == "LINKWITZ RILEY 4 LOW PASS"
        assert parse_family_label(
            legacy_enum_string(FilterFamily.LINKWITZ_RILEY_4_LOW_PASS), high_pass=False
        ) is FilterFamily.LINKWITZ_RILEY_4_LOW_PASS

    def test_electronic_type_labels(self):
        assert electronic_type_label(ElectronicFilterType.HIGH_LOW_PASS) == "High/Low Pass"
        assert electronic_type_label(ElectronicFilterType.LOW_PASS) == "Low Pass"
        assert electronic_type_label(ElectronicFilterType.HIGH_PASS) == "High Pass"


class TestSlopes:
    """Tests für die Flankensteilheit."""

    def test_slope_from_order(self):
        assert butterworth_slope_db(1) == 6
        assert butterworth_slope_db(8) == 48

    def test_order_from_slope(self):
        """Ordnung wird abgerundet."""
        assert butterworth_slope_order(24) == 4
        assert butterworth_slope_order(20) == 3

    def test_slope_label(self):
        assert filter_slope_label(18) == "18 dB/Octave"
        assert parse_filter_slope_db("18 dB/Octave") == 18

    def test_bad_slope_label(self):
        with pytest.raises(ValueError):
            parse_filter_slope_db("steep dB/Octave")


class TestFormatting:
    """Tests für Formatierungsfunktionen."""

    def test_format_frequency(self):
        """Test Frequenz-Formatierung."""
        assert format_frequency(250) == "250 Hz"
        assert format_frequency(1500) == "1.5 kHz"
        assert format_frequency(16000) == "16.0 kHz"

    def test_format_db(self):
        """Test dB-Formatierung."""
        assert format_db(-12.34) == "-12.3 dB"
        assert format_db(float("-inf")) == "-∞ dB"
        assert format_db(3.0, precision=2) == "3.00 dB"

    def test_format_gain(self):
        """Anhebungen mit Vorzeichen."""
        assert format_gain(3.0) == "+3.0 dB"
        assert format_gain(-6.0) == "-6.0 dB"
        assert format_gain(0.0) == "0.0 dB"

    def test_format_bandwidth(self):
        assert format_bandwidth(0.5) == "0.50 oct"
