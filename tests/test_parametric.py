"""
Tests für parametrische EQ-Filter.

Diese Tests verifizieren Koeffizienten, Frequenzgang und Moduswerte
eines einzelnen parametrischen Bandes.
"""

import copy

import pytest
import numpy as np

from eqcurve.core.base import AcousticalFilter
from eqcurve.core.filter_types import FilterKind
from eqcurve.core.parametric import ParametricFilter
from eqcurve.core.transform import (
    EPSILON_SMALL,
    evaluate_biquad_cascade,
    to_z_domain,
    voltage_ratio,
)


class TestDefaults:
    """Tests für Standardwerte."""

    def test_default_parameters(self):
        """Standardband: 1 kHz, 1 Oktave, 0 dB, aktiv."""
        band = ParametricFilter()

        assert band.f == 1000.0
        assert band.o == 1.0
        assert band.c == 0.0
        assert band.bypassed is False
        assert band.kind is FilterKind.PARAMETRIC

    def test_default_modes(self):
        """Flaches Band ist weder aktiv noch verändert."""
        band = ParametricFilter()

        assert not band.is_active_eq_mode()
        assert not band.is_eq_boost_mode()
        assert not band.is_non_default_eq_mode()

    def test_protocol(self):
        """Band erfüllt das AcousticalFilter-Protokoll."""
        assert isinstance(ParametricFilter(), AcousticalFilter)

    def test_invalid_sampling_frequency(self):
        """Nicht-positive Samplerate wird abgelehnt."""
        with pytest.raises(ValueError):
            ParametricFilter(sampling_frequency_hz=0.0)

        band = ParametricFilter()
        with pytest.raises(ValueError):
            band.sampling_frequency_hz = -1.0

    def test_nyquist_warning(self):
        """Mittenfrequenz über Nyquist erzeugt eine Warnung."""
        with pytest.warns(UserWarning):
            ParametricFilter(f=30000.0, sampling_frequency_hz=48000.0)


class TestResponse:
    """Tests für den Frequenzgang."""

    @pytest.mark.parametrize("freq", [20.0, 250.0, 1000.0, 8000.0, 20000.0])
    def test_flat_band(self, freq):
        """0 dB ergibt Betrag 1 bei allen Frequenzen."""
        band = ParametricFilter(c=0.0)
        assert abs(band.response(freq)) == pytest.approx(1.0)

    @pytest.mark.parametrize("gain_db", [-12.0, -6.0, 3.0, 9.0])
    def test_gain_at_center(self, gain_db):
        """Betrag bei der Mittenfrequenz entspricht der Anhebung/Absenkung."""
        band = ParametricFilter(f=1000.0, o=1.0, c=gain_db)
        assert abs(band.response(1000.0)) == pytest.approx(voltage_ratio(gain_db), rel=1e-6)

    def test_gain_fades_away_from_center(self):
        """Weit weg von der Mittenfrequenz geht der Betrag gegen 1."""
        band = ParametricFilter(f=1000.0, o=0.5, c=12.0)

        assert abs(band.response(20.0)) == pytest.approx(1.0, abs=0.02)
        assert abs(band.response(1000.0)) > abs(band.response(500.0)) > abs(band.response(100.0))

    @pytest.mark.parametrize("freq", [50.0, 700.0, 1000.0, 3000.0])
    def test_cut_is_reciprocal_of_boost(self, freq):
        """Absenkung ist exakt der Kehrwert der Anhebung."""
        boost = ParametricFilter(f=1000.0, o=0.7, c=6.0)
        cut = ParametricFilter(f=1000.0, o=0.7, c=-6.0)

        assert boost.response(freq) * cut.response(freq) == pytest.approx(1.0 + 0.0j)

    @pytest.mark.parametrize("freq", [0.0, -100.0, 1000.0])
    def test_bypassed_is_unity(self, freq):
        """Gebypasstes Band liefert exakt 1, auch bei 0 Hz und negativen Frequenzen."""
        band = ParametricFilter(c=12.0, bypassed=True)

        assert band.response(freq) == 1.0 + 0.0j
        np.testing.assert_array_equal(band.response_array(np.array([freq])), [1.0 + 0.0j])

    def test_conjugated_response(self):
        """Rückgabewert ist die konjugierte Kaskadenauswertung."""
        band = ParametricFilter(f=500.0, c=6.0)
        z = to_z_domain(800.0, band.sampling_frequency_hz)

        expected = evaluate_biquad_cascade(z, z * z, band.sections).conjugate()
        assert band.response(800.0) == pytest.approx(expected)

    def test_frequency_clamp(self):
        """Frequenz 0 und negative Frequenzen werden geklemmt."""
        band = ParametricFilter(c=6.0)
        expected = band.response(EPSILON_SMALL)

        assert band.response(0.0) == expected
        assert band.response(-500.0) == expected
        assert np.isfinite(abs(expected))

    def test_response_array_matches_scalar(self):
        """Vektorisierter Frequenzgang entspricht dem skalaren."""
        band = ParametricFilter(f=250.0, o=0.3, c=-9.0)
        freqs = np.array([0.0, 20.0, 250.0, 5000.0])

        h = band.response_array(freqs)
        for freq, h_i in zip(freqs, h):
            assert h_i == pytest.approx(band.response(freq))


class TestCoefficients:
    """Tests für die Koeffizientenberechnung."""

    def test_normalized_a0(self):
        """a0 ist nach der Berechnung 1."""
        assert ParametricFilter(c=4.0).section.a0 == 1.0

    def test_invert_flag_follows_sign(self):
        """Negative Pegel schalten auf die invertierte Struktur."""
        assert ParametricFilter(c=3.0).invert_h is False
        assert ParametricFilter(c=-3.0).invert_h is True
        assert ParametricFilter(c=0.0).invert_h is False

    def test_symmetric_gains(self):
        """c = +3 und c = -3 haben gleiches G und vertauschte Strukturen."""
        boost = ParametricFilter(c=3.0)
        cut = ParametricFilter(c=-3.0)

        assert boost.g == cut.g
        assert boost.section.b0 * cut.section.b0 == pytest.approx(1.0)

    def test_setter_recomputes(self):
        """Setzen eines Parameters berechnet die Koeffizienten neu."""
        band = ParametricFilter()
        before = band.section

        band.c = 6.0

        assert band.section != before

    def test_deferred_commit(self):
        """Im deferred()-Block wird erst am Ende neu berechnet."""
        band = ParametricFilter()
        before = band.section

        with band.deferred():
            band.f = 250.0
            band.o = 0.5
            band.c = -6.0
            assert band.is_deferred
            assert band.section is before

        assert not band.is_deferred
        assert band.section == ParametricFilter(f=250.0, o=0.5, c=-6.0).section

    def test_deferred_commit_on_exception(self):
        """Auch bei einer Ausnahme im Block wird neu berechnet."""
        band = ParametricFilter()

        with pytest.raises(RuntimeError):
            with band.deferred():
                band.c = 6.0
                raise RuntimeError("abort")

        assert band.section == ParametricFilter(c=6.0).section

    def test_sampling_frequency_recomputes(self):
        """Samplerate-Änderung berechnet die Koeffizienten neu."""
        band = ParametricFilter(c=6.0)
        before = band.section

        band.sampling_frequency_hz = 96000.0
        assert band.section != before
        assert abs(band.response(1000.0)) == pytest.approx(voltage_ratio(6.0), rel=1e-6)


class TestModes:
    """Tests für Moduswerte."""

    def test_active_threshold(self):
        """Aktiv ab |c| ≥ 0.001 dB."""
        assert ParametricFilter(c=0.001).is_active_eq_mode()
        assert ParametricFilter(c=-0.001).is_active_eq_mode()
        assert not ParametricFilter(c=0.0009).is_active_eq_mode()
        assert not ParametricFilter(c=-0.0009).is_active_eq_mode()

    def test_boost_threshold(self):
        """Anhebung ab c ≥ 0.001 dB."""
        assert ParametricFilter(c=0.001).is_eq_boost_mode()
        assert not ParametricFilter(c=-6.0).is_eq_boost_mode()

    def test_bypassed_is_never_active(self):
        """Gebypasste Bänder sind weder aktiv noch anhebend."""
        band = ParametricFilter(c=6.0, bypassed=True)

        assert not band.is_active_eq_mode()
        assert not band.is_eq_boost_mode()
        assert band.is_non_default_eq_mode()

    @pytest.mark.parametrize("kwargs", [
        {"f": 500.0},
        {"o": 0.5},
        {"c": 1.0},
        {"bypassed": True},
    ])
    def test_non_default(self, kwargs):
        """Jede Abweichung vom Standard wird erkannt."""
        assert ParametricFilter(**kwargs).is_non_default_eq_mode()

    @pytest.mark.parametrize("freq", [32.0, 250.0, 16000.0])
    def test_bank_frequency_is_non_default(self, freq):
        """Bänder abseits von 1 kHz gelten als verändert."""
        band = ParametricFilter.at_frequency(freq)

        assert band.f == freq
        assert band.is_non_default_eq_mode()
        assert not band.is_active_eq_mode()

    def test_band_at_1_khz_is_default(self):
        assert not ParametricFilter.at_frequency(1000.0).is_non_default_eq_mode()

    def test_reset(self):
        """reset() stellt die Standardwerte wieder her, auch f = 1 kHz."""
        band = ParametricFilter.at_frequency(250.0)
        band.set_parameters(True, 300.0, 0.4, -5.0)

        band.reset()

        assert band.f == 1000.0
        assert band.o == 1.0
        assert band.c == 0.0
        assert band.bypassed is False
        assert not band.is_non_default_eq_mode()


class TestCopy:
    """Tests für Kopien."""

    def test_copy_is_independent(self):
        """Kopie teilt keinen Zustand mit dem Original."""
        band = ParametricFilter(f=400.0, o=0.6, c=4.0)
        clone = band.copy()

        assert clone == band
        assert clone is not band

        before = band.response(400.0)
        clone.c = -8.0
        clone.f = 2000.0

        assert band.c == 4.0
        assert band.f == 400.0
        assert band.response(400.0) == before
        assert clone.response(400.0) != before

    def test_copy_module(self):
        """copy.copy und copy.deepcopy erzeugen Wertkopien."""
        band = ParametricFilter(c=2.0)
        before = band.response(1000.0)

        for clone in (copy.copy(band), copy.deepcopy(band)):
            assert clone == band
            clone.f = 100.0
            assert band.f == 1000.0
            assert band.response(1000.0) == before

    def test_set_from(self):
        """set_from übernimmt Werte, keine Referenz."""
        source = ParametricFilter(f=2000.0, o=0.3, c=-4.0)
        target = ParametricFilter()

        target.set_from(source)
        assert target == source

        source.c = 5.0
        assert target.c == -4.0
