"""
Tests für die Frequenzbereichs-Transformation.

Diese Tests verifizieren Polwinkel, z-Abbildung, bilineare Transformation
und die Auswertung kaskadierter Biquads.
"""

import math

import pytest
import numpy as np
from scipy import signal

from eqcurve.core.filter_types import FilterFamily
from eqcurve.core.prototypes import PROTOTYPE_TEMPLATES
from eqcurve.core.transform import (
    EPSILON_SMALL,
    IDENTITY_ANALOG_SECTION,
    UNITY_SECTION,
    BiquadSection,
    bandwidth_to_q,
    bilinear_transform,
    clamp_frequency,
    digital_biquad_response,
    evaluate_biquad_cascade,
    evaluate_biquad_cascade_array,
    normalize_sections,
    pole_angle_radians,
    quadratic_factor,
    to_z_domain,
    to_z_domain_array,
    validate_sampling_frequency,
    voltage_ratio,
    warn_if_above_nyquist,
)


class TestAcousticsHelpers:
    """Tests für die akustischen Hilfsfunktionen."""

    def test_bandwidth_to_q_one_octave(self):
        """Eine Oktave entspricht Q = √2."""
        assert bandwidth_to_q(1.0) == pytest.approx(math.sqrt(2.0))

    def test_bandwidth_to_q_decreases_with_bandwidth(self):
        """Breitere Bänder haben kleineres Q."""
        assert bandwidth_to_q(0.5) > bandwidth_to_q(1.0) > bandwidth_to_q(2.0)

    def test_voltage_ratio(self):
        """dB → Spannungsverhältnis."""
        assert voltage_ratio(20.0) == pytest.approx(10.0)
        assert voltage_ratio(0.0) == 1.0
        assert voltage_ratio(-6.0) == pytest.approx(0.501187, rel=1e-5)

    def test_clamp_frequency(self):
        """Null und negative Frequenzen werden auf EPSILON_SMALL gesetzt."""
        assert clamp_frequency(0.0) == EPSILON_SMALL
        assert clamp_frequency(-100.0) == EPSILON_SMALL
        assert clamp_frequency(1000.0) == 1000.0

    def test_validate_sampling_frequency(self):
        """Nicht-positive Samplerate wird abgelehnt."""
        assert validate_sampling_frequency(44100) == 44100.0

        with pytest.raises(ValueError):
            validate_sampling_frequency(0.0)
        with pytest.raises(ValueError):
            validate_sampling_frequency(-48000.0)

    def test_nyquist_warning(self):
        """Frequenzen ab Nyquist erzeugen eine Warnung."""
        with pytest.warns(UserWarning, match="Nyquist"):
            warn_if_above_nyquist(24000.0, 48000.0)


class TestZDomain:
    """Tests für Polwinkel und z-Abbildung."""

    def test_pole_angle(self):
        """θ = 2π·f/fs."""
        assert pole_angle_radians(12000.0, 48000.0) == pytest.approx(math.pi / 2)
        assert pole_angle_radians(0.0, 48000.0) == 0.0

    def test_z_on_unit_circle(self):
        """z liegt auf dem Einheitskreis."""
        for freq in [20.0, 1000.0, 15000.0]:
            assert abs(to_z_domain(freq, 48000.0)) == pytest.approx(1.0)

    def test_quarter_sampling_rate(self):
        """fs/4 wird auf z = i abgebildet."""
        z = to_z_domain(12000.0, 48000.0)
        assert z.real == pytest.approx(0.0, abs=1e-12)
        assert z.imag == pytest.approx(1.0)

    def test_array_matches_scalar(self):
        """Vektorisierte Abbildung entspricht der skalaren."""
        freqs = np.array([10.0, 440.0, 9000.0])
        z = to_z_domain_array(freqs, 44100.0)

        for freq, z_i in zip(freqs, z):
            assert z_i == pytest.approx(to_z_domain(freq, 44100.0))


class TestBilinearTransform:
    """Tests für die bilineare Transformation."""

    def test_identity_section(self):
        """Durchlass-Sektion ergibt Zähler = Nenner."""
        (section,) = bilinear_transform([IDENTITY_ANALOG_SECTION], 0.3)
        assert section.numerator == section.denominator

    def test_unnormalized_output(self):
        """Ohne Normierung ist a0 im Allgemeinen ≠ 1."""
        (section,) = bilinear_transform(
            PROTOTYPE_TEMPLATES[FilterFamily.BUTTERWORTH_2_LOW_PASS][:1], 0.3
        )
        assert section.a0 != pytest.approx(1.0)

    def test_coefficient_formula(self):
        """x0, x1, x2 nach der Substitutionsformel."""
        theta = 0.7
        A, B, C = 0.5, 1.5, 2.0
        (section,) = bilinear_transform([((A, B, C), (0.0, 0.0, 1.0))], theta)

        s, c = math.sin(theta), math.cos(theta)
        assert section.b0 == pytest.approx(A * (1 + c) + B * s + C * (1 - c))
        assert section.b1 == pytest.approx(-2 * A * (1 + c) + 2 * C * (1 - c))
        assert section.b2 == pytest.approx(A * (1 + c) - B * s + C * (1 - c))

    def test_butterworth_2_matches_scipy(self):
        """Butterworth 2. Ordnung entspricht scipy.signal.butter."""
        fs = 48000.0
        fc = 1000.0
        theta = pole_angle_radians(fc, fs)

        analog = PROTOTYPE_TEMPLATES[FilterFamily.BUTTERWORTH_2_LOW_PASS][:1]
        (section,) = normalize_sections(bilinear_transform(analog, theta))

        sos = signal.butter(2, fc, btype="low", fs=fs, output="sos")
        np.testing.assert_allclose(tuple(section), sos[0], rtol=1e-9, atol=1e-12)


class TestNormalization:
    """Tests für die Normierung der Sektionen."""

    def test_normalized_a0(self):
        """Nach der Normierung ist a0 = 1."""
        section = BiquadSection(2.0, 4.0, 6.0, 2.0, 1.0, 0.5)
        normalized = section.normalized()

        assert normalized == BiquadSection(1.0, 2.0, 3.0, 1.0, 0.5, 0.25)

    def test_zero_a0_left_alone(self):
        """a0 = 0 wird nicht normiert (kein NaN)."""
        section = BiquadSection(1.0, 2.0, 3.0, 0.0, 1.0, 1.0)
        assert section.normalized() == section

    def test_each_section_by_own_a0(self):
        """Jede Sektion wird durch ihr eigenes a0 geteilt."""
        sections = normalize_sections([
            BiquadSection(2.0, 0.0, 0.0, 2.0, 0.0, 0.0),
            BiquadSection(3.0, 3.0, 0.0, 3.0, 0.0, 0.0),
        ])
        assert sections[0].a0 == 1.0
        assert sections[1] == BiquadSection(1.0, 1.0, 0.0, 1.0, 0.0, 0.0)


class TestCascadeEvaluation:
    """Tests für die Auswertung kaskadierter Biquads."""

    def test_quadratic_factor(self):
        """c0 + c1/z + c2/z²."""
        z = 2.0 + 0.0j
        assert quadratic_factor(z, z * z, (1.0, 2.0, 4.0)) == pytest.approx(3.0)

    def test_empty_cascade_is_unity(self):
        """Leere Kaskade ergibt 1."""
        z = to_z_domain(1000.0, 48000.0)
        assert evaluate_biquad_cascade(z, z * z, []) == 1.0 + 0.0j

    def test_unity_section(self):
        """Durchlass-Sektion ergibt 1."""
        z = to_z_domain(1000.0, 48000.0)
        assert digital_biquad_response(z, z * z, UNITY_SECTION) == pytest.approx(1.0)

    def test_zero_denominator_is_unity(self):
        """Nenner = 0 liefert Einheitsbeitrag statt Division durch Null."""
        z = to_z_domain(1000.0, 48000.0)
        zero_den = BiquadSection(5.0, 1.0, 1.0, 0.0, 0.0, 0.0)

        h = evaluate_biquad_cascade(z, z * z, [zero_den, UNITY_SECTION])
        assert h == 1.0 + 0.0j

    def test_zero_denominator_in_later_section(self):
        """Auch spätere Sektionen mit Nenner = 0 tragen 1 bei."""
        z = to_z_domain(1000.0, 48000.0)
        gain = BiquadSection(2.0, 0.0, 0.0, 1.0, 0.0, 0.0)
        zero_den = BiquadSection(5.0, 1.0, 1.0, 0.0, 0.0, 0.0)

        h = evaluate_biquad_cascade(z, z * z, [gain, zero_den])
        assert h == pytest.approx(2.0)

    def test_product_of_sections(self):
        """Kaskade = Produkt der Einzelsektionen."""
        z = to_z_domain(700.0, 48000.0)
        s1 = BiquadSection(1.0, 0.5, 0.2, 1.0, -0.3, 0.1)
        s2 = BiquadSection(0.8, -0.1, 0.0, 1.0, 0.2, 0.05)

        expected = digital_biquad_response(z, z * z, s1) * digital_biquad_response(z, z * z, s2)
        assert evaluate_biquad_cascade(z, z * z, [s1, s2]) == pytest.approx(expected)

    def test_array_matches_scalar(self):
        """Vektorisierte Auswertung entspricht der skalaren, inkl. Nenner = 0."""
        sections = [
            BiquadSection(1.0, 0.5, 0.2, 1.0, -0.3, 0.1),
            BiquadSection(5.0, 1.0, 1.0, 0.0, 0.0, 0.0),
        ]
        freqs = np.array([50.0, 1000.0, 10000.0])
        z = to_z_domain_array(freqs, 48000.0)

        h = evaluate_biquad_cascade_array(z, z * z, sections)
        for z_i, h_i in zip(z, h):
            assert h_i == pytest.approx(evaluate_biquad_cascade(complex(z_i), complex(z_i) ** 2, sections))
