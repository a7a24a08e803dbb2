"""
Filter-Regler

Bedienelemente für eine Kanalbearbeitung:
- Mute, Verstärkung und Verzögerung
- Hoch- und Tiefpass (Prototyp, Grenzfrequenz, Bypass)
- Parametrische Bänder (f, Bandbreite, Anhebung/Absenkung, Bypass)

Die Regler schreiben direkt in die Filterobjekte; Berechnungen
erfolgen ausschließlich im Core.
"""

import logging
from typing import Optional
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QGridLayout, QLabel,
    QComboBox, QDoubleSpinBox, QCheckBox, QGroupBox, QPushButton,
    QScrollArea,
)
from PySide6.QtCore import Signal

from ..core.filter_types import ElectronicFilterType, FilterFamily
from ..core.high_low_pass import HighLowPassFilter
from ..core.parametric import ParametricFilter
from ..core.processing import ChannelProcessing
from ..utils.formatting import (
    electronic_type_label,
    family_label,
    format_frequency,
)

logger = logging.getLogger(__name__)


def _spin(minimum: float, maximum: float, value: float, decimals: int, step: float, suffix: str) -> QDoubleSpinBox:
    spin = QDoubleSpinBox()
    spin.setRange(minimum, maximum)
    spin.setDecimals(decimals)
    spin.setSingleStep(step)
    spin.setSuffix(suffix)
    spin.setValue(value)
    spin.setKeyboardTracking(False)
    return spin


class ParametricBandControl(QGroupBox):
    """
    Regler für ein parametrisches Band.

    Signals:
        changed: Emittiert nach jeder Parameteränderung
    """

    changed = Signal()

    def __init__(self, band: ParametricFilter, index: int, parent: Optional[QWidget] = None):
        super().__init__(f"Band {index + 1} ({format_frequency(band.f)})", parent)
        self._band = band
        self._updating = False
        self._init_ui()

    def _init_ui(self):
        layout = QGridLayout(self)
        layout.setContentsMargins(6, 6, 6, 6)

        self.bypass_check = QCheckBox("Bypass")
        layout.addWidget(self.bypass_check, 0, 0, 1, 2)

        f_min, f_max = ParametricFilter.F_RANGE
        o_min, o_max = ParametricFilter.O_RANGE
        c_min, c_max = ParametricFilter.C_RANGE

        layout.addWidget(QLabel("f:"), 1, 0)
        self.f_spin = _spin(f_min, f_max, self._band.f, 0, 1.0, " Hz")
        layout.addWidget(self.f_spin, 1, 1)

        layout.addWidget(QLabel("Bandbreite:"), 2, 0)
        self.o_spin = _spin(o_min, o_max, self._band.o, 2, 0.05, " oct")
        layout.addWidget(self.o_spin, 2, 1)

        layout.addWidget(QLabel("Pegel:"), 3, 0)
        self.c_spin = _spin(c_min, c_max, self._band.c, 1, 0.5, " dB")
        layout.addWidget(self.c_spin, 3, 1)

        self.sync_from_filter()

        self.bypass_check.toggled.connect(self._on_value_changed)
        self.f_spin.valueChanged.connect(self._on_value_changed)
        self.o_spin.valueChanged.connect(self._on_value_changed)
        self.c_spin.valueChanged.connect(self._on_value_changed)

    def sync_from_filter(self):
        """Regler auf die Werte des Bandes setzen (ohne Rückschreiben)."""
        self._updating = True
        self.bypass_check.setChecked(self._band.bypassed)
        self.f_spin.setValue(self._band.f)
        self.o_spin.setValue(self._band.o)
        self.c_spin.setValue(self._band.c)
        self._updating = False

    def _on_value_changed(self, *_):
        if self._updating:
            return
        self._band.set_parameters(
            self.bypass_check.isChecked(),
            self.f_spin.value(),
            self.o_spin.value(),
            self.c_spin.value(),
        )
        self.changed.emit()


class HighLowPassControl(QGroupBox):
    """
    Regler für einen Hoch- oder Tiefpass.

    Die Prototypauswahl zeigt nur Prototypen passender Richtung.

    Signals:
        changed: Emittiert nach jeder Parameteränderung
    """

    changed = Signal()

    def __init__(self, filt: HighLowPassFilter, parent: Optional[QWidget] = None):
        super().__init__(electronic_type_label(filt.electronic_filter_type), parent)
        self._filter = filt
        self._updating = False
        self._init_ui()

    def _families(self) -> list[FilterFamily]:
        electronic_type = self._filter.electronic_filter_type
        if electronic_type is ElectronicFilterType.HIGH_PASS:
            return [family for family in FilterFamily if family.is_high_pass]
        if electronic_type is ElectronicFilterType.LOW_PASS:
            return [family for family in FilterFamily if not family.is_high_pass]
        return list(FilterFamily)

    def _init_ui(self):
        layout = QGridLayout(self)
        layout.setContentsMargins(6, 6, 6, 6)

        self.bypass_check = QCheckBox("Bypass")
        layout.addWidget(self.bypass_check, 0, 0, 1, 2)

        layout.addWidget(QLabel("Typ:"), 1, 0)
        self.family_combo = QComboBox()
        for family in self._families():
            self.family_combo.addItem(family_label(family), family)
        layout.addWidget(self.family_combo, 1, 1)

        f_min, f_max = self._filter.frequency_range
        layout.addWidget(QLabel("fc:"), 2, 0)
        self.fc_spin = _spin(f_min, f_max, self._filter.fc, 0, 1.0, " Hz")
        layout.addWidget(self.fc_spin, 2, 1)

        self.sync_from_filter()

        self.bypass_check.toggled.connect(self._on_value_changed)
        self.family_combo.currentIndexChanged.connect(self._on_value_changed)
        self.fc_spin.valueChanged.connect(self._on_value_changed)

    def sync_from_filter(self):
        """Regler auf die Werte des Filters setzen (ohne Rückschreiben)."""
        self._updating = True
        self.bypass_check.setChecked(self._filter.bypassed)
        self.fc_spin.setValue(self._filter.fc)
        index = self.family_combo.findData(self._filter.family)
        if index >= 0:
            self.family_combo.setCurrentIndex(index)
        self._updating = False

    def _on_value_changed(self, *_):
        if self._updating:
            return
        family = self.family_combo.currentData()
        if family is None:
            logger.warning("Kein Filterprototyp ausgewählt")
            return
        self._filter.set_parameters(self.bypass_check.isChecked(), self.fc_spin.value(), family)
        self.changed.emit()


class ChannelControlPanel(QWidget):
    """
    Alle Regler einer Kanalbearbeitung.

    Signals:
        changed: Emittiert wenn sich die Kurve ändern muss
    """

    changed = Signal()

    def __init__(self, channel: ChannelProcessing, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._channel = channel
        self._band_controls: list[ParametricBandControl] = []
        self._updating = False
        self._init_ui()

    def _init_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        # === Kanal ===
        channel_group = QGroupBox("Kanal")
        channel_layout = QGridLayout(channel_group)

        self.mute_check = QCheckBox("Mute")
        self.mute_check.toggled.connect(self._on_channel_changed)
        channel_layout.addWidget(self.mute_check, 0, 0, 1, 2)

        channel_layout.addWidget(QLabel("Verstärkung:"), 1, 0)
        self.gain_spin = _spin(-40.0, 20.0, self._channel.gain_db, 1, 0.5, " dB")
        self.gain_spin.valueChanged.connect(self._on_channel_changed)
        channel_layout.addWidget(self.gain_spin, 1, 1)

        channel_layout.addWidget(QLabel("Verzögerung:"), 2, 0)
        self.delay_spin = _spin(0.0, 100.0, self._channel.delay_ms, 2, 0.1, " ms")
        self.delay_spin.valueChanged.connect(self._on_channel_changed)
        channel_layout.addWidget(self.delay_spin, 2, 1)

        layout.addWidget(channel_group)

        # === Hoch-/Tiefpass ===
        self.high_pass_control = HighLowPassControl(self._channel.high_pass)
        self.high_pass_control.changed.connect(self.changed)
        layout.addWidget(self.high_pass_control)

        self.low_pass_control = HighLowPassControl(self._channel.low_pass)
        self.low_pass_control.changed.connect(self.changed)
        layout.addWidget(self.low_pass_control)

        # === Parametrische Bänder ===
        bank_group = QGroupBox("Parametrischer EQ")
        bank_layout = QVBoxLayout(bank_group)

        bank_buttons = QHBoxLayout()
        self.bank_bypass_check = QCheckBox("Bypass")
        self.bank_bypass_check.toggled.connect(self._on_bank_bypass_toggled)
        bank_buttons.addWidget(self.bank_bypass_check)
        bank_buttons.addStretch()

        btn_reset = QPushButton("Zurücksetzen")
        btn_reset.clicked.connect(self._reset_bands)
        bank_buttons.addWidget(btn_reset)

        if hasattr(self._channel.parametric_filters, "reset_upper_filters"):
            btn_reset_upper = QPushButton("Obere Bänder zurücksetzen")
            btn_reset_upper.clicked.connect(self._reset_upper_bands)
            bank_buttons.addWidget(btn_reset_upper)

        bank_layout.addLayout(bank_buttons)

        bands_container = QWidget()
        bands_layout = QVBoxLayout(bands_container)
        bands_layout.setContentsMargins(0, 0, 0, 0)
        for index, band in enumerate(self._channel.parametric_filters):
            control = ParametricBandControl(band, index)
            control.changed.connect(self.changed)
            self._band_controls.append(control)
            bands_layout.addWidget(control)
        bands_layout.addStretch()

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setWidget(bands_container)
        bank_layout.addWidget(scroll)

        layout.addWidget(bank_group, stretch=1)

        self.sync_from_channel()

    def sync_from_channel(self):
        """Alle Regler auf den Zustand des Kanals setzen."""
        self._updating = True
        self.mute_check.setChecked(self._channel.muted)
        self.gain_spin.setValue(self._channel.gain_db)
        self.delay_spin.setValue(self._channel.delay_ms)
        self.bank_bypass_check.setChecked(self._channel.parametric_bypassed)
        self._updating = False

        self.high_pass_control.sync_from_filter()
        self.low_pass_control.sync_from_filter()
        for control in self._band_controls:
            control.sync_from_filter()

    def _on_channel_changed(self, *_):
        if self._updating:
            return
        self._channel.muted = self.mute_check.isChecked()
        self._channel.gain_db = self.gain_spin.value()
        self._channel.delay_ms = self.delay_spin.value()
        self.changed.emit()

    def _on_bank_bypass_toggled(self, checked: bool):
        if self._updating:
            return
        self._channel.parametric_bypassed = checked
        self.changed.emit()

    def _reset_bands(self):
        self._channel.parametric_filters.reset()
        self.sync_from_channel()
        self.changed.emit()

    def _reset_upper_bands(self):
        self._channel.parametric_filters.reset_upper_filters()
        self.sync_from_channel()
        self.changed.emit()
