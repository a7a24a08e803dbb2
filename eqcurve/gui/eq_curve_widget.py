"""
EQ-Kurven-Widget

Zeigt den Frequenzgang einer Kanalbearbeitung mit:
- Logarithmischer Frequenzachse
- Betrag in dB und Phase in Grad
- Optionaler Einzelkurve pro Filterstufe

Verwendet pyqtgraph PlotWidget für schnelle Aktualisierung beim Ziehen
von Reglern.
"""

from typing import Optional
import numpy as np
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel,
    QComboBox, QSpinBox, QFrame, QCheckBox,
)
from PySide6.QtCore import Qt, Signal
import pyqtgraph as pg

from ..core.processing import ChannelProcessing
from ..core.response import SweepConfig, ResponseCurve, compute_response_curve
from ..utils.formatting import format_frequency, format_db


# Farben pro Filterstufe (Reihenfolge wie ChannelProcessing.filters)
STAGE_COLORS = ['#f38ba8', '#fab387', '#a6e3a1', '#cba6f7']
STAGE_NAMES = ["Hochpass", "Tiefpass", "Parametrisch", "Allpass"]


class EqCurveWidget(QWidget):
    """
    Widget zur Darstellung von EQ-Kurven.

    Features:
    - Betrag (dB) und Phase (Grad) über logarithmischer Frequenzachse
    - Einstellbare Anzahl Stützstellen
    - Einzelkurven der Filterstufen ein-/ausblendbar
    - Cursor-Anzeige von Frequenz und Pegel

    Signals:
        sweepChanged: Emittiert wenn die Sweep-Parameter geändert werden
    """

    sweepChanged = Signal()

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)

        self._channel: Optional[ChannelProcessing] = None
        self._curve: Optional[ResponseCurve] = None

        # Default config
        self._config = SweepConfig(num_points=512)

        self._db_min = -24.0
        self._db_max = 12.0
        self._show_stages = False
        self._unwrap_phase = False

        self._init_ui()

    def _init_ui(self):
        """Initialize UI components."""
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(4)

        # Settings panel
        settings_frame = QFrame()
        settings_frame.setFrameStyle(QFrame.Shape.StyledPanel)
        settings_layout = QHBoxLayout(settings_frame)
        settings_layout.setContentsMargins(8, 4, 8, 4)

        settings_layout.addWidget(QLabel("Punkte:"))
        self.points_combo = QComboBox()
        self.points_combo.addItems(["128", "256", "512", "1024", "2048"])
        self.points_combo.setCurrentText("512")
        self.points_combo.currentTextChanged.connect(self._on_points_changed)
        settings_layout.addWidget(self.points_combo)

        self.stages_check = QCheckBox("Filterstufen")
        self.stages_check.toggled.connect(self._on_stages_toggled)
        settings_layout.addWidget(self.stages_check)

        self.unwrap_check = QCheckBox("Phase entfalten")
        self.unwrap_check.toggled.connect(self._on_unwrap_toggled)
        settings_layout.addWidget(self.unwrap_check)

        settings_layout.addStretch()

        # dB range
        settings_layout.addWidget(QLabel("dB Min:"))
        self.db_min_spin = QSpinBox()
        self.db_min_spin.setRange(-120, -3)
        self.db_min_spin.setValue(-24)
        self.db_min_spin.valueChanged.connect(self._on_db_range_changed)
        settings_layout.addWidget(self.db_min_spin)

        settings_layout.addWidget(QLabel("Max:"))
        self.db_max_spin = QSpinBox()
        self.db_max_spin.setRange(0, 40)
        self.db_max_spin.setValue(12)
        self.db_max_spin.valueChanged.connect(self._on_db_range_changed)
        settings_layout.addWidget(self.db_max_spin)

        layout.addWidget(settings_frame)

        # Betrag
        self.magnitude_plot = pg.PlotWidget(title="Betrag")
        self.magnitude_plot.setBackground('#1a1a2e')
        self.magnitude_plot.showGrid(x=True, y=True, alpha=0.3)
        self.magnitude_plot.setLogMode(x=True, y=False)
        self.magnitude_plot.setLabel('left', 'Pegel', units='dB')
        self.magnitude_plot.setLabel('bottom', 'Frequenz', units='Hz')
        self.magnitude_plot.setYRange(self._db_min, self._db_max)
        self.magnitude_plot.getAxis('left').setWidth(60)
        self.magnitude_plot.getPlotItem().setMenuEnabled(False)
        self.magnitude_curve = self.magnitude_plot.plot(pen=pg.mkPen('#89b4fa', width=2))
        self.magnitude_plot.addLegend(offset=(10, 10))
        self.stage_curves = [
            self.magnitude_plot.plot(pen=pg.mkPen(color, width=1, style=Qt.PenStyle.DashLine), name=name)
            for color, name in zip(STAGE_COLORS, STAGE_NAMES)
        ]
        self.magnitude_plot.scene().sigMouseMoved.connect(self._on_mouse_moved)
        layout.addWidget(self.magnitude_plot, stretch=3)

        # Phase
        self.phase_plot = pg.PlotWidget(title="Phase")
        self.phase_plot.setBackground('#1a1a2e')
        self.phase_plot.showGrid(x=True, y=True, alpha=0.3)
        self.phase_plot.setLogMode(x=True, y=False)
        self.phase_plot.setLabel('left', 'Phase', units='°')
        self.phase_plot.setLabel('bottom', 'Frequenz', units='Hz')
        self.phase_plot.getAxis('left').setWidth(60)
        self.phase_plot.getPlotItem().setMenuEnabled(False)
        self.phase_plot.setXLink(self.magnitude_plot)
        self.phase_curve = self.phase_plot.plot(pen=pg.mkPen('#a6e3a1', width=2))
        layout.addWidget(self.phase_plot, stretch=2)

        # Info label
        self.info_label = QLabel("")
        self.info_label.setStyleSheet("color: #888; font-size: 11px;")
        layout.addWidget(self.info_label)

    def set_channel(self, channel: ChannelProcessing):
        """Set channel processing to display."""
        self._channel = channel
        self._config = SweepConfig(
            sampling_frequency_hz=channel.sampling_frequency_hz,
            f_min=self._config.f_min,
            f_max=min(self._config.f_max, channel.sampling_frequency_hz / 2),
            num_points=self._config.num_points,
        )
        self.refresh()

    def refresh(self):
        """Recompute and redraw all curves."""
        if self._channel is None:
            return

        self._curve = self._channel.response_curve(self._config)
        freqs = self._curve.frequencies

        self.magnitude_curve.setData(freqs, self._curve.magnitude_db())

        if self._unwrap_phase:
            self.phase_curve.setData(freqs, self._curve.unwrapped_phase_deg())
        else:
            self.phase_curve.setData(freqs, self._curve.phase_deg())

        for stage, stage_curve in zip(self._channel.filters, self.stage_curves):
            if self._show_stages:
                stage_curve.setData(freqs, compute_response_curve(stage, freqs).magnitude_db())
                stage_curve.setVisible(True)
            else:
                stage_curve.setVisible(False)

        self._update_info()

    def _update_info(self):
        """Update info label."""
        if self._curve is None:
            return

        magnitude_db = self._curve.magnitude_db()
        i_max = int(np.argmax(magnitude_db))
        i_min = int(np.argmin(magnitude_db))
        self.info_label.setText(
            f"Max: {format_db(magnitude_db[i_max])} @ {format_frequency(self._curve.frequencies[i_max])} | "
            f"Min: {format_db(magnitude_db[i_min])} @ {format_frequency(self._curve.frequencies[i_min])} | "
            f"EQ aktiv: {'ja' if self._channel.is_active_eq_mode() else 'nein'}"
        )

    def _on_points_changed(self, text: str):
        """Handle sweep point count change."""
        self._config = SweepConfig(
            sampling_frequency_hz=self._config.sampling_frequency_hz,
            f_min=self._config.f_min,
            f_max=self._config.f_max,
            num_points=int(text),
        )
        self.sweepChanged.emit()
        self.refresh()

    def _on_stages_toggled(self, checked: bool):
        self._show_stages = checked
        self.refresh()

    def _on_unwrap_toggled(self, checked: bool):
        self._unwrap_phase = checked
        self.refresh()

    def _on_db_range_changed(self):
        """Handle dB range change."""
        self._db_min = self.db_min_spin.value()
        self._db_max = self.db_max_spin.value()
        self.magnitude_plot.setYRange(self._db_min, self._db_max)

    def _on_mouse_moved(self, pos):
        """Zeige Frequenz und Pegel unter dem Mauszeiger."""
        if self._curve is None:
            return
        if not self.magnitude_plot.sceneBoundingRect().contains(pos):
            return

        point = self.magnitude_plot.getPlotItem().vb.mapSceneToView(pos)
        # Log-Modus: x ist log10(f)
        freq = 10.0 ** point.x()
        if freq <= 0:
            return
        level = 20.0 * np.log10(max(abs(self._channel.response(freq)), 1e-6))
        self.magnitude_plot.setTitle(f"Betrag - {format_frequency(freq)}: {format_db(level)}")
