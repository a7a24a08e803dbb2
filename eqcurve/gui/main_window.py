"""
Hauptfenster der EQ Curve Anwendung

Struktur:
- Links: Regler der Kanalbearbeitung
- Rechts: Betrag und Phase des Gesamtfrequenzgangs
"""

import logging
from typing import Optional
from PySide6.QtWidgets import (
    QMainWindow, QWidget, QHBoxLayout, QLabel,
    QStatusBar, QComboBox, QSplitter, QMessageBox,
)
from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QAction, QKeySequence

from ..core.processing import ChannelProcessing
from .eq_curve_widget import EqCurveWidget
from .filter_controls import ChannelControlPanel

logger = logging.getLogger(__name__)


SAMPLE_RATES = ["44100", "48000", "88200", "96000"]

# Verzögerung der Neuberechnung beim Ziehen von Reglern (ms)
REFRESH_DELAY_MS = 30


class MainWindow(QMainWindow):
    """Hauptfenster mit Reglern und EQ-Kurve."""

    def __init__(self, channel: Optional[ChannelProcessing] = None):
        super().__init__()

        self._channel = channel if channel is not None else ChannelProcessing()

        # Mehrere Änderungen in kurzer Folge zu einer Neuberechnung bündeln
        self._refresh_timer = QTimer(self)
        self._refresh_timer.setSingleShot(True)
        self._refresh_timer.setInterval(REFRESH_DELAY_MS)
        self._refresh_timer.timeout.connect(self._refresh_curve)

        self._init_ui()
        self._init_menu()
        self._apply_theme()
        self._refresh_curve()

    @property
    def channel(self) -> ChannelProcessing:
        return self._channel

    def _init_ui(self):
        """UI aufbauen."""
        self.setWindowTitle("EQ Curve")
        self.setMinimumSize(1100, 700)

        central = QWidget()
        self.setCentralWidget(central)
        layout = QHBoxLayout(central)
        layout.setContentsMargins(8, 8, 8, 8)

        splitter = QSplitter(Qt.Orientation.Horizontal)

        self.controls = ChannelControlPanel(self._channel)
        self.controls.changed.connect(self._schedule_refresh)
        self.controls.setMinimumWidth(280)
        splitter.addWidget(self.controls)

        self.curve_widget = EqCurveWidget()
        splitter.addWidget(self.curve_widget)
        splitter.setStretchFactor(1, 1)

        layout.addWidget(splitter)

        # Statusleiste
        status = QStatusBar()
        self.setStatusBar(status)

        status.addPermanentWidget(QLabel("Samplerate:"))
        self.sample_rate_combo = QComboBox()
        self.sample_rate_combo.addItems(SAMPLE_RATES)
        self.sample_rate_combo.setCurrentText(str(int(self._channel.sampling_frequency_hz)))
        self.sample_rate_combo.currentTextChanged.connect(self._on_sample_rate_changed)
        status.addPermanentWidget(self.sample_rate_combo)

        self.mode_label = QLabel("")
        status.addWidget(self.mode_label)

    def _init_menu(self):
        """Menü aufbauen."""
        menu = self.menuBar().addMenu("Datei")

        reset_action = QAction("Alles zurücksetzen", self)
        reset_action.setShortcut(QKeySequence("Ctrl+R"))
        reset_action.triggered.connect(self._reset_all)
        menu.addAction(reset_action)

        menu.addSeparator()

        quit_action = QAction("Beenden", self)
        quit_action.setShortcut(QKeySequence.StandardKey.Quit)
        quit_action.triggered.connect(self.close)
        menu.addAction(quit_action)

    def _schedule_refresh(self):
        self._refresh_timer.start()

    def _refresh_curve(self):
        """EQ-Kurve und Statusleiste aktualisieren."""
        self.curve_widget.set_channel(self._channel)

        modes = []
        if self._channel.muted:
            modes.append("Mute")
        if self._channel.is_active_eq_mode():
            modes.append("EQ aktiv")
        if self._channel.is_eq_boost_mode():
            modes.append("Anhebung")
        if self._channel.is_non_default_eq_mode():
            modes.append("geändert")
        self.mode_label.setText(" | ".join(modes) if modes else "Neutral")

    def _on_sample_rate_changed(self, text: str):
        try:
            self._channel.sampling_frequency_hz = float(text)
        except ValueError as e:
            logger.warning("Ungültige Samplerate %r: %s", text, e)
            QMessageBox.warning(self, "Fehler", f"Ungültige Samplerate: {text}")
            return
        self._schedule_refresh()

    def _reset_all(self):
        self._channel.reset()
        self.controls.sync_from_channel()
        self._refresh_curve()

    def _apply_theme(self):
        """Dark theme."""
        self.setStyleSheet("""
            QMainWindow, QWidget {
                background-color: #1e1e2e;
                color: #cdd6f4;
                font-family: 'SF Pro Display', 'Segoe UI', sans-serif;
            }
            QPushButton {
                background-color: #313244;
                color: #cdd6f4;
                border: 1px solid #45475a;
                padding: 6px 12px;
                border-radius: 6px;
            }
            QPushButton:hover {
                background-color: #45475a;
                border-color: #89b4fa;
            }
            QComboBox, QDoubleSpinBox, QSpinBox {
                background-color: #313244;
                color: #cdd6f4;
                border: 1px solid #45475a;
                padding: 4px 8px;
                border-radius: 4px;
            }
            QGroupBox {
                border: 1px solid #45475a;
                border-radius: 6px;
                margin-top: 12px;
                padding-top: 8px;
            }
            QGroupBox::title {
                subcontrol-origin: margin;
                left: 8px;
                color: #89b4fa;
            }
            QStatusBar {
                background-color: #181825;
                color: #a6adc8;
            }
        """)
