"""
EQ Curve - Einstiegspunkt

Interaktive Darstellung von EQ-Kurven aus Hochpass, Tiefpass,
parametrischen Bändern und Allpässen.

Verwendung:
    python -m eqcurve [--debug]
"""

import logging
import sys


def main():
    """Start the EQ Curve application."""
    logging.basicConfig(
        level=logging.DEBUG if "--debug" in sys.argv else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger = logging.getLogger("eqcurve")

    # Check Python version
    if sys.version_info < (3, 11):
        logger.error("Python 3.11 or higher is required (current: %s)", sys.version)
        sys.exit(1)

    # Import PySide6 (late import for faster error if not installed)
    try:
        from PySide6.QtWidgets import QApplication
        from PySide6.QtCore import Qt
    except ImportError:
        logger.error("PySide6 is not installed. Install with: pip install PySide6")
        sys.exit(1)

    # Import our application
    from eqcurve.gui import MainWindow

    # Enable High DPI scaling
    QApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )

    # Create application
    app = QApplication([arg for arg in sys.argv if arg != "--debug"])
    app.setApplicationName("EQ Curve")
    app.setApplicationVersion("1.0.0")
    app.setOrganizationName("EQCurve")

    # Create and show main window
    window = MainWindow()
    window.show()

    # Run application
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
