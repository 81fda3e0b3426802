#!/usr/bin/env python3
"""
Ops Dashboard - Main Entry Point

A live operational dashboard: scrolling throughput/traffic charts, node
list, alert feed and top-sources ranking, driven by a synthetic data
generator.

Usage:
    python main.py
    python main.py --debug              # Enable debug logging
    python main.py --interval 500       # Tick every 500 ms
    python main.py --seed 42            # Reproducible synthetic data
"""

import sys
import logging
import argparse
from dataclasses import replace
from PyQt6.QtWidgets import QApplication
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QFont, QPalette, QColor

from services.settings_manager import SimulationSettings, get_settings
from views import DashboardWindow


def setup_logging(debug: bool = False):
    """Configure logging for the application."""
    level = logging.DEBUG if debug else logging.INFO

    # Create formatter
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    # Log startup message
    logger = logging.getLogger(__name__)
    logger.info(f"Logging initialized at {'DEBUG' if debug else 'INFO'} level")


def setup_application(argv=None) -> QApplication:
    """Configure the Qt application."""
    # High DPI support
    QApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )

    app = QApplication(argv if argv is not None else sys.argv)
    app.setApplicationName("Ops Dashboard")
    app.setApplicationVersion("0.1.0")
    app.setOrganizationName("ops-dashboard")

    font = QFont("Segoe UI", 10)
    if not font.exactMatch():
        font = QFont("Helvetica Neue", 10)
    app.setFont(font)

    # Dark palette to match the chart surfaces
    palette = QPalette()
    palette.setColor(QPalette.ColorRole.Window, QColor("#0B0F14"))
    palette.setColor(QPalette.ColorRole.WindowText, QColor("#E5E7EB"))
    palette.setColor(QPalette.ColorRole.Base, QColor("#111827"))
    palette.setColor(QPalette.ColorRole.AlternateBase, QColor("#1F2937"))
    palette.setColor(QPalette.ColorRole.Text, QColor("#E5E7EB"))
    palette.setColor(QPalette.ColorRole.Button, QColor("#1F2937"))
    palette.setColor(QPalette.ColorRole.ButtonText, QColor("#E5E7EB"))
    palette.setColor(QPalette.ColorRole.Highlight, QColor("#00B8D4"))
    palette.setColor(QPalette.ColorRole.HighlightedText, QColor("#0B0F14"))
    app.setPalette(palette)

    return app


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Ops Dashboard')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    parser.add_argument('--config', metavar='PATH', help='Settings file to use instead of the default')
    parser.add_argument('--interval', type=int, metavar='MS', help='Tick period in milliseconds')
    parser.add_argument('--window', type=int, metavar='N', help='Samples kept per chart')
    parser.add_argument('--seed', type=int, help='Random seed for the synthetic data')
    return parser.parse_args(argv)


def apply_overrides(settings_manager, args: argparse.Namespace) -> SimulationSettings:
    """
    Apply command line overrides for this run only.

    Returns a copy of the loaded simulation settings; the settings manager
    is left untouched so later saves never persist the overrides.
    """
    changes = {}
    if args.interval is not None:
        if args.interval <= 0:
            raise SystemExit("--interval must be positive")
        changes["tick_interval_ms"] = args.interval
    if args.window is not None:
        if args.window < 2:
            raise SystemExit("--window must be at least 2")
        changes["window_size"] = args.window
    if args.seed is not None:
        changes["random_seed"] = args.seed
    return replace(settings_manager.simulation, **changes)


def main():
    """Main entry point."""
    # Parse command line arguments
    args = parse_args()

    # Setup logging
    setup_logging(debug=args.debug)

    settings_manager = get_settings(args.config)
    simulation = apply_overrides(settings_manager, args)

    app = setup_application()

    # Create and show main window
    window = DashboardWindow(settings_manager, simulation)
    window.show()
    window.start()

    # Run event loop
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
