"""Qt application bootstrap helpers."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

from nimbus.settings import AppSettings

if TYPE_CHECKING:
    from PyQt6.QtWidgets import QApplication

_LOGGER = logging.getLogger(__name__)


def configure_logging(level_name: str) -> None:
    """Root logging setup; unknown level names fall back to INFO."""
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if level == logging.INFO and level_name.upper() != "INFO":
        _LOGGER.warning("Unknown log level %r, using INFO", level_name)


def _configure_application(app: QApplication) -> None:
    """Apply app-wide settings and theme."""
    from nimbus.ui.styles.theme import APP_STYLE

    app.setApplicationName("Nimbus")
    app.setStyle("Fusion")
    app.setStyleSheet(APP_STYLE)


def run_application(
    argv: list[str] | None = None,
    settings: AppSettings | None = None,
) -> int:
    """Create and run the main Qt application."""
    from PyQt6.QtWidgets import QApplication

    from nimbus.ui.analysis_session import wait_for_detached_workers
    from nimbus.ui.main_window import MainWindow

    settings = settings or AppSettings.from_env()
    configure_logging(settings.log_level)

    app = QApplication(sys.argv if argv is None else argv)
    _configure_application(app)

    window = MainWindow(settings)
    window.show()
    _LOGGER.info("Nimbus started (coach API %s)", settings.api_base_url)

    code = app.exec()
    # Detached requests end within the API timeout.
    wait_for_detached_workers()
    return code
