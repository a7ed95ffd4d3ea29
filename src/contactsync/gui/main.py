"""GUI entry point for the contactsync desktop viewer."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication

from contactsync.errors import ContactSyncError
from contactsync.gui.ui.main_window import MainWindow
from contactsync.infrastructure.json_contact_source import JsonContactSource
from contactsync.settings.manager import SettingsManager
from contactsync.utils.console_logger import ensure_console_logger

_LOGGER = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Launch the Qt application and return the exit code."""

    arguments = list(sys.argv if argv is None else argv)
    app = QApplication.instance() or QApplication(arguments)
    ensure_console_logger(logging.getLogger("contactsync"), "contactsync-gui")

    try:
        settings = SettingsManager()
        settings.load()
        # A contacts file given on the command line wins over the configured one.
        contacts = Path(arguments[1]) if len(arguments) > 1 else settings.contacts_path()
        if contacts is None:
            _LOGGER.error("No contacts file given and none configured under source.contacts_path")
            return 2
        source = JsonContactSource.from_file(contacts)
        options = settings.sync_options()
    except ContactSyncError as exc:
        _LOGGER.error("Cannot open contacts: %s", exc)
        return 1

    window = MainWindow(source, options)
    window.resize(480, 640)
    window.show()
    window.start()
    return app.exec()


if __name__ == "__main__":  # pragma: no cover - manual launch
    raise SystemExit(main())
