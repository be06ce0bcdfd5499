"""Application entry point for the AssignQt admin console."""

from __future__ import annotations

import sys

from pydantic import ValidationError
from PySide6.QtWidgets import QApplication

from assign_app.core.admin_console import AdminConsole
from assign_app.ui.admin_main_window import AdminMainWindow
from assign_app.utils.config import load_config
from assign_app.utils.logging_config import configure_logging


def main() -> None:
    """Load configuration, initialize logging, and launch the Qt UI."""
    try:
        config = load_config()
    except ValidationError as exc:
        print(f"Invalid AssignQt configuration:\n{exc}", file=sys.stderr)
        sys.exit(2)

    logger = configure_logging(config.log_level)
    logger.info("Starting AssignQt against %s", config.api_base_url)

    console = AdminConsole.from_config(config)

    app = QApplication(sys.argv)
    window = AdminMainWindow(console=console, config=config)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
