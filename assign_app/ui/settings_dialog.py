"""Settings dialog for the API connection and display preferences."""

from __future__ import annotations

from PySide6.QtWidgets import (
    QDialog,
    QDoubleSpinBox,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLineEdit,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
)

from assign_app.ui.dialog_helpers import show_warning


class SettingsDialog(QDialog):
    """Dialog for editing connection settings for the running session."""

    def __init__(
        self,
        parent=None,
        api_base_url: str = "",
        api_token: str | None = None,
        timeout_seconds: float = 15.0,
        ui_font_size: int = 10,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setModal(True)
        self.setMinimumWidth(460)

        self._api_base_url = api_base_url
        self._api_token = api_token or ""
        self._timeout_seconds = timeout_seconds
        self._ui_font_size = ui_font_size

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        connection_group = QGroupBox("API Connection")
        connection_layout = QFormLayout()
        connection_group.setLayout(connection_layout)

        self.base_url_input = QLineEdit(self._api_base_url)
        self.base_url_input.setPlaceholderText("https://example.com")
        connection_layout.addRow("Base URL:", self.base_url_input)

        self.token_input = QLineEdit(self._api_token)
        self.token_input.setEchoMode(QLineEdit.Password)
        self.token_input.setToolTip("Bearer token of an admin account")
        connection_layout.addRow("Access token:", self.token_input)

        self.timeout_spinbox = QDoubleSpinBox()
        self.timeout_spinbox.setRange(1.0, 120.0)
        self.timeout_spinbox.setDecimals(1)
        self.timeout_spinbox.setSuffix(" s")
        self.timeout_spinbox.setValue(self._timeout_seconds)
        connection_layout.addRow("Request timeout:", self.timeout_spinbox)

        layout.addWidget(connection_group)

        display_group = QGroupBox("Display")
        display_layout = QFormLayout()
        display_group.setLayout(display_layout)

        self.ui_font_spinbox = QSpinBox()
        self.ui_font_spinbox.setRange(8, 24)
        self.ui_font_spinbox.setValue(self._ui_font_size)
        self.ui_font_spinbox.setSuffix(" pt")
        display_layout.addRow("UI font size:", self.ui_font_spinbox)

        layout.addWidget(display_group)

        button_row = QHBoxLayout()
        button_row.addStretch()

        self.cancel_button = QPushButton("Cancel")
        self.cancel_button.clicked.connect(self.reject)  # type: ignore[arg-type]
        button_row.addWidget(self.cancel_button)

        self.apply_button = QPushButton("Apply")
        self.apply_button.clicked.connect(self._handle_apply)
        self.apply_button.setDefault(True)
        button_row.addWidget(self.apply_button)

        layout.addLayout(button_row)

    def _handle_apply(self) -> None:
        if not self.get_api_base_url():
            show_warning(self, "Missing URL", "Enter the base URL of the API.")
            return
        self.accept()

    def get_api_base_url(self) -> str:
        return self.base_url_input.text().strip().rstrip("/")

    def get_api_token(self) -> str | None:
        return self.token_input.text().strip() or None

    def get_timeout_seconds(self) -> float:
        return self.timeout_spinbox.value()

    def get_ui_font_size(self) -> int:
        return self.ui_font_spinbox.value()
