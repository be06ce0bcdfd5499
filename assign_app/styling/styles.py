"""Qt stylesheets built from the color palette."""

from .color_palette import ColorPalette, Theme


class Styles:
    """Helper class to generate Qt stylesheets based on the current theme."""

    @staticmethod
    def get_main_window_style(theme: Theme = Theme.LIGHT) -> str:
        return f"""
            QWidget {{
                background-color: {ColorPalette.SURFACE.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                font-family: 'Segoe UI', 'Noto Sans Arabic', sans-serif;
            }}
            QPushButton {{
                background-color: {ColorPalette.SURFACE_ALT.get(theme)};
                border: 1px solid {ColorPalette.BORDER.get(theme)};
                border-radius: 6px;
                padding: 6px 12px;
            }}
            QPushButton:hover {{
                background-color: {ColorPalette.HOVER.get(theme)};
            }}
            QPushButton:checked, QPushButton:default {{
                background-color: {ColorPalette.ACCENT.get(theme)};
                color: {ColorPalette.ACCENT_TEXT.get(theme)};
                border: 1px solid {ColorPalette.ACCENT.get(theme)};
            }}
            QPushButton:disabled {{
                color: {ColorPalette.TEXT_MUTED.get(theme)};
            }}
            QLineEdit, QPlainTextEdit, QSpinBox, QDoubleSpinBox, QComboBox {{
                border: 1px solid {ColorPalette.BORDER.get(theme)};
                border-radius: 6px;
                padding: 4px;
            }}
            QTableWidget {{
                gridline-color: {ColorPalette.BORDER.get(theme)};
                alternate-background-color: {ColorPalette.SURFACE_ALT.get(theme)};
            }}
            QGroupBox {{
                border: 1px solid {ColorPalette.BORDER.get(theme)};
                border-radius: 6px;
                margin-top: 6px;
                padding-top: 10px;
            }}
        """

    @staticmethod
    def get_status_badge_style(is_pending: bool, theme: Theme = Theme.LIGHT) -> str:
        color = ColorPalette.PENDING if is_pending else ColorPalette.REVIEWED
        return f"color: {color.get(theme)}; font-weight: 600;"

    @staticmethod
    def get_error_label_style(theme: Theme = Theme.LIGHT) -> str:
        return f"color: {ColorPalette.ERROR.get(theme)};"

    @staticmethod
    def get_muted_label_style(theme: Theme = Theme.LIGHT) -> str:
        return f"color: {ColorPalette.TEXT_MUTED.get(theme)};"
