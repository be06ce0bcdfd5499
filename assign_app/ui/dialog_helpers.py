"""Helper functions for common dialog patterns in the admin UI."""

from __future__ import annotations

from PySide6.QtGui import QFont
from PySide6.QtWidgets import QMessageBox, QWidget


def _apply_optional_font(widget: QWidget, font_point_size: int | None) -> None:
    if font_point_size is None or font_point_size <= 0:
        return

    font: QFont = widget.font()
    font.setPointSize(font_point_size)
    widget.setFont(font)


def confirm_delete_question(parent: QWidget, question_label: str) -> bool:
    """Ask before deleting a question on the server.

    Args:
        parent: Parent widget for the dialog
        question_label: Short description of the question (type and prompt)

    Returns:
        True if user confirmed, False otherwise
    """
    reply = QMessageBox.question(
        parent,
        "Delete Question",
        f"Delete this question?\n\n{question_label}\n\nThis cannot be undone.",
        QMessageBox.Yes | QMessageBox.No,
        QMessageBox.No,
    )
    return reply == QMessageBox.Yes


def check_unsaved_changes(parent: QWidget) -> bool | None:
    """Ask what to do with an edited question before closing the editor.

    Returns:
        True if user wants to save, False if discard, None if cancelled
    """
    reply = QMessageBox.question(
        parent,
        "Unsaved Changes",
        "The question has unsaved changes. Save them before closing?",
        QMessageBox.Yes | QMessageBox.No | QMessageBox.Cancel,
        QMessageBox.Yes,
    )

    if reply == QMessageBox.Yes:
        return True
    if reply == QMessageBox.No:
        return False
    return None


def show_error(parent: QWidget, title: str, message: str) -> None:
    QMessageBox.critical(parent, title, message)


def show_info(
    parent: QWidget,
    title: str,
    message: str,
    *,
    font_point_size: int | None = None,
) -> None:
    """Show information dialog, optionally with a larger font."""
    msg_box = QMessageBox(parent)
    msg_box.setIcon(QMessageBox.Information)
    msg_box.setWindowTitle(title)
    msg_box.setText(message)
    msg_box.setStandardButtons(QMessageBox.Ok)
    _apply_optional_font(msg_box, font_point_size)
    if font_point_size is not None and font_point_size > 0:
        msg_box.setStyleSheet(
            f"QLabel {{ font-size: {font_point_size}pt; }}\n"
            f"QPushButton {{ font-size: {font_point_size}pt; }}"
        )
    msg_box.exec()


def show_warning(parent: QWidget, title: str, message: str) -> None:
    QMessageBox.warning(parent, title, message)
