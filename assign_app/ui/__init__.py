"""Qt UI components for the admin console."""

from .admin_main_window import AdminMainWindow
from .dialog_helpers import (
    check_unsaved_changes,
    confirm_delete_question,
    show_error,
    show_info,
    show_warning,
)

__all__ = [
    "AdminMainWindow",
    "check_unsaved_changes",
    "confirm_delete_question",
    "show_error",
    "show_info",
    "show_warning",
]
