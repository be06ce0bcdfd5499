"""Qt UI constants used across widgets."""

WINDOW_TITLE: str = "AssignQt Admin Console"

MODE_BUTTON_QUESTIONS: str = "Questions"
MODE_BUTTON_REVIEWS: str = "Answer Reviews"

QUESTIONS_ADD_BUTTON: str = "Add Question"
QUESTIONS_EDIT_BUTTON: str = "Edit Question"
QUESTIONS_DELETE_BUTTON: str = "Delete Question"
QUESTIONS_REFRESH_BUTTON: str = "Refresh"
QUESTIONS_EMPTY_STATE: str = "No questions in this block."
ASSIGNMENT_PLACEHOLDER: str = "Select an assignment…"
BLOCK_PLACEHOLDER: str = "Select a block…"
BLOCK_LABEL_TEMPLATE: str = "Block {order}"

EDITOR_TITLE_NEW: str = "Add Question"
EDITOR_TITLE_EDIT: str = "Edit Question"
EDITOR_SAVE_NEW: str = "Add"
EDITOR_SAVE_EDIT: str = "Update"
EDITOR_SAVING: str = "Saving…"
PLACEHOLDER_QUESTION: str = "Question text (HTML or Markdown)."

REVIEWS_EMPTY_STATE: str = "No answers to review."
REVIEWS_REVIEW_BUTTON: str = "Review"
REVIEWS_DONE_LABEL: str = "Reviewed"
REVIEW_STATUS_LABELS: dict[str, str] = {
    "all": "All",
    "pending": "Pending review",
    "reviewed": "Reviewed",
}
ALL_STUDENTS_LABEL: str = "All students"
ALL_ASSIGNMENTS_LABEL: str = "All assignments"
RANGE_TEMPLATE: str = "Showing {first} - {last} of {total} answers"

REVIEW_DIALOG_TITLE: str = "Review Answer"
REVIEW_SAVE_BUTTON: str = "Save Review"
REVIEW_SAVING: str = "Saving…"
REVIEW_CORRECT_CHECKBOX: str = "The answer is correct"
MAX_POINTS_TEMPLATE: str = "Maximum: {max_points:g} points"

EMPTY_CELL: str = "-"
