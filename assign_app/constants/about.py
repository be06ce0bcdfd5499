"""Static metadata describing AssignQt."""

APP_NAME = "AssignQt"
APP_VERSION = "0.1"
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "AssignQt is the administration console for assignment questions and answer reviews. "
    "Use it to author the question types offered to students and to grade the answers "
    "that need a teacher's judgement."
)

HELP_TEXT = (
    "Questions: pick an assignment and a block, then add or edit questions. Changing the "
    "question type replaces the content with that type's template.\n\n"
    "Answer Reviews: filter by status, student or assignment and open a pending answer to "
    "mark it correct or incorrect and award between 0 and the question's maximum points."
)
