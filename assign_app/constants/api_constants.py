"""Remote API configuration constants."""

DEFAULT_API_BASE_URL: str = "https://learnarabic.iwings-digital.com"
DEFAULT_TIMEOUT_SECONDS: float = 15.0

QUESTIONS_ENDPOINT: str = "/admin/questions"
ANSWER_REVIEWS_ENDPOINT: str = "/admin/answer-reviews"
ANSWER_REVIEW_SUBMIT_ENDPOINT: str = "/admin/answer-reviews/review"
ASSIGNMENTS_ENDPOINT: str = "/admin/assignments"
ASSIGNMENT_BLOCKS_ENDPOINT: str = "/admin/assignment-blocks"
STUDENTS_ENDPOINT: str = "/admin/students"

FALLBACK_ERROR_MESSAGE: str = "Something went wrong. Please try again."
