"""Review queue constants shared across UI and core layers."""

REVIEW_STATUS_ALL: str = "all"
REVIEW_STATUS_PENDING: str = "pending"
REVIEW_STATUS_REVIEWED: str = "reviewed"
REVIEW_STATUS_FILTERS: tuple[str, ...] = (
    REVIEW_STATUS_ALL,
    REVIEW_STATUS_PENDING,
    REVIEW_STATUS_REVIEWED,
)

PAGE_SIZE_CHOICES: tuple[int, ...] = (5, 10, 20, 50, 100)
DEFAULT_PAGE_SIZE: int = 10
VISIBLE_PAGE_BUTTONS: int = 5
POINTS_STEP: float = 0.1
POINTS_DECIMALS: int = 2

UNKNOWN_ANSWER_PLACEHOLDER: str = "—"
