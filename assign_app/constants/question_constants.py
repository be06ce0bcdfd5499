"""Question authoring constants."""

DEFAULT_QUESTION_TYPE: str = "mcq_single"
DEFAULT_QUESTION_POINTS: int = 1
MIN_MATCH_PAIRS: int = 2
