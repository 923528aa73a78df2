"""
MedLit Validation Layer

Content validity scoring for methods-section excerpts.
"""

from medlit.validation.keywords import ANTI_PATTERNS, CATEGORY_WEIGHTS, CategoryWeight
from medlit.validation.methodology import (
    MIN_TEXT_LENGTH,
    is_valid_confidence,
    score_evidence,
    validate_methodology_text,
)

__all__ = [
    "ANTI_PATTERNS",
    "CATEGORY_WEIGHTS",
    "CategoryWeight",
    "MIN_TEXT_LENGTH",
    "is_valid_confidence",
    "score_evidence",
    "validate_methodology_text",
]
