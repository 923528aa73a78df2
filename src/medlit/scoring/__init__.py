"""
MedLit Scoring Layer

Confidence-weighted dampening of oracle quality scores.
"""

from medlit.scoring.dampener import (
    CONFIDENCE_BANDS,
    FULL_TRUST_CONFIDENCE,
    DampeningResult,
    dampen,
    dampen_assessment,
    effective_confidence,
    scale_factor_for,
)

__all__ = [
    "CONFIDENCE_BANDS",
    "FULL_TRUST_CONFIDENCE",
    "DampeningResult",
    "dampen",
    "dampen_assessment",
    "effective_confidence",
    "scale_factor_for",
]
