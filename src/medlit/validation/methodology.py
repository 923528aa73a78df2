"""
Content Validity Scorer

Decides from raw text alone whether it plausibly is a methods section.

Scoring:
- Reject outright (confidence 0) when the trimmed text is under 100 characters
- Count trigger phrases per weighted category
- Gate: fewer than 2 matches or a weighted score under 3 -> confidence 0
- Otherwise: evidence strength (max 60) + category diversity (max 25)
  + design/statistics/study-type bonus (max 15)
- Each anti-pattern phrase multiplies the confidence by 0.75
- Clamp to [0, 100], round half up; valid when confidence >= 60
"""

from __future__ import annotations

from typing import Any, Mapping

from medlit.core.coercion import round_half_up
from medlit.core.schemas import (
    METHODOLOGY_CONFIDENCE_THRESHOLD,
    ValidationDetails,
    ValidationRecord,
)
from medlit.validation.keywords import (
    CATEGORY_WEIGHTS,
    HIGH_VALUE_CATEGORIES,
    count_anti_patterns,
)

MIN_TEXT_LENGTH = 100

MIN_TOTAL_MATCHES = 2
MIN_WEIGHTED_SCORE = 3.0

EVIDENCE_MULTIPLIER = 4
EVIDENCE_CAP = 60
DIVERSITY_MULTIPLIER = 6
DIVERSITY_CAP = 25
HIGH_VALUE_MULTIPLIER = 2
HIGH_VALUE_CAP = 15

# Each anti-pattern keeps 75% of the remaining confidence.
ANTI_PATTERN_PENALTY = 0.75

_WEIGHTS: dict[str, float] = {c.category.value: c.weight for c in CATEGORY_WEIGHTS}
_HIGH_VALUE_KEYS = frozenset(c.value for c in HIGH_VALUE_CATEGORIES)


def score_evidence(category_matches: Mapping[str, int], anti_pattern_matches: int) -> int:
    """
    Confidence (0-100) for a given evidence profile.

    Args:
        category_matches: Match count per category name (EvidenceCategory value).
            Unknown names are ignored.
        anti_pattern_matches: Number of anti-pattern phrases found.
    """
    counts = {name: count for name, count in category_matches.items() if name in _WEIGHTS}
    weighted_score = sum(count * _WEIGHTS[name] for name, count in counts.items())
    total_matches = sum(counts.values())
    categories_with_matches = sum(1 for count in counts.values() if count > 0)

    confidence = 0.0
    if total_matches >= MIN_TOTAL_MATCHES and weighted_score >= MIN_WEIGHTED_SCORE:
        high_value = sum(count for name, count in counts.items() if name in _HIGH_VALUE_KEYS)
        confidence += min(weighted_score * EVIDENCE_MULTIPLIER, EVIDENCE_CAP)
        confidence += min(categories_with_matches * DIVERSITY_MULTIPLIER, DIVERSITY_CAP)
        confidence += min(high_value * HIGH_VALUE_MULTIPLIER, HIGH_VALUE_CAP)

    confidence *= ANTI_PATTERN_PENALTY ** max(0, anti_pattern_matches)
    return round_half_up(max(0.0, min(100.0, confidence)))


def is_valid_confidence(confidence: int) -> bool:
    return confidence >= METHODOLOGY_CONFIDENCE_THRESHOLD


def validate_methodology_text(text: Any) -> ValidationRecord:
    """
    Validate whether ``text`` appears to be a methodology/methods section.

    Args:
        text: Raw text, any length, untrimmed. Non-strings count as empty.

    Returns:
        ValidationRecord with confidence, decision, reason and evidence counts.
    """
    trimmed = text.strip() if isinstance(text, str) else ""

    if len(trimmed) < MIN_TEXT_LENGTH:
        return ValidationRecord(
            is_valid=False,
            confidence=0,
            reason=(
                "Text is too short to be a meaningful methodology section "
                f"(minimum {MIN_TEXT_LENGTH} characters)."
            ),
            details=ValidationDetails.empty(),
        )

    normalized = trimmed.lower()
    breakdown = {c.category.value: c.count_matches(normalized) for c in CATEGORY_WEIGHTS}
    anti_pattern_matches = count_anti_patterns(normalized)

    total_matches = sum(breakdown.values())
    categories_with_matches = sum(1 for count in breakdown.values() if count > 0)
    confidence = score_evidence(breakdown, anti_pattern_matches)
    is_valid = is_valid_confidence(confidence)

    if is_valid:
        reason = (
            f"Text appears to contain methodology content ({total_matches} methodology "
            f"indicators found across {categories_with_matches} categories)."
        )
    elif anti_pattern_matches > 0:
        reason = (
            f"Text appears to be from a different section ({anti_pattern_matches} "
            "non-methodology indicators detected)."
        )
    else:
        reason = (
            f"Text lacks sufficient methodology indicators (found {total_matches}, "
            f"need at least {MIN_TOTAL_MATCHES} with good distribution across categories)."
        )

    return ValidationRecord(
        is_valid=is_valid,
        confidence=confidence,
        reason=reason,
        details=ValidationDetails(
            total_matches=total_matches,
            categories_with_matches=categories_with_matches,
            anti_pattern_matches=anti_pattern_matches,
            category_breakdown=breakdown,
        ),
    )
