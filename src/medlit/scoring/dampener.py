"""
Confidence-Weighted Score Dampening

Shrinks the oracle's quality scores in proportion to how much the input can
be trusted.

- effective confidence = max(validator confidence, oracle self-reported confidence)
- >= 80: scores are left as reported
- otherwise every 1-5 sub-score is scaled by the band factor and floored at 1,
  and the 0-100 overall score is scaled by the same factor without a floor
- a limitation note is prepended to the assessment's limitations

Precondition: apply at most once per payload. Nothing here can tell whether
a block was already dampened; ``dampen_assessment`` refuses to run twice on
the same MethodologyAssessment by checking its ``dampened`` flag.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from medlit.core.coercion import coerce_percent, round_half_up
from medlit.core.schemas import MethodologyAssessment, ScoreBlock

FULL_TRUST_CONFIDENCE = 80
MIN_SUB_SCORE = 1

# (exclusive upper bound of the confidence band, scale factor)
CONFIDENCE_BANDS: tuple[tuple[int, float], ...] = (
    (50, 0.30),
    (60, 0.50),
    (70, 0.65),
    (80, 0.80),
)


@dataclass(frozen=True)
class DampeningResult:
    """Output of ``dampen``; ``limitation`` is None when nothing was discounted."""

    blocks: dict[str, ScoreBlock]
    overall_score: int | None
    limitation: str | None
    effective_confidence: int
    scale_factor: float

    @property
    def applied(self) -> bool:
        return self.scale_factor < 1.0


def effective_confidence(
    pre_validation_confidence: int,
    self_reported_confidence: Any = None,
) -> int:
    """Max of the validator confidence and the oracle's own (absent counts as 0)."""
    reported = coerce_percent(self_reported_confidence) or 0
    validated = coerce_percent(pre_validation_confidence) or 0
    return max(validated, reported)


def scale_factor_for(confidence: int) -> float:
    """Scale factor for an effective confidence; 1.0 means full trust."""
    if confidence >= FULL_TRUST_CONFIDENCE:
        return 1.0
    for upper, factor in CONFIDENCE_BANDS:
        if confidence < upper:
            return factor
    return 1.0


def limitation_note(confidence: int, factor: float) -> str:
    return (
        f"Scores discounted to {factor:.0%} of the reported values because input "
        f"confidence was {confidence}% (below the {FULL_TRUST_CONFIDENCE}% needed "
        "for full trust); treat them as provisional."
    )


def _rescale_block(block: ScoreBlock, factor: float) -> ScoreBlock:
    if block.score is None:
        return block.model_copy(deep=True)
    score = max(MIN_SUB_SCORE, round_half_up(block.score * factor))
    return block.model_copy(update={"score": score}, deep=True)


def dampen(
    score_blocks: Mapping[str, ScoreBlock],
    overall_score: int | None,
    pre_validation_confidence: int,
    self_reported_confidence: Any = None,
) -> DampeningResult:
    """
    Rescale sub-scores and the overall score by the confidence band factor.

    Args:
        score_blocks: Named ScoreBlocks as received from the oracle. Not mutated.
        overall_score: Overall quality score (0-100), or None when not reported.
        pre_validation_confidence: Methodology validator confidence (0-100).
        self_reported_confidence: Oracle's own confidence (0-100, or a 0-1
            fraction), None when absent.

    Returns:
        DampeningResult with copies of the blocks.
    """
    confidence = effective_confidence(pre_validation_confidence, self_reported_confidence)
    factor = scale_factor_for(confidence)

    if factor >= 1.0:
        return DampeningResult(
            blocks={name: block.model_copy(deep=True) for name, block in score_blocks.items()},
            overall_score=overall_score,
            limitation=None,
            effective_confidence=confidence,
            scale_factor=1.0,
        )

    return DampeningResult(
        blocks={name: _rescale_block(block, factor) for name, block in score_blocks.items()},
        overall_score=None if overall_score is None else round_half_up(overall_score * factor),
        limitation=limitation_note(confidence, factor),
        effective_confidence=confidence,
        scale_factor=factor,
    )


def dampen_assessment(
    assessment: MethodologyAssessment,
    pre_validation_confidence: int,
) -> MethodologyAssessment:
    """
    Return a dampened copy of ``assessment``.

    The limitation note goes first in ``key_limitations``. An assessment that
    was already dampened is returned unchanged.
    """
    if assessment.dampened:
        return assessment

    result = dampen(
        assessment.blocks,
        assessment.overall_quality_score,
        pre_validation_confidence,
        assessment.confidence,
    )
    if not result.applied:
        return assessment.model_copy(deep=True)

    return assessment.model_copy(
        update={
            "blocks": result.blocks,
            "overall_quality_score": result.overall_score,
            "key_limitations": [result.limitation, *assessment.key_limitations],
            "dampened": True,
        },
        deep=True,
    )
