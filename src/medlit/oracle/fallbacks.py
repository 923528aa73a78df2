"""
Fallback Results

Neutral results used when the oracle is unavailable or its answer cannot be
used. They are clearly marked (``source=fallback``) so the host can tell the
reader to review the document manually.
"""

import re

from medlit.core.enums import ResultSource
from medlit.core.schemas import ClassificationRecord, MethodologyAssessment, ScoreBlock

MODEL_UNAVAILABLE_MESSAGE = (
    "The text-generation model is not available. Showing heuristic preview instead."
)

EXCERPT_LENGTH = 360


def create_fallback_classification(warning: str | None = None) -> ClassificationRecord:
    """Sentinel classification (Other / None)."""
    return ClassificationRecord.unknown(warning)


def create_fallback_methodology(
    methods_text: str | None,
    message: str = MODEL_UNAVAILABLE_MESSAGE,
    warning: str | None = None,
) -> MethodologyAssessment:
    """
    Neutral methodology assessment.

    Scores sit mid-scale (randomization slightly below) and the recommendation
    quotes the start of the methods text so the reader can review it.
    """
    clean_text = re.sub(r"\s+", " ", methods_text or "").strip()
    excerpt = clean_text[:EXCERPT_LENGTH]
    if excerpt:
        ellipsis = "…" if len(clean_text) > EXCERPT_LENGTH else ""
        recommendation = f"Review methods manually. Excerpt: {excerpt}{ellipsis}"
    else:
        recommendation = "Review methods manually once the model is available."

    return MethodologyAssessment(
        blocks={
            "researchQuestionClarity": ScoreBlock(
                score=3, strengths=["Model unavailable; review manually."], concerns=[]
            ),
            "sampleSizePower": ScoreBlock(
                score=3,
                calculated=None,
                actual=None,
                assessment="Unable to estimate power without model support.",
            ),
            "randomization": ScoreBlock(score=2, method="Not assessed", concerns=[]),
            "blinding": ScoreBlock(
                participants=False,
                assessors=False,
                analysts=False,
                concerns=["No automated assessment available."],
            ),
            "statisticalApproach": ScoreBlock(
                score=3, methods=[], strengths=[], concerns=["Pending model-driven review."]
            ),
        },
        overall_quality_score=50,
        key_limitations=[
            "The methodology could not be evaluated automatically. Review methods manually."
        ],
        recommendation=recommendation,
        source=ResultSource.FALLBACK,
        message=message,
        warning=warning,
    )
