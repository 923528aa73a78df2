"""
MedLit Core Schemas

Pydantic models for the records exchanged with the surrounding application.

Key Design Principles:
1. Records are created fresh per call and never persisted here
2. Output records are immutable (frozen=True)
3. Every record is fully populated: unknown values use the enum sentinels
4. Field names are snake_case; dump with ``by_alias=True`` for camelCase keys
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from medlit.core.enums import (
    EvidenceCategory,
    ReportingFramework,
    ReportStatus,
    ResultSource,
    StudyType,
)

# Acceptance threshold for the methodology validator (0-100 scale).
METHODOLOGY_CONFIDENCE_THRESHOLD = 60


def _record_config(frozen: bool = True) -> ConfigDict:
    return ConfigDict(
        frozen=frozen,
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=False,
    )


# =============================================================================
# CLASSIFICATION
# =============================================================================


class ClassificationRecord(BaseModel):
    """
    Reconciled study classification for one document.

    Invariants:
    - study_type / framework are never None; OTHER / NONE mean "unknown"
    - confidence is either None (not reported) or within [0, 1]
    - reasons keep the oracle's order; provenance notes are appended after them
    """

    model_config = _record_config()

    study_type: StudyType = StudyType.OTHER
    framework: ReportingFramework = ReportingFramework.NONE
    confidence: float | None = Field(default=None, ge=0.0, le=1.0)
    reasons: tuple[str, ...] = ()

    @classmethod
    def unknown(cls, reason: str | None = None) -> ClassificationRecord:
        """Sentinel-filled record used when classification fails."""
        return cls(reasons=(reason,) if reason else ())

    @property
    def is_unknown(self) -> bool:
        return self.study_type.is_sentinel and self.framework.is_sentinel


# =============================================================================
# VALIDATION
# =============================================================================


class ValidationDetails(BaseModel):
    """Evidence counts behind a validation decision."""

    model_config = _record_config()

    total_matches: int = Field(default=0, ge=0)
    categories_with_matches: int = Field(default=0, ge=0)
    anti_pattern_matches: int = Field(default=0, ge=0)
    category_breakdown: dict[str, int] = Field(default_factory=dict)

    @classmethod
    def empty(cls) -> ValidationDetails:
        return cls(category_breakdown={c.value: 0 for c in EvidenceCategory})


class ValidationRecord(BaseModel):
    """
    Result of checking whether a text looks like a methods section.

    Invariants:
    - 0 <= confidence <= 100
    - is_valid == (confidence >= threshold)
    """

    model_config = _record_config()

    is_valid: bool
    confidence: int = Field(..., ge=0, le=100)
    threshold: int = METHODOLOGY_CONFIDENCE_THRESHOLD
    reason: str
    details: ValidationDetails = Field(default_factory=ValidationDetails.empty)


# =============================================================================
# METHODOLOGY ASSESSMENT
# =============================================================================


class ScoreBlock(BaseModel):
    """
    Named sub-assessment returned by the oracle.

    Only ``score`` is interpreted; every other field (strengths, concerns,
    method, ...) is carried through untouched.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    score: int | None = Field(default=None, ge=1, le=5)


class MethodologyAssessment(BaseModel):
    """
    Quality assessment of a methods section.

    ``blocks`` maps the oracle's sub-assessment names (e.g.
    ``sampleSizePower``) to their ScoreBlock. ``confidence`` is the oracle's
    self-reported confidence on a 0-100 scale.
    """

    model_config = _record_config(frozen=False)

    blocks: dict[str, ScoreBlock] = Field(default_factory=dict)
    overall_quality_score: int | None = Field(default=None, ge=0, le=100)
    key_limitations: list[str] = Field(default_factory=list)
    recommendation: str | None = None
    confidence: int | None = Field(default=None, ge=0, le=100)
    source: ResultSource = ResultSource.ORACLE
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    message: str | None = None
    warning: str | None = None
    dampened: bool = False

    def to_payload(self) -> dict[str, Any]:
        """Flatten back into the oracle's JSON shape (blocks at top level)."""
        payload: dict[str, Any] = {
            name: block.model_dump(exclude_none=True) for name, block in self.blocks.items()
        }
        payload["overallQualityScore"] = self.overall_quality_score
        payload["keyLimitations"] = list(self.key_limitations)
        payload["recommendation"] = self.recommendation
        if self.confidence is not None:
            payload["confidence"] = self.confidence
        return payload


# =============================================================================
# PIPELINE REPORT
# =============================================================================


class MethodologyReport(BaseModel):
    """Everything the pipeline learned about one methods excerpt."""

    model_config = _record_config()

    status: ReportStatus
    validation: ValidationRecord
    classification: ClassificationRecord | None = None
    assessment: MethodologyAssessment | None = None
    warnings: tuple[str, ...] = ()
