"""
Oracle Payload Parsing

The oracle's JSON is schema-hinted but not guaranteed: fields may be missing,
null, of the wrong type or off-taxonomy. Every field is therefore read into an
``OracleField`` that records *how* it was present, and nothing here raises.
"""

from __future__ import annotations

import json
import logging
import math
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, TypeVar

from medlit.core.coercion import coerce_percent, coerce_sub_score
from medlit.core.enums import FieldStatus, ResultSource
from medlit.core.schemas import MethodologyAssessment, ScoreBlock

logger = logging.getLogger(__name__)

T = TypeVar("T")

_CODE_FENCE_START = re.compile(r"^```(?:json)?\s*\n?", re.IGNORECASE)
_CODE_FENCE_END = re.compile(r"\n?```\s*$")


# =============================================================================
# JSON EXTRACTION
# =============================================================================


def parse_oracle_json(content: Any) -> dict[str, Any] | None:
    """
    Multi-strategy JSON object extraction from an oracle response.

    Accepts an already-decoded dict, or a string that may be wrapped in a
    Markdown code fence, surrounded by prose, or carry trailing commas.

    Returns:
        The decoded object, or None when no JSON object can be recovered.
    """
    if isinstance(content, dict):
        return content
    if not isinstance(content, str) or not content.strip():
        return None

    text = content.strip()

    # Strategy 1: strip code fences and parse directly
    cleaned = _CODE_FENCE_END.sub("", _CODE_FENCE_START.sub("", text)).strip()
    decoded = _loads_object(cleaned)
    if decoded is not None:
        return decoded

    # Strategy 2: outermost balanced {...} block
    start = text.find("{")
    if start != -1:
        depth = 0
        in_string = False
        escaped = False
        for i, c in enumerate(text[start:], start):
            if in_string:
                if escaped:
                    escaped = False
                elif c == "\\":
                    escaped = True
                elif c == '"':
                    in_string = False
                continue
            if c == '"':
                in_string = True
            elif c == "{":
                depth += 1
            elif c == "}":
                depth -= 1
                if depth == 0:
                    decoded = _loads_object(text[start : i + 1])
                    if decoded is not None:
                        return decoded
                    cleaned = text[start : i + 1]
                    break

    # Strategy 3: repair trailing commas
    fixed = re.sub(r",\s*}", "}", cleaned)
    fixed = re.sub(r",\s*]", "]", fixed)
    decoded = _loads_object(fixed)
    if decoded is None:
        logger.debug("Could not recover a JSON object from oracle output (%d chars)", len(text))
    return decoded


def _loads_object(text: str) -> dict[str, Any] | None:
    try:
        decoded = json.loads(text)
    except (json.JSONDecodeError, ValueError):
        return None
    return decoded if isinstance(decoded, dict) else None


# =============================================================================
# FIELD MODEL
# =============================================================================


@dataclass(frozen=True)
class OracleField(Generic[T]):
    """One field of an oracle payload: ABSENT | NULL | INVALID(raw) | PRESENT(value)."""

    status: FieldStatus
    value: T | None = None
    raw: Any = None

    @property
    def is_present(self) -> bool:
        return self.status is FieldStatus.PRESENT

    def get(self, default: T | None = None) -> T | None:
        return self.value if self.is_present else default

    @classmethod
    def read(
        cls,
        payload: dict[str, Any] | None,
        key: str,
        coerce: Callable[[Any], T | None],
    ) -> OracleField[T]:
        """Read ``payload[key]`` through ``coerce`` (which returns None on bad input)."""
        if payload is None or key not in payload:
            return cls(FieldStatus.ABSENT)
        raw = payload[key]
        if raw is None:
            return cls(FieldStatus.NULL)
        value = coerce(raw)
        if value is None:
            return cls(FieldStatus.INVALID, raw=raw)
        return cls(FieldStatus.PRESENT, value=value, raw=raw)


def _as_label(raw: Any) -> str | None:
    if isinstance(raw, str) and raw.strip():
        return raw.strip()
    return None


def _as_unit_interval(raw: Any) -> float | None:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        return None
    value = float(raw)
    if math.isnan(value) or not 0.0 <= value <= 1.0:
        return None
    return value


def _as_reasons(raw: Any) -> tuple[str, ...] | None:
    if isinstance(raw, str):
        return (raw.strip(),) if raw.strip() else None
    if not isinstance(raw, list):
        return None
    return tuple(r.strip() for r in raw if isinstance(r, str) and r.strip())


@dataclass(frozen=True)
class OracleClassification:
    """Typed view of a classification payload."""

    study_type: OracleField[str] = field(default_factory=lambda: OracleField(FieldStatus.ABSENT))
    framework: OracleField[str] = field(default_factory=lambda: OracleField(FieldStatus.ABSENT))
    confidence: OracleField[float] = field(default_factory=lambda: OracleField(FieldStatus.ABSENT))
    reasons: OracleField[tuple[str, ...]] = field(
        default_factory=lambda: OracleField(FieldStatus.ABSENT)
    )

    @classmethod
    def from_payload(cls, payload: Any) -> OracleClassification:
        """Build from a dict, a JSON string, or anything else (-> all ABSENT)."""
        data = parse_oracle_json(payload)
        return cls(
            study_type=OracleField.read(data, "studyType", _as_label),
            framework=OracleField.read(data, "framework", _as_label),
            confidence=OracleField.read(data, "confidence", _as_unit_interval),
            reasons=OracleField.read(data, "reasons", _as_reasons),
        )

    @property
    def reason_list(self) -> tuple[str, ...]:
        return self.reasons.get(()) or ()


# =============================================================================
# METHODOLOGY ASSESSMENT
# =============================================================================

_ASSESSMENT_SCALARS = frozenset(
    {"overallQualityScore", "keyLimitations", "recommendation", "confidence"}
)


def parse_assessment_payload(payload: Any) -> MethodologyAssessment | None:
    """
    Build a MethodologyAssessment from oracle output.

    Every top-level object becomes a ScoreBlock; a block whose score cannot
    be read keeps its other fields and ``score=None``.

    Returns:
        None when the payload is not a JSON object at all.
    """
    data = parse_oracle_json(payload)
    if data is None:
        return None

    blocks: dict[str, ScoreBlock] = {}
    for name, value in data.items():
        if name in _ASSESSMENT_SCALARS or not isinstance(value, dict):
            continue
        fields = {k: v for k, v in value.items() if k != "score"}
        blocks[name] = ScoreBlock(score=coerce_sub_score(value.get("score")), **fields)

    limitations = data.get("keyLimitations")
    if isinstance(limitations, str):
        limitations = [limitations]
    elif not isinstance(limitations, list):
        limitations = []

    recommendation = data.get("recommendation")
    return MethodologyAssessment(
        blocks=blocks,
        overall_quality_score=coerce_percent(data.get("overallQualityScore")),
        key_limitations=[str(item) for item in limitations if item],
        recommendation=recommendation if isinstance(recommendation, str) else None,
        confidence=coerce_percent(data.get("confidence")),
        source=ResultSource.ORACLE,
    )
