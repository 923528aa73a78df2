"""
Classification Reconciliation

Turns an untrusted oracle classification payload into a ClassificationRecord.

Fixed precedence, one field at a time:
1. Label normalization (with the rationale as negation context)
2. Rationale inference (only for fields still at the sentinel)
3. Study-design hint from the extraction payload (study type only)
4. Framework inference table (framework only)

A field is never overwritten once an earlier stage set a non-sentinel value.
Each later stage that fills a field appends a provenance note to ``reasons``.
"""

from __future__ import annotations

import logging
from typing import Any

from medlit.classification.frameworks import infer_framework_from_study_type
from medlit.classification.normalizer import normalize_framework, normalize_study_type
from medlit.classification.override import infer_from_reasons, join_reasons
from medlit.core.enums import ReportingFramework, StudyType
from medlit.core.schemas import ClassificationRecord
from medlit.oracle.payload import OracleClassification

logger = logging.getLogger(__name__)


def reconcile_classification(
    payload: Any,
    design_hint: Any = None,
) -> ClassificationRecord:
    """
    Reconcile an oracle classification payload.

    Args:
        payload: Raw oracle output (dict, JSON string, or anything else).
        design_hint: Optional ``studyDesign.type`` value from the extraction
            payload, consulted only if the study type is still unknown.

    Returns:
        A fully populated ClassificationRecord. Never raises on bad input.
    """
    parsed = payload if isinstance(payload, OracleClassification) else (
        OracleClassification.from_payload(payload)
    )
    reasons = list(parsed.reason_list)
    rationale = join_reasons(reasons)

    study_type = normalize_study_type(parsed.study_type.get(), negation_context=rationale)
    framework = normalize_framework(parsed.framework.get())

    if parsed.study_type.is_present and study_type.is_sentinel:
        label = parsed.study_type.get()
        if label != StudyType.OTHER.value:
            logger.debug("Study type label %r not recognised or contradicted by rationale", label)

    if study_type.is_sentinel or framework.is_sentinel:
        inferred = infer_from_reasons(rationale)
        if study_type.is_sentinel and inferred.study_type is not None:
            study_type = inferred.study_type
            reasons.append(f"Study type inferred from rationale: {study_type.label}")
            logger.debug("Study type overridden from rationale (%s)", inferred.study_type_rule)
        if framework.is_sentinel and inferred.framework is not None:
            framework = inferred.framework
            reasons.append(f"Framework inferred from rationale: {framework.label}")
            logger.debug("Framework overridden from rationale (%s)", inferred.framework_rule)

    if study_type.is_sentinel and design_hint is not None:
        hinted = normalize_study_type(design_hint)
        if not hinted.is_sentinel:
            study_type = hinted
            reasons.append(f"Study type taken from reported study design: {study_type.label}")

    if framework.is_sentinel:
        framework = infer_framework_from_study_type(study_type)
        if framework is not ReportingFramework.NONE:
            reasons.append(f"Framework inferred from study type: {framework.label}")

    return ClassificationRecord(
        study_type=study_type,
        framework=framework,
        confidence=parsed.confidence.get(),
        reasons=tuple(reasons),
    )
