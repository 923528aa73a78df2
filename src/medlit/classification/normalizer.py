"""
Canonical Label Normalizer

Maps arbitrary oracle-supplied label strings onto the closed StudyType and
ReportingFramework vocabularies.

Order of evaluation:
1. Non-string / empty input -> sentinel
2. Exact (case-sensitive) match on a canonical enum value -> that value
3. Ordered substring rules on the lowercased label -> first match
4. Nothing matched -> sentinel

Within step 3 the study-type table checks "systematic review of ..." first,
then every primary-study design, and only then the other secondary-literature
terms: a primary study often *mentions* prior reviews without being one.
Generic trial wording does not count when randomization is negated
("non-randomized controlled trial").
"""

from __future__ import annotations

from typing import Any

from medlit.classification.rules import LabelRule, MatchMode, evaluate_rules
from medlit.core.enums import ReportingFramework, StudyType

_CANONICAL_STUDY_TYPES: dict[str, StudyType] = {s.value: s for s in StudyType}
_CANONICAL_FRAMEWORKS: dict[str, ReportingFramework] = {f.value: f for f in ReportingFramework}


# =============================================================================
# STUDY TYPE RULES (label text)
# =============================================================================

STUDY_TYPE_LABEL_RULES: tuple[LabelRule[StudyType], ...] = (
    # Explicit "systematic review of ..." outranks the designs it reviews
    LabelRule(
        "systematic_review_of",
        StudyType.SYSTEMATIC_REVIEW,
        ("systematic review of",),
        negation_guard=True,
    ),
    # Primary designs
    LabelRule(
        "randomized_trial",
        StudyType.RCT,
        (
            "randomized controlled",
            "randomised controlled",
            "randomized",
            "randomised",
        ),
        negation_guard=True,
    ),
    # Whole label only: "rct" is a substring of "infarct"
    LabelRule("rct_abbreviation", StudyType.RCT, ("rct", "rcts"), mode=MatchMode.EXACT),
    LabelRule(
        "diagnostic_accuracy",
        StudyType.DIAGNOSTIC_ACCURACY,
        (
            "diagnostic accuracy",
            "diagnosticaccuracy",
            "diagnostic test",
            "sensitivity and specificity",
            "sensitivity/specificity",
            "diagnostic",
        ),
    ),
    LabelRule(
        "case_control",
        StudyType.CASE_CONTROL,
        ("case-control", "case control", "casecontrol", "case_control"),
    ),
    LabelRule(
        "cross_sectional",
        StudyType.CROSS_SECTIONAL,
        ("cross-sectional", "cross sectional", "crosssectional", "cross_sectional", "prevalence study"),
    ),
    LabelRule("cohort", StudyType.COHORT, ("cohort",)),
    LabelRule("case_series", StudyType.CASE_SERIES, ("case series", "caseseries", "case_series")),
    LabelRule(
        "case_report",
        StudyType.CASE_REPORT,
        ("case report", "casereport", "case_report", "case study"),
    ),
    LabelRule(
        "qualitative",
        StudyType.QUALITATIVE,
        ("qualitative", "focus group", "thematic analysis", "interview study"),
    ),
    LabelRule(
        "basic_science",
        StudyType.BASIC_SCIENCE,
        (
            "basic science",
            "basicscience",
            "basic_science",
            "in vitro",
            "in vivo",
            "animal",
            "preclinical",
            "laboratory",
            "bench",
            "cell line",
            "molecular",
        ),
    ),
    # Generic primary-study wording, after the designs that contain it
    LabelRule(
        "generic_trial",
        StudyType.RCT,
        ("clinical trial", "controlled trial", "interventional", "trial"),
        unless_negated=("randomized", "randomised"),
    ),
    LabelRule(
        "generic_observational",
        StudyType.COHORT,
        ("prospective", "retrospective", "longitudinal", "observational"),
    ),
    # Remaining secondary-literature terms last
    LabelRule(
        "meta_analysis",
        StudyType.META_ANALYSIS,
        ("meta-analysis", "meta-analyses", "meta analysis", "metaanalysis", "meta_analysis"),
        negation_guard=True,
    ),
    LabelRule(
        "systematic_review",
        StudyType.SYSTEMATIC_REVIEW,
        (
            "systematic review",
            "systematic literature review",
            "systematicreview",
            "systematic_review",
            "umbrella review",
        ),
        negation_guard=True,
    ),
)


# =============================================================================
# FRAMEWORK RULES (label text)
# =============================================================================

FRAMEWORK_LABEL_RULES: tuple[LabelRule[ReportingFramework], ...] = (
    LabelRule("consort", ReportingFramework.CONSORT, ("consort",)),
    LabelRule("strobe", ReportingFramework.STROBE, ("strobe",)),
    LabelRule("prisma", ReportingFramework.PRISMA, ("prisma", "moose", "amstar")),
    LabelRule("stard", ReportingFramework.STARD, ("stard", "quadas")),
    LabelRule("coreq", ReportingFramework.COREQ, ("coreq", "srqr")),
    # "care" alone is too common a word for substring matching
    LabelRule("care_exact", ReportingFramework.CARE, ("care",), mode=MatchMode.EXACT),
    LabelRule(
        "care_guideline",
        ReportingFramework.CARE,
        ("care guideline", "care checklist", "care statement", "care (case report"),
    ),
    LabelRule("pico", ReportingFramework.PICO, ("pico",)),
)


def _clean(raw: Any) -> str | None:
    if not isinstance(raw, str):
        return None
    stripped = raw.strip()
    return stripped or None


def normalize_study_type(raw: Any, negation_context: str | None = None) -> StudyType:
    """
    Map an oracle label onto StudyType.

    Args:
        raw: Label as returned by the oracle (any type; non-strings -> OTHER).
        negation_context: Optional free text (usually the oracle's joined
            reasons). A review/meta-analysis verdict is rejected when this text
            explicitly negates it.

    Returns:
        The canonical StudyType, or StudyType.OTHER when nothing matches.
    """
    label = _clean(raw)
    if label is None:
        return StudyType.OTHER

    canonical = _CANONICAL_STUDY_TYPES.get(label)
    if canonical is not None:
        return canonical

    context = negation_context.lower() if negation_context else None
    rule = evaluate_rules(STUDY_TYPE_LABEL_RULES, label.lower(), context)
    return rule.result if rule else StudyType.OTHER


def normalize_framework(raw: Any) -> ReportingFramework:
    """Map an oracle label onto ReportingFramework (NONE when unknown)."""
    label = _clean(raw)
    if label is None:
        return ReportingFramework.NONE

    canonical = _CANONICAL_FRAMEWORKS.get(label)
    if canonical is not None:
        return canonical

    rule = evaluate_rules(FRAMEWORK_LABEL_RULES, label.lower())
    return rule.result if rule else ReportingFramework.NONE
