"""
Heuristic Override Engine

Re-derives study type and framework from the oracle's free-text rationale
when label normalization produced a sentinel. Rationale is usually more
explicit than a single label ("patients were randomized to receive drug or
placebo"), so these tables match richer contextual phrases.

Same precedence as the label tables: an explicit "systematic review of",
then primary designs, then generic primary wording, then all other
secondary-literature wording. A trial that cites a prior meta-analysis or
shows a forest plot stays a trial. Every secondary-literature rule (and the
randomization rule) ignores negated mentions; generic trial wording is
skipped when randomization is only mentioned as negated.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from medlit.classification.rules import LabelRule, evaluate_rules
from medlit.core.enums import ReportingFramework, StudyType

STUDY_TYPE_REASON_RULES: tuple[LabelRule[StudyType], ...] = (
    LabelRule(
        "systematic_review_of",
        StudyType.SYSTEMATIC_REVIEW,
        ("systematic review of",),
        negation_guard=True,
    ),
    LabelRule(
        "randomization",
        StudyType.RCT,
        (
            "randomized",
            "randomised",
            "randomly assigned",
            "randomly allocated",
            "random allocation",
            "random assignment",
            "placebo",
            "double-blind",
            "double blind",
            "phase 2",
            "phase ii",
            "phase 3",
            "phase iii",
        ),
        negation_guard=True,
    ),
    LabelRule(
        "diagnostic_accuracy",
        StudyType.DIAGNOSTIC_ACCURACY,
        (
            "diagnostic accuracy",
            "sensitivity and specificity",
            "sensitivity, specificity",
            "receiver operating characteristic",
            "roc curve",
            "index test",
            "reference standard",
            "positive predictive value",
            "negative predictive value",
        ),
    ),
    LabelRule(
        "case_control",
        StudyType.CASE_CONTROL,
        ("case-control", "case control", "matched controls", "cases and controls"),
    ),
    LabelRule(
        "cross_sectional",
        StudyType.CROSS_SECTIONAL,
        ("cross-sectional", "cross sectional", "prevalence survey", "single time point"),
    ),
    LabelRule(
        "cohort",
        StudyType.COHORT,
        ("cohort", "followed up", "followed for", "exposed and unexposed"),
    ),
    LabelRule(
        "case_series",
        StudyType.CASE_SERIES,
        ("case series", "series of patients", "series of cases"),
    ),
    LabelRule(
        "case_report",
        StudyType.CASE_REPORT,
        (
            "case report",
            "single patient",
            "a patient presented",
            "year-old man",
            "year-old woman",
            "year-old male",
            "year-old female",
            "year-old boy",
            "year-old girl",
        ),
    ),
    LabelRule(
        "qualitative",
        StudyType.QUALITATIVE,
        (
            "qualitative",
            "semi-structured interview",
            "semistructured interview",
            "focus group",
            "thematic analysis",
            "grounded theory",
        ),
    ),
    LabelRule(
        "basic_science",
        StudyType.BASIC_SCIENCE,
        (
            "in vitro",
            "in vivo",
            "animal model",
            "mice",
            "murine",
            "in rats",
            "rat model",
            "cell line",
            "cell culture",
            "knockout",
        ),
    ),
    LabelRule(
        "generic_trial",
        StudyType.RCT,
        ("clinical trial", "controlled trial", "interventional", "trial"),
        unless_negated=("randomized", "randomised"),
    ),
    LabelRule(
        "generic_observational",
        StudyType.COHORT,
        ("prospective", "retrospective", "longitudinal", "observational", "enrolled"),
    ),
    LabelRule(
        "meta_analysis",
        StudyType.META_ANALYSIS,
        (
            "meta-analysis",
            "meta analysis",
            "meta-analyses",
            "pooled analysis",
            "pooled estimate",
            "forest plot",
        ),
        negation_guard=True,
    ),
    LabelRule(
        "systematic_review",
        StudyType.SYSTEMATIC_REVIEW,
        (
            "systematic review",
            "systematic literature review",
            "systematic search",
            "prisma flow",
            "databases were searched",
            "searched pubmed",
            "searched medline",
        ),
        negation_guard=True,
    ),
)

FRAMEWORK_REASON_RULES: tuple[LabelRule[ReportingFramework], ...] = (
    LabelRule("consort", ReportingFramework.CONSORT, ("consort",)),
    LabelRule("strobe", ReportingFramework.STROBE, ("strobe",)),
    LabelRule("prisma", ReportingFramework.PRISMA, ("prisma",)),
    LabelRule("stard", ReportingFramework.STARD, ("stard",)),
    LabelRule("coreq", ReportingFramework.COREQ, ("coreq",)),
    LabelRule(
        "care",
        ReportingFramework.CARE,
        ("care guideline", "care checklist", "care statement"),
    ),
)


@dataclass(frozen=True)
class ReasonInference:
    """Fields recovered from rationale text; None means "no opinion"."""

    study_type: StudyType | None = None
    framework: ReportingFramework | None = None
    study_type_rule: str | None = None
    framework_rule: str | None = None

    @property
    def is_empty(self) -> bool:
        return self.study_type is None and self.framework is None


def join_reasons(reasons: Any) -> str:
    """Concatenate reasons into one lowercased string; ignores non-strings."""
    if isinstance(reasons, str):
        return reasons.lower()
    if isinstance(reasons, Sequence):
        return " ".join(r for r in reasons if isinstance(r, str)).lower()
    return ""


def infer_from_reasons(reason_text: str | Sequence[str] | None) -> ReasonInference:
    """
    Infer study type and framework from the oracle's rationale.

    Args:
        reason_text: Joined rationale string, or the raw list of reasons.

    Returns:
        ReasonInference with None for each field no rule could decide.
        First match wins per field.
    """
    text = join_reasons(reason_text)
    if not text.strip():
        return ReasonInference()

    type_rule = evaluate_rules(STUDY_TYPE_REASON_RULES, text)
    framework_rule = evaluate_rules(FRAMEWORK_REASON_RULES, text)
    return ReasonInference(
        study_type=type_rule.result if type_rule else None,
        framework=framework_rule.result if framework_rule else None,
        study_type_rule=type_rule.name if type_rule else None,
        framework_rule=framework_rule.name if framework_rule else None,
    )
