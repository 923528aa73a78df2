"""
Methodology Evidence Tables

Static keyword evidence used by the methodology validator:
- CATEGORY_WEIGHTS: weighted evidence categories and their trigger phrases
- ANTI_PATTERNS: phrases typical of other paper sections

All phrases are lowercase; matching is substring matching on lowercased text.
Weights, penalty base and threshold are calibration constants, not settings.
"""

from dataclasses import dataclass

from medlit.core.enums import EvidenceCategory


@dataclass(frozen=True)
class CategoryWeight:
    """One evidence category: its weight and ordered trigger phrases."""

    category: EvidenceCategory
    weight: float
    phrases: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.phrases:
            raise ValueError(f"Category '{self.category.value}' has no phrases")
        if not 1.0 <= self.weight <= 3.0:
            raise ValueError(f"Category '{self.category.value}' weight out of range")

    def count_matches(self, text: str) -> int:
        return sum(1 for phrase in self.phrases if phrase in text)


CATEGORY_WEIGHTS: tuple[CategoryWeight, ...] = (
    CategoryWeight(
        EvidenceCategory.DESIGN,
        3.0,
        (
            "study design",
            "research design",
            "experimental design",
            "trial design",
            "methodology",
            "methods",
            "procedures",
            "protocol",
        ),
    ),
    CategoryWeight(
        EvidenceCategory.STUDY_TYPE,
        3.0,
        (
            "randomized",
            "randomised",
            "controlled trial",
            "double-blind",
            "single-blind",
            "placebo-controlled",
            "cohort",
            "case-control",
            "cross-sectional",
            "prospective",
            "retrospective",
            "systematic review",
            "meta-analysis",
            "qualitative",
            "quantitative",
        ),
    ),
    CategoryWeight(
        EvidenceCategory.SAMPLE,
        2.0,
        (
            "participants",
            "patients",
            "subjects",
            "sample size",
            "population",
            "inclusion criteria",
            "exclusion criteria",
            "recruitment",
            "enrollment",
            "enrolled",
        ),
    ),
    CategoryWeight(
        EvidenceCategory.STATISTICS,
        3.0,
        (
            "statistical analysis",
            "statistical test",
            "confidence interval",
            "p-value",
            "regression",
            "anova",
            "chi-square",
            "t-test",
            "mann-whitney",
            "wilcoxon",
            "power analysis",
            "sample size calculation",
            "intention-to-treat",
            "per-protocol",
        ),
    ),
    CategoryWeight(
        EvidenceCategory.DATA,
        1.5,
        (
            "data collection",
            "measurement",
            "assessment",
            "outcome measure",
            "questionnaire",
            "interview",
            "survey",
            "follow-up",
            "baseline",
        ),
    ),
    CategoryWeight(
        EvidenceCategory.INTERVENTION,
        1.5,
        (
            "intervention",
            "treatment",
            "therapy",
            "placebo",
            "dosage",
            "administration",
            "control group",
            "treatment group",
            "comparison",
            "versus",
        ),
    ),
    CategoryWeight(
        EvidenceCategory.ETHICS,
        1.0,
        (
            "ethical approval",
            "ethics committee",
            "institutional review board",
            "irb",
            "informed consent",
            "consent form",
            "ethics",
        ),
    ),
)

# Categories whose matches earn the high-value bonus.
HIGH_VALUE_CATEGORIES: frozenset[EvidenceCategory] = frozenset(
    {EvidenceCategory.DESIGN, EvidenceCategory.STATISTICS, EvidenceCategory.STUDY_TYPE}
)

ANTI_PATTERNS: tuple[str, ...] = (
    "introduction",
    "background",
    "literature review",
    "in conclusion",
    "to conclude",
    "in summary",
    "discussion",
    "limitations",
    "future research",
    "results showed",
    "we found that",
    "our findings",
    "figure 1",
    "figure 2",
    "table 1",
    "table 2",
)


def count_anti_patterns(text: str) -> int:
    """Number of distinct anti-pattern phrases present in lowercased ``text``."""
    return sum(1 for phrase in ANTI_PATTERNS if phrase in text)
