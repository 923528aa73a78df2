"""
MedLit Golden Set - Labeled Calibration Cases

Oracle classification payloads and methods excerpts with the outcome a
reviewer expects. Used to check that changes to the rule tables, weights or
thresholds do not silently move decisions.

Each classification case includes:
    - The raw oracle payload (as the oracle would return it)
    - Optional study-design hint from the extraction payload
    - Expected study type and reporting framework

Each validation case includes:
    - A text excerpt submitted as a methods section
    - Whether it should pass the methodology validator
"""

from dataclasses import dataclass, field
from typing import Any

from medlit.core.enums import ReportingFramework, StudyType


@dataclass
class GoldenClassificationCase:
    """A labeled oracle classification payload."""

    id: str
    payload: Any
    expected_study_type: StudyType
    expected_framework: ReportingFramework
    design_hint: Any = None
    note: str = ""


@dataclass
class GoldenValidationCase:
    """A labeled methods-section candidate."""

    id: str
    text: str
    expected_valid: bool
    note: str = ""
    tags: list[str] = field(default_factory=list)


GOLDEN_CLASSIFICATIONS: list[GoldenClassificationCase] = [
    # Clean oracle answer
    GoldenClassificationCase(
        id="GC-001",
        payload={
            "studyType": "Randomized Controlled Trial",
            "framework": "CONSORT",
            "confidence": 0.92,
            "reasons": ["Participants were randomly assigned to two parallel arms"],
        },
        expected_study_type=StudyType.RCT,
        expected_framework=ReportingFramework.CONSORT,
    ),
    # Sentinel label, design recoverable from rationale
    GoldenClassificationCase(
        id="GC-002",
        payload={
            "studyType": "Other",
            "framework": "None",
            "reasons": ["patients were randomized to receive drug or placebo"],
        },
        expected_study_type=StudyType.RCT,
        expected_framework=ReportingFramework.CONSORT,
        note="Rationale overrides the sentinel label; framework from the table",
    ),
    # Secondary label contradicted by the rationale
    GoldenClassificationCase(
        id="GC-003",
        payload={
            "studyType": "Systematic Review",
            "reasons": [
                "this is not a systematic review, it is a randomized trial "
                "that cites several systematic reviews"
            ],
        },
        expected_study_type=StudyType.RCT,
        expected_framework=ReportingFramework.CONSORT,
        note="Negated secondary label must not win",
    ),
    GoldenClassificationCase(
        id="GC-004",
        payload={
            "studyType": "Systematic review and meta-analysis",
            "framework": "PRISMA 2020",
            "reasons": ["Pooled estimate from 14 trials"],
        },
        expected_study_type=StudyType.META_ANALYSIS,
        expected_framework=ReportingFramework.PRISMA,
    ),
    GoldenClassificationCase(
        id="GC-005",
        payload={"studyType": "case-control study", "reasons": ["Cases were matched to controls"]},
        expected_study_type=StudyType.CASE_CONTROL,
        expected_framework=ReportingFramework.STROBE,
    ),
    GoldenClassificationCase(
        id="GC-006",
        payload={"studyType": "diagnostic accuracy study", "framework": "STARD 2015"},
        expected_study_type=StudyType.DIAGNOSTIC_ACCURACY,
        expected_framework=ReportingFramework.STARD,
    ),
    # Fenced JSON string, as small on-device models often answer
    GoldenClassificationCase(
        id="GC-007",
        payload='```json\n{"studyType": "Case report", "framework": "CARE"}\n```',
        expected_study_type=StudyType.CASE_REPORT,
        expected_framework=ReportingFramework.CARE,
    ),
    # Label lost entirely; the extraction's study design still knows
    GoldenClassificationCase(
        id="GC-008",
        payload={"studyType": None, "reasons": []},
        design_hint="Prospective cohort study",
        expected_study_type=StudyType.COHORT,
        expected_framework=ReportingFramework.STROBE,
    ),
    # Nothing usable at all
    GoldenClassificationCase(
        id="GC-009",
        payload="The model could not classify this document.",
        expected_study_type=StudyType.OTHER,
        expected_framework=ReportingFramework.NONE,
    ),
]


GOLDEN_VALIDATIONS: list[GoldenValidationCase] = [
    GoldenValidationCase(
        id="GV-001",
        text=(
            "This randomized controlled trial compared drug X with placebo. A sample size "
            "calculation and statistical analysis plan were prespecified before start."
        ),
        expected_valid=True,
        tags=["rct"],
    ),
    GoldenValidationCase(
        id="GV-002",
        text=(
            "Methods. Study design: prospective cohort. Participants were recruited from "
            "three hospitals between 2015 and 2018; inclusion criteria and exclusion "
            "criteria were prespecified. Ethical approval was obtained and informed consent "
            "was given. Statistical analysis used multivariable regression with 95% "
            "confidence interval estimates."
        ),
        expected_valid=True,
        tags=["observational"],
    ),
    GoldenValidationCase(
        id="GV-003",
        text=(
            "Introduction. Background: heart failure remains a leading cause of death "
            "worldwide. In this discussion of prior literature review work, our findings "
            "are placed in the context of future research."
        ),
        expected_valid=False,
        note="Introduction prose",
        tags=["wrong-section"],
    ),
    GoldenValidationCase(
        id="GV-004",
        text=(
            "Results showed that 120 patients completed follow-up. We found that mortality "
            "was lower in the treatment group (Table 2). Our findings are summarised in "
            "Figure 1."
        ),
        expected_valid=False,
        note="Results prose with methods-like vocabulary",
        tags=["wrong-section"],
    ),
    GoldenValidationCase(
        id="GV-005",
        text="Patients were randomized.",
        expected_valid=False,
        note="Below the minimum length",
        tags=["short"],
    ),
]


def get_golden_classifications() -> list[GoldenClassificationCase]:
    """Return the labeled classification cases."""
    return GOLDEN_CLASSIFICATIONS


def get_golden_validations() -> list[GoldenValidationCase]:
    """Return the labeled validation cases."""
    return GOLDEN_VALIDATIONS


def get_case_by_id(case_id: str) -> GoldenClassificationCase | GoldenValidationCase | None:
    """Get a classification or validation case by ID."""
    for case in [*GOLDEN_CLASSIFICATIONS, *GOLDEN_VALIDATIONS]:
        if case.id == case_id:
            return case
    return None
