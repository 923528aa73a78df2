"""
MedLit Core Enumerations

This module defines the closed vocabularies shared by the classification,
validation and scoring layers. Each enumeration carries an explicit
"unknown" member so that downstream code never has to handle a missing value.
"""

from enum import Enum


class StudyType(str, Enum):
    """Classification of study designs.

    OTHER is the unknown sentinel: it is always present, never None.
    """

    RCT = "RCT"
    COHORT = "Cohort"
    CASE_CONTROL = "CaseControl"
    CROSS_SECTIONAL = "CrossSectional"
    SYSTEMATIC_REVIEW = "SystematicReview"
    META_ANALYSIS = "MetaAnalysis"
    DIAGNOSTIC_ACCURACY = "DiagnosticAccuracy"
    CASE_REPORT = "CaseReport"
    CASE_SERIES = "CaseSeries"
    QUALITATIVE = "Qualitative"
    BASIC_SCIENCE = "BasicScience"
    OTHER = "Other"

    @property
    def label(self) -> str:
        """Human-readable name (e.g. 'Case-Control')."""
        return _STUDY_TYPE_LABELS[self]

    @property
    def is_sentinel(self) -> bool:
        return self is StudyType.OTHER

    @property
    def is_secondary(self) -> bool:
        """True for designs that synthesise other studies."""
        return self in (StudyType.SYSTEMATIC_REVIEW, StudyType.META_ANALYSIS)


class ReportingFramework(str, Enum):
    """Reporting guideline / appraisal framework.

    NONE is the unknown sentinel.
    """

    CONSORT = "CONSORT"
    STROBE = "STROBE"
    PRISMA = "PRISMA"
    STARD = "STARD"
    CARE = "CARE"
    COREQ = "COREQ"
    PICO = "PICO"
    NONE = "None"

    @property
    def label(self) -> str:
        return self.value

    @property
    def is_sentinel(self) -> bool:
        return self is ReportingFramework.NONE


_STUDY_TYPE_LABELS: dict[StudyType, str] = {
    StudyType.RCT: "RCT",
    StudyType.COHORT: "Cohort",
    StudyType.CASE_CONTROL: "Case-Control",
    StudyType.CROSS_SECTIONAL: "Cross-Sectional",
    StudyType.SYSTEMATIC_REVIEW: "Systematic Review",
    StudyType.META_ANALYSIS: "Meta-Analysis",
    StudyType.DIAGNOSTIC_ACCURACY: "Diagnostic Accuracy",
    StudyType.CASE_REPORT: "Case Report",
    StudyType.CASE_SERIES: "Case Series",
    StudyType.QUALITATIVE: "Qualitative",
    StudyType.BASIC_SCIENCE: "Basic Science",
    StudyType.OTHER: "Other",
}


class EvidenceCategory(str, Enum):
    """Keyword evidence categories used by the methodology validator."""

    DESIGN = "design"
    STUDY_TYPE = "studyType"
    SAMPLE = "sample"
    STATISTICS = "statistics"
    DATA = "data"
    INTERVENTION = "intervention"
    ETHICS = "ethics"


class OracleTask(str, Enum):
    """Tasks the external text-generation oracle is asked to perform."""

    CLASSIFY_STUDY = "classify_study"
    ASSESS_METHODOLOGY = "assess_methodology"


class FieldStatus(str, Enum):
    """Presence state of a single field in an oracle payload.

    - ABSENT: key missing (or the payload itself was not an object)
    - NULL: key present with a null value
    - INVALID: key present but of the wrong type / empty
    - PRESENT: key present with a usable value
    """

    ABSENT = "absent"
    NULL = "null"
    INVALID = "invalid"
    PRESENT = "present"


class ResultSource(str, Enum):
    """Where an assessment came from."""

    ORACLE = "oracle"
    FALLBACK = "fallback"


class ReportStatus(str, Enum):
    """Outcome of a pipeline run.

    - REJECTED: input failed the methodology validity gate; no oracle call made
    - COMPLETE: both oracle calls returned usable output
    - DEGRADED: at least one oracle call failed and a sentinel/fallback was used
    """

    REJECTED = "rejected"
    COMPLETE = "complete"
    DEGRADED = "degraded"
