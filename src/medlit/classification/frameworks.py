"""
Framework Inference Table

Total mapping from StudyType to the reporting framework that normally applies.
Used only when the framework is still unknown after label normalization and
rationale inference.
"""

from types import MappingProxyType

from medlit.core.enums import ReportingFramework, StudyType

STUDY_TYPE_FRAMEWORKS = MappingProxyType(
    {
        StudyType.RCT: ReportingFramework.CONSORT,
        StudyType.COHORT: ReportingFramework.STROBE,
        StudyType.CASE_CONTROL: ReportingFramework.STROBE,
        StudyType.CROSS_SECTIONAL: ReportingFramework.STROBE,
        StudyType.SYSTEMATIC_REVIEW: ReportingFramework.PRISMA,
        StudyType.META_ANALYSIS: ReportingFramework.PRISMA,
        StudyType.DIAGNOSTIC_ACCURACY: ReportingFramework.STARD,
        StudyType.CASE_REPORT: ReportingFramework.CARE,
        StudyType.CASE_SERIES: ReportingFramework.CARE,
        StudyType.QUALITATIVE: ReportingFramework.COREQ,
        StudyType.BASIC_SCIENCE: ReportingFramework.NONE,
        StudyType.OTHER: ReportingFramework.NONE,
    }
)


def infer_framework_from_study_type(study_type: StudyType) -> ReportingFramework:
    """Return the default reporting framework for a study type."""
    return STUDY_TYPE_FRAMEWORKS[study_type]
