"""
MedLit Evaluation Module

Labeled calibration cases and accuracy reports for the classification and
validation layers.

Exports:
    - evaluate_classification: Reconcile golden payloads and score them
    - evaluate_validation: Validate golden excerpts and score them
    - EvaluationReport / MetricResult / MetricStatus: Report structures
    - GOLDEN_CLASSIFICATIONS / GOLDEN_VALIDATIONS: Labeled cases
"""

from medlit.evaluation.golden_set import (
    GOLDEN_CLASSIFICATIONS,
    GOLDEN_VALIDATIONS,
    GoldenClassificationCase,
    GoldenValidationCase,
    get_case_by_id,
    get_golden_classifications,
    get_golden_validations,
)
from medlit.evaluation.metrics import (
    EvaluationReport,
    MetricResult,
    MetricStatus,
    evaluate_classification,
    evaluate_validation,
)

__all__ = [
    # Metrics
    "EvaluationReport",
    "MetricResult",
    "MetricStatus",
    "evaluate_classification",
    "evaluate_validation",
    # Golden Set
    "GOLDEN_CLASSIFICATIONS",
    "GOLDEN_VALIDATIONS",
    "GoldenClassificationCase",
    "GoldenValidationCase",
    "get_case_by_id",
    "get_golden_classifications",
    "get_golden_validations",
]
