"""
MedLit Evaluation Metrics

Accuracy metrics for the deterministic core against labeled cases.

Metrics:
- study_type_accuracy: reconciled study type equals the expected label
- framework_accuracy: reconciled framework equals the expected label
- validation_accuracy: validator decision equals the expected decision
- false_accept_rate: share of non-methods texts the validator accepted

The penalty base, band boundaries and weights are calibration constants;
these reports are how a change to them is judged.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Sequence

from medlit.classification.reconciler import reconcile_classification
from medlit.evaluation.golden_set import (
    GoldenClassificationCase,
    GoldenValidationCase,
    get_golden_classifications,
    get_golden_validations,
)
from medlit.validation.methodology import validate_methodology_text


class MetricStatus(str, Enum):
    """Status of a metric evaluation."""

    PASS = "pass"
    WARN = "warn"
    FAIL = "fail"
    NOT_APPLICABLE = "n/a"


@dataclass
class MetricResult:
    """Result of evaluating a single metric."""

    name: str
    value: float
    threshold: float
    status: MetricStatus
    details: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "value": round(self.value, 4),
            "threshold": self.threshold,
            "status": self.status.value,
            "details": self.details,
        }


@dataclass
class EvaluationReport:
    """Metrics plus the IDs of the cases that disagreed with their label."""

    name: str
    metrics: list[MetricResult] = field(default_factory=list)
    mismatches: list[str] = field(default_factory=list)
    overall_pass: bool = True
    summary: str = ""

    def add_metric(self, metric: MetricResult) -> None:
        """Add a metric result."""
        self.metrics.append(metric)
        if metric.status == MetricStatus.FAIL:
            self.overall_pass = False

    def get_metric(self, name: str) -> MetricResult | None:
        for metric in self.metrics:
            if metric.name == name:
                return metric
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "overall_pass": self.overall_pass,
            "summary": self.summary,
            "mismatches": list(self.mismatches),
            "metrics": [m.to_dict() for m in self.metrics],
        }


def _accuracy_metric(name: str, correct: int, total: int, threshold: float) -> MetricResult:
    if total == 0:
        return MetricResult(
            name=name,
            value=1.0,
            threshold=threshold,
            status=MetricStatus.NOT_APPLICABLE,
            details="No cases to evaluate",
        )

    accuracy = correct / total
    if accuracy >= threshold:
        status = MetricStatus.PASS
    elif accuracy >= threshold * 0.8:  # Within 20% of threshold
        status = MetricStatus.WARN
    else:
        status = MetricStatus.FAIL

    return MetricResult(
        name=name,
        value=accuracy,
        threshold=threshold,
        status=status,
        details=f"{correct}/{total} cases correct",
    )


def evaluate_classification(
    cases: Sequence[GoldenClassificationCase] | None = None,
    min_accuracy: float = 1.0,
) -> EvaluationReport:
    """
    Reconcile every labeled payload and compare with its expected labels.

    Args:
        cases: Cases to run; defaults to the golden set.
        min_accuracy: Accuracy needed for a PASS.

    Returns:
        EvaluationReport with study_type_accuracy and framework_accuracy.
    """
    cases = list(cases) if cases is not None else get_golden_classifications()
    report = EvaluationReport(name="classification")

    type_correct = 0
    framework_correct = 0
    for case in cases:
        record = reconcile_classification(case.payload, design_hint=case.design_hint)
        type_ok = record.study_type is case.expected_study_type
        framework_ok = record.framework is case.expected_framework
        type_correct += type_ok
        framework_correct += framework_ok
        if not (type_ok and framework_ok):
            report.mismatches.append(case.id)

    report.add_metric(
        _accuracy_metric("study_type_accuracy", type_correct, len(cases), min_accuracy)
    )
    report.add_metric(
        _accuracy_metric("framework_accuracy", framework_correct, len(cases), min_accuracy)
    )
    report.summary = (
        f"{len(cases) - len(report.mismatches)}/{len(cases)} classification cases fully correct"
    )
    return report


def evaluate_validation(
    cases: Sequence[GoldenValidationCase] | None = None,
    min_accuracy: float = 1.0,
    max_false_accept_rate: float = 0.0,
) -> EvaluationReport:
    """
    Run the methodology validator on every labeled excerpt.

    A false accept (non-methods text passing the gate) is worse than a false
    reject, since it lets the oracle score the wrong section; it gets its own
    metric.
    """
    cases = list(cases) if cases is not None else get_golden_validations()
    report = EvaluationReport(name="validation")

    correct = 0
    negatives = 0
    false_accepts = 0
    for case in cases:
        record = validate_methodology_text(case.text)
        if record.is_valid == case.expected_valid:
            correct += 1
        else:
            report.mismatches.append(case.id)
        if not case.expected_valid:
            negatives += 1
            false_accepts += record.is_valid

    report.add_metric(_accuracy_metric("validation_accuracy", correct, len(cases), min_accuracy))

    if negatives == 0:
        report.add_metric(
            MetricResult(
                name="false_accept_rate",
                value=0.0,
                threshold=max_false_accept_rate,
                status=MetricStatus.NOT_APPLICABLE,
                details="No negative cases",
            )
        )
    else:
        rate = false_accepts / negatives
        report.add_metric(
            MetricResult(
                name="false_accept_rate",
                value=rate,
                threshold=max_false_accept_rate,
                status=MetricStatus.PASS if rate <= max_false_accept_rate else MetricStatus.FAIL,
                details=f"{false_accepts}/{negatives} non-methods texts accepted",
            )
        )

    report.summary = f"{correct}/{len(cases)} validation cases correct"
    return report
