"""
Tests for the Methodology Pipeline

Drives MethodologyPipeline with a scripted oracle via asyncio.run.
"""

import asyncio

import pytest

from medlit.config import get_settings
from medlit.core.enums import OracleTask, ReportStatus, ResultSource, StudyType, ReportingFramework
from medlit.core.exceptions import OracleResponseError, OracleUnavailableError, PipelineError
from medlit.pipeline import MethodologyPipeline

CLASSIFY = OracleTask.CLASSIFY_STUDY
ASSESS = OracleTask.ASSESS_METHODOLOGY

CLASSIFICATION = {
    "studyType": "Other",
    "framework": "None",
    "confidence": 0.6,
    "reasons": ["patients were randomized to receive drug or placebo"],
}


def run(coro):
    return asyncio.run(coro)


class TestValidationGate:
    """Rejected text never reaches the oracle."""

    def test_rejected_text(self, make_oracle, introduction_text):
        oracle = make_oracle({CLASSIFY: [CLASSIFICATION]})
        report = run(MethodologyPipeline(oracle).analyze(introduction_text))

        assert report.status is ReportStatus.REJECTED
        assert not report.validation.is_valid
        assert report.classification is None
        assert report.assessment is None
        assert oracle.calls == []

    def test_gate_disabled(self, make_oracle, introduction_text, assessment_payload, monkeypatch):
        monkeypatch.setenv("MEDLIT_ENABLE_VALIDATION_GATE", "false")
        oracle = make_oracle({CLASSIFY: [CLASSIFICATION], ASSESS: [assessment_payload]})
        report = run(MethodologyPipeline(oracle, get_settings()).analyze(introduction_text))

        assert report.status is ReportStatus.COMPLETE
        assert not report.validation.is_valid
        # confidence 0 vs self-reported 70 -> factor 0.8
        assert report.assessment.overall_quality_score == 64

    def test_non_string_raises(self, make_oracle):
        with pytest.raises(PipelineError):
            run(MethodologyPipeline(make_oracle()).analyze(None))


class TestCompleteRun:
    """Both oracle calls succeed."""

    def test_complete_report(self, make_oracle, rct_methods, assessment_payload):
        oracle = make_oracle({CLASSIFY: [CLASSIFICATION], ASSESS: [assessment_payload]})
        report = run(MethodologyPipeline(oracle).analyze(rct_methods))

        assert report.status is ReportStatus.COMPLETE
        assert report.warnings == ()
        assert report.validation.confidence == 92
        assert report.classification.study_type is StudyType.RCT
        assert report.classification.framework is ReportingFramework.CONSORT
        # validation 92 -> full trust, scores untouched
        assert report.assessment.overall_quality_score == 80
        assert not report.assessment.dampened
        assert oracle.calls_for(CLASSIFY) == 1
        assert oracle.calls_for(ASSESS) == 1

    def test_full_text_used_for_classification(self, make_oracle, rct_methods, assessment_payload):
        oracle = make_oracle({CLASSIFY: [CLASSIFICATION], ASSESS: [assessment_payload]})
        run(MethodologyPipeline(oracle).analyze(rct_methods, full_text="Full paper text"))

        classify_request = next(r for r in oracle.calls if r.task is CLASSIFY)
        assess_request = next(r for r in oracle.calls if r.task is ASSESS)
        assert classify_request.text == "Full paper text"
        assert assess_request.text == rct_methods
        assert assess_request.context == "Full paper text"

    def test_design_hint_passed_through(self, make_oracle, rct_methods, assessment_payload):
        oracle = make_oracle({CLASSIFY: [{"studyType": None}], ASSESS: [assessment_payload]})
        report = run(
            MethodologyPipeline(oracle).analyze(rct_methods, design_hint="Cross-sectional")
        )

        assert report.classification.study_type is StudyType.CROSS_SECTIONAL

    def test_dampening_disabled(self, make_oracle, introduction_text, assessment_payload, monkeypatch):
        monkeypatch.setenv("MEDLIT_ENABLE_VALIDATION_GATE", "false")
        monkeypatch.setenv("MEDLIT_ENABLE_DAMPENING", "false")
        oracle = make_oracle({CLASSIFY: [CLASSIFICATION], ASSESS: [assessment_payload]})
        report = run(MethodologyPipeline(oracle).analyze(introduction_text))

        assert report.assessment.overall_quality_score == 80

    def test_camel_case_dump(self, make_oracle, rct_methods, assessment_payload):
        oracle = make_oracle({CLASSIFY: [CLASSIFICATION], ASSESS: [assessment_payload]})
        dumped = run(MethodologyPipeline(oracle).analyze(rct_methods)).model_dump(
            by_alias=True, mode="json"
        )

        assert dumped["status"] == "complete"
        assert dumped["classification"]["studyType"] == "RCT"
        assert dumped["validation"]["isValid"] is True
        assert dumped["assessment"]["overallQualityScore"] == 80


class TestDegradedRun:
    """Oracle failures degrade the report instead of raising."""

    def test_classification_failure(self, make_oracle, rct_methods, assessment_payload):
        oracle = make_oracle(
            {CLASSIFY: [OracleResponseError(CLASSIFY.value)], ASSESS: [assessment_payload]}
        )
        report = run(MethodologyPipeline(oracle).analyze(rct_methods))

        assert report.status is ReportStatus.DEGRADED
        assert report.classification.is_unknown
        assert report.assessment.source is ResultSource.ORACLE
        assert len(report.warnings) == 1
        assert report.warnings[0].startswith("Classification unavailable")

    def test_unparseable_assessment_uses_fallback(self, make_oracle, rct_methods):
        oracle = make_oracle({CLASSIFY: [CLASSIFICATION], ASSESS: ["I cannot help with that."]})
        report = run(MethodologyPipeline(oracle).analyze(rct_methods))

        assert report.status is ReportStatus.DEGRADED
        assert report.classification.study_type is StudyType.RCT
        assert report.assessment.source is ResultSource.FALLBACK
        assert report.assessment.overall_quality_score == 50
        assert report.assessment.warning == "Oracle returned invalid JSON"
        # invalid JSON is not retried
        assert oracle.calls_for(ASSESS) == 1

    def test_transient_error_is_retried(self, make_oracle, rct_methods, assessment_payload):
        oracle = make_oracle(
            {
                CLASSIFY: [OracleUnavailableError(CLASSIFY.value), CLASSIFICATION],
                ASSESS: [assessment_payload],
            }
        )
        report = run(MethodologyPipeline(oracle).analyze(rct_methods))

        assert report.status is ReportStatus.COMPLETE
        assert oracle.calls_for(CLASSIFY) == 2

    def test_retries_exhausted(self, make_oracle, rct_methods, assessment_payload):
        oracle = make_oracle(
            {CLASSIFY: [OracleUnavailableError(CLASSIFY.value)], ASSESS: [assessment_payload]}
        )
        report = run(MethodologyPipeline(oracle).analyze(rct_methods))

        assert report.status is ReportStatus.DEGRADED
        assert oracle.calls_for(CLASSIFY) == get_settings().oracle.max_retries

    def test_timeout(self, make_oracle, rct_methods, assessment_payload, monkeypatch):
        monkeypatch.setenv("MEDLIT_ORACLE_TIMEOUT", "0.01")
        monkeypatch.setenv("MEDLIT_ORACLE_MAX_RETRIES", "1")
        oracle = make_oracle({CLASSIFY: [CLASSIFICATION], ASSESS: [assessment_payload]}, delay=0.5)
        report = run(MethodologyPipeline(oracle).analyze(rct_methods))

        assert report.status is ReportStatus.DEGRADED
        assert report.classification.is_unknown
        assert report.assessment.source is ResultSource.FALLBACK
        assert any("timed out" in w for w in report.warnings)

    def test_unexpected_exception_is_wrapped(self, make_oracle, rct_methods, assessment_payload):
        oracle = make_oracle(
            {CLASSIFY: [RuntimeError("session closed")], ASSESS: [assessment_payload]}
        )
        report = run(MethodologyPipeline(oracle).analyze(rct_methods))

        assert report.status is ReportStatus.DEGRADED
        assert "session closed" in report.warnings[0]
