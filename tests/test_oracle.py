"""
Tests for the Oracle Boundary

CallableOracle adapter and fallback results.
"""

import asyncio

from medlit.core.enums import OracleTask, ResultSource
from medlit.oracle import (
    MODEL_UNAVAILABLE_MESSAGE,
    CallableOracle,
    Oracle,
    OracleRequest,
    create_fallback_classification,
    create_fallback_methodology,
)
from medlit.oracle.fallbacks import EXCERPT_LENGTH


class TestCallableOracle:
    """Tests for CallableOracle."""

    def test_wraps_callable(self):
        seen = []

        async def ask(task, text, context):
            seen.append((task, text, context))
            return '{"studyType": "RCT"}'

        oracle = CallableOracle(ask, name="host")
        request = OracleRequest(task=OracleTask.CLASSIFY_STUDY, text="doc", context="ctx")
        response = asyncio.run(oracle.generate(request))

        assert isinstance(oracle, Oracle)
        assert response.oracle == "host"
        assert response.task is OracleTask.CLASSIFY_STUDY
        assert response.content == '{"studyType": "RCT"}'
        assert seen == [(OracleTask.CLASSIFY_STUDY, "doc", "ctx")]


class TestFallbacks:
    """Tests for fallback results."""

    def test_fallback_classification(self):
        record = create_fallback_classification("Model unavailable")
        assert record.is_unknown
        assert record.reasons == ("Model unavailable",)

    def test_fallback_methodology_defaults(self):
        assessment = create_fallback_methodology(
            "  Patients   were\nrandomized.  ", warning="timeout"
        )

        assert assessment.source is ResultSource.FALLBACK
        assert assessment.message == MODEL_UNAVAILABLE_MESSAGE
        assert assessment.warning == "timeout"
        assert assessment.recommendation == (
            "Review methods manually. Excerpt: Patients were randomized."
        )
        scored = ("researchQuestionClarity", "sampleSizePower", "randomization", "statisticalApproach")
        assert [assessment.blocks[k].score for k in scored] == [3, 3, 2, 3]
        assert not assessment.dampened

    def test_excerpt_truncated(self):
        assessment = create_fallback_methodology("a" * 1000)
        excerpt = assessment.recommendation.split("Excerpt: ", 1)[1]

        assert excerpt == "a" * EXCERPT_LENGTH + "…"

    def test_empty_methods(self):
        assessment = create_fallback_methodology(None)
        assert "once the model is available" in assessment.recommendation
