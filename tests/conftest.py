"""
MedLit Test Configuration

Shared fixtures and test utilities.
"""

import asyncio
import os
from typing import Any, Generator

import pytest

# Set test environment before any imports
os.environ.setdefault("LOG_LEVEL", "DEBUG")
os.environ.setdefault("MEDLIT_ORACLE_TIMEOUT", "5")
os.environ.setdefault("MEDLIT_ORACLE_RETRY_MIN_WAIT", "0")
os.environ.setdefault("MEDLIT_ORACLE_RETRY_MAX_WAIT", "0")

from medlit.core.enums import OracleTask
from medlit.oracle.base import BaseOracle, OracleRequest, OracleResponse


# 150 characters; randomized, placebo, sample size calculation, statistical analysis
RCT_METHODS = (
    "This randomized controlled trial compared drug X with placebo. A sample size "
    "calculation and statistical analysis plan were prespecified before start."
)

INTRODUCTION_TEXT = (
    "Introduction. Background: heart failure remains a leading cause of death "
    "worldwide. In this discussion of prior literature review work, our findings "
    "are placed in the context of future research."
)


class FakeOracle(BaseOracle):
    """
    Scripted oracle for pipeline tests.

    ``answers`` maps each task to a list of outcomes consumed in order; an
    outcome is returned as content, or raised if it is an exception. The last
    outcome repeats once the list is exhausted.
    """

    def __init__(
        self,
        answers: dict[OracleTask, list[Any]] | None = None,
        delay: float = 0.0,
    ) -> None:
        self._answers = {task: list(outcomes) for task, outcomes in (answers or {}).items()}
        self._delay = delay
        self.calls: list[OracleRequest] = []

    @property
    def name(self) -> str:
        return "fake"

    def calls_for(self, task: OracleTask) -> int:
        return sum(1 for request in self.calls if request.task is task)

    async def generate(self, request: OracleRequest) -> OracleResponse:
        self.calls.append(request)
        if self._delay:
            await asyncio.sleep(self._delay)

        outcomes = self._answers.get(request.task) or [None]
        outcome = outcomes.pop(0) if len(outcomes) > 1 else outcomes[0]
        if isinstance(outcome, BaseException):
            raise outcome
        return self._response(request, outcome)


@pytest.fixture(autouse=True)
def reset_settings() -> Generator[None, None, None]:
    """Reset settings before each test."""
    from medlit.config import reset_settings

    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def rct_methods() -> str:
    """Methods excerpt that passes validation (confidence 92)."""
    return RCT_METHODS


@pytest.fixture
def introduction_text() -> str:
    """Introduction prose that fails validation."""
    return INTRODUCTION_TEXT


@pytest.fixture
def assessment_payload() -> dict:
    """Methodology assessment as the oracle returns it."""
    return {
        "researchQuestionClarity": {"score": 4, "strengths": ["Clear aim"], "concerns": []},
        "sampleSizePower": {"score": 4, "calculated": True, "actual": 240},
        "randomization": {"score": 5, "method": "Computer-generated"},
        "statisticalApproach": {"score": 3, "methods": ["ANCOVA"]},
        "overallQualityScore": 80,
        "keyLimitations": ["Single centre"],
        "recommendation": "Sound design.",
        "confidence": 70,
    }


@pytest.fixture
def make_oracle():
    """Factory for scripted oracles."""
    return FakeOracle
