#!/usr/bin/env python3
"""
Example: Run the Methodology Pipeline from Python

Wires a stand-in oracle (canned JSON answers) into MethodologyPipeline and
prints the resulting report. Replace ``canned_oracle`` with a call to a real
text-generation model.

Requirements:
    pip install -e ".[dev]"

Usage:
    PYTHONPATH=src python examples/run_pipeline.py
"""

import asyncio
import json
import sys
from pathlib import Path

# Ensure src is in path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from medlit.core.enums import OracleTask
from medlit.observability import configure_logging
from medlit.oracle import CallableOracle
from medlit.pipeline import MethodologyPipeline

METHODS = (
    "Methods. In this double-blind, placebo-controlled randomized trial, patients "
    "with heart failure were enrolled after ethics committee approval. The sample "
    "size calculation assumed 80% power. Statistical analysis followed the "
    "intention-to-treat principle using Cox regression."
)


async def canned_oracle(task: OracleTask, text: str, context: str | None):
    if task is OracleTask.CLASSIFY_STUDY:
        # Small models often answer with prose around fenced JSON
        return (
            "Here is the classification:\n```json\n"
            '{"studyType": "randomised trial", "framework": null, '
            '"confidence": 0.8, "reasons": ["Patients were randomized to drug or placebo"]}\n```'
        )
    return {
        "researchQuestionClarity": {"score": 4, "strengths": ["Clear primary outcome"]},
        "sampleSizePower": {"score": 4, "calculated": True},
        "randomization": {"score": 3, "method": "Not described"},
        "statisticalApproach": {"score": 4, "methods": ["Cox regression"]},
        "overallQualityScore": 78,
        "keyLimitations": ["Allocation concealment not reported"],
        "recommendation": "Adequate design; check allocation concealment.",
        "confidence": 70,
    }


async def main():
    """Analyze a sample methods excerpt."""

    configure_logging()
    pipeline = MethodologyPipeline(CallableOracle(canned_oracle, name="canned"))
    report = await pipeline.analyze(METHODS)

    print(json.dumps(report.model_dump(by_alias=True, mode="json"), indent=2))


if __name__ == "__main__":
    asyncio.run(main())
