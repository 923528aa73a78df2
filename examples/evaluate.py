#!/usr/bin/env python3
"""
Example: Evaluate MedLit against the Golden Set

Runs the classification and validation layers over the built-in labeled
cases and prints the metrics. Works entirely offline.

Requirements:
    pip install -e ".[dev]"

Usage:
    PYTHONPATH=src python examples/evaluate.py
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from medlit.evaluation import evaluate_classification, evaluate_validation

def main():
    """Print the golden set evaluation."""

    print("MedLit Golden Set - Evaluation")
    print("=" * 60)
    print()

    for report in (evaluate_classification(), evaluate_validation()):
        print(f"[{report.name}] {report.summary}")
        for metric in report.metrics:
            print(f"  {metric.name:<22} {metric.value:.2f}  ({metric.status.value}) {metric.details}")
        if report.mismatches:
            print(f"  Mismatches: {', '.join(report.mismatches)}")
        print()


if __name__ == "__main__":
    main()
