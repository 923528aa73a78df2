"""
MedLit Pipeline

Async orchestration: validation gate, concurrent oracle calls, reconciliation
and dampening.
"""

from medlit.pipeline.analyzer import MethodologyPipeline

__all__ = ["MethodologyPipeline"]
