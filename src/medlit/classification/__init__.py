"""
MedLit Classification Layer

Label normalization, rationale inference and framework completion for the
oracle's study-type classification.
"""

from medlit.classification.frameworks import (
    STUDY_TYPE_FRAMEWORKS,
    infer_framework_from_study_type,
)
from medlit.classification.normalizer import normalize_framework, normalize_study_type
from medlit.classification.override import ReasonInference, infer_from_reasons
from medlit.classification.reconciler import reconcile_classification

__all__ = [
    "normalize_study_type",
    "normalize_framework",
    "infer_from_reasons",
    "ReasonInference",
    "infer_framework_from_study_type",
    "STUDY_TYPE_FRAMEWORKS",
    "reconcile_classification",
]
