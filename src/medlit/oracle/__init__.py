"""
MedLit Oracle Boundary

Protocol for the external text-generation oracle, tolerant parsing of its
output, and fallback results for when it fails.
"""

from medlit.oracle.base import (
    BaseOracle,
    CallableOracle,
    Oracle,
    OracleRequest,
    OracleResponse,
)
from medlit.oracle.fallbacks import (
    MODEL_UNAVAILABLE_MESSAGE,
    create_fallback_classification,
    create_fallback_methodology,
)
from medlit.oracle.payload import (
    OracleClassification,
    OracleField,
    parse_assessment_payload,
    parse_oracle_json,
)

__all__ = [
    "Oracle",
    "BaseOracle",
    "CallableOracle",
    "OracleRequest",
    "OracleResponse",
    "OracleClassification",
    "OracleField",
    "parse_oracle_json",
    "parse_assessment_payload",
    "MODEL_UNAVAILABLE_MESSAGE",
    "create_fallback_classification",
    "create_fallback_methodology",
]
