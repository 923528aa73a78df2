"""
MedLit Custom Exceptions

Exceptions are organized by layer. The deterministic core (classification,
validation, scoring) never raises on bad input; these types belong to the
oracle-calling and orchestration layers.
"""

from typing import Any


class MedLitError(Exception):
    """Base exception for all MedLit errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigurationError(MedLitError):
    """Error in system configuration."""

    pass


# =============================================================================
# ORACLE ERRORS
# =============================================================================


class OracleError(MedLitError):
    """Base error for calls to the external text-generation oracle."""

    def __init__(self, message: str, task: str | None = None, retryable: bool = False):
        super().__init__(message, {"task": task, "retryable": retryable})
        self.task = task
        self.retryable = retryable


class OracleUnavailableError(OracleError):
    """The oracle cannot be reached or refused to start a session."""

    def __init__(self, task: str | None = None, reason: str = "oracle unavailable"):
        super().__init__(f"Oracle unavailable: {reason}", task=task, retryable=True)


class OracleTimeoutError(OracleError):
    """The oracle did not answer within the configured timeout."""

    def __init__(self, task: str | None, timeout: float):
        super().__init__(
            f"Oracle call timed out after {timeout:.1f}s", task=task, retryable=True
        )
        self.timeout = timeout


class OracleResponseError(OracleError):
    """The oracle answered, but the answer is not a usable JSON object."""

    def __init__(self, task: str | None, preview: str = ""):
        super().__init__("Oracle returned invalid JSON", task=task, retryable=False)
        self.details["preview"] = preview[:200]


# =============================================================================
# PIPELINE ERRORS
# =============================================================================


class PipelineError(MedLitError):
    """Invalid use of the analysis pipeline (programmer error, not bad data)."""

    pass
