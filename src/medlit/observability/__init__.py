"""
MedLit Observability Layer

Logging configuration.
"""

from medlit.observability.logging_config import JsonFormatter, configure_logging

__all__ = ["JsonFormatter", "configure_logging"]
