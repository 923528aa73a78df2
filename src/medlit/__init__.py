"""
MedLit

Study-design classification and methods-section validation for biomedical
papers, with oracle output treated as untrusted input.
"""

__version__ = "0.1.0"

from medlit.config import Settings, get_settings

__all__ = ["Settings", "get_settings", "__version__"]
