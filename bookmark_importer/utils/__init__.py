"""
Utility modules for bookmark importing.

This package contains error types, URL checks, text decoding and logging
setup shared by the core modules.
"""

from .encoding import decode_content
from .logging_setup import setup_logging
from .url_validation import has_excluded_scheme, is_absolute_url

__all__ = [
    "decode_content",
    "setup_logging",
    "has_excluded_scheme",
    "is_absolute_url",
]
