"""
regex-unescape

Decodes text escaped for embedding in a regular expression back to its
literal form.
"""

from .exceptions import InvalidArgumentError, INVALID_ARGUMENT_MESSAGE
from .scanner import EscapeKind, EscapeToken, classify, iter_escapes, unescape

__version__ = "1.0.0"

__all__ = [
    "EscapeKind",
    "EscapeToken",
    "InvalidArgumentError",
    "INVALID_ARGUMENT_MESSAGE",
    "classify",
    "iter_escapes",
    "unescape",
]
