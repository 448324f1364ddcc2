"""
Shared components: spans, diagnostics and errors.
"""

from .source_span import SourceSpan
from .diagnostics import Diagnostic, Severity
from .errors import IRSnapError, UnknownNodeKindError, TreeFormatError

__all__ = [
    "SourceSpan",
    "Diagnostic",
    "Severity",
    "IRSnapError",
    "UnknownNodeKindError",
    "TreeFormatError",
]
