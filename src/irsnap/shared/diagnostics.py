"""
Diagnostics attached to IR nodes by the compiler front-end.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .source_span import SourceSpan


class Severity(Enum):
    """Diagnostic severity; the value is the label written into dumps."""
    ERROR = "Error"
    WARNING = "Warning"


@dataclass
class Diagnostic:
    """
    Compiler diagnostic.

    Only span, severity, id and a fingerprint of the message ever reach a dump.
    """
    id: str
    severity: Severity
    message: str
    span: Optional[SourceSpan] = None

    def get_message(self) -> str:
        return self.message
