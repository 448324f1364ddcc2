"""
Error Reporting

Exceptions raised while loading or dumping IR trees.
"""

from typing import Any, Optional


class IRSnapError(Exception):
    """Base exception for all irsnap errors"""
    def __init__(self, message: str, error_code: str = "E0001"):
        super().__init__(message)
        self.message = message
        self.error_code = error_code

    def __str__(self):
        return f"[{self.error_code}] {self.message}"


class UnknownNodeKindError(IRSnapError):
    """
    Extension node with no registered renderer and no trusted origin.

    Raised from the middle of a dump: the output written so far is truncated and
    must not be treated as a complete dump.
    """
    def __init__(self, node_type: type):
        qualified = f"{node_type.__module__}.{node_type.__qualname__}"
        super().__init__(f"Unknown node type: {qualified}", error_code="E0100")
        self.node_type = node_type


class TreeFormatError(IRSnapError):
    """Malformed S-expression tree text."""
    def __init__(self, message: str, form: Optional[Any] = None):
        super().__init__(message, error_code="E0200")
        self.form = form

    def __str__(self):
        if self.form is not None:
            return f"[{self.error_code}] {self.message}: {self.form!r}"
        return f"[{self.error_code}] {self.message}"
