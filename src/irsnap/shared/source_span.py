"""
Source Span

Located range in the template source text.
"""

from dataclasses import dataclass
from typing import Optional

from ..utils.config import PATH_SEPARATOR


@dataclass(frozen=True)
class SourceSpan:
    """
    Source span of an IR node or diagnostic.

    - Absolute character offset plus zero-based line and character indices
    - Length in characters
    - Optional file path (only the last path component is ever rendered)
    - Immutable (frozen) for hashability
    """
    file_path: Optional[str]
    absolute_index: int
    line_index: int
    character_index: int
    length: int

    @property
    def file_name(self) -> str:
        """Path component after the last separator, or "" when there is no path."""
        if self.file_path is None:
            return ""
        return self.file_path[self.file_path.rfind(PATH_SEPARATOR) + 1:]

    def __str__(self) -> str:
        return f"{self.file_path}:{self.line_index}:{self.character_index}"
