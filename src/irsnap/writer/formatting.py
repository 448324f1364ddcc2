"""
Line & Field Formatting

Pure helpers shared by the dump writer. Everything here is deterministic and
independent of the node being written, so extension renderers can reuse it.
"""

import hashlib
from typing import Iterable, Optional

from ..shared.source_span import SourceSpan
from ..utils.config import (
    CARRIAGE_RETURN,
    DIAGNOSTIC_HASH_ALGORITHM,
    ESCAPED_NEWLINE,
    ESCAPED_SEPARATOR,
    FIELD_SEPARATOR,
    INDENT_CHAR,
    INDENT_WIDTH,
    MESSAGE_ENCODING,
    NEWLINE,
    NODE_NAME_SUFFIX,
)


def indent(depth: int) -> str:
    return INDENT_CHAR * (INDENT_WIDTH * depth)


def node_name(node_type: type) -> str:
    """Class name with a trailing 'IntermediateNode' removed."""
    name = node_type.__name__
    if name.endswith(NODE_NAME_SUFFIX):
        return name[:-len(NODE_NAME_SUFFIX)]
    return name


def escape_content(content: str) -> str:
    """
    Keep a content field on one line and free of bare separators.

    Carriage returns are dropped first; the separator is escaped last.
    """
    return (content.replace(CARRIAGE_RETURN, "")
            .replace(NEWLINE, ESCAPED_NEWLINE)
            .replace(FIELD_SEPARATOR, ESCAPED_SEPARATOR))


def format_source_span(span: SourceSpan) -> str:
    """`(absolute:line,character [length] filename)`"""
    return (f"({span.absolute_index}:{span.line_index},{span.character_index} "
            f"[{span.length}] {span.file_name})")


def join_modifiers(modifiers: Optional[Iterable[str]]) -> str:
    return " ".join(modifiers) if modifiers else ""


def join_interfaces(interfaces: Optional[Iterable[str]]) -> str:
    return ", ".join(interfaces) if interfaces else ""


def enum_label(prefix: str, value) -> str:
    """`Prefix.Value` label for enum-valued content fields."""
    return f"{prefix}.{value.value}"


def message_fingerprint(message: str) -> str:
    """
    Lowercase hex digest of the UTF-8 message bytes.

    Stands in for the message text in dumps. Full digest, never truncated.
    """
    digest = hashlib.new(DIAGNOSTIC_HASH_ALGORITHM, message.encode(MESSAGE_ENCODING))
    return digest.hexdigest()
