"""
IR Trees from S-Expressions
===========================

Builds IR trees from S-expression text so snapshot fixtures can be written by
hand. A node is

    (Name :keyword value ... child ...)

where Name is the node's dump name (class name without 'IntermediateNode').
Keywords map to constructor arguments (`:class-name` -> `class_name`); every
list after the keyword/value pairs is a child node.

    (Document
      (ClassDeclaration :modifiers ("public") :class-name "Index"
        :source (0 0 0 42 "/Pages/Index.razor")
        (Field :modifiers ("private") :field-type "int" :field-name "count")))

Special values:
    :source (absolute line character length ["path"])
    :diagnostics ((Error "RZ1001" "message" [(span)]) ...)
    :bound-attribute "Display Name"
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Type, Union

import sexpdata

from ..shared.diagnostics import Diagnostic, Severity
from ..shared.errors import TreeFormatError
from ..shared.source_span import SourceSpan
from ..utils.io_utils import read_source_file
from ..writer.formatting import node_name
from .nodes import (
    INTERNAL_EXTENSION_NODES,
    AttributeStructure,
    BoundAttributeDescriptor,
    ClassDeclarationIntermediateNode,
    CSharpCodeAttributeValueIntermediateNode,
    CSharpCodeIntermediateNode,
    CSharpExpressionAttributeValueIntermediateNode,
    CSharpExpressionIntermediateNode,
    DirectiveIntermediateNode,
    DirectiveTokenIntermediateNode,
    DocumentIntermediateNode,
    FieldIntermediateNode,
    HtmlAttributeIntermediateNode,
    HtmlAttributeValueIntermediateNode,
    HtmlContentIntermediateNode,
    IntermediateNode,
    IntermediateToken,
    MalformedDirectiveIntermediateNode,
    MethodDeclarationIntermediateNode,
    NamespaceDeclarationIntermediateNode,
    TagHelperBodyIntermediateNode,
    TagHelperHtmlAttributeIntermediateNode,
    TagHelperIntermediateNode,
    TagHelperPropertyIntermediateNode,
    TagMode,
    TemplateIntermediateNode,
    TokenKind,
    UsingDirectiveIntermediateNode,
)

logger = logging.getLogger(__name__)

CORE_NODES: Tuple[Type[IntermediateNode], ...] = (
    DocumentIntermediateNode,
    NamespaceDeclarationIntermediateNode,
    UsingDirectiveIntermediateNode,
    ClassDeclarationIntermediateNode,
    MethodDeclarationIntermediateNode,
    FieldIntermediateNode,
    DirectiveIntermediateNode,
    MalformedDirectiveIntermediateNode,
    DirectiveTokenIntermediateNode,
    IntermediateToken,
    HtmlAttributeIntermediateNode,
    HtmlAttributeValueIntermediateNode,
    HtmlContentIntermediateNode,
    CSharpExpressionAttributeValueIntermediateNode,
    CSharpCodeAttributeValueIntermediateNode,
    CSharpExpressionIntermediateNode,
    CSharpCodeIntermediateNode,
    TemplateIntermediateNode,
    TagHelperIntermediateNode,
    TagHelperBodyIntermediateNode,
    TagHelperPropertyIntermediateNode,
    TagHelperHtmlAttributeIntermediateNode,
) + INTERNAL_EXTENSION_NODES

# Constructor arguments that take enum members; values are matched by enum value.
_ENUM_FIELDS: Dict[str, Type[Enum]] = {
    "kind": TokenKind,
    "tag_mode": TagMode,
    "attribute_structure": AttributeStructure,
}

# Every other constructor argument takes a string.
_STRING_LIST_FIELDS = frozenset({"modifiers", "interfaces"})
_BOOLEAN_FIELDS = frozenset({"is_component_capture"})
_NODE_FIELDS = frozenset({"identifier_token"})


def _sym_val(x: Any) -> Optional[str]:
    """Symbol name, or None if x is not a symbol."""
    if isinstance(x, sexpdata.Symbol):
        return x.value()
    return None


def _plist(tail: list) -> Tuple[Dict[str, Any], List[Any]]:
    """Split a node's tail into keyword options and trailing children."""
    opts: Dict[str, Any] = {}
    i = 0
    while i < len(tail):
        key = _sym_val(tail[i])
        if key is None or not key.startswith(":"):
            break
        if i + 1 >= len(tail):
            raise TreeFormatError(f"Keyword {key} has no value", tail)
        opts[key[1:].replace("-", "_")] = tail[i + 1]
        i += 2
    return opts, tail[i:]


class TreeLoader:
    """
    S-expression to IR tree loader.

    `node_types` is the set of node classes the loader can build; extension
    packages pass their classes in addition to CORE_NODES.
    """

    def __init__(self, node_types: Iterable[Type[IntermediateNode]] = CORE_NODES):
        self._node_types: Dict[str, Type[IntermediateNode]] = {}
        for node_type in node_types:
            self._node_types[node_name(node_type)] = node_type

    def load(self, text: str) -> IntermediateNode:
        try:
            parsed = sexpdata.loads(text)
        except Exception as e:
            raise TreeFormatError(f"Invalid S-expression: {e}") from e
        return self.build_node(parsed)

    def build_node(self, sexpr: Any) -> IntermediateNode:
        if not isinstance(sexpr, list) or not sexpr:
            raise TreeFormatError("Expected a node form", sexpr)
        name = _sym_val(sexpr[0])
        if name is None:
            raise TreeFormatError("Node form must start with a node name", sexpr)
        node_type = self._node_types.get(name)
        if node_type is None:
            raise TreeFormatError(f"Unknown node name '{name}'", sexpr)

        opts, children = _plist(sexpr[1:])
        kwargs = {key: self._build_value(key, value) for key, value in opts.items()}
        kwargs["children"] = [self.build_node(child) for child in children]
        try:
            return node_type(**kwargs)
        except TypeError as e:
            raise TreeFormatError(f"Bad arguments for {name}: {e}", sexpr) from e

    def _build_value(self, key: str, value: Any) -> Any:
        if key == "source":
            return self._build_span(value)
        if key == "diagnostics":
            return [self._build_diagnostic(d) for d in self._expect_list(value, key)]
        if key == "bound_attribute":
            return BoundAttributeDescriptor(display_name=self._build_string(key, value))
        if key in _ENUM_FIELDS:
            return self._build_enum(_ENUM_FIELDS[key], value)
        if key in _STRING_LIST_FIELDS:
            items = self._build_scalar(value)
            if not isinstance(items, list) or not all(isinstance(item, str) for item in items):
                raise TreeFormatError(f"Expected a list of strings for {key}", value)
            return items
        if key in _BOOLEAN_FIELDS:
            flag = self._build_scalar(value)
            if not isinstance(flag, bool):
                raise TreeFormatError(f"Expected true or false for {key}", value)
            return flag
        if key in _NODE_FIELDS:
            node = self._build_scalar(value)
            if not isinstance(node, IntermediateNode):
                raise TreeFormatError(f"Expected a node form for {key}", value)
            return node
        return self._build_string(key, value)

    def _build_string(self, key: str, value: Any) -> str:
        # sexpdata reads `t` as True and `nil` as []; neither is a string.
        text = self._build_scalar(value)
        if not isinstance(text, str):
            raise TreeFormatError(f"Expected a string for {key}", value)
        return text

    def _build_scalar(self, value: Any) -> Any:
        if isinstance(value, list):
            if value and _sym_val(value[0]) in self._node_types:
                return self.build_node(value)
            return [self._build_scalar(v) for v in value]
        symbol = _sym_val(value)
        if symbol is not None:
            if symbol == "true":
                return True
            if symbol == "false":
                return False
            return symbol
        return value

    def _build_enum(self, enum_type: Type[Enum], value: Any) -> Enum:
        raw = self._build_scalar(value)
        try:
            return enum_type(raw)
        except ValueError as e:
            raise TreeFormatError(f"Invalid {enum_type.__name__} value", value) from e

    def _build_span(self, value: Any) -> SourceSpan:
        parts = self._expect_list(value, "source")
        if len(parts) not in (4, 5) or not all(isinstance(p, int) for p in parts[:4]):
            raise TreeFormatError("Source must be (absolute line character length [\"path\"])", value)
        file_path = parts[4] if len(parts) == 5 else None
        if file_path is not None and not isinstance(file_path, str):
            raise TreeFormatError("Source path must be a string", value)
        return SourceSpan(
            file_path=file_path,
            absolute_index=parts[0],
            line_index=parts[1],
            character_index=parts[2],
            length=parts[3],
        )

    def _build_diagnostic(self, value: Any) -> Diagnostic:
        parts = self._expect_list(value, "diagnostic")
        if len(parts) not in (3, 4):
            raise TreeFormatError("Diagnostic must be (Severity \"Id\" \"message\" [span])", value)
        severity = self._build_enum(Severity, parts[0])
        span = self._build_span(parts[3]) if len(parts) == 4 else None
        return Diagnostic(id=self._build_string("diagnostic id", parts[1]), severity=severity,
                          message=self._build_string("diagnostic message", parts[2]), span=span)

    @staticmethod
    def _expect_list(value: Any, what: str) -> list:
        if not isinstance(value, list):
            raise TreeFormatError(f"Expected a list for {what}", value)
        return value


def load_tree(text: str, node_types: Iterable[Type[IntermediateNode]] = CORE_NODES) -> IntermediateNode:
    """Build an IR tree from S-expression text."""
    return TreeLoader(node_types).load(text)


def load_tree_file(path: Union[Path, str],
                   node_types: Iterable[Type[IntermediateNode]] = CORE_NODES) -> IntermediateNode:
    """Load and build an IR tree from a file."""
    logger.debug(f"Loading IR tree from {path}")
    return load_tree(read_source_file(path), node_types)
