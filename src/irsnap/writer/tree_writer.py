"""
IR Tree Writer

Walks an IR tree pre-order and writes one line per node:

    <indent><Name>[ - <source range>][ - <field>]...[ | {<diagnostic>}...]

Used for snapshot tests of IR generation: equivalent trees must dump to
byte-identical text and any semantic change must show up in a line diff. The
format is one-way; nothing reads it back.
"""

import io
import logging
from contextlib import contextmanager
from typing import Iterator, Optional, Sequence, TextIO

from ..ir.nodes import (
    INTERNAL_EXTENSION_NODES,
    ClassDeclarationIntermediateNode,
    CSharpCodeAttributeValueIntermediateNode,
    CSharpCodeIntermediateNode,
    CSharpExpressionAttributeValueIntermediateNode,
    CSharpExpressionIntermediateNode,
    DirectiveIntermediateNode,
    DirectiveTokenIntermediateNode,
    DocumentIntermediateNode,
    ExtensionIntermediateNode,
    FieldIntermediateNode,
    HtmlAttributeIntermediateNode,
    HtmlAttributeValueIntermediateNode,
    HtmlContentIntermediateNode,
    IntermediateNode,
    IntermediateNodeVisitor,
    IntermediateToken,
    MalformedDirectiveIntermediateNode,
    MethodDeclarationIntermediateNode,
    NamespaceDeclarationIntermediateNode,
    TagHelperBodyIntermediateNode,
    TagHelperHtmlAttributeIntermediateNode,
    TagHelperIntermediateNode,
    TagHelperPropertyIntermediateNode,
    TemplateIntermediateNode,
    UsingDirectiveIntermediateNode,
)
from ..shared.errors import UnknownNodeKindError
from ..shared.source_span import SourceSpan
from ..utils.config import (
    ATTRIBUTE_STYLE_LABEL,
    DIAGNOSTICS_MARKER,
    FIELD_SEPARATOR,
    LINE_TERMINATOR,
    TAG_MODE_LABEL,
)
from .formatting import (
    enum_label,
    escape_content,
    format_source_span,
    indent,
    join_interfaces,
    join_modifiers,
    message_fingerprint,
    node_name,
)
from .registry import ExtensionRegistry, NodeOrigin, TrustPolicy, registration_trust_policy

logger = logging.getLogger(__name__)


class TreeWriter(IntermediateNodeVisitor[None]):
    """
    Dump writer for IR trees.

    visit(node) writes a single node's line without a terminator (shallow);
    write_tree(root) writes the whole tree, one terminated line per node.

    The sink and `depth` belong to the traversal in progress: one writer must
    not be shared between concurrent dumps.
    """

    def __init__(self, writer: TextIO, registry: Optional[ExtensionRegistry] = None,
                 trust_policy: Optional[TrustPolicy] = None):
        self._writer = writer
        if registry is None:
            registry = ExtensionRegistry()
            registry.register_internal(*INTERNAL_EXTENSION_NODES)
        self.registry = registry
        self.trust_policy: TrustPolicy = (
            trust_policy if trust_policy is not None else registration_trust_policy(registry)
        )
        self.depth = 0

    # =========================================================================
    # Traversal
    # =========================================================================

    def write_tree(self, root: IntermediateNode) -> int:
        """
        Dump `root` and its descendants starting at the current depth.

        Returns the number of lines written. An UnknownNodeKindError leaves the
        sink truncated at the offending node.
        """
        logger.debug(f"Starting IR dump at {type(root).__name__}")
        written = self._write_subtree(root)
        logger.debug(f"IR dump finished: {written} nodes written")
        return written

    def _write_subtree(self, node: IntermediateNode) -> int:
        self.visit(node)
        self.write_new_line()
        written = 1
        with self._nested():
            for child in node.children:
                written += self._write_subtree(child)
        return written

    @contextmanager
    def _nested(self) -> Iterator[None]:
        self.depth += 1
        try:
            yield
        finally:
            self.depth -= 1

    # =========================================================================
    # Well-known node kinds
    # =========================================================================

    def visit_document(self, node: DocumentIntermediateNode) -> None:
        self.write_basic_node(node)

    def visit_namespace_declaration(self, node: NamespaceDeclarationIntermediateNode) -> None:
        self.write_content_node(node, [node.content])

    def visit_using_directive(self, node: UsingDirectiveIntermediateNode) -> None:
        self.write_content_node(node, [node.content])

    def visit_class_declaration(self, node: ClassDeclarationIntermediateNode) -> None:
        self.write_content_node(node, [
            join_modifiers(node.modifiers),
            node.class_name,
            node.base_type,
            join_interfaces(node.interfaces),
        ])

    def visit_method_declaration(self, node: MethodDeclarationIntermediateNode) -> None:
        self.write_content_node(node, [join_modifiers(node.modifiers), node.return_type, node.method_name])

    def visit_field_declaration(self, node: FieldIntermediateNode) -> None:
        self.write_content_node(node, [join_modifiers(node.modifiers), node.field_type, node.field_name])

    def visit_directive(self, node: DirectiveIntermediateNode) -> None:
        self.write_content_node(node, [node.directive_name])

    def visit_malformed_directive(self, node: MalformedDirectiveIntermediateNode) -> None:
        self.write_content_node(node, [node.directive_name])

    def visit_directive_token(self, node: DirectiveTokenIntermediateNode) -> None:
        self.write_content_node(node, [node.content])

    def visit_token(self, node: IntermediateToken) -> None:
        self.write_content_node(node, [node.kind.value, node.content])

    def visit_html_attribute(self, node: HtmlAttributeIntermediateNode) -> None:
        self.write_content_node(node, [node.prefix, node.suffix])

    def visit_html_attribute_value(self, node: HtmlAttributeValueIntermediateNode) -> None:
        self.write_content_node(node, [node.prefix])

    def visit_html_content(self, node: HtmlContentIntermediateNode) -> None:
        self.write_basic_node(node)

    def visit_csharp_expression_attribute_value(self, node: CSharpExpressionAttributeValueIntermediateNode) -> None:
        self.write_content_node(node, [node.prefix])

    def visit_csharp_code_attribute_value(self, node: CSharpCodeAttributeValueIntermediateNode) -> None:
        self.write_content_node(node, [node.prefix])

    def visit_csharp_expression(self, node: CSharpExpressionIntermediateNode) -> None:
        self.write_basic_node(node)

    def visit_csharp_code(self, node: CSharpCodeIntermediateNode) -> None:
        self.write_basic_node(node)

    def visit_template(self, node: TemplateIntermediateNode) -> None:
        self.write_basic_node(node)

    def visit_tag_helper(self, node: TagHelperIntermediateNode) -> None:
        self.write_content_node(node, [node.tag_name, enum_label(TAG_MODE_LABEL, node.tag_mode)])

    def visit_tag_helper_body(self, node: TagHelperBodyIntermediateNode) -> None:
        self.write_basic_node(node)

    def visit_tag_helper_property(self, node: TagHelperPropertyIntermediateNode) -> None:
        display_name = node.bound_attribute.display_name if node.bound_attribute is not None else None
        self.write_content_node(node, [
            node.attribute_name,
            display_name,
            enum_label(ATTRIBUTE_STYLE_LABEL, node.attribute_structure),
        ])

    def visit_tag_helper_html_attribute(self, node: TagHelperHtmlAttributeIntermediateNode) -> None:
        self.write_content_node(node, [
            node.attribute_name,
            enum_label(ATTRIBUTE_STYLE_LABEL, node.attribute_structure),
        ])

    # =========================================================================
    # Extension node kinds
    # =========================================================================

    def visit_extension(self, node: ExtensionIntermediateNode) -> None:
        node_type = type(node)
        rule = self.registry.lookup(node_type)
        if rule is not None and rule.render is not None:
            self.write_content_node(node, rule.render(node))
            return

        # INTERNAL registrations stay trusted whatever policy was injected.
        if (rule is not None and rule.origin is NodeOrigin.INTERNAL) or self.trust_policy(node_type):
            logger.debug(f"Writing trusted extension node {node_type.__qualname__} without content")
            self.write_basic_node(node)
            return

        error = UnknownNodeKindError(node_type)
        logger.error(str(error))
        raise error

    # =========================================================================
    # Line assembly
    # =========================================================================

    def write_basic_node(self, node: IntermediateNode) -> None:
        self.write_content_node(node, None)

    def write_content_node(self, node: IntermediateNode, content: Optional[Sequence[Optional[str]]]) -> None:
        self.write_indent()
        self.write_name(node)
        if node.source is not None:
            self.write_separator()
            self.write_source_range(node.source)

        if content is not None:
            for field in content:
                self.write_separator()
                self.write_content(field)

        self.write_diagnostics(node)

    def write_indent(self) -> None:
        self._writer.write(indent(self.depth))

    def write_separator(self) -> None:
        self._writer.write(FIELD_SEPARATOR)

    def write_new_line(self) -> None:
        self._writer.write(LINE_TERMINATOR)

    def write_name(self, node: IntermediateNode) -> None:
        self._writer.write(node_name(type(node)))

    def write_source_range(self, span: SourceSpan) -> None:
        self._writer.write(format_source_span(span))

    def write_content(self, content: Optional[str]) -> None:
        if content is None:
            return
        self._writer.write(escape_content(content))

    def write_diagnostics(self, node: IntermediateNode) -> None:
        if not node.has_diagnostics:
            return

        # Never the message itself: only its fingerprint.
        entries = []
        for diagnostic in node.diagnostics:
            span = format_source_span(diagnostic.span) if diagnostic.span is not None else ""
            entries.append(
                f"{{{span}: {diagnostic.severity.value} {diagnostic.id}: "
                f"{message_fingerprint(diagnostic.get_message())}}}"
            )
        self._writer.write(DIAGNOSTICS_MARKER)
        self._writer.write(" ".join(entries))


def serialize(root: IntermediateNode, registry: Optional[ExtensionRegistry] = None,
              trust_policy: Optional[TrustPolicy] = None) -> str:
    """
    Dump an IR tree to a string.

    Args:
        root: Tree root (written at depth 0)
        registry: Extension renderers; defaults to the core internal nodes only
        trust_policy: Decides which further unrendered extension nodes may use
            the bare fallback; the registry's INTERNAL registrations are always
            trusted

    Returns:
        The dump, one '\\n'-terminated line per node
    """
    output = io.StringIO()
    TreeWriter(output, registry=registry, trust_policy=trust_policy).write_tree(root)
    return output.getvalue()
