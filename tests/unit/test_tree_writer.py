"""
Tests for TreeWriter: per-kind field rendering, line layout, indentation,
diagnostics and determinism.
"""

import io
import pytest

from irsnap.ir.nodes import (
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
    IntermediateNodeVisitor,
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
from irsnap.shared.diagnostics import Diagnostic, Severity
from irsnap.writer.tree_writer import TreeWriter, serialize


def render(node, depth=0, registry=None):
    """Shallow visit: one line, no terminator."""
    out = io.StringIO()
    writer = TreeWriter(out, registry=registry)
    writer.depth = depth
    writer.visit(node)
    return out.getvalue()


def count_field():
    return FieldIntermediateNode(modifiers=["public", "static"], field_type="int", field_name="Count")


class TestShallowVisit:

    def test_field_at_depth_zero(self):
        assert render(count_field()) == "Field - public static - int - Count"

    def test_field_at_depth_two(self):
        assert render(count_field(), depth=2) == "        Field - public static - int - Count"

    def test_visit_writes_no_terminator_and_no_children(self):
        node = HtmlContentIntermediateNode(children=[HtmlContentIntermediateNode()])
        assert render(node) == "HtmlContent"

    def test_source_range_follows_name(self, span):
        node = NamespaceDeclarationIntermediateNode(content="Test", source=span(0, 0, 0, 10))
        assert render(node) == "NamespaceDeclaration - (0:0,0 [10] Index.cshtml) - Test"

    def test_basic_node_with_source(self, span):
        node = DocumentIntermediateNode(source=span(3, 1, 2, 5))
        assert render(node) == "Document - (3:1,2 [5] Index.cshtml)"


class TestWellKnownKinds:

    @pytest.mark.parametrize("node, expected", [
        (DocumentIntermediateNode(), "Document"),
        (HtmlContentIntermediateNode(), "HtmlContent"),
        (CSharpExpressionIntermediateNode(), "CSharpExpression"),
        (CSharpCodeIntermediateNode(), "CSharpCode"),
        (TemplateIntermediateNode(), "Template"),
        (TagHelperBodyIntermediateNode(), "TagHelperBody"),
    ])
    def test_basic_kinds(self, node, expected):
        assert render(node) == expected

    def test_namespace(self):
        assert render(NamespaceDeclarationIntermediateNode(content="Ns.Views")) == "NamespaceDeclaration - Ns.Views"

    def test_using(self):
        assert render(UsingDirectiveIntermediateNode(content="System.Linq")) == "UsingDirective - System.Linq"

    def test_class_declaration(self):
        node = ClassDeclarationIntermediateNode(modifiers=["public"], class_name="Test", base_type="Base",
                                                interfaces=["IA", "IB"])
        assert render(node) == "ClassDeclaration - public - Test - Base - IA, IB"

    def test_class_declaration_without_interfaces(self):
        node = ClassDeclarationIntermediateNode(modifiers=["public"], class_name="Test", base_type="Base")
        assert node.interfaces is None
        assert render(node) == "ClassDeclaration - public - Test - Base - "

    def test_method_declaration(self):
        node = MethodDeclarationIntermediateNode(modifiers=["protected", "override"], return_type="void",
                                                 method_name="Run")
        assert render(node) == "MethodDeclaration - protected override - void - Run"

    def test_directive(self):
        assert render(DirectiveIntermediateNode(directive_name="page")) == "Directive - page"

    def test_malformed_directive(self):
        assert render(MalformedDirectiveIntermediateNode(directive_name="section")) == "MalformedDirective - section"

    def test_directive_token(self):
        assert render(DirectiveTokenIntermediateNode(content="Foo")) == "DirectiveToken - Foo"

    def test_token(self):
        node = IntermediateToken(kind=TokenKind.CSHARP, content="x + 1")
        assert render(node) == "IntermediateToken - CSharp - x + 1"

    def test_token_default_kind(self):
        assert render(IntermediateToken(content="?")) == "IntermediateToken - Unknown - ?"

    def test_html_attribute(self):
        node = HtmlAttributeIntermediateNode(attribute_name="class", prefix=' class="', suffix='"')
        assert render(node) == 'HtmlAttribute -  class=" - "'

    def test_html_attribute_value(self):
        assert render(HtmlAttributeValueIntermediateNode(prefix=" ")) == "HtmlAttributeValue -  "

    def test_csharp_expression_attribute_value(self):
        node = CSharpExpressionAttributeValueIntermediateNode(prefix="")
        assert render(node) == "CSharpExpressionAttributeValue - "

    def test_csharp_code_attribute_value(self):
        node = CSharpCodeAttributeValueIntermediateNode(prefix=" ")
        assert render(node) == "CSharpCodeAttributeValue -  "

    def test_tag_helper(self):
        node = TagHelperIntermediateNode(tag_name="p", tag_mode=TagMode.START_TAG_ONLY)
        assert render(node) == "TagHelper - p - TagMode.StartTagOnly"

    def test_tag_helper_default_mode(self):
        assert render(TagHelperIntermediateNode(tag_name="div")) == "TagHelper - div - TagMode.StartTagAndEndTag"

    def test_tag_helper_property(self):
        node = TagHelperPropertyIntermediateNode(
            attribute_name="bound",
            bound_attribute=BoundAttributeDescriptor("string InputTagHelper.Bound"),
            attribute_structure=AttributeStructure.NO_QUOTES,
        )
        expected = "TagHelperProperty - bound - string InputTagHelper.Bound - HtmlAttributeValueStyle.NoQuotes"
        assert render(node) == expected

    def test_tag_helper_property_without_descriptor(self):
        node = TagHelperPropertyIntermediateNode(attribute_name="bound")
        assert render(node) == "TagHelperProperty - bound -  - HtmlAttributeValueStyle.DoubleQuotes"

    def test_tag_helper_html_attribute(self):
        node = TagHelperHtmlAttributeIntermediateNode(attribute_name="type",
                                                      attribute_structure=AttributeStructure.MINIMIZED)
        assert render(node) == "TagHelperHtmlAttribute - type - HtmlAttributeValueStyle.Minimized"


class TestContentFields:

    def test_none_field_keeps_separator(self):
        assert render(DirectiveTokenIntermediateNode(content=None)) == "DirectiveToken - "

    def test_empty_field_keeps_separator(self):
        assert render(DirectiveTokenIntermediateNode(content="")) == "DirectiveToken - "

    def test_empty_modifiers(self):
        node = FieldIntermediateNode(modifiers=[], field_type="int", field_name="x")
        assert render(node) == "Field -  - int - x"

    def test_content_escaped(self):
        node = IntermediateToken(kind=TokenKind.HTML, content="a - b\r\nc")
        assert render(node) == "IntermediateToken - Html - a\\-b\\nc"

    def test_escaped_content_cannot_forge_fields(self):
        forged = IntermediateToken(kind=TokenKind.HTML, content="x - y")
        assert render(forged).count(" - ") == 2

    def test_multiline_content_stays_on_one_line(self):
        node = CSharpCodeAttributeValueIntermediateNode(prefix="\n\n")
        assert render(node) == "CSharpCodeAttributeValue - \\n\\n"


class TestDiagnostics:

    def test_single_diagnostic(self, span):
        diagnostic = Diagnostic("RZ1001", Severity.ERROR, "Unexpected end of directive.", span(1, 2, 3, 4))
        node = DirectiveIntermediateNode(directive_name="page", diagnostics=[diagnostic])
        expected = ("Directive - page | {(1:2,3 [4] Index.cshtml): Error RZ1001: "
                    "2968416879781adff1c92548a1367bce}")
        assert render(node) == expected

    def test_multiple_diagnostics_in_order(self, span):
        node = DocumentIntermediateNode(diagnostics=[
            Diagnostic("RZ2005", Severity.WARNING, "", None),
            Diagnostic("RZ1001", Severity.ERROR, "Unexpected end of directive.", span(0, 0, 0, 1)),
        ])
        expected = ("Document | {: Warning RZ2005: d41d8cd98f00b204e9800998ecf8427e} "
                    "{(0:0,0 [1] Index.cshtml): Error RZ1001: 2968416879781adff1c92548a1367bce}")
        assert render(node) == expected

    def test_message_text_never_written(self):
        message = "Missing ')'."
        node = DocumentIntermediateNode(diagnostics=[Diagnostic("RZ9999", Severity.ERROR, message)])
        line = render(node)
        assert message not in line
        assert "42cd2d3123554a3189228b7311b70326" in line

    def test_diagnostics_after_source_and_fields(self, span):
        node = FieldIntermediateNode(modifiers=["public"], field_type="int", field_name="x",
                                     source=span(5, 0, 5, 1),
                                     diagnostics=[Diagnostic("RZ1", Severity.ERROR, "")])
        line = render(node)
        assert line.startswith("Field - (5:0,5 [1] Index.cshtml) - public - int - x | {")

    def test_no_marker_without_diagnostics(self):
        assert " | " not in render(count_field())


class TestWriteTree:

    def test_children_indented_and_ordered(self):
        root = DocumentIntermediateNode(children=[
            NamespaceDeclarationIntermediateNode(content="A", children=[
                UsingDirectiveIntermediateNode(content="System"),
                UsingDirectiveIntermediateNode(content="System.Linq"),
            ]),
            CSharpCodeIntermediateNode(),
        ])
        assert serialize(root) == (
            "Document\n"
            "    NamespaceDeclaration - A\n"
            "        UsingDirective - System\n"
            "        UsingDirective - System.Linq\n"
            "    CSharpCode\n"
        )

    def test_returns_line_count(self):
        root = DocumentIntermediateNode(children=[HtmlContentIntermediateNode(children=[IntermediateToken()])])
        writer = TreeWriter(io.StringIO())
        assert writer.write_tree(root) == 3

    def test_depth_restored_after_tree(self):
        writer = TreeWriter(io.StringIO())
        writer.write_tree(DocumentIntermediateNode(children=[DocumentIntermediateNode()]))
        assert writer.depth == 0

    def test_starts_at_current_depth(self):
        out = io.StringIO()
        writer = TreeWriter(out)
        writer.depth = 1
        writer.write_tree(TemplateIntermediateNode(children=[CSharpCodeIntermediateNode()]))
        assert out.getvalue() == "    Template\n        CSharpCode\n"

    def test_deterministic(self, span):
        def build():
            return DocumentIntermediateNode(children=[
                count_field(),
                IntermediateToken(kind=TokenKind.HTML, content="<p>", source=span(1, 0, 1, 3)),
            ])
        assert serialize(build()) == serialize(build())

    def test_field_change_changes_output(self):
        a = DocumentIntermediateNode(children=[count_field()])
        b = DocumentIntermediateNode(children=[
            FieldIntermediateNode(modifiers=["public", "static"], field_type="long", field_name="Count")])
        assert serialize(a) != serialize(b)

    def test_child_order_changes_output(self):
        first = UsingDirectiveIntermediateNode(content="A")
        second = UsingDirectiveIntermediateNode(content="B")
        assert (serialize(DocumentIntermediateNode(children=[first, second]))
                != serialize(DocumentIntermediateNode(children=[second, first])))

    def test_span_change_changes_output(self, span):
        a = DocumentIntermediateNode(source=span(0, 0, 0, 4))
        b = DocumentIntermediateNode(source=span(0, 0, 0, 5))
        assert serialize(a) != serialize(b)

    @pytest.mark.parametrize("changed", [
        {"severity": Severity.WARNING},
        {"diagnostic_id": "RZ1002"},
        {"span_length": 5},
        {"span": None},
        {"message": "Unexpected end of directive"},
    ])
    def test_diagnostic_change_changes_output(self, span, changed):
        def build(severity=Severity.ERROR, diagnostic_id="RZ1001", message="Unexpected end of directive.",
                  span_length=4, **overrides):
            diagnostic_span = overrides.get("span", span(1, 2, 3, span_length))
            diagnostic = Diagnostic(diagnostic_id, severity, message, diagnostic_span)
            return DirectiveIntermediateNode(directive_name="page", diagnostics=[diagnostic])

        assert render(build()) != render(build(**changed))

    def test_empty_document(self):
        assert serialize(DocumentIntermediateNode()) == "Document\n"


class TestVisitorContract:

    def test_incomplete_visitor_cannot_be_instantiated(self):
        class DocumentOnly(IntermediateNodeVisitor[None]):
            def visit_document(self, node):
                pass

        with pytest.raises(TypeError):
            DocumentOnly()

    def test_writer_is_complete_visitor(self):
        TreeWriter(io.StringIO())
