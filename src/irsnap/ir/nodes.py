"""
IR Nodes

Tree produced by the template compiler front-end between parsing and code
generation. Every node carries an optional source span, its diagnostics and an
ordered list of children; payload fields live on the concrete node classes.

Design: regular classes with __slots__ (not dataclasses) so that subclasses can
add payload fields in front of the shared keyword arguments.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Generic, List, Optional, Sequence, Tuple, Type, TypeVar

from ..shared.diagnostics import Diagnostic
from ..shared.source_span import SourceSpan


T = TypeVar('T')


class TokenKind(Enum):
    """Language of an IntermediateToken's content."""
    UNKNOWN = "Unknown"
    CSHARP = "CSharp"
    HTML = "Html"


class TagMode(Enum):
    START_TAG_AND_END_TAG = "StartTagAndEndTag"
    SELF_CLOSING = "SelfClosing"
    START_TAG_ONLY = "StartTagOnly"


class AttributeStructure(Enum):
    """How an attribute value was quoted in the source."""
    DOUBLE_QUOTES = "DoubleQuotes"
    SINGLE_QUOTES = "SingleQuotes"
    NO_QUOTES = "NoQuotes"
    MINIMIZED = "Minimized"


class BoundAttributeDescriptor:
    """Tag-helper attribute that a TagHelperPropertyIntermediateNode binds to."""
    __slots__ = ('name', 'type_name', 'display_name')

    def __init__(self, display_name: str, name: Optional[str] = None, type_name: Optional[str] = None):
        self.display_name = display_name
        self.name = name
        self.type_name = type_name

    def __repr__(self) -> str:
        return f"BoundAttributeDescriptor({self.display_name!r})"


class IntermediateNode:
    """
    Base class for all IR nodes.

    The dump writer only ever reads nodes; nothing in this package mutates a tree
    after construction.
    """
    __slots__ = ('source', 'diagnostics', 'children')

    def __init__(self, source: Optional[SourceSpan] = None,
                 diagnostics: Optional[List[Diagnostic]] = None,
                 children: Optional[List["IntermediateNode"]] = None):
        self.source = source
        self.diagnostics: List[Diagnostic] = list(diagnostics) if diagnostics else []
        self.children: List[IntermediateNode] = list(children) if children else []

    @property
    def has_diagnostics(self) -> bool:
        return len(self.diagnostics) > 0

    def accept(self, visitor: 'IntermediateNodeVisitor[T]') -> 'T':
        raise NotImplementedError(f"accept() not implemented for {self.__class__.__name__}")

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} children={len(self.children)}>"


class DocumentIntermediateNode(IntermediateNode):
    __slots__ = ()

    def accept(self, visitor: 'IntermediateNodeVisitor[T]') -> 'T':
        return visitor.visit_document(self)


class NamespaceDeclarationIntermediateNode(IntermediateNode):
    __slots__ = ('content',)

    def __init__(self, content: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        self.content = content

    def accept(self, visitor: 'IntermediateNodeVisitor[T]') -> 'T':
        return visitor.visit_namespace_declaration(self)


class UsingDirectiveIntermediateNode(IntermediateNode):
    __slots__ = ('content',)

    def __init__(self, content: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        self.content = content

    def accept(self, visitor: 'IntermediateNodeVisitor[T]') -> 'T':
        return visitor.visit_using_directive(self)


class ClassDeclarationIntermediateNode(IntermediateNode):
    """Generated class. `interfaces` may be None when the class implements none."""
    __slots__ = ('modifiers', 'class_name', 'base_type', 'interfaces')

    def __init__(self, modifiers: Optional[Sequence[str]] = None, class_name: Optional[str] = None,
                 base_type: Optional[str] = None, interfaces: Optional[Sequence[str]] = None, **kwargs):
        super().__init__(**kwargs)
        self.modifiers: List[str] = list(modifiers) if modifiers else []
        self.class_name = class_name
        self.base_type = base_type
        self.interfaces = list(interfaces) if interfaces is not None else None

    def accept(self, visitor: 'IntermediateNodeVisitor[T]') -> 'T':
        return visitor.visit_class_declaration(self)


class MethodDeclarationIntermediateNode(IntermediateNode):
    __slots__ = ('modifiers', 'return_type', 'method_name')

    def __init__(self, modifiers: Optional[Sequence[str]] = None, return_type: Optional[str] = None,
                 method_name: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        self.modifiers: List[str] = list(modifiers) if modifiers else []
        self.return_type = return_type
        self.method_name = method_name

    def accept(self, visitor: 'IntermediateNodeVisitor[T]') -> 'T':
        return visitor.visit_method_declaration(self)


class FieldIntermediateNode(IntermediateNode):
    __slots__ = ('modifiers', 'field_type', 'field_name')

    def __init__(self, modifiers: Optional[Sequence[str]] = None, field_type: Optional[str] = None,
                 field_name: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        self.modifiers: List[str] = list(modifiers) if modifiers else []
        self.field_type = field_type
        self.field_name = field_name

    def accept(self, visitor: 'IntermediateNodeVisitor[T]') -> 'T':
        return visitor.visit_field_declaration(self)


class DirectiveIntermediateNode(IntermediateNode):
    __slots__ = ('directive_name',)

    def __init__(self, directive_name: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        self.directive_name = directive_name

    def accept(self, visitor: 'IntermediateNodeVisitor[T]') -> 'T':
        return visitor.visit_directive(self)


class MalformedDirectiveIntermediateNode(IntermediateNode):
    """Directive the parser could only partially recognize. Still a regular node."""
    __slots__ = ('directive_name',)

    def __init__(self, directive_name: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        self.directive_name = directive_name

    def accept(self, visitor: 'IntermediateNodeVisitor[T]') -> 'T':
        return visitor.visit_malformed_directive(self)


class DirectiveTokenIntermediateNode(IntermediateNode):
    __slots__ = ('content',)

    def __init__(self, content: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        self.content = content

    def accept(self, visitor: 'IntermediateNodeVisitor[T]') -> 'T':
        return visitor.visit_directive_token(self)


class IntermediateToken(IntermediateNode):
    """Leaf carrying raw C# or HTML text."""
    __slots__ = ('kind', 'content')

    def __init__(self, kind: TokenKind = TokenKind.UNKNOWN, content: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        self.kind = kind
        self.content = content

    def accept(self, visitor: 'IntermediateNodeVisitor[T]') -> 'T':
        return visitor.visit_token(self)


class HtmlAttributeIntermediateNode(IntermediateNode):
    __slots__ = ('attribute_name', 'prefix', 'suffix')

    def __init__(self, attribute_name: Optional[str] = None, prefix: Optional[str] = None,
                 suffix: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        self.attribute_name = attribute_name
        self.prefix = prefix
        self.suffix = suffix

    def accept(self, visitor: 'IntermediateNodeVisitor[T]') -> 'T':
        return visitor.visit_html_attribute(self)


class HtmlAttributeValueIntermediateNode(IntermediateNode):
    __slots__ = ('prefix',)

    def __init__(self, prefix: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        self.prefix = prefix

    def accept(self, visitor: 'IntermediateNodeVisitor[T]') -> 'T':
        return visitor.visit_html_attribute_value(self)


class HtmlContentIntermediateNode(IntermediateNode):
    __slots__ = ()

    def accept(self, visitor: 'IntermediateNodeVisitor[T]') -> 'T':
        return visitor.visit_html_content(self)


class CSharpExpressionAttributeValueIntermediateNode(IntermediateNode):
    __slots__ = ('prefix',)

    def __init__(self, prefix: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        self.prefix = prefix

    def accept(self, visitor: 'IntermediateNodeVisitor[T]') -> 'T':
        return visitor.visit_csharp_expression_attribute_value(self)


class CSharpCodeAttributeValueIntermediateNode(IntermediateNode):
    __slots__ = ('prefix',)

    def __init__(self, prefix: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        self.prefix = prefix

    def accept(self, visitor: 'IntermediateNodeVisitor[T]') -> 'T':
        return visitor.visit_csharp_code_attribute_value(self)


class CSharpExpressionIntermediateNode(IntermediateNode):
    __slots__ = ()

    def accept(self, visitor: 'IntermediateNodeVisitor[T]') -> 'T':
        return visitor.visit_csharp_expression(self)


class CSharpCodeIntermediateNode(IntermediateNode):
    __slots__ = ()

    def accept(self, visitor: 'IntermediateNodeVisitor[T]') -> 'T':
        return visitor.visit_csharp_code(self)


class TemplateIntermediateNode(IntermediateNode):
    __slots__ = ()

    def accept(self, visitor: 'IntermediateNodeVisitor[T]') -> 'T':
        return visitor.visit_template(self)


class TagHelperIntermediateNode(IntermediateNode):
    __slots__ = ('tag_name', 'tag_mode')

    def __init__(self, tag_name: Optional[str] = None,
                 tag_mode: TagMode = TagMode.START_TAG_AND_END_TAG, **kwargs):
        super().__init__(**kwargs)
        self.tag_name = tag_name
        self.tag_mode = tag_mode

    def accept(self, visitor: 'IntermediateNodeVisitor[T]') -> 'T':
        return visitor.visit_tag_helper(self)


class TagHelperBodyIntermediateNode(IntermediateNode):
    __slots__ = ()

    def accept(self, visitor: 'IntermediateNodeVisitor[T]') -> 'T':
        return visitor.visit_tag_helper_body(self)


class TagHelperPropertyIntermediateNode(IntermediateNode):
    __slots__ = ('attribute_name', 'bound_attribute', 'attribute_structure')

    def __init__(self, attribute_name: Optional[str] = None,
                 bound_attribute: Optional[BoundAttributeDescriptor] = None,
                 attribute_structure: AttributeStructure = AttributeStructure.DOUBLE_QUOTES, **kwargs):
        super().__init__(**kwargs)
        self.attribute_name = attribute_name
        self.bound_attribute = bound_attribute
        self.attribute_structure = attribute_structure

    def accept(self, visitor: 'IntermediateNodeVisitor[T]') -> 'T':
        return visitor.visit_tag_helper_property(self)


class TagHelperHtmlAttributeIntermediateNode(IntermediateNode):
    __slots__ = ('attribute_name', 'attribute_structure')

    def __init__(self, attribute_name: Optional[str] = None,
                 attribute_structure: AttributeStructure = AttributeStructure.DOUBLE_QUOTES, **kwargs):
        super().__init__(**kwargs)
        self.attribute_name = attribute_name
        self.attribute_structure = attribute_structure

    def accept(self, visitor: 'IntermediateNodeVisitor[T]') -> 'T':
        return visitor.visit_tag_helper_html_attribute(self)


class ExtensionIntermediateNode(IntermediateNode):
    """
    Base for node kinds defined outside the closed set above.

    Subclasses add their own payload; visitors route them through
    visit_extension() and decide per concrete type how to handle them.
    """
    __slots__ = ()

    def accept(self, visitor: 'IntermediateNodeVisitor[T]') -> 'T':
        return visitor.visit_extension(self)


# =========================================================================
# Internal extension nodes (implementation details of the compiler itself)
# =========================================================================

class DesignTimeDirectiveIntermediateNode(ExtensionIntermediateNode):
    """Holds directive tokens so design-time code generation can map them."""
    __slots__ = ()


class DefaultTagHelperCreateIntermediateNode(ExtensionIntermediateNode):
    __slots__ = ('type_name',)

    def __init__(self, type_name: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        self.type_name = type_name


INTERNAL_EXTENSION_NODES: Tuple[Type[ExtensionIntermediateNode], ...] = (
    DesignTimeDirectiveIntermediateNode,
    DefaultTagHelperCreateIntermediateNode,
)


# =========================================================================
# Visitor
# =========================================================================

class IntermediateNodeVisitor(ABC, Generic[T]):
    """
    Visitor over the closed set of IR node kinds.

    Every well-known kind is abstract: a visitor that forgets one cannot be
    instantiated. Extension kinds all arrive through visit_extension().
    """

    def visit(self, node: IntermediateNode) -> T:
        return node.accept(self)

    @abstractmethod
    def visit_document(self, node: DocumentIntermediateNode) -> T:
        pass

    @abstractmethod
    def visit_namespace_declaration(self, node: NamespaceDeclarationIntermediateNode) -> T:
        pass

    @abstractmethod
    def visit_using_directive(self, node: UsingDirectiveIntermediateNode) -> T:
        pass

    @abstractmethod
    def visit_class_declaration(self, node: ClassDeclarationIntermediateNode) -> T:
        pass

    @abstractmethod
    def visit_method_declaration(self, node: MethodDeclarationIntermediateNode) -> T:
        pass

    @abstractmethod
    def visit_field_declaration(self, node: FieldIntermediateNode) -> T:
        pass

    @abstractmethod
    def visit_directive(self, node: DirectiveIntermediateNode) -> T:
        pass

    @abstractmethod
    def visit_malformed_directive(self, node: MalformedDirectiveIntermediateNode) -> T:
        pass

    @abstractmethod
    def visit_directive_token(self, node: DirectiveTokenIntermediateNode) -> T:
        pass

    @abstractmethod
    def visit_token(self, node: IntermediateToken) -> T:
        pass

    @abstractmethod
    def visit_html_attribute(self, node: HtmlAttributeIntermediateNode) -> T:
        pass

    @abstractmethod
    def visit_html_attribute_value(self, node: HtmlAttributeValueIntermediateNode) -> T:
        pass

    @abstractmethod
    def visit_html_content(self, node: HtmlContentIntermediateNode) -> T:
        pass

    @abstractmethod
    def visit_csharp_expression_attribute_value(self, node: CSharpExpressionAttributeValueIntermediateNode) -> T:
        pass

    @abstractmethod
    def visit_csharp_code_attribute_value(self, node: CSharpCodeAttributeValueIntermediateNode) -> T:
        pass

    @abstractmethod
    def visit_csharp_expression(self, node: CSharpExpressionIntermediateNode) -> T:
        pass

    @abstractmethod
    def visit_csharp_code(self, node: CSharpCodeIntermediateNode) -> T:
        pass

    @abstractmethod
    def visit_template(self, node: TemplateIntermediateNode) -> T:
        pass

    @abstractmethod
    def visit_tag_helper(self, node: TagHelperIntermediateNode) -> T:
        pass

    @abstractmethod
    def visit_tag_helper_body(self, node: TagHelperBodyIntermediateNode) -> T:
        pass

    @abstractmethod
    def visit_tag_helper_property(self, node: TagHelperPropertyIntermediateNode) -> T:
        pass

    @abstractmethod
    def visit_tag_helper_html_attribute(self, node: TagHelperHtmlAttributeIntermediateNode) -> T:
        pass

    @abstractmethod
    def visit_extension(self, node: ExtensionIntermediateNode) -> T:
        pass
