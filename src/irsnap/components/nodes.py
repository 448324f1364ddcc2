"""
Component extension nodes

Nodes contributed by the component/markup front-end extension. They are not part
of the closed set in ir.nodes; the dump writer learns how to render them through
register_component_extensions().
"""

from typing import Optional

from ..ir.nodes import ExtensionIntermediateNode, IntermediateToken


class HtmlElementIntermediateNode(ExtensionIntermediateNode):
    """Markup element; attributes and body are children."""
    __slots__ = ('tag_name',)

    def __init__(self, tag_name: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        self.tag_name = tag_name


class HtmlBlockIntermediateNode(ExtensionIntermediateNode):
    """Static markup collapsed into a single block of text."""
    __slots__ = ('content',)

    def __init__(self, content: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        self.content = content


class ComponentExtensionNode(ExtensionIntermediateNode):
    __slots__ = ('tag_name', 'type_name')

    def __init__(self, tag_name: Optional[str] = None, type_name: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        self.tag_name = tag_name
        self.type_name = type_name


class ComponentAttributeExtensionNode(ExtensionIntermediateNode):
    """Attribute on a component bound to one of its properties."""
    __slots__ = ('attribute_name', 'property_name')

    def __init__(self, attribute_name: Optional[str] = None, property_name: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        self.attribute_name = attribute_name
        self.property_name = property_name


class RouteAttributeExtensionNode(ExtensionIntermediateNode):
    __slots__ = ('template',)

    def __init__(self, template: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        self.template = template


class RefExtensionNode(ExtensionIntermediateNode):
    """
    Ref capture: assigns the rendered element or component to a field.

    `identifier_token` holds the captured identifier; `component_capture_type_name`
    is only meaningful when `is_component_capture` is set.
    """
    __slots__ = ('identifier_token', 'is_component_capture', 'component_capture_type_name')

    def __init__(self, identifier_token: Optional[IntermediateToken] = None, is_component_capture: bool = False,
                 component_capture_type_name: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        self.identifier_token = identifier_token
        self.is_component_capture = is_component_capture
        self.component_capture_type_name = component_capture_type_name
