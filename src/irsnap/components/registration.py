"""
Dump renderers for the component extension nodes.
"""

from ..utils.config import ELEMENT_CAPTURE_LABEL
from ..writer.registry import ContentFields, ExtensionRegistry
from .nodes import (
    ComponentAttributeExtensionNode,
    ComponentExtensionNode,
    HtmlBlockIntermediateNode,
    HtmlElementIntermediateNode,
    RefExtensionNode,
    RouteAttributeExtensionNode,
)


def _render_ref(node: RefExtensionNode) -> ContentFields:
    identifier = node.identifier_token.content if node.identifier_token is not None else None
    target = node.component_capture_type_name if node.is_component_capture else ELEMENT_CAPTURE_LABEL
    return (identifier, target)


def register_component_extensions(registry: ExtensionRegistry) -> ExtensionRegistry:
    """Plug the component node renderers into `registry` and return it."""
    registry.register(HtmlElementIntermediateNode, lambda node: (node.tag_name,))
    registry.register(HtmlBlockIntermediateNode, lambda node: (node.content,))
    registry.register(ComponentExtensionNode, lambda node: (node.tag_name, node.type_name))
    registry.register(ComponentAttributeExtensionNode, lambda node: (node.attribute_name, node.property_name))
    registry.register(RouteAttributeExtensionNode, lambda node: (node.template,))
    registry.register(RefExtensionNode, _render_ref)
    return registry
