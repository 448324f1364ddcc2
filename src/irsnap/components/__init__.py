"""
Component/markup front-end extension: node shapes and their dump renderers.
"""

from .nodes import (
    ComponentAttributeExtensionNode,
    ComponentExtensionNode,
    HtmlBlockIntermediateNode,
    HtmlElementIntermediateNode,
    RefExtensionNode,
    RouteAttributeExtensionNode,
)
from .registration import register_component_extensions

COMPONENT_NODES = (
    HtmlElementIntermediateNode,
    HtmlBlockIntermediateNode,
    ComponentExtensionNode,
    ComponentAttributeExtensionNode,
    RouteAttributeExtensionNode,
    RefExtensionNode,
)

__all__ = [
    "COMPONENT_NODES",
    "ComponentAttributeExtensionNode",
    "ComponentExtensionNode",
    "HtmlBlockIntermediateNode",
    "HtmlElementIntermediateNode",
    "RefExtensionNode",
    "RouteAttributeExtensionNode",
    "register_component_extensions",
]
