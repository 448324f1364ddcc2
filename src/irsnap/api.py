"""
Convenience entry points wiring the writer to the bundled extensions.
"""

from typing import Optional

from .components import register_component_extensions
from .ir.nodes import INTERNAL_EXTENSION_NODES, IntermediateNode
from .writer.registry import ExtensionRegistry, TrustPolicy
from .writer.tree_writer import serialize


def default_registry(include_components: bool = True) -> ExtensionRegistry:
    """Registry with the compiler's internal nodes and, optionally, the component renderers."""
    registry = ExtensionRegistry()
    registry.register_internal(*INTERNAL_EXTENSION_NODES)
    if include_components:
        register_component_extensions(registry)
    return registry


def dump_tree(root: IntermediateNode, registry: Optional[ExtensionRegistry] = None,
              trust_policy: Optional[TrustPolicy] = None) -> str:
    """Dump `root` using `registry` (default_registry() when omitted)."""
    if registry is None:
        registry = default_registry()
    return serialize(root, registry=registry, trust_policy=trust_policy)
