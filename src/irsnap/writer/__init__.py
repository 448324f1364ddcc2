"""
IR dump writer: traversal, formatting primitives and the extension registry.
"""

from .registry import (
    ContentFields,
    ExtensionRegistry,
    ExtensionRule,
    FieldRenderer,
    NodeOrigin,
    TrustPolicy,
    module_trust_policy,
    registration_trust_policy,
)
from .tree_writer import TreeWriter, serialize

__all__ = [
    "ContentFields",
    "ExtensionRegistry",
    "ExtensionRule",
    "FieldRenderer",
    "NodeOrigin",
    "TrustPolicy",
    "module_trust_policy",
    "registration_trust_policy",
    "TreeWriter",
    "serialize",
]
