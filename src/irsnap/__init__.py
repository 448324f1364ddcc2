"""
irsnap: canonical line-oriented dumps of template compiler IR trees.
"""

from .api import default_registry, dump_tree
from .ir.sexpr_loader import load_tree, load_tree_file
from .shared import IRSnapError, TreeFormatError, UnknownNodeKindError
from .writer import ExtensionRegistry, NodeOrigin, TreeWriter, module_trust_policy, serialize

__all__ = [
    "default_registry",
    "dump_tree",
    "load_tree",
    "load_tree_file",
    "IRSnapError",
    "TreeFormatError",
    "UnknownNodeKindError",
    "ExtensionRegistry",
    "NodeOrigin",
    "TreeWriter",
    "module_trust_policy",
    "serialize",
]
