"""
Extension Node Registry

Node kinds defined outside the closed set in ir.nodes reach the writer as
ExtensionIntermediateNode subclasses. Packages that define such nodes register a
field renderer for each concrete class here; the writer never imports them.

Registrations also carry an origin tag. Nodes registered as INTERNAL without a
renderer are implementation details of the compiler and are dumped with the
bare fallback (name + source range); anything else unrecognized is fatal.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterator, Optional, Sequence, Type, TypeVar

from typing_extensions import TypeAlias

from ..ir.nodes import ExtensionIntermediateNode
from ..utils.config import TRUSTED_MODULE_PREFIX

logger = logging.getLogger(__name__)

N = TypeVar('N', bound=ExtensionIntermediateNode)

ContentFields: TypeAlias = Sequence[Optional[str]]
FieldRenderer: TypeAlias = Callable[[ExtensionIntermediateNode], ContentFields]
TrustPolicy: TypeAlias = Callable[[type], bool]


class NodeOrigin(Enum):
    INTERNAL = "internal"  # Defined by the compiler itself
    EXTERNAL = "external"  # Contributed by a front-end extension


@dataclass(frozen=True)
class ExtensionRule:
    """How one concrete extension node class is dumped."""
    node_type: Type[ExtensionIntermediateNode]
    render: Optional[FieldRenderer] = None
    origin: NodeOrigin = NodeOrigin.EXTERNAL


class ExtensionRegistry:
    """
    Mapping from concrete extension node class to its ExtensionRule.

    Lookup is by exact class: a subclass of a registered shape is a new shape
    and needs its own registration.
    """

    def __init__(self):
        self._rules: Dict[type, ExtensionRule] = {}

    def register(self, node_type: Type[N], render: Optional[Callable[[N], ContentFields]] = None,
                 origin: NodeOrigin = NodeOrigin.EXTERNAL) -> ExtensionRule:
        if not (isinstance(node_type, type) and issubclass(node_type, ExtensionIntermediateNode)):
            raise TypeError(f"{node_type!r} is not an ExtensionIntermediateNode subclass")
        if node_type in self._rules:
            raise ValueError(f"{node_type.__qualname__} is already registered")
        rule = ExtensionRule(node_type=node_type, render=render, origin=origin)
        self._rules[node_type] = rule
        logger.debug(f"Registered {origin.value} extension node {node_type.__qualname__}")
        return rule

    def renders(self, node_type: Type[N], origin: NodeOrigin = NodeOrigin.EXTERNAL):
        """Decorator form of register()."""
        def decorator(render: Callable[[N], ContentFields]) -> Callable[[N], ContentFields]:
            self.register(node_type, render, origin=origin)
            return render
        return decorator

    def register_internal(self, *node_types: Type[ExtensionIntermediateNode]) -> None:
        for node_type in node_types:
            self.register(node_type, origin=NodeOrigin.INTERNAL)

    def lookup(self, node_type: type) -> Optional[ExtensionRule]:
        return self._rules.get(node_type)

    def is_internal(self, node_type: type) -> bool:
        rule = self._rules.get(node_type)
        return rule is not None and rule.origin is NodeOrigin.INTERNAL

    def __contains__(self, node_type: object) -> bool:
        return node_type in self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[ExtensionRule]:
        return iter(self._rules.values())


# =========================================================================
# Trust policies
# =========================================================================

def registration_trust_policy(registry: ExtensionRegistry) -> TrustPolicy:
    """Trust exactly the classes registered with origin=INTERNAL."""
    return registry.is_internal


def module_trust_policy(*prefixes: str) -> TrustPolicy:
    """
    Trust every class defined in a module under one of `prefixes`.

    Defaults to the IR node package, i.e. the compiler's own module.
    """
    trusted = prefixes or (TRUSTED_MODULE_PREFIX,)

    def is_trusted(node_type: type) -> bool:
        module = node_type.__module__
        return any(module == p or module.startswith(p + ".") for p in trusted)
    return is_trusted
