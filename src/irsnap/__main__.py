"""CLI entry point: run `irsnap tree.sexp` or `python -m irsnap tree.sexp`."""

import logging
import sys
from pathlib import Path
from typing import List, Optional


def main(argv: Optional[List[str]] = None) -> int:
    import argparse
    from .api import default_registry
    from .components import COMPONENT_NODES
    from .ir.sexpr_loader import CORE_NODES, load_tree_file
    from .shared.errors import IRSnapError
    from .writer.registry import module_trust_policy
    from .writer.tree_writer import serialize

    parser = argparse.ArgumentParser(prog="irsnap", description="Dump an IR tree (.sexp) in snapshot format.")
    parser.add_argument("file", type=Path, help="Path to .sexp tree file")
    parser.add_argument("--trust-module", action="append", default=[], metavar="PREFIX",
                        help="Also trust unregistered extension nodes from modules under PREFIX (repeatable)")
    parser.add_argument("--no-components", action="store_true",
                        help="Do not register the component extension renderers")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    path = args.file.resolve()
    if not path.is_file():
        sys.stderr.write(f"irsnap: error: file not found: {path}\n")
        return 1

    node_types = CORE_NODES + COMPONENT_NODES
    registry = default_registry(include_components=not args.no_components)
    trust_policy = module_trust_policy(*args.trust_module) if args.trust_module else None

    try:
        root = load_tree_file(path, node_types)
        dump = serialize(root, registry=registry, trust_policy=trust_policy)
    except OSError as e:
        sys.stderr.write(f"irsnap: error: could not read file: {e}\n")
        return 1
    except IRSnapError as e:
        sys.stderr.write(f"irsnap: error: {e}\n")
        return 1

    sys.stdout.write(dump)
    return 0


if __name__ == "__main__":
    sys.exit(main())
