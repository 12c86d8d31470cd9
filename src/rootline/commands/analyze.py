"""
rootline.commands.analyze - Inspect roots and trees of a lineage table.
"""

import argparse

from rootline.commands.common import build_from_args
from rootline.serialize import to_text


def run_roots(args: argparse.Namespace) -> int:
    """Print one root id per line."""
    _, result = build_from_args(args)
    for root_id in result.roots:
        print(root_id)
    return 0


def run_tree(args: argparse.Namespace) -> int:
    """Print every root tree as an indented outline."""
    _, result = build_from_args(args)

    if not result.hierarchies:
        print("No rows found")
        return 0

    print(f"Lineage ({result.graph.node_count()} nodes, {len(result.roots)} roots)")
    print("=" * 60)
    print(to_text(result.hierarchies), end="")
    return 0
