"""
rootline.commands.build - Build the lineage and write it out.
"""

import argparse
import json
import sys

from rootline.commands.common import build_from_args
from rootline.serialize import serialize_result, to_csv, to_text


def run(args: argparse.Namespace) -> int:
    """Run the build command."""
    config, result = build_from_args(args)

    if args.format == "html":
        from rootline.html import HTMLGenerator

        output = HTMLGenerator(
            result.layout,
            render=config.get("render", {}),
            title=args.table.name,
        ).generate()
    elif args.format == "csv":
        output = to_csv(result.layout)
    elif args.format == "text":
        output = to_text(result.hierarchies)
    else:
        output = json.dumps(serialize_result(result), indent=2, default=str) + "\n"

    if args.output:
        args.output.write_text(output, encoding="utf-8")
        if not args.quiet:
            print(
                f"Wrote {args.format} for {result.graph.node_count()} nodes "
                f"in {len(result.roots)} trees to {args.output}",
                file=sys.stderr,
            )
    else:
        sys.stdout.write(output)

    overlaps = result.layout.overlapping_pairs()
    if overlaps and not args.quiet:
        print(
            f"Warning: {len(overlaps)} pair(s) of trees overlap on the canvas; "
            "increase layout.canvas_height",
            file=sys.stderr,
        )
    return 0
