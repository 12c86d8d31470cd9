"""
rootline.commands.serve - Serve a live lineage view for a table file.
"""

from __future__ import annotations

import argparse
import sys

from rootline.commands.common import load_command_config
from rootline.server.watcher import TableWatcher


def run(args: argparse.Namespace) -> int:
    """Run the serve command."""
    try:
        from rootline.server.app import create_app
    except ImportError:
        print("Error: server dependencies not installed.", file=sys.stderr)
        print("Install with: pip install rootline[server]", file=sys.stderr)
        return 1

    config = load_command_config(args)
    watcher = TableWatcher(args.table, config, parent_column=args.parent, child_column=args.child)
    watcher.refresh()
    if watcher.last_error:
        print(f"Warning: {watcher.last_error}", file=sys.stderr)

    host = args.host or config.get("server.host", "127.0.0.1")
    port = args.port or config.get("server.port", 5005)
    app = create_app(watcher, render=config.get("render", {}))

    if not args.quiet:
        print(f"Serving lineage of {args.table} at http://{host}:{port}/")
    app.run(host=host, port=int(port), debug=False)
    return 0
