"""
rootline.commands.common - Config and table loading shared by commands.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from rootline.config import ConfigLoader, get_config
from rootline.pipeline import LineageResult, lineage_from_table
from rootline.table import load_table


def load_command_config(args: argparse.Namespace) -> ConfigLoader:
    """Load the config named by ``--config`` or discovered from the cwd."""
    return get_config(getattr(args, "config", None), Path.cwd())


def build_from_args(args: argparse.Namespace) -> tuple[ConfigLoader, LineageResult]:
    """Load config and table, then build the lineage.

    Raises:
        LineageError: If the table or columns cannot form a lineage.
    """
    config = load_command_config(args)
    table = load_table(args.table)
    result = lineage_from_table(
        table,
        config,
        parent_column=getattr(args, "parent", None),
        child_column=getattr(args, "child", None),
    )
    return config, result
