"""
rootline.commands.completion - Print the argcomplete hook for a shell.

The printed line is meant to be eval'd or appended to a shell rc file by
the user; rootline never edits rc files itself.
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

SHELLS = ("bash", "zsh", "fish", "tcsh")

_HOOKS = {
    "fish": "register-python-argcomplete --shell fish rootline | source",
    "tcsh": "eval `register-python-argcomplete --shell tcsh rootline`",
}


def completion_hook(shell: str) -> str:
    """Return the shell line that enables rootline tab-completion."""
    return _HOOKS.get(shell, 'eval "$(register-python-argcomplete rootline)"')


def shell_from_env() -> str:
    """Shell named by $SHELL, or bash when it is unset or unsupported."""
    name = Path(os.environ.get("SHELL", "")).name
    return name if name in SHELLS else "bash"


def run(args: argparse.Namespace) -> int:
    """Run the completion command."""
    try:
        import argcomplete  # noqa: F401
    except ImportError:
        print("Error: argcomplete is not installed.", file=sys.stderr)
        print("Install with: pip install rootline[completion]", file=sys.stderr)
        return 1

    print(completion_hook(getattr(args, "shell", None) or shell_from_env()))
    return 0
