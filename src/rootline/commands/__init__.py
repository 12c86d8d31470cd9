"""
rootline.commands - CLI command implementations
"""

__all__ = [
    "analyze",
    "build",
    "completion",
    "config_cmd",
    "serve",
]
