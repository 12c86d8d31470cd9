"""
rootline - Lineage forests and tree layouts from parent/child tables

rootline turns a flat table of (parent, child) identifier pairs into
independent rooted trees, lays each tree out with a tidy-tree algorithm
and stacks them on one canvas for drawing.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("rootline")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed
__license__ = "MIT"

from rootline.errors import (
    ConfigurationError,
    CycleDetectedError,
    DataIntegrityError,
    LineageError,
)
from rootline.pipeline import LineageResult, build_lineage, run_pipeline

__all__ = [
    "__version__",
    "ConfigurationError",
    "CycleDetectedError",
    "DataIntegrityError",
    "LineageError",
    "LineageResult",
    "build_lineage",
    "run_pipeline",
]
