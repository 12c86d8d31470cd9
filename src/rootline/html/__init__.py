"""HTML rendering module for lineage diagrams.

This module renders a laid-out forest as a standalone SVG/HTML page.
"""

from rootline.html.generator import HTMLGenerator

__all__ = ["HTMLGenerator"]
