"""GraphLab package initialization.

This module exposes the session facade and the payload based entry point
used by external callers to build graphs and run algorithms on them.
"""

from .api import GraphLab_tool, GraphLabApp

__all__ = ["GraphLabApp", "GraphLab_tool"]
