"""
Class Hierarchy Module

This module turns a class graph into something that can be drawn: a single
rooted tree with the remaining edges kept aside, 2-D coordinates for every
node of that tree, and branch views around a selected class.

Public Interface:
- HierarchyBuilder: graph -> Hierarchy (tree + secondary edges)
- LayoutEngine: Hierarchy -> PositionedTree
- BranchExtractor: graph + focal class -> branch subgraph
"""

from .branch import BranchExtractor
from .builder import HierarchyBuilder
from .domain import (
    Hierarchy,
    LayoutConfig,
    LayoutDirection,
    PositionedNode,
    PositionedTree,
    VIRTUAL_ROOT_ID,
)
from .layout import LayoutEngine

__all__ = [
    "BranchExtractor",
    "HierarchyBuilder",
    "Hierarchy",
    "LayoutConfig",
    "LayoutDirection",
    "LayoutEngine",
    "PositionedNode",
    "PositionedTree",
    "VIRTUAL_ROOT_ID",
]
