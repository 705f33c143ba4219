"""Lineage Map - field-level lineage layout and transformation validation."""

from .core.engine import LineageMap
from .core.models import Graph, TableNode, FieldNode, Edge, LayoutOptions, LayoutResult
from .core.relationships import infer_table_edges
from .core.levels import assign_levels
from .core.positions import compute_positions
from .core.validator import validate_transformations
from .core.traversal import related_upstream
from .utils.validation import GraphDataError

__version__ = "1.0.0"
__all__ = [
    "LineageMap",
    "Graph",
    "TableNode",
    "FieldNode",
    "Edge",
    "LayoutOptions",
    "LayoutResult",
    "infer_table_edges",
    "assign_levels",
    "compute_positions",
    "validate_transformations",
    "related_upstream",
    "GraphDataError",
]
