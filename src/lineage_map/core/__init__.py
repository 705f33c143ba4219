"""Core lineage map layout and validation components."""

from .models import (
    NodeType,
    EdgeType,
    TableNode,
    FieldNode,
    Edge,
    Graph,
    TableLevel,
    Position,
    LayoutOptions,
    EdgeRoute,
    LayoutResult,
)
from .relationships import infer_table_edges
from .levels import assign_levels
from .positions import compute_positions
from .validator import validate_transformations
from .traversal import related_upstream
from .routing import compute_edge_routes
from .details import FieldDetails, TableDetails, describe_field, describe_table
from .engine import LineageMap
from .loader import load_graph, load_graph_json

__all__ = [
    "NodeType",
    "EdgeType",
    "TableNode",
    "FieldNode",
    "Edge",
    "Graph",
    "TableLevel",
    "Position",
    "LayoutOptions",
    "EdgeRoute",
    "LayoutResult",
    "infer_table_edges",
    "assign_levels",
    "compute_positions",
    "validate_transformations",
    "related_upstream",
    "compute_edge_routes",
    "FieldDetails",
    "TableDetails",
    "describe_field",
    "describe_table",
    "LineageMap",
    "load_graph",
    "load_graph_json",
]
