"""Input validation utilities."""

import math
from numbers import Real
from typing import Any, Optional


NODE_TYPES = {"table", "field"}
EDGE_TYPES = {"field-field", "table-table"}


class GraphDataError(ValueError):
    """Raised when caller-supplied graph data or layout options cannot be used."""


def validate_graph_data(data: Any) -> Optional[str]:
    """
    Validate the shape of caller-supplied graph data.
    
    Args:
        data: Decoded graph data, expected as {"nodes": [...], "edges": [...]}
        
    Returns:
        Error message if invalid, None if valid
    """
    if not isinstance(data, dict):
        return "Graph data must be an object with 'nodes' and 'edges'"
    
    nodes = data.get("nodes")
    if not isinstance(nodes, list):
        return "Graph data must contain a 'nodes' list"
    
    edges = data.get("edges", [])
    if not isinstance(edges, list):
        return "Graph 'edges' must be a list"
    
    seen_ids = set()
    for index, node in enumerate(nodes):
        if not isinstance(node, dict):
            return f"Node at index {index} must be an object"
        
        node_id = node.get("id")
        if not isinstance(node_id, str) or not node_id:
            return f"Node at index {index} must have a non-empty string 'id'"
        
        if node.get("type") not in NODE_TYPES:
            return f"Node '{node_id}' has unsupported type {node.get('type')!r}. Supported: {', '.join(sorted(NODE_TYPES))}"
        
        if node_id in seen_ids:
            return f"Duplicate node id '{node_id}'"
        seen_ids.add(node_id)
    
    for index, edge in enumerate(edges):
        if not isinstance(edge, dict):
            return f"Edge at index {index} must be an object"
        
        for key in ("source", "target"):
            if not isinstance(edge.get(key), str) or not edge.get(key):
                return f"Edge at index {index} must have a non-empty string '{key}'"
        
        edge_type = edge.get("type")
        if edge_type is not None and edge_type not in EDGE_TYPES:
            return f"Edge at index {index} has unsupported type {edge_type!r}"
    
    return None


def validate_layout_option(name: str, value: Any) -> Optional[str]:
    """
    Validate a single numeric layout option.
    
    Args:
        name: Option name, used in the message
        value: Option value (None means "use the default")
        
    Returns:
        Error message if invalid, None if valid
    """
    if value is None:
        return None
    
    if isinstance(value, bool) or not isinstance(value, Real):
        return f"Layout option '{name}' must be a number"
    
    if not math.isfinite(value):
        return f"Layout option '{name}' must be a finite number"
    
    if value < 0:
        return f"Layout option '{name}' cannot be negative"
    
    return None


def validate_file_path(file_path: str) -> Optional[str]:
    """
    Validate file path.
    
    Args:
        file_path: File path to validate
        
    Returns:
        Error message if invalid, None if valid
    """
    if not file_path:
        return "File path cannot be empty"
    
    if not isinstance(file_path, str):
        return "File path must be a string"
    
    if len(file_path.strip()) == 0:
        return "File path cannot be empty or whitespace only"
    
    invalid_chars = ['<', '>', '|', '\0']
    if any(char in file_path for char in invalid_chars):
        return f"File path contains invalid characters: {invalid_chars}"
    
    return None
