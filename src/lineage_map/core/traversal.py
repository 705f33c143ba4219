"""Upstream lineage traversal used for highlighting."""

from typing import Dict, List, Set

from .models import Graph


def related_upstream(graph: Graph, field_id: str) -> Set[str]:
    """
    Collect a field and every node that feeds into it, transitively.
    
    Only edges pointing at an already collected node are followed (target to
    source). Terminates on cyclic graphs.
    
    Args:
        graph: Graph to walk
        field_id: Starting node id
        
    Returns:
        Set containing field_id and all upstream node ids
    """
    incoming: Dict[str, List[str]] = {}
    for edge in graph.edges:
        incoming.setdefault(edge.target, []).append(edge.source)
    
    related = {field_id}
    stack = [field_id]
    while stack:
        current = stack.pop()
        for source in incoming.get(current, []):
            if source not in related:
                related.add(source)
                stack.append(source)
    
    return related
