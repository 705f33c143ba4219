"""Table relationship inference from field-level edges."""

from typing import List, Set, Tuple

from .models import Graph, Edge, EdgeType
from ..utils.logging_config import get_logger

logger = get_logger('relationships')


def infer_table_edges(graph: Graph) -> List[Edge]:
    """
    Derive table-to-table edges from field-to-field edges.
    
    Each (source table, target table) pair crossing a table boundary is
    emitted once, in order of first occurrence. Edges whose endpoints do not
    resolve to a field with a known owning table are skipped.
    
    Args:
        graph: Graph to inspect
        
    Returns:
        Ordered list of inferred table-table edges
    """
    seen: Set[Tuple[str, str]] = set()
    inferred: List[Edge] = []
    
    for edge in graph.field_edges:
        source_table = graph.table_of(edge.source)
        target_table = graph.table_of(edge.target)
        
        if not source_table or not target_table:
            logger.debug(f"Skipping edge {edge.id}: unresolved owning table ({edge.source} -> {edge.target})")
            continue
        
        if source_table == target_table:
            continue
        
        key = (source_table, target_table)
        if key in seen:
            continue
        seen.add(key)
        inferred.append(Edge(
            id=f"table-{source_table}->{target_table}",
            source=source_table,
            target=target_table,
            type=EdgeType.TABLE_TABLE
        ))
    
    logger.debug(f"Inferred {len(inferred)} table relationships from {len(graph.edges)} edges")
    return inferred
