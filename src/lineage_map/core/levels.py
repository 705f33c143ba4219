"""Level assignment: places each table in a horizontal layer."""

from typing import Dict, List, Optional, Set

from .models import Graph, Edge, TableLevel
from .relationships import infer_table_edges
from ..utils.logging_config import get_logger

logger = get_logger('levels')

ISOLATED_LEVEL = 0


def assign_levels(graph: Graph, table_edges: Optional[List[Edge]] = None) -> List[TableLevel]:
    """
    Assign every table an integer level, origin tables on the left.

    Tables without any inferred edge go to level 0. The rest are peeled off in
    rounds: a table is settled once every table it feeds into is settled, so
    sinks come first. When a round settles nothing (a cycle), all remaining
    tables are settled in that round. Round numbers are then reversed so that
    sources get the lowest non-zero level.

    Args:
        graph: Graph whose tables are layered
        table_edges: Inferred table edges; computed from graph when omitted

    Returns:
        TableLevel records ordered by ascending level
    """
    if table_edges is None:
        table_edges = infer_table_edges(graph)

    tables = graph.tables
    feeds_into: Dict[str, Dict[str, None]] = {table.id: {} for table in tables}
    connected: Set[str] = set()
    for edge in table_edges:
        connected.add(edge.source)
        connected.add(edge.target)
        if edge.source in feeds_into:
            feeds_into[edge.source][edge.target] = None

    levels: List[TableLevel] = []
    processed: Set[str] = set()

    for table in tables:
        if table.id not in connected and table.id not in processed:
            levels.append(TableLevel(id=table.id, level=ISOLATED_LEVEL, dependencies=[]))
            processed.add(table.id)

    pending = [table.id for table in tables if table.id not in processed]
    current_round = 1
    max_round = 0

    while pending:
        # Targets outside the table set never settle, treat them as settled
        ready = [
            table_id for table_id in pending
            if all(dep in processed or dep not in feeds_into for dep in feeds_into[table_id])
        ]

        if not ready:
            logger.debug(f"Cycle among {len(pending)} tables, settling all of them in round {current_round}")
            ready = pending

        for table_id in ready:
            levels.append(TableLevel(
                id=table_id,
                level=current_round,
                dependencies=list(feeds_into[table_id])
            ))
        processed.update(ready)
        max_round = current_round

        pending = [table_id for table_id in pending if table_id not in processed]
        current_round += 1

    for table_level in levels:
        if table_level.level != ISOLATED_LEVEL:
            table_level.level = max_round - table_level.level + 1

    # Stable sort keeps assignment order within a level
    levels.sort(key=lambda tl: tl.level)
    logger.debug(f"Assigned {len(levels)} tables to {max_round} connected levels")
    return levels
