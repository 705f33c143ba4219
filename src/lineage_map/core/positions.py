"""Position calculation: concrete coordinates for tables and fields."""

from typing import Collection, Dict, Iterable, List, Optional

from .models import Graph, TableLevel, Position, LayoutOptions
from ..utils.logging_config import get_logger

logger = get_logger('positions')


def table_height(graph: Graph, table_id: str, expanded_tables: Collection[str], options: LayoutOptions) -> float:
    """Effective height of a table: header only, or header plus field rows when expanded."""
    if table_id not in expanded_tables:
        return options.table_height
    return options.table_height + len(graph.fields_of(table_id)) * options.field_step


def optimal_incoming_y(graph: Graph, table_id: str, positions: Dict[str, Position]) -> Optional[float]:
    """
    Anchor Y for the first table of a level, from its already placed sources.

    Considers the distinct source fields of edges targeting this table's
    fields that already have a position. Returns the minimum of their Y when
    they all come from one upstream table, their average otherwise, and None
    when no such source exists.
    """
    source_ys: Dict[str, float] = {}
    source_tables = set()

    for edge in graph.field_edges:
        if graph.table_of(edge.target) != table_id or edge.source in source_ys:
            continue
        position = positions.get(edge.source)
        if position is None:
            continue
        source_ys[edge.source] = position.y
        source_tables.add(graph.table_of(edge.source))

    if not source_ys:
        return None

    if len(source_tables) == 1:
        return min(source_ys.values())
    return sum(source_ys.values()) / len(source_ys)


def compute_positions(
    graph: Graph,
    levels: List[TableLevel],
    expanded_tables: Iterable[str],
    options: Optional[LayoutOptions] = None
) -> Dict[str, Position]:
    """
    Compute a position for every node of the graph.

    Levels are laid out left to right at x = level * (table_width + level_padding)
    and centered vertically against the tallest level. Within a level tables
    stack top to bottom; the first one is anchored to its upstream sources when
    it has any. Fields of expanded tables stack under their table header. Nodes
    not reached (fields of collapsed tables, orphans) are placed at (0, 0).

    Args:
        graph: Graph being laid out
        levels: Output of assign_levels
        expanded_tables: Ids of tables whose fields are shown
        options: Spacing configuration (defaults when omitted)

    Returns:
        Mapping of every node id to its Position
    """
    options = options or LayoutOptions()
    expanded = set(expanded_tables)
    positions: Dict[str, Position] = {}

    tables_by_level: Dict[int, List[str]] = {}
    for table_level in levels:
        tables_by_level.setdefault(table_level.level, []).append(table_level.id)

    level_heights = {
        level: sum(table_height(graph, table_id, expanded, options) + options.vertical_padding
                   for table_id in table_ids)
        for level, table_ids in tables_by_level.items()
    }
    max_level_height = max(level_heights.values(), default=0)

    for level in sorted(tables_by_level):
        level_x = level * options.level_step
        current_y = (max_level_height - level_heights[level]) / 2

        for index, table_id in enumerate(tables_by_level[level]):
            if graph.get_node(table_id) is None:
                logger.debug(f"Level {level} references unknown table {table_id}, skipping")
                continue

            y = current_y
            if index == 0:
                anchor_y = optimal_incoming_y(graph, table_id, positions)
                if anchor_y is not None:
                    y = anchor_y

            positions[table_id] = Position(level_x, y)

            if table_id in expanded:
                for row, field_node in enumerate(graph.fields_of(table_id)):
                    positions[field_node.id] = Position(
                        level_x,
                        y + options.table_height + row * options.field_step
                    )

            current_y = y + table_height(graph, table_id, expanded, options) + options.vertical_padding

    for node in graph.nodes:
        if node.id not in positions:
            positions[node.id] = Position(0, 0)

    return positions
