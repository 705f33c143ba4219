"""Edge routing between positioned field rows."""

from typing import Collection, Dict, List, Optional

from .models import Graph, Position, LayoutOptions, EdgeRoute


def compute_edge_routes(
    graph: Graph,
    positions: Dict[str, Position],
    expanded_tables: Collection[str],
    options: Optional[LayoutOptions] = None
) -> List[EdgeRoute]:
    """
    Build a cubic curve for every drawable field edge.

    An edge is drawable when both endpoints are fields of expanded tables and
    both have a position. The curve leaves the right side of the source row
    and enters the left side of the target row; control points are pushed
    out horizontally by a third of the distance between the two tables,
    capped at max_curve_offset.
    """
    options = options or LayoutOptions()

    routes: List[EdgeRoute] = []
    for edge in graph.field_edges:
        source_table = graph.table_of(edge.source)
        target_table = graph.table_of(edge.target)
        if not source_table or not target_table:
            continue
        if source_table not in expanded_tables or target_table not in expanded_tables:
            continue

        source_pos = positions.get(edge.source)
        target_pos = positions.get(edge.target)
        source_table_pos = positions.get(source_table)
        target_table_pos = positions.get(target_table)
        if not (source_pos and target_pos and source_table_pos and target_table_pos):
            continue

        horizontal_distance = target_table_pos.x - source_table_pos.x
        curve_offset = min(horizontal_distance / 3, options.max_curve_offset)

        start = (source_pos.x + options.table_width, source_pos.y + options.field_height / 2)
        end = (target_pos.x, target_pos.y + options.field_height / 2)
        routes.append(EdgeRoute(
            edge_id=edge.id,
            source=edge.source,
            target=edge.target,
            start=start,
            control1=(start[0] + curve_offset, start[1]),
            control2=(end[0] - curve_offset, end[1]),
            end=end
        ))

    return routes
