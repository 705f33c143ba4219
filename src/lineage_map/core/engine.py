"""Lineage map engine - owns the UI state of one visualized graph."""

from typing import Dict, List, Optional, Set, Union, Any

from .models import Graph, Edge, Position, LayoutOptions, LayoutResult, FieldNode
from .relationships import infer_table_edges
from .levels import assign_levels
from .positions import compute_positions
from .routing import compute_edge_routes
from .validator import validate_transformations
from .traversal import related_upstream
from .details import FieldDetails, TableDetails, describe_field, describe_table
from ..utils.logging_config import get_logger, log_performance

logger = get_logger('engine')


class LineageMap:
    """
    One instance per visualized graph.

    Holds the state a rendering layer mutates (expanded tables, hovered
    highlight, selected field) and re-runs the full layout pass on every
    change. Nothing is cached between passes except the last result.
    """

    def __init__(self, options: Optional[Union[LayoutOptions, Dict[str, Any]]] = None, dialect: str = "trino"):
        """
        Initialize the engine.

        Args:
            options: LayoutOptions or a mapping accepted by LayoutOptions.from_dict
            dialect: SQL dialect used when formatting SQL embedded in notes
        """
        if isinstance(options, LayoutOptions):
            self.options = options
        else:
            self.options = LayoutOptions.from_dict(options)
        self.dialect = dialect

        self.expanded_tables: Set[str] = set()
        self.highlighted_fields: Set[str] = set()
        self.selected_field: Optional[str] = None
        self.show_table_relationships = False
        self.positions: Dict[str, Position] = {}
        self.validation_errors: Dict[str, List[str]] = {}
        self.current_graph: Optional[Graph] = None
        self.last_result: Optional[LayoutResult] = None

        logger.debug(f"LineageMap initialized with options: {self.options}")

    def render_base(self, graph: Graph) -> LayoutResult:
        """First render of a graph: every table starts expanded."""
        self.current_graph = graph
        self.expanded_tables.update(table.id for table in graph.tables)
        return self.render(graph)

    @log_performance(logger)
    def render(self, graph: Graph) -> LayoutResult:
        """
        Run a complete layout pass on the graph.

        Validates transformations, infers table relationships, assigns
        levels, computes positions and edge routes.
        """
        self.current_graph = graph
        self.validation_errors = validate_transformations(graph)

        table_edges = infer_table_edges(graph)
        levels = assign_levels(graph, table_edges)
        self.positions = compute_positions(graph, levels, self.expanded_tables, self.options)
        routes = compute_edge_routes(graph, self.positions, self.expanded_tables, self.options)

        self.last_result = LayoutResult(
            graph=graph,
            options=self.options,
            table_edges=table_edges,
            levels=levels,
            positions=dict(self.positions),
            validation_errors=self.validation_errors,
            edge_routes=routes,
            expanded_tables=set(self.expanded_tables),
            highlighted_fields=set(self.highlighted_fields)
        )
        logger.info(
            f"Rendered {len(graph.nodes)} nodes, {len(graph.edges)} edges: "
            f"{len(levels)} tables levelled, {len(self.validation_errors)} fields with validation errors"
        )
        return self.last_result

    def visible_edges(self) -> List[Edge]:
        """Edges a renderer should draw, inferred table edges first when shown."""
        if not self.current_graph:
            return []
        if self.show_table_relationships:
            return infer_table_edges(self.current_graph) + list(self.current_graph.edges)
        return list(self.current_graph.edges)

    def toggle_table_expansion(self, table_id: str) -> Optional[LayoutResult]:
        """Expand a collapsed table or collapse an expanded one, then re-render."""
        if table_id in self.expanded_tables:
            self.expanded_tables.discard(table_id)
        else:
            self.expanded_tables.add(table_id)
        if self.current_graph:
            return self.render(self.current_graph)
        return None

    def toggle_table_relationships(self) -> bool:
        self.show_table_relationships = not self.show_table_relationships
        return self.show_table_relationships

    def handle_field_hover(self, field_id: Optional[str]) -> Set[str]:
        """Highlight the upstream closure of the hovered field, or clear it."""
        if field_id and self.current_graph:
            self.highlighted_fields = related_upstream(self.current_graph, field_id)
        else:
            self.highlighted_fields = set()
        return self.highlighted_fields

    def is_edge_highlighted(self, edge: Edge) -> bool:
        return edge.source in self.highlighted_fields and edge.target in self.highlighted_fields

    def handle_field_click(self, field_id: str) -> Optional[FieldDetails]:
        """
        Toggle selection of a field.

        Returns the pop-up content when a field with a transformation or note
        becomes selected; None when the click deselects or there is nothing
        to show.
        """
        if not self.current_graph or not isinstance(self.current_graph.get_node(field_id), FieldNode):
            self.selected_field = None
            return None

        if self.selected_field == field_id:
            self.selected_field = None
            return None

        self.selected_field = field_id
        details = self.describe_field(field_id)
        if details is None or not (details.transformation or details.note):
            return None
        return details

    def clear_selection(self) -> None:
        self.selected_field = None

    def describe_field(self, field_id: str) -> Optional[FieldDetails]:
        if not self.current_graph:
            return None
        return describe_field(self.current_graph, field_id, self.validation_errors)

    def describe_table(self, table_id: str) -> Optional[TableDetails]:
        if not self.current_graph:
            return None
        return describe_table(self.current_graph, table_id, self.dialect)

    def get_field_position(self, field_id: str) -> Optional[Position]:
        """Anchor point of a field row: its left edge, vertically centered."""
        position = self.positions.get(field_id)
        if position is None:
            return None
        return Position(position.x, position.y + self.options.field_height / 2)

    def destroy(self) -> None:
        """Drop all state held for the current graph."""
        self.expanded_tables.clear()
        self.highlighted_fields = set()
        self.selected_field = None
        self.positions = {}
        self.validation_errors = {}
        self.current_graph = None
        self.last_result = None
