"""Data models for lineage map layout."""

from typing import Dict, Optional, List, Any, Union, Tuple, Set
from dataclasses import dataclass, field, fields
from enum import Enum

from ..utils.validation import (
    GraphDataError,
    validate_graph_data,
    validate_layout_option,
)


class NodeType(str, Enum):
    """Node type enumeration."""
    TABLE = "table"
    FIELD = "field"


class EdgeType(str, Enum):
    """Edge type enumeration."""
    FIELD_FIELD = "field-field"
    TABLE_TABLE = "table-table"


@dataclass
class TableNode:
    """A dataset/table. Owns fields by back-reference (FieldNode.table_id)."""
    id: str
    name: str
    note: Optional[str] = None

    @property
    def type(self) -> NodeType:
        return NodeType.TABLE


@dataclass
class FieldNode:
    """A column owned by exactly one table."""
    id: str
    name: str
    table_id: str
    transformation: Optional[str] = None
    note: Optional[str] = None

    @property
    def type(self) -> NodeType:
        return NodeType.FIELD


Node = Union[TableNode, FieldNode]


@dataclass
class Edge:
    """Directed relationship between two node ids."""
    id: str
    source: str
    target: str
    type: EdgeType = EdgeType.FIELD_FIELD

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "type": self.type.value
        }


@dataclass
class Graph:
    """
    Ordered collection of nodes and edges.

    Treated as immutable input for a layout pass: the id index is built on
    first lookup, so build a new Graph instead of mutating nodes in place.
    Edges pointing at unknown ids are allowed and ignored by computations.
    """
    nodes: List[Node] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)
    _index: Optional[Dict[str, Node]] = field(default=None, init=False, repr=False, compare=False)
    _fields_by_table: Optional[Dict[str, List[FieldNode]]] = field(default=None, init=False, repr=False, compare=False)

    def _build_index(self) -> None:
        index: Dict[str, Node] = {}
        fields_by_table: Dict[str, List[FieldNode]] = {}
        for node in self.nodes:
            # First occurrence wins when ids collide
            index.setdefault(node.id, node)
            if isinstance(node, FieldNode):
                fields_by_table.setdefault(node.table_id, []).append(node)
        self._index = index
        self._fields_by_table = fields_by_table

    def get_node(self, node_id: str) -> Optional[Node]:
        """Look up a node by id."""
        if self._index is None:
            self._build_index()
        return self._index.get(node_id)

    def has_node(self, node_id: str) -> bool:
        return self.get_node(node_id) is not None

    @property
    def tables(self) -> List[TableNode]:
        """Table nodes in graph order."""
        return [node for node in self.nodes if isinstance(node, TableNode)]

    @property
    def fields(self) -> List[FieldNode]:
        """Field nodes in graph order."""
        return [node for node in self.nodes if isinstance(node, FieldNode)]

    def fields_of(self, table_id: str) -> List[FieldNode]:
        """Fields whose table_id matches, in graph order."""
        if self._fields_by_table is None:
            self._build_index()
        return list(self._fields_by_table.get(table_id, []))

    def table_of(self, node_id: str) -> Optional[str]:
        """
        Resolve the owning table id of a field.

        Returns None when the id is unknown, is not a field, or the field's
        table_id does not name a table in this graph.
        """
        node = self.get_node(node_id)
        if not isinstance(node, FieldNode) or not node.table_id:
            return None
        if not isinstance(self.get_node(node.table_id), TableNode):
            return None
        return node.table_id

    @property
    def field_edges(self) -> List[Edge]:
        """Explicit field-to-field edges."""
        return [edge for edge in self.edges if edge.type == EdgeType.FIELD_FIELD]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Graph":
        """
        Build a Graph from caller-supplied data.

        Accepts the component prop shape: nodes carry "type" ("table" or
        "field"); fields may omit "tableId", in which case the prefix of
        their id before the first ":" is used; edges may omit "id" (their
        position in the list is used) and "type" (field-field).

        Raises:
            GraphDataError: If the data does not have a usable shape
        """
        error = validate_graph_data(data)
        if error:
            raise GraphDataError(error)

        nodes: List[Node] = []
        for raw in data["nodes"]:
            node_id = raw["id"]
            name = raw.get("name") or node_id
            if raw["type"] == NodeType.TABLE.value:
                nodes.append(TableNode(id=node_id, name=name, note=raw.get("note")))
            else:
                table_id = raw.get("tableId") or raw.get("table_id") or node_id.split(":")[0]
                nodes.append(FieldNode(
                    id=node_id,
                    name=name,
                    table_id=table_id,
                    transformation=raw.get("transformation"),
                    note=raw.get("note")
                ))

        edges: List[Edge] = []
        for index, raw in enumerate(data.get("edges", [])):
            edges.append(Edge(
                id=str(raw.get("id") or index),
                source=raw["source"],
                target=raw["target"],
                type=EdgeType(raw.get("type") or EdgeType.FIELD_FIELD.value)
            ))

        return cls(nodes=nodes, edges=edges)

    def to_dict(self) -> Dict[str, Any]:
        """Convert back to the component prop shape."""
        nodes = []
        for node in self.nodes:
            if isinstance(node, TableNode):
                data = {"id": node.id, "type": node.type.value, "name": node.name}
                if node.note:
                    data["note"] = node.note
            else:
                data = {
                    "id": node.id,
                    "type": node.type.value,
                    "name": node.name,
                    "tableId": node.table_id
                }
                if node.transformation:
                    data["transformation"] = node.transformation
                if node.note:
                    data["note"] = node.note
            nodes.append(data)
        return {"nodes": nodes, "edges": [edge.to_dict() for edge in self.edges]}


@dataclass
class TableLevel:
    """Horizontal layer assigned to a table."""
    id: str
    level: int
    # Tables this table feeds into directly
    dependencies: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class Position:
    """Top-left coordinate of a node."""
    x: float
    y: float

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}


# camelCase names accepted alongside the snake_case field names
_OPTION_ALIASES = {
    "tableWidth": "table_width",
    "tableHeight": "table_height",
    "fieldHeight": "field_height",
    "fieldSpacing": "field_spacing",
    "levelPadding": "level_padding",
    "verticalPadding": "vertical_padding",
    "popUpWidth": "popup_width",
    "maxCurveOffset": "max_curve_offset",
}


@dataclass(frozen=True)
class LayoutOptions:
    """Spacing and size configuration for a layout pass."""
    table_width: float = 150
    table_height: float = 40
    field_height: float = 20
    field_spacing: float = 4
    level_padding: float = 100
    vertical_padding: float = 50
    popup_width: float = 300
    max_curve_offset: float = 100

    @property
    def field_step(self) -> float:
        """Vertical distance between consecutive field rows."""
        return self.field_height + self.field_spacing

    @property
    def level_step(self) -> float:
        """Horizontal distance between consecutive levels."""
        return self.table_width + self.level_padding

    @classmethod
    def from_dict(cls, options: Optional[Dict[str, Any]] = None) -> "LayoutOptions":
        """
        Build options from a mapping of snake_case or camelCase keys.

        Missing, None and zero values keep the default; unknown keys are ignored.

        Raises:
            GraphDataError: If a value is negative, infinite, NaN or not a number
        """
        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}
        for key, value in (options or {}).items():
            name = _OPTION_ALIASES.get(key, key)
            if name not in known:
                continue
            error = validate_layout_option(key, value)
            if error:
                raise GraphDataError(error)
            if value:
                values[name] = value
        return cls(**values)

    def to_dict(self) -> Dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


Point = Tuple[float, float]


@dataclass(frozen=True)
class EdgeRoute:
    """Cubic curve for drawing one edge between two field rows."""
    edge_id: str
    source: str
    target: str
    start: Point
    control1: Point
    control2: Point
    end: Point
    type: EdgeType = EdgeType.FIELD_FIELD

    def path(self) -> str:
        """SVG path data for the curve."""
        return (
            f"M {self.start[0]},{self.start[1]} "
            f"C {self.control1[0]},{self.control1[1]} "
            f"{self.control2[0]},{self.control2[1]} "
            f"{self.end[0]},{self.end[1]}"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "edge_id": self.edge_id,
            "source": self.source,
            "target": self.target,
            "type": self.type.value,
            "path": self.path()
        }


@dataclass
class LayoutResult:
    """Output of one complete layout pass."""
    graph: Graph
    options: LayoutOptions
    table_edges: List[Edge] = field(default_factory=list)
    levels: List[TableLevel] = field(default_factory=list)
    positions: Dict[str, Position] = field(default_factory=dict)
    validation_errors: Dict[str, List[str]] = field(default_factory=dict)
    edge_routes: List[EdgeRoute] = field(default_factory=list)
    expanded_tables: Set[str] = field(default_factory=set)
    highlighted_fields: Set[str] = field(default_factory=set)

    def has_errors(self) -> bool:
        """Check if any field failed transformation validation."""
        return len(self.validation_errors) > 0

    def level_of(self, table_id: str) -> Optional[int]:
        for table_level in self.levels:
            if table_level.id == table_id:
                return table_level.level
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "options": self.options.to_dict(),
            "table_edges": [edge.to_dict() for edge in self.table_edges],
            "levels": [
                {"id": tl.id, "level": tl.level, "dependencies": list(tl.dependencies)}
                for tl in self.levels
            ],
            "positions": {node_id: pos.to_dict() for node_id, pos in self.positions.items()},
            "expanded_tables": sorted(self.expanded_tables),
            "validation_errors": {k: list(v) for k, v in self.validation_errors.items()},
            "edge_routes": [route.to_dict() for route in self.edge_routes],
            "highlighted_fields": sorted(self.highlighted_fields)
        }
